"""
Transaction lifecycle orchestration for the ACTA SDK.

Every vault and credential operation runs through the same steps: the ACTA
API prepares an unsigned transaction, the caller's signer signs it, the signed
transaction is submitted (back through the API or straight to the ledger), and
for direct ledger submissions the transaction status is polled until it
settles.
"""
import logging
import threading
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .exceptions import (
    ActaError, ApiError, LedgerError, PrepareFailedError, SubmitFailedError,
    SigningFailedError, TransactionFailedError
)
from .ledger import LedgerTransport, rate_limited_log
from .ledger.transport import TX_SUCCESS, TX_FAILED
from .models import (
    Intent, OutcomeStatus, SubmissionOutcome, TxPrepareResponse,
    is_tx_prepare_response, is_tx_submit_response
)
from .signer import Signer

logger = logging.getLogger(__name__)

POLL_INTERVAL = 1.2
MAX_POLL_ATTEMPTS = 40

Endpoint = Callable[[Dict[str, Any]], Dict[str, Any]]


class TxState(str, Enum):
    """Lifecycle states of a single orchestration run"""
    IDLE = "idle"
    PREPARING = "preparing"
    AWAITING_SIGNATURE = "awaiting_signature"
    SUBMITTING = "submitting"
    POLLING = "polling"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class PollDecision(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    CONTINUE = "continue"


def classify_status(status: Optional[str]) -> PollDecision:
    """
    Map a ledger transaction status to a polling decision.

    SUCCESS and FAILED are terminal. PENDING, DUPLICATE, TRY_AGAIN_LATER,
    NOT_FOUND, unknown values and a missing status all keep polling.
    """
    if status == TX_SUCCESS:
        return PollDecision.SUCCESS
    if status == TX_FAILED:
        return PollDecision.FAILED
    return PollDecision.CONTINUE


def _wait(interval: float, cancel_event: Optional[threading.Event]) -> bool:
    """Sleep between poll attempts; returns True if cancelled"""
    if cancel_event is None:
        time.sleep(interval)
        return False
    return cancel_event.wait(interval)


def wait_for_transaction(
    ledger: LedgerTransport,
    tx_hash: str,
    interval: float = POLL_INTERVAL,
    max_attempts: int = MAX_POLL_ATTEMPTS,
    cancel_event: Optional[threading.Event] = None,
    logger_instance: Optional[logging.Logger] = None
) -> SubmissionOutcome:
    """
    Poll the ledger until a transaction succeeds, fails, or attempts run out.

    The wait sits between attempts only, so ``max_attempts`` lookups sleep
    ``max_attempts - 1`` times (39 x 1.2 s with the defaults).

    Lookup errors count as "not settled yet" and are only logged. Running out
    of attempts, or being cancelled, is not an error: the returned outcome is
    ``pending`` and the transaction should be looked up again later.

    Args:
        ledger: Transport used for status lookups
        tx_hash: Transaction hash to poll
        interval: Seconds between attempts
        max_attempts: Maximum number of status lookups
        cancel_event: Optional event that stops waiting when set
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        ``accepted`` outcome on SUCCESS, ``pending`` outcome otherwise

    Raises:
        TransactionFailedError: If the ledger reports FAILED
    """
    log = logger_instance or logger

    for attempt in range(1, max_attempts + 1):
        try:
            status = ledger.get_transaction_status(tx_hash)
        except Exception as e:
            rate_limited_log(
                f"Status lookup for transaction {tx_hash} failed: {e}",
                level="warning",
                logger_instance=log
            )
            status = None

        decision = classify_status(status)
        log.debug(f"Transaction {tx_hash} attempt {attempt}/{max_attempts}: {status}")

        if decision is PollDecision.SUCCESS:
            return SubmissionOutcome(
                status=OutcomeStatus.ACCEPTED, tx_id=tx_hash, attempts=attempt
            )
        if decision is PollDecision.FAILED:
            raise TransactionFailedError(
                f"Transaction {tx_hash} failed on the ledger",
                tx_id=tx_hash,
                status=status
            )

        if attempt < max_attempts and _wait(interval, cancel_event):
            log.info(f"Stopped waiting for transaction {tx_hash} after {attempt} attempts")
            return SubmissionOutcome(
                status=OutcomeStatus.PENDING,
                tx_id=tx_hash,
                reason="cancelled",
                attempts=attempt
            )

    log.warning(f"Transaction {tx_hash} unresolved after {max_attempts} attempts")
    return SubmissionOutcome(
        status=OutcomeStatus.PENDING,
        tx_id=tx_hash,
        reason=f"no terminal status after {max_attempts} attempts",
        attempts=max_attempts
    )


class _Run:
    """State of one orchestration run"""

    def __init__(self, label: str, observer: Optional[Callable[[TxState], None]], log: logging.Logger):
        self.label = label
        self.state = TxState.IDLE
        self._observer = observer
        self._log = log

    def advance(self, state: TxState) -> None:
        self._log.debug(f"{self.label}: {self.state.value} -> {state.value}")
        self.state = state
        if self._observer is not None:
            self._observer(state)


class TransactionOrchestrator:
    """
    Drives one intent from preparation to a caller-visible outcome.

    Nothing is retried here except the bounded status poll: preparing,
    signing and submitting are not safe to repeat blindly, so failures are
    raised and retry is left to the caller.
    """

    def __init__(
        self,
        poll_interval: float = POLL_INTERVAL,
        max_poll_attempts: int = MAX_POLL_ATTEMPTS,
        logger: Optional[logging.Logger] = None
    ):
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts
        self.logger = logger or logging.getLogger(__name__)

    def execute(
        self,
        endpoint: Endpoint,
        intent: Intent,
        signer: Signer,
        ledger: Optional[LedgerTransport] = None,
        cancel_event: Optional[threading.Event] = None,
        observer: Optional[Callable[[TxState], None]] = None,
        label: Optional[str] = None
    ) -> SubmissionOutcome:
        """
        Prepare, sign, submit and (for direct ledger submission) confirm.

        Args:
            endpoint: Dual-mode API method, called once with the intent's
                prepare payload and, without ``ledger``, once with
                ``{"signedXdr": ...}``
            intent: Operation to perform
            signer: Signs the prepared transaction
            ledger: Submit to this ledger transport and poll it instead of
                submitting through the API
            cancel_event: Stops waiting between poll attempts when set
            observer: Called with each state the run enters
            label: Name used in logs and error messages

        Returns:
            SubmissionOutcome; ``pending`` if polling ended without a verdict

        Raises:
            PrepareFailedError: If no unsigned transaction comes back
            SigningFailedError: If the signer raises
            SubmitFailedError: If the submission yields no transaction ID
            TransactionFailedError: If the ledger rejects the transaction
        """
        run = _Run(label or type(intent).__name__, observer, self.logger)
        try:
            prepared = self._prepare(run, endpoint, intent)
            signed = self._sign(run, signer, prepared)
            if ledger is None:
                return self._submit_via_api(run, endpoint, signed)
            return self._submit_to_ledger(run, ledger, signed, cancel_event)
        except ActaError:
            run.advance(TxState.FAILED)
            raise

    def _prepare(self, run: _Run, endpoint: Endpoint, intent: Intent) -> TxPrepareResponse:
        run.advance(TxState.PREPARING)
        try:
            data = endpoint(intent.to_payload())
        except ApiError as e:
            self.logger.error(f"Failed to prepare {run.label} transaction: {e}")
            raise PrepareFailedError(f"Failed to prepare {run.label} transaction: {e}") from e

        if is_tx_prepare_response(data):
            return TxPrepareResponse(xdr=data["xdr"], network=data["network"])
        if is_tx_submit_response(data):
            raise PrepareFailedError(
                f"Unexpected submit response in prepare mode for {run.label}"
            )
        raise PrepareFailedError(
            f"Failed to prepare {run.label} transaction: missing xdr or network"
        )

    def _sign(self, run: _Run, signer: Signer, prepared: TxPrepareResponse) -> str:
        run.advance(TxState.AWAITING_SIGNATURE)
        # The passphrase comes from the prepare response, not the client
        try:
            signed = signer.sign_transaction(prepared.xdr, prepared.network)
        except Exception as e:
            self.logger.error(f"Signer failed for {run.label}: {e}")
            raise SigningFailedError(str(e) or type(e).__name__, original=e) from e

        if not signed or not isinstance(signed, str):
            raise SigningFailedError(f"Signer returned no signed transaction for {run.label}")
        return signed

    def _submit_via_api(self, run: _Run, endpoint: Endpoint, signed_xdr: str) -> SubmissionOutcome:
        run.advance(TxState.SUBMITTING)
        try:
            data = endpoint({"signedXdr": signed_xdr})
        except ApiError as e:
            self.logger.error(f"Failed to submit {run.label} transaction: {e}")
            raise SubmitFailedError(f"Failed to submit {run.label} transaction: {e}") from e

        if not is_tx_submit_response(data):
            raise SubmitFailedError(f"Failed to submit {run.label} transaction: missing tx_id")

        tx_id = data["tx_id"]
        self.logger.info(f"{run.label} transaction submitted: {tx_id}")
        run.advance(TxState.CONFIRMED)
        return SubmissionOutcome(status=OutcomeStatus.ACCEPTED, tx_id=tx_id)

    def _submit_to_ledger(
        self,
        run: _Run,
        ledger: LedgerTransport,
        signed_xdr: str,
        cancel_event: Optional[threading.Event]
    ) -> SubmissionOutcome:
        run.advance(TxState.SUBMITTING)
        try:
            submission = ledger.send_transaction(signed_xdr)
        except LedgerError as e:
            self.logger.error(f"Failed to send {run.label} transaction: {e}")
            raise SubmitFailedError(f"Failed to send {run.label} transaction: {e}") from e

        if submission.is_error:
            raise TransactionFailedError(
                f"{run.label} transaction was rejected on submission",
                tx_id=submission.hash or None,
                status=submission.status
            )
        if not submission.hash:
            raise SubmitFailedError(f"Failed to send {run.label} transaction: missing hash")

        run.advance(TxState.POLLING)
        outcome = wait_for_transaction(
            ledger,
            submission.hash,
            interval=self.poll_interval,
            max_attempts=self.max_poll_attempts,
            cancel_event=cancel_event,
            logger_instance=self.logger
        )
        if outcome.resolved:
            run.advance(TxState.CONFIRMED)
        return outcome
