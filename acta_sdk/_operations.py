"""
Shared plumbing for the vault and credential operations.
"""
import logging
import threading
from typing import Optional, Union

from .client import ActaClient
from .exceptions import ConfigurationMissingError
from .ledger import LedgerTransport
from .models import Intent, SubmissionOutcome
from .orchestrator import Endpoint, TransactionOrchestrator
from .signer import Signer, SignFunction, as_signer


class BaseOperations:
    """Resolves contract defaults and hands intents to the orchestrator"""

    def __init__(
        self,
        client: ActaClient,
        orchestrator: Optional[TransactionOrchestrator] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)
        self.orchestrator = orchestrator or TransactionOrchestrator(logger=logger)

    def _resolve_contract_id(self, contract_id: Optional[str]) -> str:
        """
        Pick the explicit contract ID, else the one from the API config.

        Raises:
            ConfigurationMissingError: If neither yields a contract ID
        """
        if contract_id:
            return contract_id
        resolved = self.client.get_config().acta_contract_id
        if not resolved:
            raise ConfigurationMissingError("Contract ID not configured")
        return resolved

    def _run(
        self,
        endpoint: Endpoint,
        intent: Intent,
        signer: Union[Signer, SignFunction],
        ledger: Optional[LedgerTransport],
        cancel_event: Optional[threading.Event],
        label: str
    ) -> SubmissionOutcome:
        return self.orchestrator.execute(
            endpoint,
            intent,
            as_signer(signer),
            ledger=ledger,
            cancel_event=cancel_event,
            label=label
        )
