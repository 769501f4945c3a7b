"""
Stub ledger transport.

Replays a scripted sequence of statuses instead of talking to a ledger, for
local development and tests.
"""
import logging
from typing import Iterable, List, Optional, Union

from ..exceptions import LedgerError
from .transport import LedgerTransport, LedgerSubmission, SEND_PENDING, TX_NOT_FOUND

# Configure logger
logger = logging.getLogger(__name__)

StubStatus = Union[str, None, Exception]


class StubTransport(LedgerTransport):
    """
    A scripted ledger transport.

    Each status lookup consumes the next entry of ``statuses``. An entry that
    is an exception instance is raised instead of returned, to simulate a
    failed lookup. Once the script runs out the last entry keeps repeating
    (NOT_FOUND if the script was empty).
    """

    def __init__(
        self,
        statuses: Iterable[StubStatus] = (),
        submit_status: str = SEND_PENDING,
        tx_hash: str = "0" * 64
    ):
        self._statuses: List[StubStatus] = list(statuses)
        self.submit_status = submit_status
        self.tx_hash = tx_hash
        self.submitted: List[str] = []
        self.queries = 0
        self.closed = False

    def send_transaction(self, signed_xdr: str) -> LedgerSubmission:
        if self.closed:
            raise LedgerError("Stub transport is closed")
        self.submitted.append(signed_xdr)
        logger.debug(f"StubTransport.send_transaction -> {self.submit_status}")
        return LedgerSubmission(hash=self.tx_hash, status=self.submit_status)

    def get_transaction_status(self, tx_hash: str) -> Optional[str]:
        if self.closed:
            raise LedgerError("Stub transport is closed")
        if self._statuses:
            index = min(self.queries, len(self._statuses) - 1)
            status = self._statuses[index]
        else:
            status = TX_NOT_FOUND
        self.queries += 1

        if isinstance(status, Exception):
            raise status
        return status

    def close(self) -> None:
        self.closed = True
