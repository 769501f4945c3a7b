"""
Transport layer for direct ledger access.

This module provides an abstraction over the endpoint used to submit signed
transactions straight to the ledger and to look up their status, so the
orchestrator works the same against Soroban RPC or a scripted stub.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

# Configure logger
logger = logging.getLogger(__name__)

# Statuses returned by sendTransaction
SEND_PENDING = "PENDING"
SEND_DUPLICATE = "DUPLICATE"
SEND_TRY_AGAIN_LATER = "TRY_AGAIN_LATER"
SEND_ERROR = "ERROR"

# Statuses returned by getTransaction
TX_SUCCESS = "SUCCESS"
TX_FAILED = "FAILED"
TX_NOT_FOUND = "NOT_FOUND"


@dataclass
class LedgerSubmission:
    """
    Immediate answer to a signed transaction submission.

    ``status`` is one of PENDING, DUPLICATE, TRY_AGAIN_LATER or ERROR; only
    the final state, obtained by polling, says whether the transaction landed.
    """
    hash: str = ""
    status: str = ""
    error_result_xdr: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status == SEND_ERROR


class LedgerTransport(ABC):
    """
    Abstract base class for ledger transport implementations.
    """

    @abstractmethod
    def send_transaction(self, signed_xdr: str) -> LedgerSubmission:
        """
        Submit a signed transaction.

        Args:
            signed_xdr: Signed transaction envelope (base64 XDR)

        Returns:
            Submission result with the transaction hash

        Raises:
            LedgerError: If the ledger endpoint cannot be reached
        """
        pass

    @abstractmethod
    def get_transaction_status(self, tx_hash: str) -> Optional[str]:
        """
        Look up the current status of a transaction.

        Args:
            tx_hash: Transaction hash returned by send_transaction

        Returns:
            Status string (SUCCESS, FAILED, NOT_FOUND, ...) or None if absent

        Raises:
            LedgerError: If the lookup fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close any open connections or resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
