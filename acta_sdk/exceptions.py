"""
Exceptions for the ACTA SDK.
"""
from typing import Optional


class ActaError(Exception):
    """Base exception for all ACTA SDK errors."""
    pass


class MissingCredentialError(ActaError, ValueError):
    """Raised when no API key can be resolved for the client's network."""
    pass


class InvalidInputError(ActaError, ValueError):
    """Raised when caller-supplied data is unusable."""
    pass


class MalformedDocumentError(InvalidInputError):
    """Raised when a credential document cannot be parsed."""
    pass


class ConfigurationMissingError(ActaError):
    """Raised when no contract ID can be resolved for an operation."""
    pass


class ApiError(ActaError):
    """Raised when the ACTA API request fails or returns an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class PrepareFailedError(ActaError):
    """Raised when the backend does not return an unsigned transaction."""
    pass


class SubmitFailedError(ActaError):
    """Raised when a signed transaction submission yields no transaction ID."""
    pass


class SigningFailedError(ActaError):
    """Raised when the caller-supplied signer fails.

    The signer's own exception is kept on ``original`` and as ``__cause__``.
    """

    def __init__(self, message: str, original: Optional[BaseException] = None):
        self.original = original
        super().__init__(message)


class TransactionFailedError(ActaError):
    """Raised when the ledger reports a terminal failure for a transaction."""

    def __init__(self, message: str, tx_id: Optional[str] = None, status: Optional[str] = None):
        self.tx_id = tx_id
        self.status = status
        super().__init__(message)


class LedgerError(ActaError):
    """Raised when the ledger RPC endpoint cannot be queried."""
    pass
