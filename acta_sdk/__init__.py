"""
ACTA SDK - issue, store, authorize and revoke verifiable credentials on Stellar
through the ACTA API.
"""
from .client import ActaClient
from .config import MAINNET_URL, TESTNET_URL, NetworkConfig, resolve_api_key, network_from_base_url
from .credential import CredentialOperations
from .exceptions import (
    ActaError, MissingCredentialError, InvalidInputError, MalformedDocumentError,
    ConfigurationMissingError, ApiError, PrepareFailedError, SubmitFailedError,
    SigningFailedError, TransactionFailedError, LedgerError
)
from .ledger import LedgerTransport, SorobanRpcTransport, StubTransport
from .models import (
    Network, OutcomeStatus, SubmissionOutcome, ConfigResponse, TxPrepareResponse,
    TxSubmitResponse, VaultVerifyResponse, parse_tx_response
)
from .orchestrator import TransactionOrchestrator, TxState, classify_status, wait_for_transaction
from .signer import Signer, CallableSigner, as_signer
from .utils import REQUIRED_CONTEXT, build_did, normalize_did, ensure_context
from .vault import VaultOperations, VaultReader
from .version import __version__

__all__ = [
    "ActaClient",
    "VaultOperations",
    "VaultReader",
    "CredentialOperations",
    "TransactionOrchestrator",
    "TxState",
    "classify_status",
    "wait_for_transaction",
    "Signer",
    "CallableSigner",
    "as_signer",
    "LedgerTransport",
    "SorobanRpcTransport",
    "StubTransport",
    "Network",
    "NetworkConfig",
    "MAINNET_URL",
    "TESTNET_URL",
    "resolve_api_key",
    "network_from_base_url",
    "OutcomeStatus",
    "SubmissionOutcome",
    "ConfigResponse",
    "TxPrepareResponse",
    "TxSubmitResponse",
    "VaultVerifyResponse",
    "parse_tx_response",
    "REQUIRED_CONTEXT",
    "build_did",
    "normalize_did",
    "ensure_context",
    "ActaError",
    "MissingCredentialError",
    "InvalidInputError",
    "MalformedDocumentError",
    "ConfigurationMissingError",
    "ApiError",
    "PrepareFailedError",
    "SubmitFailedError",
    "SigningFailedError",
    "TransactionFailedError",
    "LedgerError",
    "__version__",
]
