"""
Data models for the ACTA SDK.
"""
from enum import Enum
from typing import Dict, Any, Optional, List, Union, Literal

from pydantic import BaseModel, ConfigDict, Field


class Network(str, Enum):
    """Stellar network an ACTA client talks to"""
    MAINNET = "mainnet"
    TESTNET = "testnet"


# ─────────────────────────────────────────────────────────────────────────
#  API responses
# ─────────────────────────────────────────────────────────────────────────

class ConfigResponse(BaseModel):
    """Runtime configuration served by ``/config``"""
    model_config = ConfigDict(populate_by_name=True)

    rpc_url: Optional[str] = Field(None, alias="rpcUrl")
    network_passphrase: Optional[str] = Field(None, alias="networkPassphrase")
    acta_contract_id: Optional[str] = Field(None, alias="actaContractId")


class HealthResponse(BaseModel):
    """Service health served by ``/health``"""
    model_config = ConfigDict(extra="allow")

    status: str
    timestamp: Optional[str] = None
    service: Optional[str] = None
    port: Optional[Union[int, str]] = None
    env: Optional[Dict[str, Any]] = None


class TxPrepareResponse(BaseModel):
    """Unsigned transaction returned in prepare mode.

    ``network`` is the network passphrase the transaction must be signed for.
    """
    xdr: str
    network: str


class TxSubmitResponse(BaseModel):
    """Transaction ID returned in submit mode"""
    tx_id: str


TxResponse = Union[TxPrepareResponse, TxSubmitResponse]


def is_tx_prepare_response(data: Any) -> bool:
    """True if ``data`` carries both an unsigned XDR and a network passphrase"""
    return isinstance(data, dict) and bool(data.get("xdr")) and bool(data.get("network"))


def is_tx_submit_response(data: Any) -> bool:
    """True if ``data`` carries a transaction ID"""
    return isinstance(data, dict) and bool(data.get("tx_id"))


def parse_tx_response(data: Any) -> Optional[TxResponse]:
    """
    Decide which shape a dual-mode endpoint answered with.

    The same endpoint serves prepare and submit requests, so the fields that
    are present are the only reliable indicator of the response mode.

    Args:
        data: Decoded JSON body

    Returns:
        TxPrepareResponse, TxSubmitResponse, or None if neither field set is present
    """
    if is_tx_prepare_response(data):
        return TxPrepareResponse(xdr=data["xdr"], network=data["network"])
    if is_tx_submit_response(data):
        return TxSubmitResponse(tx_id=data["tx_id"])
    return None


class VaultVerifyResponse(BaseModel):
    """Credential status as seen by the Vault contract"""
    status: Literal["valid", "revoked"]
    since: Optional[str] = None


class VerifyStatusResponse(BaseModel):
    """Credential status as seen by the Issuance contract"""
    vc_id: str
    status: str
    since: Optional[str] = None


class RevokeCredentialResponse(BaseModel):
    """Result of a server-signed revocation"""
    vc_id: str
    tx_id: str


class VcIdsResponse(BaseModel):
    """Credential IDs listed from a vault.

    ``result`` is the deprecated spelling of ``vc_ids``.
    """
    vc_ids: Optional[List[str]] = None
    result: Optional[List[str]] = None

    @property
    def ids(self) -> List[str]:
        if self.vc_ids is not None:
            return self.vc_ids
        if self.result is not None:
            return self.result
        return []


class VcResponse(BaseModel):
    """A credential read from a vault; ``result`` is the deprecated alias of ``vc``"""
    vc: Any = None
    result: Any = None

    @property
    def value(self) -> Any:
        return self.vc if self.vc is not None else self.result


# ─────────────────────────────────────────────────────────────────────────
#  Intents (prepare-mode request bodies)
# ─────────────────────────────────────────────────────────────────────────

class Intent(BaseModel):
    """Base for a single ledger operation request"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    contract_id: str = Field(..., alias="contractId")

    @property
    def source_public_key(self) -> str:
        """Account that will sign the transaction"""
        raise NotImplementedError

    def to_payload(self) -> Dict[str, Any]:
        """Render the prepare-mode JSON body"""
        payload = self.model_dump(by_alias=True, exclude_none=True)
        payload["sourcePublicKey"] = self.source_public_key
        return payload


class CreateVaultIntent(Intent):
    owner: str
    owner_did: str = Field(..., alias="didUri")

    @property
    def source_public_key(self) -> str:
        return self.owner


class AuthorizeIssuerIntent(Intent):
    owner: str
    issuer: str

    @property
    def source_public_key(self) -> str:
        return self.owner


class RevokeIssuerIntent(Intent):
    owner: str
    issuer: str

    @property
    def source_public_key(self) -> str:
        return self.owner


class RevokeVaultIntent(Intent):
    owner: str

    @property
    def source_public_key(self) -> str:
        return self.owner


class IssueCredentialIntent(Intent):
    owner: str
    vc_id: str = Field(..., alias="vcId")
    vc_data: str = Field(..., alias="vcData")
    issuer: str
    holder: str
    issuer_did: Optional[str] = Field(None, alias="issuerDid")

    @property
    def source_public_key(self) -> str:
        return self.issuer


class RevokeCredentialIntent(Intent):
    # The owner signs but is not part of the revoke body
    owner: str = Field(..., exclude=True)
    vc_id: str = Field(..., alias="vcId")
    date: Optional[str] = None

    @property
    def source_public_key(self) -> str:
        return self.owner


# ─────────────────────────────────────────────────────────────────────────
#  Outcomes
# ─────────────────────────────────────────────────────────────────────────

class OutcomeStatus(str, Enum):
    """
    Status carried by a SubmissionOutcome.

    The orchestrator only returns ``accepted`` or ``pending``; a ledger
    rejection raises TransactionFailedError instead. ``rejected`` and ``error``
    are reserved for callers that record failures as outcomes.
    """
    ACCEPTED = "accepted"
    PENDING = "pending"
    REJECTED = "rejected"
    ERROR = "error"


class SubmissionOutcome(BaseModel):
    """
    Result of driving one intent to the ledger.

    A ``pending`` outcome means polling ran out before the ledger reported a
    terminal status; the transaction may still land and should be re-queried.
    """
    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    tx_id: Optional[str] = None
    reason: Optional[str] = None
    attempts: int = 0

    @property
    def resolved(self) -> bool:
        return self.status != OutcomeStatus.PENDING

    @property
    def accepted(self) -> bool:
        return self.status == OutcomeStatus.ACCEPTED
