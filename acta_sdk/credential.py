"""
Credential operations: issue and revoke.
"""
import threading
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from ._operations import BaseOperations
from .ledger import LedgerTransport
from .models import IssueCredentialIntent, RevokeCredentialIntent, SubmissionOutcome
from .signer import Signer, SignFunction
from .utils import ensure_context, normalize_did


def _now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CredentialOperations(BaseOperations):
    """Issue and revoke verifiable credentials."""

    def issue(
        self,
        owner: str,
        vc_id: str,
        vc_data: Union[str, Mapping[str, Any]],
        issuer: str,
        holder: str,
        signer: Union[Signer, SignFunction],
        issuer_did: Optional[str] = None,
        contract_id: Optional[str] = None,
        ledger: Optional[LedgerTransport] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> SubmissionOutcome:
        """
        Issue a credential (stores it in the owner's vault and marks it valid).

        ``holder`` and ``issuer_did`` may be bare wallet addresses; they are
        turned into did:pkh identifiers for the client's network. The required
        @context entries are added to ``vc_data`` when missing.

        Args:
            owner: Wallet address of the vault owner
            vc_id: Credential identifier
            vc_data: Credential claims as a JSON string or a mapping
            issuer: Wallet address of the issuer, also the signing account
            holder: DID or wallet address of the credential holder
            signer: Signs the prepared transaction
            issuer_did: DID or wallet address of the issuer
            contract_id: Contract ID (defaults to the API's configured contract)
            ledger: Optional direct ledger transport
            cancel_event: Stops waiting for confirmation when set

        Returns:
            SubmissionOutcome with the transaction ID

        Raises:
            InvalidInputError: If holder or issuer_did is empty
            MalformedDocumentError: If vc_data is not a JSON object
            ConfigurationMissingError: If no contract ID can be resolved
        """
        network = self.client.network
        holder_did = normalize_did(holder, network)
        normalized_issuer_did = normalize_did(issuer_did, network) if issuer_did else None
        document = ensure_context(vc_data)

        intent = IssueCredentialIntent(
            owner=owner,
            vc_id=vc_id,
            vc_data=document,
            issuer=issuer,
            holder=holder_did,
            issuer_did=normalized_issuer_did,
            contract_id=self._resolve_contract_id(contract_id)
        )
        return self._run(self.client.vc_issue, intent, signer, ledger, cancel_event, "issue credential")

    def revoke(
        self,
        owner: str,
        vc_id: str,
        signer: Union[Signer, SignFunction],
        date: Optional[str] = None,
        contract_id: Optional[str] = None,
        ledger: Optional[LedgerTransport] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> SubmissionOutcome:
        """
        Revoke a credential.

        Args:
            owner: Wallet address of the vault owner, also the signing account
            vc_id: Credential identifier
            signer: Signs the prepared transaction
            date: Revocation timestamp (ISO-8601), defaults to now
            contract_id: Contract ID (defaults to the API's configured contract)
            ledger: Optional direct ledger transport
            cancel_event: Stops waiting for confirmation when set
        """
        intent = RevokeCredentialIntent(
            owner=owner,
            vc_id=vc_id,
            date=date or _now_iso(),
            contract_id=self._resolve_contract_id(contract_id)
        )
        return self._run(
            self.client.revoke_credential_via_api, intent, signer, ledger, cancel_event, "revoke credential"
        )
