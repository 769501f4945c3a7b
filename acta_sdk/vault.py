"""
Vault operations: create, authorize issuer, revoke issuer, revoke vault, and
read helpers.
"""
import threading
from typing import Any, List, Optional, Union

from ._operations import BaseOperations
from .ledger import LedgerTransport
from .models import (
    AuthorizeIssuerIntent, CreateVaultIntent, RevokeIssuerIntent,
    RevokeVaultIntent, SubmissionOutcome, VaultVerifyResponse
)
from .signer import Signer, SignFunction


class VaultOperations(BaseOperations):
    """
    Vault lifecycle operations.

    Each call prepares the transaction through the ACTA API, has ``signer``
    sign it for the network passphrase the API returned, and submits it. With
    ``ledger`` set, the signed transaction goes straight to the ledger and its
    status is polled until it settles.
    """

    def create_vault(
        self,
        owner: str,
        owner_did: str,
        signer: Union[Signer, SignFunction],
        contract_id: Optional[str] = None,
        ledger: Optional[LedgerTransport] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> SubmissionOutcome:
        """
        Create (initialize) a vault for an owner.

        Args:
            owner: Wallet address of the vault owner, also the signing account
            owner_did: DID of the vault owner
            signer: Signs the prepared transaction
            contract_id: Contract ID (defaults to the API's configured contract)
            ledger: Optional direct ledger transport
            cancel_event: Stops waiting for confirmation when set

        Returns:
            SubmissionOutcome with the transaction ID
        """
        intent = CreateVaultIntent(
            owner=owner,
            owner_did=owner_did,
            contract_id=self._resolve_contract_id(contract_id)
        )
        return self._run(self.client.vault_create, intent, signer, ledger, cancel_event, "create vault")

    def authorize_issuer(
        self,
        owner: str,
        issuer: str,
        signer: Union[Signer, SignFunction],
        contract_id: Optional[str] = None,
        ledger: Optional[LedgerTransport] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> SubmissionOutcome:
        """Authorize ``issuer`` to issue credentials into ``owner``'s vault."""
        intent = AuthorizeIssuerIntent(
            owner=owner,
            issuer=issuer,
            contract_id=self._resolve_contract_id(contract_id)
        )
        return self._run(
            self.client.vault_authorize_issuer, intent, signer, ledger, cancel_event, "authorize issuer"
        )

    def revoke_issuer(
        self,
        owner: str,
        issuer: str,
        signer: Union[Signer, SignFunction],
        contract_id: Optional[str] = None,
        ledger: Optional[LedgerTransport] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> SubmissionOutcome:
        """Remove ``issuer`` from the issuers authorized on ``owner``'s vault."""
        intent = RevokeIssuerIntent(
            owner=owner,
            issuer=issuer,
            contract_id=self._resolve_contract_id(contract_id)
        )
        return self._run(
            self.client.vault_revoke_issuer_via_api, intent, signer, ledger, cancel_event, "revoke issuer"
        )

    def revoke_vault(
        self,
        owner: str,
        signer: Union[Signer, SignFunction],
        contract_id: Optional[str] = None,
        ledger: Optional[LedgerTransport] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> SubmissionOutcome:
        """Disable ``owner``'s vault."""
        intent = RevokeVaultIntent(
            owner=owner,
            contract_id=self._resolve_contract_id(contract_id)
        )
        return self._run(
            self.client.vault_revoke_vault, intent, signer, ledger, cancel_event, "revoke vault"
        )


class VaultReader(BaseOperations):
    """Read-only vault queries; nothing is signed."""

    def list_vc_ids(self, owner: str, contract_id: Optional[str] = None) -> List[str]:
        """List the credential IDs stored in ``owner``'s vault."""
        return self.client.vault_list_vc_ids_direct(owner, contract_id=contract_id).ids

    def get_vc(self, owner: str, vc_id: str, contract_id: Optional[str] = None) -> Optional[Any]:
        """Fetch a credential, or None if the vault does not hold it."""
        return self.client.vault_get_vc_direct(owner, vc_id, contract_id=contract_id).value

    def verify_vc(self, owner: str, vc_id: str, contract_id: Optional[str] = None) -> VaultVerifyResponse:
        """Check whether a credential is valid or revoked."""
        return self.client.vault_verify(owner, vc_id, contract_id=contract_id)
