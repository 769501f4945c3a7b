"""
ActaClient - HTTP client for the ACTA credential API.
"""
import logging
import urllib.parse
from typing import Dict, Any, Optional, Type, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from pydantic import BaseModel, ValidationError

from .config import API_KEY_HEADER, network_from_base_url, resolve_api_key
from .exceptions import ApiError, PrepareFailedError
from .models import (
    Network, ConfigResponse, HealthResponse, TxPrepareResponse,
    VaultVerifyResponse, VerifyStatusResponse, RevokeCredentialResponse,
    VcIdsResponse, VcResponse, is_tx_prepare_response, is_tx_submit_response
)

M = TypeVar('M', bound=BaseModel)

# Payload fields that are too large or too sensitive to log verbatim
_REDACTED_FIELDS = ("signedXdr", "xdr", "vcData")


def _without_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


class ActaClient:
    """
    Client for the ACTA API.

    Wraps the endpoints used to issue, store, read and verify credentials and
    to prepare and submit vault and credential transactions. The network is
    inferred from ``base_url`` once and never changes.

    Dual-mode endpoints (``vault_create``, ``vc_issue``, ...) take either a
    prepare payload with the intent fields or a submit payload
    ``{"signedXdr": ...}``; the server picks the branch from the fields sent
    and the raw response dict is returned.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        retry_count: int = 3,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ActaClient

        Args:
            base_url: ACTA API base URL (e.g. "https://acta.build/api/testnet")
            api_key: API key; if omitted, read from ACTA_API_KEY_MAINNET /
                ACTA_API_KEY_TESTNET, then ACTA_API_KEY
            retry_count: Number of retries for HTTP requests
            timeout: Timeout for HTTP requests in seconds
            logger: Optional logger instance to use for debug/info logging

        Raises:
            MissingCredentialError: If no API key can be resolved
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        parsed = urllib.parse.urlparse(base_url)
        host = parsed.netloc.split(':')[0]
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ValueError(f"base_url must use https:// for security (got: {parsed.scheme}://)")

        self.base_url = base_url.rstrip('/')
        self._network = network_from_base_url(base_url)
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout
        self._config_cache: Optional[ConfigResponse] = None

        # Resolve the key before any session or network setup
        resolved_key = resolve_api_key(self._network, api_key)

        self.session = requests.Session()
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            # POST bodies may carry a signed transaction; only connection
            # failures (nothing sent) are retried for them
            allowed_methods=["GET"],
            raise_on_status=False,
            connect=retry_count,
            read=retry_count,
            other=0
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))
        self.set_api_key(resolved_key)

    @property
    def network(self) -> Network:
        """Network inferred from the base URL"""
        return self._network

    def set_api_key(self, api_key: str) -> None:
        """
        Replace the API key sent with every request.

        Raises:
            ValueError: If the key is blank
        """
        if not api_key or not api_key.strip():
            raise ValueError("API key must not be blank")
        self.session.headers[API_KEY_HEADER] = api_key.strip()

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ─────────────────────────────────────────────────────────────────────
    #  Request plumbing
    # ─────────────────────────────────────────────────────────────────────

    def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send a request and decode its JSON body

        Raises:
            ApiError: On connection failure, non-2xx status or non-JSON body
        """
        url = f"{self.base_url}{path}"
        if payload is not None:
            self.logger.debug(f"{method} {path}: {self._sanitize_payload(payload)}")
        else:
            self.logger.debug(f"{method} {path}")

        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"ACTA request {method} {path} failed: {e}")
            raise ApiError(f"Request to {path} failed: {e}") from e

        if response.status_code >= 400:
            detail = response.text[:200] if response.text else response.reason
            self.logger.error(f"ACTA API {method} {path} returned {response.status_code}: {detail}")
            raise ApiError(
                f"ACTA API {method} {path} returned {response.status_code}: {detail}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON response from {path}: {e}")
            raise ApiError(
                f"Invalid JSON response from {path}: {e}",
                status_code=response.status_code
            ) from e

    def _request_model(
        self,
        model: Type[M],
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> M:
        data = self._request(method, path, payload)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"Unexpected response from {path}: {e}") from e

    def _sanitize_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Shorten transaction and credential blobs for logging

        Args:
            payload: Request body

        Returns:
            Copy of the payload that is safe to log
        """
        if not isinstance(payload, dict):
            return {"type": str(type(payload))}

        result = payload.copy()
        for field in _REDACTED_FIELDS:
            if field in result and result[field] is not None:
                result[field] = f"[REDACTED - {len(str(result[field]))} chars]"
        return result

    # ─────────────────────────────────────────────────────────────────────
    #  Service endpoints
    # ─────────────────────────────────────────────────────────────────────

    def get_health(self) -> HealthResponse:
        """Get service health status."""
        return self._request_model(HealthResponse, "GET", "/health")

    def get_config(self) -> ConfigResponse:
        """
        Get runtime configuration (RPC URL, network passphrase, contract ID).

        The first successful response is cached for the lifetime of the client.
        """
        if self._config_cache is not None:
            return self._config_cache

        self._config_cache = self._request_model(ConfigResponse, "GET", "/config")
        return self._config_cache

    def get_defaults(self) -> Dict[str, Optional[str]]:
        """
        Legacy view of ``get_config()``.

        ``issuance_contract_id`` and ``vault_contract_id`` both map to the
        single ACTA contract.
        """
        config = self.get_config()
        return {
            "rpc_url": config.rpc_url,
            "network_passphrase": config.network_passphrase,
            "acta_contract_id": config.acta_contract_id,
            "issuance_contract_id": config.acta_contract_id,
            "vault_contract_id": config.acta_contract_id,
        }

    # ─────────────────────────────────────────────────────────────────────
    #  Dual-mode (prepare / submit) endpoints
    # ─────────────────────────────────────────────────────────────────────

    def vault_create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create (initialize) a vault: ``{owner, didUri, sourcePublicKey, contractId?}`` or ``{signedXdr}``."""
        return self._request("POST", "/contracts/vault/create", payload)

    def vault_authorize_issuer(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Authorize an issuer: ``{owner, issuer, sourcePublicKey, contractId?}`` or ``{signedXdr}``."""
        return self._request("POST", "/contracts/vault/authorize-issuer", payload)

    def vault_revoke_issuer_via_api(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Remove an authorized issuer: ``{owner, issuer, sourcePublicKey, contractId?}`` or ``{signedXdr}``."""
        return self._request("POST", "/contracts/vault/revoke-issuer", payload)

    def vault_revoke_vault(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Disable a vault: ``{owner, sourcePublicKey, contractId?}`` or ``{signedXdr}``."""
        return self._request("POST", "/contracts/vault/revoke-vault", payload)

    def vc_issue(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Issue a credential (stores it in the vault and marks it valid)."""
        return self._request("POST", "/contracts/vc/issue", payload)

    def revoke_credential_via_api(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Revoke a credential: ``{vcId, date?, sourcePublicKey, contractId?}`` or ``{signedXdr}``."""
        return self._request("POST", "/contracts/vc/revoke", payload)

    def prepare_issue_tx(
        self,
        owner: str,
        vc_id: str,
        vc_data: str,
        issuer: str,
        holder: str,
        source_public_key: str,
        issuer_did: Optional[str] = None,
        contract_id: Optional[str] = None
    ) -> TxPrepareResponse:
        """
        Prepare an unsigned credential issuance transaction.

        Uses the ``vc_issue`` endpoint but insists on a prepare-mode answer.

        Raises:
            PrepareFailedError: If the response is not a complete prepare response
        """
        payload = {
            "owner": owner,
            "vcId": vc_id,
            "vcData": vc_data,
            "issuer": issuer,
            "holder": holder,
            "sourcePublicKey": source_public_key,
        }
        if issuer_did is not None:
            payload["issuerDid"] = issuer_did
        if contract_id is not None:
            payload["contractId"] = contract_id

        data = self.vc_issue(payload)
        if is_tx_submit_response(data):
            raise PrepareFailedError("Unexpected submit response in prepare mode")
        if not is_tx_prepare_response(data):
            raise PrepareFailedError("Failed to prepare transaction: missing xdr or network")
        return TxPrepareResponse(xdr=data["xdr"], network=data["network"])

    # ─────────────────────────────────────────────────────────────────────
    #  Read and verification endpoints
    # ─────────────────────────────────────────────────────────────────────

    def vault_verify(
        self,
        owner: str,
        vc_id: str,
        contract_id: Optional[str] = None
    ) -> VaultVerifyResponse:
        """Verify a credential against the Vault contract."""
        return self._request_model(
            VaultVerifyResponse, "POST", "/contracts/vault/verify-vc",
            _without_none({"owner": owner, "vcId": vc_id, "contractId": contract_id})
        )

    def vault_list_vc_ids_direct(
        self,
        owner: str,
        contract_id: Optional[str] = None
    ) -> VcIdsResponse:
        """List credential IDs directly from the Vault contract."""
        return self._request_model(
            VcIdsResponse, "POST", "/contracts/vault/list-vc-ids",
            _without_none({"owner": owner, "contractId": contract_id})
        )

    def vault_get_vc_direct(
        self,
        owner: str,
        vc_id: str,
        contract_id: Optional[str] = None
    ) -> VcResponse:
        """Read a credential directly from the Vault contract."""
        return self._request_model(
            VcResponse, "POST", "/contracts/vault/get-vc",
            _without_none({"owner": owner, "vcId": vc_id, "contractId": contract_id})
        )

    def vault_list_vc_ids(self, payload: Dict[str, Any]) -> VcIdsResponse:
        """List credential IDs with ``{signedXdr}`` or ``{owner, vaultContractId?}``."""
        return self._request_model(VcIdsResponse, "POST", "/vault/list_vc_ids", payload)

    def vault_get_vc(self, payload: Dict[str, Any]) -> VcResponse:
        """Fetch a credential with ``{signedXdr}`` or ``{owner, vcId, vaultContractId?}``."""
        return self._request_model(VcResponse, "POST", "/vault/get_vc", payload)

    def vault_revoke_issuer(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Legacy issuer revocation with ``{signedXdr}`` or ``{owner, issuer, vaultContractId}``."""
        return self._request("POST", "/vault/revoke_issuer", payload)

    def verify_status(self, vc_id: str) -> VerifyStatusResponse:
        """Verify a credential status via the Issuance contract."""
        return self._request_model(VerifyStatusResponse, "POST", "/verify", {"vcId": vc_id})

    def verify_status_get(self, vc_id: str) -> VerifyStatusResponse:
        """Verify a credential status via GET (legacy)."""
        encoded = urllib.parse.quote(vc_id, safe='')
        return self._request_model(VerifyStatusResponse, "GET", f"/verify/{encoded}")

    def revoke_credential(self, vc_id: str, date: Optional[str] = None) -> RevokeCredentialResponse:
        """
        Revoke a credential via the Issuance contract; the server signs.

        Args:
            vc_id: Credential identifier
            date: Optional ISO timestamp; the server defaults to now
        """
        payload: Dict[str, Any] = {"vcId": vc_id}
        if date is not None:
            payload["date"] = date
        return self._request_model(RevokeCredentialResponse, "POST", "/issuance/revoke", payload)
