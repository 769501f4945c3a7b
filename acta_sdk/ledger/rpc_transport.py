"""
Soroban RPC transport.

Talks JSON-RPC 2.0 to a Stellar Soroban RPC server to submit signed
transactions (``sendTransaction``) and poll their status (``getTransaction``).
"""
import itertools
import logging
import urllib.parse
from typing import Any, Dict, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import NetworkConfig
from ..exceptions import LedgerError
from ..models import Network
from .transport import LedgerTransport, LedgerSubmission

# Configure logger
logger = logging.getLogger(__name__)


class SorobanRpcTransport(LedgerTransport):
    """Ledger transport backed by a Soroban RPC endpoint."""

    def __init__(self, rpc_url: str, retry_count: int = 3, timeout: int = 30):
        """
        Initialize the transport.

        Args:
            rpc_url: Soroban RPC URL (e.g. "https://soroban-testnet.stellar.org")
            retry_count: Number of retries for HTTP requests
            timeout: Timeout for HTTP requests in seconds

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        parsed = urllib.parse.urlparse(rpc_url)
        host = parsed.netloc.split(':')[0]
        if parsed.scheme != 'https' and host not in ('localhost', '127.0.0.1'):
            raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")

        self.rpc_url = rpc_url
        self.timeout = timeout
        self._ids = itertools.count(1)

        self.session = requests.Session()
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            # Every RPC call is a POST; sendTransaction must not be re-sent
            # once it reached the server, so only connection failures retry
            allowed_methods=["GET"],
            raise_on_status=False,
            other=0
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))
        logger.debug(f"Initialized Soroban RPC transport for {rpc_url}")

    @classmethod
    def from_network(
        cls,
        network: Union[Network, str],
        rpc_url: Optional[str] = None,
        **kwargs
    ) -> "SorobanRpcTransport":
        """
        Create a transport for a known network.

        Args:
            network: Network name ("mainnet" or "testnet")
            rpc_url: Optional RPC URL override
            **kwargs: Passed to the constructor
        """
        return cls(NetworkConfig.get_rpc_url(network, override=rpc_url), **kwargs)

    def _call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        body = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        try:
            response = self.session.post(self.rpc_url, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LedgerError(f"Soroban RPC {method} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise LedgerError(f"Invalid JSON from Soroban RPC {method}: {e}") from e

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            message = error.get("message", error) if isinstance(error, dict) else error
            raise LedgerError(f"Soroban RPC {method} returned an error: {message}")

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            raise LedgerError(f"Soroban RPC {method} returned no result")
        return result

    def send_transaction(self, signed_xdr: str) -> LedgerSubmission:
        result = self._call("sendTransaction", {"transaction": signed_xdr})
        submission = LedgerSubmission(
            hash=result.get("hash", ""),
            status=result.get("status", ""),
            error_result_xdr=result.get("errorResultXdr")
        )
        logger.info(f"Transaction sent: {submission.hash} ({submission.status})")
        return submission

    def get_transaction_status(self, tx_hash: str) -> Optional[str]:
        result = self._call("getTransaction", {"hash": tx_hash})
        return result.get("status")

    def close(self) -> None:
        self.session.close()
