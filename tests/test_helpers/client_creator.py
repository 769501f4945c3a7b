"""
Utility functions for creating test clients and signers.
"""
from typing import List, Optional, Tuple

from acta_sdk.client import ActaClient
from acta_sdk.config import MAINNET_URL, TESTNET_URL

# Test constants used throughout tests
TEST_BASE_URL = TESTNET_URL
TEST_MAINNET_URL = MAINNET_URL
TEST_API_KEY = "test-api-key"
TEST_CONTRACT = "CDK642PLEPCQH7WUBLHYYSKRJZOUIRIPY7GXQRHOETGR2JJ76UK6SWLZ"
TEST_OWNER = "GOWNER4TESTACCOUNT"
TEST_ISSUER = "GISSUER4TESTACCOUNT"
TEST_PASSPHRASE = "Test SDF Network ; September 2015"
TEST_RPC_URL = "https://soroban-testnet.stellar.org"

CONFIG_BODY = {
    "rpcUrl": TEST_RPC_URL,
    "networkPassphrase": TEST_PASSPHRASE,
    "actaContractId": TEST_CONTRACT,
}


def create_test_client(
    base_url: str = TEST_BASE_URL,
    api_key: Optional[str] = TEST_API_KEY,
    retry_count: int = 0,
    timeout: int = 5,
    **kwargs
) -> ActaClient:
    """
    Create a client instance for testing with consistent defaults.

    Retries are disabled so mocked failures surface on the first request.
    """
    return ActaClient(
        base_url=base_url,
        api_key=api_key,
        retry_count=retry_count,
        timeout=timeout,
        **kwargs
    )


class RecordingSigner:
    """Signer that records its calls and returns a predictable signed XDR"""

    def __init__(self, prefix: str = "signed:"):
        self.prefix = prefix
        self.calls: List[Tuple[str, str]] = []

    def sign_transaction(self, unsigned_xdr: str, network_passphrase: str) -> str:
        self.calls.append((unsigned_xdr, network_passphrase))
        return f"{self.prefix}{unsigned_xdr}"


class FailingSigner:
    """Signer that always fails, like a wallet whose user declined"""

    def __init__(self, error: Exception = None):
        self.error = error or ValueError("User declined to sign")
        self.calls = 0

    def sign_transaction(self, unsigned_xdr: str, network_passphrase: str) -> str:
        self.calls += 1
        raise self.error
