"""
Tests for network configuration and API key resolution.
"""
import os
from unittest.mock import patch

import pytest

from acta_sdk.config import (
    MAINNET_URL, TESTNET_URL, NetworkConfig, network_from_base_url, resolve_api_key
)
from acta_sdk.exceptions import MissingCredentialError
from acta_sdk.models import Network

# Sample network configuration
MOCK_NETWORKS = {
    "test-network": {
        "baseUrl": "https://api.example.com/test",
        "rpc": "https://rpc.example.com",
        "networkPassphrase": "Example Network",
        "vaultContract": "CVAULT",
        "issuanceContract": "CISSUANCE",
    }
}


@pytest.fixture
def mock_networks():
    NetworkConfig._networks_cache = MOCK_NETWORKS
    yield MOCK_NETWORKS
    # Reset cache for other tests
    NetworkConfig._networks_cache = None


class TestNetworkInference:

    def test_mainnet_url(self):
        assert network_from_base_url(MAINNET_URL) == Network.MAINNET

    def test_testnet_url(self):
        assert network_from_base_url(TESTNET_URL) == Network.TESTNET

    def test_unknown_url_defaults_to_testnet(self):
        assert network_from_base_url("http://localhost:8080/api") == Network.TESTNET


class TestResolveApiKey:

    def test_explicit_key_wins(self):
        env = {"ACTA_API_KEY_TESTNET": "env-net", "ACTA_API_KEY": "env-any"}
        assert resolve_api_key(Network.TESTNET, "explicit", environ=env) == "explicit"

    def test_network_specific_env_before_fallback(self):
        env = {"ACTA_API_KEY_MAINNET": "main-key", "ACTA_API_KEY": "any-key"}
        assert resolve_api_key(Network.MAINNET, environ=env) == "main-key"

    def test_other_network_key_is_ignored(self):
        env = {"ACTA_API_KEY_MAINNET": "main-key", "ACTA_API_KEY": "any-key"}
        assert resolve_api_key(Network.TESTNET, environ=env) == "any-key"

    def test_blank_values_are_skipped(self):
        env = {"ACTA_API_KEY_TESTNET": "   ", "ACTA_API_KEY": " fallback "}
        assert resolve_api_key(Network.TESTNET, "", environ=env) == "fallback"

    def test_missing_everywhere(self):
        with pytest.raises(MissingCredentialError, match="ACTA_API_KEY_TESTNET"):
            resolve_api_key(Network.TESTNET, environ={})

    def test_reads_os_environ_by_default(self):
        with patch.dict(os.environ, {"ACTA_API_KEY": "from-os"}):
            assert resolve_api_key(Network.MAINNET) == "from-os"


class TestNetworkConfig:

    def test_shipped_networks(self):
        NetworkConfig._networks_cache = None
        networks = NetworkConfig.load_networks()
        assert set(networks) == {"mainnet", "testnet"}
        assert NetworkConfig.get_base_url(Network.MAINNET) == MAINNET_URL
        assert NetworkConfig.get_base_url("testnet") == TESTNET_URL
        assert NetworkConfig.get_network_passphrase("testnet") == "Test SDF Network ; September 2015"
        assert NetworkConfig.get_vault_contract_id(Network.TESTNET).startswith("C")
        NetworkConfig._networks_cache = None

    def test_load_networks_cached(self, mock_networks):
        with patch("importlib.resources.files") as mock_files:
            result = NetworkConfig.load_networks()
            mock_files.assert_not_called()
        assert result == MOCK_NETWORKS

    def test_get_network_not_found(self, mock_networks):
        with pytest.raises(ValueError) as exc_info:
            NetworkConfig.get_network("non-existent-network")
        assert "test-network" in str(exc_info.value)

    def test_get_rpc_url_default(self, mock_networks):
        assert NetworkConfig.get_rpc_url("test-network") == "https://rpc.example.com"

    def test_get_rpc_url_override(self, mock_networks):
        result = NetworkConfig.get_rpc_url("test-network", override="https://override.example.com")
        assert result == "https://override.example.com"

    def test_get_rpc_url_env_var(self, mock_networks):
        with patch.dict(os.environ, {"ACTA_TEST_NETWORK_RPC_URL": "https://env.example.com"}):
            assert NetworkConfig.get_rpc_url("test-network") == "https://env.example.com"

    def test_contract_ids(self, mock_networks):
        assert NetworkConfig.get_vault_contract_id("test-network") == "CVAULT"
        assert NetworkConfig.get_issuance_contract_id("test-network") == "CISSUANCE"
