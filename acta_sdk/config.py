"""
Network configuration and credential resolution for the ACTA SDK.
"""
import os
import json
import logging
import importlib.resources
from typing import Dict, Any, Optional, List, Mapping, Tuple, Union

from .exceptions import MissingCredentialError
from .models import Network

logger = logging.getLogger(__name__)

MAINNET_URL = "https://acta.build/api/mainnet"
TESTNET_URL = "https://acta.build/api/testnet"

API_KEY_ENV = "ACTA_API_KEY"
API_KEY_HEADER = "X-ACTA-Key"


def network_from_base_url(base_url: str) -> Network:
    """
    Infer the network from an ACTA base URL.

    Any URL that does not mention mainnet is treated as testnet.
    """
    return Network.MAINNET if "mainnet" in base_url else Network.TESTNET


def _api_key_candidates(
    network: Network,
    api_key: Optional[str],
    environ: Mapping[str, str]
) -> List[Tuple[str, Optional[str]]]:
    """Ordered (source, value) pairs consulted when resolving an API key"""
    network_var = f"{API_KEY_ENV}_{network.value.upper()}"
    return [
        ("parameter", api_key),
        (network_var, environ.get(network_var)),
        (API_KEY_ENV, environ.get(API_KEY_ENV)),
    ]


def resolve_api_key(
    network: Network,
    api_key: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> str:
    """
    Resolve the API key for a network.

    Sources are tried in order: the explicit parameter, the network-specific
    environment variable (ACTA_API_KEY_MAINNET / ACTA_API_KEY_TESTNET), then
    ACTA_API_KEY. Blank values are skipped.

    Args:
        network: Network the client talks to
        api_key: Explicit API key, takes precedence over the environment
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The stripped API key

    Raises:
        MissingCredentialError: If no source yields a non-blank key
    """
    env = os.environ if environ is None else environ

    for source, value in _api_key_candidates(network, api_key, env):
        if value and value.strip():
            logger.debug(f"Using ACTA API key from {source}")
            return value.strip()

    network_var = f"{API_KEY_ENV}_{network.value.upper()}"
    raise MissingCredentialError(
        f"API key is required for {network.value}.\n"
        f"Provide it as a parameter or set it in your environment:\n"
        f"- {network_var}=your-{network.value}-api-key (recommended)\n"
        f"- Or {API_KEY_ENV}=your-api-key (fallback for both networks)\n\n"
        f"Get your API key from https://dapp.acta.build or create one via:\n"
        f"- POST /{network.value}/public/api-keys"
    )


class NetworkConfig:
    """Per-network defaults shipped with the SDK (networks.json)."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions, caching them after the first read.

        Returns:
            Mapping of network name to its settings
        """
        if cls._networks_cache is not None:
            return cls._networks_cache

        resource = importlib.resources.files("acta_sdk").joinpath("networks.json")
        with resource.open("r", encoding="utf-8") as f:
            cls._networks_cache = json.load(f)
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: Union[Network, str]) -> Dict[str, Any]:
        """
        Get the settings for a network.

        Raises:
            ValueError: If the network is unknown
        """
        name = network.value if isinstance(network, Network) else network
        networks = cls.load_networks()
        if name not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{name}'. Available networks: {available}")
        return networks[name]

    @classmethod
    def get_base_url(cls, network: Union[Network, str]) -> str:
        return cls.get_network(network)["baseUrl"]

    @classmethod
    def get_rpc_url(cls, network: Union[Network, str], override: Optional[str] = None) -> str:
        """
        Get the Soroban RPC URL for a network.

        Order: explicit override, ACTA_<NETWORK>_RPC_URL, networks.json.
        """
        if override:
            return override

        settings = cls.get_network(network)
        name = network.value if isinstance(network, Network) else network
        env_var = f"ACTA_{name.upper().replace('-', '_')}_RPC_URL"
        env_url = os.environ.get(env_var)
        if env_url:
            return env_url

        return settings["rpc"]

    @classmethod
    def get_network_passphrase(cls, network: Union[Network, str]) -> str:
        return cls.get_network(network)["networkPassphrase"]

    @classmethod
    def get_vault_contract_id(cls, network: Union[Network, str]) -> str:
        return cls.get_network(network)["vaultContract"]

    @classmethod
    def get_issuance_contract_id(cls, network: Union[Network, str]) -> str:
        return cls.get_network(network)["issuanceContract"]
