"""
Utility functions for the ACTA SDK.

DID construction and credential document normalization. Everything here is
pure: no I/O and no shared state.
"""
import json
from typing import Any, Dict, Mapping, Union

from .exceptions import InvalidInputError, MalformedDocumentError
from .models import Network

DID_PREFIX = "did:"
DEFAULT_BLOCKCHAIN = "stellar"

# Schema contexts every credential sent to ACTA must declare
REQUIRED_CONTEXT = (
    "https://www.w3.org/ns/credentials/v2",
    "https://www.w3.org/ns/credentials/examples/v2",
)


def _network_name(network: Union[Network, str]) -> str:
    return network.value if isinstance(network, Network) else str(network)


def build_did(
    address: str,
    network: Union[Network, str],
    blockchain: str = DEFAULT_BLOCKCHAIN
) -> str:
    """
    Build a did:pkh identifier from a wallet address.

    Args:
        address: Wallet address (e.g. a Stellar public key)
        network: Network the address lives on
        blockchain: Blockchain name used in the DID

    Returns:
        DID in the form did:pkh:<blockchain>:<network>:<address>

    Raises:
        InvalidInputError: If the address is empty
    """
    if not address:
        raise InvalidInputError("Wallet address must not be empty")
    return f"did:pkh:{blockchain}:{_network_name(network)}:{address}"


def normalize_did(
    value: str,
    network: Union[Network, str],
    blockchain: str = DEFAULT_BLOCKCHAIN
) -> str:
    """
    Promote a wallet address to a DID, leaving existing DIDs untouched.

    Args:
        value: A full DID or a bare wallet address
        network: Network used when a DID has to be built
        blockchain: Blockchain name used when a DID has to be built

    Returns:
        Fully qualified DID

    Raises:
        InvalidInputError: If the value is empty
    """
    if not value:
        raise InvalidInputError("DID or wallet address must not be empty")
    if value.startswith(DID_PREFIX):
        return value
    return build_did(value, network, blockchain)


def _load_document(document: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(document, str):
        try:
            data = json.loads(document)
        except ValueError as e:
            raise MalformedDocumentError(f"Invalid JSON in vcData: {e}") from e
        if not isinstance(data, dict):
            raise MalformedDocumentError(
                f"vcData must be a JSON object, got {type(data).__name__}"
            )
        return data

    if isinstance(document, Mapping):
        return dict(document)

    raise InvalidInputError(
        f"vcData must be a JSON string or a mapping, got {type(document).__name__}"
    )


def ensure_context(document: Union[str, Mapping[str, Any]]) -> str:
    """
    Make sure a credential document declares the required @context entries.

    A missing or non-list @context is replaced with the required list. A list
    @context keeps its entries and order, with any missing required URI
    appended. The caller's mapping is never modified.

    Args:
        document: Credential data as a JSON string or a mapping

    Returns:
        Compact JSON string of the normalized document

    Raises:
        MalformedDocumentError: If a string document is not a JSON object
        InvalidInputError: If the document is neither a string nor a mapping
    """
    data = _load_document(document)

    context = data.get("@context")
    if not isinstance(context, (list, tuple)):
        data["@context"] = list(REQUIRED_CONTEXT)
    else:
        missing = [url for url in REQUIRED_CONTEXT if url not in context]
        data["@context"] = list(context) + missing

    try:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"vcData is not JSON serializable: {e}") from e
