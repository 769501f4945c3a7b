"""
Signer interface for the ACTA SDK.

The SDK never holds keys. Callers hand in a signer that turns an unsigned
transaction XDR into a signed one for a given network passphrase.
"""
from typing import Any, Callable, Dict, Protocol, Union

from .exceptions import InvalidInputError

SignFunction = Callable[[str, Dict[str, str]], str]


class Signer(Protocol):
    """Protocol for transaction signers"""

    def sign_transaction(self, unsigned_xdr: str, network_passphrase: str) -> str:
        """Sign an unsigned transaction XDR and return the signed XDR"""
        ...


class CallableSigner:
    """
    Adapts a wallet-style sign function to the Signer protocol.

    The function is called as ``fn(unsigned_xdr, {"networkPassphrase": ...})``,
    the same shape browser and mobile Stellar wallets expose.
    """

    def __init__(self, fn: SignFunction):
        self._fn = fn

    def sign_transaction(self, unsigned_xdr: str, network_passphrase: str) -> str:
        return self._fn(unsigned_xdr, {"networkPassphrase": network_passphrase})


def as_signer(signer: Union[Signer, SignFunction, Any]) -> Signer:
    """
    Accept either a Signer or a plain sign function.

    Raises:
        InvalidInputError: If the value is neither
    """
    if hasattr(signer, "sign_transaction"):
        return signer
    if callable(signer):
        return CallableSigner(signer)
    raise InvalidInputError(
        f"signer must implement sign_transaction or be callable, got {type(signer).__name__}"
    )
