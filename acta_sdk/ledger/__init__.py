"""
Direct ledger access for the ACTA SDK.

Signed transactions normally go back through the ACTA API. Passing a ledger
transport to a vault or credential operation submits them straight to Soroban
RPC instead and polls the ledger until the transaction settles.
"""
from .transport import LedgerTransport, LedgerSubmission
from .rpc_transport import SorobanRpcTransport
from .stub_transport import StubTransport
from ._rate_limited_log import rate_limited_log

__all__ = [
    'LedgerTransport',
    'LedgerSubmission',
    'SorobanRpcTransport',
    'StubTransport',
    'rate_limited_log',
]
