"""
Transport module for the contractcall SDK.

Transports carry JSON-RPC requests to an Ethereum node. Any implementation
of ``RpcTransport`` can be configured as the process default or passed to
a single dispatcher call.
"""
from .base import JsonRpcTransport, RpcTransport, format_block, format_params, get_transport
from .exceptions import (
    TransportConnectionError, TransportError, TransportResponseError, TransportTimeoutError
)
from .http_transport import HttpTransport
from .stub_transport import StubTransport
from .web3_transport import Web3Transport

__all__ = [
    "RpcTransport",
    "JsonRpcTransport",
    "HttpTransport",
    "Web3Transport",
    "StubTransport",
    "get_transport",
    "format_params",
    "format_block",
    "TransportError",
    "TransportConnectionError",
    "TransportResponseError",
    "TransportTimeoutError",
]
