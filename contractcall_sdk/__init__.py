"""
contractcall SDK - overload-aware smart contract calls over JSON-RPC.
"""
from .abi import encode_call, help_message, human_signature, read_abi, selectors_from_abi
from .config import DispatchConfig
from .contract import Contract, ContractFunction
from .dispatcher import Dispatcher
from .exceptions import (
    AbiError, AmbiguousSelector, ContractCallError, DispatchError, HexDecodeError,
    MissingTransportError, NoDestinationAddress, NoMatchingSelector, SelectorError, UnknownResult
)
from .models import FunctionSelector, StateMutability, Typed, typed
from .resolver import find_selector, selector_match
from .transport import HttpTransport, RpcTransport, StubTransport, TransportError, Web3Transport
from .version import __version__

__all__ = [
    "Contract",
    "ContractFunction",
    "Dispatcher",
    "DispatchConfig",
    "FunctionSelector",
    "StateMutability",
    "Typed",
    "typed",
    "find_selector",
    "selector_match",
    "read_abi",
    "selectors_from_abi",
    "encode_call",
    "human_signature",
    "help_message",
    "RpcTransport",
    "HttpTransport",
    "Web3Transport",
    "StubTransport",
    "ContractCallError",
    "AbiError",
    "SelectorError",
    "NoMatchingSelector",
    "AmbiguousSelector",
    "DispatchError",
    "NoDestinationAddress",
    "UnknownResult",
    "HexDecodeError",
    "MissingTransportError",
    "TransportError",
    "__version__",
]
