"""
Transport layer for JSON-RPC communication with an Ethereum node.

This module defines the interface every transport implements, the helpers
shared by the implementations for formatting outbound parameters, and a
factory for building a transport from a URL.
"""
import logging
from collections.abc import Mapping
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from ._rate_limited_log import rate_limited_log
from .exceptions import TransportResponseError

logger = logging.getLogger(__name__)

BlockIdentifier = Union[str, int]

TRANSPORT_KINDS = ("http", "web3")


class RpcTransport(ABC):
    """
    Abstract base class for JSON-RPC transport implementations.

    Implementations return the ``result`` member of the JSON-RPC response
    unchanged (hex strings stay hex strings) and raise a
    ``TransportError`` subclass on failure. ``opts`` carries per-call
    transport options such as ``timeout``.
    """

    @abstractmethod
    def eth_call(self, params: Dict[str, Any], block: BlockIdentifier, opts: Optional[Dict[str, Any]] = None) -> str:
        """
        Execute ``eth_call``.

        Args:
            params: Call object (``to``, ``data``, ``from``, ...)
            block: Block number or tag such as ``"latest"``
            opts: Transport options

        Returns:
            Hex encoded return data
        """
        pass

    @abstractmethod
    def eth_send_transaction(self, params: Dict[str, Any], opts: Optional[Dict[str, Any]] = None) -> str:
        """Execute ``eth_sendTransaction`` and return the transaction hash."""
        pass

    @abstractmethod
    def eth_estimate_gas(self, params: Dict[str, Any], opts: Optional[Dict[str, Any]] = None) -> str:
        """Execute ``eth_estimateGas`` and return the hex gas quantity."""
        pass

    @abstractmethod
    def eth_get_logs(self, params: Dict[str, Any], opts: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute ``eth_getLogs`` with a filter object."""
        pass

    @abstractmethod
    def eth_gas_price(self, opts: Optional[Dict[str, Any]] = None) -> str:
        """Execute ``eth_gasPrice`` and return the hex price in wei."""
        pass

    @abstractmethod
    def eth_get_transaction_receipt(self, tx_hash: str, opts: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute ``eth_getTransactionReceipt``; None while the transaction is pending."""
        pass

    def close(self) -> None:
        """Close any open connections or resources."""
        pass


def format_value(value: Any) -> Any:
    """
    Convert ints to hex quantities and bytes to 0x-prefixed hex.

    Lists, tuples and dicts are formatted item by item; nested None values
    are kept since ``null`` is a wildcard inside ``topics``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return hex(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [format_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: format_value(item) for key, item in value.items()}
    return value


def format_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Format a transaction or filter object for the wire.

    Keys whose value is None are dropped.
    """
    return {key: format_value(value) for key, value in params.items() if value is not None}


def format_block(block: BlockIdentifier) -> Any:
    """Block numbers become hex quantities; tags pass through verbatim."""
    return format_value(block)


def get_transport(rpc_url: str, kind: str = "http", **kwargs: Any) -> RpcTransport:
    """
    Build a transport for the given endpoint.

    Args:
        rpc_url: JSON-RPC endpoint URL
        kind: ``"http"`` for the requests based transport, ``"web3"`` to go
            through a web3 provider
        **kwargs: Extra constructor arguments for the transport

    Returns:
        Transport implementation

    Raises:
        ValueError: If the kind is unknown
    """
    if kind == "http":
        from .http_transport import HttpTransport
        logger.info(f"Using HTTP transport for {rpc_url}")
        return HttpTransport(rpc_url, **kwargs)

    if kind == "web3":
        from .web3_transport import Web3Transport
        logger.info(f"Using web3 provider transport for {rpc_url}")
        return Web3Transport(rpc_url=rpc_url, **kwargs)

    raise ValueError(f"Unknown transport kind {kind!r}. Supported: {', '.join(TRANSPORT_KINDS)}")


def unwrap_response(method: str, response: Any) -> Any:
    """
    Extract the ``result`` member of a JSON-RPC response.

    Raises:
        TransportResponseError: If the response carries an error object or
            is not a JSON-RPC response at all
    """
    if not isinstance(response, Mapping):
        raise TransportResponseError(f"Unexpected JSON-RPC response to {method} (non-object)")

    error = response.get("error")
    if error:
        if isinstance(error, Mapping):
            code = error.get("code")
            message = error.get("message") or "unknown error"
            data = error.get("data")
        else:
            code, message, data = None, str(error), None
        rate_limited_log(f"{method} failed with RPC error {code}: {message}", logger_instance=logger)
        raise TransportResponseError(f"RPC error: {message}", code=code, data=data)

    if "result" not in response:
        raise TransportResponseError(f"Unexpected JSON-RPC response to {method} (missing result)")

    return response["result"]


class JsonRpcTransport(RpcTransport):
    """
    Transport that maps each capability onto a single ``request`` primitive.

    Subclasses only implement ``request``; parameter formatting is shared.
    """

    @abstractmethod
    def request(self, method: str, params: List[Any], opts: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one JSON-RPC request.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: Positional RPC parameters, already formatted
            opts: Transport options

        Returns:
            The ``result`` member of the response
        """
        pass

    def eth_call(self, params, block, opts=None):
        return self.request("eth_call", [format_params(params), format_block(block)], opts)

    def eth_send_transaction(self, params, opts=None):
        return self.request("eth_sendTransaction", [format_params(params)], opts)

    def eth_estimate_gas(self, params, opts=None):
        return self.request("eth_estimateGas", [format_params(params)], opts)

    def eth_get_logs(self, params, opts=None):
        return self.request("eth_getLogs", [format_params(params)], opts)

    def eth_gas_price(self, opts=None):
        return self.request("eth_gasPrice", [], opts)

    def eth_get_transaction_receipt(self, tx_hash, opts=None):
        return self.request("eth_getTransactionReceipt", [tx_hash], opts)
