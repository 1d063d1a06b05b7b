"""
Call dispatch for resolved contract invocations.

Takes CallParams produced by the contract binding (encoded ``data`` plus
the resolved ``selector``), merges caller overrides, sends the request
through the selected transport and interprets the node's answer.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from eth_utils import decode_hex

from .abi import decode_returns
from .config import DispatchConfig
from .exceptions import HexDecodeError, MissingTransportError, NoDestinationAddress, UnknownResult
from .models import FunctionSelector
from .transport._rate_limited_log import rate_limited_log
from .transport.base import BlockIdentifier, RpcTransport
from .types import human_arg

logger = logging.getLogger(__name__)

# Keys that only exist for the SDK and never reach the node
INTERNAL_PARAMS = ("selector",)

# Keys accepted in overrides as dispatch options rather than transaction fields
OPTION_KEYS = ("block", "transport", "transport_opts")

EMPTY_RESULT = "0x"


class Dispatcher:
    """
    Executes contract calls and transactions over a transport.

    Each verb chooses its transport by checking the per-call ``transport``
    option first and falling back to the configured default. The
    dispatcher holds no mutable state and may be shared between threads.
    """

    def __init__(self, config: Optional[DispatchConfig] = None):
        """
        Initialize the dispatcher.

        Args:
            config: Process-wide defaults; an empty config means every call
                must pass a transport explicitly
        """
        self.config = config or DispatchConfig()

    def call(
        self,
        params: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        block: Optional[BlockIdentifier] = None,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> List[Any]:
        """
        Make an ``eth_call`` and decode the result with the params' selector.

        Args:
            params: CallParams holding ``data`` and ``selector``
            overrides: Transaction fields taking precedence over params
                (``to``, ``from``, ``value``, ``gas``, ...)
            block: Block number or tag; defaults to the configured default block
            transport: Transport to use instead of the configured default
            transport_opts: Options for the transport (timeout, url, ...)

        Returns:
            Decoded return values, in declaration order

        Raises:
            NoDestinationAddress: If the merged params have no ``to``
            UnknownResult: If the node answered ``0x``
            HexDecodeError: If the answer is not valid hex
            TransportError: Propagated unchanged from the transport
        """
        if "data" not in params or "selector" not in params:
            raise ValueError("call params must contain 'data' and 'selector'")
        selector: FunctionSelector = params["selector"]

        merged, options = self._merge(params, overrides)
        block = _first_given(block, options.get("block"), self.config.default_block)

        resp = self.eth_call(
            merged,
            block=block,
            transport=_first_given(transport, options.get("transport")),
            transport_opts=_first_given(transport_opts, options.get("transport_opts"))
        )
        data = self._check_result(resp, selector.signature)

        returns = decode_returns(selector, data)
        return [human_arg(value, type_str) for value, type_str in zip(returns, selector.returns)]

    def send(
        self,
        params: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Send a transaction with ``eth_sendTransaction``.

        Args:
            params: CallParams holding ``data``
            overrides: Transaction fields taking precedence over params
            transport: Transport to use instead of the configured default
            transport_opts: Options for the transport

        Returns:
            Transaction hash as returned by the node

        Raises:
            NoDestinationAddress: If the merged params have no ``to``
            UnknownResult: If the node answered ``0x``
            TransportError: Propagated unchanged from the transport
        """
        if "data" not in params:
            raise ValueError("send params must contain 'data'")

        merged, options = self._merge(params, overrides)
        if "block" in options:
            logger.debug("Ignoring block option for eth_sendTransaction")

        tx_hash = self.eth_send_transaction(
            merged,
            transport=_first_given(transport, options.get("transport")),
            transport_opts=_first_given(transport_opts, options.get("transport_opts"))
        )
        if tx_hash == EMPTY_RESULT:
            rate_limited_log("eth_sendTransaction returned an empty result", logger_instance=logger)
            raise UnknownResult("Node returned an empty result for eth_sendTransaction")
        return tx_hash

    def eth_call(
        self,
        params: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        block: Optional[BlockIdentifier] = None,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> str:
        """Raw ``eth_call``; returns the hex result without interpretation."""
        merged, options = self._merge(params, overrides)
        block = _first_given(block, options.get("block"), self.config.default_block)
        _require_destination(merged)

        rpc, opts = self._rpc_info(
            _first_given(transport, options.get("transport")),
            _first_given(transport_opts, options.get("transport_opts"))
        )
        logger.debug(f"eth_call to {merged['to']} at block {block}")
        return rpc.eth_call(merged, block, opts)

    def eth_send_transaction(
        self,
        params: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> str:
        """Raw ``eth_sendTransaction``; returns the node's result unchanged."""
        merged, options = self._merge(params, overrides)
        _require_destination(merged)

        rpc, opts = self._rpc_info(
            _first_given(transport, options.get("transport")),
            _first_given(transport_opts, options.get("transport_opts"))
        )
        logger.debug(f"eth_sendTransaction to {merged['to']}")
        return rpc.eth_send_transaction(merged, opts)

    def eth_estimate_gas(
        self,
        params: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> str:
        """Raw ``eth_estimateGas``."""
        merged, options = self._merge(params, overrides)
        rpc, opts = self._rpc_info(
            _first_given(transport, options.get("transport")),
            _first_given(transport_opts, options.get("transport_opts"))
        )
        return rpc.eth_estimate_gas(merged, opts)

    def eth_get_logs(
        self,
        params: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Raw ``eth_getLogs`` with a filter object."""
        merged, options = self._merge(params, overrides)
        rpc, opts = self._rpc_info(
            _first_given(transport, options.get("transport")),
            _first_given(transport_opts, options.get("transport_opts"))
        )
        return rpc.eth_get_logs(merged, opts)

    def eth_gas_price(
        self,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> str:
        """Raw ``eth_gasPrice``."""
        rpc, opts = self._rpc_info(transport, transport_opts)
        return rpc.eth_gas_price(opts)

    def eth_get_transaction_receipt(
        self,
        tx_hash: str,
        transport: Optional[RpcTransport] = None,
        transport_opts: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """Raw ``eth_getTransactionReceipt``; None while pending."""
        if not isinstance(tx_hash, str):
            raise TypeError(f"tx_hash must be a hex string, got {type(tx_hash).__name__}")
        rpc, opts = self._rpc_info(transport, transport_opts)
        return rpc.eth_get_transaction_receipt(tx_hash, opts)

    def _merge(
        self,
        params: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]]
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Merge overrides into params.

        Returns:
            The outbound params with internal keys stripped, and any
            dispatch options found in the overrides
        """
        merged = dict(params)
        options: Dict[str, Any] = {}
        for key, value in (overrides or {}).items():
            if key in OPTION_KEYS:
                options[key] = value
            else:
                merged[key] = value

        for key in INTERNAL_PARAMS + OPTION_KEYS:
            merged.pop(key, None)
        return merged, options

    def _rpc_info(
        self,
        transport: Optional[RpcTransport],
        transport_opts: Optional[Dict[str, Any]]
    ) -> Tuple[RpcTransport, Dict[str, Any]]:
        """Pick the transport and its options: per-call first, then the default."""
        if transport is not None:
            return transport, dict(transport_opts or {})

        if self.config.transport is None:
            raise MissingTransportError(
                "No transport given and no default transport configured"
            )
        opts = dict(self.config.transport_opts)
        opts.update(transport_opts or {})
        return self.config.transport, opts

    def _check_result(self, resp: Any, signature: str) -> bytes:
        if resp == EMPTY_RESULT:
            rate_limited_log(f"eth_call to {signature} returned an empty result", logger_instance=logger)
            raise UnknownResult(f"Node returned an empty result for {signature}")
        try:
            return decode_hex(resp)
        except (ValueError, TypeError) as e:
            raise HexDecodeError(f"Result of {signature} is not valid hex: {resp!r}") from e


def _first_given(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _require_destination(params: Mapping[str, Any]) -> None:
    if params.get("to") is None:
        raise NoDestinationAddress("Params have no destination address ('to')")
