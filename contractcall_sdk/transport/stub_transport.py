"""
Stub-based transport implementation.

Answers every capability from an in-memory table of canned responses and
records each invocation, so dispatch logic can be exercised without a node.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from .base import RpcTransport

logger = logging.getLogger(__name__)

DEFAULT_RESPONSES: Dict[str, Any] = {
    "eth_call": "0x",
    "eth_sendTransaction": "0x" + "0" * 64,
    "eth_estimateGas": "0x5208",
    "eth_getLogs": [],
    "eth_gasPrice": "0x3b9aca00",
    "eth_getTransactionReceipt": None,
}


class StubTransport(RpcTransport):
    """
    A recording stub for the RPC transport.

    Responses are looked up by JSON-RPC method name. A response that is an
    exception instance is raised instead of returned, which lets callers
    simulate transport failures.

    Attributes:
        calls: Every invocation as ``(method, args)``, in order
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses: Dict[str, Any] = dict(DEFAULT_RESPONSES)
        if responses:
            self.responses.update(responses)
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.closed = False

    def _respond(self, method: str, *args: Any) -> Any:
        self.calls.append((method, args))
        logger.debug(f"StubTransport.{method} called with {args}")
        response = self.responses.get(method)
        if isinstance(response, BaseException):
            raise response
        return response

    def calls_to(self, method: str) -> List[Tuple[Any, ...]]:
        """Arguments of every recorded call to one method."""
        return [args for name, args in self.calls if name == method]

    def eth_call(self, params, block, opts=None):
        return self._respond("eth_call", params, block, opts)

    def eth_send_transaction(self, params, opts=None):
        return self._respond("eth_sendTransaction", params, opts)

    def eth_estimate_gas(self, params, opts=None):
        return self._respond("eth_estimateGas", params, opts)

    def eth_get_logs(self, params, opts=None):
        return self._respond("eth_getLogs", params, opts)

    def eth_gas_price(self, opts=None):
        return self._respond("eth_gasPrice", opts)

    def eth_get_transaction_receipt(self, tx_hash, opts=None):
        return self._respond("eth_getTransactionReceipt", tx_hash, opts)

    def close(self) -> None:
        self.closed = True
