"""
Transport that sends JSON-RPC requests through a web3 provider.

Useful when an application already holds a configured ``Web3`` instance
(custom provider, middleware-free IPC or HTTP connection) and wants the
dispatcher to reuse it.
"""
import logging
from typing import Any, Dict, List, Optional

import requests
from web3 import Web3
from web3.types import RPCEndpoint

from ._rate_limited_log import rate_limited_log
from .base import JsonRpcTransport, unwrap_response
from .exceptions import TransportConnectionError, TransportTimeoutError

logger = logging.getLogger(__name__)


class Web3Transport(JsonRpcTransport):
    """
    JSON-RPC through ``Web3.provider.make_request``.

    Per-call options are not supported by providers; they are ignored with a
    rate-limited warning. Set the timeout when building the transport.
    """

    def __init__(self, rpc_url: Optional[str] = None, w3: Optional[Web3] = None, timeout: float = 30):
        """
        Initialize the web3 transport.

        Args:
            rpc_url: Endpoint URL, used to build an HTTP provider when w3 is not given
            w3: Existing Web3 instance to reuse
            timeout: Request timeout in seconds for a provider built from rpc_url

        Raises:
            ValueError: If neither rpc_url nor w3 is provided
        """
        if w3 is None:
            if not rpc_url:
                raise ValueError("Either rpc_url or w3 must be provided")
            w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
        self.w3 = w3

    def request(self, method: str, params: List[Any], opts: Optional[Dict[str, Any]] = None) -> Any:
        if opts:
            rate_limited_log(
                f"Web3Transport ignores per-call transport options {sorted(opts)}; "
                "configure timeouts on the provider instead",
                logger_instance=logger
            )

        logger.debug(f"Provider request {method}")
        try:
            response = self.w3.provider.make_request(RPCEndpoint(method), params)
        except requests.Timeout as e:
            raise TransportTimeoutError(f"{method} timed out: {e}") from e
        except (requests.ConnectionError, ConnectionError) as e:
            raise TransportConnectionError(f"Provider failed to send {method}: {e}") from e

        return unwrap_response(method, response)
