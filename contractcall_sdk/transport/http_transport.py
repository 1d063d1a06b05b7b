"""
HTTP transport for JSON-RPC endpoints.

Posts JSON-RPC 2.0 requests with a requests session whose adapter retries
transient server errors. Transaction submission goes through a second
session that never retries, since a resubmitted transaction is a new one.
"""
import itertools
import logging
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .base import JsonRpcTransport, unwrap_response
from .exceptions import TransportConnectionError, TransportResponseError, TransportTimeoutError

logger = logging.getLogger(__name__)

# Not safe to resend after the node may already have accepted the request
NON_IDEMPOTENT_METHODS = ("eth_sendTransaction", "eth_sendRawTransaction")


class HttpTransport(JsonRpcTransport):
    """
    JSON-RPC over HTTP(S).

    Supported per-call options:
        timeout: Request timeout in seconds (overrides the constructor value)
        url: Endpoint URL (overrides the constructor value)
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30,
        retry_count: int = 3,
        headers: Optional[Dict[str, str]] = None
    ):
        """
        Initialize the HTTP transport.

        Args:
            rpc_url: JSON-RPC endpoint URL
            timeout: Default request timeout in seconds
            retry_count: Number of retries for 5xx responses and connection errors
            headers: Extra HTTP headers sent with every request

        Raises:
            ValueError: If rpc_url is empty
        """
        url = (rpc_url or "").strip()
        if not url:
            raise ValueError("rpc_url must be a non-empty string")

        self.rpc_url = url
        self.timeout = timeout
        self._ids = itertools.count(1)

        self.session = self._new_session(headers)
        self.send_session = self._new_session(headers)

        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False,
            connect=retry_count,
            read=retry_count,
            other=retry_count
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

        # read=False re-raises read timeouts as-is instead of wrapping them
        no_retries = Retry(total=0, connect=0, read=False, status=0, other=0, raise_on_status=False)
        self.send_session.mount("http://", HTTPAdapter(max_retries=no_retries))
        self.send_session.mount("https://", HTTPAdapter(max_retries=no_retries))

    @staticmethod
    def _new_session(headers: Optional[Dict[str, str]]) -> requests.Session:
        session = requests.Session()
        session.headers.update({"Content-Type": "application/json"})
        if headers:
            session.headers.update(dict(headers))
        return session

    def request(self, method: str, params: List[Any], opts: Optional[Dict[str, Any]] = None) -> Any:
        opts = opts or {}
        url = opts.get("url", self.rpc_url)
        timeout = opts.get("timeout", self.timeout)
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        logger.debug(f"POST {method} to {url}")
        try:
            session = self.send_session if method in NON_IDEMPOTENT_METHODS else self.session
            response = session.post(url, json=payload, timeout=timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise TransportTimeoutError(f"{method} timed out after {timeout}s: {e}") from e
        except requests.ConnectionError as e:
            raise TransportConnectionError(f"Cannot reach RPC endpoint {url}: {e}") from e
        except requests.HTTPError as e:
            raise TransportResponseError(
                f"RPC endpoint returned HTTP {e.response.status_code} for {method}",
                code=e.response.status_code
            ) from e
        except requests.RequestException as e:
            raise TransportConnectionError(f"{method} request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise TransportResponseError(f"Invalid JSON response to {method}: {e}") from e

        return unwrap_response(method, data)

    def close(self) -> None:
        """Close the underlying HTTP sessions."""
        self.session.close()
        self.send_session.close()
