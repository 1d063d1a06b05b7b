"""
Exceptions for the transport module.
"""
from typing import Any, Optional


class TransportError(Exception):
    """Base exception for transport-related errors."""
    pass


class TransportConnectionError(TransportError):
    """Raised when the connection to the RPC endpoint fails."""
    pass


class TransportTimeoutError(TransportError):
    """Raised when an RPC request times out."""
    pass


class TransportResponseError(TransportError):
    """Raised when the node returns a JSON-RPC error or an unreadable response."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        self.code = code
        self.data = data
        super().__init__(message)
