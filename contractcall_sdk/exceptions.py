"""
Exceptions for the contractcall SDK.

Every failure of selector resolution or call dispatch is raised as one of
these classes. Each class carries a stable ``reason`` string so callers that
prefer branching on a value over ``except`` clauses can do so.
"""
from typing import Any, Optional, Sequence


class ContractCallError(Exception):
    """Base exception for all contractcall SDK errors."""
    reason = "error"


class AbiError(ContractCallError):
    """Raised when a contract interface description cannot be read."""
    reason = "bad_argument"


class SelectorError(ContractCallError):
    """
    Base class for overload resolution failures.

    Attributes:
        arguments: The arguments the caller attempted to match
        selectors: The selectors relevant to the failure
    """
    headline = "Selector resolution failed"

    def __init__(self, arguments: Sequence[Any], selectors: Sequence[Any], message: Optional[str] = None):
        self.arguments = list(arguments)
        self.selectors = list(selectors)
        super().__init__(message or self._render())

    def _render(self) -> str:
        # abi imports this module
        from .abi import human_signature

        signatures = "\n".join(human_signature(selector) for selector in self.selectors)
        return (
            f"{self.headline}\n\n"
            f"## Arguments\n{self.arguments!r}\n\n"
            f"## Conflicting function signatures\n{signatures}"
        )


class NoMatchingSelector(SelectorError):
    """Raised when no candidate selector fits the supplied arguments."""
    reason = "no_matching_selector"
    headline = "No function selector matches current arguments!"


class AmbiguousSelector(SelectorError):
    """Raised when more than one candidate selector fits the supplied arguments."""
    reason = "ambiguous_selector"
    headline = "Ambiguous parameters"


class DispatchError(ContractCallError):
    """Base class for errors raised while dispatching a call or transaction."""
    reason = "dispatch_error"


class NoDestinationAddress(DispatchError):
    """Raised before any RPC when the merged params have no ``to`` address."""
    reason = "no_to_address"


class UnknownResult(DispatchError):
    """Raised when the node answered with the empty ``0x`` payload."""
    reason = "unknown"


class HexDecodeError(DispatchError):
    """Raised when a result from the node is not valid hex."""
    reason = "hex_decode_error"


class MissingTransportError(DispatchError):
    """Raised when neither a per-call nor a default transport is available."""
    reason = "no_transport"
