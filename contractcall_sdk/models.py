"""
Data models for the contractcall SDK.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from eth_utils import function_signature_to_4byte_selector
from eth_utils.abi import collapse_if_tuple
from pydantic import BaseModel, ConfigDict


class StateMutability(str, Enum):
    """State mutability of a contract function, as named in ABI JSON."""
    PURE = "pure"
    VIEW = "view"
    NON_PAYABLE = "nonpayable"
    PAYABLE = "payable"

    @classmethod
    def from_abi(cls, entry: Dict[str, Any]) -> "StateMutability":
        """
        Read the mutability of an ABI entry.

        Older compilers emit ``constant``/``payable`` flags instead of
        ``stateMutability``; both forms are understood.
        """
        if "stateMutability" in entry:
            return cls(entry["stateMutability"])
        if entry.get("constant"):
            return cls.VIEW
        if entry.get("payable"):
            return cls.PAYABLE
        return cls.NON_PAYABLE


class FunctionSelector(BaseModel):
    """Immutable descriptor of one contract function signature"""
    model_config = ConfigDict(frozen=True)

    function: str
    types: Tuple[str, ...] = ()
    input_names: Tuple[str, ...] = ()
    returns: Tuple[str, ...] = ()
    return_names: Tuple[str, ...] = ()
    state_mutability: StateMutability = StateMutability.NON_PAYABLE

    @classmethod
    def from_abi(cls, entry: Dict[str, Any]) -> "FunctionSelector":
        """
        Build a selector from a ``type == "function"`` ABI entry.

        Args:
            entry: ABI JSON entry

        Returns:
            FunctionSelector with tuple components collapsed to ``(t1,t2)`` form
        """
        inputs = entry.get("inputs", [])
        outputs = entry.get("outputs", [])
        return cls(
            function=entry["name"],
            types=tuple(collapse_if_tuple(param) for param in inputs),
            input_names=tuple(param.get("name", "") for param in inputs),
            returns=tuple(collapse_if_tuple(param) for param in outputs),
            return_names=tuple(param.get("name", "") for param in outputs),
            state_mutability=StateMutability.from_abi(entry),
        )

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. ``transfer(address,uint256)``."""
        return f"{self.function}({','.join(self.types)})"

    @property
    def method_id(self) -> bytes:
        """First four bytes of the keccak hash of the signature."""
        return function_signature_to_4byte_selector(self.signature)


@dataclass(frozen=True)
class Typed:
    """
    A call argument paired with an explicit ABI type.

    Used to force an overload match when the value alone fits several
    candidates, e.g. ``Typed("uint8", 5)``.
    """
    type: str
    value: Any


def typed(type_str: str, value: Any) -> Typed:
    """Shorthand for ``Typed(type_str, value)``."""
    return Typed(type_str, value)
