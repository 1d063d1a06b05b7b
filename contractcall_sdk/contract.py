"""
Contract binding.

A ``Contract`` wraps an ABI and an optional default address. Invoking one of
its functions resolves the overload, encodes the call data and returns
CallParams ready for ``Dispatcher.call`` or ``Dispatcher.send``.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .abi import (
    AbiSource, encode_call, help_message, human_signature, maybe_read_contract_binary,
    read_abi, selectors_from_abi
)
from .models import FunctionSelector
from .resolver import find_selector

logger = logging.getLogger(__name__)


class ContractFunction:
    """All overloads of one contract function."""

    def __init__(self, name: str, selectors: List[FunctionSelector], address: Optional[str] = None):
        self.name = name
        self.selectors = selectors
        self.address = address

    def __call__(self, *args: Any) -> Dict[str, Any]:
        """
        Build CallParams for this function.

        Args:
            *args: Positional arguments; wrap a value in ``Typed`` to pick
                an overload explicitly

        Returns:
            Dict with ``data``, ``selector`` and, when the contract has a
            default address, ``to``

        Raises:
            NoMatchingSelector: If no overload fits the arguments
            AmbiguousSelector: If several overloads fit the arguments
        """
        selector, plain_args = find_selector(self.selectors, args)
        params: Dict[str, Any] = {
            "data": encode_call(selector, plain_args),
            "selector": selector,
        }
        if self.address is not None:
            params["to"] = self.address
        return params

    @property
    def signature(self) -> str:
        """Human readable signature of every overload."""
        return human_signature(self.selectors)

    def help(self) -> str:
        """How this function is meant to be invoked."""
        return help_message(self.selectors)

    def __repr__(self) -> str:
        return f"<ContractFunction {self.signature}>"


class ContractFunctions:
    """Attribute access to the functions of a contract."""

    def __init__(self, contract: "Contract"):
        self._contract = contract

    def __getattr__(self, name: str) -> ContractFunction:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._contract.function(name)

    def __iter__(self):
        return iter(self._contract.selectors)

    def __dir__(self):
        return list(self._contract.selectors)


class Contract:
    """
    Binding between a contract ABI and call parameters.

    Example:
        >>> token = Contract(abi="erc20", address="0xA0b8...eB48")
        >>> params = token.functions.balanceOf("0x1234...7890")
        >>> dispatcher.call(params)
        [100000000]
    """

    def __init__(
        self,
        abi: Optional[AbiSource] = None,
        abi_file: Optional[Union[str, Path]] = None,
        address: Optional[str] = None
    ):
        """
        Initialize the contract binding.

        Args:
            abi: ABI source accepted by ``read_abi``
            abi_file: Path to an ABI or compiler artifact file
            address: Default destination address added to every CallParams

        Raises:
            AbiError: If the ABI cannot be read
        """
        self.abi = read_abi(abi=abi, abi_file=abi_file)
        self.bytecode = maybe_read_contract_binary(abi=abi, abi_file=abi_file)
        self.address = address
        self.selectors = selectors_from_abi(self.abi)
        self.functions = ContractFunctions(self)
        logger.debug(f"Bound contract with {len(self.selectors)} function name(s) at {address}")

    def function(self, name: str) -> ContractFunction:
        """
        Look up a function by name.

        Raises:
            AttributeError: If the ABI has no function with that name
        """
        try:
            selectors = self.selectors[name]
        except KeyError:
            raise AttributeError(f"No such function: {name}")
        return ContractFunction(name, selectors, self.address)

    def at(self, address: str) -> "Contract":
        """Return a copy of this binding with a different default address."""
        bound = Contract.__new__(Contract)
        bound.abi = self.abi
        bound.bytecode = self.bytecode
        bound.address = address
        bound.selectors = self.selectors
        bound.functions = ContractFunctions(bound)
        return bound
