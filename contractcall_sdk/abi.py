"""
Contract interface descriptions.

Loads ABI JSON from the supported sources, builds FunctionSelector groups
from it, and bridges to eth-abi for call-data encoding and return decoding.
Human readable signatures and help text used by error messages and the
contract binding also live here.
"""
import json
import logging
from collections import OrderedDict
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from eth_abi import decode, encode

from .exceptions import AbiError
from .models import FunctionSelector, StateMutability

logger = logging.getLogger(__name__)

AbiSource = Union[List[Dict[str, Any]], Dict[str, Any], str]


def _bundled_abi_names() -> List[str]:
    return sorted(
        entry.name[:-len(".json")]
        for entry in resources.files("contractcall_sdk").joinpath("abis").iterdir()
        if entry.name.endswith(".json")
    )


def _load_json(text: str, origin: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise AbiError(f"Invalid ABI JSON in {origin}: {e}") from e


def _resolve_source(abi: Optional[AbiSource], abi_file: Optional[Union[str, Path]]) -> Any:
    """Turn exactly one of ``abi``/``abi_file`` into decoded JSON."""
    if (abi is None) == (abi_file is None):
        raise AbiError("Exactly one of abi or abi_file must be provided")

    if abi_file is not None:
        path = Path(abi_file)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise AbiError(f"Cannot read ABI file {path}: {e}") from e
        return _load_json(text, str(path))

    if isinstance(abi, str):
        stripped = abi.strip()
        if stripped.startswith(("[", "{")):
            return _load_json(stripped, "abi string")
        if stripped in _bundled_abi_names():
            text = resources.files("contractcall_sdk").joinpath("abis", f"{stripped}.json").read_text(encoding="utf-8")
            return _load_json(text, f"bundled ABI {stripped!r}")
        raise AbiError(
            f"Unknown bundled ABI {stripped!r}. Available: {', '.join(_bundled_abi_names())}"
        )

    return abi


def read_abi(abi: Optional[AbiSource] = None, abi_file: Optional[Union[str, Path]] = None) -> List[Dict[str, Any]]:
    """
    Read a contract ABI.

    Args:
        abi: A list of ABI entries, a dict holding an ``"abi"`` key (compiler
            artifact), a JSON string of either, or the name of a bundled ABI
        abi_file: Path to a JSON file holding any of the above

    Returns:
        The ABI as a list of entry dicts

    Raises:
        AbiError: If both or neither sources are given, or the data is not an ABI
    """
    data = _resolve_source(abi, abi_file)

    if isinstance(data, dict) and "abi" in data:
        data = data["abi"]

    if not isinstance(data, list):
        raise AbiError(f"ABI must be a list of entries, got {type(data).__name__}")

    logger.debug(f"Loaded ABI with {len(data)} entries")
    return data


def maybe_read_contract_binary(
    abi: Optional[AbiSource] = None,
    abi_file: Optional[Union[str, Path]] = None
) -> Optional[str]:
    """
    Read deployment bytecode from a compiler artifact, if it carries one.

    Understands solc style ``{"bin": "..."}`` and Foundry style
    ``{"bytecode": {"object": "..."}}`` artifacts.

    Returns:
        Hex bytecode string, or None for bare ABI lists
    """
    data = _resolve_source(abi, abi_file)
    if not isinstance(data, dict):
        return None

    binary = data.get("bin")
    if isinstance(binary, str) and binary:
        return binary

    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object")
    if isinstance(bytecode, str) and bytecode:
        return bytecode

    return None


def selectors_from_abi(entries: Iterable[Dict[str, Any]]) -> "OrderedDict[str, List[FunctionSelector]]":
    """
    Group the function entries of an ABI by name.

    Overloads keep the order in which they appear in the ABI.
    """
    grouped: "OrderedDict[str, List[FunctionSelector]]" = OrderedDict()
    for entry in entries:
        if entry.get("type", "function") != "function":
            continue
        selector = FunctionSelector.from_abi(entry)
        grouped.setdefault(selector.function, []).append(selector)
    return grouped


def encode_call(selector: FunctionSelector, args: Sequence[Any]) -> str:
    """
    ABI-encode a function call.

    Args:
        selector: Resolved function selector
        args: Plain argument values (no Typed wrappers)

    Returns:
        0x-prefixed hex encoded calldata
    """
    encoded_args = encode(list(selector.types), list(args)) if selector.types else b""
    return "0x" + selector.method_id.hex() + encoded_args.hex()


def decode_returns(selector: FunctionSelector, data: bytes) -> List[Any]:
    """ABI-decode return data into positional values."""
    if not selector.returns:
        return []
    return list(decode(list(selector.returns), data))


def human_signature(selector: Union[FunctionSelector, Sequence[FunctionSelector]]) -> str:
    """
    Render a selector the way it would appear in Solidity source.

    ``transfer(address to, uint256 amount)``; a list of selectors is
    joined with `` OR ``.
    """
    if not isinstance(selector, FunctionSelector):
        return " OR ".join(human_signature(item) for item in selector)

    if len(selector.input_names) == len(selector.types):
        args = ", ".join(
            f"{type_str} {name}".strip()
            for type_str, name in zip(selector.types, selector.input_names)
        )
    else:
        args = ", ".join(selector.types)

    return f"{selector.function}({args})"


_MUTABILITY_HELP = {
    StateMutability.PURE: (
        "This function should only be called for result and never in a transaction on its own. "
        "(Use Dispatcher.call)"
    ),
    StateMutability.VIEW: (
        "This function should only be called for result and never in a transaction on its own. "
        "(Use Dispatcher.call)"
    ),
    StateMutability.NON_PAYABLE: (
        "This function can be used for a transaction or additionally called for results "
        "(Use Dispatcher.send).\nNo amount of Ether can be sent with this function."
    ),
    StateMutability.PAYABLE: (
        "This function can be used for a transaction or additionally called for results "
        "(Use Dispatcher.send).\nIt also supports receiving ether from the transaction origin."
    ),
}


def help_message(selectors: Sequence[FunctionSelector]) -> str:
    """Describe how the overloads of a function are meant to be invoked."""
    mutabilities = list(OrderedDict.fromkeys(selector.state_mutability for selector in selectors))

    if len(mutabilities) == 1:
        mutability = mutabilities[0]
        return f"{_MUTABILITY_HELP[mutability]}\n\nState mutability: {mutability.value}"

    return (
        "This function has multiple state mutabilities based on the overload that you use.\n\n"
        f"State mutabilities: {','.join(m.value for m in mutabilities)}"
    )
