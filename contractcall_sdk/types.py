"""
Structural matching between ABI types and native Python values.

ABI types are handled in their canonical string form (``uint256``,
``(address,bytes32)[]``) and parsed with the eth-abi grammar. Matching
follows the native-value mapping of eth-abi:

==============  ============================================
ABI type        Python value
==============  ============================================
uintN / intN    ``int`` within the range of the width
bool            ``bool``
address         ``0x`` hex string or 20-byte ``bytes``
string          ``str``
bytes           ``bytes`` / ``bytearray``
bytesN          ``bytes`` / ``bytearray`` of exactly N bytes
fixedMxN        ``int`` or ``decimal.Decimal`` with at most N decimals
T[] / T[k]      ``list`` / ``tuple`` whose items match T
(T1,...,Tn)     ``list`` / ``tuple`` of n matching items
==============  ============================================
"""
import decimal
from functools import lru_cache
from typing import Any, Union

from eth_abi.exceptions import ABITypeError, ParseError
from eth_abi.grammar import ABIType, BasicType, TupleType, normalize, parse
from eth_utils import is_address, to_checksum_address

TypeLike = Union[str, ABIType]

_SEQUENCE_TYPES = (list, tuple)
_BYTES_TYPES = (bytes, bytearray)


@lru_cache(maxsize=512)
def parse_type(type_str: str) -> ABIType:
    """
    Parse an ABI type string into its eth-abi grammar node.

    Aliases such as ``uint`` are normalized to ``uint256`` first.

    Raises:
        ValueError: If the string is not a valid ABI type
    """
    try:
        abi_type = parse(normalize(type_str))
        abi_type.validate()
    except (ParseError, ABITypeError) as e:
        raise ValueError(f"Invalid ABI type {type_str!r}: {e}") from e
    return abi_type


def canonical_type(type_str: str) -> str:
    """Return the canonical string form of an ABI type."""
    return parse_type(type_str).to_type_str()


def _as_type(abi_type: TypeLike) -> ABIType:
    if isinstance(abi_type, str):
        return parse_type(abi_type)
    return abi_type


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def type_match(abi_type: TypeLike, value: Any) -> bool:
    """
    Check whether a native value can be encoded as the given ABI type.

    Args:
        abi_type: ABI type string or parsed grammar node
        value: Native Python value

    Returns:
        True if the value fits the type, False otherwise
    """
    abi_type = _as_type(abi_type)

    if abi_type.is_array:
        if not isinstance(value, _SEQUENCE_TYPES):
            return False
        dimension = abi_type.arrlist[-1]
        if dimension and len(value) != dimension[0]:
            return False
        item_type = abi_type.item_type
        return all(type_match(item_type, item) for item in value)

    if isinstance(abi_type, TupleType):
        if not isinstance(value, _SEQUENCE_TYPES) or len(value) != len(abi_type.components):
            return False
        return all(type_match(component, item) for component, item in zip(abi_type.components, value))

    return _basic_type_match(abi_type, value)


def _basic_type_match(abi_type: BasicType, value: Any) -> bool:
    base, sub = abi_type.base, abi_type.sub

    if base == "uint":
        return _is_int(value) and 0 <= value < 2 ** sub
    if base == "int":
        return _is_int(value) and -(2 ** (sub - 1)) <= value < 2 ** (sub - 1)
    if base == "bool":
        return isinstance(value, bool)
    if base == "address":
        if isinstance(value, _BYTES_TYPES):
            return len(value) == 20
        return isinstance(value, str) and is_address(value)
    if base == "string":
        return isinstance(value, str)
    if base == "bytes":
        if not isinstance(value, _BYTES_TYPES):
            return False
        return sub is None or len(value) == sub
    if base in ("fixed", "ufixed"):
        return _fixed_match(base, sub, value)
    return False


def _fixed_match(base: str, sub: Any, value: Any) -> bool:
    if not (_is_int(value) or isinstance(value, decimal.Decimal)):
        return False
    bits, places = sub
    with decimal.localcontext() as ctx:
        ctx.prec = 999
        scaled = decimal.Decimal(value).scaleb(places)
        if not scaled.is_finite() or scaled != scaled.to_integral_value():
            return False
    if base == "ufixed":
        return 0 <= scaled < 2 ** bits
    return -(2 ** (bits - 1)) <= scaled < 2 ** (bits - 1)


def human_arg(value: Any, abi_type: TypeLike) -> Any:
    """
    Normalize a decoded value for presentation.

    Addresses become EIP-55 checksummed strings, arrays become lists and
    tuples are normalized component-wise. Other values are returned as-is.
    """
    abi_type = _as_type(abi_type)

    if abi_type.is_array:
        item_type = abi_type.item_type
        return [human_arg(item, item_type) for item in value]

    if isinstance(abi_type, TupleType):
        return tuple(human_arg(item, component) for component, item in zip(abi_type.components, value))

    if abi_type.base == "address":
        return to_checksum_address(value)

    return value
