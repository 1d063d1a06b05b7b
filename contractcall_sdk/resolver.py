"""
Overload resolution for contract function calls.

Given the candidate selectors sharing a function name and the caller's
positional arguments, picks the single selector the arguments fit.
Plain values are matched structurally against the declared types;
``Typed`` values must name the declared type exactly.
"""
import logging
from typing import Any, List, Sequence, Tuple

from .exceptions import AmbiguousSelector, NoMatchingSelector
from .models import FunctionSelector, Typed
from .types import canonical_type, type_match

logger = logging.getLogger(__name__)


def _argument_match(param_type: str, arg: Any) -> bool:
    if isinstance(arg, Typed):
        try:
            return canonical_type(arg.type) == canonical_type(param_type)
        except ValueError:
            return False
    return type_match(param_type, arg)


def selector_match(selector: FunctionSelector, args: Sequence[Any]) -> bool:
    """
    Check whether the arguments fit a single selector.

    Args:
        selector: Candidate selector
        args: Positional arguments, plain or ``Typed``

    Returns:
        True if arity matches and every position matches
    """
    if len(selector.types) != len(args):
        return False
    return all(_argument_match(param_type, arg) for param_type, arg in zip(selector.types, args))


def strip_typed_args(args: Sequence[Any]) -> List[Any]:
    """Replace ``Typed`` wrappers with their plain values."""
    return [arg.value if isinstance(arg, Typed) else arg for arg in args]


def find_selector(
    selectors: Sequence[FunctionSelector],
    args: Sequence[Any]
) -> Tuple[FunctionSelector, List[Any]]:
    """
    Resolve which overload the arguments select.

    Args:
        selectors: Candidate selectors, usually every overload of one name
        args: Positional arguments, plain or ``Typed``

    Returns:
        The matching selector and the arguments with ``Typed`` wrappers stripped

    Raises:
        NoMatchingSelector: If no candidate fits
        AmbiguousSelector: If more than one candidate fits
    """
    matching = [selector for selector in selectors if selector_match(selector, args)]

    if not matching:
        raise NoMatchingSelector(args, selectors)

    if len(matching) > 1:
        raise AmbiguousSelector(args, matching)

    selector = matching[0]
    logger.debug(f"Resolved {selector.signature} out of {len(selectors)} candidate(s)")
    return selector, strip_typed_args(args)
