"""
Scalar value converters.

Every value in a confindent tree is stored as text. Typed access goes through
a small table mapping a target type to a converter function, so supporting a
new type means registering one function rather than touching the tree model.
"""

import logging
from typing import Any, Callable, Dict, List

from ..exceptions import ConversionError


logger = logging.getLogger(__name__)

Converter = Callable[[str], Any]

TRUE_WORDS = frozenset({'true', 'yes', 'on', '1'})
FALSE_WORDS = frozenset({'false', 'no', 'off', '0'})


def to_str(text: str) -> str:
    return text


def to_int(text: str) -> int:
    return int(text)


def to_float(text: str) -> float:
    return float(text)


def to_bool(text: str) -> bool:
    """Accept the usual configuration spellings of true and false, case-insensitively."""
    word = text.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ValueError(f"expected one of {sorted(TRUE_WORDS | FALSE_WORDS)}")


_CONVERTERS: Dict[type, Converter] = {
    str: to_str,
    int: to_int,
    float: to_float,
    bool: to_bool,
}


def register_converter(target: type, converter: Converter) -> None:
    """
    Register (or replace) the converter used for a target type.

    Args:
        target: Type requested through ``value_as``
        converter: Function taking the raw text and returning the converted value.
            It should raise ValueError or TypeError on bad input.
    """
    if not callable(converter):
        raise TypeError(f"Converter for {target!r} must be callable")
    _CONVERTERS[target] = converter
    logger.debug(f"Registered converter for {getattr(target, '__name__', target)}")


def unregister_converter(target: type) -> None:
    """Remove a converter; built-in targets cannot be removed."""
    if target in (str, int, float, bool):
        raise ValueError(f"Cannot unregister built-in converter for {target.__name__}")
    _CONVERTERS.pop(target, None)


def get_converter(target: type) -> Converter:
    try:
        return _CONVERTERS[target]
    except KeyError:
        raise TypeError(f"No converter registered for {target!r}") from None


def convert(text: str, target: type) -> Any:
    """
    Convert raw text to the target type.

    Args:
        text: Raw scalar text
        target: Requested type

    Returns:
        The converted value

    Raises:
        ConversionError: If the text is not a valid value of the target type
        TypeError: If no converter is registered for the target type
    """
    converter = get_converter(target)
    try:
        return converter(text)
    except ConversionError:
        raise
    except (ValueError, TypeError) as e:
        raise ConversionError(text, getattr(target, '__name__', str(target)), str(e)) from e


def convert_list(text: str, item_type: type = str, separator: str = ",") -> List[Any]:
    """
    Split text on a separator and convert each trimmed item.

    An empty or all-whitespace value yields an empty list.
    """
    if not separator:
        raise ValueError("Separator cannot be empty")
    if not text.strip():
        return []
    return [convert(item.strip(), item_type) for item in text.split(separator)]
