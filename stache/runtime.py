"""
Runtime primitives used by generated template code.

All functions here are pure: compiled templates close over them and may be
invoked concurrently with independent contexts.
"""

from __future__ import annotations

import builtins
import operator
from collections.abc import Mapping, Sequence
from typing import Any, Dict

from .jscompat import SEQUENCE_MEMBERS, STRING_MEMBERS

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)

_HTML_ESCAPES = (
    ("&", "&amp;"),  # must go first
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

# JavaScript literal names accepted inside complex expressions
_JS_LITERALS: Dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}

_ORDERING = {
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


def stringify(value: Any) -> str:
    """
    String form of a value; ``None`` becomes an empty string.

    Integral floats lose their fraction (``4 / 2`` renders as ``2``).
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return value if isinstance(value, str) else str(value)


def escape_html(value: Any) -> str:
    """
    Escapes the five HTML-sensitive characters ``& < > " '``.

    ``None`` (missing data) becomes an empty string.
    """
    text = stringify(value)
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def is_composite(value: Any) -> bool:
    """True for values that can hold nested values (mappings, sequences, objects)."""
    return value is not None and not isinstance(value, _SCALARS)


def is_array_like(value: Any) -> bool:
    """True for sequences that ``each`` may iterate (strings excluded)."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _get_key(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    if isinstance(value, Sequence):
        if key.isdecimal() and int(key) < len(value):
            return value[int(key)]
        return None
    return getattr(value, key, None)


def deep_get(obj: Any, path: str) -> Any:
    """
    Safe nested lookup of a dotted path such as ``user.address.city``.

    Walks mappings by key, sequences by numeric index and other objects by
    attribute. Returns ``None`` as soon as an intermediate value is missing
    or is not composite; never raises on missing data.
    """
    if not is_composite(obj):
        return None
    if not path:
        return obj

    current = obj
    for key in path.split("."):
        if not is_composite(current):
            return None
        current = _get_key(current, key)
    return current


def member(value: Any, name: str) -> Any:
    """
    Attribute access inside complex expressions.

    Mappings only expose their keys; a missing key yields ``None``. Strings
    and sequences get the JavaScript-style members from :mod:`stache.jscompat`.
    Everything else is a plain host attribute, so an unknown member raises
    ``AttributeError``.
    """
    if value is None:
        raise TypeError(f"Cannot read property '{name}' of None")

    if isinstance(value, Mapping):
        return value.get(name)

    if isinstance(value, str):
        factory = STRING_MEMBERS.get(name)
        if factory is not None:
            return factory(value)
    elif is_array_like(value):
        factory = SEQUENCE_MEMBERS.get(name)
        if factory is not None:
            return factory(value)

    return getattr(value, name)


def resolve_name(context: Any, name: str) -> Any:
    """
    Resolves a free name of a complex expression.

    Order: context key, JavaScript literal (``true``, ``null``...), Python
    builtin. Unknown names resolve to ``None``.
    """
    if isinstance(context, Mapping) and name in context:
        return context[name]
    if name in _JS_LITERALS:
        return _JS_LITERALS[name]
    return getattr(builtins, name, None)


def strict_equal(left: Any, right: Any) -> bool:
    """
    Equality without coercion between booleans and numbers.

    ``True`` never equals ``1`` and ``False`` never equals ``0``; ints and
    floats still compare by value.
    """
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return bool(left == right)


def compare(op: str, left: Any, right: Any) -> bool:
    """Ordering comparison that is False when the operands cannot be ordered."""
    try:
        return bool(_ORDERING[op](left, right))
    except TypeError:
        return False


# Names under which generated code sees the primitives
HELPERS: Dict[str, Any] = {
    "_escape": escape_html,
    "_stringify": stringify,
    "_lookup": deep_get,
    "_is_array": is_array_like,
    "_member": member,
    "_resolve": resolve_name,
    "_strict_equal": strict_equal,
    "_compare": compare,
}


__all__ = [
    "stringify",
    "escape_html",
    "is_composite",
    "is_array_like",
    "deep_get",
    "member",
    "resolve_name",
    "strict_equal",
    "compare",
    "HELPERS",
]
