"""
JavaScript-style members for values used inside complex expressions.

Templates call ``name.toUpperCase()``, ``items.length`` or
``items.filter(x => x.active)``; these tables map such member names onto
Python operations for strings and sequences. Anything not listed here falls
back to the host attribute of the value.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence


def _stringify(value: Any) -> str:
    return "" if value is None else str(value)


def _split(text: str, separator: Optional[str] = None, limit: Optional[int] = None) -> List[str]:
    if separator is None:
        parts = [text]
    elif separator == "":
        parts = list(text)
    else:
        parts = text.split(separator)
    return parts if limit is None else parts[:limit]


def _join(items: Sequence[Any], separator: str = ",") -> str:
    return separator.join(_stringify(item) for item in items)


def _slice(value: Sequence[Any], start: int = 0, end: Optional[int] = None) -> Sequence[Any]:
    return value[start:end]


def _substring(text: str, start: int = 0, end: Optional[int] = None) -> str:
    length = len(text)
    start = min(max(int(start), 0), length)
    end = length if end is None else min(max(int(end), 0), length)
    if start > end:
        start, end = end, start
    return text[start:end]


def _char_at(text: str, index: int = 0) -> str:
    index = int(index)
    return text[index] if 0 <= index < len(text) else ""


def _index_of(value: Sequence[Any], needle: Any) -> int:
    if isinstance(value, str):
        return value.find(needle)
    for index, item in enumerate(value):
        if item == needle:
            return index
    return -1


def _filter(items: Sequence[Any], predicate: Callable[[Any], Any]) -> List[Any]:
    return [item for item in items if predicate(item)]


def _map(items: Sequence[Any], transform: Callable[[Any], Any]) -> List[Any]:
    return [transform(item) for item in items]


def _includes(value: Sequence[Any], needle: Any) -> bool:
    return needle in value


# Member name -> factory that takes the value and returns the member
STRING_MEMBERS: Dict[str, Callable[[str], Any]] = {
    "length": len,
    "toUpperCase": lambda text: text.upper,
    "toLowerCase": lambda text: text.lower,
    "trim": lambda text: text.strip,
    "split": lambda text: partial(_split, text),
    "slice": lambda text: partial(_slice, text),
    "substring": lambda text: partial(_substring, text),
    "charAt": lambda text: partial(_char_at, text),
    "includes": lambda text: partial(_includes, text),
    "indexOf": lambda text: partial(_index_of, text),
}

SEQUENCE_MEMBERS: Dict[str, Callable[[Sequence[Any]], Any]] = {
    "length": len,
    "join": lambda items: partial(_join, items),
    "slice": lambda items: partial(_slice, items),
    "filter": lambda items: partial(_filter, items),
    "map": lambda items: partial(_map, items),
    "includes": lambda items: partial(_includes, items),
    "indexOf": lambda items: partial(_index_of, items),
}


__all__ = ["STRING_MEMBERS", "SEQUENCE_MEMBERS"]
