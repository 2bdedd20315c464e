"""
Lexical helpers for template expressions.

- splitting the ``(op left right)`` condition form into its parts, with
  quoted strings and nested parentheses kept intact;
- textual substitutions that must not touch string literals
  (``@index``, arrow shorthand).
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

_IDENTIFIER = re.compile(r"^[A-Za-z_]\w*$")

# String literals are matched first so that substitutions skip them
_STRING = r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\""

_INDEX_PATTERN = re.compile(rf"(?P<string>{_STRING})|(?P<hit>@index\b)")

# (param) => body   or   param => body
_ARROW_PATTERN = re.compile(
    rf"(?P<string>{_STRING})"
    r"|\(\s*(?P<grouped>[A-Za-z_]\w*)\s*\)\s*=>"
    r"|(?P<bare>[A-Za-z_]\w*)\s*=>"
)


def split_top_level(text: str) -> Optional[List[str]]:
    """
    Splits ``text`` on whitespace that is outside quotes and parentheses.

    Returns:
        The non-empty parts, or None when quotes or parentheses are unbalanced
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None
    escaped = False

    for char in text:
        if quote is not None:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in "'\"":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return None
        elif char.isspace() and depth == 0:
            if current:
                parts.append("".join(current))
                current = []
            continue
        current.append(char)

    if quote is not None or depth != 0:
        return None
    if current:
        parts.append("".join(current))
    return parts


def split_comparison(condition: str) -> Optional[Tuple[str, str, str]]:
    """
    Recognizes the ``(op left right)`` condition form.

    Returns:
        ``(op, left, right)`` when the whole condition is one parenthesized
        group of exactly three parts starting with an identifier, else None.
        The operator is not checked against the supported set here.
    """
    if not (condition.startswith("(") and condition.endswith(")")):
        return None

    parts = split_top_level(condition[1:-1])
    if parts is None or len(parts) != 3:
        return None

    op, left, right = parts
    if not is_identifier(op):
        return None
    return op, left, right


def _substitute(pattern: re.Pattern, text: str, replace: Callable[[re.Match], str]) -> str:
    def _callback(match: re.Match) -> str:
        if match.group("string") is not None:
            return match.group(0)
        return replace(match)

    return pattern.sub(_callback, text)


def replace_index(text: str, replacement: str) -> str:
    """Replaces every ``@index`` outside string literals."""
    return _substitute(_INDEX_PATTERN, text, lambda match: replacement)


def replace_arrows(text: str) -> str:
    """Rewrites ``x => body`` and ``(x) => body`` into ``lambda x: body``."""
    def _lambda(match: re.Match) -> str:
        param = match.group("grouped") or match.group("bare")
        return f"lambda {param}:"

    return _substitute(_ARROW_PATTERN, text, _lambda)


def is_identifier(text: str) -> bool:
    return bool(_IDENTIFIER.match(text))


__all__ = [
    "split_top_level",
    "split_comparison",
    "replace_index",
    "replace_arrows",
    "is_identifier",
]
