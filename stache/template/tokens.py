"""
Lexical types.

Tokens are flat: they carry no nesting information. Block structure is
discovered later by the parser.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Token types produced by the template lexer."""
    TEXT = "TEXT"
    VAR = "VAR"                # {{expression}}
    RAW = "RAW"                # {{{expression}}}
    IF_START = "IF_START"      # {{#if condition}}
    IF_END = "IF_END"          # {{/if}}
    EACH_START = "EACH_START"  # {{#each items}}
    EACH_END = "EACH_END"      # {{/each}}


# Closers for each block opener
BLOCK_CLOSERS = {
    TokenType.IF_START: TokenType.IF_END,
    TokenType.EACH_START: TokenType.EACH_END,
}


@dataclass(frozen=True)
class Token:
    """
    Token with position information for error diagnostics.

    ``value`` holds the literal text for TEXT, the expression for VAR/RAW,
    the condition for IF_START and the items expression for EACH_START.
    Closers have an empty value.
    """
    type: TokenType
    value: str
    position: int        # Offset in the template text
    line: int            # Line number (1-based)
    column: int          # Column number (1-based)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "value": self.value,
            "line": self.line,
            "column": self.column,
        }

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token", "BLOCK_CLOSERS"]
