"""Python source builder with indentation tracking."""

from __future__ import annotations

from typing import List


class CodeBuilder:
    """Builds Python source line by line."""

    INDENT_STEP = 4

    def __init__(self, indent: int = 0):
        self.code: List[str] = []
        self.indent_level = indent

    def __str__(self) -> str:
        return "".join(self.code)

    def add_line(self, line: str) -> None:
        """Adds one line; indentation and newline are added here."""
        self.code.extend([" " * self.indent_level, line, "\n"])

    def indent(self) -> None:
        self.indent_level += self.INDENT_STEP

    def dedent(self) -> None:
        self.indent_level -= self.INDENT_STEP


__all__ = ["CodeBuilder"]
