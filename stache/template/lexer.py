"""
Lexical analyzer for stache templates.

Splits template text into a flat sequence of tokens: text runs, variable
and raw-variable markers, block openers and block closers.
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from .tokens import Token, TokenType
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)

OPEN = "{{"
CLOSE = "}}"
RAW_OPEN = "{{{"
RAW_CLOSE = "}}}"

# {{#if condition}} and {{#each items}}: the keyword is followed by a space
# or by nothing at all
_DIRECTIVE = re.compile(r"^#(if|each)(?: (.*))?$", re.DOTALL)


class TemplateLexer:
    """
    Template lexer.

    Single left-to-right pass. At every ``{{`` it looks one character further
    to tell a raw marker ``{{{ }}}`` from a normal one ``{{ }}``. Everything
    between markers is text and is never validated.
    """

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TemplateSyntaxError("Template must be a string")
        self.text = text
        self.length = len(text)
        self.position = 0

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole template.

        Returns:
            List of tokens in template order (empty for an empty template)

        Raises:
            TemplateSyntaxError: On an unterminated marker or a malformed directive
        """
        tokens: List[Token] = []

        while self.position < self.length:
            start = self.text.find(OPEN, self.position)
            if start == -1:
                tokens.append(self._make(TokenType.TEXT, self.text[self.position:], self.position))
                break

            if start > self.position:
                tokens.append(self._make(TokenType.TEXT, self.text[self.position:start], self.position))

            tokens.append(self._read_marker(start))

        logger.debug("Tokenized template: %d chars, %d tokens", self.length, len(tokens))
        return tokens

    def _read_marker(self, start: int) -> Token:
        """Reads one ``{{...}}`` or ``{{{...}}}`` marker starting at ``start``."""
        is_raw = self.text.startswith(RAW_OPEN, start)
        opener, closer = (RAW_OPEN, RAW_CLOSE) if is_raw else (OPEN, CLOSE)

        content_start = start + len(opener)
        close_index = self.text.find(closer, content_start)
        if close_index == -1:
            line, column = self._location(start)
            raise TemplateSyntaxError(
                f"Unclosed expression at position {start} ({line}:{column})",
                start, line, column,
            )

        content = self.text[content_start:close_index].strip()
        self.position = close_index + len(closer)

        if is_raw:
            return self._make(TokenType.RAW, content, start)
        return self._classify(content, start)

    def _classify(self, content: str, start: int) -> Token:
        """Turns the trimmed content of a normal marker into a token."""
        directive = _DIRECTIVE.match(content)
        if directive:
            name, argument = directive.group(1), (directive.group(2) or "").strip()
            if name == "if":
                if not argument:
                    self._error("If directive requires a condition", start)
                return self._make(TokenType.IF_START, argument, start)
            if not argument:
                self._error("Each directive requires an items expression", start)
            return self._make(TokenType.EACH_START, argument, start)

        if content == "/if":
            return self._make(TokenType.IF_END, "", start)
        if content == "/each":
            return self._make(TokenType.EACH_END, "", start)
        if content.startswith("/"):
            self._error(f"Unknown closing directive: {content}", start)

        # An empty expression is rejected later, by the code generator
        return self._make(TokenType.VAR, content, start)

    def _make(self, token_type: TokenType, value: str, position: int) -> Token:
        line, column = self._location(position)
        return Token(token_type, value, position, line, column)

    def _location(self, position: int) -> Tuple[int, int]:
        """Line and column (both 1-based) of an offset in the template."""
        line = self.text.count("\n", 0, position) + 1
        line_start = self.text.rfind("\n", 0, position) + 1
        return line, position - line_start + 1

    def _error(self, message: str, position: int) -> None:
        line, column = self._location(position)
        raise TemplateSyntaxError(message, position, line, column)


def tokenize_template(text: str) -> List[Token]:
    """
    Convenience function to tokenize a template.

    Args:
        text: Template source text

    Returns:
        List of tokens

    Raises:
        TemplateSyntaxError: On a lexical error
    """
    lexer = TemplateLexer(text)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
