"""
Template parser.

Turns the flat token sequence into a rooted, strictly nested AST, matching
every block opener with its closer.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .nodes import (
    TemplateNode, TextNode, VariableNode, RawVariableNode, IfNode, EachNode, RootNode
)
from .tokens import Token, TokenType, BLOCK_CLOSERS
from ..errors import StructuralError

logger = logging.getLogger(__name__)

_DIRECTIVE_NAMES = {
    TokenType.IF_START: "if",
    TokenType.EACH_START: "each",
}


class TemplateParser:
    """
    Recursive-descent parser over an index into an immutable token list.

    ``_parse_nodes`` collects siblings until it meets a block closer (left
    unconsumed for the caller) or runs out of tokens. A block opener recurses
    and checks that the nested run stopped on the matching closer.
    """

    def __init__(self, tokens: Sequence[Token]):
        if not isinstance(tokens, (list, tuple)):
            raise StructuralError("Tokens must be a list")
        self.tokens = tuple(tokens)

    def parse(self) -> RootNode:
        """
        Parses all tokens into a tree.

        Returns:
            Root node of the template

        Raises:
            StructuralError: On an unclosed block, a stray closer or an unknown token
        """
        nodes, position = self._parse_nodes(0)

        if position < len(self.tokens):
            raise StructuralError("Unexpected tokens at end of template", self.tokens[position])

        root = RootNode(children=tuple(nodes))
        logger.debug("Parsed %d tokens into %d top-level nodes", len(self.tokens), len(nodes))
        return root

    def _parse_nodes(self, position: int) -> Tuple[List[TemplateNode], int]:
        """Parses siblings starting at ``position``; returns them with the stop position."""
        nodes: List[TemplateNode] = []

        while position < len(self.tokens):
            token = self.tokens[position]

            if token.type == TokenType.TEXT:
                nodes.append(TextNode(text=token.value))
                position += 1
            elif token.type == TokenType.VAR:
                nodes.append(VariableNode(expression=token.value))
                position += 1
            elif token.type == TokenType.RAW:
                nodes.append(RawVariableNode(expression=token.value))
                position += 1
            elif token.type in BLOCK_CLOSERS:
                node, position = self._parse_block(position)
                nodes.append(node)
            elif token.type in (TokenType.IF_END, TokenType.EACH_END):
                # End of the enclosing block, control goes back to the caller
                return nodes, position
            else:
                raise StructuralError(f"Unknown token type: {token.type}", token)

        return nodes, position

    def _parse_block(self, position: int) -> Tuple[TemplateNode, int]:
        """Parses a block whose opener is at ``position``; returns it and the position after its closer."""
        opener = self.tokens[position]
        expected = BLOCK_CLOSERS[opener.type]

        children, end = self._parse_nodes(position + 1)

        if end >= len(self.tokens) or self.tokens[end].type != expected:
            name = _DIRECTIVE_NAMES[opener.type]
            raise StructuralError(f"Unclosed {{{{#{name}}}}} directive", opener)

        if opener.type == TokenType.IF_START:
            node: TemplateNode = IfNode(condition=opener.value, children=tuple(children))
        else:
            node = EachNode(items=opener.value, children=tuple(children))

        return node, end + 1


def parse_template(tokens: Sequence[Token]) -> RootNode:
    """
    Convenience function to build a tree from tokens.

    Raises:
        StructuralError: On a structural error
    """
    return TemplateParser(tokens).parse()


__all__ = ["TemplateParser", "parse_template"]
