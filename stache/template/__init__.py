"""
Template front end: lexer, tokens, AST nodes and parser.
"""

from .lexer import TemplateLexer, tokenize_template
from .nodes import (
    TemplateNode, TextNode, VariableNode, RawVariableNode, IfNode, EachNode, RootNode
)
from .parser import TemplateParser, parse_template
from .tokens import Token, TokenType

__all__ = [
    "TemplateLexer", "tokenize_template",
    "TemplateParser", "parse_template",
    "Token", "TokenType",
    "TemplateNode", "TextNode", "VariableNode", "RawVariableNode",
    "IfNode", "EachNode", "RootNode",
]
