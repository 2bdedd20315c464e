"""
AST nodes.

Immutable node classes describing the structure of a template. Children are
stored as tuples; nodes never point back to their parents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""

    def to_dict(self) -> dict:
        raise NotImplementedError


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Static text.

    Emitted verbatim; it is data and is never interpreted.
    """
    text: str

    def to_dict(self) -> dict:
        return {"type": "Text", "value": self.text}


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """Escaped interpolation ``{{expression}}``."""
    expression: str

    def to_dict(self) -> dict:
        return {"type": "Variable", "expression": self.expression}


@dataclass(frozen=True)
class RawVariableNode(TemplateNode):
    """Unescaped interpolation ``{{{expression}}}``."""
    expression: str

    def to_dict(self) -> dict:
        return {"type": "RawVariable", "expression": self.expression}


@dataclass(frozen=True)
class IfNode(TemplateNode):
    """
    Conditional block ``{{#if condition}}...{{/if}}``.

    The condition text is kept as written; it is translated only by the
    code generator.
    """
    condition: str
    children: Tuple[TemplateNode, ...] = ()

    def to_dict(self) -> dict:
        return {
            "type": "If",
            "condition": self.condition,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class EachNode(TemplateNode):
    """Loop block ``{{#each items}}...{{/each}}``."""
    items: str
    children: Tuple[TemplateNode, ...] = ()

    def to_dict(self) -> dict:
        return {
            "type": "Each",
            "items": self.items,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class RootNode(TemplateNode):
    """Root of a template tree."""
    children: Tuple[TemplateNode, ...] = ()

    def to_dict(self) -> dict:
        return {"type": "Root", "children": [child.to_dict() for child in self.children]}


__all__ = [
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "RawVariableNode",
    "IfNode",
    "EachNode",
    "RootNode",
]
