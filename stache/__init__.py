"""
stache: a compiler for {{mustache}}-style string templates.

Templates are scanned into tokens, built into a tree and compiled into a
Python function of the data context::

    >>> from stache import render
    >>> render("Hello {{name}}!", {"name": "<b>World</b>"})
    'Hello &lt;b&gt;World&lt;/b&gt;!'
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .compiler import CompiledTemplate
from .engine import TemplateEngine
from .errors import (
    ConfigError,
    ExpressionError,
    RenderError,
    StacheUserError,
    StructuralError,
    TemplateSyntaxError,
)
from .renderer import Renderer
from .runtime import deep_get, escape_html


def compile_template(template: str) -> CompiledTemplate:
    """Compiles template text into a callable ``(context) -> str``."""
    return TemplateEngine().compile(template)


def render(template: str, context: Optional[Mapping[str, Any]] = None) -> str:
    """Compiles and renders template text with ``context``."""
    return TemplateEngine().render(template, context)


__all__ = [
    "compile_template",
    "render",
    "CompiledTemplate",
    "TemplateEngine",
    "Renderer",
    "deep_get",
    "escape_html",
    "StacheUserError",
    "TemplateSyntaxError",
    "StructuralError",
    "ExpressionError",
    "RenderError",
    "ConfigError",
]
