"""
Template engine: the compile / render / update lifecycle.

Chains lexer -> parser -> code generator -> renderer and keeps a registry of
rendered targets. A target remembers its template text and last context, so
``update`` can merge new data and render again from the top of the pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .compiler.artifact import CompiledTemplate
from .compiler.generator import CodeGenerator
from .errors import RenderError, TemplateSyntaxError
from .renderer import Renderer
from .template.lexer import TemplateLexer
from .template.parser import TemplateParser

logger = logging.getLogger(__name__)


@dataclass
class RenderedTarget:
    """A template rendered under a name, with the data it was rendered with."""
    template: str
    context: Dict[str, Any] = field(default_factory=dict)
    output: str = ""


class TemplateEngine:
    """
    Orchestrates the compilation pipeline.

    Templates are recompiled on every render; caching compiled templates is
    left to the caller.
    """

    def __init__(self):
        self.generator = CodeGenerator()
        self.renderer = Renderer()
        self._targets: Dict[str, RenderedTarget] = {}

    def compile(self, template: str) -> CompiledTemplate:
        """
        Compiles template text into a render function.

        Raises:
            TemplateSyntaxError, StructuralError, ExpressionError: From the respective stage
        """
        if not isinstance(template, str):
            raise TemplateSyntaxError("Template must be a string")

        tokens = TemplateLexer(template).tokenize()
        root = TemplateParser(tokens).parse()
        return self.generator.compile(root)

    def render(self, template: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """Compiles and renders template text in one step."""
        compiled = self.compile(template)
        return self.renderer.render(compiled, context)

    def mount(self, name: str, template: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Renders a template and remembers it under ``name``.

        Returns:
            Rendered text
        """
        data = dict(context or {})
        output = self.render(template, data)
        self._targets[name] = RenderedTarget(template=template, context=data, output=output)
        logger.debug("Mounted target %r", name)
        return output

    def update(self, name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Merges ``context`` over the stored one and renders the target again.

        Raises:
            RenderError: If ``name`` was not mounted by this engine
        """
        target = self._targets.get(name)
        if target is None:
            raise RenderError(f"Target '{name}' was not rendered by this engine")

        merged = {**target.context, **(context or {})}
        output = self.render(target.template, merged)

        target.context = merged
        target.output = output
        logger.debug("Updated target %r", name)
        return output

    def get(self, name: str) -> Optional[RenderedTarget]:
        return self._targets.get(name)

    def unmount(self, name: str) -> None:
        self._targets.pop(name, None)

    def destroy(self) -> None:
        """Forgets all rendered targets."""
        self._targets.clear()

    @property
    def targets(self) -> List[str]:
        return sorted(self._targets)


__all__ = ["TemplateEngine", "RenderedTarget"]
