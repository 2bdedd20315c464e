"""
Renderer: invokes a compiled template with a context.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from .errors import RenderError

logger = logging.getLogger(__name__)


class Renderer:
    """Thin invoker that wraps failures of the compiled template."""

    def render(self, compiled: Callable[[Any], str], context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Renders a compiled template with the given context.

        Args:
            compiled: Compiled template (any callable taking one context argument)
            context: Data context; defaults to an empty mapping

        Returns:
            Rendered text

        Raises:
            RenderError: On invalid arguments or when the template fails while running
        """
        if not callable(compiled):
            raise RenderError("Compiled template must be callable")

        if context is None:
            context = {}
        if not isinstance(context, Mapping):
            raise RenderError("Context must be a mapping")

        try:
            return compiled(context)
        except Exception as e:
            logger.debug("Template invocation failed", exc_info=True)
            raise RenderError(f"Rendering failed: {e}") from e


__all__ = ["Renderer"]
