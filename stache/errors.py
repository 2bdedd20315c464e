"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user as clean messages
(without stack traces) inherit from StacheUserError. Each pipeline stage has
its own subclass, so callers can tell which stage rejected the template.

Programming errors and bugs should NOT inherit from StacheUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class StacheUserError(Exception):
    """
    Base class for all user-facing errors in stache.

    These errors indicate problems that the user can fix:
    malformed templates, invalid expressions, bad context files, etc.
    """
    pass


class TemplateSyntaxError(StacheUserError):
    """Lexical error: unterminated marker, empty directive argument, unknown closer."""

    def __init__(self, message: str, position: int = 0, line: int = 1, column: int = 1):
        super().__init__(message)
        self.position = position
        self.line = line
        self.column = column


class StructuralError(StacheUserError):
    """Block structure error: unmatched block, trailing tokens, unknown token type."""

    def __init__(self, message: str, token: Optional[object] = None):
        super().__init__(message)
        self.token = token


class ExpressionError(StacheUserError):
    """Invalid variable, complex or condition expression found during code generation."""

    def __init__(self, message: str, expression: Optional[str] = None):
        super().__init__(message)
        self.expression = expression


class RenderError(StacheUserError):
    """A compiled template failed while being invoked with a context."""
    pass


class ConfigError(StacheUserError):
    """Configuration or context file could not be loaded."""
    pass


__all__ = [
    "StacheUserError",
    "TemplateSyntaxError",
    "StructuralError",
    "ExpressionError",
    "RenderError",
    "ConfigError",
]
