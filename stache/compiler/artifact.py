"""
Compiled template artifact.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional


@dataclass(frozen=True)
class CompiledTemplate:
    """
    Result of compiling a template: a pure function of the context.

    Holds no mutable state, so one instance may be called repeatedly and
    concurrently with independent contexts. ``source`` is the generated
    Python code, kept for diagnostics (``stache compile``).
    """
    source: str
    function: Callable[[Any], str] = field(repr=False, compare=False)

    def __call__(self, context: Optional[Mapping[str, Any]] = None) -> str:
        return self.function({} if context is None else context)


__all__ = ["CompiledTemplate"]
