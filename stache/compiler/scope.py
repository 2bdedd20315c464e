"""
Loop scopes of code generation.

A scope exists only while the generator walks one ``each`` subtree. Scopes
form an immutable chain (innermost -> outermost) passed down the traversal;
they are never stored on AST nodes.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterator, Optional, Set


@dataclass(frozen=True)
class LoopScope:
    """Generated bindings of one ``each`` occurrence."""
    item_name: str
    index_name: str
    items_name: str
    parent: Optional[LoopScope] = None

    def chain(self) -> Iterator[LoopScope]:
        """Iterates from this scope outwards."""
        scope: Optional[LoopScope] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def bound_names(self) -> Set[str]:
        """Every generated binding visible from this scope."""
        names: Set[str] = set()
        for scope in self.chain():
            names.update((scope.item_name, scope.index_name, scope.items_name))
        return names

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.chain())


class ScopeAllocator:
    """
    Hands out unique binding names for one generation pass.

    A new allocator is created for every pass, so names never leak between
    compilations; within a pass every loop gets its own suffix.
    """

    def __init__(self, prefix: str = "_"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def open(self, parent: Optional[LoopScope]) -> LoopScope:
        n = next(self._counter)
        return LoopScope(
            item_name=f"{self.prefix}item_{n}",
            index_name=f"{self.prefix}index_{n}",
            items_name=f"{self.prefix}items_{n}",
            parent=parent,
        )


__all__ = ["LoopScope", "ScopeAllocator"]
