"""
Expression IR.

Translated template expressions are kept as small immutable trees and only
turned into Python source when the code generator asks for it. Names such as
``_lookup``, ``_strict_equal`` and ``_compare`` refer to the runtime helpers in
:data:`stache.runtime.HELPERS`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

# Parameter name of the generated render function
CONTEXT_NAME = "ctx"


class ExprType(Enum):
    """Kinds of translated expressions."""
    THIS = "this"
    PATH = "path"
    COMPLEX = "complex"
    LITERAL = "literal"
    COMPARISON = "comparison"
    TRUTHY = "truthy"


class Operator(Enum):
    """Operators of the ``(op left right)`` condition form."""
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    AND = "and"
    OR = "or"


_INFIX = {
    Operator.AND: "and",
    Operator.OR: "or",
}


@dataclass(frozen=True)
class Expr(ABC):
    """Base class for all translated expressions."""

    @abstractmethod
    def get_type(self) -> ExprType:
        """Returns the expression kind."""
        pass

    @abstractmethod
    def to_python(self) -> str:
        """Python source of the expression."""
        pass


@dataclass(frozen=True)
class ThisRef(Expr):
    """
    ``this``: the innermost loop item, or the whole context outside loops.
    """
    binding: str

    def get_type(self) -> ExprType:
        return ExprType.THIS

    def to_python(self) -> str:
        return self.binding


@dataclass(frozen=True)
class PathRef(Expr):
    """
    Dotted path resolved through the safe lookup.

    ``base`` is the binding the path starts from: the context parameter or a
    loop item binding.
    """
    base: str
    path: str

    def get_type(self) -> ExprType:
        return ExprType.PATH

    def to_python(self) -> str:
        return f"_lookup({self.base}, {self.path!r})"


@dataclass(frozen=True)
class ComplexExpr(Expr):
    """
    Free-form expression, already translated and validated.

    ``source`` is the template text; ``code`` is the rewritten Python.
    """
    source: str
    code: str

    def get_type(self) -> ExprType:
        return ExprType.COMPLEX

    def to_python(self) -> str:
        return f"({self.code})"


@dataclass(frozen=True)
class Literal(Expr):
    """String or number literal operand of a comparison."""
    code: str

    def get_type(self) -> ExprType:
        return ExprType.LITERAL

    def to_python(self) -> str:
        return self.code


@dataclass(frozen=True)
class Comparison(Expr):
    """
    Binary condition ``(op left right)``.

    Equality goes through ``_strict_equal`` (booleans never equal numbers),
    ``and``/``or`` map onto the Python operators and ordering goes through
    ``_compare`` so that unorderable operands give False.
    """
    operator: Operator
    left: Expr
    right: Expr

    def get_type(self) -> ExprType:
        return ExprType.COMPARISON

    def to_python(self) -> str:
        left = self.left.to_python()
        right = self.right.to_python()
        if self.operator == Operator.EQ:
            return f"_strict_equal({left}, {right})"
        if self.operator == Operator.NEQ:
            return f"(not _strict_equal({left}, {right}))"
        infix = _INFIX.get(self.operator)
        if infix is not None:
            return f"({left} {infix} {right})"
        return f"_compare({self.operator.value!r}, {left}, {right})"


@dataclass(frozen=True)
class Truthy(Expr):
    """Boolean coercion of a standalone condition."""
    operand: Expr

    def get_type(self) -> ExprType:
        return ExprType.TRUTHY

    def to_python(self) -> str:
        return f"bool({self.operand.to_python()})"


__all__ = [
    "CONTEXT_NAME",
    "ExprType",
    "Operator",
    "Expr",
    "ThisRef",
    "PathRef",
    "ComplexExpr",
    "Literal",
    "Comparison",
    "Truthy",
]
