"""
Expression sub-language: paths, comparisons, complex expressions and
loop-scoped pseudo-variables.
"""

from .model import (
    CONTEXT_NAME,
    ExprType,
    Operator,
    Expr,
    ThisRef,
    PathRef,
    ComplexExpr,
    Literal,
    Comparison,
    Truthy,
)
from .translator import ExpressionTranslator, is_complex, is_path

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
    "ExpressionTranslator",
    "is_complex",
    "is_path",
]
