"""
Translator of template expressions into the expression IR.

Grammar handled here:

access      → "this" | complex | "this." path | path
complex     → any text containing ( ) + - * / => @index or a known method suffix
path        → IDENT ("." IDENT)*
condition   → "(" OP operand operand ")" | complex | "this" | "this." path | path
operand     → STRING | NUMBER | complex | access
OP          → eq | neq | gt | gte | lt | lte | and | or

Translation is aware of the loop scope chain: ``this`` and ``@index`` always
refer to the innermost enclosing loop.
"""

from __future__ import annotations

import ast
import logging
import re
from typing import TYPE_CHECKING, Optional

from .lexer import replace_arrows, replace_index, split_comparison
from .model import (
    CONTEXT_NAME,
    Comparison,
    ComplexExpr,
    Expr,
    Literal,
    Operator,
    PathRef,
    ThisRef,
    Truthy,
)
from .rewriter import ComplexRewriter
from ..errors import ExpressionError

if TYPE_CHECKING:
    from ..compiler.scope import LoopScope

logger = logging.getLogger(__name__)

PATH_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*(?:\.[A-Za-z_$][A-Za-z0-9_$]*)*$")

METHOD_SUFFIXES = (
    "length", "split", "join", "toUpperCase", "toLowerCase",
    "trim", "slice", "substring", "charAt", "filter",
)

COMPLEX_PATTERN = re.compile(
    r"[()+\-*/]|=>|@index|\.(?:" + "|".join(METHOD_SUFFIXES) + r")\b"
)

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

_OPERATORS = {op.value: op for op in Operator}


def is_complex(expression: str) -> bool:
    """True if the expression must be compiled as a free-form expression."""
    return COMPLEX_PATTERN.search(expression) is not None


def is_path(expression: str) -> bool:
    return PATH_PATTERN.match(expression) is not None


def _number_literal(text: str) -> Optional[str]:
    if not _NUMBER_PATTERN.match(text):
        return None
    if re.match(r"^[+-]?\d+$", text):
        return repr(int(text))
    return repr(float(text))


class ExpressionTranslator:
    """
    Translates expression text into :mod:`stache.expressions.model` objects.

    Stateless: the loop scope is passed to every call, so one translator can
    serve any number of generation passes.
    """

    def translate_access(self, expression: str, scope: Optional[LoopScope] = None) -> Expr:
        """
        Translates a value expression (variable content, items expression, operand).

        Raises:
            ExpressionError: On an empty, invalid or unparsable expression
        """
        expr = expression.strip()
        if not expr:
            raise ExpressionError("Empty variable expression", expression)

        if expr == "this":
            return ThisRef(self._this_binding(scope))

        if is_complex(expr):
            return self.translate_complex(expr, scope)

        if expr.startswith("this."):
            rest = expr[len("this."):]
            if is_path(rest):
                return PathRef(self._this_binding(scope), rest)
            return self.translate_complex(expr, scope)

        if is_path(expr):
            return PathRef(CONTEXT_NAME, expr)

        raise ExpressionError(f"Invalid variable expression: {expr}", expr)

    def translate_complex(self, expression: str, scope: Optional[LoopScope] = None) -> ComplexExpr:
        """
        Translates a free-form expression into validated Python.

        ``@index`` becomes the innermost index binding (``0`` outside loops),
        arrow shorthand becomes ``lambda``, then the text must parse as a
        Python expression before names and attributes are rewritten.

        Raises:
            ExpressionError: If the translated text is not a valid expression
        """
        text = replace_index(expression, scope.index_name if scope is not None else "0")
        text = replace_arrows(text).strip()

        try:
            tree = ast.parse(text, mode="eval")
        except SyntaxError as e:
            raise ExpressionError(
                f'Invalid complex expression: "{expression}". Error: {e.msg}', expression
            ) from e

        local_names = scope.bound_names() if scope is not None else set()
        rewriter = ComplexRewriter(self._this_binding(scope), local_names)
        code = ast.unparse(rewriter.rewrite(tree))

        logger.debug("Complex expression %r -> %s", expression, code)
        return ComplexExpr(source=expression, code=code)

    def translate_condition(self, condition: str, scope: Optional[LoopScope] = None) -> Expr:
        """
        Translates an ``{{#if}}`` condition.

        Raises:
            ExpressionError: On an unsupported operator or an invalid condition
        """
        cond = condition.strip()

        parts = split_comparison(cond)
        if parts is not None:
            op_name, left, right = parts
            op = _OPERATORS.get(op_name)
            if op is None:
                raise ExpressionError(f"Unsupported comparison operator: {op_name}", cond)
            return Comparison(
                operator=op,
                left=self.translate_operand(left, scope),
                right=self.translate_operand(right, scope),
            )

        if is_complex(cond):
            return Truthy(self.translate_access(cond, scope))

        if cond == "this" or cond.startswith("this.") or is_path(cond):
            return Truthy(self.translate_access(cond, scope))

        raise ExpressionError(f"Invalid condition expression: {cond}", cond)

    def translate_operand(self, operand: str, scope: Optional[LoopScope] = None) -> Expr:
        """Translates one operand of a comparison: string, number or expression."""
        text = operand.strip()

        if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
            self._check_string_literal(text)
            return Literal(text)

        number = _number_literal(text)
        if number is not None:
            return Literal(number)

        return self.translate_access(text, scope)

    @staticmethod
    def _this_binding(scope: Optional[LoopScope]) -> str:
        return scope.item_name if scope is not None else CONTEXT_NAME

    @staticmethod
    def _check_string_literal(text: str) -> None:
        try:
            node = ast.parse(text, mode="eval").body
        except SyntaxError as e:
            raise ExpressionError(f"Invalid string literal: {text}", text) from e
        if not (isinstance(node, ast.Constant) and isinstance(node.value, str)):
            raise ExpressionError(f"Invalid string literal: {text}", text)


__all__ = [
    "ExpressionTranslator",
    "is_complex",
    "is_path",
    "METHOD_SUFFIXES",
]
