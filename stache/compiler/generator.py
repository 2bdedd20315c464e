"""
Code generator.

Walks a template tree and emits the source of a Python function
``render(ctx) -> str``, then compiles it into a :class:`CompiledTemplate`.

For ``Hello {{name}}!{{#each items}}{{@index}}{{/each}}`` the output is::

    def render(ctx):
        result = []
        append_result = result.append
        extend_result = result.extend
        extend_result(['Hello ', _escape(_lookup(ctx, 'name')), '!'])
        _items_1 = _lookup(ctx, 'items')
        if _is_array(_items_1):
            for _index_1, _item_1 in enumerate(_items_1):
                append_result(_escape((_index_1)))
        return ''.join(result)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .artifact import CompiledTemplate
from .builder import CodeBuilder
from .scope import LoopScope, ScopeAllocator
from ..errors import ExpressionError
from ..expressions.model import CONTEXT_NAME
from ..expressions.translator import ExpressionTranslator
from ..runtime import HELPERS
from ..template.nodes import (
    EachNode, IfNode, RawVariableNode, RootNode, TemplateNode, TextNode, VariableNode
)

logger = logging.getLogger(__name__)

FUNCTION_NAME = "render"
SOURCE_FILENAME = "<stache-template>"


class _GenerationPass:
    """
    State of one generation pass.

    Owns the code builder, the buffer of pending output expressions and the
    scope allocator; discarded when the pass ends.
    """

    def __init__(self, translator: ExpressionTranslator):
        self.translator = translator
        self.code = CodeBuilder()
        self.buffered: List[str] = []
        self.scopes = ScopeAllocator()

    def run(self, root: RootNode) -> str:
        code = self.code
        code.add_line(f"def {FUNCTION_NAME}({CONTEXT_NAME}):")
        code.indent()
        code.add_line("result = []")
        code.add_line("append_result = result.append")
        code.add_line("extend_result = result.extend")

        self.emit_nodes(root.children, None)
        self.flush_output()

        code.add_line("return ''.join(result)")
        code.dedent()
        return str(code)

    def flush_output(self) -> None:
        """Writes the buffered output expressions as one append/extend call."""
        if len(self.buffered) == 1:
            self.code.add_line(f"append_result({self.buffered[0]})")
        elif len(self.buffered) > 1:
            self.code.add_line(f"extend_result([{', '.join(self.buffered)}])")
        del self.buffered[:]

    def emit_nodes(self, nodes, scope: Optional[LoopScope]) -> None:
        for node in nodes:
            self.emit(node, scope)

    def emit(self, node: TemplateNode, scope: Optional[LoopScope]) -> None:
        if isinstance(node, TextNode):
            self.buffered.append(repr(node.text))
        elif isinstance(node, VariableNode):
            value = self.translator.translate_access(node.expression, scope)
            self.buffered.append(f"_escape({value.to_python()})")
        elif isinstance(node, RawVariableNode):
            value = self.translator.translate_access(node.expression, scope)
            self.buffered.append(f"_stringify({value.to_python()})")
        elif isinstance(node, IfNode):
            self.emit_if(node, scope)
        elif isinstance(node, EachNode):
            self.emit_each(node, scope)
        else:
            raise ExpressionError(f"Unknown node type: {type(node).__name__}")

    def emit_if(self, node: IfNode, scope: Optional[LoopScope]) -> None:
        condition = self.translator.translate_condition(node.condition, scope)
        self.flush_output()
        self.code.add_line(f"if {condition.to_python()}:")
        self.code.indent()
        self.emit_block(node.children, scope)
        self.code.dedent()

    def emit_each(self, node: EachNode, scope: Optional[LoopScope]) -> None:
        items = self.translator.translate_access(node.items, scope)
        loop = self.scopes.open(scope)
        logger.debug("Loop over %r bound to %s/%s (depth %d)",
                     node.items, loop.item_name, loop.index_name, loop.depth)

        self.flush_output()
        code = self.code
        code.add_line(f"{loop.items_name} = {items.to_python()}")
        code.add_line(f"if _is_array({loop.items_name}):")
        code.indent()
        code.add_line(f"for {loop.index_name}, {loop.item_name} in enumerate({loop.items_name}):")
        code.indent()
        self.emit_block(node.children, loop)
        code.dedent()
        code.dedent()

    def emit_block(self, children, scope: Optional[LoopScope]) -> None:
        if not children:
            self.code.add_line("pass")
            return
        self.emit_nodes(children, scope)
        self.flush_output()


class CodeGenerator:
    """
    Turns a template tree into Python source and a compiled artifact.

    Every call runs a fresh generation pass, so loop binding names never
    leak between compilations.
    """

    def __init__(self, translator: Optional[ExpressionTranslator] = None):
        self.translator = translator or ExpressionTranslator()

    def generate(self, root: RootNode) -> str:
        """
        Generates the Python source of the render function.

        Raises:
            ExpressionError: On an invalid tree or expression
        """
        if not isinstance(root, RootNode):
            raise ExpressionError("Invalid AST: expected Root node")

        source = _GenerationPass(self.translator).run(root)
        logger.debug("Generated %d lines of Python", source.count("\n"))
        return source

    def compile(self, root: RootNode) -> CompiledTemplate:
        """
        Generates and compiles the render function.

        Raises:
            ExpressionError: On an invalid tree, expression or generated source
        """
        source = self.generate(root)
        try:
            code = compile(source, SOURCE_FILENAME, "exec")
        except SyntaxError as e:
            raise ExpressionError(f"Compilation failed: {e.msg}. Generated code:\n{source}") from e

        namespace = dict(HELPERS)
        exec(code, namespace)
        return CompiledTemplate(source=source, function=namespace[FUNCTION_NAME])


def generate_source(root: RootNode) -> str:
    """Convenience function: Python source for a template tree."""
    return CodeGenerator().generate(root)


def compile_ast(root: RootNode) -> CompiledTemplate:
    """Convenience function: compiled artifact for a template tree."""
    return CodeGenerator().compile(root)


__all__ = ["CodeGenerator", "generate_source", "compile_ast", "FUNCTION_NAME"]
