"""
Tests for the code generator: emitted source, loop bindings and compilation.
"""

import textwrap

import pytest

from stache.compiler import CodeGenerator, CompiledTemplate, ScopeAllocator, compile_ast, generate_source
from stache.errors import ExpressionError
from stache.expressions import ExpressionTranslator, Literal
from stache.template.lexer import tokenize_template
from stache.template.nodes import RootNode, TextNode
from stache.template.parser import parse_template


def tree(text: str) -> RootNode:
    return parse_template(tokenize_template(text))


class TestGeneratedSource:

    def setup_method(self):
        self.generator = CodeGenerator()

    def test_simple_template(self):
        """Adjacent outputs are buffered into one extend call."""
        source = self.generator.generate(tree("Hello {{name}}!"))

        assert source == textwrap.dedent("""\
            def render(ctx):
                result = []
                append_result = result.append
                extend_result = result.extend
                extend_result(['Hello ', _escape(_lookup(ctx, 'name')), '!'])
                return ''.join(result)
            """)

    def test_empty_template(self):
        source = generate_source(RootNode())

        assert "append_result(" not in source
        assert "extend_result(" not in source
        assert source.rstrip().endswith("return ''.join(result)")

    def test_single_output_uses_append(self):
        source = self.generator.generate(tree("{{{html}}}"))

        assert "append_result(_stringify(_lookup(ctx, 'html')))" in source

    def test_text_is_a_literal(self):
        """Quotes, backslashes and newlines in text cannot break the generated code."""
        text = "It's \"quoted\" \\ and\nmultiline {}"
        source = self.generator.generate(RootNode((TextNode(text),)))

        assert f"append_result({text!r})" in source

    def test_each_loop(self):
        source = self.generator.generate(tree("{{#each items}}{{@index}}{{/each}}"))

        assert "_items_1 = _lookup(ctx, 'items')" in source
        assert "if _is_array(_items_1):" in source
        assert "for _index_1, _item_1 in enumerate(_items_1):" in source
        assert "append_result(_escape((_index_1)))" in source

    def test_if_block(self):
        source = self.generator.generate(tree("{{#if (gt n 1)}}many{{/if}}"))

        assert "if _compare('gt', _lookup(ctx, 'n'), 1):" in source
        assert "append_result('many')" in source

    def test_empty_blocks_get_pass(self):
        source = self.generator.generate(tree("{{#if a}}{{/if}}{{#each b}}{{/each}}"))

        assert source.count("pass") == 2

    def test_loop_bindings_are_unique(self):
        """Sibling and nested loops never share binding names."""
        source = self.generator.generate(
            tree("{{#each a}}{{#each this}}{{this}}{{/each}}{{/each}}{{#each b}}{{this}}{{/each}}")
        )

        assert "for _index_1, _item_1 in enumerate(_items_1):" in source
        assert "_items_2 = _item_1" in source
        assert "for _index_2, _item_2 in enumerate(_items_2):" in source
        assert "for _index_3, _item_3 in enumerate(_items_3):" in source

    def test_generation_is_deterministic(self):
        """Binding names restart for every generation."""
        root = tree("{{#each a}}{{this}}{{/each}}")

        assert self.generator.generate(root) == self.generator.generate(root)

    def test_invalid_root(self):
        with pytest.raises(ExpressionError, match="Invalid AST: expected Root node"):
            self.generator.generate(TextNode("x"))

    def test_unknown_node(self):
        with pytest.raises(ExpressionError, match="Unknown node type: object"):
            self.generator.generate(RootNode((object(),)))

    def test_expression_errors_propagate(self):
        with pytest.raises(ExpressionError, match="Invalid variable expression"):
            self.generator.generate(tree("{{user name}}"))

        with pytest.raises(ExpressionError, match="Empty variable expression"):
            self.generator.generate(tree("{{ }}"))


class _BrokenTranslator(ExpressionTranslator):
    def translate_access(self, expression, scope=None):
        return Literal("1 +")


class TestCompile:

    def test_compile_returns_artifact(self):
        compiled = compile_ast(tree("{{a}}-{{b}}"))

        assert isinstance(compiled, CompiledTemplate)
        assert compiled.source.startswith("def render(ctx):")
        assert compiled({"a": 1, "b": 2}) == "1-2"

    def test_artifact_default_context(self):
        compiled = compile_ast(tree("[{{a}}]"))

        assert compiled() == "[]"

    def test_artifact_is_reusable(self):
        """One compiled template serves many independent contexts."""
        compiled = compile_ast(tree("{{#each xs}}{{this}}{{/each}}"))

        assert compiled({"xs": [1, 2]}) == "12"
        assert compiled({"xs": ["a"]}) == "a"
        assert compiled({}) == ""

    def test_invalid_generated_code(self):
        generator = CodeGenerator(translator=_BrokenTranslator())

        with pytest.raises(ExpressionError, match="Compilation failed"):
            generator.compile(tree("{{x}}"))


class TestScopeAllocator:

    def test_names(self):
        scope = ScopeAllocator().open(None)

        assert (scope.item_name, scope.index_name, scope.items_name) == ("_item_1", "_index_1", "_items_1")
        assert scope.depth == 1

    def test_chain(self):
        allocator = ScopeAllocator()
        outer = allocator.open(None)
        inner = allocator.open(outer)

        assert list(inner.chain()) == [inner, outer]
        assert inner.depth == 2
        assert inner.bound_names() == {
            "_item_1", "_index_1", "_items_1", "_item_2", "_index_2", "_items_2",
        }

    def test_prefix(self):
        scope = ScopeAllocator(prefix="__t").open(None)

        assert scope.item_name == "__titem_1"
