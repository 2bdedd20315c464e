"""
Rewriting of parsed complex expressions.

A complex expression is parsed with :mod:`ast` and its free names and
attribute accesses are redirected to runtime helpers, so that it reads data
from the render context instead of Python globals:

- ``this``            -> innermost loop item binding (or the context)
- free name ``x``     -> ``_resolve(ctx, 'x')``
- ``value.attr``      -> ``_member(value, 'attr')``

Lambda parameters and comprehension targets are local only inside their own
lambda or comprehension; walrus targets and generated loop bindings are local
to the whole expression. Nothing else is restricted: calls run with the full
power of Python against live data.
"""

from __future__ import annotations

import ast
from typing import Iterable, List, Set, Union

from .model import CONTEXT_NAME

Comprehension = Union[ast.ListComp, ast.SetComp, ast.GeneratorExp, ast.DictComp]


def _helper_call(helper: str, *args: ast.expr) -> ast.Call:
    return ast.Call(func=ast.Name(id=helper, ctx=ast.Load()), args=list(args), keywords=[])


def _target_names(target: ast.AST) -> Set[str]:
    return {node.id for node in ast.walk(target) if isinstance(node, ast.Name)}


class ComplexRewriter(ast.NodeTransformer):
    """
    Redirects names and attributes of one complex expression.

    Keeps a stack of name scopes while visiting: the bottom scope holds the
    generated loop bindings, every lambda and comprehension pushes its own.
    """

    def __init__(self, this_binding: str, local_names: Iterable[str] = ()):
        self.this_binding = this_binding
        self.scopes: List[Set[str]] = [set(local_names)]
        # Scopes that a walrus target binds into (the root and lambdas)
        self.function_scopes: List[Set[str]] = [self.scopes[0]]

    def rewrite(self, tree: ast.Expression) -> ast.Expression:
        new_tree = self.visit(tree)
        return ast.fix_missing_locations(new_tree)

    def is_local(self, name: str) -> bool:
        return any(name in scope for scope in self.scopes)

    def visit_Name(self, node: ast.Name) -> ast.expr:
        if not isinstance(node.ctx, ast.Load):
            return node
        if node.id == "this":
            return ast.copy_location(ast.Name(id=self.this_binding, ctx=ast.Load()), node)
        if self.is_local(node.id):
            return node
        call = _helper_call(
            "_resolve", ast.Name(id=CONTEXT_NAME, ctx=ast.Load()), ast.Constant(value=node.id)
        )
        return ast.copy_location(call, node)

    def visit_Attribute(self, node: ast.Attribute) -> ast.expr:
        self.generic_visit(node)
        if not isinstance(node.ctx, ast.Load):
            return node
        call = _helper_call("_member", node.value, ast.Constant(value=node.attr))
        return ast.copy_location(call, node)

    def visit_NamedExpr(self, node: ast.NamedExpr) -> ast.expr:
        node.value = self.visit(node.value)
        self.function_scopes[-1].add(node.target.id)
        return node

    def visit_Lambda(self, node: ast.Lambda) -> ast.expr:
        # Defaults belong to the enclosing scope
        node.args = self.visit(node.args)
        params = {arg.arg for arg in ast.walk(node.args) if isinstance(arg, ast.arg)}

        self.scopes.append(params)
        self.function_scopes.append(params)
        node.body = self.visit(node.body)
        self.function_scopes.pop()
        self.scopes.pop()
        return node

    def _visit_comprehension(self, node: Comprehension, fields: Iterable[str]) -> ast.expr:
        generators = node.generators
        # The first iterable is evaluated outside the comprehension
        generators[0].iter = self.visit(generators[0].iter)

        scope: Set[str] = set()
        self.scopes.append(scope)
        for index, generator in enumerate(generators):
            if index:
                generator.iter = self.visit(generator.iter)
            scope.update(_target_names(generator.target))
            generator.ifs = [self.visit(cond) for cond in generator.ifs]
        for name in fields:
            setattr(node, name, self.visit(getattr(node, name)))
        self.scopes.pop()
        return node

    def visit_ListComp(self, node: ast.ListComp) -> ast.expr:
        return self._visit_comprehension(node, ("elt",))

    def visit_SetComp(self, node: ast.SetComp) -> ast.expr:
        return self._visit_comprehension(node, ("elt",))

    def visit_GeneratorExp(self, node: ast.GeneratorExp) -> ast.expr:
        return self._visit_comprehension(node, ("elt",))

    def visit_DictComp(self, node: ast.DictComp) -> ast.expr:
        return self._visit_comprehension(node, ("key", "value"))


__all__ = ["ComplexRewriter"]
