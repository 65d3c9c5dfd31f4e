"""Parenthesized prefix rendering of Lox ASTs, for debugging.

``1 + 2 * 3`` prints as ``(+ 1 (* 2 3))``, which makes the shape the
parser built (precedence, grouping, associativity) visible at a glance.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Assign, Binary, Grouping, Literal, Logical, Unary, Variable,
    Block, ExprStmt, If, Print, Var, Node, left_spine,
)
from .values import stringify


class AstPrinter:
    def print(self, node: Node) -> str:
        # Expressions
        if isinstance(node, Literal):
            return stringify(node.value)
        if isinstance(node, Grouping):
            return self.parenthesize('group', node.expression)
        if isinstance(node, Unary):
            return self.parenthesize(node.operator.lexeme, node.right)
        if isinstance(node, (Binary, Logical)):
            first, chain = left_spine(node, type(node))
            text = self.print(first)
            for link in chain:
                text = self.parenthesize(link.operator.lexeme, text, link.right)
            return text
        if isinstance(node, Variable):
            return node.name.lexeme
        if isinstance(node, Assign):
            return self.parenthesize('=', node.name.lexeme, node.value)
        # Statements
        if isinstance(node, ExprStmt):
            return self.parenthesize(';', node.expression)
        if isinstance(node, Print):
            return self.parenthesize('print', node.expression)
        if isinstance(node, Var):
            if node.initializer is None:
                return self.parenthesize('var', node.name.lexeme)
            return self.parenthesize('var', node.name.lexeme, node.initializer)
        if isinstance(node, Block):
            return self.parenthesize('block', *node.statements)
        if isinstance(node, If):
            if node.else_branch is None:
                return self.parenthesize('if', node.condition, node.then_branch)
            return self.parenthesize('if-else', node.condition, node.then_branch, node.else_branch)
        raise NotImplementedError(f"print: unexpected node type {type(node)}")

    def parenthesize(self, name: str, *parts: Any) -> str:
        # plain strings (names) are emitted as-is, nodes are printed
        rendered = [p if isinstance(p, str) else self.print(p) for p in parts]
        return '(' + ' '.join([name] + rendered) + ')'
