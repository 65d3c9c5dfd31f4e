"""Abstract Syntax Tree (AST) definitions for Lox.

The node classes form two closed families, expressions and statements.
Nodes are built once by the parser and never mutated afterwards, hence
the frozen dataclasses. Algorithms over the tree (the interpreter, the
AST printer) dispatch on the concrete node class rather than asking the
nodes to call back into them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from .tokens import Token


@dataclass(frozen=True)
class Expr:
    """Base class for expression nodes."""
    pass


@dataclass(frozen=True)
class Literal(Expr):
    value: Any  # None, bool, float or str


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token  # '!' or '-'
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token  # 'and' or 'or'
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Stmt:
    """Base class for statement nodes."""
    pass


@dataclass(frozen=True)
class ExprStmt(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


Node = Union[Expr, Stmt]


def left_spine(node: Expr, kind: type) -> Tuple[Expr, List[Expr]]:
    """Unwind a left-associative chain of `kind` nodes.

    ``1 + 2 + 3`` is ``Binary(Binary(1, +, 2), +, 3)``; this returns the
    leftmost operand ``1`` and the chain nodes innermost first, so long
    chains can be walked with a loop instead of one recursion per operand.
    """
    chain: List[Expr] = []
    while isinstance(node, kind):
        chain.append(node)
        node = node.left
    chain.reverse()
    return node, chain
