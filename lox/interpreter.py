"""Tree-walking interpreter for Lox.

Statements are executed for their effect and expressions are evaluated
to values by dispatching on the node class. Variables live in a chain of
:class:`Environment` objects; the interpreter holds the innermost one as
its current environment and swaps it on block entry, restoring it on
every exit path.
"""

from __future__ import annotations

import math
import sys
from typing import Any, List, Optional, TextIO

from .ast import (
    Expr, Stmt, Assign, Binary, Grouping, Literal, Logical, Unary, Variable,
    Block, ExprStmt, If, Print, Var, left_spine,
)
from .environment import Environment
from .errors import LoxRuntimeError
from .parser import parse
from .scanner import scan
from .tokens import TokenType
from .values import (
    is_equal, is_number, is_truthy, stringify,
    check_boolean_operand, check_number_operand, check_number_operands,
)


class Interpreter:
    """Executes Lox statements against a global environment.

    The global environment lives as long as the interpreter, so a REPL
    can feed it one line at a time and keep its variables.
    """
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None):
        self.globals = Environment()
        self.environment = self.globals
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = None
        if debug_level > 0 and debug_file is not None:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: List[Stmt]):
        """Execute statements in order, stopping at the first runtime error.

        Output already produced by earlier statements stays produced; the
        LoxRuntimeError propagates to the caller.
        """
        for stmt in statements:
            self.execute(stmt)

    def execute_block(self, statements, environment: Environment):
        previous = self.environment
        self.environment = environment
        if self.debug_level >= 3:
            self.debug('enter scope')
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous
            if self.debug_level >= 3:
                self.debug('exit scope')

    def execute(self, node: Stmt):
        if self.debug_level >= 1:
            self.debug(f"execute {type(node).__name__}")
        if isinstance(node, ExprStmt):
            self.evaluate(node.expression)
            return
        if isinstance(node, Print):
            value = self.evaluate(node.expression)
            print(stringify(value))
            return
        if isinstance(node, Var):
            value = None
            if node.initializer is not None:
                value = self.evaluate(node.initializer)
            self.environment.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name.lexeme} = {stringify(value)}")
            return
        if isinstance(node, Block):
            self.execute_block(node.statements, Environment(self.environment))
            return
        if isinstance(node, If):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {stringify(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch)
            elif node.else_branch is not None:
                self.execute(node.else_branch)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {stringify(value)}")
            return value
        if isinstance(node, Unary):
            right = self.evaluate(node.right)
            if node.operator.type == TokenType.BANG:
                return not check_boolean_operand(node.operator, right)
            if node.operator.type == TokenType.MINUS:
                return -check_number_operand(node.operator, right)
            raise LoxRuntimeError(node.operator, 'Unknown unary operator.')
        if isinstance(node, Logical):
            first, chain = left_spine(node, Logical)
            value = self.evaluate(first)
            for logical in chain:
                if logical.operator.type == TokenType.OR:
                    if is_truthy(value):
                        continue
                elif not is_truthy(value):
                    continue
                value = self.evaluate(logical.right)
            return value
        if isinstance(node, Binary):
            first, chain = left_spine(node, Binary)
            value = self.evaluate(first)
            for binary in chain:
                right = self.evaluate(binary.right)
                value = self.apply_binary_op(binary, value, right)
            return value
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_binary_op(self, node: Binary, a: Any, b: Any) -> Any:
        op = node.operator
        kind = op.type
        if kind == TokenType.PLUS:
            if is_number(a) and is_number(b):
                return float(a + b)
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError(op, 'Operands must be two numbers or two strings.')
        if kind == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if kind == TokenType.BANG_EQUAL:
            return not is_equal(a, b)
        a, b = check_number_operands(op, a, b)
        if kind == TokenType.MINUS:
            return float(a - b)
        if kind == TokenType.STAR:
            return float(a * b)
        if kind == TokenType.SLASH:
            return divide(a, b)
        if kind == TokenType.GREATER:
            return a > b
        if kind == TokenType.GREATER_EQUAL:
            return a >= b
        if kind == TokenType.LESS:
            return a < b
        if kind == TokenType.LESS_EQUAL:
            return a <= b
        raise LoxRuntimeError(op, 'Unknown binary operator.')


def divide(a: float, b: float) -> float:
    """IEEE division: x/0 is +-inf and 0/0 is nan, never an error."""
    a, b = float(a), float(b)
    if b == 0.0:
        if a == 0.0 or a != a:
            return float('nan')
        # the sign of a zero divisor matters: 1/-0 is -inf
        negative = (a < 0) != (math.copysign(1.0, b) < 0)
        return float('-inf') if negative else float('inf')
    return a / b


def interpret(statements: List[Stmt], interpreter: Optional[Interpreter] = None) -> Interpreter:
    """Run statements on a fresh (or the given) interpreter and return it."""
    if interpreter is None:
        interpreter = Interpreter()
    interpreter.interpret(statements)
    return interpreter


def run_source(source: str, interpreter: Optional[Interpreter] = None) -> Interpreter:
    """Convenience function to scan, parse and run Lox source text."""
    return interpret(parse(scan(source)), interpreter)
