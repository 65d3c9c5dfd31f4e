"""Runtime value helpers for Lox.

Lox values are carried as plain Python objects:

    nil     -> None
    boolean -> bool
    number  -> float
    string  -> str

Python's ``bool`` is a subclass of ``int``, so every numeric check here
excludes booleans explicitly. The ``check_*`` helpers are the only place
operands are cast; on a mismatch they raise :class:`LoxRuntimeError`
against the operator token instead of letting a Python ``TypeError``
escape.
"""

from __future__ import annotations

import math
from typing import Any

from .errors import LoxRuntimeError
from .tokens import Token


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    """nil and false are falsy; everything else, 0 and "" included, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Equality without coercion between types."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # True == 1.0 in Python; Lox keeps booleans and numbers apart.
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if type_name(a) != type_name(b):
        return False
    return a == b


def stringify(value: Any) -> str:
    """Render a value the way `print` shows it."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return '+Inf' if value > 0 else '-Inf'
        # repr gives the shortest round-trip form
        text = repr(float(value))
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)


def check_number_operand(operator: Token, operand: Any) -> float:
    if is_number(operand):
        return operand
    raise LoxRuntimeError(operator, 'Operand must be a number.')


def check_number_operands(operator: Token, left: Any, right: Any):
    if is_number(left) and is_number(right):
        return left, right
    raise LoxRuntimeError(operator, 'Operands must be numbers.')


def check_boolean_operand(operator: Token, operand: Any) -> bool:
    # '!' takes booleans only; it does not apply truthiness.
    if isinstance(operand, bool):
        return operand
    raise LoxRuntimeError(operator, 'Operand must be a boolean.')
