import math

import pytest

from lox import Interpreter, LoxRuntimeError, parse, run_source, scan
from lox.environment import Environment
from lox.parser import MAX_NESTING
from lox.tokens import Token, TokenType


def run(source):
    return run_source(source)


def output(capsys):
    return capsys.readouterr().out.strip().split('\n')


def evaluate(source):
    """Evaluate one expression and return its Lox value."""
    interp = Interpreter()
    interp.interpret(parse(scan(f"var result = {source};")))
    return interp.globals.get(Token(TokenType.IDENTIFIER, 'result', None, 1))


@pytest.mark.parametrize('source, expected', [
    ('1 + 2', 3.0),
    ('1 - 2 - 3', -4.0),
    ('2 * 3 + 4', 10.0),
    ('2 * (3 + 4)', 14.0),
    ('10 / 4', 2.5),
    ('-(2)', -2.0),
    ('"foo" + "bar"', 'foobar'),
    ('1 < 2', True),
    ('2 <= 2', True),
    ('3 > 4', False),
    ('3 >= 4', False),
    ('nil == nil', True),
    ('1 == "1"', False),
    ('"a" != "b"', True),
    ('!true', False),
    ('!false', True),
    ('nil or 0', 0.0),
    ('false or nil', None),
    ('1 and 2', 2.0),
    ('nil and 2', None),
])
def test_expression_values(source, expected):
    assert evaluate(source) == expected


def test_division_by_zero_follows_floats():
    assert evaluate('1 / 0') == math.inf
    assert evaluate('-1 / 0') == -math.inf
    assert math.isnan(evaluate('0 / 0'))


def test_assignment_is_an_expression(capsys):
    run('var a; var b; a = b = 5; print a; print b; print a = 7;')
    assert output(capsys) == ['5', '5', '7']


def test_uninitialized_var_is_nil(capsys):
    run('var a; print a;')
    assert output(capsys) == ['nil']


def test_print_renders_values(capsys):
    run('print true; print false; print nil; print 1.5; print 10; print "text";')
    assert output(capsys) == ['true', 'false', 'nil', '1.5', '10', 'text']


def test_block_variable_not_visible_after_block():
    with pytest.raises(LoxRuntimeError) as excinfo:
        run('{ var inner = 1; }\nprint inner;')
    assert str(excinfo.value) == "[line 2] Runtime error at 'inner': Undefined variable 'inner'."


def test_shadowing_inside_block_leaves_outer_alone(capsys):
    run('var a = 1; { var a = a + 1; print a; } print a;')
    assert output(capsys) == ['2', '1']


def test_redeclaration_in_same_scope_rebinds(capsys):
    run('var a = 1; var a = "again"; print a;')
    assert output(capsys) == ['again']


def test_assignment_to_undeclared_fails():
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source('{ nope = 1; }', interp)
    assert str(excinfo.value) == "[line 1] Runtime error at 'nope': Undefined variable 'nope'."
    assert 'nope' not in interp.globals.values


@pytest.mark.parametrize('source, message', [
    ('"1" - 2;', "[line 1] Runtime error at '-': Operands must be numbers."),
    ('true + 1;', "[line 1] Runtime error at '+': Operands must be two numbers or two strings."),
    ('1 + "1";', "[line 1] Runtime error at '+': Operands must be two numbers or two strings."),
    ('"a" * 2;', "[line 1] Runtime error at '*': Operands must be numbers."),
    ('nil / 1;', "[line 1] Runtime error at '/': Operands must be numbers."),
    ('"a" < "b";', "[line 1] Runtime error at '<': Operands must be numbers."),
    ('-"a";', "[line 1] Runtime error at '-': Operand must be a number."),
    ('-true;', "[line 1] Runtime error at '-': Operand must be a number."),
    ('!nil;', "[line 1] Runtime error at '!': Operand must be a boolean."),
    ('!0;', "[line 1] Runtime error at '!': Operand must be a boolean."),
    ('print missing;', "[line 1] Runtime error at 'missing': Undefined variable 'missing'."),
])
def test_runtime_errors(source, message):
    with pytest.raises(LoxRuntimeError) as excinfo:
        run(source)
    assert str(excinfo.value) == message


def test_zero_is_truthy(capsys):
    run('if (0) print "a"; else print "b";')
    assert output(capsys) == ['a']


def test_if_without_else_is_noop(capsys):
    run('if (nil) print "never"; print "done";')
    assert output(capsys) == ['done']


def test_dangling_else(capsys):
    run('var a = true; var b = false; if (a) if (b) print 1; else print 2;')
    assert output(capsys) == ['2']
    run('var a = false; if (a) if (true) print 1; else print 2; print 3;')
    assert output(capsys) == ['3']


def test_logical_short_circuit_skips_right_side(capsys):
    run('print true or missing; print false and missing;')
    assert output(capsys) == ['true', 'false']


def test_environment_restored_after_error():
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError):
        run_source('var a = 1; { var b = 2; { print -"x"; } }', interp)
    assert interp.environment is interp.globals
    assert 'b' not in interp.globals.values


def test_environment_restored_after_block():
    interp = Interpreter()
    run_source('{ var a = 1; { var b = 2; } }', interp)
    assert interp.environment is interp.globals
    assert interp.globals.values == {}


def test_execution_stops_at_first_error(capsys):
    with pytest.raises(LoxRuntimeError):
        run('print 1; print nil + 1; print 2;')
    assert output(capsys) == ['1']


def test_state_persists_across_runs(capsys):
    interp = Interpreter()
    run_source('var total = 1;', interp)
    run_source('total = total + 41;', interp)
    run_source('print total;', interp)
    assert output(capsys) == ['42']


def test_fresh_interpreter_has_empty_globals():
    interp = Interpreter()
    assert isinstance(interp.globals, Environment)
    assert interp.globals.enclosing is None
    assert interp.globals.values == {}


def test_debug_trace_written_to_file(tmp_path, capsys):
    trace = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=3, debug_file=str(trace))
    try:
        run_source('var a = 1; { a = 2; } if (a) print a;', interp)
    finally:
        interp.close()
    assert output(capsys) == ['2']
    lines = trace.read_text(encoding='utf-8').splitlines()
    assert 'execute Var' in lines
    assert 'define a = 1' in lines
    assert 'assign a = 2' in lines
    assert 'enter scope' in lines
    assert 'exit scope' in lines
    assert 'if condition 2 -> True' in lines


def test_debug_trace_defaults_to_stderr(capsys):
    interp = Interpreter(debug_level=1)
    run_source('print 1;', interp)
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert 'execute Print' in captured.err


def test_long_binary_chain_evaluates(capsys):
    run('print ' + ' + '.join(['1'] * 5000) + ';')
    assert output(capsys) == ['5000']


def test_long_chain_keeps_left_to_right_order():
    assert evaluate(' - '.join(['1'] * 2000)) == -1998.0
    assert evaluate('"a" + "b" + "c" + "d"') == 'abcd'


def test_long_logical_chain_short_circuits(capsys):
    run('print ' + ' or '.join(['false'] * 3000) + ' or "last";')
    run('print ' + ' and '.join(['true'] * 3000) + ' and nil and missing;')
    assert output(capsys) == ['last', 'nil']


def test_runtime_error_inside_long_chain_names_its_operator():
    with pytest.raises(LoxRuntimeError) as excinfo:
        run('print ' + ' + '.join(['1'] * 1500) + ' + nil;')
    assert excinfo.value.message == 'Operands must be two numbers or two strings.'


def test_deepest_allowed_nesting_runs(capsys):
    depth = MAX_NESTING
    run('print ' + '(' * depth + '7' + ')' * depth + ';')
    run('{' * depth + 'print 8;' + '}' * depth)
    run('if (true) ' * depth + 'print 9;')
    assert output(capsys) == ['7', '8', '9']
