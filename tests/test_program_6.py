from pathlib import Path

from lox import parse, scan, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_strings_and_logic(capsys):
    source = (EXAMPLES / 'program_6.lox').read_text(encoding='utf-8')
    statements = parse(scan(source))
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['foobar', 'true', 'true', 'false', 'true', 'fallback', 'second', 'false']
