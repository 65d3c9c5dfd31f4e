"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [--debug-file FILE] <script>
    python -m lox [-v...] --print-ast <script>
    python -m lox                      (interactive prompt)

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Write the debug trace to FILE instead of stderr
  --print-ast   Parse the script and print each statement's AST

Exit status: 65 for scan or syntax errors, 66 when the script cannot be
read, 70 for runtime errors. At the interactive prompt errors are
reported and the session carries on; an empty line or end of input
ends it.
"""

import argparse
import builtins
import sys
from pathlib import Path

from .errors import LoxError, LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse
from .printer import AstPrinter
from .scanner import scan

EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def run_file(path: Path, interpreter: Interpreter, print_ast: bool = False) -> int:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
    except OSError as e:
        print(f"Error: cannot read {path}: {e.strerror}", file=sys.stderr)
        return EX_NOINPUT
    try:
        statements = parse(scan(source))
    except LoxError as e:
        print(e, file=sys.stderr)
        return EX_DATAERR
    if print_ast:
        printer = AstPrinter()
        for stmt in statements:
            print(printer.print(stmt))
        return 0
    try:
        interpreter.interpret(statements)
    except LoxRuntimeError as e:
        print(e, file=sys.stderr)
        return EX_SOFTWARE
    return 0


def run_prompt(interpreter: Interpreter, print_ast: bool = False) -> int:
    printer = AstPrinter()
    while True:
        try:
            line = builtins.input('> ')
        except EOFError:
            break
        if line == '':
            break
        try:
            statements = parse(scan(line))
            if print_ast:
                for stmt in statements:
                    print(printer.print(stmt))
            else:
                interpreter.interpret(statements)
        except LoxError as e:
            # keep the session going
            print(e, file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='FILE', help='write the debug trace to FILE')
    parser.add_argument('--print-ast', action='store_true', help='print the parsed AST instead of running')
    parser.add_argument('script', nargs='?', help='Lox script (.lox) to execute')
    args = parser.parse_args(argv)

    interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file)
    try:
        if args.script:
            return run_file(Path(args.script), interpreter, args.print_ast)
        return run_prompt(interpreter, args.print_ast)
    finally:
        interpreter.close()


if __name__ == '__main__':
    sys.exit(main())
