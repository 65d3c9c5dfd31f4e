# Lox language package
# A scanner, recursive-descent parser and tree-walking interpreter for Lox.
from .errors import LoxError, ScanError, ParseError, LoxRuntimeError
from .scanner import scan
from .parser import parse, Parser
from .environment import Environment
from .interpreter import interpret, run_source, Interpreter
from .printer import AstPrinter

__all__ = [
    'scan',
    'parse',
    'interpret',
    'run_source',
    'Parser',
    'Interpreter',
    'Environment',
    'AstPrinter',
    'LoxError',
    'ScanError',
    'ParseError',
    'LoxRuntimeError',
]
