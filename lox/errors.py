from typing import Optional

from lox.tokens import Token, TokenType


class LoxError(Exception):
    """Base class for errors reported to the user with a source line.

    The string form is the diagnostic a driver prints, e.g.
    ``[line 3] Error at ';': Expect expression.``
    """
    kind = 'Error'

    def __init__(self, token: Optional[Token], message: str, line: Optional[int] = None):
        self.token = token
        self.message = message
        self.line = token.line if token is not None else line
        super().__init__(self.format())

    def format(self) -> str:
        if self.token is None:
            return f"[line {self.line}] {self.kind}: {self.message}"
        if self.token.type == TokenType.EOF:
            return f"[line {self.line}] {self.kind} at end: {self.message}"
        return f"[line {self.line}] {self.kind} at '{self.token.lexeme}': {self.message}"


class ScanError(LoxError):
    """Raised by the scanner; carries only a line, there is no token yet."""

    def __init__(self, line: int, message: str):
        super().__init__(None, message, line=line)


class ParseError(LoxError):
    """Syntax error. Parsing stops at the first one."""
    kind = 'Error'


class LoxRuntimeError(LoxError):
    """Error raised while evaluating a program."""
    kind = 'Runtime error'
