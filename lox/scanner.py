"""Scanner for Lox source text.

The scanner is built on a Lark terminal grammar. Only Lark's lexer is
used: the token stream it yields is converted into :class:`Token`
objects and handed to the hand-written recursive-descent parser in
:mod:`lox.parser`. Every token kind in :class:`TokenType` except EOF has
a terminal of the same name below.
"""

from __future__ import annotations

from typing import List

from lark import Lark, UnexpectedCharacters

from .errors import ScanError
from .tokens import KEYWORDS, Token, TokenType


LOX_TERMINALS = r"""
    start: _token*
    _token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
          | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
          | BANG | BANG_EQUAL | EQUAL | EQUAL_EQUAL
          | GREATER | GREATER_EQUAL | LESS | LESS_EQUAL
          | IDENTIFIER | STRING | NUMBER
          | AND | CLASS | ELSE | FALSE | FUN | FOR | IF | NIL | OR
          | PRINT | RETURN | SUPER | THIS | TRUE | VAR | WHILE

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"

    BANG: "!"
    BANG_EQUAL: "!="
    EQUAL: "="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="

    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
    %ignore /[ \t\r\n]+/
"""

# Keywords are plain string terminals; Lark's lexer gives them precedence
# over IDENTIFIER when the whole identifier matches.
LOX_TERMINALS += ''.join(
    f'    {kind.name}: "{word}"\n' for word, kind in KEYWORDS.items()
)


LOX_LEXER = Lark(
    LOX_TERMINALS,
    parser='lalr',
    lexer='basic',
)


def last_line(source: str) -> int:
    return source.count('\n') + 1


def scan(source: str) -> List[Token]:
    """Convert source text into a list of tokens terminated by EOF.

    NUMBER literals are decoded to float and STRING literals have their
    quotes removed. A token spanning several lines (a multi-line string)
    is reported on the line where it ends.
    """
    tokens: List[Token] = []
    try:
        for raw in LOX_LEXER.lex(source):
            kind = TokenType[raw.type]
            lexeme = str(raw)
            literal = None
            if kind == TokenType.NUMBER:
                literal = float(lexeme)
            elif kind == TokenType.STRING:
                literal = lexeme[1:-1]
            line = raw.end_line if raw.end_line is not None else raw.line
            tokens.append(Token(kind, lexeme, literal, line))
    except UnexpectedCharacters as e:
        if e.char == '"':
            # The string runs off the end of the source.
            raise ScanError(last_line(source), 'Unterminated string.') from None
        raise ScanError(e.line, 'Unexpected character.') from None
    tokens.append(Token(TokenType.EOF, '', None, last_line(source)))
    return tokens
