import pytest

from lox.errors import ScanError
from lox.scanner import scan
from lox.tokens import KEYWORDS, TokenType


def kinds(source):
    return [t.type for t in scan(source)]


def test_punctuation_and_operators():
    assert kinds('(){},.-+;/* ! != = == > >= < <=') == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS,
        TokenType.SEMICOLON, TokenType.SLASH, TokenType.STAR,
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        TokenType.EOF,
    ]


def test_keywords_versus_identifiers():
    tokens = scan('var variable if iffy nil print_me')
    assert [t.type for t in tokens] == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.IF,
        TokenType.IDENTIFIER, TokenType.NIL, TokenType.IDENTIFIER, TokenType.EOF,
    ]
    assert tokens[1].lexeme == 'variable'


def test_literals_are_decoded():
    number, string, eof = scan('12.5 "hi there"')
    assert number.type == TokenType.NUMBER
    assert number.lexeme == '12.5'
    assert number.literal == 12.5
    assert isinstance(scan('3')[0].literal, float)
    assert string.type == TokenType.STRING
    assert string.lexeme == '"hi there"'
    assert string.literal == 'hi there'
    assert eof.literal is None


def test_comments_and_lines():
    tokens = scan('// nothing here\nprint 1; // trailing\n\nx')
    assert [(t.type, t.line) for t in tokens] == [
        (TokenType.PRINT, 2), (TokenType.NUMBER, 2), (TokenType.SEMICOLON, 2),
        (TokenType.IDENTIFIER, 4), (TokenType.EOF, 4),
    ]


def test_empty_source_is_just_eof():
    tokens = scan('')
    assert len(tokens) == 1
    assert tokens[0].type == TokenType.EOF
    assert tokens[0].line == 1


def test_multiline_string_reports_closing_line():
    tokens = scan('"a\nb"')
    assert tokens[0].literal == 'a\nb'
    assert tokens[0].line == 2


def test_unexpected_character():
    with pytest.raises(ScanError) as excinfo:
        scan('var a = 1;\nvar b = @;')
    assert str(excinfo.value) == '[line 2] Error: Unexpected character.'


def test_unterminated_string():
    with pytest.raises(ScanError) as excinfo:
        scan('print "oops;\n\n')
    assert str(excinfo.value) == '[line 3] Error: Unterminated string.'


def test_every_keyword_scans_to_its_kind():
    tokens = scan(' '.join(KEYWORDS))
    assert [t.type for t in tokens[:-1]] == list(KEYWORDS.values())
    assert [t.lexeme for t in tokens[:-1]] == list(KEYWORDS)
