import pytest

from intcalc.errors import IntegerOverflow, LexerError, UnrecognizedCharacter
from intcalc.lexer import INT64_MAX, Lexer, Token, TokenKind, lex, render_tokens

LPAREN = Token(TokenKind.LPAREN)
RPAREN = Token(TokenKind.RPAREN)
PLUS = Token(TokenKind.PLUS)
MINUS = Token(TokenKind.MINUS)
TIMES = Token(TokenKind.TIMES)
DIVIDE = Token(TokenKind.DIVIDE)
POW = Token(TokenKind.POW)


def integer(n):
    return Token(TokenKind.INTEGER, n)


def test_lex_empty_parens():
    assert lex("()") == [LPAREN, RPAREN]


def test_lex_simple_tokens():
    assert lex("*/+-") == [TIMES, DIVIDE, PLUS, MINUS]


def test_lex_pow():
    assert lex("2^3") == [integer(2), POW, integer(3)]


def test_lex_integer():
    assert lex("100") == [integer(100)]


def test_lex_math_expression():
    assert lex("(100 + 2) - (-4)") == [
        LPAREN, integer(100), PLUS, integer(2), RPAREN,
        MINUS, LPAREN, MINUS, integer(4), RPAREN,
    ]


def test_lex_empty_and_blank_input():
    assert lex("") == []
    assert lex("     ") == []


def test_lex_leading_zeros():
    assert lex("007") == [integer(7)]


def test_minus_is_never_part_of_a_literal():
    assert lex("-5") == [MINUS, integer(5)]


def test_token_positions():
    toks = lex("12 + (3)")
    assert [t.pos for t in toks] == [0, 3, 5, 6, 7]


def test_positions_do_not_affect_equality():
    assert Token(TokenKind.INTEGER, 1, pos=0) == Token(TokenKind.INTEGER, 1, pos=9)
    assert Token(TokenKind.INTEGER, 1) != Token(TokenKind.INTEGER, 2)


def test_lex_unrecognized_character_raises():
    with pytest.raises(UnrecognizedCharacter) as e:
        lex("1 @ 2")
    assert e.value.char == '@'
    assert e.value.pos == 2
    assert isinstance(e.value, LexerError)


@pytest.mark.parametrize("text", ["1\t+ 2", "1 + 2\n", "1.5", "x"])
def test_only_space_is_whitespace(text):
    with pytest.raises(UnrecognizedCharacter):
        lex(text)


def test_lexer_is_lazy():
    lexer = Lexer("1 + $")
    assert next(lexer) == integer(1)
    assert next(lexer) == PLUS
    with pytest.raises(UnrecognizedCharacter):
        next(lexer)


def test_lexer_is_single_pass():
    lexer = Lexer("1 2")
    assert list(lexer) == [integer(1), integer(2)]
    assert list(lexer) == []


def test_max_int64_literal():
    assert lex(str(INT64_MAX)) == [integer(INT64_MAX)]


def test_literal_overflow_raises():
    with pytest.raises(IntegerOverflow) as e:
        lex("1 + 9223372036854775808")
    assert e.value.pos == 4


def test_token_str_is_source_text():
    assert [str(t) for t in lex("(12 ^ 3)")] == ["(", "12", "^", "3", ")"]


@pytest.mark.parametrize("text", ["(100 + 2) - (-4)", "3*(2+-4)^4/2", "  7  "])
def test_relexing_rendered_tokens_is_stable(text):
    tokens = lex(text)
    assert lex(render_tokens(tokens)) == tokens
