"""Tokenizer for integer arithmetic expressions.

The lexer walks the input once, left to right, and yields tokens lazily.
Only the space character is skipped; '-' is always its own MINUS token and
never part of a number, so negative values are left to the parser.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from intcalc.errors import IntegerOverflow, UnrecognizedCharacter

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class TokenKind(enum.Enum):
    LPAREN = "("
    RPAREN = ")"
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    POW = "^"
    INTEGER = "INTEGER"


@dataclass(frozen=True)
class Token:
    """A token with its kind, integer value (INTEGER only) and character position.

    Equality ignores the position so token streams compare structurally.
    """
    kind: TokenKind
    value: Optional[int] = None
    pos: int = field(default=0, compare=False)

    def __str__(self) -> str:
        if self.kind is TokenKind.INTEGER:
            return str(self.value)
        return self.kind.value

    def __repr__(self) -> str:
        if self.kind is TokenKind.INTEGER:
            return f"Token({self.kind.name}, {self.value!r}, pos={self.pos})"
        return f"Token({self.kind.name}, pos={self.pos})"


_SINGLE_CHAR_TOKENS = {
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '*': TokenKind.TIMES,
    '/': TokenKind.DIVIDE,
    '^': TokenKind.POW,
}

_DIGITS = '0123456789'


class Lexer:
    """Lazy token iterator over one line of text.

    Single forward pass; once exhausted (or failed) it stays exhausted.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        self._skip_spaces()
        ch = self._peek()
        if ch == '':
            raise StopIteration
        kind = _SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            tok = Token(kind, None, self.pos)
            self._advance()
            return tok
        if ch in _DIGITS:
            return self._read_integer()
        # Skip past the bad character so a retried next() cannot loop on it.
        bad_pos = self.pos
        self.pos = self.len
        raise UnrecognizedCharacter(ch, bad_pos)

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < self.len else ''

    def _advance(self, n: int = 1) -> None:
        self.pos += n

    def _skip_spaces(self) -> None:
        # Only ' ' is whitespace here; tabs and newlines are unrecognized.
        while self._peek() == ' ':
            self._advance()

    def _read_integer(self) -> Token:
        start = self.pos
        value = 0
        while True:
            ch = self._peek()
            if ch == '' or ch not in _DIGITS:
                break
            value = value * 10 + (ord(ch) - ord('0'))
            if value > INT64_MAX:
                self.pos = self.len
                raise IntegerOverflow("integer literal", start)
            self._advance()
        return Token(TokenKind.INTEGER, value, start)

    def tokenize(self) -> List[Token]:
        """Drain the remaining input into a list of tokens."""
        tokens = list(self)
        logger.debug("lexed %r into %s", self.text, tokens)
        return tokens


def lex(text: str) -> List[Token]:
    return Lexer(text).tokenize()


def render_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens back to source text, one space between tokens."""
    return ' '.join(str(tok) for tok in tokens)
