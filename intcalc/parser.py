"""Pratt (top-down operator precedence) parser.

Each token kind has a null denotation (how it starts an expression), a left
denotation (how it continues one after a left operand) and a left binding
power. The three are kept in tables keyed by TokenKind rather than on the
Token class, so tokens stay plain data.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Union

from intcalc.errors import (
    ExpectingLiteral,
    ExpectingOperator,
    ExpressionTooDeep,
    IncompleteInput,
    TrailingInput,
    UnbalancedParens,
)
from intcalc.lexer import Token, TokenKind, lex
from intcalc.nodes import Binary, BinaryOp, Expr, Literal, Unary, UnaryOp, to_source

logger = logging.getLogger(__name__)

# Binding power used for the operand of prefix minus; above every infix operator.
PREFIX_BP = 100

# Deepest allowed nesting of sub-expressions (parentheses, prefix minus, right
# operands of '^'); one level costs three Python frames.
MAX_NESTING = 200

BINDING_POWER: Dict[TokenKind, int] = {
    TokenKind.POW: 30,
    TokenKind.TIMES: 20,
    TokenKind.DIVIDE: 20,
    TokenKind.PLUS: 10,
    TokenKind.MINUS: 10,
    TokenKind.LPAREN: 0,
    TokenKind.RPAREN: 0,
    TokenKind.INTEGER: 0,
}

_BINARY_OPS: Dict[TokenKind, BinaryOp] = {
    TokenKind.POW: BinaryOp.POW,
    TokenKind.TIMES: BinaryOp.MUL,
    TokenKind.DIVIDE: BinaryOp.DIV,
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_RIGHT_ASSOC = {TokenKind.POW}


def binding_power(kind: TokenKind) -> int:
    return BINDING_POWER[kind]


class Parser:
    """Pratt parser producing an AST for a complete token sequence."""

    def __init__(self, tokens: Iterable[Token]):
        self.tokens: List[Token] = list(tokens)
        self.pos = 0
        self.depth = 0

    def _peek(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _advance(self) -> Optional[Token]:
        tok = self._peek()
        if tok is not None:
            self.pos += 1
        return tok

    def _end_pos(self) -> Optional[int]:
        if not self.tokens:
            return None
        last = self.tokens[-1]
        return last.pos + len(str(last))

    def parse(self) -> Expr:
        node = self.expression(0)
        tok = self._peek()
        if tok is not None:
            raise TrailingInput(str(tok), tok.pos)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parsed %s", to_source(node))
        return node

    def expression(self, rbp: int = 0) -> Expr:
        tok = self._advance()
        if tok is None:
            raise IncompleteInput(self._end_pos())
        if self.depth >= MAX_NESTING:
            raise ExpressionTooDeep(MAX_NESTING, tok.pos)
        self.depth += 1
        try:
            left = _nud(self, tok)
            while self._next_binds_tighter_than(rbp):
                tok = self._advance()
                left = _led(self, tok, left)
        finally:
            self.depth -= 1
        return left

    def _next_binds_tighter_than(self, rbp: int) -> bool:
        tok = self._peek()
        return tok is not None and binding_power(tok.kind) > rbp

    def expect_rparen(self) -> Token:
        tok = self._advance()
        if tok is None or tok.kind is not TokenKind.RPAREN:
            pos = tok.pos if tok is not None else self._end_pos()
            raise UnbalancedParens(pos)
        return tok


# --------------------------
# Null denotations
# --------------------------

def _nud_integer(parser: Parser, tok: Token) -> Expr:
    return Literal(tok.value)

def _nud_minus(parser: Parser, tok: Token) -> Expr:
    return Unary(UnaryOp.NEG, parser.expression(PREFIX_BP))

def _nud_lparen(parser: Parser, tok: Token) -> Expr:
    expr = parser.expression(0)
    parser.expect_rparen()
    return expr

def _nud_error(parser: Parser, tok: Token) -> Expr:
    raise ExpectingLiteral(str(tok), tok.pos)


NUD: Dict[TokenKind, Callable[[Parser, Token], Expr]] = {
    TokenKind.INTEGER: _nud_integer,
    TokenKind.MINUS: _nud_minus,
    TokenKind.LPAREN: _nud_lparen,
    TokenKind.RPAREN: _nud_error,
    TokenKind.PLUS: _nud_error,
    TokenKind.TIMES: _nud_error,
    TokenKind.DIVIDE: _nud_error,
    TokenKind.POW: _nud_error,
}


# --------------------------
# Left denotations
# --------------------------

def _led_binary(parser: Parser, tok: Token, left: Expr) -> Expr:
    bp = binding_power(tok.kind)
    # Right-associative operators let an equal-power operator on the right bind first.
    rhs_bp = bp - 1 if tok.kind in _RIGHT_ASSOC else bp
    right = parser.expression(rhs_bp)
    return Binary(left, _BINARY_OPS[tok.kind], right)

def _led_error(parser: Parser, tok: Token, left: Expr) -> Expr:
    raise ExpectingOperator(str(tok), tok.pos)


LED: Dict[TokenKind, Callable[[Parser, Token, Expr], Expr]] = {
    TokenKind.POW: _led_binary,
    TokenKind.TIMES: _led_binary,
    TokenKind.DIVIDE: _led_binary,
    TokenKind.PLUS: _led_binary,
    TokenKind.MINUS: _led_binary,
    TokenKind.LPAREN: _led_error,
    TokenKind.RPAREN: _led_error,
    TokenKind.INTEGER: _led_error,
}


def _nud(parser: Parser, tok: Token) -> Expr:
    return NUD[tok.kind](parser, tok)

def _led(parser: Parser, tok: Token, left: Expr) -> Expr:
    return LED[tok.kind](parser, tok, left)


def _check_tables() -> None:
    for table_name, table in (("NUD", NUD), ("LED", LED), ("BINDING_POWER", BINDING_POWER)):
        missing = [kind.name for kind in TokenKind if kind not in table]
        if missing:
            raise RuntimeError(f"{table_name} has no entry for {', '.join(missing)}")

_check_tables()


def parse(source: Union[str, Iterable[Token]]) -> Expr:
    """Parse text or an already-lexed token sequence into a single expression."""
    tokens = lex(source) if isinstance(source, str) else source
    return Parser(tokens).parse()
