"""Integer arithmetic evaluator: lexer, Pratt parser and tree-walking interpreter."""

from intcalc.errors import (
    CalculatorError,
    DivisionByZero,
    EvalError,
    ExpectingLiteral,
    ExpectingOperator,
    ExpressionTooDeep,
    IncompleteInput,
    IntegerOverflow,
    LexerError,
    NegativeExponent,
    ParseError,
    TrailingInput,
    UnbalancedParens,
    UnrecognizedCharacter,
)
from intcalc.interpreter import evaluate, interpret
from intcalc.lexer import INT64_MAX, INT64_MIN, Lexer, Token, TokenKind, lex, render_tokens
from intcalc.nodes import Binary, BinaryOp, Expr, Literal, Unary, UnaryOp, to_source
from intcalc.parser import Parser, parse

__version__ = "0.1.0"
