"""Exception hierarchy for the calculator pipeline.

Every failure raised by the lexer, parser or interpreter derives from
CalculatorError, so a caller evaluating one line of input only has to catch
that single type.
"""

from typing import Optional


class CalculatorError(Exception):
    """Base class for calculator errors."""

    def __init__(self, message: str, pos: Optional[int] = None):
        self.message = message
        self.pos = pos
        if pos is not None:
            message = f"{message} at pos {pos}"
        super().__init__(message)


# ---------------------------
# Lexing
# ---------------------------

class LexerError(CalculatorError):
    """Raised for errors during tokenization."""
    pass

class UnrecognizedCharacter(LexerError):
    """A character that cannot start any token."""

    def __init__(self, char: str, pos: int):
        self.char = char
        super().__init__(f"unrecognized character {char!r}", pos)


# ---------------------------
# Parsing
# ---------------------------

class ParseError(CalculatorError):
    """Raised for parsing errors with optional position information."""
    pass

class UnbalancedParens(ParseError):
    """An opening parenthesis was not matched by a closing one."""

    def __init__(self, pos: Optional[int] = None):
        super().__init__("unbalanced parens", pos)

class ExpectingLiteral(ParseError):
    """A token that cannot start an expression appeared where a value was required."""

    def __init__(self, found: str, pos: Optional[int] = None):
        self.found = found
        super().__init__(f"expecting literal, got {found!r}", pos)

class ExpectingOperator(ParseError):
    """A token that is not an infix operator appeared after a complete operand."""

    def __init__(self, found: str, pos: Optional[int] = None):
        self.found = found
        super().__init__(f"expecting operator, got {found!r}", pos)

class IncompleteInput(ParseError):
    """Input ended while an operand was still required."""

    def __init__(self, pos: Optional[int] = None):
        super().__init__("incomplete input", pos)

class TrailingInput(ParseError):
    """Tokens remained after a complete expression."""

    def __init__(self, found: str, pos: Optional[int] = None):
        self.found = found
        super().__init__(f"unexpected trailing input {found!r}", pos)

class ExpressionTooDeep(ParseError):
    """Parentheses, prefix minus or '^' chains nested past the parser's limit."""

    def __init__(self, limit: int, pos: Optional[int] = None):
        self.limit = limit
        super().__init__(f"expression nested too deeply (limit {limit})", pos)


# ---------------------------
# Evaluation
# ---------------------------

class EvalError(CalculatorError):
    """Raised for errors during evaluation."""
    pass

class DivisionByZero(EvalError):
    """Division with a zero right operand."""

    def __init__(self):
        super().__init__("division by zero")

class NegativeExponent(EvalError):
    """Exponentiation with a negative exponent."""

    def __init__(self, exponent: int):
        self.exponent = exponent
        super().__init__("cannot raise number to negative power")


class IntegerOverflow(CalculatorError):
    """A literal or an intermediate result left the 64-bit signed range.

    Raised by both the lexer (oversized literals) and the interpreter
    (arithmetic results), so it sits directly under CalculatorError.
    """

    def __init__(self, what: str, pos: Optional[int] = None):
        super().__init__(f"integer overflow in {what}", pos)
