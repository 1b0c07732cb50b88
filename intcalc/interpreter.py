"""Tree-walking evaluator over 64-bit signed integers.

Every intermediate result is range checked; leaving the int64 range raises
IntegerOverflow rather than wrapping.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from intcalc.errors import DivisionByZero, EvalError, IntegerOverflow, NegativeExponent
from intcalc.lexer import INT64_MAX, INT64_MIN, lex
from intcalc.nodes import Binary, BinaryOp, Expr, Literal, Unary, UnaryOp
from intcalc.parser import parse

logger = logging.getLogger(__name__)


def _checked(value: int, what: str) -> int:
    if value < INT64_MIN or value > INT64_MAX:
        raise IntegerOverflow(what)
    return value


def _div(left: int, right: int) -> int:
    if right == 0:
        raise DivisionByZero()
    # Truncate toward zero; Python's // floors.
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return _checked(quotient, "division")


def _pow(base: int, exponent: int) -> int:
    if exponent < 0:
        raise NegativeExponent(exponent)
    if base in (0, 1) or exponent == 0:
        return 1 if exponent == 0 else base
    if base == -1:
        return 1 if exponent % 2 == 0 else -1
    # |base| >= 2 overflows within 64 steps, so the loop stays short.
    result = 1
    for _ in range(exponent):
        result = _checked(result * base, "exponentiation")
    return result


def _apply_unary(op: UnaryOp, value: int) -> int:
    if op is UnaryOp.NEG:
        return _checked(-value, "negation")
    raise EvalError(f"Unknown unary operator: {op}")


def _apply_binary(op: BinaryOp, left: int, right: int) -> int:
    if op is BinaryOp.ADD:
        return _checked(left + right, "addition")
    if op is BinaryOp.SUB:
        return _checked(left - right, "subtraction")
    if op is BinaryOp.MUL:
        return _checked(left * right, "multiplication")
    if op is BinaryOp.DIV:
        return _div(left, right)
    if op is BinaryOp.POW:
        return _pow(left, right)
    raise EvalError(f"Unknown binary operator: {op}")


def interpret(expr: Expr) -> int:
    """Reduce an expression tree to its integer value.

    Operands are evaluated left before right. Raises EvalError subclasses for
    division by zero and negative exponents, IntegerOverflow when a result
    leaves the 64-bit signed range.

    The walk is post-order over an explicit stack, so a long left-associative
    chain such as 1 + 1 + ... + 1 does not hit the recursion limit.
    """
    values: List[int] = []
    pending: List[Tuple[Expr, bool]] = [(expr, False)]
    while pending:
        node, operands_done = pending.pop()
        if isinstance(node, Literal):
            values.append(_checked(node.value, "literal"))
        elif isinstance(node, Unary):
            if operands_done:
                values.append(_apply_unary(node.op, values.pop()))
            else:
                pending.append((node, True))
                pending.append((node.operand, False))
        elif isinstance(node, Binary):
            if operands_done:
                right = values.pop()
                left = values.pop()
                values.append(_apply_binary(node.op, left, right))
            else:
                # Left is pushed last so it is reduced first.
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))
        else:
            raise EvalError(f"Unsupported AST node: {type(node).__name__}")
    return values.pop()


def evaluate(text: str) -> int:
    """Lex, parse and interpret one line of input."""
    result = interpret(parse(lex(text)))
    logger.debug("evaluated %r -> %d", text, result)
    return result
