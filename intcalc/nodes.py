"""AST node types produced by the parser and consumed by the interpreter."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Tuple, Union


class UnaryOp(enum.Enum):
    NEG = "-"


class BinaryOp(enum.Enum):
    POW = "^"
    MUL = "*"
    DIV = "/"
    ADD = "+"
    SUB = "-"


@dataclass(frozen=True)
class Literal:
    value: int

@dataclass(frozen=True)
class Unary:
    op: UnaryOp
    operand: Expr

@dataclass(frozen=True)
class Binary:
    left: Expr
    op: BinaryOp
    right: Expr


Expr = Union[Literal, Unary, Binary]


def to_source(expr: Expr) -> str:
    """Render an expression fully parenthesized, e.g. ``(1 + (2 * 3))``.

    Walks the tree with an explicit stack; long operator chains are deep.
    """
    parts: List[str] = []
    pending: List[Tuple[Expr, bool]] = [(expr, False)]
    while pending:
        node, operands_done = pending.pop()
        if isinstance(node, Literal):
            parts.append(str(node.value))
        elif isinstance(node, Unary):
            if operands_done:
                parts.append(f"({node.op.value}{parts.pop()})")
            else:
                pending.append((node, True))
                pending.append((node.operand, False))
        elif isinstance(node, Binary):
            if operands_done:
                right = parts.pop()
                left = parts.pop()
                parts.append(f"({left} {node.op.value} {right})")
            else:
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))
        else:
            raise TypeError(f"Unsupported AST node: {type(node).__name__}")
    return parts.pop()
