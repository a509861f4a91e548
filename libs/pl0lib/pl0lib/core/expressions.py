"""Expression AST nodes and infix rendering for PL/0."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass

from pl0lib.diagnostics.location import SourceLocation

# Operator vocabularies, by grammar position.
SIGN_OPS: frozenset[str] = frozenset({"+", "-"})
ADDITIVE_OPS: frozenset[str] = frozenset({"+", "-"})
MULTIPLICATIVE_OPS: frozenset[str] = frozenset({"*", "/"})
RELATIONAL_OPS: frozenset[str] = frozenset({"=", "<>", "<", "<=", ">", ">="})


class ExprNode(ABC):
    """Base type for expression nodes. All concrete subclasses are frozen dataclasses."""


@dataclass(frozen=True)
class IntLiteral(ExprNode):
    """Integer literal: 42, 0, 1000000."""

    value: int
    location: SourceLocation | None = None


@dataclass(frozen=True)
class Identifier(ExprNode):
    """Identifier reference: variable or constant name."""

    name: str
    location: SourceLocation | None = None


@dataclass(frozen=True)
class BinaryOp(ExprNode):
    """Binary operation: left op right. Op is one of +, -, *, /."""

    op: str
    left: ExprNode
    right: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class UnaryOp(ExprNode):
    """Leading sign applied to the first term of an expression: +operand, -operand."""

    op: str
    operand: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class ParenExpr(ExprNode):
    """Parenthesized expression: (expr)."""

    expr: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class EmptyNode(ExprNode):
    """Placeholder for an absent construct.

    Used as the empty statement and in place of a factor or condition the
    parser could not make sense of.
    """

    location: SourceLocation | None = None


def render_expr(expr: ExprNode) -> str:
    """
    Render an expression back to PL/0 infix source.

    Grouping is reproduced from ``ParenExpr`` nodes only; the tree shape
    of operator chains already matches the source text.

    Raises:
        TypeError: If *expr* is not an expression node.
    """
    if isinstance(expr, IntLiteral):
        return str(expr.value)
    elif isinstance(expr, Identifier):
        return expr.name
    elif isinstance(expr, BinaryOp):
        return f"{render_expr(expr.left)} {expr.op} {render_expr(expr.right)}"
    elif isinstance(expr, UnaryOp):
        return f"{expr.op}{render_expr(expr.operand)}"
    elif isinstance(expr, ParenExpr):
        return f"({render_expr(expr.expr)})"
    elif isinstance(expr, EmptyNode):
        return "<missing>"
    else:
        raise TypeError(f"Cannot render expression type: {type(expr).__name__}")
