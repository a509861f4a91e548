"""PL/0 core subpackage (Layer 1 -- depends only on diagnostics)."""

from pl0lib.core.expressions import (
    ADDITIVE_OPS,
    MULTIPLICATIVE_OPS,
    RELATIONAL_OPS,
    SIGN_OPS,
    BinaryOp,
    EmptyNode,
    ExprNode,
    Identifier,
    IntLiteral,
    ParenExpr,
    UnaryOp,
    render_expr,
)

__all__ = [
    "SIGN_OPS",
    "ADDITIVE_OPS",
    "MULTIPLICATIVE_OPS",
    "RELATIONAL_OPS",
    "ExprNode",
    "IntLiteral",
    "Identifier",
    "BinaryOp",
    "UnaryOp",
    "ParenExpr",
    "EmptyNode",
    "render_expr",
]
