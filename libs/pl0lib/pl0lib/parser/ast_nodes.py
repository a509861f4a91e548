"""AST node types for the PL/0 parser.

Expression nodes are defined in ``pl0lib.core.expressions`` and re-exported
here for convenience.  This module adds condition-, statement-, declaration-
and program-level nodes.  The node set is closed: consumers dispatch on the
concrete class with ``isinstance`` and treat anything else as a bug.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pl0lib.core.expressions import (
    BinaryOp,
    EmptyNode,
    ExprNode,
    Identifier,
    IntLiteral,
    ParenExpr,
    UnaryOp,
)
from pl0lib.diagnostics.location import SourceLocation

# Re-export expression nodes so consumers can import everything from
# ``pl0lib.parser.ast_nodes``.
__all__ = [
    # Expression nodes (re-exported from core)
    "ExprNode",
    "IntLiteral",
    "Identifier",
    "BinaryOp",
    "UnaryOp",
    "ParenExpr",
    "EmptyNode",
    # Conditions
    "OddConditionNode",
    "RelationalConditionNode",
    "ConditionNode",
    # Statements
    "AssignNode",
    "CallNode",
    "CompoundNode",
    "IfNode",
    "WhileNode",
    "ReadNode",
    "WriteNode",
    "StmtNode",
    # Declarations
    "ConstDeclNode",
    "VarDeclNode",
    "ProcedureDeclNode",
    # Structure
    "BlockNode",
    "ProgramNode",
    "Node",
]


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OddConditionNode:
    """``odd expr``."""

    expr: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class RelationalConditionNode:
    """``left op right`` with op one of =, <>, <, <=, >, >=."""

    op: str
    left: ExprNode
    right: ExprNode
    location: SourceLocation | None = None


# EmptyNode stands in for a condition that could not be parsed.
ConditionNode = Union[OddConditionNode, RelationalConditionNode, EmptyNode]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssignNode:
    """``name := expr``."""

    name: str
    value: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class CallNode:
    """``call name``."""

    name: str
    location: SourceLocation | None = None


@dataclass(frozen=True)
class CompoundNode:
    """``begin stmt; stmt; ... end``."""

    statements: tuple[StmtNode, ...]
    location: SourceLocation | None = None


@dataclass(frozen=True)
class IfNode:
    """``if cond then stmt [else stmt]``."""

    condition: ConditionNode
    then_branch: StmtNode
    else_branch: StmtNode | None = None
    location: SourceLocation | None = None


@dataclass(frozen=True)
class WhileNode:
    """``while cond do stmt``."""

    condition: ConditionNode
    body: StmtNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class ReadNode:
    """``read name``."""

    name: str
    location: SourceLocation | None = None


@dataclass(frozen=True)
class WriteNode:
    """``write name``."""

    name: str
    location: SourceLocation | None = None


# Union of all statement types the parser can produce.
StmtNode = Union[
    AssignNode,
    CallNode,
    CompoundNode,
    IfNode,
    WhileNode,
    ReadNode,
    WriteNode,
    EmptyNode,
]


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstDeclNode:
    """``name = number`` inside a ``const`` section."""

    name: str
    value: int
    location: SourceLocation | None = None


@dataclass(frozen=True)
class VarDeclNode:
    """``name`` inside a ``var`` section."""

    name: str
    location: SourceLocation | None = None


@dataclass(frozen=True)
class ProcedureDeclNode:
    """``procedure name; block;``: a named block."""

    name: str
    block: BlockNode
    location: SourceLocation | None = None


# ---------------------------------------------------------------------------
# Block and program
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BlockNode:
    """Declarations in source order followed by the body statement."""

    consts: tuple[ConstDeclNode, ...]
    vars: tuple[VarDeclNode, ...]
    procedures: tuple[ProcedureDeclNode, ...]
    body: StmtNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class ProgramNode:
    """Top-level program: one block terminated by ``.``."""

    block: BlockNode
    location: SourceLocation | None = None


Node = Union[
    ProgramNode,
    BlockNode,
    ConstDeclNode,
    VarDeclNode,
    ProcedureDeclNode,
    StmtNode,
    ConditionNode,
    ExprNode,
]
