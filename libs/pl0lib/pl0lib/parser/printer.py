"""Textual renderings of tokens and syntax trees for display."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import fields, is_dataclass
from typing import Any

from pl0lib.core.expressions import (
    BinaryOp,
    EmptyNode,
    Identifier,
    IntLiteral,
    ParenExpr,
    UnaryOp,
)
from pl0lib.parser.ast_nodes import (
    AssignNode,
    BlockNode,
    CallNode,
    CompoundNode,
    ConstDeclNode,
    IfNode,
    Node,
    OddConditionNode,
    ProcedureDeclNode,
    ProgramNode,
    ReadNode,
    RelationalConditionNode,
    VarDeclNode,
    WhileNode,
    WriteNode,
)
from pl0lib.parser.tokens import Token


def format_tokens(tokens: Iterable[Token]) -> list[str]:
    """One ``"<Kind>: <payload>"`` line per token, in source order."""
    return [str(tok) for tok in tokens]


# ---------------------------------------------------------------------------
# S-expression form
# ---------------------------------------------------------------------------


def format_ast(node: Node, indent: str = "  ") -> str:
    """Render *node* as an indented S-expression mirroring the grammar.

    Declarations and statements get one line each; conditions and
    expressions are written inline, with ``(group ...)`` marking source
    parentheses::

        (program
          (block
            (const (a 1))
            (var b)
            (begin
              (assign b (+ a 1)))))
    """
    return "\n".join(_lines(node, indent))


def _wrap(head: str, children: list[list[str]], indent: str) -> list[str]:
    if not children:
        return [f"({head})"]
    lines = [f"({head}"]
    for child in children:
        lines.extend(indent + line for line in child)
    lines[-1] += ")"
    return lines


def _lines(node: Node, indent: str) -> list[str]:
    if isinstance(node, ProgramNode):
        return _wrap("program", [_lines(node.block, indent)], indent)
    elif isinstance(node, BlockNode):
        children: list[list[str]] = []
        if node.consts:
            children.append(["(const " + " ".join(f"({c.name} {c.value})" for c in node.consts) + ")"])
        if node.vars:
            children.append(["(var " + " ".join(v.name for v in node.vars) + ")"])
        children.extend(_lines(proc, indent) for proc in node.procedures)
        children.append(_lines(node.body, indent))
        return _wrap("block", children, indent)
    elif isinstance(node, ProcedureDeclNode):
        return _wrap(f"procedure {node.name}", [_lines(node.block, indent)], indent)
    elif isinstance(node, ConstDeclNode):
        return [f"(const ({node.name} {node.value}))"]
    elif isinstance(node, VarDeclNode):
        return [f"(var {node.name})"]
    elif isinstance(node, CompoundNode):
        return _wrap("begin", [_lines(s, indent) for s in node.statements], indent)
    elif isinstance(node, IfNode):
        branches = [[_inline(node.condition)], _lines(node.then_branch, indent)]
        if node.else_branch is not None:
            branches.append(_wrap("else", [_lines(node.else_branch, indent)], indent))
        return _wrap("if", branches, indent)
    elif isinstance(node, WhileNode):
        return _wrap("while", [[_inline(node.condition)], _lines(node.body, indent)], indent)
    elif isinstance(node, AssignNode):
        return [f"(assign {node.name} {_inline(node.value)})"]
    elif isinstance(node, CallNode):
        return [f"(call {node.name})"]
    elif isinstance(node, ReadNode):
        return [f"(read {node.name})"]
    elif isinstance(node, WriteNode):
        return [f"(write {node.name})"]
    else:
        return [_inline(node)]


def _inline(node: Node) -> str:
    """Single-line form of a condition or expression."""
    if isinstance(node, IntLiteral):
        return str(node.value)
    elif isinstance(node, Identifier):
        return node.name
    elif isinstance(node, (BinaryOp, RelationalConditionNode)):
        return f"({node.op} {_inline(node.left)} {_inline(node.right)})"
    elif isinstance(node, UnaryOp):
        return f"({node.op} {_inline(node.operand)})"
    elif isinstance(node, ParenExpr):
        return f"(group {_inline(node.expr)})"
    elif isinstance(node, OddConditionNode):
        return f"(odd {_inline(node.expr)})"
    elif isinstance(node, EmptyNode):
        return "(empty)"
    else:
        raise TypeError(f"Cannot format node type: {type(node).__name__}")


# ---------------------------------------------------------------------------
# JSON-ready form
# ---------------------------------------------------------------------------


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert *node* to nested plain dicts, e.g. for ``json.dumps``.

    Every dict carries the node class under ``"node"``; locations are left out.
    """
    result: dict[str, Any] = {"node": type(node).__name__}
    for f in fields(node):
        if f.name == "location":
            continue
        result[f.name] = _to_plain(getattr(node, f.name))
    return result


def _to_plain(value: Any) -> Any:
    if is_dataclass(value):
        return ast_to_dict(value)
    if isinstance(value, tuple):
        return [_to_plain(v) for v in value]
    return value
