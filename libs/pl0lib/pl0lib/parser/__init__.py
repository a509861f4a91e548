"""PL/0 parser subpackage (Layer 2 -- depends on core, diagnostics)."""

from pl0lib.parser.ast_nodes import (
    AssignNode,
    BlockNode,
    CallNode,
    CompoundNode,
    ConditionNode,
    ConstDeclNode,
    IfNode,
    Node,
    OddConditionNode,
    ProcedureDeclNode,
    ProgramNode,
    ReadNode,
    RelationalConditionNode,
    StmtNode,
    VarDeclNode,
    WhileNode,
    WriteNode,
)
from pl0lib.parser.errors import NestingTooDeep, ParseError
from pl0lib.parser.lexer import Lexer, tokenize
from pl0lib.parser.parser import Parser, ParserOptions, parse, parse_tokens
from pl0lib.parser.printer import ast_to_dict, format_ast, format_tokens
from pl0lib.parser.tokens import KEYWORDS, Token, TokenKind

__all__ = [
    "TokenKind",
    "Token",
    "KEYWORDS",
    "Lexer",
    "tokenize",
    "ProgramNode",
    "BlockNode",
    "ConstDeclNode",
    "VarDeclNode",
    "ProcedureDeclNode",
    "AssignNode",
    "CallNode",
    "CompoundNode",
    "IfNode",
    "WhileNode",
    "ReadNode",
    "WriteNode",
    "StmtNode",
    "OddConditionNode",
    "RelationalConditionNode",
    "ConditionNode",
    "Node",
    "Parser",
    "ParserOptions",
    "parse",
    "parse_tokens",
    "format_tokens",
    "format_ast",
    "ast_to_dict",
    "ParseError",
    "NestingTooDeep",
]
