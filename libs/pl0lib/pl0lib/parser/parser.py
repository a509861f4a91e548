"""Recursive-descent parser for PL/0 source code.

One method per nonterminal, one token of lookahead, no backtracking::

    program    := block '.'
    block      := ['const' ident '=' number {',' ident '=' number} ';']
                  ['var' ident {',' ident} ';']
                  {'procedure' ident ';' block ';'}
                  statement
    statement  := ident ':=' expression
                | 'call' ident
                | 'begin' statement {';' statement} 'end'
                | 'if' condition 'then' statement ['else' statement]
                | 'while' condition 'do' statement
                | 'read' ident
                | 'write' ident
                | <empty>
    condition  := 'odd' expression | expression relop expression
    expression := ['+'|'-'] term {('+'|'-') term}
    term       := factor {('*'|'/') factor}
    factor     := ident | number | '(' expression ')'

The parser never gives up: every problem is recorded in the diagnostic
collector together with the recovery that was applied, and a (possibly
degraded) tree is always returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

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
from pl0lib.diagnostics.collector import DiagnosticCollector
from pl0lib.diagnostics.diagnostic import END_OF_INPUT
from pl0lib.diagnostics.kinds import RecoveryAction
from pl0lib.diagnostics.location import SourceLocation
from pl0lib.parser.ast_nodes import (
    AssignNode,
    BlockNode,
    CallNode,
    CompoundNode,
    ConditionNode,
    ConstDeclNode,
    IfNode,
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
from pl0lib.parser.lexer import Lexer
from pl0lib.parser.tokens import CONTEXTUAL_ELSE, Token, TokenKind

logger = logging.getLogger(__name__)

# Section keywords in the order a block must declare them.
_SECTION_ORDER: tuple[str, ...] = ("const", "var", "procedure")

_STATEMENT_KEYWORDS: frozenset[str] = frozenset({"call", "begin", "if", "while", "read", "write"})


@dataclass(frozen=True)
class ParserOptions:
    """Tunable limits for a parse."""

    # Larger literals are reported and clamped.  The default is the range
    # of a signed 64-bit integer.
    max_integer: int = 2**63 - 1
    # Combined depth of nested blocks, statements and parentheses.
    max_nesting: int = 100


class Parser:
    """Recursive-descent parser for PL/0 programs.

    The cursor is an index into an immutable token tuple, so a parser
    instance owns all of its state and independent parses never interact.

    Locations are taken from the tokens. *filename* is used only for the
    end-of-input location of an empty token sequence; otherwise the file
    recorded in the first token wins.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        diagnostics: DiagnosticCollector | None = None,
        options: ParserOptions | None = None,
        filename: str = "<string>",
    ) -> None:
        self._tokens = tuple(tokens)
        self._diag = diagnostics if diagnostics is not None else DiagnosticCollector()
        self._options = options or ParserOptions()
        self._filename = self._tokens[0].location.file if self._tokens else filename
        self._pos = 0
        self._depth = 0

    @property
    def diagnostics(self) -> DiagnosticCollector:
        return self._diag

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token | None:
        """Return the current token, or None at end of input."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _advance(self) -> Token:
        """Consume and return the current token. Callers check for end first."""
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _match_keyword(self, word: str) -> Token | None:
        tok = self._peek()
        if tok is not None and tok.is_keyword(word):
            return self._advance()
        return None

    def _match_delimiter(self, symbol: str) -> Token | None:
        tok = self._peek()
        if tok is not None and tok.is_delimiter(symbol):
            return self._advance()
        return None

    def _match_operator(self, *symbols: str) -> Token | None:
        tok = self._peek()
        if tok is not None and tok.is_operator(*symbols):
            return self._advance()
        return None

    def _check_kind(self, kind: TokenKind) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind == kind

    def _check_else(self) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind == TokenKind.IDENTIFIER and tok.lexeme == CONTEXTUAL_ELSE

    def _end_location(self) -> SourceLocation:
        """Location just past the last token."""
        if not self._tokens:
            return SourceLocation(file=self._filename, line=1, column=1, offset=0)
        last = self._tokens[-1].location
        end_line = last.end_line if last.end_line is not None else last.line
        end_col = last.end_column if last.end_column is not None else last.column
        offset = None
        if last.offset is not None:
            offset = last.offset + len(self._tokens[-1].lexeme)
        return SourceLocation(file=self._filename, line=end_line, column=end_col, offset=offset)

    def _here(self) -> SourceLocation:
        tok = self._peek()
        return tok.location if tok is not None else self._end_location()

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Count one level of nesting for the duration of the block."""
        if self._depth >= self._options.max_nesting:
            raise NestingTooDeep(self._options.max_nesting, self._here())
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _report(
        self,
        expected: str,
        recovery: RecoveryAction,
        context: str = "",
        notes: tuple[str, ...] = (),
    ) -> None:
        """Report that *expected* was not found at the current position."""
        tok = self._peek()
        found = tok.describe() if tok is not None else END_OF_INPUT
        if tok is not None and tok.kind == TokenKind.UNKNOWN:
            notes = notes + (f"{tok.lexeme!r} is not a valid PL/0 character",)
        self._diag.error(
            f"Expected {expected}{context} (got {found})",
            self._here(),
            notes=notes,
            expected=expected,
            found=found,
            recovery=recovery,
        )

    def _expect_delimiter(self, symbol: str, context: str = "", notes: tuple[str, ...] = ()) -> bool:
        """Consume *symbol*, or report it missing and carry on as if present."""
        if self._match_delimiter(symbol):
            return True
        self._report(f"'{symbol}'", RecoveryAction.ASSUMED_PRESENT, context, notes)
        return False

    def _expect_keyword(self, word: str, context: str = "", notes: tuple[str, ...] = ()) -> bool:
        """Consume keyword *word*, or report it missing and carry on as if present."""
        if self._match_keyword(word):
            return True
        self._report(f"'{word}'", RecoveryAction.ASSUMED_PRESENT, context, notes)
        return False

    def _fail(self, expected: str, context: str = "") -> ParseError:
        """Report a malformed declaration and build the error that unwinds it."""
        self._report(expected, RecoveryAction.OMITTED, context)
        return ParseError(expected, self._here())

    def _integer_value(self, tok: Token) -> int:
        """Value of an integer literal, clamped to ``max_integer``."""
        limit = self._options.max_integer
        digits = tok.lexeme.lstrip("0") or "0"
        # Compare lengths first so absurdly long literals are never converted.
        if len(digits) <= len(str(limit)) and int(digits) <= limit:
            return int(digits)
        self._diag.error(
            f"Integer literal {digits} exceeds the maximum of {limit}",
            tok.location,
            expected=f"integer <= {limit}",
            found=tok.describe(),
            recovery=RecoveryAction.SATURATED,
        )
        return limit

    def _synchronize(self) -> None:
        """Skip to the next ',', ';', '.' or keyword after a malformed declaration."""
        while not self._at_end():
            tok = self._tokens[self._pos]
            if tok.kind == TokenKind.KEYWORD or tok.is_delimiter(",", ";", "."):
                return
            self._advance()

    # ------------------------------------------------------------------
    # Program and block
    # ------------------------------------------------------------------

    def parse_program(self) -> ProgramNode:
        """Parse a complete PL/0 program: ``block '.'``."""
        loc = self._here()
        try:
            block = self.parse_block()
        except NestingTooDeep as exc:
            self._diag.error(
                str(exc),
                exc.location,
                recovery=RecoveryAction.ABANDONED,
            )
            self._pos = len(self._tokens)
            return ProgramNode(
                block=BlockNode((), (), (), EmptyNode(location=loc), location=loc),
                location=loc,
            )

        self._expect_delimiter(".", " at end of program")

        if not self._at_end():
            tok = self._advance()
            self._diag.warning(
                f"Unexpected {tok.describe()} after end of program",
                tok.location,
                found=tok.describe(),
                recovery=RecoveryAction.IGNORED,
            )
            self._pos = len(self._tokens)

        return ProgramNode(block=block, location=loc)

    def parse_block(self) -> BlockNode:
        """Parse declaration sections followed by the body statement.

        Sections are accepted in any arrangement so no declaration is lost,
        but a ``const`` or ``var`` section that is out of order or repeated
        is reported.
        """
        with self._nested():
            loc = self._here()
            consts: list[ConstDeclNode] = []
            variables: list[VarDeclNode] = []
            procedures: list[ProcedureDeclNode] = []
            last_rank = -1

            while True:
                tok = self._peek()
                if tok is None or not tok.is_keyword(*_SECTION_ORDER):
                    break
                rank = _SECTION_ORDER.index(tok.lexeme)
                self._check_section_order(tok, rank, last_rank)
                last_rank = max(last_rank, rank)
                self._advance()
                if tok.lexeme == "const":
                    self._parse_const_section(consts)
                elif tok.lexeme == "var":
                    self._parse_var_section(variables)
                else:
                    proc = self._parse_procedure(tok)
                    if proc is not None:
                        procedures.append(proc)

            body = self.parse_statement()
            return BlockNode(
                consts=tuple(consts),
                vars=tuple(variables),
                procedures=tuple(procedures),
                body=body,
                location=loc,
            )

    def _check_section_order(self, tok: Token, rank: int, last_rank: int) -> None:
        if rank > last_rank or tok.lexeme == "procedure":
            return
        if rank == last_rank:
            message = f"Duplicate '{tok.lexeme}' section; list all of them in one section"
        else:
            message = (
                f"'{tok.lexeme}' declarations must come before "
                f"'{_SECTION_ORDER[last_rank]}' declarations"
            )
        self._diag.error(
            message,
            tok.location,
            found=tok.describe(),
            recovery=RecoveryAction.ACCEPTED,
        )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_const_section(self, out: list[ConstDeclNode]) -> None:
        """Parse ``decl {',' decl} ';'`` after the ``const`` keyword."""
        while True:
            try:
                out.append(self.parse_const_decl())
            except ParseError:
                self._synchronize()
            if self._match_delimiter(","):
                continue
            if self._check_kind(TokenKind.IDENTIFIER):
                self._report("','", RecoveryAction.ASSUMED_PRESENT, " between constant declarations")
                continue
            break
        self._expect_delimiter(";", " after constant declarations")

    def parse_const_decl(self) -> ConstDeclNode:
        """Parse ``ident '=' number``."""
        name_tok = self._peek()
        if name_tok is None or name_tok.kind != TokenKind.IDENTIFIER:
            raise self._fail("identifier", " in constant declaration")
        self._advance()
        name = name_tok.lexeme

        eq = self._peek()
        if eq is not None and eq.is_operator(":="):
            self._report("'='", RecoveryAction.SUBSTITUTED, f" after constant name '{name}'")
            self._advance()
        elif not self._match_operator("="):
            raise self._fail("'='", f" after constant name '{name}'")

        value_tok = self._peek()
        if value_tok is None or value_tok.kind != TokenKind.INTEGER:
            raise self._fail("number", f" as the value of constant '{name}'")
        self._advance()

        return ConstDeclNode(
            name=name,
            value=self._integer_value(value_tok),
            location=name_tok.location,
        )

    def _parse_var_section(self, out: list[VarDeclNode]) -> None:
        """Parse ``ident {',' ident} ';'`` after the ``var`` keyword."""
        while True:
            try:
                out.append(self.parse_var_decl())
            except ParseError:
                self._synchronize()
            if self._match_delimiter(","):
                continue
            if self._check_kind(TokenKind.IDENTIFIER):
                self._report("','", RecoveryAction.ASSUMED_PRESENT, " between variable names")
                continue
            break
        self._expect_delimiter(";", " after variable declarations")

    def parse_var_decl(self) -> VarDeclNode:
        """Parse a single variable name."""
        tok = self._peek()
        if tok is None or tok.kind != TokenKind.IDENTIFIER:
            raise self._fail("identifier", " in variable declaration")
        self._advance()
        return VarDeclNode(name=tok.lexeme, location=tok.location)

    def _parse_procedure(self, keyword: Token) -> ProcedureDeclNode | None:
        """Parse ``ident ';' block ';'`` after the ``procedure`` keyword.

        A procedure without a name is still parsed, so its body is checked,
        but it is left out of the tree.
        """
        name_tok = self._peek()
        if name_tok is not None and name_tok.kind == TokenKind.IDENTIFIER:
            self._advance()
        else:
            self._report("procedure name", RecoveryAction.OMITTED, " after 'procedure'")
            name_tok = None

        self._expect_delimiter(";", " after procedure header")
        block = self.parse_block()
        self._expect_delimiter(";", " after procedure body")

        if name_tok is None:
            return None
        return ProcedureDeclNode(name=name_tok.lexeme, block=block, location=keyword.location)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _starts_statement(self, tok: Token) -> bool:
        if tok.kind == TokenKind.IDENTIFIER:
            return tok.lexeme != CONTEXTUAL_ELSE
        return tok.kind == TokenKind.KEYWORD and tok.lexeme in _STATEMENT_KEYWORDS

    def _can_follow_statement(self, tok: Token) -> bool:
        if tok.kind == TokenKind.IDENTIFIER:
            return tok.lexeme == CONTEXTUAL_ELSE
        return tok.is_delimiter(";", ".") or tok.is_keyword("end")

    def parse_statement(self) -> StmtNode:
        """Parse one statement; an absent statement yields ``EmptyNode``."""
        with self._nested():
            tok = self._peek()
            if tok is None:
                return EmptyNode(location=self._end_location())

            if tok.kind == TokenKind.IDENTIFIER and tok.lexeme != CONTEXTUAL_ELSE:
                return self._parse_assignment()
            if tok.is_keyword("call"):
                return self._parse_named(CallNode)
            if tok.is_keyword("read"):
                return self._parse_named(ReadNode)
            if tok.is_keyword("write"):
                return self._parse_named(WriteNode)
            if tok.is_keyword("begin"):
                return self._parse_compound()
            if tok.is_keyword("if"):
                return self._parse_if()
            if tok.is_keyword("while"):
                return self._parse_while()

            if self._can_follow_statement(tok):
                return EmptyNode(location=tok.location)

            # Neither starts nor ends a statement; drop it and move on.
            self._report("statement", RecoveryAction.SKIPPED)
            self._advance()
            return EmptyNode(location=tok.location)

    def _parse_assignment(self) -> StmtNode:
        """Parse ``ident ':=' expression``."""
        name_tok = self._advance()
        name = name_tok.lexeme
        context = f" in assignment to '{name}'"

        if not self._match_operator(":="):
            tok = self._peek()
            if tok is not None and tok.is_operator("="):
                self._report("':='", RecoveryAction.SUBSTITUTED, context)
                self._advance()
            elif tok is not None and self._starts_expression(tok):
                self._report("':='", RecoveryAction.ASSUMED_PRESENT, context)
            else:
                self._report("':='", RecoveryAction.PLACEHOLDER, context)
                return EmptyNode(location=name_tok.location)

        value = self.parse_expression()
        return AssignNode(name=name, value=value, location=name_tok.location)

    def _parse_named(self, node_type: type[CallNode] | type[ReadNode] | type[WriteNode]) -> StmtNode:
        """Parse ``call ident``, ``read ident`` or ``write ident``."""
        keyword = self._advance()
        tok = self._peek()
        if tok is None or tok.kind != TokenKind.IDENTIFIER:
            self._report("identifier", RecoveryAction.PLACEHOLDER, f" after '{keyword.lexeme}'")
            return EmptyNode(location=keyword.location)
        self._advance()
        return node_type(name=tok.lexeme, location=keyword.location)

    def _parse_compound(self) -> CompoundNode:
        """Parse ``'begin' statement {';' statement} 'end'``."""
        begin = self._advance()
        statements: list[StmtNode] = [self.parse_statement()]
        while True:
            if self._match_delimiter(";"):
                statements.append(self.parse_statement())
                continue
            tok = self._peek()
            if tok is not None and self._starts_statement(tok):
                self._report("';'", RecoveryAction.ASSUMED_PRESENT, " between statements")
                statements.append(self.parse_statement())
                continue
            break
        self._expect_keyword(
            "end",
            " to close 'begin'",
            notes=(f"'begin' is at {begin.location}",),
        )
        return CompoundNode(statements=tuple(statements), location=begin.location)

    def _parse_if(self) -> IfNode:
        """Parse ``'if' condition 'then' statement ['else' statement]``."""
        if_tok = self._advance()
        condition = self.parse_condition()
        self._expect_keyword("then", " after 'if' condition")
        then_branch = self.parse_statement()
        else_branch: StmtNode | None = None
        if self._check_else():
            self._advance()
            else_branch = self.parse_statement()
        return IfNode(
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
            location=if_tok.location,
        )

    def _parse_while(self) -> WhileNode:
        """Parse ``'while' condition 'do' statement``."""
        while_tok = self._advance()
        condition = self.parse_condition()
        self._expect_keyword("do", " after 'while' condition")
        body = self.parse_statement()
        return WhileNode(condition=condition, body=body, location=while_tok.location)

    # ------------------------------------------------------------------
    # Conditions
    # ------------------------------------------------------------------

    def parse_condition(self) -> ConditionNode:
        """Parse ``'odd' expression`` or ``expression relop expression``."""
        odd = self._match_keyword("odd")
        if odd is not None:
            return OddConditionNode(expr=self.parse_expression(), location=odd.location)

        loc = self._here()
        left = self.parse_expression()
        op_tok = self._match_operator(*RELATIONAL_OPS)
        if op_tok is None:
            # A missing left operand has already been reported.
            if not isinstance(left, EmptyNode):
                self._report(
                    "relational operator",
                    RecoveryAction.PLACEHOLDER,
                    f" after '{render_expr(left)}'",
                )
            return EmptyNode(location=loc)
        right = self.parse_expression()
        return RelationalConditionNode(op=op_tok.lexeme, left=left, right=right, location=op_tok.location)

    # ------------------------------------------------------------------
    # Expression parsing (left-associative chains)
    # ------------------------------------------------------------------

    def _starts_expression(self, tok: Token) -> bool:
        return (
            tok.kind in (TokenKind.IDENTIFIER, TokenKind.INTEGER)
            or tok.is_delimiter("(")
            or tok.is_operator(*SIGN_OPS)
        )

    def parse_expression(self) -> ExprNode:
        """Parse ``['+'|'-'] term {('+'|'-') term}``.

        A leading sign becomes a ``UnaryOp`` around the first term only.
        """
        sign = self._match_operator(*SIGN_OPS)
        left = self._parse_term()
        if sign is not None:
            left = UnaryOp(op=sign.lexeme, operand=left, location=sign.location)
        while True:
            tok = self._match_operator(*ADDITIVE_OPS)
            if tok is None:
                break
            right = self._parse_term()
            left = BinaryOp(op=tok.lexeme, left=left, right=right, location=tok.location)
        return left

    def _parse_term(self) -> ExprNode:
        """Left-associative ``*`` and ``/``."""
        left = self._parse_factor()
        while True:
            tok = self._match_operator(*MULTIPLICATIVE_OPS)
            if tok is None:
                break
            right = self._parse_factor()
            left = BinaryOp(op=tok.lexeme, left=left, right=right, location=tok.location)
        return left

    def _parse_factor(self) -> ExprNode:
        """Parse an identifier, a number, or a parenthesized expression."""
        tok = self._peek()

        if tok is not None and tok.kind == TokenKind.IDENTIFIER:
            self._advance()
            return Identifier(name=tok.lexeme, location=tok.location)

        if tok is not None and tok.kind == TokenKind.INTEGER:
            self._advance()
            return IntLiteral(value=self._integer_value(tok), location=tok.location)

        if tok is not None and tok.is_delimiter("("):
            with self._nested():
                self._advance()
                inner = self.parse_expression()
                self._expect_delimiter(")", " to close '('", notes=(f"'(' is at {tok.location}",))
            return ParenExpr(expr=inner, location=tok.location)

        # Unrecognized characters are consumed; anything else may still be
        # meaningful to an enclosing production and is left in place.
        if tok is not None and tok.kind == TokenKind.UNKNOWN:
            self._report("expression", RecoveryAction.SKIPPED)
            self._advance()
        else:
            self._report("expression", RecoveryAction.PLACEHOLDER)
        return EmptyNode(location=tok.location if tok is not None else self._end_location())


# ------------------------------------------------------------------
# Convenience functions
# ------------------------------------------------------------------


def parse_tokens(
    tokens: Sequence[Token],
    options: ParserOptions | None = None,
    filename: str = "<string>",
) -> tuple[ProgramNode, DiagnosticCollector]:
    """Parse an already tokenized PL/0 program.

    *filename* names the source only when *tokens* is empty; the tokens
    carry their own file otherwise.

    Returns:
        A ``(program_ast, diagnostics)`` tuple.
    """
    diag = DiagnosticCollector()
    program = Parser(tokens, diag, options, filename).parse_program()
    logger.debug(
        "parsed %d tokens with %d diagnostic(s)",
        len(tokens),
        len(diag.get_all()),
    )
    return program, diag


def parse(
    source: str,
    filename: str = "<string>",
    options: ParserOptions | None = None,
) -> tuple[ProgramNode, DiagnosticCollector]:
    """Tokenize and parse PL/0 source code.

    Returns:
        A ``(program_ast, diagnostics)`` tuple.
    """
    tokens = Lexer(source, filename).tokenize()
    logger.debug("%s: %d tokens", filename, len(tokens))
    return parse_tokens(tokens, options, filename)
