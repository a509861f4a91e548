"""Lexer (tokenizer) for PL/0 source code."""

from __future__ import annotations

from collections.abc import Iterator

from pl0lib.diagnostics.location import SourceLocation
from pl0lib.parser.tokens import KEYWORDS, Token, TokenKind

_WHITESPACE = frozenset(" \t\n\r")
_DIGITS = frozenset("0123456789")

# Single-character tokens that need no lookahead.
_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.OPERATOR,
    "-": TokenKind.OPERATOR,
    "*": TokenKind.OPERATOR,
    "/": TokenKind.OPERATOR,
    "=": TokenKind.OPERATOR,
    ",": TokenKind.DELIMITER,
    ".": TokenKind.DELIMITER,
    ";": TokenKind.DELIMITER,
    "(": TokenKind.DELIMITER,
    ")": TokenKind.DELIMITER,
}

# First character -> characters that may complete a two-character operator.
# A first character that is not itself an operator (``:``) is UNKNOWN alone.
_TWO_CHAR: dict[str, tuple[str, ...]] = {
    ":": ("=",),
    "<": ("=", ">"),
    ">": ("=",),
}


class _Scanner:
    """Cursor for a single pass over the source."""

    def __init__(self, source: str, filename: str) -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        """Return character at current position + offset, or '' at EOF."""
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        """Consume and return the current character, updating line/col."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _make(self, kind: TokenKind, begin: int, line: int, col: int) -> Token:
        """Build a token spanning ``source[begin:pos]``."""
        location = SourceLocation(
            file=self._filename,
            line=line,
            column=col,
            offset=begin,
            end_line=self._line,
            end_column=self._col,
        )
        return Token(kind, self._source[begin : self._pos], location)

    def _scan_number(self) -> None:
        """Consume the rest of an integer literal. First digit already consumed."""
        while self._peek() in _DIGITS:
            self._advance()

    def _scan_word(self) -> None:
        """Consume the rest of an identifier or keyword. First letter already consumed."""
        while not self._at_end() and (self._peek().isalpha() or self._peek() in _DIGITS):
            self._advance()

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def scan(self) -> Iterator[Token]:
        while not self._at_end():
            ch = self._peek()

            if ch in _WHITESPACE:
                self._advance()
                continue

            begin, line, col = self._pos, self._line, self._col
            self._advance()

            # --- Number literal ---
            if ch in _DIGITS:
                self._scan_number()
                yield self._make(TokenKind.INTEGER, begin, line, col)
                continue

            # --- Identifier / keyword ---
            if ch.isalpha():
                self._scan_word()
                lexeme = self._source[begin : self._pos]
                kind = TokenKind.KEYWORD if lexeme in KEYWORDS else TokenKind.IDENTIFIER
                yield self._make(kind, begin, line, col)
                continue

            # --- Two-character operators (longest match first) ---
            if ch in _TWO_CHAR:
                if self._peek() in _TWO_CHAR[ch]:
                    self._advance()
                    yield self._make(TokenKind.OPERATOR, begin, line, col)
                elif ch == ":":
                    yield self._make(TokenKind.UNKNOWN, begin, line, col)
                else:
                    yield self._make(TokenKind.OPERATOR, begin, line, col)
                continue

            # --- Single-character tokens ---
            if ch in _SINGLE_CHAR:
                yield self._make(_SINGLE_CHAR[ch], begin, line, col)
                continue

            # --- Unknown character ---
            yield self._make(TokenKind.UNKNOWN, begin, line, col)


class Lexer:
    """Tokenize PL/0 source into a flat token stream.

    The lexer never reports diagnostics: a character it cannot classify
    becomes a one-character ``UNKNOWN`` token and scanning moves on.
    A ``Lexer`` holds only the source. Each call to :meth:`tokenize` or
    :meth:`iter_tokens` scans from the beginning with its own cursor, so
    passes over the same lexer never affect one another.
    """

    def __init__(self, source: str, filename: str = "<string>") -> None:
        self._source = source
        self._filename = filename

    def iter_tokens(self) -> Iterator[Token]:
        """Lazily yield tokens in source order until the input is exhausted."""
        return _Scanner(self._source, self._filename).scan()

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source. No end-of-input token is appended."""
        return list(self.iter_tokens())


def tokenize(source: str, filename: str = "<string>") -> list[Token]:
    """Tokenize *source* with a fresh :class:`Lexer`."""
    return Lexer(source, filename).tokenize()
