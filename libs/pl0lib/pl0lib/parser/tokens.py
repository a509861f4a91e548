"""Token definitions for the PL/0 lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pl0lib.diagnostics.location import SourceLocation


class TokenKind(Enum):
    """Token categories recognized by the PL/0 lexer.

    The member value is the display name used in token listings.
    """

    IDENTIFIER = "Identifier"
    INTEGER = "IntegerLiteral"
    OPERATOR = "Operator"
    DELIMITER = "Delimiter"
    KEYWORD = "Keyword"
    UNKNOWN = "Unknown"


# Reserved words. Identifiers are checked against this set during lexing.
KEYWORDS: frozenset[str] = frozenset(
    {
        "begin",
        "end",
        "if",
        "then",
        "while",
        "do",
        "call",
        "const",
        "var",
        "procedure",
        "odd",
        "read",
        "write",
    }
)

# ``else`` is recognized by the parser from an identifier token.
CONTEXTUAL_ELSE = "else"

OPERATORS: frozenset[str] = frozenset(
    {"+", "-", "*", "/", "=", "<", ">", "<=", ">=", "<>", ":="}
)

DELIMITERS: frozenset[str] = frozenset({",", ".", ";", "(", ")"})

# Digits converted per step; stays well below the interpreter's
# str-to-int digit limit.
_CHUNK_DIGITS = 1000


def _digits_to_int(digits: str) -> int:
    value = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start : start + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


@dataclass(frozen=True)
class Token:
    """A single token produced by the PL/0 lexer."""

    kind: TokenKind
    lexeme: str
    location: SourceLocation

    @property
    def value(self) -> int | str:
        """Payload: the integer value of a literal, the lexeme otherwise.

        Literals of any length are converted exactly.
        """
        if self.kind == TokenKind.INTEGER:
            return _digits_to_int(self.lexeme)
        return self.lexeme

    def is_keyword(self, *words: str) -> bool:
        return self.kind == TokenKind.KEYWORD and self.lexeme in words

    def is_operator(self, *symbols: str) -> bool:
        return self.kind == TokenKind.OPERATOR and self.lexeme in symbols

    def is_delimiter(self, *symbols: str) -> bool:
        return self.kind == TokenKind.DELIMITER and self.lexeme in symbols

    def describe(self) -> str:
        """Short form used in diagnostics, e.g. ``Identifier 'x'``."""
        return f"{self.kind.value} {self.lexeme!r}"

    def __str__(self) -> str:
        if self.kind == TokenKind.INTEGER:
            # Same text as str(self.value) without converting huge literals.
            return f"{self.kind.value}: {self.lexeme.lstrip('0') or '0'}"
        return f"{self.kind.value}: {self.lexeme}"
