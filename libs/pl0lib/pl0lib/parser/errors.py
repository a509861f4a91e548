"""Parse error types for the PL/0 parser."""

from __future__ import annotations

from pl0lib.diagnostics.location import SourceLocation


class ParseError(Exception):
    """Unwinds a single malformed declaration.

    The diagnostic is recorded before raising; the declaration list that
    catches this resynchronizes and drops the declaration.  It never
    escapes :meth:`pl0lib.parser.parser.Parser.parse_program`.
    """

    def __init__(
        self,
        expected: str,
        location: SourceLocation | None = None,
    ) -> None:
        super().__init__(f"Expected {expected}")
        self.expected = expected
        self.location = location


class NestingTooDeep(Exception):
    """Raised when statements, blocks or parentheses nest past the configured limit.

    Caught by :meth:`pl0lib.parser.parser.Parser.parse_program`, which
    abandons the rest of the input.
    """

    def __init__(self, limit: int, location: SourceLocation | None = None) -> None:
        super().__init__(f"Nesting deeper than {limit} levels")
        self.limit = limit
        self.location = location
