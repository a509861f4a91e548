"""Diagnostic message representation for PL/0."""

from __future__ import annotations

from dataclasses import dataclass

from pl0lib.diagnostics.kinds import DiagnosticSeverity, RecoveryAction
from pl0lib.diagnostics.location import SourceLocation

# Stands in for the offending token when the input ran out.
END_OF_INPUT = "end of input"


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic message.

    Syntax diagnostics also record what construct was *expected*, what
    was *found* instead (a token description or :data:`END_OF_INPUT`),
    and the *recovery* the parser applied before continuing.
    """

    severity: DiagnosticSeverity
    message: str
    location: SourceLocation | None = None
    notes: tuple[str, ...] = ()
    expected: str | None = None
    found: str | None = None
    recovery: RecoveryAction | None = None

    @property
    def at_end_of_input(self) -> bool:
        return self.found == END_OF_INPUT

    def __str__(self) -> str:
        loc = f"{self.location}: " if self.location else ""
        text = f"{loc}{self.severity}: {self.message}"
        if self.recovery is not None:
            text += f" ({self.recovery})"
        return text
