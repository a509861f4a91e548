"""Diagnostic collector for accumulating messages during parsing."""

from __future__ import annotations

from pl0lib.diagnostics.diagnostic import Diagnostic
from pl0lib.diagnostics.kinds import DiagnosticSeverity, RecoveryAction
from pl0lib.diagnostics.location import SourceLocation


class DiagnosticCollector:
    """Accumulates diagnostics in the order they are reported."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def _add(
        self,
        severity: DiagnosticSeverity,
        message: str,
        location: SourceLocation | None,
        notes: tuple[str, ...],
        expected: str | None,
        found: str | None,
        recovery: RecoveryAction | None,
    ) -> None:
        self._diagnostics.append(
            Diagnostic(severity, message, location, notes, expected, found, recovery)
        )

    def error(
        self,
        message: str,
        location: SourceLocation | None = None,
        *,
        notes: tuple[str, ...] = (),
        expected: str | None = None,
        found: str | None = None,
        recovery: RecoveryAction | None = None,
    ) -> None:
        """Record an error diagnostic."""
        self._add(DiagnosticSeverity.ERROR, message, location, notes, expected, found, recovery)

    def warning(
        self,
        message: str,
        location: SourceLocation | None = None,
        *,
        notes: tuple[str, ...] = (),
        expected: str | None = None,
        found: str | None = None,
        recovery: RecoveryAction | None = None,
    ) -> None:
        """Record a warning diagnostic."""
        self._add(DiagnosticSeverity.WARNING, message, location, notes, expected, found, recovery)

    def info(
        self,
        message: str,
        location: SourceLocation | None = None,
        *,
        notes: tuple[str, ...] = (),
    ) -> None:
        """Record an informational diagnostic."""
        self._add(DiagnosticSeverity.INFO, message, location, notes, None, None, None)

    def has_errors(self) -> bool:
        """Return True if any error diagnostics have been recorded."""
        return any(d.severity == DiagnosticSeverity.ERROR for d in self._diagnostics)

    def get_all(self) -> list[Diagnostic]:
        """Return a copy of all collected diagnostics."""
        return list(self._diagnostics)

    def errors(self) -> list[Diagnostic]:
        """Return only the error diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.ERROR]

    def format_all(self) -> str:
        """Format all diagnostics as a newline-separated string."""
        return "\n".join(str(d) for d in self._diagnostics)
