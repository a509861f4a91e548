"""Severity levels and recovery actions attached to PL/0 diagnostics."""

from __future__ import annotations

from enum import Enum


class DiagnosticSeverity(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def __str__(self) -> str:
        return self.value


class RecoveryAction(Enum):
    """What the parser did to keep going after reporting a problem."""

    ASSUMED_PRESENT = "assumed present"
    SUBSTITUTED = "treated as the expected token"
    SKIPPED = "token skipped"
    PLACEHOLDER = "replaced by placeholder"
    OMITTED = "declaration omitted"
    ACCEPTED = "accepted as written"
    SATURATED = "clamped to the maximum"
    IGNORED = "ignored"
    ABANDONED = "rest of input skipped"

    def __str__(self) -> str:
        return self.value
