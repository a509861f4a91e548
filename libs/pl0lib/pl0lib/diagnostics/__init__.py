"""PL/0 diagnostics subpackage (Layer 0 -- zero internal dependencies)."""

from pl0lib.diagnostics.collector import DiagnosticCollector
from pl0lib.diagnostics.diagnostic import END_OF_INPUT, Diagnostic
from pl0lib.diagnostics.kinds import DiagnosticSeverity, RecoveryAction
from pl0lib.diagnostics.location import SourceLocation

__all__ = [
    "SourceLocation",
    "DiagnosticSeverity",
    "RecoveryAction",
    "Diagnostic",
    "END_OF_INPUT",
    "DiagnosticCollector",
]
