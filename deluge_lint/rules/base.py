"""Base rule protocols and diagnostic model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol

from deluge_lint.config import Level
from deluge_lint.scope import ScopeState
from deluge_lint.source import SourceLine

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single violation reported on one line."""

    line: int
    message: str
    severity: Severity
    rule_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "message": self.message,
            "severity": self.severity,
            "rule_id": self.rule_id,
        }


class LineRule(Protocol):
    """Protocol for rules evaluated once per code line."""

    rule_id: str

    def evaluate(self, line: SourceLine, scope: ScopeState) -> list[Diagnostic]:
        """Evaluate one line with the scope state after that line's braces."""


class FileRule(Protocol):
    """Protocol for rules evaluated once per file."""

    rule_id: str

    def evaluate_file(self, lines: list[SourceLine]) -> list[Diagnostic]:
        """Evaluate the complete line sequence."""


def severity_for(level: Level) -> Severity:
    """Map a configured level onto the severity of emitted diagnostics."""
    return "error" if level == "error" else "warning"
