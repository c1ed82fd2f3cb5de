"""Hardcoded record-id rule."""

from __future__ import annotations

from re import ASCII, compile

from deluge_lint.rules.base import Diagnostic, Severity
from deluge_lint.scope import ScopeState
from deluge_lint.source import SourceLine

RECORD_ID_RE = compile(r"\d{18,20}", ASCII)


class HardcodedIdsRule:
    """Flags long digit runs that look like Zoho record ids."""

    rule_id = "no-hardcoded-ids"

    def __init__(self, severity: Severity = "warning") -> None:
        self.severity = severity

    def evaluate(self, line: SourceLine, scope: ScopeState) -> list[Diagnostic]:
        if RECORD_ID_RE.search(line.raw) is None:
            return []
        return [
            Diagnostic(
                line=line.index,
                message="Avoid using hardcoded IDs. Use configuration variables.",
                severity=self.severity,
                rule_id=self.rule_id,
            )
        ]
