"""Variable naming rule."""

from __future__ import annotations

from re import ASCII, compile

from deluge_lint.rules.base import Diagnostic, Severity
from deluge_lint.scope import ScopeState
from deluge_lint.source import SourceLine

ASSIGNMENT_RE = compile(r"^\s*([a-zA-Z0-9_]+)\s*=", ASCII)
CAMEL_CASE_RE = compile(r"^[a-z][a-zA-Z0-9]*$", ASCII)


class CamelCaseVarsRule:
    """Checks that the target of a leading assignment is camelCase."""

    rule_id = "camelcase-vars"

    def __init__(self, severity: Severity = "warning") -> None:
        self.severity = severity

    def evaluate(self, line: SourceLine, scope: ScopeState) -> list[Diagnostic]:
        match = ASSIGNMENT_RE.match(line.raw)
        if match is None:
            return []

        name = match.group(1)
        if CAMEL_CASE_RE.match(name):
            return []
        return [
            Diagnostic(
                line=line.index,
                message=f"Variable '{name}' should be in camelCase.",
                severity=self.severity,
                rule_id=self.rule_id,
            )
        ]
