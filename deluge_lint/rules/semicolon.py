"""Statement terminator rule."""

from __future__ import annotations

from re import ASCII, compile

from deluge_lint.rules.base import Diagnostic, Severity
from deluge_lint.scope import ScopeState
from deluge_lint.source import SourceLine

ALLOWED_ENDINGS = (";", "{", "}", ":")
CONTROL_FLOW_RE = compile(r"^(if|else|for|while)\b", ASCII)


class RequireSemicolonRule:
    """Requires statements to end with a semicolon."""

    rule_id = "require-semicolon"

    def __init__(self, severity: Severity = "error") -> None:
        self.severity = severity

    def evaluate(self, line: SourceLine, scope: ScopeState) -> list[Diagnostic]:
        code = line.code_part
        if not code or code.endswith(ALLOWED_ENDINGS):
            return []
        # Control-flow headers commonly put their brace on the next line.
        if CONTROL_FLOW_RE.match(code):
            return []
        return [
            Diagnostic(
                line=line.index,
                message="Missing semicolon at the end of the line.",
                severity=self.severity,
                rule_id=self.rule_id,
            )
        ]
