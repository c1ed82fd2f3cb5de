"""Remote calls inside loops rule."""

from __future__ import annotations

from re import ASCII, compile

from deluge_lint.rules.base import Diagnostic, Severity
from deluge_lint.scope import ScopeState
from deluge_lint.source import SourceLine

# zoho.<service>.<task>(...) integration tasks, or invokeurl(...)
API_CALL_RE = compile(r"(zoho\.[a-zA-Z0-9_]+\.[a-zA-Z0-9_]+|invokeurl)\s*\(", ASCII)


class TimeoutAwarenessRule:
    """Warns about API calls made once per loop iteration."""

    rule_id = "enforce-timeout-awareness"

    def __init__(self, severity: Severity = "warning") -> None:
        self.severity = severity

    def evaluate(self, line: SourceLine, scope: ScopeState) -> list[Diagnostic]:
        if not scope.is_inside_loop or API_CALL_RE.search(line.raw) is None:
            return []
        return [
            Diagnostic(
                line=line.index,
                message=(
                    "Avoid using API calls (zoho.*, invokeurl) inside loops. "
                    'This may cause "Time limit exceeded" errors.'
                ),
                severity=self.severity,
                rule_id=self.rule_id,
            )
        ]
