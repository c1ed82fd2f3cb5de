"""Script length rule."""

from __future__ import annotations

from deluge_lint.rules.base import Diagnostic
from deluge_lint.source import SourceLine


class MaxLinesRule:
    """Flags scripts longer than the configured number of lines.

    A Deluge script is the body of a single function, so the whole file is
    measured; no function boundaries are detected.
    """

    rule_id = "max-lines-per-function"

    def __init__(self, limit: int) -> None:
        self.limit = limit

    def evaluate_file(self, lines: list[SourceLine]) -> list[Diagnostic]:
        count = len(lines)
        if count <= self.limit:
            return []
        return [
            Diagnostic(
                line=1,
                message=f"Function length ({count}) exceeds the maximum of {self.limit} lines.",
                severity="warning",
                rule_id=self.rule_id,
            )
        ]
