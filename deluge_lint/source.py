"""Source line primitives."""

from __future__ import annotations

from dataclasses import dataclass

COMMENT_PREFIXES = ("//", "/*")
BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class SourceLine:
    """A single physical line of a Deluge script."""

    index: int
    raw: str
    trimmed: str
    code_part: str

    @property
    def is_comment(self) -> bool:
        """Whole-line comments are invisible to scope tracking and rules."""
        return self.trimmed.startswith(COMMENT_PREFIXES)


def split_lines(text: str) -> list[SourceLine]:
    """Split source text into 1-indexed lines.

    Lines are separated on ``\\n`` only, so text ending with a newline yields a
    final empty line. Carriage returns stay in ``raw`` and are removed from the
    trimmed views. A leading byte-order mark is dropped.
    """
    lines: list[SourceLine] = []
    text = text.removeprefix(BOM)
    for index, raw in enumerate(text.split("\n"), start=1):
        trimmed = raw.strip()
        lines.append(
            SourceLine(
                index=index,
                raw=raw,
                trimmed=trimmed,
                code_part=_strip_line_comment(trimmed),
            )
        )
    return lines


def _strip_line_comment(trimmed: str) -> str:
    code, _sep, _comment = trimmed.partition("//")
    return code.strip()
