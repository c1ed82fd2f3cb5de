"""File-level linting: exclusion, reading and per-file reports."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from deluge_lint.config import LintConfig
from deluge_lint.engine import analyze
from deluge_lint.rules.base import Diagnostic

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".dg", ".ds")


@dataclass(slots=True)
class FileReport:
    """Outcome of linting one file."""

    path: str
    status: Literal["ok", "excluded", "failed"] = "ok"
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: str | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for item in self.diagnostics if item.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for item in self.diagnostics if item.severity == "warning")

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "status": self.status,
            "diagnostics": [item.to_dict() for item in self.diagnostics],
            "error": self.error,
        }


def lint_paths(paths: Iterable[Path], config: LintConfig, root: Path) -> list[FileReport]:
    """Lint files and directories, returning one report per source file."""
    reports: list[FileReport] = []
    for path in iter_source_files(paths):
        display = relative_posix(path, root)
        if is_excluded(display, config.exclude):
            logger.debug("Skipping %s: excluded by configuration", display)
            reports.append(FileReport(path=display, status="excluded"))
            continue
        reports.append(lint_file(path, config, display=display))
    return reports


def lint_file(path: Path, config: LintConfig, *, display: str | None = None) -> FileReport:
    """Read and analyze one file; read failures become a failed report."""
    label = display or path.as_posix()
    try:
        source = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", label, exc)
        return FileReport(path=label, status="failed", error=_describe_read_error(exc))
    return FileReport(path=label, diagnostics=analyze(source, config.rules))


def iter_source_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Yield files as given and Deluge sources found under directories."""
    for path in paths:
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix in SOURCE_SUFFIXES:
                    yield child
        else:
            yield path


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    """Return True when a root-relative posix path matches any exclude glob.

    Patterns use ``fnmatch`` rules: ``*`` crosses ``/`` and ``**/x.dg`` needs
    at least one directory, so it does not match a root-level ``x.dg``.
    """
    return any(fnmatch.fnmatch(path, pattern) for pattern in patterns)


def relative_posix(path: Path, root: Path) -> str:
    """Path relative to ``root`` with ``/`` separators, or as given if outside it."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def has_errors(reports: Iterable[FileReport]) -> bool:
    """True when any file failed or reported an error-severity diagnostic."""
    return any(report.status == "failed" or report.error_count > 0 for report in reports)


def _describe_read_error(exc: OSError | UnicodeDecodeError) -> str:
    if isinstance(exc, UnicodeDecodeError):
        return "file is not valid UTF-8"
    if isinstance(exc, FileNotFoundError):
        return "file not found"
    return exc.strerror or str(exc)
