"""Single-pass analysis orchestration."""

from __future__ import annotations

import logging

from deluge_lint.config import RuleConfig
from deluge_lint.rules import RuleSet, build_rules
from deluge_lint.rules.base import Diagnostic
from deluge_lint.scope import ScopeState, advance_scope
from deluge_lint.source import SourceLine, split_lines

logger = logging.getLogger(__name__)


def analyze(source: str, config: RuleConfig | None = None) -> list[Diagnostic]:
    """Lint Deluge source text and return diagnostics in report order.

    Whole-file rules run first and report on line 1. Every non-comment line
    then updates the scope state and runs the enabled line rules in their fixed
    order. Nothing is shared between calls.
    """
    rules = build_rules(config)
    lines = split_lines(source)

    diagnostics: list[Diagnostic] = []
    for file_rule in rules.file_rules:
        diagnostics.extend(file_rule.evaluate_file(lines))

    state = ScopeState()
    for line in lines:
        state, line_diagnostics = scan_line(state, line, rules)
        diagnostics.extend(line_diagnostics)

    logger.debug(
        "Analyzed %d lines with %d rules: %d diagnostics",
        len(lines),
        len(rules.rule_ids),
        len(diagnostics),
    )
    return diagnostics


def scan_line(
    state: ScopeState, line: SourceLine, rules: RuleSet
) -> tuple[ScopeState, list[Diagnostic]]:
    """Advance the scope state over one line and evaluate it.

    Comment lines leave the state untouched and produce nothing.
    """
    if line.is_comment:
        return (state, [])

    next_state = advance_scope(state, line.raw)
    diagnostics: list[Diagnostic] = []
    for rule in rules.line_rules:
        diagnostics.extend(rule.evaluate(line, next_state))
    return (next_state, diagnostics)
