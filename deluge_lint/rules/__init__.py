"""Rules package."""

from dataclasses import dataclass

from deluge_lint.config import DEFAULT_RULE_LEVELS, MAX_LINES_RULE_ID, RuleConfig
from deluge_lint.rules.base import Diagnostic, FileRule, LineRule, severity_for
from deluge_lint.rules.camelcase import CamelCaseVarsRule
from deluge_lint.rules.hardcoded_ids import HardcodedIdsRule
from deluge_lint.rules.max_lines import MaxLinesRule
from deluge_lint.rules.semicolon import RequireSemicolonRule
from deluge_lint.rules.timeout_awareness import TimeoutAwarenessRule

__all__ = [
    "Diagnostic",
    "FileRule",
    "LineRule",
    "RuleInfo",
    "RuleSet",
    "build_rules",
    "list_rule_info",
]

# Per-line evaluation order; diagnostics on one line follow it.
LINE_RULE_CLASSES = (
    HardcodedIdsRule,
    RequireSemicolonRule,
    CamelCaseVarsRule,
    TimeoutAwarenessRule,
)

UNUSED_MAPS_RULE_ID = "no-unused-maps"


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing."""

    rule_id: str
    name: str
    description: str
    default: str | int
    level: str | int
    implemented: bool


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Enabled rules, split by how often they run."""

    file_rules: tuple[FileRule, ...]
    line_rules: tuple[LineRule, ...]

    @property
    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in (*self.file_rules, *self.line_rules)]


def build_rules(config: RuleConfig | None = None) -> RuleSet:
    """Instantiate the rules enabled by ``config`` with their severities."""
    effective = config or RuleConfig()

    file_rules: list[FileRule] = []
    if effective.max_lines is not None:
        file_rules.append(MaxLinesRule(effective.max_lines))

    line_rules: list[LineRule] = []
    for rule_cls in LINE_RULE_CLASSES:
        level = effective.level(rule_cls.rule_id)
        if level == "off":
            continue
        line_rules.append(rule_cls(severity_for(level)))

    return RuleSet(file_rules=tuple(file_rules), line_rules=tuple(line_rules))


def list_rule_info(config: RuleConfig | None = None) -> list[RuleInfo]:
    """Return metadata for every rule id the configuration schema knows."""
    effective = config or RuleConfig()
    classes = {rule_cls.rule_id: rule_cls for rule_cls in LINE_RULE_CLASSES}

    info: list[RuleInfo] = []
    for rule_id in ("no-hardcoded-ids", "require-semicolon", "camelcase-vars"):
        info.append(_level_rule_info(classes[rule_id], effective))
    info.append(
        RuleInfo(
            rule_id=MAX_LINES_RULE_ID,
            name=MaxLinesRule.__name__,
            description=_summary(MaxLinesRule.__doc__),
            default="off",
            level=effective.max_lines if effective.max_lines is not None else "off",
            implemented=True,
        )
    )
    info.append(
        RuleInfo(
            rule_id=UNUSED_MAPS_RULE_ID,
            name="",
            description="Maps that are created but never read.",
            default=DEFAULT_RULE_LEVELS[UNUSED_MAPS_RULE_ID],
            level=effective.level(UNUSED_MAPS_RULE_ID),
            implemented=False,
        )
    )
    info.append(_level_rule_info(TimeoutAwarenessRule, effective))
    return info


def _level_rule_info(rule_cls: type, config: RuleConfig) -> RuleInfo:
    return RuleInfo(
        rule_id=rule_cls.rule_id,
        name=rule_cls.__name__,
        description=_summary(rule_cls.__doc__),
        default=DEFAULT_RULE_LEVELS[rule_cls.rule_id],
        level=config.level(rule_cls.rule_id),
        implemented=True,
    )


def _summary(doc: str | None) -> str:
    lines = (doc or "").strip().splitlines()
    return lines[0] if lines else ""
