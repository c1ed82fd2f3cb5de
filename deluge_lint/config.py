"""Configuration loading for deluge-lint."""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

logger = logging.getLogger(__name__)

Level = Literal["error", "warn", "off"]
LEVELS: tuple[Level, ...] = ("error", "warn", "off")

RC_FILENAMES = (
    ".delugerc",
    ".delugerc.json",
    ".delugerc.yaml",
    ".delugerc.yml",
    ".delugerc.toml",
    "deluge.toml",
)
YAML_SUFFIXES = (".yaml", ".yml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("deluge", "deluge-lint", "deluge_lint")
PACKAGE_JSON_FILENAME = "package.json"
PACKAGE_JSON_KEY = "deluge"

MAX_LINES_RULE_ID = "max-lines-per-function"

# Rules configured with a level, in evaluation order. no-unused-maps is part of
# the schema but has no evaluator yet.
DEFAULT_RULE_LEVELS: dict[str, Level] = {
    "no-hardcoded-ids": "warn",
    "require-semicolon": "error",
    "camelcase-vars": "warn",
    "no-unused-maps": "warn",
    "enforce-timeout-awareness": "warn",
}

DEFAULT_EXCLUDE = ("scripts/deprecated/**", "tests/**")


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Validated per-rule settings consumed by the engine."""

    levels: Mapping[str, Level] = field(default_factory=lambda: dict(DEFAULT_RULE_LEVELS))
    max_lines: int | None = None

    def level(self, rule_id: str) -> Level:
        return self.levels.get(rule_id, DEFAULT_RULE_LEVELS.get(rule_id, "off"))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {rule_id: self.level(rule_id) for rule_id in DEFAULT_RULE_LEVELS}
        payload[MAX_LINES_RULE_ID] = self.max_lines if self.max_lines is not None else "off"
        return payload

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> RuleConfig:
        """Resolve raw rule settings.

        Missing keys fall back to their defaults and unknown keys are ignored.
        A value that cannot be understood disables its rule instead of failing.
        """
        raw = mapping or {}
        levels: dict[str, Level] = {}
        for rule_id, default in DEFAULT_RULE_LEVELS.items():
            value = raw.get(rule_id)
            levels[rule_id] = default if value is None else _parse_level(rule_id, value)
        return cls(levels=levels, max_lines=_parse_max_lines(raw.get(MAX_LINES_RULE_ID)))


@dataclass(slots=True)
class EnvConfig:
    """Target application metadata carried in the config file."""

    app: str = "crm"
    version: str = "2.0"

    def to_dict(self) -> dict[str, Any]:
        return {"app": self.app, "version": self.version}


@dataclass(slots=True)
class LintConfig:
    """Runtime configuration values resolved from project files."""

    rules: RuleConfig = field(default_factory=RuleConfig)
    raw_rules: dict[str, Any] = field(default_factory=dict)
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    env: EnvConfig = field(default_factory=EnvConfig)
    format: str = "human"
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rules": self.rules.to_dict(),
            "raw_rules": dict(self.raw_rules),
            "exclude": list(self.exclude),
            "env": self.env.to_dict(),
            "format": self.format,
            "source": self.source,
        }


def load_lint_config(root: Path, config_path: Path | None = None) -> LintConfig:
    """Load config from an explicit path or the nearest config file above ``root``."""
    root = root.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (root / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _read_config_file(resolved)
        return _from_mapping(mapping or {}, source=str(resolved))

    for directory in (root, *root.parents):
        for filename in (*RC_FILENAMES, PYPROJECT_FILENAME, PACKAGE_JSON_FILENAME):
            candidate = directory / filename
            if not candidate.is_file():
                continue
            mapping = _read_config_file(candidate)
            if mapping is None:
                continue
            logger.debug("Using configuration from %s", candidate)
            return _from_mapping(mapping, source=str(candidate))

    logger.debug("No configuration found above %s, using defaults", root)
    return LintConfig()


def default_config_template() -> str:
    """Return the starter ``.delugerc`` written by ``deluge-lint init``."""
    initial = {
        "rules": {
            "no-hardcoded-ids": "error",
            "require-semicolon": "error",
            "camelcase-vars": "warn",
            MAX_LINES_RULE_ID: 100,
            "no-unused-maps": "warn",
            "enforce-timeout-awareness": "warn",
        },
        "exclude": list(DEFAULT_EXCLUDE),
        "env": EnvConfig().to_dict(),
    }
    return json.dumps(initial, indent=2) + "\n"


def _read_config_file(path: Path) -> dict[str, Any] | None:
    """Return the config mapping held by ``path``, or None if it holds none."""
    if path.suffix == ".toml":
        loaded = _load_toml(path)
        if path.name == PYPROJECT_FILENAME:
            return _find_pyproject_tool_section(loaded)
        return loaded
    if path.suffix in YAML_SUFFIXES:
        return _load_yaml(path)
    if path.suffix == "":
        return _load_json_or_yaml(path)

    loaded = _load_json(path)
    if path.name == PACKAGE_JSON_FILENAME:
        section = loaded.get(PACKAGE_JSON_KEY)
        return section if isinstance(section, dict) else None
    return loaded


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _load_json(path: Path) -> dict[str, Any]:
    try:
        loaded = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return loaded


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8-sig") as file_obj:
            loaded = yaml.safe_load(file_obj) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"{path} must contain a mapping")
    return loaded


def _load_json_or_yaml(path: Path) -> dict[str, Any]:
    """Extensionless rc files hold JSON, or YAML when they do not parse as JSON."""
    text = path.read_text(encoding="utf-8-sig")
    try:
        loaded = json.loads(text)
    except json.JSONDecodeError:
        try:
            loaded = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid JSON or YAML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"{path} must contain a JSON or YAML mapping")
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> LintConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    env_mapping = _as_table(mapping.get("env"), "env")

    format_value = str(mapping.get("format", "human")).lower()
    if format_value not in {"human", "json"}:
        format_value = "human"

    return LintConfig(
        rules=RuleConfig.from_mapping(rules_mapping),
        raw_rules=dict(rules_mapping),
        exclude=_as_str_list(mapping.get("exclude"), "exclude"),
        env=EnvConfig(
            app=_as_str(env_mapping.get("app", "crm"), "env.app"),
            version=_as_str(env_mapping.get("version", "2.0"), "env.version"),
        ),
        format=format_value,
        source=source,
    )


def _parse_level(rule_id: str, raw: Any) -> Level:
    # YAML 1.1 loads a bare off as false.
    if raw is False:
        return "off"
    if isinstance(raw, str):
        value = raw.strip().lower()
        for level in LEVELS:
            if value == level:
                return level
    logger.warning("Invalid level %r for rule %s; the rule is disabled", raw, rule_id)
    return "off"


def _parse_max_lines(raw: Any) -> int | None:
    if raw is None:
        return None
    if raw is False or (isinstance(raw, str) and raw.strip().lower() == "off"):
        return None
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    logger.warning(
        "Invalid limit %r for rule %s; the rule is disabled", raw, MAX_LINES_RULE_ID
    )
    return None


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value
