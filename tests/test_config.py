"""Tests for rule-config resolution and config file discovery."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from deluge_lint.config import (
    DEFAULT_EXCLUDE,
    DEFAULT_RULE_LEVELS,
    RuleConfig,
    default_config_template,
    load_lint_config,
)


def test_rule_config_defaults() -> None:
    config = RuleConfig.from_mapping(None)
    assert dict(config.levels) == DEFAULT_RULE_LEVELS
    assert config.max_lines is None
    assert config.level("require-semicolon") == "error"
    assert config.level("not-a-rule") == "off"


def test_rule_config_ignores_unknown_keys_and_null_values() -> None:
    config = RuleConfig.from_mapping({"custom-rule": "error", "camelcase-vars": None})
    assert config.level("camelcase-vars") == "warn"
    assert "custom-rule" not in config.levels


def test_rule_config_levels_are_case_insensitive() -> None:
    config = RuleConfig.from_mapping({"camelcase-vars": " ERROR ", "no-hardcoded-ids": "Off"})
    assert config.level("camelcase-vars") == "error"
    assert config.level("no-hardcoded-ids") == "off"


def test_invalid_level_disables_rule_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="deluge_lint.config"):
        config = RuleConfig.from_mapping({"require-semicolon": "loud", "camelcase-vars": 2})
    assert config.level("require-semicolon") == "off"
    assert config.level("camelcase-vars") == "off"
    assert "require-semicolon" in caplog.text
    assert "camelcase-vars" in caplog.text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(100, 100), (0, 0), ("off", None), ("100", None), (True, None), (-5, None), (2.5, None)],
)
def test_max_lines_values(raw: object, expected: int | None) -> None:
    config = RuleConfig.from_mapping({"max-lines-per-function": raw})
    assert config.max_lines == expected


def test_to_dict_reports_max_lines_as_off_when_disabled() -> None:
    payload = RuleConfig().to_dict()
    assert payload["max-lines-per-function"] == "off"
    assert payload["no-unused-maps"] == "warn"


def test_load_without_files_returns_defaults(tmp_path: Path) -> None:
    config = load_lint_config(tmp_path)
    assert config.source is None
    assert config.exclude == list(DEFAULT_EXCLUDE)
    assert config.env.app == "crm"
    assert config.env.version == "2.0"


def test_load_delugerc_json(tmp_path: Path) -> None:
    (tmp_path / ".delugerc").write_text(
        json.dumps(
            {
                "rules": {"require-semicolon": "warn", "max-lines-per-function": 40},
                "exclude": ["legacy/**"],
                "env": {"app": "creator", "version": "3.1"},
                "format": "JSON",
            }
        ),
        encoding="utf-8",
    )

    config = load_lint_config(tmp_path)
    assert config.source == str(tmp_path.resolve() / ".delugerc")
    assert config.rules.level("require-semicolon") == "warn"
    assert config.rules.max_lines == 40
    assert config.raw_rules == {"require-semicolon": "warn", "max-lines-per-function": 40}
    assert config.exclude == ["legacy/**"]
    assert config.env.app == "creator"
    assert config.format == "json"


def test_found_config_without_exclude_excludes_nothing(tmp_path: Path) -> None:
    (tmp_path / ".delugerc").write_text('{"rules": {}}', encoding="utf-8")
    assert load_lint_config(tmp_path).exclude == []


def test_rc_file_wins_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.deluge.rules]\n"camelcase-vars" = "error"\n', encoding="utf-8"
    )
    (tmp_path / ".delugerc.toml").write_text(
        '[rules]\n"camelcase-vars" = "off"\n', encoding="utf-8"
    )
    config = load_lint_config(tmp_path)
    assert config.rules.level("camelcase-vars") == "off"
    assert config.source == str(tmp_path.resolve() / ".delugerc.toml")


def test_pyproject_tool_section(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(
            [
                '[tool."deluge-lint"]',
                'exclude = ["vendor/**"]',
                "",
                '[tool."deluge-lint".rules]',
                '"max-lines-per-function" = 10',
            ]
        ),
        encoding="utf-8",
    )
    config = load_lint_config(tmp_path)
    assert config.rules.max_lines == 10
    assert config.exclude == ["vendor/**"]


def test_pyproject_without_section_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "x", "deluge": {"rules": {"no-hardcoded-ids": "error"}}}),
        encoding="utf-8",
    )
    config = load_lint_config(tmp_path)
    assert config.rules.level("no-hardcoded-ids") == "error"
    assert config.source == str(tmp_path.resolve() / "package.json")


def test_config_is_found_in_parent_directory(tmp_path: Path) -> None:
    (tmp_path / ".delugerc.json").write_text(
        '{"rules": {"camelcase-vars": "error"}}', encoding="utf-8"
    )
    nested = tmp_path / "scripts" / "crm"
    nested.mkdir(parents=True)
    config = load_lint_config(nested)
    assert config.rules.level("camelcase-vars") == "error"


def test_explicit_config_path(tmp_path: Path) -> None:
    (tmp_path / "lint.json").write_text('{"rules": {"require-semicolon": "off"}}', encoding="utf-8")
    config = load_lint_config(tmp_path, config_path=Path("lint.json"))
    assert config.rules.level("require-semicolon") == "off"


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        load_lint_config(tmp_path, config_path=Path("missing.json"))


def test_unparseable_delugerc_raises(tmp_path: Path) -> None:
    (tmp_path / ".delugerc").write_text("{rules:", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON or YAML"):
        load_lint_config(tmp_path)


def test_load_delugerc_yaml(tmp_path: Path) -> None:
    (tmp_path / ".delugerc").write_text(
        "rules:\n"
        "  camelcase-vars: error\n"
        "  max-lines-per-function: 60\n"
        "exclude:\n"
        "  - legacy/**\n"
        "env:\n"
        "  app: books\n",
        encoding="utf-8",
    )

    config = load_lint_config(tmp_path)
    assert config.source == str(tmp_path.resolve() / ".delugerc")
    assert config.rules.level("camelcase-vars") == "error"
    assert config.rules.max_lines == 60
    assert config.exclude == ["legacy/**"]
    assert config.env.app == "books"


def test_load_delugerc_yml_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / ".delugerc.yml").write_text(
        "rules:\n  require-semicolon: off\n  max-lines-per-function: off\n",
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="deluge_lint.config"):
        config = load_lint_config(tmp_path)
    assert config.source == str(tmp_path.resolve() / ".delugerc.yml")
    assert config.rules.level("require-semicolon") == "off"
    assert config.rules.max_lines is None
    assert caplog.text == ""


def test_yaml_rc_must_hold_a_mapping(tmp_path: Path) -> None:
    (tmp_path / ".delugerc.yaml").write_text("- camelcase-vars\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_lint_config(tmp_path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".delugerc.yaml").write_text("rules: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_lint_config(tmp_path)


def test_config_file_with_byte_order_mark(tmp_path: Path) -> None:
    (tmp_path / ".delugerc.json").write_text(
        "\ufeff" '{"rules": {"camelcase-vars": "off"}}', encoding="utf-8"
    )
    assert load_lint_config(tmp_path).rules.level("camelcase-vars") == "off"


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"rules": ["camelcase-vars"]}, "rules must be a table"),
        ({"exclude": "tests/**"}, "exclude must be a list"),
        ({"env": {"app": 3}}, "env.app must be a string"),
    ],
)
def test_shape_errors_raise(tmp_path: Path, payload: dict[str, object], message: str) -> None:
    (tmp_path / ".delugerc").write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_lint_config(tmp_path)


def test_default_template_round_trips_through_loader(tmp_path: Path) -> None:
    template = default_config_template()
    assert json.loads(template)["rules"]["max-lines-per-function"] == 100

    (tmp_path / ".delugerc").write_text(template, encoding="utf-8")
    config = load_lint_config(tmp_path)
    assert config.rules.max_lines == 100
    assert config.rules.level("no-hardcoded-ids") == "error"
    assert config.exclude == list(DEFAULT_EXCLUDE)


def test_invalid_json_in_json_file_raises(tmp_path: Path) -> None:
    (tmp_path / ".delugerc.json").write_text("{rules:", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON in"):
        load_lint_config(tmp_path)
