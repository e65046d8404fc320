"""Tests for run configuration."""

import pytest

from dependent_issues.config import (
    DEFAULT_SIGNATURE,
    ActionConfig,
    parse_flag,
    parse_keywords,
)
from dependent_issues.exceptions import ConfigurationError


class TestParsers:
    """Test input value parsers."""

    @pytest.mark.parametrize("value", ["on", "true", "Yes", " 1 ", "TRUE"])
    def test_parse_flag_true(self, value: str) -> None:
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", ["off", "false", "No", "0", ""])
    def test_parse_flag_false(self, value: str) -> None:
        assert parse_flag(value) is False

    def test_parse_flag_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid flag value"):
            parse_flag("maybe")

    def test_parse_keywords(self) -> None:
        assert parse_keywords("depends on, blocked by,, ,requires") == [
            "depends on",
            "blocked by",
            "requires",
        ]
        assert parse_keywords([" a ", ""]) == ["a"]


class TestActionConfig:
    """Test ActionConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = ActionConfig()
        assert config.label == "dependent"
        assert config.keywords == ["depends on", "blocked by"]
        assert config.check_issues is False
        assert config.ignore_dependabot is False
        assert config.blocked_state == "failure"
        assert config.comment_signature == DEFAULT_SIGNATURE
        assert "{{ dependencies }}" in config.comment

    def test_keywords_from_string(self) -> None:
        config = ActionConfig(keywords="requires, needs")
        assert config.keywords == ["requires", "needs"]

    def test_flags_from_strings(self) -> None:
        config = ActionConfig(check_issues="on", ignore_dependabot="off")
        assert config.check_issues is True
        assert config.ignore_dependabot is False

    def test_blocked_state_is_normalized(self) -> None:
        assert ActionConfig(blocked_state=" Pending ").blocked_state == "pending"

    def test_placeholder_allows_whitespace(self) -> None:
        config = ActionConfig(comment="Needs {{dependencies}} first")
        assert config.comment == "Needs {{dependencies}} first"

    @pytest.mark.parametrize(
        "values, field",
        [
            ({"keywords": " , "}, "keywords"),
            ({"label": " "}, "label"),
            ({"comment": "No placeholder"}, "comment"),
            ({"blocked_state": "error"}, "blocked_state"),
            ({"check_issues": "sometimes"}, "check_issues"),
        ],
    )
    def test_load_rejects_invalid_values(self, values: dict, field: str) -> None:
        with pytest.raises(ConfigurationError, match=field):
            ActionConfig.load(**values)


class TestFromEnv:
    """Test reading GitHub Actions inputs."""

    def test_reads_inputs(self) -> None:
        config = ActionConfig.from_env(
            {
                "INPUT_LABEL": "blocked",
                "INPUT_KEYWORDS": "requires,  waits for",
                "INPUT_CHECK_ISSUES": "on",
                "INPUT_IGNORE_DEPENDABOT": "true",
                "INPUT_BLOCKED_STATE": "pending",
                "INPUT_COMMENT": "Waiting on:\n{{ dependencies }}",
            }
        )

        assert config.label == "blocked"
        assert config.keywords == ["requires", "waits for"]
        assert config.check_issues is True
        assert config.ignore_dependabot is True
        assert config.blocked_state == "pending"
        assert config.comment == "Waiting on:\n{{ dependencies }}"

    def test_blank_inputs_use_defaults(self) -> None:
        config = ActionConfig.from_env({"INPUT_LABEL": "", "INPUT_KEYWORDS": "  "})
        assert config.label == "dependent"
        assert config.keywords == ["depends on", "blocked by"]

    def test_overrides_take_precedence(self) -> None:
        config = ActionConfig.from_env(
            {"INPUT_LABEL": "blocked", "INPUT_CHECK_ISSUES": "on"},
            label="waiting",
            check_issues=None,
        )
        assert config.label == "waiting"
        assert config.check_issues is True

    def test_invalid_input(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ActionConfig.from_env({"INPUT_COMMENT": "no placeholder here"})
