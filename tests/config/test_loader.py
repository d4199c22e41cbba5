"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence and validation
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from covgate.config.loader import (
    GLOBAL_CONFIG_PATH,
    REPO_CONFIG_RELPATH,
    _deep_merge,
    _load_yaml,
    load_config,
)
from covgate.core.errors import ConfigError, ErrorCode


def _write_repo_config(root: Path, text: str) -> Path:
    path = root / REPO_CONFIG_RELPATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1}, {"a": 2}) == {"a": 2}

    def test_nested_merge(self) -> None:
        base = {"gates": {"non_blocking": ["mutation"], "max_remediation_items": 5}}
        override = {"gates": {"max_remediation_items": 7}}

        assert _deep_merge(base, override) == {
            "gates": {"non_blocking": ["mutation"], "max_remediation_items": 7}
        }

    def test_does_not_mutate_base(self) -> None:
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    """Tests for load_config function."""

    @pytest.fixture(autouse=True)
    def _no_global_config(self, tmp_path: Path):  # type: ignore[no-untyped-def]
        with patch("covgate.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            yield

    def test_returns_defaults_when_no_files(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.logging.level == "WARNING"
        assert config.gates.thresholds.is_empty()
        assert config.gates.max_remediation_items == 10
        assert config.reports.coverage_format is None

    def test_loads_repo_config(self, tmp_path: Path) -> None:
        _write_repo_config(
            tmp_path,
            "gates:\n"
            "  thresholds:\n"
            "    minDiffCoveragePct: 80\n"
            "    min_mutation_score_pct: 60\n"
            "  non_blocking: [mutation]\n"
            "reports:\n"
            "  coverage_format: jacoco\n",
        )

        config = load_config(tmp_path)

        assert config.gates.thresholds.min_diff_coverage_pct == 80
        assert config.gates.thresholds.min_mutation_score_pct == 60
        assert config.gates.thresholds.min_line_or_branch_pct is None
        assert config.gates.non_blocking == ["mutation"]
        assert config.reports.coverage_format == "jacoco"

    def test_global_config_below_repo_config(self, tmp_path: Path) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text("logging:\n  level: ERROR\ngates:\n  max_remediation_items: 3\n")
        _write_repo_config(tmp_path, "gates:\n  max_remediation_items: 4\n")

        with patch("covgate.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)

        assert config.logging.level == "ERROR"
        assert config.gates.max_remediation_items == 4

    def test_explicit_config_file(self, tmp_path: Path) -> None:
        _write_repo_config(tmp_path, "gates:\n  max_remediation_items: 4\n")
        explicit = tmp_path / "ci.yaml"
        explicit.write_text("gates:\n  max_remediation_items: 9\n")

        config = load_config(tmp_path, config_file=explicit)

        assert config.gates.max_remediation_items == 9

    def test_missing_explicit_config_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, config_file=tmp_path / "missing.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        _write_repo_config(tmp_path, "logging:\n  level: INFO\n")

        with patch.dict(os.environ, {"COVGATE__LOGGING__LEVEL": "DEBUG"}):
            config = load_config(tmp_path)

        assert config.logging.level == "DEBUG"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        _write_repo_config(tmp_path, "logging:\n  level: INFO\n")

        config = load_config(tmp_path, logging={"level": "ERROR"})

        assert config.logging.level == "ERROR"

    @pytest.mark.parametrize(
        "text",
        [
            "gates:\n  max_remediation_items: 0\n",
            "gates:\n  non_blocking: [speed]\n",
            "gates:\n  thresholds:\n    minDiffCoveragePct: 150\n",
            "gates:\n  thresholds:\n    minFooPct: 10\n",
            "reports:\n  coverage_format: cobertura\n",
        ],
    )
    def test_raises_config_error_for_invalid_value(self, tmp_path: Path, text: str) -> None:
        _write_repo_config(tmp_path, text)

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_in_user_config(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert "covgate" in str(GLOBAL_CONFIG_PATH)
