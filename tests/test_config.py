"""Tests for config file loading and merging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from recentfiles.cli import Options
from recentfiles.config import (
    RecentFilesConfig,
    find_config_file,
    load_config,
    merge_cli_with_config,
)


def test_find_config_recentfiles_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "recentfiles.toml"
    config_file.write_text("count = 30\n")
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_file_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "recentfiles.toml").write_text("count = 30\n")
    dot_config = tmp_path / ".recentfiles.toml"
    dot_config.write_text("count = 40\n")
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.recentfiles]\ncount = 30\n")
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "recentfiles.toml"
    config_file.write_text("count = 30\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_load_config_flat(tmp_path: Path) -> None:
    config_file = tmp_path / "recentfiles.toml"
    config_file.write_text('count = 30\neditor = "code -w"\nthreshold = 1000\n')
    config = load_config(config_file)
    assert config.count == 30
    assert config.editor == "code -w"
    assert config.threshold == 1000
    # Unset fields should be None (not set)
    assert config.extend_exclude is None


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.recentfiles]\npreview-lines = 50\n")
    assert load_config(config_file).preview_lines == 50


def test_load_config_kebab_case_sections(tmp_path: Path) -> None:
    config_file = tmp_path / "recentfiles.toml"
    config_file.write_text(
        "[scan]\n"
        'extend-exclude = ["drafts/", "*.log"]\n'
        "respect-gitignore = true\n"
        "\n"
        "[picker]\n"
        "preview-lines = 40\n"
    )
    config = load_config(config_file)
    assert config.extend_exclude == ["drafts/", "*.log"]
    assert config.respect_gitignore is True
    assert config.preview_lines == 40


def test_load_config_malformed_toml(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config_file = tmp_path / "recentfiles.toml"
    config_file.write_text("this is not valid toml [[[")
    with caplog.at_level(logging.WARNING, logger="recentfiles"):
        config = load_config(config_file)
    assert config == RecentFilesConfig()
    assert "malformed config" in caplog.text


def test_load_config_warns_unknown_keys(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config_file = tmp_path / "recentfiles.toml"
    config_file.write_text("unknown_key = true\ncount = 5\n")
    with caplog.at_level(logging.WARNING, logger="recentfiles"):
        config = load_config(config_file)
    assert config.count == 5
    assert "unrecognized config key: unknown_key" in caplog.text


def test_load_config_rejects_wrong_types(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config_file = tmp_path / "recentfiles.toml"
    config_file.write_text('count = "many"\nthreshold = -1\nexclude = "build/"\neditor = "vim"\n')
    with caplog.at_level(logging.WARNING, logger="recentfiles"):
        config = load_config(config_file)
    assert config.count is None
    assert config.threshold is None
    assert config.exclude is None
    assert config.editor == "vim"
    assert "invalid value" in caplog.text


def _make_options(**overrides: object) -> Options:
    values: dict[str, object] = {
        "root": ".",
        "count": None,
        "patterns": [],
        "exclude": None,
        "extend_exclude": [],
        "respect_gitignore": None,
        "no_config": False,
        "verbose": 0,
        "version": False,
    }
    values.update(overrides)
    return Options(**values)  # type: ignore[arg-type]


def test_merge_no_config() -> None:
    opts = _make_options(count=5)
    assert merge_cli_with_config(opts, config=None, explicit_flags=set()).count == 5


def test_merge_config_overrides_defaults() -> None:
    config = RecentFilesConfig(count=30, editor="nano", extend_exclude=["vendor/"])
    result = merge_cli_with_config(_make_options(), config=config, explicit_flags=set())
    assert result.count == 30
    assert result.editor == "nano"
    assert result.extend_exclude == ["vendor/"]


def test_merge_explicit_cli_overrides_config() -> None:
    opts = _make_options(count=3, editor="vim")
    config = RecentFilesConfig(count=30, editor="nano")
    result = merge_cli_with_config(opts, config=config, explicit_flags={"count", "editor"})
    assert result.count == 3
    assert result.editor == "vim"


def test_find_config_pyproject_with_non_table_tool(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("tool = 1\n")
    assert find_config_file(tmp_path) is None


def test_load_config_pyproject_with_non_table_tool(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("tool = 1\n")
    assert load_config(config_file) == RecentFilesConfig()
