"""Tests for pageforge.config models and YAML loader."""

import os
from pathlib import Path

import pytest
from unittest.mock import patch
from pydantic import ValidationError

from pageforge.config.models import PageforgeConfig
from pageforge.config.loader import DEFAULT_CONFIG_TEMPLATE, load_config, _expand_env_vars


# ── PageforgeConfig defaults ───────────────────────────────────────


class TestPageforgeConfigDefaults:
    def test_default_source_dir(self, sample_config):
        assert sample_config.source_dir == "."

    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_page_pattern(self, sample_config):
        assert sample_config.page_pattern == "**/*"


class TestPageforgeConfigValidation:
    def test_silent_log_level_accepted(self):
        assert PageforgeConfig(log_level="silent").log_level == "silent"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            PageforgeConfig(log_level="verbose")

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            PageforgeConfig(log_format="xml")

    def test_empty_page_pattern_rejected(self):
        with pytest.raises(ValidationError):
            PageforgeConfig(page_pattern="")


# ── load_config ────────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg = load_config()
        assert cfg == PageforgeConfig()

    def test_cli_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "pageforge.yaml").write_text("log_level: debug\n")
        explicit = tmp_path / "custom.yaml"
        explicit.write_text("log_level: warn\nsource_dir: content\n")
        cfg = load_config(str(explicit))
        assert cfg.log_level == "warn"
        assert Path(cfg.source_dir) == (tmp_path / "content").resolve()

    def test_project_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "pageforge.yaml").write_text("log_level: error\n")
        assert load_config().log_level == "error"

    def test_empty_file_is_skipped(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "pageforge.yaml").write_text("")
        assert load_config() == PageforgeConfig()

    def test_invalid_yaml(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("log_level: [oops\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(bad))

    def test_invalid_values(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("log_level: chatty\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(str(bad))

    def test_env_vars_expanded(self, tmp_path):
        path = tmp_path / "env.yaml"
        path.write_text("source_dir: ${PAGEFORGE_TEST_DIR}/data\n")
        with patch.dict(os.environ, {"PAGEFORGE_TEST_DIR": "/srv/site"}):
            assert load_config(str(path)).source_dir == "/srv/site/data"

    def test_default_template_is_valid(self, tmp_path):
        path = tmp_path / "pageforge.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        cfg = load_config(str(path))
        assert Path(cfg.source_dir) == tmp_path.resolve()
        assert cfg.model_dump(exclude={"source_dir"}) == PageforgeConfig().model_dump(
            exclude={"source_dir"}
        )

    def test_relative_source_dir_follows_config_file(self, tmp_path, monkeypatch):
        project = tmp_path / "project"
        project.mkdir()
        (project / "pageforge.yaml").write_text("source_dir: data\n")
        monkeypatch.chdir(tmp_path)
        cfg = load_config(str(project / "pageforge.yaml"))
        assert Path(cfg.source_dir) == (project / "data").resolve()

    def test_absolute_source_dir_kept(self, tmp_path):
        path = tmp_path / "abs.yaml"
        path.write_text(f"source_dir: {tmp_path / 'elsewhere'}\n")
        assert load_config(str(path)).source_dir == str(tmp_path / "elsewhere")

    def test_source_dir_left_unset_keeps_default(self, tmp_path):
        path = tmp_path / "quiet.yaml"
        path.write_text("log_level: silent\n")
        assert load_config(str(path)).source_dir == "."

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="expected a mapping"):
            load_config(str(path))


class TestExpandEnvVars:
    def test_nested_structures(self):
        with patch.dict(os.environ, {"X": "1"}):
            assert _expand_env_vars({"a": ["${X}", {"b": "${X}-${X}"}], "c": 3}) == {
                "a": ["1", {"b": "1-1"}],
                "c": 3,
            }

    def test_missing_var_becomes_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _expand_env_vars("${NOPE}x") == "x"
