"""Tests for the lint configuration layer."""

import logging

import pytest

from maestro_lint.config.lint_config import (
    DEFAULT_FILE_PATTERN,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ROOT,
    LintConfig,
    get_lint_config,
    load_lint_config,
    reset_config,
)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "lint.yaml"
    path.write_text(
        "discovery:\n"
        "  file_pattern: '*.flow.yaml'\n"
        "  default_root: flows\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )
    return path


class TestDefaults:
    """Tests for the built-in and packaged defaults."""

    def test_packaged_config(self):
        config = load_lint_config()
        assert config == LintConfig(
            file_pattern="*-test.yaml",
            default_root="../workspace/tests",
            log_level="WARNING",
        )

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_lint_config(tmp_path / "absent.yaml")
        assert config.file_pattern == DEFAULT_FILE_PATTERN
        assert config.default_root == DEFAULT_ROOT
        assert config.log_level == DEFAULT_LOG_LEVEL

    @pytest.mark.parametrize("content", ["- a\n- b\n", "discovery: [\n", ""])
    def test_unusable_file_uses_defaults(self, tmp_path, content):
        path = tmp_path / "lint.yaml"
        path.write_text(content, encoding="utf-8")
        assert load_lint_config(path) == LintConfig()


class TestFileValues:
    """Tests for values read from a config file."""

    def test_file_values(self, config_file):
        config = load_lint_config(config_file)
        assert config.file_pattern == "*.flow.yaml"
        assert config.default_root == "flows"
        assert config.log_level == "DEBUG"

    def test_invalid_log_level_falls_back(self, tmp_path, caplog):
        path = tmp_path / "lint.yaml"
        path.write_text("logging:\n  level: chatty\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            config = load_lint_config(path)
        assert config.log_level == DEFAULT_LOG_LEVEL
        assert "chatty" in caplog.text


class TestEnvironmentOverrides:
    """Environment variables win over the config file."""

    def test_env_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("MAESTRO_LINT_FILE_PATTERN", "*.yml")
        monkeypatch.setenv("MAESTRO_LINT_ROOT", "/srv/flows")
        monkeypatch.setenv("MAESTRO_LINT_LOG_LEVEL", "error")
        config = load_lint_config(config_file)
        assert config == LintConfig(file_pattern="*.yml", default_root="/srv/flows", log_level="ERROR")

    def test_empty_env_is_ignored(self, config_file, monkeypatch):
        monkeypatch.setenv("MAESTRO_LINT_ROOT", "")
        assert load_lint_config(config_file).default_root == "flows"


class TestCaching:
    """Tests for the process-wide config cache."""

    def test_cached_until_reset(self, monkeypatch):
        first = get_lint_config()
        monkeypatch.setenv("MAESTRO_LINT_ROOT", "elsewhere")
        assert get_lint_config() is first

        reset_config()
        assert get_lint_config().default_root == "elsewhere"

    def test_config_is_frozen(self):
        config = get_lint_config()
        with pytest.raises(AttributeError):
            config.file_pattern = "*.yaml"
