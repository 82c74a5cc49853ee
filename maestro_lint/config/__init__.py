"""Configuration for the maestro-lint outer surfaces (CLI and API)."""

from .lint_config import LintConfig, get_lint_config, reset_config

__all__ = ["LintConfig", "get_lint_config", "reset_config"]
