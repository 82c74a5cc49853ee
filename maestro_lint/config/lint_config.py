"""Lint configuration for file discovery and logging.

Environment variables take precedence over lint.yaml. The schema tables
(commands, properties, tags) are fixed and not configurable here.

Usage:
    from maestro_lint.config.lint_config import get_lint_config

    config = get_lint_config()
    files = root.rglob(config.file_pattern)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path(__file__).parent / "lint.yaml"
_cached_config: Optional["LintConfig"] = None

ENV_FILE_PATTERN = "MAESTRO_LINT_FILE_PATTERN"
ENV_ROOT = "MAESTRO_LINT_ROOT"
ENV_LOG_LEVEL = "MAESTRO_LINT_LOG_LEVEL"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_FILE_PATTERN = "*-test.yaml"
DEFAULT_ROOT = "../workspace/tests"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class LintConfig:
    """Resolved configuration values."""
    file_pattern: str = DEFAULT_FILE_PATTERN
    default_root: str = DEFAULT_ROOT
    log_level: str = DEFAULT_LOG_LEVEL


def _load_raw_config(path: Path) -> Dict[str, Any]:
    """Load lint.yaml, falling back to an empty config on any problem."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read %s (%s). Using defaults.", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config %s is not a mapping. Using defaults.", path)
        return {}
    return data


def _resolve_log_level(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_LOG_LEVEL
    level = str(value).upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning(
            "Invalid log level '%s' (valid: %s). Falling back to '%s'.",
            value,
            ", ".join(VALID_LOG_LEVELS),
            DEFAULT_LOG_LEVEL,
        )
        return DEFAULT_LOG_LEVEL
    return level


def load_lint_config(path: Path = _CONFIG_PATH) -> LintConfig:
    """Build a LintConfig from a YAML file and the environment.

    Precedence (highest to lowest):
    1. MAESTRO_LINT_* environment variables
    2. Config file values
    3. Built-in defaults
    """
    raw = _load_raw_config(path)
    discovery = raw.get("discovery") or {}
    logging_section = raw.get("logging") or {}

    file_pattern = (
        os.environ.get(ENV_FILE_PATTERN)
        or discovery.get("file_pattern")
        or DEFAULT_FILE_PATTERN
    )
    default_root = (
        os.environ.get(ENV_ROOT)
        or discovery.get("default_root")
        or DEFAULT_ROOT
    )
    log_level = _resolve_log_level(
        os.environ.get(ENV_LOG_LEVEL) or logging_section.get("level")
    )

    return LintConfig(
        file_pattern=str(file_pattern),
        default_root=str(default_root),
        log_level=log_level,
    )


def get_lint_config() -> LintConfig:
    """Return the process-wide config, loading it on first use."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_lint_config()
    return _cached_config


def reset_config() -> None:
    """Reset cached config (for testing)."""
    global _cached_config
    _cached_config = None
