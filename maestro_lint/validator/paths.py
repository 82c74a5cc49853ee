"""Flow path helpers for lifecycle hook targets.

Test files reference the shared setup/teardown subflows with varying
relative depths and separator styles. All of these are equivalent:

- ../../common/subflows/setup.yaml
- ..\\..\\common\\subflows\\setup.yaml
- 'workspace/common/subflows/setup.yaml'

Usage:
    from maestro_lint.validator.paths import normalize_flow_path, is_valid_flow_path

    normalize_flow_path("../../common/subflows/setup.yaml")
    # 'workspace/common/subflows/setup.yaml'
"""

from __future__ import annotations

from typing import Any, Optional

from maestro_lint.spec.schema import ROOT_MARKER, SUBFLOWS_SEGMENT

_QUOTES = ("'", '"')
_PARENT = "../"
_ROOT_PREFIX = f"{ROOT_MARKER}/"


def canonical_flow_path(target_file: str) -> str:
    """Return the canonical path of a shared subflow.

    Example:
        >>> canonical_flow_path("setup.yaml")
        'workspace/common/subflows/setup.yaml'
    """
    return f"{ROOT_MARKER}/{SUBFLOWS_SEGMENT}/{target_file}"


def normalize_flow_path(flow_path: Any) -> str:
    """Canonicalize a flow reference for comparison.

    Strips one layer of surrounding quotes, converts backslashes to forward
    slashes and collapses leading `../` segments onto the project root.
    Non-string input normalizes to "".
    """
    if not isinstance(flow_path, str):
        return ""

    normalized = flow_path
    if normalized[:1] in _QUOTES:
        normalized = normalized[1:]
    if normalized[-1:] in _QUOTES:
        normalized = normalized[:-1]

    normalized = normalized.replace("\\", "/")

    if normalized.startswith(_PARENT):
        while normalized.startswith(_PARENT):
            normalized = normalized[len(_PARENT):]
        if not normalized.startswith(_ROOT_PREFIX):
            normalized = _ROOT_PREFIX + normalized

    if SUBFLOWS_SEGMENT in normalized and not normalized.startswith(_ROOT_PREFIX):
        normalized = _ROOT_PREFIX + normalized

    return normalized


def is_valid_flow_path(flow_path: Any, target_file: str) -> bool:
    """Check whether a flow reference points at the shared `target_file`."""
    if not flow_path:
        return False
    return normalize_flow_path(flow_path) == canonical_flow_path(target_file)


def extract_flow_path(step: Any) -> Optional[str]:
    """Return the flow path a hook step runs, if it is a runFlow step.

    Accepts `runFlow: <path>` and `runFlow: {file: <path>}`, and the
    mis-capitalized `runflow`.
    """
    if not isinstance(step, dict):
        return None

    for key in ("runFlow", "runflow"):
        if key not in step:
            continue
        value = step[key]
        if isinstance(value, dict):
            value = value.get("file")
        if isinstance(value, str) and value:
            return value
    return None
