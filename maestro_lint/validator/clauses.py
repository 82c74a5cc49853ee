"""Validation of the conditional `when` clause attached to a command."""

from __future__ import annotations

from typing import Any, List, Optional

from maestro_lint.spec.loader import key_name
from maestro_lint.spec.schema import CLAUSE_SPEC, WHEN_KEY, ClauseSpec

from .errors import Diagnostic
from .line_locator import locate


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_valid_platform(platform: Any, spec: ClauseSpec = CLAUSE_SPEC) -> bool:
    return isinstance(platform, str) and platform.lower() in spec.platforms


def validate_when(
    when_value: Any,
    text: str,
    command_name: Optional[str] = None,
    command_occurrence: int = 1,
    spec: ClauseSpec = CLAUSE_SPEC,
) -> List[Diagnostic]:
    """Validate a command's `when` clause.

    Args:
        when_value: Parsed value of the `when` property.
        text: Raw file text, for line lookup.
        command_name: Owning command, used as the line lookup anchor.
        command_occurrence: Which occurrence of the owning command this is.

    Returns:
        Clause diagnostics.
    """
    diagnostics: List[Diagnostic] = []
    valid_keys = ", ".join(spec.keys)

    def line_of(token: str) -> Optional[int]:
        return locate(text, token, command_name, command_occurrence)

    if not isinstance(when_value, dict):
        diagnostics.append(Diagnostic(
            f"{WHEN_KEY}: must be a mapping with keys ({valid_keys})",
            line_of(WHEN_KEY),
        ))
        return diagnostics

    clause = {key_name(k): v for k, v in when_value.items()}

    for key in clause:
        if key in spec.sibling_keys:
            diagnostics.append(Diagnostic(
                f'{WHEN_KEY}: "{key}" belongs beside "{WHEN_KEY}" on the command, not inside it',
                line_of(key),
            ))
        elif key not in spec.keys:
            diagnostics.append(Diagnostic(
                f'{WHEN_KEY}: invalid key "{key}" (valid: {valid_keys})',
                line_of(key),
            ))

    if spec.platform_key in clause:
        platform = clause[spec.platform_key]
        platforms = " | ".join(spec.platforms)
        if not isinstance(platform, str):
            diagnostics.append(Diagnostic(
                f"{WHEN_KEY}: {spec.platform_key} must be a string ({platforms})",
                line_of(spec.platform_key),
            ))
        elif not is_valid_platform(platform, spec):
            diagnostics.append(Diagnostic(
                f'{WHEN_KEY}: {spec.platform_key} must be one of ({platforms}), got "{platform}"',
                line_of(spec.platform_key),
            ))

    for key in spec.visibility_keys:
        if key in clause and _is_blank(clause[key]):
            diagnostics.append(Diagnostic(f"{WHEN_KEY}: {key} must not be empty", line_of(key)))

    if spec.truth_key in clause and _is_blank(clause[spec.truth_key]):
        diagnostics.append(Diagnostic(
            f"{WHEN_KEY}: {spec.truth_key} must not be empty",
            line_of(spec.truth_key),
        ))

    return diagnostics
