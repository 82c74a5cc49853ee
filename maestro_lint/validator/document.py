"""
document.py - Top-level lint of a Maestro flow file.

Order of checks (each adds diagnostics, none stops the next):
1. Indentation of the raw text.
2. Parse of the header segment (a parse failure ends the parse-dependent
   checks; indentation diagnostics are kept).
3. Header properties, required fields, classification tag and name pattern.
4. Lifecycle hooks reference the shared setup/teardown subflows.
5. Commands of the lifecycle hooks and of the command segment.

A parse failure of the command segment is not reported. The header parse
is strict while the command segment is linted best-effort; see DESIGN.md.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import yaml

from maestro_lint.spec.loader import (
    format_yaml_error,
    key_name,
    normalize_newlines,
    parse_segment,
    split_segments,
)
from maestro_lint.spec.schema import (
    NAME_PATTERN,
    NAME_PATTERN_HINT,
    ON_FLOW_COMPLETE,
    ON_FLOW_START,
    SETUP_FLOW,
    TAG_ONE_OF,
    TEARDOWN_FLOW,
    VALID_PROPERTIES,
    find_case_variant,
)

from .commands import OccurrenceCounter, validate_commands
from .errors import Diagnostic
from .indentation import validate_indentation
from .line_locator import locate
from .paths import canonical_flow_path, extract_flow_path, is_valid_flow_path
from .typos import did_you_mean

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT_MESSAGE = "YAML file is empty or invalid."


def _find_hook(header: Dict[str, Any], hook_name: str) -> Any:
    """Return a lifecycle hook, matching its key case-insensitively."""
    if header.get(hook_name):
        return header[hook_name]
    lowered = hook_name.lower()
    for key, value in header.items():
        if key_name(key).lower() == lowered:
            return value
    return None


def _validate_header_keys(header: Dict[str, Any], text: str) -> List[Diagnostic]:
    diagnostics: List[Diagnostic] = []
    for key in header:
        name = key_name(key)
        if name in VALID_PROPERTIES:
            continue
        line = locate(text, name)
        similar = find_case_variant(name, VALID_PROPERTIES)
        if similar:
            diagnostics.append(Diagnostic(
                f'Property with incorrect syntax: "{name}" should be spelled "{similar}"',
                line,
            ))
        else:
            diagnostics.append(Diagnostic(
                f'Invalid header property: "{name}"{did_you_mean(name, VALID_PROPERTIES)}',
                line,
            ))
    return diagnostics


def _validate_required_fields(header: Dict[str, Any]) -> List[Diagnostic]:
    diagnostics: List[Diagnostic] = []

    if not header.get("appId"):
        diagnostics.append(Diagnostic("Missing appId (application identifier)."))

    tags = header.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    elif not isinstance(tags, list):
        tags = []
    if not any(tag in tags for tag in TAG_ONE_OF):
        diagnostics.append(Diagnostic(
            f"Missing classification tag ({' or '.join(TAG_ONE_OF)})."
        ))

    name = header.get("name")
    if not name:
        diagnostics.append(Diagnostic("Missing name."))
    elif not NAME_PATTERN.match(str(name)):
        diagnostics.append(Diagnostic(f'name does not match the pattern "{NAME_PATTERN_HINT}".'))

    return diagnostics


def _validate_hook_target(hook: Any, hook_name: str, target_file: str, text: str) -> List[Diagnostic]:
    steps = hook if isinstance(hook, list) else []
    if any(is_valid_flow_path(extract_flow_path(step), target_file) for step in steps):
        return []
    return [Diagnostic(
        f"{hook_name} must include {target_file} ({canonical_flow_path(target_file)})",
        locate(text, target_file),
    )]


def _lint_parsed(header: Dict[str, Any], segments: List[str], text: str) -> List[Diagnostic]:
    diagnostics: List[Diagnostic] = []

    diagnostics.extend(_validate_header_keys(header, text))
    diagnostics.extend(_validate_required_fields(header))

    on_flow_start = _find_hook(header, ON_FLOW_START)
    on_flow_complete = _find_hook(header, ON_FLOW_COMPLETE)

    if on_flow_start:
        diagnostics.extend(_validate_hook_target(on_flow_start, ON_FLOW_START, SETUP_FLOW, text))
    if on_flow_complete:
        diagnostics.extend(_validate_hook_target(on_flow_complete, ON_FLOW_COMPLETE, TEARDOWN_FLOW, text))

    # Shared across hooks and body so repeated names map to later lines
    occurrences: OccurrenceCounter = {}
    if isinstance(on_flow_start, list):
        diagnostics.extend(validate_commands(on_flow_start, text, occurrences))
    if isinstance(on_flow_complete, list):
        diagnostics.extend(validate_commands(on_flow_complete, text, occurrences))

    if len(segments) > 1:
        try:
            commands = parse_segment(segments[1])
        except yaml.YAMLError as e:
            logger.debug("Ignoring unparseable command segment: %s", format_yaml_error(e))
            commands = None
        if isinstance(commands, list):
            diagnostics.extend(validate_commands(commands, text, occurrences))

    return diagnostics


def lint(text: str) -> List[Diagnostic]:
    """Lint the raw text of a flow file.

    Never raises; every failure becomes a diagnostic.

    Args:
        text: Full file content, with any line endings.

    Returns:
        Diagnostics in check order; empty when the flow is clean.
    """
    text = normalize_newlines(text)
    diagnostics = validate_indentation(text)

    segments = split_segments(text)
    try:
        header: Optional[Any] = parse_segment(segments[0])
    except yaml.YAMLError as e:
        diagnostics.append(Diagnostic(f"YAML parse error: {format_yaml_error(e)}"))
        return diagnostics

    if not header or not isinstance(header, dict):
        diagnostics.append(Diagnostic(EMPTY_DOCUMENT_MESSAGE))
        return diagnostics

    try:
        diagnostics.extend(_lint_parsed(header, segments, text))
    except Exception as e:
        logger.exception("Unexpected error while linting")
        diagnostics.append(Diagnostic(f"Unexpected error while linting: {e}"))

    return diagnostics
