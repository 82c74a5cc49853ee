"""
commands.py - Schema validation of command lists.

Each command node is a single-key mapping `{name: value}` (or a bare name
string, e.g. `- back`). The value is checked against the command's schema,
and control-flow commands (repeat, retry, runFlow) are walked recursively
through their `commands` property.

An occurrence counter (command name -> times seen) is threaded through the
whole walk so that line lookups for a repeated command target the right
physical occurrence. Counters are per document and are never reset per
nesting level.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from maestro_lint.spec.loader import key_name
from maestro_lint.spec.schema import (
    NESTED_COMMANDS_KEY,
    VALID_COMMANDS,
    WHEN_KEY,
    find_case_variant,
    get_command_schema,
)

from .clauses import validate_when
from .errors import Diagnostic
from .line_locator import locate
from .typos import did_you_mean

logger = logging.getLogger(__name__)

OccurrenceCounter = Dict[str, int]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def validate_command_properties(
    command_name: str,
    command_value: Any,
    text: str,
    occurrence: int = 1,
) -> List[Diagnostic]:
    """Validate one command's value against its schema.

    Args:
        command_name: Name of a command in the vocabulary.
        command_value: Parsed value (None, scalar or mapping).
        text: Raw file text, for line lookup.
        occurrence: Which occurrence of this command name this node is.

    Returns:
        Property diagnostics; empty for names without a schema.
    """
    diagnostics: List[Diagnostic] = []
    schema = get_command_schema(command_name)
    if schema is None:
        return diagnostics

    def command_line() -> Optional[int]:
        return locate(text, command_name, occurrence=occurrence)

    def property_line(prop: str) -> Optional[int]:
        return locate(text, prop, command_name, occurrence)

    required_group = " or ".join(schema.required)

    if command_value is None:
        if schema.required:
            diagnostics.append(Diagnostic(
                f"{command_name}: must have at least one of: {required_group}",
                command_line(),
            ))
        elif schema.requires_value:
            diagnostics.append(Diagnostic(f"{command_name}: requires a value", command_line()))
        return diagnostics

    if isinstance(command_value, list):
        diagnostics.append(Diagnostic(
            f"{command_name}: value must be a selector or a mapping of properties, not a list",
            command_line(),
        ))
        return diagnostics

    if not isinstance(command_value, dict):
        if isinstance(command_value, str) and not command_value.strip():
            diagnostics.append(Diagnostic(
                f"{command_name}: selector/value must not be empty",
                command_line(),
            ))
        return diagnostics

    properties = {key_name(k): v for k, v in command_value.items()}
    allowed = schema.allowed

    invalid_keys = [key for key in properties if key not in allowed]
    for key in invalid_keys:
        diagnostics.append(Diagnostic(
            f'{command_name}: invalid property "{key}"{did_you_mean(key, sorted(allowed))}',
            property_line(key),
        ))

    if schema.required:
        if not any(prop in properties for prop in schema.required):
            line = property_line(invalid_keys[0]) if invalid_keys else command_line()
            diagnostics.append(Diagnostic(
                f"{command_name}: must have at least one of: {required_group}",
                line,
            ))

        for prop in schema.required:
            if prop in properties and _is_blank(properties[prop]):
                diagnostics.append(Diagnostic(
                    f'{command_name}: property "{prop}" must not be empty',
                    property_line(prop),
                ))

    if schema.requires_value and not properties:
        diagnostics.append(Diagnostic(f"{command_name}: requires a value", command_line()))

    if WHEN_KEY in properties:
        diagnostics.extend(validate_when(properties[WHEN_KEY], text, command_name, occurrence))

    return diagnostics


def _split_node(node: Any):
    """Return (name, value) for a command node, or None if it is not one."""
    if isinstance(node, str) and node.strip():
        return node.strip(), None
    if isinstance(node, dict) and node:
        key = next(iter(node))
        return key_name(key), node[key]
    return None


def validate_commands(
    commands: Any,
    text: str,
    occurrences: Optional[OccurrenceCounter] = None,
) -> List[Diagnostic]:
    """Validate a command list, recursing into nested `commands` blocks.

    Args:
        commands: Parsed command list; anything else yields no diagnostics.
        text: Raw file text, for line lookup.
        occurrences: Shared occurrence counter; a fresh one is used if omitted.

    Returns:
        Diagnostics in traversal order.
    """
    diagnostics: List[Diagnostic] = []
    if not isinstance(commands, list):
        return diagnostics
    if occurrences is None:
        occurrences = {}

    for node in commands:
        split = _split_node(node)
        if split is None:
            logger.debug("Skipping non-command list item: %r", node)
            continue
        command_name, command_value = split

        occurrences[command_name] = occurrences.get(command_name, 0) + 1
        occurrence = occurrences[command_name]

        if command_name not in VALID_COMMANDS:
            line = locate(text, command_name, occurrence=occurrence)
            suggestion = find_case_variant(command_name, VALID_COMMANDS)
            if suggestion:
                diagnostics.append(Diagnostic(
                    f'Command with incorrect syntax: "{command_name}" should be "{suggestion}"',
                    line,
                ))
            else:
                diagnostics.append(Diagnostic(
                    f'Invalid command: "{command_name}"{did_you_mean(command_name, VALID_COMMANDS)}',
                    line,
                ))
            continue

        diagnostics.extend(validate_command_properties(command_name, command_value, text, occurrence))

        if isinstance(command_value, dict):
            nested = command_value.get(NESTED_COMMANDS_KEY)
            if isinstance(nested, list):
                diagnostics.extend(validate_commands(nested, text, occurrences))

    return diagnostics
