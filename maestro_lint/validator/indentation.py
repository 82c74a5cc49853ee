"""
indentation.py - Structural whitespace checks on raw flow text.

Runs before YAML parsing: a tab or a misaligned property can still parse,
but silently attach the property to the wrong command.

Rules, per non-blank, non-comment line:
- No tab characters, the `---` line included (further checks on that line
  are skipped).
- Leading spaces must be a multiple of 2.
- After the `---` separator, a `- command:` item sits at column 0 unless it
  is nested inside a `commands:` block.
- After the `---` separator, the first property under a `- command:` item is
  indented exactly 4 spaces more than the item.
- Before the separator (header and lifecycle hooks), the first property under
  a list item only needs to be indented more than the item.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from maestro_lint.spec.loader import is_separator, normalize_newlines
from maestro_lint.spec.schema import NESTED_COMMANDS_KEY

from .errors import Diagnostic

logger = logging.getLogger(__name__)

INDENT_SIZE = 2
# 2 for the list marker + 2 for nesting
COMMAND_PROPERTY_OFFSET = 4
PREVIEW_CHARS = 40

# `- name:` optionally followed by an inline value
_LIST_MAPPING_RE = re.compile(r"^-\s+([^\s:#'\"][^:#]*?|'[^']*'|\"[^\"]*\")\s*:(?=\s|$)(.*)$")
_KEY_VALUE_RE = re.compile(r"^(?!-(?:\s|$))[^\s#][^#]*?:(?=\s|$)")
_BLOCK_RE = re.compile(rf"^{NESTED_COMMANDS_KEY}\s*:(?=\s|$)")


def _preview(content: str) -> str:
    if len(content) <= PREVIEW_CHARS:
        return content
    return content[:PREVIEW_CHARS] + "..."


def _opens_block(inline_value: str) -> bool:
    value = inline_value.strip()
    return not value or value.startswith("#")


def validate_indentation(text: str) -> List[Diagnostic]:
    """Check the indentation of a flow file.

    Args:
        text: Raw file content.

    Returns:
        Structural diagnostics, in line order.
    """
    diagnostics: List[Diagnostic] = []
    in_commands = False
    # Indents of the enclosing `commands:` keys, innermost last
    block_indents: List[int] = []
    # Indent of the previous line when it was a `- name:` item opening a mapping
    item_indent: Optional[int] = None

    for line_number, line in enumerate(normalize_newlines(text).split("\n"), start=1):
        content = line.strip()
        if not content or content.startswith("#"):
            continue

        # A tabbed separator is reported and still starts the command section
        tabbed = "\t" in line
        if tabbed:
            diagnostics.append(Diagnostic(
                f"uses TAB instead of spaces; indent with spaces in multiples of {INDENT_SIZE}",
                line_number,
            ))

        if is_separator(line):
            logger.debug("Command section starts after line %d", line_number)
            in_commands = True
            block_indents = []
            item_indent = None
            continue

        if tabbed:
            item_indent = None
            continue

        indent = len(line) - len(line.lstrip(" "))

        if indent % INDENT_SIZE != 0:
            diagnostics.append(Diagnostic(
                f"indentation mismatch: {indent} spaces is not a multiple of {INDENT_SIZE}: "
                f'"{_preview(content)}"',
                line_number,
            ))

        while block_indents and indent <= block_indents[-1]:
            block_indents.pop()
        if _BLOCK_RE.match(content):
            block_indents.append(indent)

        item = _LIST_MAPPING_RE.match(content)

        if in_commands and item and indent != 0 and not block_indents:
            diagnostics.append(Diagnostic(
                f"command list item must start at column 0 (found {indent} spaces): "
                f'"{_preview(content)}"',
                line_number,
            ))

        if item_indent is not None and _KEY_VALUE_RE.match(content):
            if in_commands:
                expected = item_indent + COMMAND_PROPERTY_OFFSET
                delta = indent - expected
                if delta > 0:
                    diagnostics.append(Diagnostic(
                        f"command property indented {delta} space(s) too many "
                        f"(expected {expected}, found {indent})",
                        line_number,
                    ))
                elif delta < 0:
                    diagnostics.append(Diagnostic(
                        f"command property indented {-delta} space(s) too few "
                        f"(expected {expected}, found {indent})",
                        line_number,
                    ))
            elif 0 < indent <= item_indent:
                diagnostics.append(Diagnostic(
                    f"list item property must be indented more than its item "
                    f"(expected > {item_indent} spaces, found {indent})",
                    line_number,
                ))

        item_indent = indent if item and _opens_block(item.group(2)) else None

    return diagnostics
