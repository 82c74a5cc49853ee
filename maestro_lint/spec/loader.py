"""
loader.py - YAML parsing for Maestro flow files.

A flow file holds up to two YAML documents separated by a `---` line: the
header (appId, tags, name, hooks) and the command list. The flow engine reads
YAML 1.2 booleans, so `on`/`yes`/`no` stay strings here too.
"""

from __future__ import annotations

import re
from typing import Any, List

import yaml

# A document separator is a `---` line starting at column 0
SEPARATOR_PATTERN = re.compile(r"^---[ \t]*(?:#.*)?$", re.MULTILINE)

_BOOL_TAG = "tag:yaml.org,2002:bool"


class FlowLoader(yaml.SafeLoader):
    """SafeLoader resolving only true/false as booleans."""


FlowLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FlowLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_segments(text: str) -> List[str]:
    """Split raw flow text on document separator lines."""
    return SEPARATOR_PATTERN.split(text)


def is_separator(line: str) -> bool:
    return SEPARATOR_PATTERN.match(line) is not None


def parse_segment(text: str) -> Any:
    """Parse one YAML segment.

    Raises:
        yaml.YAMLError: If the segment is malformed.
    """
    return yaml.load(text, Loader=FlowLoader)


def format_yaml_error(error: yaml.YAMLError) -> str:
    """Render a YAMLError as `<problem> (<line>:<col>)`, 1-based."""
    if isinstance(error, yaml.MarkedYAMLError):
        problem = error.problem or error.context or "invalid YAML"
        mark = error.problem_mark or error.context_mark
        if mark is not None:
            return f"{problem} ({mark.line + 1}:{mark.column + 1})"
        return problem
    return str(error)


def key_name(key: Any) -> str:
    """Spell a mapping key the way it was written in YAML.

    `true:` loads as the boolean True; compare it as "true".
    """
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return "null"
    return str(key)
