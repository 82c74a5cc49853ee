"""
Schema tables and YAML loading for Maestro flow files.

Usage:
    from maestro_lint.spec import COMMAND_SCHEMAS, parse_segment

    schema = COMMAND_SCHEMAS["tapOn"]
    header = parse_segment("appId: com.example.app")
"""

from .loader import (
    FlowLoader,
    format_yaml_error,
    is_separator,
    key_name,
    normalize_newlines,
    parse_segment,
    split_segments,
)
from .schema import (
    CLAUSE_SPEC,
    COMMAND_SCHEMAS,
    NAME_PATTERN,
    TAG_ONE_OF,
    VALID_COMMANDS,
    VALID_PROPERTIES,
    ClauseSpec,
    CommandSchema,
    find_case_variant,
    get_command_schema,
)

__all__ = [
    "CLAUSE_SPEC",
    "COMMAND_SCHEMAS",
    "ClauseSpec",
    "CommandSchema",
    "FlowLoader",
    "NAME_PATTERN",
    "TAG_ONE_OF",
    "VALID_COMMANDS",
    "VALID_PROPERTIES",
    "find_case_variant",
    "format_yaml_error",
    "get_command_schema",
    "is_separator",
    "key_name",
    "normalize_newlines",
    "parse_segment",
    "split_segments",
]
