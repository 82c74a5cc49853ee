"""
Maestro flow validator.

Usage:
    from maestro_lint.validator import lint

    for diagnostic in lint(text):
        print(diagnostic.format())
"""

from .clauses import validate_when
from .commands import validate_command_properties, validate_commands
from .document import lint
from .errors import Diagnostic, LintResult
from .indentation import validate_indentation
from .line_locator import locate
from .paths import is_valid_flow_path, normalize_flow_path

__all__ = [
    "Diagnostic",
    "LintResult",
    "is_valid_flow_path",
    "lint",
    "locate",
    "normalize_flow_path",
    "validate_command_properties",
    "validate_commands",
    "validate_indentation",
    "validate_when",
]
