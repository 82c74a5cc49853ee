"""Static linter for Maestro UI test flow files."""

from maestro_lint.validator import Diagnostic, LintResult, lint

__version__ = "1.0.0"

__all__ = ["Diagnostic", "LintResult", "lint", "__version__"]
