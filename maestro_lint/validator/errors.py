# maestro_lint/validator/errors.py
"""Diagnostic collection and formatting."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

# Line suffix template used in rendered diagnostics
LINE_TEMPLATE = "{message} (linha {line})"


class Diagnostic:
    """A single lint finding, optionally tied to a 1-based source line."""

    __slots__ = ("message", "line")

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line

    def format(self) -> str:
        """Format diagnostic for display."""
        if self.line:
            return LINE_TEMPLATE.format(message=self.message, line=self.line)
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic to dictionary for JSON serialization."""
        return {"message": self.message, "line": self.line}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return self.message == other.message and self.line == other.line

    def __hash__(self) -> int:
        return hash((self.message, self.line))

    def __repr__(self) -> str:
        return f"Diagnostic({self.message!r}, line={self.line!r})"

    def __str__(self) -> str:
        return self.format()


class LintResult:
    """Collects the diagnostics of one linted file."""

    def __init__(self, path: Optional[str] = None, diagnostics: Optional[List[Diagnostic]] = None):
        self.path = path
        self.diagnostics: List[Diagnostic] = list(diagnostics or [])

    def add(self, message: str, line: Optional[int] = None):
        """Add a diagnostic."""
        self.diagnostics.append(Diagnostic(message, line))

    def extend(self, diagnostics: List[Diagnostic]):
        self.diagnostics.extend(diagnostics)

    @property
    def passed(self) -> bool:
        return not self.diagnostics

    def formatted(self) -> List[str]:
        return [d.format() for d in self.diagnostics]

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "diagnostic_count": len(self.diagnostics),
            "status": "PASS" if self.passed else "FAIL",
        }
