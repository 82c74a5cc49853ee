"""Command-line tools for maestro-lint."""
