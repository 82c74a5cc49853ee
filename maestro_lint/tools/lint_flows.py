#!/usr/bin/env python3
"""
lint_flows.py - Lint Maestro flow files without running them.

Usage:
    python -m maestro_lint.tools.lint_flows [PATH] [--json] [--debug]

PATH may be a single flow file or a directory. Directories are searched for
files matching the configured pattern (default `*-test.yaml`) at the top
level first, then recursively. Without PATH (or with "."), the configured
default root is searched recursively.

Exit codes:
    0 - No diagnostics (or no files found)
    1 - At least one file has diagnostics
    2 - Fatal error (path not found)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from maestro_lint import __version__
from maestro_lint.config.lint_config import LintConfig, get_lint_config
from maestro_lint.validator import LintResult, lint

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_LINT_FAILED = 1
EXIT_FATAL_ERROR = 2


def discover_files(path_arg: Optional[str], config: LintConfig) -> List[Path]:
    """Find the flow files to lint.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    if path_arg in (None, "", "."):
        root = Path(config.default_root)
        if not root.is_dir():
            logger.debug("Default root %s does not exist", root)
            return []
        return sorted(root.rglob(config.file_pattern))

    path = Path(path_arg).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {path_arg}")

    if path.is_file():
        return [path]

    files = sorted(p for p in path.glob(config.file_pattern) if p.is_file())
    if not files:
        files = sorted(p for p in path.rglob(config.file_pattern) if p.is_file())
    return files


def lint_file(path: Path) -> LintResult:
    """Read and lint one flow file."""
    result = LintResult(path=str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        result.add(f"Could not read file: {e}")
        return result

    result.extend(lint(text))
    return result


def render_text(results: List[LintResult]) -> str:
    lines: List[str] = []
    for result in results:
        if result.passed:
            continue
        lines.append(f"\nFAIL {Path(result.path).name}")
        for diagnostic in result.diagnostics:
            lines.append(f"   - {diagnostic.format()}")

    passed = sum(1 for r in results if r.passed)
    failed = len(results) - passed

    lines.append(f"\n{'=' * 60}")
    lines.append("Results:")
    lines.append(f"   Passed: {passed}")
    lines.append(f"   Failed: {failed}")
    lines.append(f"   Total files: {len(results)}")
    lines.append(f"{'=' * 60}")
    lines.append("\nPASSED" if failed == 0 else "\nFAILED: fix the diagnostics above")
    return "\n".join(lines)


def render_json(results: List[LintResult]) -> str:
    passed = sum(1 for r in results if r.passed)
    report = {
        "version": __version__,
        "files": [r.to_dict() for r in results],
        "passed": passed,
        "failed": len(results) - passed,
        "total": len(results),
        "status": "PASS" if passed == len(results) else "FAIL",
    }
    return json.dumps(report, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Lint Maestro flow files (indentation, header and command schema)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - All files passed (or no files found)
  1 - Lint diagnostics found
  2 - Fatal error (path not found)

Examples:
  maestro-lint tests/login/login-test.yaml
  maestro-lint tests/ --json
        """,
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Flow file or directory to lint (default: configured test root)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output a machine-readable JSON report",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"maestro-lint {__version__}",
    )
    args = parser.parse_args(argv)

    config = get_lint_config()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, config.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        files = discover_files(args.path, config)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FATAL_ERROR

    if not files:
        print("WARNING: no flow files found.", file=sys.stderr)
        return EXIT_SUCCESS

    logger.debug("Linting %d file(s)", len(files))
    results = [lint_file(path) for path in files]

    if args.json:
        print(render_json(results))
    else:
        print(render_text(results))

    if any(not r.passed for r in results):
        return EXIT_LINT_FAILED
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
