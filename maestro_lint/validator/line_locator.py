"""
line_locator.py - Best-effort source line lookup for diagnostics.

The parsed YAML tree carries no source positions, so diagnostics are mapped
back to lines by searching the raw text. Matching is by substring: a token
that also appears inside an unrelated identifier (e.g. `repeat` as a tapOn
property vs. the `repeat` command) can resolve to the wrong line. Callers
must treat the result as optional.

Usage:
    from maestro_lint.validator.line_locator import locate

    line = locate(text, "platform", anchor="tapOn", occurrence=2)
"""

from __future__ import annotations

from typing import List, Optional

# Lines searched after the anchor line, the anchor line included
LOOKAHEAD_LINES = 20


def _is_skipped(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def _nth_match(lines: List[str], token: str, occurrence: int) -> Optional[int]:
    """Return the 0-based index of the Nth non-skipped line containing token."""
    seen = 0
    for idx, line in enumerate(lines):
        if _is_skipped(line) or token not in line:
            continue
        seen += 1
        if seen == occurrence:
            return idx
    return None


def locate(
    text: str,
    token: str,
    anchor: Optional[str] = None,
    occurrence: int = 1,
) -> Optional[int]:
    """Find the 1-based line of `token` in `text`.

    With an anchor, the Nth non-blank, non-comment line containing the anchor
    is found first and `token` is searched from there over the next
    LOOKAHEAD_LINES lines. Without an anchor, or when the anchored search
    fails, the Nth line containing `token` is returned.

    Args:
        text: Raw file text.
        token: Substring to look for.
        anchor: Optional substring identifying the owning command.
        occurrence: Which occurrence (1-based) of the anchor, or of the token
            when unanchored, to target.

    Returns:
        1-based line number, or None when nothing matches.
    """
    if not text or not token:
        return None

    occurrence = max(1, occurrence)
    lines = text.split("\n")

    if anchor:
        start = _nth_match(lines, anchor, occurrence)
        if start is not None:
            end = min(len(lines), start + LOOKAHEAD_LINES)
            for idx in range(start, end):
                if not _is_skipped(lines[idx]) and token in lines[idx]:
                    return idx + 1

    found = _nth_match(lines, token, occurrence)
    return found + 1 if found is not None else None
