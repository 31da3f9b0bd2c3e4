"""Recover documentation comments that sit next to a declaration."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

LINE_COMMENT_MARKER = "--"


class CommentDirection(str, Enum):
    """Which side of a declaration to scan for its comment block."""

    BACKWARD = "backward"
    FORWARD = "forward"


def _strip_marker(line: str) -> str:
    text = line[len(LINE_COMMENT_MARKER) :]
    return text[1:] if text.startswith(" ") else text


def _collect(lines: List[str]) -> List[str]:
    """Collect the leading run of comment lines, stopping at anything else."""
    collected: List[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped.startswith(LINE_COMMENT_MARKER):
            break
        collected.append(_strip_marker(stripped))
    return collected


def recover_comment(
    source: str,
    position: Optional[int],
    direction: CommentDirection = CommentDirection.BACKWARD,
) -> Optional[str]:
    """Return the contiguous `--` comment block adjacent to `position`.

    Backward scans the lines above the line holding `position`; the
    declaration must be the first thing on its line. Forward scans the lines
    below it. A blank or non-comment line ends the block. Returns None when no
    comment line is found.
    """
    if position is None or position < 0 or position > len(source):
        return None

    line_start = source.rfind("\n", 0, position) + 1

    if direction is CommentDirection.BACKWARD:
        if source[line_start:position].strip():
            return None
        if line_start == 0:
            return None
        preceding = source[: line_start - 1].split("\n")
        collected = list(reversed(_collect(list(reversed(preceding)))))
    else:
        line_end = source.find("\n", position)
        if line_end == -1:
            return None
        collected = _collect(source[line_end + 1 :].split("\n"))

    while collected and not collected[-1].strip():
        collected.pop()
    while collected and not collected[0].strip():
        collected.pop(0)

    if not collected:
        return None
    return "\n".join(collected)
