"""Locating message content inside rendered output, and sizing the result."""

from __future__ import annotations

from typing import Sequence

from pi.notify.utils import visible_width

# Cap used when the host leaves a dimension unbounded
DEFAULT_MAX_SIZE = 1000


def locate_content(lines: Sequence[str], content: str | None) -> int | None:
    """Return the line index at which *content* starts within *lines*.

    The lines are joined with newlines and searched literally for the first
    occurrence of *content*, so an empty *content* matches at line 0.
    Returns ``None`` when *content* is missing or does not occur, which
    callers treat as "nothing to highlight".
    """
    if content is None:
        return None
    text = "\n".join(lines)
    idx = text.find(content)
    if idx == -1:
        return None
    return text.count("\n", 0, idx)


def compute_size(
    lines: Sequence[str],
    min_width: int | None,
    max_width: int | None,
    max_height: int | None,
) -> tuple[int, int]:
    """Compute ``(width, height)`` for a surface showing *lines*.

    Width is the widest line in columns, but never narrower than
    *min_width* nor wider than *max_width*. Height is the line count capped
    at *max_height*. A missing or zero bound means :data:`DEFAULT_MAX_SIZE`.
    """
    width = min_width or 0
    for line in lines:
        width = max(width, visible_width(line))
    width = min(max_width or DEFAULT_MAX_SIZE, width)
    height = min(max_height or DEFAULT_MAX_SIZE, len(lines))
    return width, height
