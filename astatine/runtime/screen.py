"""Plain-text frame rendering for the terminal front end.

Draws the query line, the ranked list with the focused row in reverse video,
and a one-line status message.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..catalog.types import Candidate

CLEAR_SCREEN = "\x1b[H\x1b[2J"
REVERSE = "\x1b[7m"
RESET = "\x1b[0m"
QUERY_PROMPT = "> "


def _clip(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    if width <= 1:
        return text[:width]
    return text[: width - 1] + "…"


def list_window(cursor: int, total: int, rows: int) -> int:
    """Return the first visible row index so that row ``cursor`` stays on screen."""
    if rows <= 0 or total <= rows:
        return 0
    focused = cursor - 1
    if focused < rows:
        return 0
    return min(total - rows, focused - rows + 1)


def render_frame(
    query: str,
    view: Sequence[Candidate],
    cursor: int,
    status: str,
    width: int,
    height: int,
) -> str:
    """Build one full-screen frame as a string of ANSI output."""
    width = max(1, width)
    list_rows = max(0, height - 2)
    out = [CLEAR_SCREEN]

    query_line = _clip(QUERY_PROMPT + query, width)
    out.append(REVERSE + query_line + RESET if cursor == 0 else query_line)

    start = list_window(cursor, len(view), list_rows)
    for idx, candidate in enumerate(view[start : start + list_rows], start=start):
        row = _clip(f"  {candidate.name}", width)
        if idx + 1 == cursor:
            row = REVERSE + row + RESET
        out.append("\r\n" + row)

    out.append(f"\x1b[{max(1, height)};1H" + _clip(status, width))
    return "".join(out)
