"""Main interactive event loop for the terminal front end.

Translates decoded keys into text-changed and key events for the session,
redraws after every event, and stops on quit or after a launch.
"""

from __future__ import annotations

import logging
import shutil

from ..session.controller import LauncherSession
from ..session.keys import KeyOutcome
from .input import read_key
from .screen import render_frame
from .terminal import TerminalController

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"ESC", "CTRL_C"})
# While the query field has focus these keys leave it or confirm.
QUERY_NAVIGATION_KEYS = {
    "TAB": "j",
    "DOWN": "j",
    "UP": "k",
    "ENTER": "ENTER",
}


def status_for(outcome: KeyOutcome) -> str:
    if outcome.launched is not None:
        return f"launched: {outcome.launched}"
    if outcome.error is not None:
        return str(outcome.error)
    return ""


def edited_query(query: str, key: str) -> str | None:
    """Return the new query for an editing key, or ``None`` for non-editing keys."""
    if key == "BACKSPACE":
        return query[:-1]
    if key == "CTRL_U":
        return ""
    if len(key) == 1 and key.isprintable():
        return query + key
    return None


def dispatch_key(session: LauncherSession, key: str) -> KeyOutcome:
    """Route one decoded key to the session according to the current focus."""
    if session.state.editing_query:
        new_query = edited_query(session.query, key)
        if new_query is not None:
            if new_query != session.query:
                session.handle_text(new_query)
            return KeyOutcome(handled=True, focus_query=True)
        mapped = QUERY_NAVIGATION_KEYS.get(key)
        if mapped is None:
            return KeyOutcome(handled=False, focus_query=True)
        return session.handle_key(mapped)
    return session.handle_key(key)


def run_main_loop(
    session: LauncherSession,
    terminal: TerminalController,
    stdin_fd: int,
    close_on_launch: bool = True,
) -> str | None:
    """Run the interactive loop; return the last launched command, if any."""
    status = ""
    launched: str | None = None
    while True:
        term = shutil.get_terminal_size((80, 24))
        terminal.write(
            render_frame(session.query, session.view(), session.cursor, status, term.columns, term.lines)
        )
        key = read_key(stdin_fd)
        if key == "" or key in QUIT_KEYS:
            return launched
        outcome = dispatch_key(session, key)
        logger.debug("key %r -> cursor %d (%s)", key, session.cursor, outcome)
        status = status_for(outcome)
        if outcome.launched is not None:
            launched = outcome.launched
            if close_on_launch:
                return launched
