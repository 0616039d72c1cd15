"""Terminal front end: raw-mode control, key decoding, rendering, and loop."""

from __future__ import annotations

import os
import sys

from ..session.controller import LauncherSession
from .loop import dispatch_key, run_main_loop
from .terminal import TerminalController


def run_interactive(session: LauncherSession, close_on_launch: bool = True) -> str | None:
    """Run the launcher on the process's controlling terminal."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd):
        raise SystemExit("astatine needs an interactive terminal (use --list for scripted use).")
    terminal = TerminalController(stdin_fd, stdout_fd)
    with terminal.raw_mode():
        return run_main_loop(session, terminal, stdin_fd, close_on_launch)


__all__ = ["TerminalController", "dispatch_key", "run_interactive", "run_main_loop"]
