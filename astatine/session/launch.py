"""Resolve a confirmed focus to a launch command and spawn it.

Spawning is fire and forget: the child is started in its own session and
never waited on.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence

from ..catalog.types import Candidate
from ..errors import EmptyCommandError, LaunchDispatchError, NoSelectionError, OutOfRangeError
from .state import CandidateFocus, Focus

logger = logging.getLogger(__name__)

SpawnFn = Callable[[str, list[str]], None]


def resolve(view: Sequence[Candidate], focus: Focus) -> str:
    """Return the launch command of the focused row.

    Raises ``NoSelectionError`` when the query field has focus and
    ``OutOfRangeError`` when the row does not exist in ``view``.
    """
    if not isinstance(focus, CandidateFocus):
        raise NoSelectionError()
    if focus.index >= len(view):
        raise OutOfRangeError(focus.cursor, len(view))
    return view[focus.index].launch_command


def split_command(command: str) -> tuple[str, list[str]]:
    """Split ``command`` on whitespace into program and arguments (no shell quoting)."""
    parts = command.split()
    if not parts:
        raise EmptyCommandError()
    return parts[0], parts[1:]


def spawn_detached(program: str, args: list[str]) -> None:
    """Start ``program`` detached from the launcher's terminal and session."""
    try:
        subprocess.Popen(
            [program, *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        raise LaunchDispatchError(program, exc.strerror or str(exc)) from exc


def launch(command: str, spawn: SpawnFn = spawn_detached) -> None:
    program, args = split_command(command)
    logger.info("launching %s %s", program, args)
    spawn(program, args)
