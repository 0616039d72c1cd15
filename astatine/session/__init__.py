"""Session exports: navigation state, key bindings, and launch resolution."""

from __future__ import annotations

from .controller import LauncherSession
from .keys import KeyComboBinding, KeyComboRegistry, KeyOutcome, normalize_key
from .launch import launch, resolve, spawn_detached, split_command
from .state import (
    QUERY_FOCUS,
    CandidateFocus,
    Focus,
    QueryFocus,
    SessionState,
    apply_query_change,
    focus_from_cursor,
    focus_query,
    move_focus,
)

__all__ = [
    "QUERY_FOCUS",
    "CandidateFocus",
    "Focus",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyOutcome",
    "LauncherSession",
    "QueryFocus",
    "SessionState",
    "apply_query_change",
    "focus_from_cursor",
    "focus_query",
    "launch",
    "move_focus",
    "normalize_key",
    "resolve",
    "spawn_detached",
    "split_command",
]
