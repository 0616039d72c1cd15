"""Launcher session: catalog, navigation state, and event handling.

One session exists per process and is driven from a single thread. Every
event runs to completion before the next one is read.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..catalog.types import Candidate, Catalog, verify_catalog
from ..errors import LaunchError, NoSelectionError
from ..search.fuzzy import rank
from .keys import (
    CONFIRM_KEYS,
    FOCUS_QUERY_KEYS,
    MOVE_NEXT_KEYS,
    MOVE_PREVIOUS_KEYS,
    KeyComboBinding,
    KeyComboRegistry,
    KeyOutcome,
)
from .launch import SpawnFn, launch, resolve, spawn_detached
from .state import CandidateFocus, SessionState, apply_query_change, focus_query, move_focus

logger = logging.getLogger(__name__)


class LauncherSession:
    """Owns the catalog and navigation state and routes text/key events."""

    def __init__(
        self,
        catalog: Catalog,
        spawn: SpawnFn = spawn_detached,
        state: SessionState | None = None,
    ) -> None:
        self.catalog = verify_catalog(catalog)
        self.spawn = spawn
        self.state = state if state is not None else SessionState()
        self.keys = KeyComboRegistry().register_bindings(
            KeyComboBinding(MOVE_NEXT_KEYS, lambda: self._move(1)),
            KeyComboBinding(MOVE_PREVIOUS_KEYS, lambda: self._move(-1)),
            KeyComboBinding(FOCUS_QUERY_KEYS, self._focus_query),
            KeyComboBinding(CONFIRM_KEYS, self.confirm),
        )

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def cursor(self) -> int:
        return self.state.cursor

    def view(self) -> list[Candidate]:
        """Rank the catalog against the live query."""
        return rank(self.catalog, self.state.query)

    def focused_candidate(self, view: list[Candidate] | None = None) -> Candidate | None:
        """Return the focused row, or ``None`` for the query field or a stale index."""
        focus = self.state.focus
        if not isinstance(focus, CandidateFocus):
            return None
        rows = view if view is not None else self.view()
        if focus.index >= len(rows):
            return None
        return rows[focus.index]

    def handle_text(self, text: str) -> None:
        apply_query_change(self.state, text)

    def handle_key(self, key: str) -> KeyOutcome:
        """Apply one key event; unbound keys leave the state untouched."""
        outcome = self.keys.dispatch(key)
        return replace(outcome, focus_query=self.state.editing_query)

    def _move(self, direction: int) -> KeyOutcome:
        move_focus(self.state, direction)
        return KeyOutcome(handled=True)

    def _focus_query(self) -> KeyOutcome:
        focus_query(self.state)
        return KeyOutcome(handled=True)

    def confirm(self) -> KeyOutcome:
        """Resolve the focused row against a fresh ranking and launch it.

        Failures come back in ``KeyOutcome.error``; the state is never mutated.
        """
        try:
            command = resolve(self.view(), self.state.focus)
            launch(command, self.spawn)
        except NoSelectionError as exc:
            logger.debug("confirm ignored: %s", exc)
            return KeyOutcome(handled=True, error=exc, focus_query=True)
        except LaunchError as exc:
            logger.warning("confirm failed: %s", exc)
            return KeyOutcome(handled=True, error=exc, focus_query=self.state.editing_query)
        return KeyOutcome(handled=True, launched=command, focus_query=self.state.editing_query)
