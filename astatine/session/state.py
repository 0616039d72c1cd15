"""Navigation state: query text, focus, and the saved-focus register.

Focus is either the query field or one row of the ranked view. Transition
functions take the state by reference and have no UI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class QueryFocus:
    """The query text field has input focus."""

    @property
    def cursor(self) -> int:
        return 0


@dataclass(frozen=True)
class CandidateFocus:
    """Row ``index`` (0-based) of the ranked view has focus."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"candidate index must be non-negative, got {self.index}")

    @property
    def cursor(self) -> int:
        return self.index + 1


Focus = QueryFocus | CandidateFocus

QUERY_FOCUS = QueryFocus()


def focus_from_cursor(cursor: int) -> Focus:
    """Convert the integer cursor encoding (0 = query field, N = Nth row) to a focus."""
    if cursor <= 0:
        return QUERY_FOCUS
    return CandidateFocus(cursor - 1)


def step_focus(focus: Focus, direction: int) -> Focus:
    """Move ``focus`` by ``direction`` rows, saturating at the query field."""
    return focus_from_cursor(max(0, focus.cursor + direction))


@dataclass
class SessionState:
    query: str = ""
    focus: Focus = field(default_factory=lambda: CandidateFocus(0))
    saved_focus: Focus | None = None

    @property
    def cursor(self) -> int:
        return self.focus.cursor

    @property
    def editing_query(self) -> bool:
        return isinstance(self.focus, QueryFocus)


def apply_query_change(state: SessionState, text: str) -> None:
    """Replace the query and hand focus back to the query field."""
    state.query = text
    state.saved_focus = None
    state.focus = QUERY_FOCUS


def move_focus(state: SessionState, direction: int) -> None:
    """Restore any saved focus, then step ``direction`` rows from it."""
    if state.saved_focus is not None:
        state.focus = state.saved_focus
        state.saved_focus = None
    state.focus = step_focus(state.focus, direction)


def focus_query(state: SessionState) -> None:
    """Remember the current focus and move input focus to the query field."""
    state.saved_focus = state.focus
    state.focus = QUERY_FOCUS
