"""Key-combo registry and the launcher's key bindings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..errors import LaunchError

MOVE_NEXT_KEYS = ("j", "DOWN")
MOVE_PREVIOUS_KEYS = ("k", "UP")
FOCUS_QUERY_KEYS = ("i", "/")
CONFIRM_KEYS = ("ENTER",)

_KEY_ALIASES = {
    "ENTER_CR": "ENTER",
    "ENTER_LF": "ENTER",
    "<enter>": "ENTER",
    "\r": "ENTER",
    "\n": "ENTER",
}


def normalize_key(key: str) -> str:
    """Map terminal-specific Enter tokens onto ``ENTER``; other keys pass through."""
    return _KEY_ALIASES.get(key, key)


@dataclass(frozen=True)
class KeyOutcome:
    """Result of one key event.

    ``launched`` is the dispatched command, ``error`` the handled launch
    failure, and ``focus_query`` asks presentation to focus the query field.
    """

    handled: bool
    launched: str | None = None
    error: LaunchError | None = None
    focus_query: bool = False


UNHANDLED = KeyOutcome(handled=False)


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], KeyOutcome]


class KeyComboRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else normalize_key
        self._handlers: dict[str, Callable[[], KeyOutcome]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def bound_keys(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def dispatch(self, key: str) -> KeyOutcome:
        """Invoke the handler bound to ``key``; unbound keys are unhandled."""
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return UNHANDLED
        return handler()
