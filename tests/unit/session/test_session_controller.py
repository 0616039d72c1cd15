"""Tests for ``LauncherSession`` key handling and confirm outcomes."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from astatine.catalog.types import Candidate, VectorPath
from astatine.errors import (
    DuplicateLaunchCommandError,
    LaunchDispatchError,
    NoSelectionError,
    OutOfRangeError,
)
from astatine.session.controller import LauncherSession
from astatine.session.state import SessionState, focus_from_cursor

ICON = VectorPath(Path("application-x-executable"))


def _catalog() -> tuple[Candidate, ...]:
    return (
        Candidate(name="Firefox", launch_command="firefox", icon=ICON),
        Candidate(name="Files", launch_command="nautilus", icon=ICON),
        Candidate(name="Terminal", launch_command="alacritty", icon=ICON),
    )


class LauncherSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.spawn = mock.Mock()
        self.session = LauncherSession(_catalog(), spawn=self.spawn)

    def test_duplicate_launch_commands_are_rejected(self) -> None:
        catalog = _catalog() + (Candidate(name="Firefox ESR", launch_command="firefox", icon=ICON),)

        with self.assertRaises(DuplicateLaunchCommandError):
            LauncherSession(catalog)

    def test_view_follows_live_query(self) -> None:
        self.assertEqual([c.name for c in self.session.view()], ["Firefox", "Files", "Terminal"])

        self.session.handle_text("term")

        self.assertEqual([c.name for c in self.session.view()], ["Terminal"])

    def test_navigation_keys_move_focus(self) -> None:
        outcome = self.session.handle_key("j")

        self.assertTrue(outcome.handled)
        self.assertFalse(outcome.focus_query)
        self.assertEqual(self.session.cursor, 2)

        self.session.handle_key("k")
        self.assertEqual(self.session.cursor, 1)

    def test_i_and_slash_perform_the_same_transition(self) -> None:
        for key in ("i", "/"):
            session = LauncherSession(_catalog(), state=SessionState(focus=focus_from_cursor(2)))

            outcome = session.handle_key(key)

            self.assertTrue(outcome.focus_query)
            self.assertEqual(session.cursor, 0)
            self.assertEqual(session.state.saved_focus, focus_from_cursor(2))

    def test_unbound_key_changes_nothing(self) -> None:
        before = SessionState(self.session.state.query, self.session.state.focus, self.session.state.saved_focus)

        outcome = self.session.handle_key("x")

        self.assertFalse(outcome.handled)
        self.assertEqual(self.session.state, before)

    def test_confirm_launches_focused_candidate(self) -> None:
        self.session.handle_key("j")

        outcome = self.session.handle_key("ENTER")

        self.assertEqual(outcome.launched, "nautilus")
        self.assertIsNone(outcome.error)
        self.spawn.assert_called_once_with("nautilus", [])

    def test_confirm_out_of_range_is_reported_without_mutation(self) -> None:
        catalog = _catalog()[:2]
        state = SessionState(focus=focus_from_cursor(5))
        session = LauncherSession(catalog, spawn=self.spawn, state=state)

        outcome = session.handle_key("ENTER")

        self.assertIsInstance(outcome.error, OutOfRangeError)
        self.assertIsNone(outcome.launched)
        self.assertEqual(session.state, SessionState(query="", focus=focus_from_cursor(5), saved_focus=None))
        self.spawn.assert_not_called()

    def test_confirm_from_query_field_requests_query_focus(self) -> None:
        self.session.handle_text("fi")

        outcome = self.session.handle_key("ENTER")

        self.assertIsInstance(outcome.error, NoSelectionError)
        self.assertTrue(outcome.focus_query)
        self.spawn.assert_not_called()

    def test_confirm_reports_dispatch_failures(self) -> None:
        self.spawn.side_effect = LaunchDispatchError("firefox", "Permission denied")

        outcome = self.session.handle_key("ENTER")

        self.assertIsInstance(outcome.error, LaunchDispatchError)
        self.assertIsNone(outcome.launched)

    def test_focused_candidate_is_none_past_end_of_view(self) -> None:
        self.assertEqual(self.session.focused_candidate().name, "Firefox")

        self.session.state.focus = focus_from_cursor(9)

        self.assertIsNone(self.session.focused_candidate())

    def test_text_change_then_move_next_focuses_top_match(self) -> None:
        self.session.handle_text("ter")
        self.session.handle_key("j")

        self.assertEqual(self.session.focused_candidate().name, "Terminal")


if __name__ == "__main__":
    unittest.main()
