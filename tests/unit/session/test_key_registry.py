"""Key registry tests: combo aliases, Enter normalization, unbound keys."""

from __future__ import annotations

import unittest

from astatine.session.keys import UNHANDLED, KeyComboBinding, KeyComboRegistry, KeyOutcome, normalize_key


class KeyComboRegistryTests(unittest.TestCase):
    def test_every_combo_of_a_binding_reaches_the_same_handler(self) -> None:
        calls: list[str] = []

        def handler() -> KeyOutcome:
            calls.append("focus")
            return KeyOutcome(handled=True)

        registry = KeyComboRegistry().register_binding(KeyComboBinding(("i", "/"), handler))

        self.assertTrue(registry.dispatch("i").handled)
        self.assertTrue(registry.dispatch("/").handled)
        self.assertEqual(calls, ["focus", "focus"])

    def test_unbound_key_is_unhandled(self) -> None:
        registry = KeyComboRegistry()

        self.assertIs(registry.dispatch("x"), UNHANDLED)

    def test_enter_variants_normalize_to_enter(self) -> None:
        registry = KeyComboRegistry().register_binding(
            KeyComboBinding(("ENTER",), lambda: KeyOutcome(handled=True, launched="cmd"))
        )

        for key in ("ENTER", "ENTER_CR", "ENTER_LF", "<enter>", "\r"):
            self.assertEqual(registry.dispatch(key).launched, "cmd", key)

    def test_later_binding_overrides_earlier_combo(self) -> None:
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("j",), lambda: KeyOutcome(handled=True, launched="first")),
            KeyComboBinding(("j",), lambda: KeyOutcome(handled=True, launched="second")),
        )

        self.assertEqual(registry.dispatch("j").launched, "second")
        self.assertEqual(registry.bound_keys(), frozenset({"j"}))

    def test_normalize_key_leaves_letters_case_sensitive(self) -> None:
        self.assertEqual(normalize_key("J"), "J")
        self.assertEqual(normalize_key("j"), "j")


if __name__ == "__main__":
    unittest.main()
