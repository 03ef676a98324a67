"""Regression tests for ANSI-aware width, clipping, and padding helpers.

These protect pane borders from drifting when rows carry color codes,
tabs, or wide characters.
"""

import unittest

from binocular import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escape_sequences_take_no_columns(self) -> None:
        self.assertEqual(ansi_mod.display_width("\033[94msrc/a.py\033[0m"), 8)

    def test_wide_characters_take_two_columns(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.display_width("ab\tc"), 9)


class ClipTests(unittest.TestCase):
    def test_clip_keeps_styles_and_stops_at_width(self) -> None:
        clipped = ansi_mod.clip_ansi_line("\033[1mabcdef\033[0m", 3)
        self.assertEqual(clipped, "\033[1mabc")

    def test_clip_does_not_split_wide_character(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a日b", 2), "a")

    def test_fit_pads_short_lines(self) -> None:
        fitted = ansi_mod.fit_ansi_line("\033[91mab\033[0m", 5)
        self.assertEqual(ansi_mod.display_width(fitted), 5)
        self.assertTrue(fitted.endswith("   "))

    def test_sanitize_drops_control_bytes(self) -> None:
        self.assertEqual(ansi_mod.sanitize_line("a\rb\x1bc\td"), "abc\td")


if __name__ == "__main__":
    unittest.main()
