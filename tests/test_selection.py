from __future__ import annotations

import unittest

from binocular.search.match import MatchRecord
from binocular.selection import SelectionState


def _records(count: int) -> list[MatchRecord]:
    return [
        MatchRecord(file_path=f"f{idx}.py", line_number=idx + 1, matched_text=str(idx), context_text=str(idx))
        for idx in range(count)
    ]


class SelectionStateTests(unittest.TestCase):
    def test_replace_selects_first_item(self) -> None:
        state = SelectionState()
        state.replace(_records(5))
        state.move_down()
        state.move_down()

        state.replace(_records(5))

        self.assertEqual(state.selected_index, 0)
        self.assertEqual(state.list_start, 0)

    def test_replace_with_empty_list_clears_selection(self) -> None:
        state = SelectionState()
        state.replace(_records(3))

        state.replace([])

        self.assertIsNone(state.selected_index)
        self.assertIsNone(state.selected())

    def test_move_down_wraps_to_first(self) -> None:
        state = SelectionState()
        state.replace(_records(5))
        state.selected_index = 4

        state.move_down()

        self.assertEqual(state.selected_index, 0)

    def test_move_up_wraps_to_last(self) -> None:
        state = SelectionState()
        state.replace(_records(5))

        state.move_up()

        self.assertEqual(state.selected_index, 4)

    def test_navigation_on_empty_list_is_a_no_op(self) -> None:
        state = SelectionState()

        state.move_down()
        state.move_up()

        self.assertIsNone(state.selected_index)
        self.assertIsNone(state.selected())

    def test_selected_returns_record_at_index(self) -> None:
        records = _records(3)
        state = SelectionState()
        state.replace(records)
        state.move_down()

        self.assertIs(state.selected(), records[1])

    def test_scroll_into_view_follows_selection(self) -> None:
        state = SelectionState()
        state.replace(_records(10))

        for _ in range(6):
            state.move_down()
        self.assertEqual(state.scroll_into_view(4), 3)

        state.move_up()
        state.move_up()
        state.move_up()
        state.move_up()
        self.assertEqual(state.scroll_into_view(4), 2)

        state.move_up()
        state.move_up()
        state.move_up()
        self.assertEqual(state.selected_index, 9)
        self.assertEqual(state.scroll_into_view(4), 6)


if __name__ == "__main__":
    unittest.main()
