"""
qform Reorder Adapter Tests

Drag gesture (source, destination) → full ordering → one action.
"""

import pytest

from qform.kernel.reorder import move_question, reorder_action
from qform.kernel.types import REORDER_QUESTIONS


def _ids(questions):
    return [q["id"] for q in questions]


class TestMoveQuestion:
    def test_first_to_last(self, three_questions):
        assert _ids(move_question(three_questions["questions"], 0, 2)) == [2, 3, 1]

    def test_last_to_first(self, three_questions):
        assert _ids(move_question(three_questions["questions"], 2, 0)) == [3, 1, 2]

    def test_adjacent_down(self, three_questions):
        assert _ids(move_question(three_questions["questions"], 0, 1)) == [2, 1, 3]

    def test_same_index_keeps_order(self, three_questions):
        assert _ids(move_question(three_questions["questions"], 1, 1)) == [1, 2, 3]

    def test_input_list_untouched(self, three_questions):
        questions = three_questions["questions"]
        move_question(questions, 0, 2)
        assert _ids(questions) == [1, 2, 3]

    def test_result_is_permutation(self, three_questions):
        moved = move_question(three_questions["questions"], 2, 1)
        assert sorted(_ids(moved)) == [1, 2, 3]


class TestReorderAction:
    def test_builds_full_ordering(self, three_questions):
        action = reorder_action(three_questions, 0, 2)
        assert action.type == REORDER_QUESTIONS
        assert _ids(action.payload) == [2, 3, 1]

    def test_cancelled_drag(self, three_questions):
        assert reorder_action(three_questions, 0, None) is None

    @pytest.mark.parametrize("source,destination", [(3, 0), (0, 3), (-1, 0), (0, -1)])
    def test_out_of_range(self, three_questions, source, destination):
        assert reorder_action(three_questions, source, destination) is None
