"""
qform Document Transform — Edge Cases

Every edge case resolves to "document unchanged". None of these raise.
"""

import pytest

from qform.kernel import events
from qform.kernel.reducer import transform
from qform.kernel.types import MULTIPLE_CHOICE, TEXT


@pytest.mark.parametrize(
    "action",
    [
        events.update_question_title(99, "ghost"),
        events.update_question_type(99, TEXT),
        events.add_option(99),
        events.update_option(99, 0, "ghost"),
        events.remove_question(99),
        events.clone_question(99),
    ],
)
def test_missing_question_is_noop(three_questions, action):
    assert transform(three_questions, action) == three_questions


@pytest.mark.parametrize("index", [2, 10, -1])
def test_update_option_out_of_range(three_questions, index):
    result = transform(three_questions, events.update_option(1, index, "x"))
    assert result["questions"][0]["options"] == ["a", "b"]


def test_update_option_on_question_without_options(three_questions):
    result = transform(three_questions, events.update_option(3, 0, "x"))
    assert "options" not in result["questions"][2]


def test_update_option_on_empty_options(default_doc):
    result = transform(default_doc, events.update_option(1, 0, "x"))
    assert result["questions"][0]["options"] == []


def test_type_change_round_trip_loses_options(three_questions):
    """Options are dropped on leaving MULTIPLE_CHOICE, not remembered."""
    doc = transform(three_questions, events.update_question_type(1, TEXT))
    doc = transform(doc, events.update_question_type(1, MULTIPLE_CHOICE))
    assert doc["questions"][0]["options"] == []


def test_same_type_still_resets_statistics(three_questions):
    doc = transform(three_questions, events.update_question_type(2, MULTIPLE_CHOICE))
    assert doc["questions"][1]["statistics"] == {}


def test_remove_last_question_leaves_empty_list(default_doc):
    doc = transform(default_doc, events.remove_question(1))
    assert doc["questions"] == []


def test_clone_twice_keeps_ids_unique(three_questions):
    doc = transform(three_questions, events.clone_question(1))
    doc = transform(doc, events.clone_question(1))
    ids = [q["id"] for q in doc["questions"]]
    assert ids == [1, 5, 4, 2, 3]
    assert len(set(ids)) == len(ids)


def test_clone_of_clone_prefix_stacks(default_doc):
    doc = transform(default_doc, events.clone_question(1))
    doc = transform(doc, events.clone_question(2))
    assert doc["questions"][2]["text"] == "Copy of Copy of Question"
