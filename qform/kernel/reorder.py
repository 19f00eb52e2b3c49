"""
qform Kernel — Reorder Adapter

Turns a drag gesture (source index, destination index) into a single
REORDER_QUESTIONS action carrying the full new ordering, so one undo reverts
the whole move. Knows nothing about how the gesture was captured.
"""

from __future__ import annotations

from typing import Any

from qform.kernel.events import reorder_questions
from qform.kernel.types import Action


def move_question(
    questions: list[dict[str, Any]],
    source_index: int,
    destination_index: int,
) -> list[dict[str, Any]]:
    """
    Remove the item at source_index, then insert it at destination_index of
    the shortened list. Everything else keeps its relative order.
    The input list is not modified.
    """
    items = list(questions)
    moved = items.pop(source_index)
    items.insert(destination_index, moved)
    return items


def reorder_action(
    document: dict[str, Any],
    source_index: int,
    destination_index: int | None,
) -> Action | None:
    """
    Build the action for a finished drag, or None when there is nothing to
    dispatch (gesture dropped outside the list, index out of range).
    """
    if destination_index is None:
        return None

    questions = document["questions"]
    if not (0 <= source_index < len(questions) and 0 <= destination_index < len(questions)):
        return None

    return reorder_questions(move_question(questions, source_index, destination_index))
