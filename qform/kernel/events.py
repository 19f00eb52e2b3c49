"""
qform Kernel — Action Construction

Factory functions for creating well-formed actions.
Used by the editor session and the CLI to build actions before feeding them
to the history reducer, and by tests to build actions concisely.
"""

from __future__ import annotations

from typing import Any

from qform.kernel.types import (
    ADD_OPTION,
    ADD_QUESTION,
    CLONE_QUESTION,
    REDO,
    REMOVE_QUESTION,
    REORDER_QUESTIONS,
    SET_TITLE,
    UNDO,
    UPDATE_OPTION,
    UPDATE_QUESTION_TITLE,
    UPDATE_QUESTION_TYPE,
    UPDATE_SETTINGS,
    Action,
)


def make_action(raw: dict[str, Any]) -> Action:
    """Build an Action from a raw {type, payload} dict (e.g. parsed JSON)."""
    return Action.from_dict(raw)


def set_title(title: str) -> Action:
    return Action(SET_TITLE, title)


def add_question() -> Action:
    return Action(ADD_QUESTION)


def update_question_title(question_id: int, title: str) -> Action:
    return Action(UPDATE_QUESTION_TITLE, {"id": question_id, "title": title})


def update_question_type(question_id: int, question_type: str) -> Action:
    return Action(UPDATE_QUESTION_TYPE, {"id": question_id, "type": question_type})


def add_option(question_id: int) -> Action:
    return Action(ADD_OPTION, {"id": question_id})


def update_option(question_id: int, option_index: int, value: str) -> Action:
    return Action(
        UPDATE_OPTION,
        {"id": question_id, "option_index": option_index, "value": value},
    )


def remove_question(question_id: int) -> Action:
    return Action(REMOVE_QUESTION, {"id": question_id})


def clone_question(question_id: int) -> Action:
    return Action(CLONE_QUESTION, {"id": question_id})


def reorder_questions(questions: list[dict[str, Any]]) -> Action:
    """Carries the full replacement ordering, not a delta."""
    return Action(REORDER_QUESTIONS, list(questions))


def update_settings(**fields: Any) -> Action:
    """
    Merge submission-window settings into the document options.
    Accepts any of start_date, end_date, answers_limit, anonymous.
    """
    return Action(UPDATE_SETTINGS, dict(fields))


def undo() -> Action:
    return Action(UNDO)


def redo() -> Action:
    return Action(REDO)
