"""
qform Kernel — Document Transform

Pure function: (questionnaire, action) → questionnaire
No side effects. No IO. Deterministic.

Every handler works on a deep copy of the input document, so the caller's
snapshot is never modified and older snapshots held in the history stay
valid. Edge cases (missing question, out-of-range option index, option edit
on a non-choice question) leave the copy unchanged rather than raising.
"""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import Any

from qform.kernel.types import (
    ADD_OPTION,
    ADD_QUESTION,
    CLONE_QUESTION,
    COPY_PREFIX,
    DEFAULT_ANSWERS_LIMIT,
    DEFAULT_QUESTION_TEXT,
    DEFAULT_TITLE,
    MULTIPLE_CHOICE,
    NEW_QUESTION_TEXT,
    REMOVE_QUESTION,
    REORDER_QUESTIONS,
    SET_TITLE,
    UPDATE_OPTION,
    UPDATE_QUESTION_TITLE,
    UPDATE_QUESTION_TYPE,
    UPDATE_SETTINGS,
    Action,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def default_questionnaire(
    questionnaire_id: int | None = None,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    The document an editing session starts from: one empty multiple-choice
    question, a one-year submission window starting now.
    """
    now = now or datetime.now(UTC)
    if questionnaire_id is None:
        questionnaire_id = int(now.timestamp() * 1000)

    return {
        "id": questionnaire_id,
        "title": DEFAULT_TITLE,
        "options": {
            "start_date": _iso(now),
            "end_date": _iso(_one_year_later(now)),
            "answers_limit": DEFAULT_ANSWERS_LIMIT,
            "anonymous": True,
        },
        "questions": [
            {
                "id": 1,
                "text": DEFAULT_QUESTION_TEXT,
                "type": MULTIPLE_CHOICE,
                "statistics": {},
                "options": [],
            },
        ],
    }


def transform(document: dict[str, Any], action: Action) -> dict[str, Any]:
    """
    Apply one mutating action to a questionnaire.

    Returns a new dict. The input document is never modified.
    Unknown action types return the input object itself.
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return document

    doc = copy.deepcopy(document)
    return handler(doc, action.payload)


def next_question_id(questions: list[dict[str, Any]]) -> int:
    """
    One past the highest id in use.

    Matches "list length + 1" while ids are 1..n and never reuses a surviving
    id after a removal.
    """
    return max((q["id"] for q in questions), default=0) + 1


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _iso(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _one_year_later(value: datetime) -> datetime:
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        # Feb 29
        return value.replace(year=value.year + 1, day=28)


def _find(doc: dict, question_id: int) -> dict | None:
    for q in doc["questions"]:
        if q["id"] == question_id:
            return q
    return None


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_set_title(doc: dict, payload: Any) -> dict:
    doc["title"] = payload
    return doc


def _handle_add_question(doc: dict, payload: Any) -> dict:
    doc["questions"].append(
        {
            "id": next_question_id(doc["questions"]),
            "text": NEW_QUESTION_TEXT,
            "type": MULTIPLE_CHOICE,
            "statistics": {},
            "options": [],
        }
    )
    return doc


def _handle_update_question_title(doc: dict, payload: Any) -> dict:
    q = _find(doc, payload["id"])
    if q is not None:
        q["text"] = payload["title"]
    return doc


def _handle_update_question_type(doc: dict, payload: Any) -> dict:
    q = _find(doc, payload["id"])
    if q is None:
        return doc

    q["type"] = payload["type"]
    q["statistics"] = {}
    if payload["type"] == MULTIPLE_CHOICE:
        q["options"] = q.get("options") or []
    else:
        q.pop("options", None)
    return doc


def _handle_add_option(doc: dict, payload: Any) -> dict:
    q = _find(doc, payload["id"])
    if q is not None and q["type"] == MULTIPLE_CHOICE:
        q["options"] = [*q.get("options", []), ""]
    return doc


def _handle_update_option(doc: dict, payload: Any) -> dict:
    q = _find(doc, payload["id"])
    if q is None or "options" not in q:
        return doc

    index = payload["option_index"]
    if 0 <= index < len(q["options"]):
        q["options"][index] = payload["value"]
    return doc


def _handle_remove_question(doc: dict, payload: Any) -> dict:
    doc["questions"] = [q for q in doc["questions"] if q["id"] != payload["id"]]
    return doc


def _handle_clone_question(doc: dict, payload: Any) -> dict:
    new_id = next_question_id(doc["questions"])
    questions: list[dict] = []
    for q in doc["questions"]:
        questions.append(q)
        if q["id"] == payload["id"]:
            clone = copy.deepcopy(q)
            clone["id"] = new_id
            clone["text"] = f"{COPY_PREFIX}{q['text']}"
            questions.append(clone)
    doc["questions"] = questions
    return doc


def _handle_reorder_questions(doc: dict, payload: Any) -> dict:
    doc["questions"] = copy.deepcopy(list(payload))
    return doc


def _handle_update_settings(doc: dict, payload: Any) -> dict:
    doc["options"].update(payload)
    return doc


_HANDLERS: dict[str, Any] = {
    SET_TITLE: _handle_set_title,
    ADD_QUESTION: _handle_add_question,
    UPDATE_QUESTION_TITLE: _handle_update_question_title,
    UPDATE_QUESTION_TYPE: _handle_update_question_type,
    ADD_OPTION: _handle_add_option,
    UPDATE_OPTION: _handle_update_option,
    REMOVE_QUESTION: _handle_remove_question,
    CLONE_QUESTION: _handle_clone_question,
    REORDER_QUESTIONS: _handle_reorder_questions,
    UPDATE_SETTINGS: _handle_update_settings,
}
