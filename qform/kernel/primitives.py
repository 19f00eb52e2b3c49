"""
qform Kernel — Action Validation

Validates action payloads before they reach the reducer.
Validation is structural (well-formed?) not semantic (will it change the
document?). The reducer handles semantic checks (does the question exist,
is the option index in range, etc.) by leaving the document unchanged.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from qform.kernel.types import (
    ACTION_TYPES,
    ADD_OPTION,
    CLONE_QUESTION,
    MULTIPLE_CHOICE,
    QUESTION_TYPES,
    REMOVE_QUESTION,
    REORDER_QUESTIONS,
    SET_TITLE,
    SETTINGS_KEYS,
    UPDATE_OPTION,
    UPDATE_QUESTION_TITLE,
    UPDATE_QUESTION_TYPE,
    UPDATE_SETTINGS,
    is_question_id,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_action(type: str, payload: Any) -> list[str]:
    """
    Validate an action's type and payload structure.
    Returns a list of error strings. Empty list = valid.

    ADD_QUESTION, UNDO and REDO carry no payload; anything passed is ignored.
    """
    errors: list[str] = []

    if type not in ACTION_TYPES:
        errors.append(f"Unknown action type: {type}")
        return errors

    validator = _VALIDATORS.get(type)
    if validator:
        errors.extend(validator(payload))

    return errors


# ---------------------------------------------------------------------------
# Per-action validators
# ---------------------------------------------------------------------------


def _require_id(type: str, p: Any) -> list[str]:
    if not isinstance(p, dict):
        return [f"{type} payload must be an object"]
    if "id" not in p:
        return [f"{type} requires 'id'"]
    if not is_question_id(p["id"]):
        return [f"Invalid question id: {p['id']!r}"]
    return []


def _validate_set_title(p: Any) -> list[str]:
    if not isinstance(p, str):
        return ["SET_TITLE payload must be a string"]
    return []


def _validate_update_question_title(p: Any) -> list[str]:
    errors = _require_id(UPDATE_QUESTION_TITLE, p)
    if errors:
        return errors
    if not isinstance(p.get("title"), str):
        errors.append("UPDATE_QUESTION_TITLE requires string 'title'")
    return errors


def _validate_update_question_type(p: Any) -> list[str]:
    errors = _require_id(UPDATE_QUESTION_TYPE, p)
    if errors:
        return errors
    if p.get("type") not in QUESTION_TYPES:
        errors.append(f"Invalid question type: {p.get('type')!r}")
    return errors


def _validate_update_option(p: Any) -> list[str]:
    errors = _require_id(UPDATE_OPTION, p)
    if errors:
        return errors
    if not is_question_id(p.get("option_index")):
        errors.append("UPDATE_OPTION requires integer 'option_index'")
    if not isinstance(p.get("value"), str):
        errors.append("UPDATE_OPTION requires string 'value'")
    return errors


def _validate_question(i: int, q: Any) -> list[str]:
    if not isinstance(q, dict) or not is_question_id(q.get("id")):
        return [f"REORDER_QUESTIONS item {i} is not a question"]

    errors: list[str] = []
    if not isinstance(q.get("text"), str):
        errors.append(f"Question {q['id']} requires string 'text'")
    if q.get("type") not in QUESTION_TYPES:
        errors.append(f"Question {q['id']} has invalid type: {q.get('type')!r}")
    if not isinstance(q.get("statistics"), dict):
        errors.append(f"Question {q['id']} requires object 'statistics'")

    # options exist exactly on multiple-choice questions
    if q.get("type") == MULTIPLE_CHOICE:
        options = q.get("options")
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            errors.append(f"Question {q['id']} requires a list of string 'options'")
    elif "options" in q:
        errors.append(f"Question {q['id']} of type {q.get('type')} cannot carry 'options'")
    return errors


def _validate_reorder_questions(p: Any) -> list[str]:
    if not isinstance(p, list):
        return ["REORDER_QUESTIONS payload must be a list of questions"]

    errors: list[str] = []
    seen: set[int] = set()
    for i, q in enumerate(p):
        errors.extend(_validate_question(i, q))
        if not (isinstance(q, dict) and is_question_id(q.get("id"))):
            continue
        if q["id"] in seen:
            errors.append(f"Duplicate question id in ordering: {q['id']}")
        seen.add(q["id"])
    return errors


def _is_timestamp(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        return datetime.fromisoformat(value).tzinfo is not None
    except ValueError:
        return False


def _validate_update_settings(p: Any) -> list[str]:
    if not isinstance(p, dict):
        return ["UPDATE_SETTINGS payload must be an object"]
    if not p:
        return ["UPDATE_SETTINGS requires at least one field"]

    errors: list[str] = []
    unknown = set(p) - SETTINGS_KEYS
    if unknown:
        errors.append(f"Unknown settings: {', '.join(sorted(unknown))}")

    for key in ("start_date", "end_date"):
        if key in p and not _is_timestamp(p[key]):
            errors.append(f"'{key}' must be an ISO 8601 timestamp with a UTC offset")

    if "answers_limit" in p:
        limit = p["answers_limit"]
        if not is_question_id(limit) or limit < 1:
            errors.append("'answers_limit' must be a positive integer")

    if "anonymous" in p and not isinstance(p["anonymous"], bool):
        errors.append("'anonymous' must be a boolean")

    return errors


_VALIDATORS = {
    SET_TITLE: _validate_set_title,
    UPDATE_QUESTION_TITLE: _validate_update_question_title,
    UPDATE_QUESTION_TYPE: _validate_update_question_type,
    ADD_OPTION: lambda p: _require_id(ADD_OPTION, p),
    UPDATE_OPTION: _validate_update_option,
    REMOVE_QUESTION: lambda p: _require_id(REMOVE_QUESTION, p),
    CLONE_QUESTION: lambda p: _require_id(CLONE_QUESTION, p),
    REORDER_QUESTIONS: _validate_reorder_questions,
    UPDATE_SETTINGS: _validate_update_settings,
}
