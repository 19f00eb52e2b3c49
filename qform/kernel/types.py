"""
qform Kernel — Shared Types

Data classes and constants used across primitives, reducer, history and
assembly. These are the contracts that bind the kernel together.

Documents are plain JSON-compatible dicts:

  Questionnaire = {
      "id":        int,
      "title":     str,
      "options":   {start_date, end_date, answers_limit, anonymous},
      "questions": [Question, ...],
  }

  Question = {
      "id":         int,
      "text":       str,
      "type":       "MULTIPLE_CHOICE" | "TEXT" | "BOOLEAN",
      "statistics": dict,
      "options":    [str, ...],   # key present only for MULTIPLE_CHOICE
  }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Question types
# ---------------------------------------------------------------------------

MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
TEXT = "TEXT"
BOOLEAN = "BOOLEAN"

QUESTION_TYPES: set[str] = {MULTIPLE_CHOICE, TEXT, BOOLEAN}


# ---------------------------------------------------------------------------
# Action type registry
# ---------------------------------------------------------------------------

SET_TITLE = "SET_TITLE"
ADD_QUESTION = "ADD_QUESTION"
UPDATE_QUESTION_TITLE = "UPDATE_QUESTION_TITLE"
UPDATE_QUESTION_TYPE = "UPDATE_QUESTION_TYPE"
ADD_OPTION = "ADD_OPTION"
UPDATE_OPTION = "UPDATE_OPTION"
REMOVE_QUESTION = "REMOVE_QUESTION"
CLONE_QUESTION = "CLONE_QUESTION"
REORDER_QUESTIONS = "REORDER_QUESTIONS"
UPDATE_SETTINGS = "UPDATE_SETTINGS"
UNDO = "UNDO"
REDO = "REDO"

# Everything except UNDO/REDO records a history step.
MUTATING_ACTION_TYPES: set[str] = {
    SET_TITLE,
    ADD_QUESTION,
    UPDATE_QUESTION_TITLE,
    UPDATE_QUESTION_TYPE,
    ADD_OPTION,
    UPDATE_OPTION,
    REMOVE_QUESTION,
    CLONE_QUESTION,
    REORDER_QUESTIONS,
    UPDATE_SETTINGS,
}

HISTORY_ACTION_TYPES: set[str] = {UNDO, REDO}

ACTION_TYPES: set[str] = MUTATING_ACTION_TYPES | HISTORY_ACTION_TYPES

SETTINGS_KEYS: set[str] = {"start_date", "end_date", "answers_limit", "anonymous"}


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_TITLE = "Untitled questionnaire"
DEFAULT_QUESTION_TEXT = "Question"
NEW_QUESTION_TEXT = "New question"
COPY_PREFIX = "Copy of "
DEFAULT_ANSWERS_LIMIT = 100


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class Action:
    """
    One discrete edit intent dispatched to the history reducer.
    The reducer reads only `type` and `payload`.
    """

    type: str
    payload: Any = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type}
        if self.payload is not None:
            d["payload"] = self.payload
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Action:
        return cls(type=d["type"], payload=d.get("payload"))


@dataclass
class HistoryState:
    """
    Linear undo/redo history around the current document.

    past:    prior snapshots, oldest first
    present: the current questionnaire
    future:  undone snapshots, most recently undone first
    """

    present: dict[str, Any]
    past: list[dict[str, Any]] = field(default_factory=list)
    future: list[dict[str, Any]] = field(default_factory=list)

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0


@dataclass
class SubmitResult:
    """Outcome of one submission attempt. Editing state is never touched."""

    ok: bool
    message: str
    payload: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def is_question_id(value: Any) -> bool:
    """Question ids are plain ints (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)
