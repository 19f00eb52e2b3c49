"""
qform kernel test configuration.

Shared fixtures: a fixed clock so default documents are deterministic, and
ready-made questionnaires for transform and history tests.
"""

from datetime import UTC, datetime

import pytest

from qform.kernel.history import initial_state
from qform.kernel.reducer import default_questionnaire
from qform.kernel.types import BOOLEAN, MULTIPLE_CHOICE, TEXT

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def default_doc():
    """Session start document: one empty multiple-choice question, id 1."""
    return default_questionnaire(42, now=FIXED_NOW)


@pytest.fixture
def three_questions(default_doc):
    """Questions Q1..Q3 with ids 1, 2, 3 and one of each type."""
    doc = default_doc
    doc["questions"] = [
        {"id": 1, "text": "Q1", "type": MULTIPLE_CHOICE, "statistics": {}, "options": ["a", "b"]},
        {"id": 2, "text": "Q2", "type": MULTIPLE_CHOICE, "statistics": {"a": 3}, "options": ["yes", "no"]},
        {"id": 3, "text": "Q3", "type": TEXT, "statistics": {}},
    ]
    return doc


@pytest.fixture
def boolean_question():
    return {"id": 7, "text": "Agree?", "type": BOOLEAN, "statistics": {}}


@pytest.fixture
def fresh_state():
    return initial_state(42, now=FIXED_NOW)
