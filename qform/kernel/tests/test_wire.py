"""
qform Wire Format Tests

The submission body: camelCase keys, submission-time createdAt, and
statistics/options present as null rather than omitted.
"""

import json

import pytest
from pydantic import ValidationError

from qform.kernel.wire import WireQuestionnaire, to_wire

CREATED_AT = "2026-03-02T09:30:00Z"


def test_top_level_shape(three_questions):
    body = to_wire(three_questions, created_at=CREATED_AT)
    assert set(body) == {"id", "title", "createdAt", "options", "questions"}
    assert body["id"] == 42
    assert body["createdAt"] == CREATED_AT
    assert body["options"] == {
        "startDate": "2026-03-01T12:00:00Z",
        "endDate": "2027-03-01T12:00:00Z",
        "answersLimit": 100,
        "anonymous": True,
    }


def test_questions_keep_order_and_fields(three_questions):
    body = to_wire(three_questions, created_at=CREATED_AT)
    assert body["questions"][:2] == [
        {"id": 1, "text": "Q1", "type": "MULTIPLE_CHOICE", "statistics": {}, "options": ["a", "b"]},
        {"id": 2, "text": "Q2", "type": "MULTIPLE_CHOICE", "statistics": {"a": 3}, "options": ["yes", "no"]},
    ]


def test_absent_options_emitted_as_null(three_questions):
    body = to_wire(three_questions, created_at=CREATED_AT)
    q3 = body["questions"][2]
    assert "options" in q3
    assert q3["options"] is None
    assert '"options": null' in json.dumps(q3)


def test_absent_statistics_emitted_as_null(default_doc):
    del default_doc["questions"][0]["statistics"]
    body = to_wire(default_doc, created_at=CREATED_AT)
    assert body["questions"][0]["statistics"] is None


def test_anonymous_defaults_true(default_doc):
    del default_doc["options"]["anonymous"]
    assert to_wire(default_doc)["options"]["anonymous"] is True


def test_anonymous_false_is_kept(default_doc):
    default_doc["options"]["anonymous"] = False
    assert to_wire(default_doc)["options"]["anonymous"] is False


def test_created_at_defaults_to_now(default_doc):
    body = to_wire(default_doc)
    assert body["createdAt"].endswith("Z")
    assert body["createdAt"] != default_doc["options"]["start_date"]


def test_source_document_not_modified(three_questions):
    before = json.dumps(three_questions, sort_keys=True)
    to_wire(three_questions, created_at=CREATED_AT)
    assert json.dumps(three_questions, sort_keys=True) == before


def test_body_parses_back(three_questions):
    body = to_wire(three_questions, created_at=CREATED_AT)
    parsed = WireQuestionnaire.model_validate(body)
    assert parsed.options.answers_limit == 100
    assert [q.id for q in parsed.questions] == [1, 2, 3]


def test_invalid_question_type_rejected(default_doc):
    default_doc["questions"][0]["type"] = "SLIDER"
    with pytest.raises(ValidationError):
        to_wire(default_doc)


@pytest.mark.parametrize("value", ["not a date", "", "2026-03-01T12:00:00"])
def test_unparseable_window_rejected(default_doc, value):
    default_doc["options"]["start_date"] = value
    with pytest.raises(ValidationError):
        to_wire(default_doc)


def test_offset_timestamp_sent_verbatim(default_doc):
    default_doc["options"]["end_date"] = "2027-03-01T14:00:00+02:00"
    assert to_wire(default_doc)["options"]["endDate"] == "2027-03-01T14:00:00+02:00"
