"""
qform Kernel — Wire Format

What the submission endpoint receives. The in-memory document uses
snake_case keys and omits `options` on non-choice questions; the wire body is
camelCase and always carries `statistics` and `options`, as null when absent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from qform.kernel.types import now_iso


class WireOptions(BaseModel):
    """Submission window and answer settings."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    answers_limit: int = Field(alias="answersLimit", ge=1)
    anonymous: bool = True

    @field_validator("start_date", "end_date")
    @classmethod
    def check_timestamp(cls, value: str) -> str:
        # sent verbatim; only checked
        if datetime.fromisoformat(value).tzinfo is None:
            raise ValueError("timestamp must carry a UTC offset")
        return value


class WireQuestion(BaseModel):
    model_config = {"extra": "forbid"}

    id: int
    text: str
    type: Literal["MULTIPLE_CHOICE", "TEXT", "BOOLEAN"]
    statistics: dict[str, Any] | None = None
    options: list[str] | None = None


class WireQuestionnaire(BaseModel):
    """Body of the questionnaire creation request."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    id: int
    title: str
    created_at: str = Field(alias="createdAt")
    options: WireOptions
    questions: list[WireQuestion]


def to_wire(document: dict[str, Any], created_at: str | None = None) -> dict[str, Any]:
    """
    Serialize a questionnaire for submission.

    created_at is the submission time (defaults to now), not the time the
    document was first created.
    """
    options = document["options"]
    anonymous = options.get("anonymous")

    model = WireQuestionnaire(
        id=document["id"],
        title=document["title"],
        created_at=created_at or now_iso(),
        options=WireOptions(
            start_date=options["start_date"],
            end_date=options["end_date"],
            answers_limit=options["answers_limit"],
            anonymous=True if anonymous is None else anonymous,
        ),
        questions=[
            WireQuestion(
                id=q["id"],
                text=q["text"],
                type=q["type"],
                statistics=q.get("statistics"),
                options=q.get("options"),
            )
            for q in document["questions"]
        ],
    )
    return model.model_dump(mode="json", by_alias=True)
