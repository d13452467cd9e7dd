"""Question item as seen by the related-questions engine."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class QuestionType(str, Enum):
    CHOICE = "choice"
    MULTIPLE_CHOICE = "multiple-choice"
    FILL = "fill"
    SOLUTION = "solution"


class Question(BaseModel):
    """Immutable view of a question bank entry.

    ``stem`` is raw question text and may embed ``$...$`` math spans.
    ``views`` is the popularity signal used to order the candidate pool.
    """
    model_config = {"frozen": True}

    qid: str
    tags: list[str] = []
    category: str | None = None
    type: QuestionType = QuestionType.CHOICE
    difficulty: int = Field(default=3, ge=1, le=5)
    stem: str = ""
    views: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str | None = None
    status: str = "active"

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value):
        if value is None:
            return []
        seen: dict[str, None] = {}
        for tag in value:
            tag = str(tag).strip()
            if tag:
                seen.setdefault(tag, None)
        return list(seen)

    @field_validator("stem", mode="before")
    @classmethod
    def _coerce_stem(cls, value):
        return "" if value is None else value
