from datetime import datetime

from pydantic import BaseModel

from models.question import Question, QuestionType


class ScoredCandidate(BaseModel):
    """A candidate question with its relevance to the target (0.0-1.0)."""
    model_config = {"frozen": True}

    question: Question
    relevance: float = 0.0


class RelatedQuestion(BaseModel):
    qid: str
    stem: str = ""
    type: QuestionType
    difficulty: int
    category: str | None = None
    tags: list[str] = []
    views: int = 0
    usage_count: int = 0
    source: str | None = None
    status: str = "active"
    created_at: datetime
    relevance: float = 0.0

    @classmethod
    def from_scored(cls, scored: ScoredCandidate) -> "RelatedQuestion":
        q = scored.question
        return cls(
            qid=q.qid,
            stem=q.stem,
            type=q.type,
            difficulty=q.difficulty,
            category=q.category,
            tags=q.tags,
            views=q.views,
            usage_count=q.views,
            source=q.source,
            status=q.status,
            created_at=q.created_at,
            relevance=round(scored.relevance, 4),
        )


class RelatedQuestionsResponse(BaseModel):
    success: bool = True
    questions: list[RelatedQuestion] = []
    total: int = 0
    average_relevance: float = 0.0
