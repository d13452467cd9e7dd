"""Candidate pool construction for related-question ranking.

The query is derived from the target's tags:
- keyword mode: core keywords found in the target's tags; a candidate
  qualifies if any of its tags carries one of them (case-insensitive)
- exact_tag mode: no core keyword found; a candidate qualifies by sharing
  at least one identical tag
- broad mode: the target is untagged; any live question qualifies

Pools are ordered by popularity then recency and capped, since scoring
cost grows linearly with pool size.
"""

import logging
from datetime import timezone
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, TypeAdapter

from models.question import Question
from services.tag_gate import CORE_KEYWORDS, contains_keyword, tag_keywords

logger = logging.getLogger(__name__)

DEFAULT_POOL_LIMIT = 100
DELETED_STATUS = "deleted"


class QueryMode(str, Enum):
    KEYWORD = "keyword"
    EXACT_TAG = "exact_tag"
    BROAD = "broad"


class CandidateQuery(BaseModel):
    """Storage-agnostic description of the candidate pool to fetch."""
    model_config = {"frozen": True}

    mode: QueryMode = QueryMode.BROAD
    keywords: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    exclude_qid: str | None = None
    limit: int = DEFAULT_POOL_LIMIT

    def matches(self, question: Question) -> bool:
        if question.status == DELETED_STATUS:
            return False
        if self.exclude_qid is not None and question.qid == self.exclude_qid:
            return False
        if self.mode == QueryMode.KEYWORD:
            return any(contains_keyword(t, k) for k in self.keywords for t in question.tags)
        if self.mode == QueryMode.EXACT_TAG:
            return bool(set(self.tags) & set(question.tags))
        return True


def build_candidate_query(
    target: Question,
    exclude_current: bool = False,
    limit: int = DEFAULT_POOL_LIMIT,
) -> CandidateQuery:
    """Derive the candidate query for a target question.

    The target is always left out of its own pool; ``exclude_current`` is
    accepted for callers that still pass it.
    """
    exclude_qid = target.qid

    if not target.tags:
        logger.info("Target %s is untagged, using broad candidate pool", target.qid)
        return CandidateQuery(mode=QueryMode.BROAD, exclude_qid=exclude_qid, limit=limit)

    found = set().union(*(tag_keywords(t, CORE_KEYWORDS) for t in target.tags))
    if found:
        keywords = tuple(k for k in CORE_KEYWORDS if k in found)
        logger.info("Keyword pre-filter for %s: %s", target.qid, ", ".join(keywords))
        return CandidateQuery(
            mode=QueryMode.KEYWORD, keywords=keywords, exclude_qid=exclude_qid, limit=limit
        )

    logger.info("Exact tag pre-filter for %s", target.qid)
    return CandidateQuery(
        mode=QueryMode.EXACT_TAG, tags=tuple(target.tags), exclude_qid=exclude_qid, limit=limit
    )


def _pool_order(question: Question) -> tuple[int, float]:
    created = question.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return (-question.views, -created.timestamp())


class QuestionRepository(Protocol):
    """Data-access collaborator supplying targets and candidate pools."""

    async def get(self, qid: str) -> Question | None: ...

    async def fetch_candidates(self, query: CandidateQuery) -> list[Question]: ...


class InMemoryQuestionRepository:
    """Question store held in memory, optionally loaded from a JSON file."""

    def __init__(self, questions: list[Question] | None = None) -> None:
        self._questions: dict[str, Question] = {q.qid: q for q in questions or []}

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryQuestionRepository":
        """Load a JSON array of questions; a missing file yields an empty store."""
        path = Path(path)
        if not path.exists():
            logger.warning("Question bank file not found: %s", path)
            return cls()
        questions = TypeAdapter(list[Question]).validate_json(path.read_bytes())
        logger.info("Loaded %d questions from %s", len(questions), path)
        return cls(questions)

    def __len__(self) -> int:
        return len(self._questions)

    def add(self, question: Question) -> None:
        self._questions[question.qid] = question

    async def get(self, qid: str) -> Question | None:
        return self._questions.get(qid)

    async def fetch_candidates(self, query: CandidateQuery) -> list[Question]:
        pool = [q for q in self._questions.values() if query.matches(q)]
        pool.sort(key=_pool_order)
        return pool[: query.limit]
