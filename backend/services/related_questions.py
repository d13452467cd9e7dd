"""Related-question lookup: retrieval, scoring and tiered selection.

Flow:
    qid
      ├─ repository.get(qid)                    → target Question
      ├─ build_candidate_query(target)          → CandidateQuery
      ├─ repository.fetch_candidates(query)     → candidate pool
      ├─ score_candidates(target, pool)         → ScoredCandidate list
      └─ select_tiered(scored, limit)           → RelatedQuestionsResponse
"""

import logging

from config import settings
from models.responses import RelatedQuestion, RelatedQuestionsResponse
from services.candidate_retriever import QuestionRepository, build_candidate_query
from services.relevance import score_candidates
from services.selector import select_tiered

logger = logging.getLogger(__name__)


class QuestionNotFoundError(LookupError):
    """Raised when the target question does not exist."""

    def __init__(self, qid: str) -> None:
        super().__init__(f"Question not found: {qid}")
        self.qid = qid


async def find_related(
    repository: QuestionRepository,
    qid: str,
    limit: int | None = None,
    exclude_current: bool = False,
) -> RelatedQuestionsResponse:
    """Return up to ``limit`` questions related to ``qid``, best first."""
    if limit is None:
        limit = settings.default_related_limit

    target = await repository.get(qid)
    if target is None:
        raise QuestionNotFoundError(qid)

    query = build_candidate_query(
        target,
        exclude_current=exclude_current,
        limit=settings.candidate_pool_limit,
    )
    pool = await repository.fetch_candidates(query)

    scored = score_candidates(target, pool)
    selected = select_tiered(scored, limit)
    logger.info(
        "Related questions for %s: pool=%d gated_in=%d selected=%d",
        qid,
        len(pool),
        sum(1 for s in scored if s.relevance > 0),
        len(selected),
    )

    questions = [RelatedQuestion.from_scored(s) for s in selected]
    average = sum(q.relevance for q in questions) / len(questions) if questions else 0.0
    return RelatedQuestionsResponse(
        questions=questions,
        total=len(questions),
        average_relevance=round(average, 4),
    )
