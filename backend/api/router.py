import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_question_repository
from config import settings
from models.responses import RelatedQuestionsResponse
from services.candidate_retriever import InMemoryQuestionRepository
from services.related_questions import QuestionNotFoundError, find_related

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health(repository: InMemoryQuestionRepository = Depends(get_question_repository)):
    return {
        "status": "ok",
        "questions_loaded": len(repository),
    }


@router.get("/questions/{qid}/related", response_model=RelatedQuestionsResponse)
@limiter.limit(settings.related_rate_limit)
async def related_questions(
    request: Request,
    qid: str,
    limit: int = Query(settings.default_related_limit, ge=1, le=settings.max_related_limit),
    exclude_current: bool = Query(False, alias="excludeCurrent"),
    repository: InMemoryQuestionRepository = Depends(get_question_repository),
):
    try:
        return await find_related(
            repository, qid, limit=limit, exclude_current=exclude_current
        )
    except QuestionNotFoundError:
        raise HTTPException(status_code=404, detail="Question not found")
    except Exception as e:
        logger.exception("Failed to fetch related questions for %s", qid)
        detail = "Failed to fetch related questions"
        if settings.debug:
            detail = f"{detail}: {e}"
        raise HTTPException(status_code=500, detail=detail)
