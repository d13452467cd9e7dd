"""Shared dependencies for API routes."""

from config import settings
from services.candidate_retriever import InMemoryQuestionRepository

_repository: InMemoryQuestionRepository | None = None


def get_question_repository() -> InMemoryQuestionRepository:
    global _repository
    if _repository is None:
        _repository = InMemoryQuestionRepository.from_json(settings.question_bank_path)
    return _repository
