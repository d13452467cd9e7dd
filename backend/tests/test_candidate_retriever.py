import json
from datetime import datetime, timezone

import pytest

from services.candidate_retriever import (
    CandidateQuery,
    InMemoryQuestionRepository,
    QueryMode,
    build_candidate_query,
)


class TestBuildCandidateQuery:
    def test_keyword_mode(self, make_question):
        target = make_question(tags=["函数单调性", "导数"])
        query = build_candidate_query(target)
        assert query.mode == QueryMode.KEYWORD
        assert query.keywords == ("函数", "导数")
        assert query.exclude_qid == target.qid

    def test_exact_tag_mode(self, make_question):
        target = make_question(tags=["数列", "等差数列"])
        query = build_candidate_query(target)
        assert query.mode == QueryMode.EXACT_TAG
        assert query.tags == ("数列", "等差数列")

    def test_broad_mode(self, make_question):
        query = build_candidate_query(make_question(tags=[]))
        assert query.mode == QueryMode.BROAD

    def test_target_always_excluded(self, make_question):
        target = make_question()
        assert build_candidate_query(target).exclude_qid == target.qid
        query = build_candidate_query(target, exclude_current=True, limit=10)
        assert query.exclude_qid == target.qid
        assert query.limit == 10


class TestCandidateQueryMatches:
    def test_keyword_is_case_insensitive(self, make_question):
        query = CandidateQuery(mode=QueryMode.KEYWORD, keywords=("derivative",))
        assert query.matches(make_question(tags=["DERIVATIVE rules"]))
        assert not query.matches(make_question(tags=["geometry"]))

    def test_exact_tag(self, make_question):
        query = CandidateQuery(mode=QueryMode.EXACT_TAG, tags=("数列",))
        assert query.matches(make_question(tags=["数列", "求和"]))
        assert not query.matches(make_question(tags=["数列求和"]))

    def test_latin_keywords_match_whole_words(self, make_question):
        query = CandidateQuery(mode=QueryMode.KEYWORD, keywords=("line",))
        assert query.matches(make_question(tags=["straight lines"]))
        assert not query.matches(make_question(tags=["online homework"]))

    def test_deleted_never_matches(self, make_question):
        assert not CandidateQuery().matches(make_question(status="deleted"))


class TestInMemoryRepository:
    @pytest.mark.asyncio
    async def test_pool_ordering_and_cap(self, make_question):
        popular = make_question(qid="popular", views=50, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        newer = make_question(qid="newer", views=10, created_at=datetime(2024, 1, 9, tzinfo=timezone.utc))
        older = make_question(qid="older", views=10, created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
        repo = InMemoryQuestionRepository([older, popular, newer])

        pool = await repo.fetch_candidates(CandidateQuery(limit=2))
        assert [q.qid for q in pool] == ["popular", "newer"]

    @pytest.mark.asyncio
    async def test_exclusion(self, make_question):
        target = make_question()
        other = make_question()
        repo = InMemoryQuestionRepository([target, other])
        query = build_candidate_query(target, exclude_current=True)
        pool = await repo.fetch_candidates(query)
        assert [q.qid for q in pool] == [other.qid]

    @pytest.mark.asyncio
    async def test_get(self, make_question):
        q = make_question()
        repo = InMemoryQuestionRepository([q])
        assert await repo.get(q.qid) == q
        assert await repo.get("missing") is None

    def test_from_json(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(
            json.dumps([{"qid": "A", "tags": ["导数"], "stem": "求导", "type": "fill"}]),
            encoding="utf-8",
        )
        repo = InMemoryQuestionRepository.from_json(path)
        assert len(repo) == 1

    def test_from_json_missing_file(self, tmp_path):
        assert len(InMemoryQuestionRepository.from_json(tmp_path / "nope.json")) == 0
