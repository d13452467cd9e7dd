import pytest

from models.responses import ScoredCandidate
from services.selector import select_tiered


@pytest.fixture
def scored(make_question):
    def _scored(*scores: float) -> list[ScoredCandidate]:
        return [ScoredCandidate(question=make_question(), relevance=s) for s in scores]

    return _scored


def _relevances(result):
    return [c.relevance for c in result]


def test_high_quality_then_mid_fill(scored):
    result = select_tiered(scored(0.5, 0.9, 0.2, 0.7), limit=3)
    assert _relevances(result) == [0.9, 0.7, 0.5]


def test_low_scores_never_fill(scored):
    assert _relevances(select_tiered(scored(0.9, 0.1), limit=3)) == [0.9]


def test_limit_applies_to_high_tier(scored):
    assert _relevances(select_tiered(scored(0.8, 0.95, 0.6), limit=2)) == [0.95, 0.8]


def test_only_mid_tier(scored):
    assert _relevances(select_tiered(scored(0.35, 0.4, 0.3), limit=2)) == [0.4, 0.35]


def test_thresholds_are_inclusive(scored):
    assert _relevances(select_tiered(scored(0.6, 0.3, 0.29), limit=5)) == [0.6, 0.3]


def test_gated_out_candidates_dropped(scored):
    assert select_tiered(scored(0.0, 0.0), limit=3) == []


def test_empty_pool():
    assert select_tiered([], limit=3) == []
