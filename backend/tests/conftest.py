"""Shared test configuration, pytest markers and question fixtures."""

from datetime import datetime, timezone

import pytest

from models.question import Question


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scenario: end-to-end ranking scenarios over a small question bank"
    )


@pytest.fixture
def make_question():
    """Factory for questions with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Question:
        counter["n"] += 1
        fields = {
            "qid": f"Q-{counter['n']:04d}",
            "tags": ["导数"],
            "category": "高中数学",
            "type": "solution",
            "difficulty": 3,
            "stem": "已知函数 $f(x)=x^2+1$，求 $f(x)$ 的导数。",
            "views": 10,
            "created_at": datetime(2024, 1, counter["n"] % 28 + 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Question(**fields)

    return _make
