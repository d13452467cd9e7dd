"""Two-tier selection of the final related-question list."""

from models.responses import ScoredCandidate

HIGH_QUALITY_THRESHOLD = 0.6
MIN_RELEVANCE_THRESHOLD = 0.3


def select_tiered(scored: list[ScoredCandidate], limit: int) -> list[ScoredCandidate]:
    """Pick up to ``limit`` candidates, high-quality first.

    Candidates at or above HIGH_QUALITY_THRESHOLD are taken first; any
    remaining slots are filled from [MIN_RELEVANCE_THRESHOLD,
    HIGH_QUALITY_THRESHOLD). Lower scores are never returned, so the result
    may be shorter than ``limit``.
    """
    if limit <= 0:
        return []
    ranked = sorted(
        (c for c in scored if c.relevance > 0),
        key=lambda c: c.relevance,
        reverse=True,
    )
    high = [c for c in ranked if c.relevance >= HIGH_QUALITY_THRESHOLD][:limit]
    if len(high) >= limit:
        return high
    fill = [
        c for c in ranked
        if MIN_RELEVANCE_THRESHOLD <= c.relevance < HIGH_QUALITY_THRESHOLD
    ]
    return high + fill[: limit - len(high)]
