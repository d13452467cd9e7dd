"""Weighted fusion of dimension scores into a single relevance score.

relevance(target, candidate):
    tag gate ── fail ──> 0.0
        │
        └─ weighted average over the dimensions with evidence:
             tag 0.40 · content 0.35 · category 0.15 · difficulty 0.08 · type 0.02
           where content is itself a weighted average of
             text 0.25 · structure 0.20 · entities 0.15 · operators 0.15
             · numbers 0.10 · formulas 0.15

A dimension without evidence (e.g. no category match, no formulas on either
side) is left out and the average is taken over the accumulated weight.
"""

import logging

import numpy as np

from models.question import Question
from models.responses import ScoredCandidate
from services.feature_extractor import extract_features
from services.formula_extractor import extract_formulas, formula_similarity
from services.similarity import (
    category_score,
    difficulty_score,
    entity_similarity,
    number_similarity,
    operator_similarity,
    structure_similarity,
    tag_similarity,
    text_similarity,
    type_score,
)
from services.tag_gate import passes_tag_gate
from services.text_normalizer import normalize_stem

logger = logging.getLogger(__name__)

DIMENSION_WEIGHTS: dict[str, float] = {
    "tag": 0.40,
    "content": 0.35,
    "category": 0.15,
    "difficulty": 0.08,
    "type": 0.02,
}

CONTENT_WEIGHTS: dict[str, float] = {
    "text": 0.25,
    "structure": 0.20,
    "entities": 0.15,
    "operations": 0.15,
    "numbers": 0.10,
    "formulas": 0.15,
}


def _weighted_average(scores: dict[str, float], weights: dict[str, float]) -> float:
    if not scores:
        return 0.0
    names = list(scores)
    value = np.average(
        [scores[n] for n in names],
        weights=[weights[n] for n in names],
    )
    return float(np.clip(value, 0.0, 1.0))


def content_scores(stem_a: str, stem_b: str) -> dict[str, float]:
    """Score the content dimensions that have evidence on at least one side."""
    clean_a, clean_b = normalize_stem(stem_a), normalize_stem(stem_b)
    features_a = extract_features(clean_a, normalized=True)
    features_b = extract_features(clean_b, normalized=True)

    scores = {
        "text": text_similarity(clean_a, clean_b),
        "structure": structure_similarity(features_a.structure_tags, features_b.structure_tags),
        "operations": operator_similarity(features_a.operators, features_b.operators),
        "numbers": number_similarity(features_a.number_profile, features_b.number_profile),
    }
    if features_a.math_entities or features_b.math_entities:
        scores["entities"] = entity_similarity(features_a.math_entities, features_b.math_entities)
    if extract_formulas(stem_a) or extract_formulas(stem_b):
        scores["formulas"] = formula_similarity(stem_a, stem_b)
    return scores


def content_similarity(stem_a: str, stem_b: str) -> float:
    return _weighted_average(content_scores(stem_a, stem_b), CONTENT_WEIGHTS)


def dimension_scores(target: Question, candidate: Question) -> dict[str, float]:
    """Score every outer dimension that applies to this pair (gate not checked)."""
    scores: dict[str, float] = {}
    if target.tags and candidate.tags:
        scores["tag"] = tag_similarity(target.tags, candidate.tags)
    if target.stem.strip() and candidate.stem.strip():
        scores["content"] = content_similarity(target.stem, candidate.stem)
    if category_score(target.category, candidate.category):
        scores["category"] = 1.0
    scores["difficulty"] = difficulty_score(target.difficulty, candidate.difficulty)
    if type_score(target.type, candidate.type):
        scores["type"] = 1.0
    return scores


def relevance_score(target: Question, candidate: Question) -> float:
    """Relevance of ``candidate`` to ``target`` in [0, 1]; 0 means gated out."""
    if not passes_tag_gate(target.tags, candidate.tags):
        return 0.0
    return _weighted_average(dimension_scores(target, candidate), DIMENSION_WEIGHTS)


def score_candidates(target: Question, candidates: list[Question]) -> list[ScoredCandidate]:
    """Score a candidate pool against the target.

    A candidate whose scoring raises is logged and scored 0 so the rest of the
    pool is unaffected.
    """
    scored: list[ScoredCandidate] = []
    for candidate in candidates:
        try:
            relevance = relevance_score(target, candidate)
        except Exception as e:
            logger.warning("Scoring failed for candidate %s: %s", candidate.qid, e)
            relevance = 0.0
        scored.append(ScoredCandidate(question=candidate, relevance=relevance))
    return scored
