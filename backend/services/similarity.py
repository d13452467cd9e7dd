"""Per-dimension similarity scorers for question relevance.

Every scorer returns a float in [0.0, 1.0]:
- tags: exact overlap plus a discounted bonus for keyword-related tags
- text: word-set Jaccard over normalized stems
- structure / entities: Jaccard over extracted feature sets
- operators: edit distance over the ordered operator sequence
- numbers: type-class Jaccard blended with literal count closeness
- category / difficulty / type: metadata agreement
"""

from collections.abc import Collection, Sequence

from models.features import NumberProfile
from models.question import QuestionType
from services.formula_extractor import edit_distance
from services.tag_gate import CORE_KEYWORDS, shares_keyword
from services.text_normalizer import tokenize

SEMANTIC_TAG_WEIGHT = 0.7
NUMBER_TYPE_WEIGHT = 0.7
NUMBER_COUNT_WEIGHT = 0.3
MAX_DIFFICULTY_GAP = 5


def jaccard(a: Collection[str], b: Collection[str], empty: float = 1.0) -> float:
    """|A ∩ B| / |A ∪ B|; ``empty`` is returned when both sets are empty."""
    set_a, set_b = set(a), set(b)
    if not set_a and not set_b:
        return empty
    return len(set_a & set_b) / len(set_a | set_b)


def tag_similarity(tags_a: Collection[str], tags_b: Collection[str]) -> float:
    """Exact tag overlap plus 0.7 credit per non-identical keyword-sharing pair."""
    set_a, set_b = set(tags_a), set(tags_b)
    if not set_a or not set_b:
        return 0.0
    total = max(len(set_a), len(set_b))
    exact = len(set_a & set_b)
    semantic = sum(
        1 for ta in set_a for tb in set_b
        if ta != tb and shares_keyword(ta, tb, CORE_KEYWORDS)
    )
    return min(1.0, exact / total + SEMANTIC_TAG_WEIGHT * semantic / total)


def text_similarity(normalized_a: str, normalized_b: str) -> float:
    if normalized_a == normalized_b:
        return 1.0
    words_a, words_b = set(tokenize(normalized_a)), set(tokenize(normalized_b))
    if not words_a or not words_b:
        return 0.0
    return jaccard(words_a, words_b)


def structure_similarity(structure_a: Collection[str], structure_b: Collection[str]) -> float:
    # Two stems with no detected structure are trivially alike.
    return jaccard(structure_a, structure_b, empty=1.0)


def entity_similarity(entities_a: Collection[str], entities_b: Collection[str]) -> float:
    if not entities_a or not entities_b:
        return 0.0
    return jaccard(entities_a, entities_b)


def operator_similarity(ops_a: Sequence[str], ops_b: Sequence[str]) -> float:
    if not ops_a and not ops_b:
        return 1.0
    # Distance over the joined names, normalized by sequence length.
    distance = edit_distance("".join(ops_a), "".join(ops_b))
    return max(0.0, 1.0 - distance / max(len(ops_a), len(ops_b)))


def number_similarity(profile_a: NumberProfile, profile_b: NumberProfile) -> float:
    type_sim = jaccard(profile_a.types, profile_b.types, empty=1.0)
    gap = abs(profile_a.count - profile_b.count)
    count_sim = 1.0 - gap / (1 + max(profile_a.count, profile_b.count))
    return NUMBER_TYPE_WEIGHT * type_sim + NUMBER_COUNT_WEIGHT * count_sim


def category_score(category_a: str | None, category_b: str | None) -> float:
    return 1.0 if category_a and category_a == category_b else 0.0


def difficulty_score(difficulty_a: int, difficulty_b: int) -> float:
    return max(0.0, 1.0 - abs(difficulty_a - difficulty_b) / MAX_DIFFICULTY_GAP)


def type_score(type_a: QuestionType, type_b: QuestionType) -> float:
    return 1.0 if type_a == type_b else 0.0
