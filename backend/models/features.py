"""Per-question feature artifacts derived from the stem (never persisted)."""

from enum import Enum

from pydantic import BaseModel


class NumberType(str, Enum):
    FLOAT = "float"
    SMALL_INT = "small_int"
    LARGE_INT = "large_int"


class NumberProfile(BaseModel):
    model_config = {"frozen": True}

    count: int = 0
    types: frozenset[NumberType] = frozenset()


class FeatureSet(BaseModel):
    """Output of the feature extractor.

    ``operators`` keeps source order since it is compared by edit distance;
    the other artifacts are sets.
    """
    model_config = {"frozen": True}

    structure_tags: frozenset[str] = frozenset()
    math_entities: frozenset[str] = frozenset()
    operators: tuple[str, ...] = ()
    number_profile: NumberProfile = NumberProfile()
