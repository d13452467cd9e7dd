"""Multi-dimensional feature extraction from question stems.

Four artifacts are derived from a normalized stem:
- structure tags: names of the question patterns detected in the text
- math entities: candidate variable and function names
- operator sequence: arithmetic operators in source order
- number profile: count and coarse type classes of numeric literals

All extractors are total: any input string yields a (possibly empty)
FeatureSet.
"""

import logging
import re

from models.features import FeatureSet, NumberProfile, NumberType
from services.text_normalizer import normalize_stem

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Structure detectors: name -> pattern. A stem carries every name whose
# pattern matches anywhere in it. Chinese vocabulary first, English second.
# ---------------------------------------------------------------------------
STRUCTURE_PATTERNS: dict[str, re.Pattern] = {
    "equation": re.compile(r"="),
    "solve_for": re.compile(
        r"求|解|计算|证明|判断|确定|\b(?:solve|prove|determine|calculate|compute|find)\b",
        re.IGNORECASE,
    ),
    "derivative": re.compile(
        r"导[数函]|微分|\b(?:derivative|differentiate)\b", re.IGNORECASE
    ),
    "integral": re.compile(r"积分|\b(?:integral|integrate)\b", re.IGNORECASE),
    "limit": re.compile(r"极限|趋近|\b(?:limit|approaches)\b", re.IGNORECASE),
    "word_problem": re.compile(
        r"多少|比|率|面积|体积|周长|长度|角度"
        r"|\b(?:how many|how much|area|volume|perimeter|length|angle|ratio|rate)\b",
        re.IGNORECASE,
    ),
    "function": re.compile(r"函数|[fgh]\(|(?i:\bfunction\b)"),
    "inequality": re.compile(
        r"不等式|大于|小于|\b(?:inequality|greater than|less than)\b", re.IGNORECASE
    ),
}

OPERATOR_NAMES: dict[str, str] = {
    "+": "add",
    "-": "sub",
    "*": "mul",
    "/": "div",
    "^": "pow",
    "=": "eq",
}

# ASCII word boundaries so variables glued to CJK text ("设x为实数") still count.
_VARIABLE_RE = re.compile(r"\b[a-zA-Z]{1,2}\b", re.ASCII)
_FUNCTION_NAME_RE = re.compile(r"\b([a-zA-Z])\(", re.ASCII)
_OPERATOR_RE = re.compile(r"[+\-*/^=]")
_NUMBER_RE = re.compile(r"\d+\.?\d*", re.ASCII)

LARGE_INT_THRESHOLD = 100


def detect_structure(text: str) -> frozenset[str]:
    return frozenset(name for name, pattern in STRUCTURE_PATTERNS.items() if pattern.search(text))


def extract_math_entities(text: str) -> frozenset[str]:
    """Collect 1-2 letter tokens and single-letter function names, lower-cased."""
    variables = {v.lower() for v in _VARIABLE_RE.findall(text)}
    functions = {f.lower() for f in _FUNCTION_NAME_RE.findall(text)}
    return frozenset(variables | functions)


def extract_operators(text: str) -> tuple[str, ...]:
    return tuple(OPERATOR_NAMES[op] for op in _OPERATOR_RE.findall(text))


def classify_number(literal: str) -> NumberType:
    if "." in literal:
        return NumberType.FLOAT
    digits = literal.lstrip("0") or "0"
    # int() rejects very long digit strings
    if len(digits) > 6 or int(digits) > LARGE_INT_THRESHOLD:
        return NumberType.LARGE_INT
    return NumberType.SMALL_INT


def extract_number_profile(text: str) -> NumberProfile:
    literals = _NUMBER_RE.findall(text)
    return NumberProfile(
        count=len(literals),
        types=frozenset(classify_number(lit) for lit in literals),
    )


def extract_features(stem: str, normalized: bool = False) -> FeatureSet:
    """Derive the FeatureSet of a stem.

    Pass ``normalized=True`` when the caller already ran normalize_stem.
    """
    text = stem if normalized else normalize_stem(stem)
    if not text:
        return FeatureSet()
    return FeatureSet(
        structure_tags=detect_structure(text),
        math_entities=extract_math_entities(text),
        operators=extract_operators(text),
        number_profile=extract_number_profile(text),
    )
