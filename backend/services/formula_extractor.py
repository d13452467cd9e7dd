"""Inline formula extraction and edit-distance based formula matching.

Formulas are the raw contents of ``$...$`` spans; no LaTeX parsing is
attempted. Two formulas match when their normalized forms are identical
or within a relative Levenshtein distance of FORMULA_MATCH_RATIO.
"""

import re

from rapidfuzz.distance import Levenshtein

_FORMULA_RE = re.compile(r"\$([^$]+)\$")
_WHITESPACE_RE = re.compile(r"\s+")
_WRAPPER_RE = re.compile(r"\\(?:text|mathrm)\{([^}]+)\}")

FORMULA_MATCH_RATIO = 0.25

# Scores when at least one side has no formulas
NO_FORMULAS_SCORE = 0.5
ONE_SIDED_FORMULAS_SCORE = 0.2


def extract_formulas(stem: str | None) -> list[str]:
    """Return the trimmed contents of every ``$...$`` span.

    A whitespace-only span yields an empty formula and still counts. An
    unbalanced trailing ``$`` is ignored.
    """
    if not stem:
        return []
    return [m.strip() for m in _FORMULA_RE.findall(stem)]


def normalize_formula(formula: str) -> str:
    """Remove whitespace, unwrap \\text{}/\\mathrm{} and lower-case."""
    compact = _WHITESPACE_RE.sub("", formula)
    return _WRAPPER_RE.sub(r"\1", compact).lower()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance over code points (unit insert/delete/substitute)."""
    return Levenshtein.distance(a, b)


def formulas_match(formula_a: str, formula_b: str) -> bool:
    clean_a = normalize_formula(formula_a)
    clean_b = normalize_formula(formula_b)
    if clean_a == clean_b:
        return True
    max_len = max(len(clean_a), len(clean_b))
    return edit_distance(clean_a, clean_b) / max_len <= FORMULA_MATCH_RATIO


def formula_similarity(stem_a: str | None, stem_b: str | None) -> float:
    """Share of formula pairs that match, relative to the larger formula list.

    Every matching (a, b) pair counts, so a formula may match several
    counterparts; the result is capped at 1.0.
    """
    formulas_a = extract_formulas(stem_a)
    formulas_b = extract_formulas(stem_b)

    if not formulas_a and not formulas_b:
        return NO_FORMULAS_SCORE
    if not formulas_a or not formulas_b:
        return ONE_SIDED_FORMULAS_SCORE

    matches = sum(1 for fa in formulas_a for fb in formulas_b if formulas_match(fa, fb))
    return min(1.0, matches / max(len(formulas_a), len(formulas_b)))
