"""Stem normalization shared by the feature extractor and text scorer."""

import re

_WHITESPACE_RE = re.compile(r"\s+")

# Anything outside word characters, whitespace, math operators, parentheses,
# `$` delimiters and full-width CJK sentence punctuation is noise.
_NOISE_RE = re.compile(r"[^\w\s$+\-*/^=()。，！？；]")


def normalize_stem(text: str | None) -> str:
    """Collapse whitespace and replace noise characters with spaces."""
    if not text:
        return ""
    collapsed = _WHITESPACE_RE.sub(" ", text)
    cleaned = _NOISE_RE.sub(" ", collapsed)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def tokenize(normalized: str) -> list[str]:
    """Split a normalized stem into whitespace-delimited words."""
    return [w for w in normalized.split() if w]
