"""Core-concept keyword tables and the tag gate.

The gate is a hard pre-filter: a candidate sharing neither an identical tag
nor a core keyword (across any tag pair) with the target is not scored.
"""

import re
from collections.abc import Iterable

# ---------------------------------------------------------------------------
# Core math concepts. CJK keywords are matched by substring containment, so
# "导数应用" carries the keyword "导数"; Latin keywords must be whole words
# (optionally plural) in the lower-cased tag, so "online" does not carry "line".
# Used by the semantic tag bonus and by candidate query construction.
# ---------------------------------------------------------------------------
CORE_KEYWORDS: tuple[str, ...] = (
    "函数", "几何", "代数", "三角", "概率", "统计", "导数", "积分", "极限",
    "方程", "不等式", "图形", "面积", "周长", "体积", "角度", "直线", "圆",
    "多项式", "因式", "根式", "指数", "对数", "复数", "向量", "矩阵",
    "function", "geometry", "algebra", "trigonometry", "probability",
    "statistics", "derivative", "integral", "limit", "equation",
    "inequality", "area", "perimeter", "volume", "angle", "line", "circle",
    "polynomial", "factor", "radical", "exponent", "logarithm", "complex",
    "vector", "matrix",
)

# The gate accepts a few more concepts than the tag scorer rewards.
GATE_KEYWORDS: tuple[str, ...] = CORE_KEYWORDS + (
    "排列", "组合", "分布", "期望", "方差", "证明", "推理",
    "permutation", "combination", "distribution", "expectation", "variance",
    "proof", "reasoning",
)


_LATIN_KEYWORD_PATTERNS: dict[str, re.Pattern] = {
    k: re.compile(rf"\b{re.escape(k)}s?\b", re.ASCII)
    for k in GATE_KEYWORDS
    if k.isascii()
}


def contains_keyword(tag: str, keyword: str) -> bool:
    """Whether a tag carries a keyword (case-insensitive)."""
    lowered, keyword = tag.lower(), keyword.lower()
    if not keyword.isascii():
        return keyword in lowered
    pattern = _LATIN_KEYWORD_PATTERNS.get(keyword)
    if pattern is None:
        pattern = re.compile(rf"\b{re.escape(keyword)}s?\b", re.ASCII)
    return pattern.search(lowered) is not None


def tag_keywords(tag: str, keywords: Iterable[str] = CORE_KEYWORDS) -> frozenset[str]:
    """Keywords carried by a tag."""
    return frozenset(k for k in keywords if contains_keyword(tag, k))


def shares_keyword(tag_a: str, tag_b: str, keywords: Iterable[str] = CORE_KEYWORDS) -> bool:
    keywords = tuple(keywords)
    return bool(tag_keywords(tag_a, keywords) & tag_keywords(tag_b, keywords))


def passes_tag_gate(tags_a: Iterable[str], tags_b: Iterable[str]) -> bool:
    """True when the two tag sets share an identical tag or a gate keyword.

    Either side being untagged fails the gate. The check is symmetric.
    """
    set_a, set_b = set(tags_a or ()), set(tags_b or ())
    if not set_a or not set_b:
        return False
    if set_a & set_b:
        return True
    keywords_a = set().union(*(tag_keywords(t, GATE_KEYWORDS) for t in set_a))
    keywords_b = set().union(*(tag_keywords(t, GATE_KEYWORDS) for t in set_b))
    return bool(keywords_a & keywords_b)
