import pytest

from services.tag_gate import passes_tag_gate, shares_keyword, tag_keywords


@pytest.mark.parametrize(
    "tags_a, tags_b, expected",
    [
        (["导数"], ["导数应用"], True),
        (["几何"], ["概率"], False),
        (["数列"], ["数列"], True),
        (["数列"], ["数列求和"], False),
        (["Derivative Rules"], ["derivatives"], True),
        ([], ["导数"], False),
        (["导数"], [], False),
    ],
)
def test_gate_is_symmetric(tags_a, tags_b, expected):
    assert passes_tag_gate(tags_a, tags_b) is expected
    assert passes_tag_gate(tags_b, tags_a) is expected


def test_gate_accepts_extended_keywords():
    assert passes_tag_gate(["证明题"], ["不等式证明"])
    assert not shares_keyword("证明题", "不等式证明")


def test_tag_keywords():
    assert tag_keywords("导数应用") == {"导数"}
    assert tag_keywords("三角函数") == {"三角", "函数"}
    assert tag_keywords("数列") == frozenset()


@pytest.mark.parametrize(
    "tags_a, tags_b",
    [
        (["online homework"], ["linear algebra"]),
        (["project deadline"], ["straight line"]),
        (["time complexity"], ["complex numbers"]),
        (["exponential growth"], ["exponent rules"]),
    ],
)
def test_latin_keywords_need_whole_words(tags_a, tags_b):
    assert not passes_tag_gate(tags_a, tags_b)
    assert not passes_tag_gate(tags_b, tags_a)


def test_latin_keywords_allow_plurals():
    assert tag_keywords("vectors and matrices") == {"vector"}
    assert passes_tag_gate(["straight lines"], ["line segment"])
