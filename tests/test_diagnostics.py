import pytest

from deslab.evaluation.diagnostics import (
    MISTAKE_PATTERNS,
    diagnose,
    diagnose_many,
    variant_output,
)


PT = "0123456789abcdef"
KEY = "133457799bbcdff1"
EXPECTED = "85e813540f0ab405"


def _first_match(output: str) -> str:
    for p in MISTAKE_PATTERNS:
        if variant_output(PT, KEY, p.variant) == output:
            return p.code
    raise AssertionError("no pattern produced this output")


def test_catalog_order_and_credit():
    assert [p.code for p in MISTAKE_PATTERNS] == [
        "skip-ip-fp",
        "skip-ip",
        "no-final-swap",
        "swap-after-round-1",
        "reversed-subkeys",
        "two-rounds-only",
        "four-rounds-only",
        "all-one-bit-shifts",
    ]
    assert all(0.0 <= p.credit <= 1.0 for p in MISTAKE_PATTERNS)


def test_correct_answer():
    result = diagnose(PT, KEY, EXPECTED)
    assert result.is_correct
    assert result.matched_pattern == "correct"
    assert result.score == 1.0
    assert result.tags == ("correct",)
    assert result.expected_output == EXPECTED


def test_correct_answer_is_normalised():
    result = diagnose(PT, KEY, "85E8 1354 0F0A B405")
    assert result.is_correct


@pytest.mark.parametrize("pattern", MISTAKE_PATTERNS, ids=lambda p: p.code)
def test_each_pattern_is_recognised(pattern):
    wrong = variant_output(PT, KEY, pattern.variant)
    assert wrong != EXPECTED
    result = diagnose(PT, KEY, wrong)
    winner = next(p for p in MISTAKE_PATTERNS if p.code == _first_match(wrong))
    assert result.matched_pattern == winner.code
    assert result.score == winner.credit
    assert result.tags == ("incorrect", winner.code)
    assert result.variant_matched == winner.label
    assert result.student_output == wrong
    assert not result.is_correct


def test_skip_ip_fp_scores_point_six():
    wrong = variant_output(PT, KEY, MISTAKE_PATTERNS[0].variant)
    result = diagnose(PT, KEY, wrong)
    assert result.matched_pattern == "skip-ip-fp"
    assert result.score == 0.6


def test_unclassified_answer():
    result = diagnose(PT, KEY, "ffffffffffffffff")
    assert result.matched_pattern is None
    assert result.score == 0.0
    assert result.tags == ("incorrect", "unclassified")
    assert "unclassified" in result.summary()


def test_short_submission_is_padded():
    result = diagnose(PT, KEY, "85e8")
    assert result.student_output == "85e8000000000000"
    assert not result.is_correct


def test_custom_catalog():
    result = diagnose(PT, KEY, variant_output(PT, KEY, MISTAKE_PATTERNS[3].variant), patterns=[MISTAKE_PATTERNS[3]])
    assert result.matched_pattern == "swap-after-round-1"


def test_to_dict_lists_tags():
    d = diagnose(PT, KEY, EXPECTED).to_dict()
    assert d["tags"] == ["correct"]
    assert d["score"] == 1.0


def test_diagnose_many_preserves_order():
    results = diagnose_many([(PT, KEY, EXPECTED), (PT, KEY, "ffffffffffffffff")])
    assert [r.is_correct for r in results] == [True, False]
