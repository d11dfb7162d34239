"""Tests for verdict mapping and final scoring."""

import pytest

from claim_session import Answer
from factual_scorer import ADVERSE_ACTION, CAUSAL_CONNECTION, PROTECTED_ACTIVITY
from plausibility_ruling import (
    PLAUSIBLE_CLAIM,
    STRONG_CLAIM,
    WEAK_CLAIM,
    compute_all_scores_and_verdict,
    map_verdict,
)


@pytest.mark.parametrize("total,expected", [
    (0, WEAK_CLAIM),
    (2, WEAK_CLAIM),
    (3, PLAUSIBLE_CLAIM),
    (5, PLAUSIBLE_CLAIM),
    (6, STRONG_CLAIM),
    (11, STRONG_CLAIM),
])
def test_map_verdict_thresholds(total, expected):
    assert map_verdict(total) is expected


def test_severity_classes():
    assert WEAK_CLAIM.severity_class == "weak-claim"
    assert PLAUSIBLE_CLAIM.severity_class == "plausible-claim"
    assert STRONG_CLAIM.severity_class == "strong-claim"


def test_compute_fills_scores_and_keeps_order():
    answers = [
        Answer(PROTECTED_ACTIVITY, "I filed an EEOC complaint on 3/4/2022"),
        Answer(ADVERSE_ACTION, "I was fired"),
        Answer(CAUSAL_CONNECTION, "This was clearly retaliated against me"),
    ]
    ruling = compute_all_scores_and_verdict(answers)

    assert [a.score for a in answers] == [2, 1, 0]
    assert ruling.raw_score == 3
    assert ruling.verdict is PLAUSIBLE_CLAIM
    assert ruling.facts == [
        (PROTECTED_ACTIVITY, "I filed an EEOC complaint on 3/4/2022"),
        (ADVERSE_ACTION, "I was fired"),
        (CAUSAL_CONNECTION, "This was clearly retaliated against me"),
    ]


def test_compute_weak_claim():
    answers = [
        Answer(PROTECTED_ACTIVITY, "I complained"),
        Answer(ADVERSE_ACTION, "It was unfair"),
        Answer(CAUSAL_CONNECTION, "It was illegal"),
    ]
    assert compute_all_scores_and_verdict(answers).verdict is WEAK_CLAIM


def test_compute_strong_claim():
    answers = [
        Answer(PROTECTED_ACTIVITY, "On 3/4/2022 I filed an EEOC charge naming Jane Doe"),
        Answer(ADVERSE_ACTION, "John Smith fired me"),
        Answer(CAUSAL_CONNECTION, "Fired 5 days later with no warning"),
    ]
    ruling = compute_all_scores_and_verdict(answers)
    assert ruling.raw_score == 3 + 2 + 3
    assert ruling.verdict is STRONG_CLAIM
