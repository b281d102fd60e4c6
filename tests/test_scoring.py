import pytest

from clonability.scoring import (
    DEFAULT_INSIGHTS,
    DEFAULT_REASONING,
    DIMENSION_WEIGHTS,
    DIMENSIONS,
    backfill_ai_insights,
    backfill_score_details,
    coerce_score,
    overall_score,
)


def _details(*scores):
    return {name: {"score": s, "reasoning": ""} for name, s in zip(DIMENSIONS, scores)}


def test_weights_sum_to_one():
    assert sum(DIMENSION_WEIGHTS.values()) == pytest.approx(1.0)
    assert set(DIMENSION_WEIGHTS) == set(DIMENSIONS)


def test_overall_score_rounds_half_up():
    # 1.6 + 1.5 + 1.05 + 1.0 + 1.8 = 6.95
    assert overall_score(_details(8, 6, 7, 5, 9)) == 7.0


def test_overall_score_is_order_independent():
    details = _details(3, 9, 4, 6, 2)
    reordered = dict(reversed(list(details.items())))
    assert overall_score(details) == overall_score(reordered)


def test_overall_score_bounds():
    assert overall_score(_details(1, 1, 1, 1, 1)) == 1.0
    assert overall_score(_details(10, 10, 10, 10, 10)) == 10.0
    assert overall_score(_details(7.5, 7.5, 7.5, 7.5, 7.5)) == 7.5


def test_backfill_missing_dimension():
    details = _details(8, 6, 7, 5, 9)
    del details["marketOpportunity"]

    filled = backfill_score_details(details)

    assert filled["marketOpportunity"] == {"score": 5, "reasoning": DEFAULT_REASONING}
    assert set(filled) == set(DIMENSIONS)
    assert filled["timeToMarket"]["score"] == 9


def test_backfill_without_score_details():
    filled = backfill_score_details(None)
    assert all(filled[name]["score"] == 5 for name in DIMENSIONS)


def test_backfill_coerces_non_numeric_scores():
    details = _details("8", "high", None, 5, "9.5")
    filled = backfill_score_details(details)
    assert [filled[n]["score"] for n in DIMENSIONS] == [8.0, 5, 5, 5, 9.5]


def test_coerce_score():
    assert coerce_score("  6 ") == 6.0
    assert coerce_score("nan") == 5
    assert coerce_score([1]) == 5
    assert coerce_score(3) == 3
    assert coerce_score("8/10") == 8.0
    assert coerce_score("7 out of 10") == 7.0
    assert coerce_score(" 6.5 points") == 6.5
    assert coerce_score("high") == 5


def test_backfill_ai_insights():
    assert backfill_ai_insights(None) == DEFAULT_INSIGHTS
    assert backfill_ai_insights({}) == DEFAULT_INSIGHTS
    given = {"keyInsight": "a", "riskFactor": "b", "opportunity": "c"}
    assert backfill_ai_insights(given) == given
