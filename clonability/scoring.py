from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

DIMENSIONS = (
    "technicalComplexity",
    "marketOpportunity",
    "competitiveLandscape",
    "resourceRequirements",
    "timeToMarket",
)

DIMENSION_WEIGHTS = {
    "technicalComplexity": 0.20,
    "marketOpportunity": 0.25,
    "competitiveLandscape": 0.15,
    "resourceRequirements": 0.20,
    "timeToMarket": 0.20,
}

MIN_SCORE = 1
MAX_SCORE = 10
DEFAULT_SCORE = 5
DEFAULT_REASONING = "Unable to assess - using default score"

DEFAULT_INSIGHTS = {
    "keyInsight": "Analysis pending",
    "riskFactor": "To be determined",
    "opportunity": "Further investigation needed",
}

# leading number, as in "8/10" or "7 out of 10"
_LEADING_NUMBER = re.compile(r"\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def coerce_score(value: Any) -> int | float:
    """Turn a model-provided score into a number, falling back to the default."""
    if isinstance(value, bool) or value is None:
        return DEFAULT_SCORE
    if isinstance(value, (int, float)):
        return DEFAULT_SCORE if math.isnan(value) else value
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return DEFAULT_SCORE
        return float(match.group(0))
    return DEFAULT_SCORE


def clamp_score(score: int | float) -> int | float:
    if score < MIN_SCORE:
        return MIN_SCORE
    if score > MAX_SCORE:
        return MAX_SCORE
    return score


def backfill_score_details(details: Any) -> dict[str, dict[str, Any]]:
    """Ensure all five dimensions exist with numeric scores."""
    details = details if isinstance(details, dict) else {}
    out: dict[str, dict[str, Any]] = {}
    for name in DIMENSIONS:
        dimension = details.get(name)
        if not isinstance(dimension, dict):
            out[name] = {"score": DEFAULT_SCORE, "reasoning": DEFAULT_REASONING}
            continue
        score = clamp_score(coerce_score(dimension.get("score")))
        out[name] = {**dimension, "score": score}
    return out


def backfill_ai_insights(insights: Any) -> dict[str, str]:
    if not isinstance(insights, dict) or not insights:
        return dict(DEFAULT_INSIGHTS)
    return insights


def overall_score(details: dict[str, dict[str, Any]]) -> float:
    """Weighted average of the dimension scores, rounded half away from zero to 0.1.

    Decimal arithmetic keeps ties such as 6.95 exact.
    """
    total = Decimal("0")
    for name in DIMENSIONS:
        score = details[name]["score"]
        total += Decimal(str(score)) * Decimal(str(DIMENSION_WEIGHTS[name]))
    return float(total.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
