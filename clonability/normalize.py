from __future__ import annotations

from typing import Any

from . import config
from .errors import InvalidResponseShape
from .scoring import DIMENSIONS, clamp_score, coerce_score

ELLIPSIS = "..."


def truncate_strings(value: Any, max_length: int) -> Any:
    """Return a copy of ``value`` with every string capped at ``max_length`` chars."""
    if isinstance(value, str):
        if len(value) > max_length:
            return value[:max_length] + ELLIPSIS
        return value
    if isinstance(value, list):
        return [truncate_strings(item, max_length) for item in value]
    if isinstance(value, dict):
        return {key: truncate_strings(item, max_length) for key, item in value.items()}
    return value


def clamp_score_details(details: dict[str, Any]) -> dict[str, Any]:
    cleaned = dict(details)
    for name in DIMENSIONS:
        dimension = cleaned.get(name)
        if not isinstance(dimension, dict) or "score" not in dimension:
            continue
        cleaned[name] = {**dimension, "score": clamp_score(coerce_score(dimension["score"]))}
    return cleaned


def clean_and_validate(
    response: Any, *, max_field_length: int = config.MAX_FIELD_LENGTH
) -> dict[str, Any]:
    """Make a parsed model response safe for downstream consumption.

    Only two repairs are applied: long strings are truncated and known
    dimension scores are coerced to numbers within [1, 10]. The input is
    left untouched.
    """

    if not isinstance(response, dict):
        raise InvalidResponseShape(
            f"Invalid response structure: expected a JSON object, got {type(response).__name__}"
        )

    cleaned = truncate_strings(response, max_field_length)

    details = cleaned.get("scoreDetails")
    if isinstance(details, dict):
        cleaned["scoreDetails"] = clamp_score_details(details)

    return cleaned
