"""
Bounded rating helpers.

The response schema only constrains field types, so effort/impact values
coming back from the model are clamped here before they reach clients.
"""

from __future__ import annotations

import math
from typing import Any

EFFORT_RANGE = (1, 5)
EFFORT_DEFAULT = 3
IMPACT_RANGE = (1, 10)
IMPACT_DEFAULT = 5


def clamp_rating(value: Any, low: int, high: int, default: int) -> int:
    """
    Restrict `value` to [low, high].

    Numeric strings are read as numbers. Missing, zero and non-numeric
    values fall back to `default`.
    """
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value == 0:
        return default
    if isinstance(value, float):
        if math.isnan(value):
            return default
        if math.isinf(value):
            return high if value > 0 else low
        value = round(value)
    return max(low, min(high, value))


def clamp_effort(value: Any) -> int:
    return clamp_rating(value, *EFFORT_RANGE, EFFORT_DEFAULT)


def clamp_impact(value: Any) -> int:
    return clamp_rating(value, *IMPACT_RANGE, IMPACT_DEFAULT)


def normalize_ratings(item: dict) -> dict:
    """Return a copy of `item` with clamped effort and impact."""
    return {
        **item,
        "effort": clamp_effort(item.get("effort")),
        "impact": clamp_impact(item.get("impact")),
    }
