"""
Comparison Scoring
==================

Pure scoring functions over the ratio ``r = query_base / measurable_base``.

Closeness combines three factors:

1. **Proximity** - how close r is to 1 on a log scale (2x and 0.5x score alike)
2. **Niceness** - whether r is easy to say ("twice", "a hundred times")
3. **Direction** - a small capped preference for r > 1 ("X is twice Y"
   reads better than "X is half of Y")

The composite score blends closeness with the measurable's relatability and
accuracy using normalized weights.

Reference values (proximity, k=2, p=1.5)::

    ratio 1.0  -> 1.0
    ratio 2.0  -> ~0.75
    ratio 5.0  -> ~0.46
    ratio 10.0 -> ~0.33
    ratio 100  -> ~0.15
"""

import math
from typing import Any, Dict, Optional, Union

from shared.models import ScoringWeights

PROXIMITY_K = 2
PROXIMITY_P = 1.5

NICENESS_FLOOR = 0.6
NICENESS_SLOPE = 1.5

DIRECTION_BOOST_RATE = 0.02
DIRECTION_BOOST_CAP = 1.05

# Ratios that read naturally ("twice", "twenty-five times"), applied to r or 1/r
NICE_NUMBERS = (
    1, 2, 3, 4, 5, 10, 20, 25, 50, 100, 200, 250, 500,
    1000, 2000, 2500, 5000, 10000, 100000,
)

DEFAULT_WEIGHTS = ScoringWeights(closeness=0.4, relatability=0.35, accuracy=0.25)


def calculate_ratio(query_base: float, measurable_base: float) -> float:
    """
    Ratio of query to measurable, both in base units.

    A zero reference gives 1.0 against a zero query and signed infinity
    otherwise, so scoring degrades to 0 instead of raising.
    """
    if measurable_base == 0:
        if query_base == 0:
            return 1.0
        return math.copysign(math.inf, query_base)
    return query_base / measurable_base


def calculate_proximity_score(ratio: float) -> float:
    """
    How close a ratio is to 1, from 0 to 1.

    Uses log10 distance so multiplicative deviations in either direction
    score identically.
    """
    if ratio <= 0:
        return 0.0
    if ratio == 1:
        return 1.0

    normalized = ratio if ratio >= 1 else 1 / ratio
    log_distance = math.log10(normalized)
    return 1 / (1 + PROXIMITY_K * log_distance ** PROXIMITY_P)


def calculate_nice_number_multiplier(ratio: float) -> float:
    """
    Multiplier from 0.6 to 1.0 for how expressible a ratio is.

    Direction-agnostic: ratios below 1 are inverted first.
    """
    if ratio <= 0:
        return NICENESS_FLOOR

    normalized = ratio if ratio >= 1 else 1 / ratio
    if normalized == 1:
        return 1.0

    log_ratio = math.log10(normalized)
    min_log_distance = min(abs(log_ratio - math.log10(nice)) for nice in NICE_NUMBERS)

    return max(NICENESS_FLOOR, 1 - min_log_distance * NICENESS_SLOPE)


def calculate_direction_boost(ratio: float) -> float:
    """Multiplier from 1.0 to 1.05 favouring ratios above 1."""
    if ratio <= 1:
        return 1.0
    return min(DIRECTION_BOOST_CAP, 1 + DIRECTION_BOOST_RATE * math.log10(ratio))


def calculate_closeness_score(ratio: float) -> float:
    """
    How good a ratio is for a human-readable comparison, from 0 to 1.

    Args:
        ratio: query value / measurable value (base units)

    Returns:
        proximity * niceness * direction boost, capped at 1
    """
    if ratio <= 0:
        return 0.0

    proximity = calculate_proximity_score(ratio)
    niceness = calculate_nice_number_multiplier(ratio)
    boost = calculate_direction_boost(ratio)

    return min(1.0, proximity * niceness * boost)


def _normalize_rating(rating: float) -> float:
    return max(0.0, min(1.0, (rating - 1) / 9))


def normalize_relatability(relatability: float) -> float:
    """Map a 1-10 relatability rating onto 0-1 (clamped)."""
    return _normalize_rating(relatability)


def normalize_accuracy(accuracy: float) -> float:
    """Map a 1-10 accuracy rating onto 0-1 (clamped)."""
    return _normalize_rating(accuracy)


def normalize_weights(weights: Optional[Union[ScoringWeights, Dict[str, Any]]] = None) -> ScoringWeights:
    """
    Fill missing weights from the defaults and rescale to sum to 1.

    A triple summing to 0 falls back to the defaults entirely.
    """
    if weights is None:
        weights = ScoringWeights()
    elif isinstance(weights, dict):
        weights = ScoringWeights(**weights)

    closeness = weights.closeness if weights.closeness is not None else DEFAULT_WEIGHTS.closeness
    relatability = weights.relatability if weights.relatability is not None else DEFAULT_WEIGHTS.relatability
    accuracy = weights.accuracy if weights.accuracy is not None else DEFAULT_WEIGHTS.accuracy

    total = closeness + relatability + accuracy
    if total == 0:
        return DEFAULT_WEIGHTS.model_copy()

    return ScoringWeights(
        closeness=closeness / total,
        relatability=relatability / total,
        accuracy=accuracy / total,
    )


def calculate_composite_score(
    closeness_score: float,
    relatability: float,
    accuracy: float,
    weights: Optional[Union[ScoringWeights, Dict[str, Any]]] = None,
) -> float:
    """Weighted blend of closeness, relatability and accuracy, from 0 to 1."""
    normalized = normalize_weights(weights)
    return (
        normalized.closeness * closeness_score
        + normalized.relatability * normalize_relatability(relatability)
        + normalized.accuracy * normalize_accuracy(accuracy)
    )
