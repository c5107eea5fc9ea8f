"""
Score arithmetic shared by every scorer and aggregation policy.

All scores live on an integer 0-100 scale. Rounding is half-up so that
repeated runs over the same input produce the same integer on every
platform.
"""

import math
from typing import Iterable, Tuple

from brand_agents.core.exceptions import AgentConfigError

MIN_SCORE = 0
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = MIN_SCORE, high: float = MAX_SCORE) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


def clamp_score(value: float) -> int:
    """
    Coerce any numeric value into a valid integer score.

    Non-finite values (NaN, inf) collapse to 0.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MIN_SCORE
    if not math.isfinite(number):
        return MIN_SCORE
    return int(clamp(round_half_up(number)))


def weighted_score(criteria: Iterable[Tuple[float, float]]) -> int:
    """
    Combine (weight, score) pairs into one rounded score.

    The weighted sum is divided by the total weight, so weights need not
    sum to 1.

    Raises:
        AgentConfigError: If the weights sum to zero
    """
    pairs = list(criteria)
    total_weight = sum(weight for weight, _ in pairs)
    if total_weight <= 0:
        raise AgentConfigError(
            "Criteria weights must sum to a positive value",
            details={"criteria": pairs},
        )
    weighted_sum = sum(weight * score for weight, score in pairs)
    return clamp_score(weighted_sum / total_weight)
