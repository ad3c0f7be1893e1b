"""Performance and volatility statistics.

Pure computation functions for valuation performance, return volatility,
confidence intervals and allocation diversification.
No database dependency - operates on values passed as arguments.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import NamedTuple, Sequence

import numpy as np

logger = logging.getLogger(__name__)

NORMALIZATION_THRESHOLD_DAYS = 45
NORMALIZATION_BASIS_DAYS = 30
CONFIDENCE_Z_95 = 1.96


@dataclass(frozen=True)
class ValuationPoint:
    value: float
    date: date


class ConfidenceInterval(NamedTuple):
    lower: float
    upper: float


def period_performance(
    current_value: float,
    previous_value: float,
    days_difference: float,
) -> float:
    """Compute the relative performance between two valuations.

    Gaps longer than 45 days are brought back to a 30-day basis so that
    irregular valuation intervals stay roughly comparable month to month.

    Returns:
        Performance as a ratio (0.1 = +10%), 0.0 when there is no baseline.
    """
    if not previous_value:
        return 0.0

    performance = (current_value - previous_value) / previous_value

    if days_difference > NORMALIZATION_THRESHOLD_DAYS:
        return performance * (NORMALIZATION_BASIS_DAYS / days_difference)

    return performance


def volatility(returns: Sequence[float]) -> float:
    """Sample standard deviation (Bessel-corrected) of a return series.

    Returns 0.0 for fewer than two observations.
    """
    n = len(returns)
    if n < 2:
        return 0.0

    mean = sum(returns) / n
    variance = sum((r - mean) ** 2 for r in returns) / (n - 1)
    return math.sqrt(variance)


def confidence_interval(
    value: float,
    volatility: float,
    time_in_years: float,
) -> ConfidenceInterval:
    """95% confidence interval around a value under a random-walk assumption.

    Volatility is scaled by sqrt(time); the lower bound is clamped at zero.
    """
    adjusted_volatility = volatility * math.sqrt(time_in_years)
    margin = value * adjusted_volatility * CONFIDENCE_Z_95

    return ConfidenceInterval(
        lower=max(0.0, value - margin),
        upper=value + margin,
    )


def returns_from_values(values: Sequence[float]) -> list[float]:
    """Simple period returns from a value series (chronological order)."""
    returns = []
    for i in range(1, len(values)):
        if values[i - 1] > 0:
            returns.append((values[i] - values[i - 1]) / values[i - 1])
    return returns


def valuation_performance(points: Sequence[ValuationPoint]) -> float:
    """Performance between the two most recent valuations of a series."""
    if len(points) < 2:
        return 0.0

    ordered = sorted(points, key=lambda p: p.date)
    previous, current = ordered[-2], ordered[-1]
    days = (current.date - previous.date).days
    return period_performance(current.value, previous.value, days)


def diversification_index(amounts: Sequence[float]) -> int:
    """Normalised Shannon entropy of an allocation, scaled to 0-100.

    An allocation spread evenly across every category scores 100,
    a single category scores 0.
    """
    if len(amounts) == 0:
        return 0

    weights = np.asarray(amounts, dtype=float)
    total = float(weights.sum())
    if total == 0:
        return 0

    proportions = weights[weights > 0] / total
    entropy = float(np.sum(proportions * np.log2(proportions)))

    max_entropy = math.log2(len(amounts))
    if max_entropy <= 0:
        return 0
    return round((-entropy / max_entropy) * 100)
