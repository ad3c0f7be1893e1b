"""Deterministic wealth projections.

Horizon forecasts compound the current value with a per-horizon growth
rate and attach a 95% confidence interval. The baseline projection grows
assets and indexes debt month by month with no scenario actions applied.
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from wealthcore.analysis.performance import confidence_interval

logger = logging.getLogger(__name__)

HORIZON_YEARS = {
    "1M": 1 / 12,
    "6M": 0.5,
    "1Y": 1.0,
    "5Y": 5.0,
    "10Y": 10.0,
}

HORIZON_MONTHS = {
    "1M": 1,
    "6M": 6,
    "1Y": 12,
    "5Y": 60,
    "10Y": 120,
}

# Annualised growth assumptions per horizon
HORIZON_GROWTH_RATES = {
    "1M": 0.006,
    "6M": 0.04,
    "1Y": 0.07,
    "5Y": 0.06,
}
DEFAULT_GROWTH_RATE = 0.05

DEFAULT_HORIZONS = ("1M", "6M", "1Y", "5Y")
DEFAULT_FORECAST_VOLATILITY = 0.15
LIQUID_SHARE = 0.2


@dataclass(frozen=True)
class ProjectionPoint:
    month: int
    total_value: float
    debt: float
    net_value: float
    liquid_value: float


def forecast_horizons(
    current_value: float,
    horizons: Sequence[str] = DEFAULT_HORIZONS,
    volatility: float = DEFAULT_FORECAST_VOLATILITY,
) -> dict[str, dict[str, Any]]:
    """Project a value over each horizon with a 95% confidence band.

    Unknown horizon labels fall back to one year at the default growth rate.

    Returns:
        {horizon: {value, time_in_years, growth_rate, confidence: {lower, upper, level}}}
    """
    predictions: dict[str, dict[str, Any]] = {}
    for horizon in horizons:
        if horizon not in HORIZON_YEARS:
            logger.debug("Unknown forecast horizon %r, using 1 year", horizon)
        time_in_years = HORIZON_YEARS.get(horizon, 1.0)
        growth_rate = HORIZON_GROWTH_RATES.get(horizon, DEFAULT_GROWTH_RATE)

        projected = current_value * (1 + growth_rate) ** time_in_years
        interval = confidence_interval(projected, volatility, time_in_years)

        predictions[horizon] = {
            "value": projected,
            "time_in_years": time_in_years,
            "growth_rate": growth_rate,
            "confidence": {
                "lower": interval.lower,
                "upper": interval.upper,
                "level": 0.95,
            },
        }
    return predictions


def project_baseline(
    total_value: float,
    total_debt: float,
    months: int,
    growth_rate: float = 0.05,
    inflation: float = 0.02,
) -> list[ProjectionPoint]:
    """Month-by-month baseline: assets compound, debt follows inflation.

    Returns ``months + 1`` points, month 0 being today's position.
    """
    points: list[ProjectionPoint] = []
    for month in range(max(months, 0) + 1):
        year_fraction = month / 12
        value = total_value * (1 + growth_rate) ** year_fraction
        debt = total_debt * (1 + inflation) ** year_fraction
        points.append(
            ProjectionPoint(
                month=month,
                total_value=value,
                debt=debt,
                net_value=value - debt,
                liquid_value=value * LIQUID_SHARE,
            )
        )
    return points


def projection_metrics(points: Sequence[ProjectionPoint]) -> dict[str, float]:
    """Summary of a projection: start, end, absolute and relative change."""
    if not points:
        return {"start_net_value": 0.0, "end_net_value": 0.0, "change": 0.0, "change_pct": 0.0}

    start = points[0].net_value
    end = points[-1].net_value
    change = end - start
    return {
        "start_net_value": start,
        "end_net_value": end,
        "change": change,
        "change_pct": (change / abs(start) * 100) if start else 0.0,
    }
