"""Distribution risk metrics for simulated terminal values.

Pure computation functions over arrays of outcomes: higher moments,
tail risk and risk-adjusted return. Zero-dispersion inputs yield 0.
"""

import logging
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

RISK_FREE_RATE = 0.02
DEFAULT_TAIL = 0.05


def _standardized(values: Sequence[float]) -> np.ndarray | None:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return None
    std = float(np.std(arr))  # population
    if std == 0.0:
        return None
    return (arr - arr.mean()) / std


def skewness(values: Sequence[float]) -> float:
    """Population skewness (third standardized moment)."""
    z = _standardized(values)
    if z is None:
        return 0.0
    return float(np.mean(z**3))


def excess_kurtosis(values: Sequence[float]) -> float:
    """Population excess kurtosis (fourth standardized moment minus 3)."""
    z = _standardized(values)
    if z is None:
        return 0.0
    return float(np.mean(z**4) - 3.0)


def expected_shortfall(values: Sequence[float], tail: float = DEFAULT_TAIL) -> float:
    """Mean of the worst ``tail`` fraction of outcomes (CVaR).

    With too few outcomes to fill the tail, the single worst outcome is used.
    """
    arr = np.sort(np.asarray(values, dtype=float))
    if arr.size == 0:
        return 0.0
    cutoff = int(np.floor(arr.size * tail))
    if cutoff == 0:
        return float(arr[0])
    return float(np.mean(arr[:cutoff]))


def max_drawdown(worst_value: float, start_value: float) -> float:
    """Relative loss of the worst outcome versus the starting value."""
    if start_value <= 0:
        return 0.0
    return (start_value - worst_value) / start_value


def max_upside(best_value: float, start_value: float) -> float:
    """Relative gain of the best outcome versus the starting value."""
    if start_value <= 0:
        return 0.0
    return (best_value - start_value) / start_value


def annualized_returns(
    final_values: Sequence[float],
    initial_value: float,
    horizon_years: float,
) -> np.ndarray:
    """Per-outcome annualised return: (final / initial) ** (1 / T) - 1."""
    finals = np.asarray(final_values, dtype=float)
    return np.power(finals / initial_value, 1.0 / horizon_years) - 1.0


def sharpe_ratio(
    final_values: Sequence[float],
    initial_value: float,
    horizon_years: float,
    risk_free_rate: float = RISK_FREE_RATE,
) -> float:
    """Sharpe-like ratio over simulated annualised returns.

    (mean annualised return - risk-free rate) / population std of returns.
    """
    if initial_value <= 0 or horizon_years <= 0 or len(final_values) == 0:
        return 0.0

    returns = annualized_returns(final_values, initial_value, horizon_years)
    std = float(np.std(returns))
    if std == 0.0:
        logger.debug("Sharpe ratio: zero dispersion of annualised returns")
        return 0.0
    return (float(np.mean(returns)) - risk_free_rate) / std
