"""Monte Carlo simulation of a portfolio or asset value.

Each scenario compounds the starting value over yearly steps (finer steps
when the horizon is fractional) with a normally distributed growth rate:

    value *= 1 + trend * dt + volatility * sqrt(dt) * Z,   Z ~ N(0, 1)

The growth factor is floored at zero, so a value can be wiped out but never
goes negative. Randomness comes only from the numpy Generator handed in
(or built from ``seed``); there is no module-level random state.
"""

import hashlib
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypedDict

import numpy as np

from wealthcore.analysis.risk import (
    RISK_FREE_RATE,
    excess_kurtosis,
    expected_shortfall,
    max_drawdown,
    max_upside,
    sharpe_ratio,
    skewness,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_SCENARIOS = 1000
DEFAULT_VOLATILITY = 0.15
DEFAULT_TREND = 0.07
MIN_SCENARIOS = 100
MAX_SCENARIOS = 10000
MIN_HORIZON_YEARS = 0.1
MAX_HORIZON_YEARS = 20.0

PERCENTILE_LEVELS = (5, 10, 25, 50, 75, 90, 95)
SHORTFALL_TAIL = 0.05


class SimulationInputError(ValueError):
    """Raised at the API boundary for out-of-domain simulation inputs."""


class Percentiles(TypedDict):
    p5: float
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    p95: float


class SimulationStatistics(TypedDict):
    mean: float
    median: float
    standard_deviation: float
    percentiles: Percentiles


@dataclass(frozen=True)
class SimulationConfig:
    current_value: float
    time_horizon_years: float
    scenario_count: int = DEFAULT_SCENARIOS
    base_volatility: float = DEFAULT_VOLATILITY
    base_trend: float = DEFAULT_TREND
    seed: int | None = None


@dataclass(frozen=True)
class MonteCarloScenario:
    scenario_id: int
    final_value: float
    path: tuple[float, ...]


@dataclass(frozen=True)
class ProbabilityAnalysis:
    probability_of_gain: float
    probability_of_loss: float
    probability_of_doubling: float
    final_values: np.ndarray = field(repr=False, compare=False)

    def probability_of_target(self, target: float) -> float:
        """Empirical fraction of scenarios ending strictly above ``target``."""
        if self.final_values.size == 0:
            return 0.0
        return float(np.mean(self.final_values > target))


@dataclass(frozen=True)
class MonteCarloResult:
    total_scenarios: int
    time_horizon_years: float
    current_value: float
    scenarios: tuple[MonteCarloScenario, ...]
    statistics: SimulationStatistics
    probability_analysis: ProbabilityAnalysis
    worst_case_scenario: MonteCarloScenario
    best_case_scenario: MonteCarloScenario
    run_date: str

    @property
    def final_values(self) -> np.ndarray:
        return self.probability_analysis.final_values

    def to_dict(self, max_paths: int | None = None) -> dict[str, Any]:
        """JSON-friendly view. ``max_paths`` limits the scenarios listed."""
        scenarios = self.scenarios if max_paths is None else self.scenarios[:max_paths]
        return {
            "total_scenarios": self.total_scenarios,
            "time_horizon_years": self.time_horizon_years,
            "current_value": self.current_value,
            "scenarios": [_scenario_dict(s) for s in scenarios],
            "statistics": self.statistics,
            "probability_analysis": {
                "probability_of_gain": self.probability_analysis.probability_of_gain,
                "probability_of_loss": self.probability_analysis.probability_of_loss,
                "probability_of_doubling": self.probability_analysis.probability_of_doubling,
            },
            "worst_case_scenario": _scenario_dict(self.worst_case_scenario),
            "best_case_scenario": _scenario_dict(self.best_case_scenario),
            "run_date": self.run_date,
        }


def _scenario_dict(scenario: MonteCarloScenario) -> dict[str, Any]:
    return {
        "scenario_id": scenario.scenario_id,
        "final_value": scenario.final_value,
        "path": list(scenario.path),
    }


# ---------------------------------------------------------------------------
# Boundary validation
# ---------------------------------------------------------------------------


def validate_simulation_inputs(
    current_value: float,
    time_horizon_years: float,
    scenario_count: int,
    base_volatility: float = DEFAULT_VOLATILITY,
    base_trend: float = DEFAULT_TREND,
    min_scenarios: int = MIN_SCENARIOS,
    max_scenarios: int = MAX_SCENARIOS,
    min_horizon_years: float = MIN_HORIZON_YEARS,
    max_horizon_years: float = MAX_HORIZON_YEARS,
) -> None:
    """Reject inputs outside the simulator's domain.

    Raises:
        SimulationInputError: with a message suitable for an API response.
    """
    for name, value in (
        ("current value", current_value),
        ("time horizon", time_horizon_years),
        ("volatility", base_volatility),
        ("trend", base_trend),
    ):
        if value is None or not math.isfinite(value):
            raise SimulationInputError(f"Invalid {name}: {value!r}")

    if current_value <= 0:
        raise SimulationInputError("Invalid current value for Monte Carlo simulation")
    if not min_scenarios <= scenario_count <= max_scenarios:
        raise SimulationInputError(
            f"Number of scenarios must be between {min_scenarios} and {max_scenarios}"
        )
    if not min_horizon_years <= time_horizon_years <= max_horizon_years:
        raise SimulationInputError(
            f"Time horizon must be between {min_horizon_years} and {max_horizon_years} years"
        )
    if base_volatility < 0:
        raise SimulationInputError("Volatility must be non-negative")


def stable_seed(key: str) -> int:
    """Deterministic seed from a string key (asset id, user id...)."""
    return int(hashlib.sha256(key.encode()).hexdigest(), 16) % (2**32)


# ---------------------------------------------------------------------------
# Main entry points
# ---------------------------------------------------------------------------


def simulate_paths(
    current_value: float,
    time_horizon_years: float,
    scenario_count: int,
    base_volatility: float,
    base_trend: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Simulate value paths, shape (scenario_count, steps + 1).

    Column 0 is the starting value; the last column holds terminal values.
    """
    steps = max(1, math.ceil(time_horizon_years))
    dt = time_horizon_years / steps

    z = rng.standard_normal((scenario_count, steps))
    growth = 1.0 + base_trend * dt + base_volatility * math.sqrt(dt) * z
    growth = np.maximum(growth, 0.0)

    paths = np.empty((scenario_count, steps + 1))
    paths[:, 0] = current_value
    paths[:, 1:] = current_value * np.cumprod(growth, axis=1)
    return paths


def run_monte_carlo(
    current_value: float,
    time_horizon_years: float,
    scenario_count: int = DEFAULT_SCENARIOS,
    base_volatility: float = DEFAULT_VOLATILITY,
    base_trend: float = DEFAULT_TREND,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> MonteCarloResult:
    """Run a Monte Carlo simulation and derive distribution statistics.

    Inputs are assumed validated (see validate_simulation_inputs()).

    Args:
        current_value: Starting value (> 0).
        time_horizon_years: Projection horizon in years.
        scenario_count: Number of independent scenarios.
        base_volatility: Annual volatility of the growth rate.
        base_trend: Annual expected growth rate.
        rng: NumPy generator; takes precedence over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is not given.

    Returns:
        MonteCarloResult with every scenario, statistics and probabilities.
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    paths = simulate_paths(
        current_value, time_horizon_years, scenario_count, base_volatility, base_trend, rng
    )
    final_values = paths[:, -1].copy()
    final_values.setflags(write=False)

    scenarios = tuple(
        MonteCarloScenario(
            scenario_id=i + 1,
            final_value=float(final_values[i]),
            path=tuple(float(v) for v in paths[i]),
        )
        for i in range(scenario_count)
    )

    pct = np.percentile(final_values, PERCENTILE_LEVELS)
    percentiles = Percentiles(**{f"p{level}": float(v) for level, v in zip(PERCENTILE_LEVELS, pct)})

    statistics = SimulationStatistics(
        mean=float(np.mean(final_values)),
        median=float(np.median(final_values)),
        standard_deviation=float(np.std(final_values)),
        percentiles=percentiles,
    )

    probability_analysis = ProbabilityAnalysis(
        probability_of_gain=float(np.mean(final_values > current_value)),
        probability_of_loss=float(np.mean(final_values < current_value)),
        probability_of_doubling=float(np.mean(final_values >= current_value * 2)),
        final_values=final_values,
    )

    logger.debug(
        "Monte Carlo: %d scenarios over %.2fy, mean=%.2f p5=%.2f p95=%.2f",
        scenario_count, time_horizon_years, statistics["mean"],
        percentiles["p5"], percentiles["p95"],
    )

    return MonteCarloResult(
        total_scenarios=scenario_count,
        time_horizon_years=time_horizon_years,
        current_value=current_value,
        scenarios=scenarios,
        statistics=statistics,
        probability_analysis=probability_analysis,
        worst_case_scenario=scenarios[int(np.argmin(final_values))],
        best_case_scenario=scenarios[int(np.argmax(final_values))],
        run_date=datetime.now(timezone.utc).isoformat(),
    )


def run_simulation(config: SimulationConfig) -> MonteCarloResult:
    """run_monte_carlo() driven by a SimulationConfig."""
    return run_monte_carlo(
        current_value=config.current_value,
        time_horizon_years=config.time_horizon_years,
        scenario_count=config.scenario_count,
        base_volatility=config.base_volatility,
        base_trend=config.base_trend,
        seed=config.seed,
    )


# ---------------------------------------------------------------------------
# Derived analysis
# ---------------------------------------------------------------------------


def analyze_monte_carlo(
    result: MonteCarloResult,
    risk_free_rate: float = RISK_FREE_RATE,
) -> dict[str, dict[str, float]]:
    """Target probabilities, distribution shape and risk metrics.

    Returns:
        {
            target_analysis: {...},
            distribution_analysis: {skewness, kurtosis, value_at_risk_95, expected_shortfall},
            risk_metrics: {max_drawdown, max_upside, volatility, sharpe_ratio},
        }
    """
    current = result.current_value
    finals = result.final_values
    probs = result.probability_analysis
    stats = result.statistics

    target_analysis = {
        "probability_of_preserving_capital": probs.probability_of_target(current),
        "probability_of_50_percent_gain": probs.probability_of_target(current * 1.5),
        "probability_of_doubling": probs.probability_of_doubling,
        "probability_of_25_percent_loss": float(np.mean(finals <= current * 0.75)),
        "probability_of_50_percent_loss": float(np.mean(finals <= current * 0.5)),
    }

    distribution_analysis = {
        "skewness": skewness(finals),
        "kurtosis": excess_kurtosis(finals),
        "value_at_risk_95": stats["percentiles"]["p5"],
        "expected_shortfall": expected_shortfall(finals, SHORTFALL_TAIL),
    }

    mean = stats["mean"]
    risk_metrics = {
        "max_drawdown": max_drawdown(result.worst_case_scenario.final_value, current),
        "max_upside": max_upside(result.best_case_scenario.final_value, current),
        "volatility": stats["standard_deviation"] / mean if mean else 0.0,
        "sharpe_ratio": sharpe_ratio(finals, current, result.time_horizon_years, risk_free_rate),
    }

    return {
        "target_analysis": target_analysis,
        "distribution_analysis": distribution_analysis,
        "risk_metrics": risk_metrics,
    }
