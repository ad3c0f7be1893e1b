"""Progressive tax schedules: IFI wealth tax, income tax, PER optimisation.

Brackets are data, not logic: every schedule is a list of TaxBracket sorted
by upper bound, the last one open-ended. The evaluator only needs the
precomputed cumulative tax at each threshold.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence, TypedDict

logger = logging.getLogger(__name__)

PER_INCOME_SHARE = 0.10
PER_CEILING = 35194  # 2024 ceiling
PER_OPTIMAL_FACTOR = 0.3


@dataclass(frozen=True)
class TaxBracket:
    upper_bound: float  # inclusive
    marginal_rate: float
    cumulative_base_tax: float  # tax owed at upper_bound


class PEROptimization(TypedDict):
    max_per: float
    optimal_amount: float
    estimated_savings: float


def build_brackets(
    thresholds: Sequence[float],
    rates: Sequence[float],
) -> list[TaxBracket]:
    """Build a bracket schedule from bare thresholds and marginal rates.

    ``rates`` has one more entry than ``thresholds``: the last rate applies
    above the highest threshold. Cumulative bases are derived here.

    Raises:
        ValueError: thresholds not strictly increasing, or rate count mismatch.
    """
    if len(rates) != len(thresholds) + 1:
        raise ValueError(
            f"Expected {len(thresholds) + 1} rates for {len(thresholds)} thresholds, got {len(rates)}"
        )
    if any(b <= a for a, b in zip(thresholds, thresholds[1:])):
        raise ValueError("Bracket thresholds must be strictly increasing")
    if any(not 0 <= r <= 1 for r in rates):
        raise ValueError("Marginal rates must lie in [0, 1]")

    brackets: list[TaxBracket] = []
    lower = 0.0
    cumulative = 0.0
    for upper, rate in zip([*thresholds, math.inf], rates):
        cumulative = math.inf if math.isinf(upper) else cumulative + (upper - lower) * rate
        brackets.append(TaxBracket(upper_bound=upper, marginal_rate=rate, cumulative_base_tax=cumulative))
        lower = upper
    return brackets


# IFI 2024 (real-estate wealth tax), owed above 1.3M
IFI_BRACKETS: list[TaxBracket] = [
    TaxBracket(upper_bound=1_300_000, marginal_rate=0.0, cumulative_base_tax=0),
    TaxBracket(upper_bound=1_400_000, marginal_rate=0.005, cumulative_base_tax=500),
    TaxBracket(upper_bound=2_570_000, marginal_rate=0.007, cumulative_base_tax=8690),
    TaxBracket(upper_bound=5_000_000, marginal_rate=0.01, cumulative_base_tax=32990),
    TaxBracket(upper_bound=10_000_000, marginal_rate=0.0125, cumulative_base_tax=95490),
    TaxBracket(upper_bound=math.inf, marginal_rate=0.015, cumulative_base_tax=math.inf),
]

# Income tax 2024, per household part
IR_BRACKETS: list[TaxBracket] = build_brackets(
    thresholds=(11_294, 28_797, 82_341, 177_106),
    rates=(0.0, 0.11, 0.30, 0.41, 0.45),
)


def compute_progressive_tax(taxable_base: float, brackets: Sequence[TaxBracket]) -> float:
    """Apply a marginal-bracket schedule to a taxable base.

    tax = cumulative base of the previous bracket
          + (base - previous upper bound) * current marginal rate

    Returns:
        Tax owed, 0.0 for a non-positive base or an empty schedule.
    """
    if not brackets or taxable_base <= 0:
        return 0.0

    previous: TaxBracket | None = None
    for bracket in brackets:
        if taxable_base <= bracket.upper_bound:
            if previous is None:
                return taxable_base * bracket.marginal_rate
            return previous.cumulative_base_tax + (taxable_base - previous.upper_bound) * bracket.marginal_rate
        previous = bracket

    # Schedule without an open-ended last bracket: extend the top rate
    return previous.cumulative_base_tax + (taxable_base - previous.upper_bound) * previous.marginal_rate


def compute_ifi(real_estate_value: float) -> float:
    """IFI owed on a net taxable real-estate value."""
    return compute_progressive_tax(real_estate_value, IFI_BRACKETS)


def compute_income_tax(
    income: float,
    household_parts: float = 1.0,
    brackets: Sequence[TaxBracket] = IR_BRACKETS,
) -> float:
    """Income tax using the family quotient: schedule applied per part."""
    if household_parts <= 0:
        logger.debug("Non-positive household parts: %s", household_parts)
        return 0.0
    quotient = income / household_parts
    return compute_progressive_tax(quotient, brackets) * household_parts


def marginal_rate(
    income: float,
    household_parts: float = 1.0,
    brackets: Sequence[TaxBracket] = IR_BRACKETS,
) -> float:
    """Marginal rate (TMI) reached by the family quotient."""
    if not brackets or household_parts <= 0:
        return 0.0
    quotient = income / household_parts
    for bracket in brackets:
        if quotient <= bracket.upper_bound:
            return bracket.marginal_rate
    return brackets[-1].marginal_rate


def per_optimization(income: float, marginal_rate: float) -> PEROptimization:
    """Retirement savings plan (PER) contribution estimate.

    The deductible ceiling is 10% of income capped at the yearly limit;
    the suggested contribution scales with the marginal rate.
    """
    max_per = min(income * PER_INCOME_SHARE, PER_CEILING)
    optimal_amount = min(max_per, income * marginal_rate * PER_OPTIMAL_FACTOR)
    return PEROptimization(
        max_per=max_per,
        optimal_amount=optimal_amount,
        estimated_savings=optimal_amount * marginal_rate,
    )
