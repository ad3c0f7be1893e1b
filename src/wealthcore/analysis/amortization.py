"""Loan amortization: periodic payment and repayment schedule.

Pure computation functions with no database dependency.
Degenerate loans (no principal, no duration) and unknown schemes yield 0
or an empty schedule rather than raising.
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class LoanScheme(str, Enum):
    PROGRESSIVE = "PROGRESSIVE"  # constant total payment (French annuity)
    LINEAR = "LINEAR"  # constant capital repayment
    IN_FINE = "IN_FINE"  # interest only, capital at term
    BULLET = "BULLET"  # nothing until term


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    annual_rate_percent: float
    duration_months: int
    scheme: LoanScheme | str = LoanScheme.PROGRESSIVE

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 100 / 12


@dataclass(frozen=True)
class ScheduledPayment:
    payment_number: int
    principal: float
    interest: float
    total: float
    remaining_balance: float


def _resolve_scheme(scheme: LoanScheme | str) -> LoanScheme | None:
    try:
        return LoanScheme(scheme)
    except ValueError:
        logger.debug("Unknown amortization scheme: %r", scheme)
        return None


def monthly_payment(
    principal: float,
    annual_rate_percent: float,
    duration_months: int,
    scheme: LoanScheme | str,
) -> float:
    """Compute the periodic payment of a loan.

    PROGRESSIVE uses the standard annuity formula, LINEAR reports the
    first-period payment (constant capital share plus first-month interest),
    IN_FINE is interest only and BULLET has no periodic payment.

    Args:
        principal: Borrowed amount.
        annual_rate_percent: Nominal annual rate in percent (2.5 means 2.5%).
        duration_months: Loan duration in months.
        scheme: Amortization scheme (enum member or its string value).

    Returns:
        Monthly payment, 0.0 for degenerate loans or unknown schemes.
    """
    if not principal or principal <= 0 or not duration_months or duration_months <= 0:
        return 0.0

    monthly_rate = annual_rate_percent / 100 / 12
    resolved = _resolve_scheme(scheme)

    if resolved == LoanScheme.PROGRESSIVE:
        if monthly_rate == 0:
            return principal / duration_months
        return (
            principal
            * (monthly_rate * (1 + monthly_rate) ** duration_months)
            / ((1 + monthly_rate) ** duration_months - 1)
        )
    if resolved == LoanScheme.LINEAR:
        return (principal / duration_months) + (principal * monthly_rate)
    if resolved == LoanScheme.IN_FINE:
        return principal * monthly_rate
    return 0.0


def loan_monthly_payment(terms: LoanTerms) -> float:
    """Convenience wrapper over monthly_payment() for a LoanTerms value."""
    return monthly_payment(
        terms.principal, terms.annual_rate_percent, terms.duration_months, terms.scheme
    )


def payment_schedule(
    principal: float,
    annual_rate_percent: float,
    duration_months: int,
    scheme: LoanScheme | str,
) -> list[ScheduledPayment]:
    """Build the month-by-month repayment schedule of a loan.

    BULLET loans produce a single entry at term carrying the whole capital
    plus simple interest over the full duration.
    """
    resolved = _resolve_scheme(scheme)
    if resolved is None or not principal or principal <= 0 or duration_months <= 0:
        return []

    monthly_rate = annual_rate_percent / 100 / 12
    constant_payment = monthly_payment(principal, annual_rate_percent, duration_months, resolved)

    payments: list[ScheduledPayment] = []
    remaining = principal

    for month in range(1, duration_months + 1):
        is_last = month == duration_months

        if resolved == LoanScheme.PROGRESSIVE:
            interest = remaining * monthly_rate
            capital = constant_payment - interest
        elif resolved == LoanScheme.LINEAR:
            interest = remaining * monthly_rate
            capital = principal / duration_months
        elif resolved == LoanScheme.IN_FINE:
            interest = principal * monthly_rate
            capital = principal if is_last else 0.0
        else:
            if not is_last:
                continue
            capital = principal
            interest = principal * (annual_rate_percent / 100) * (duration_months / 12)

        remaining = remaining - capital
        # Floating residue on the last annuity payment
        if remaining < 0 or (is_last and abs(remaining) < 1e-6):
            remaining = 0.0

        payments.append(
            ScheduledPayment(
                payment_number=month,
                principal=capital,
                interest=interest,
                total=capital + interest,
                remaining_balance=remaining,
            )
        )

    return payments


def total_interest(schedule: list[ScheduledPayment]) -> float:
    """Total interest paid over a schedule."""
    return sum(p.interest for p in schedule)
