"""Unit tests for wealthcore.analysis.amortization module."""

import pytest

from wealthcore.analysis.amortization import (
    LoanScheme,
    LoanTerms,
    loan_monthly_payment,
    monthly_payment,
    payment_schedule,
    total_interest,
)


class TestMonthlyPayment:
    """Test monthly_payment function."""

    def test_progressive(self):
        result = monthly_payment(100000, 2.5, 240, LoanScheme.PROGRESSIVE)
        assert result == pytest.approx(530, abs=1)

    def test_linear_reports_first_period(self):
        result = monthly_payment(100000, 2.5, 240, LoanScheme.LINEAR)
        # 416.67 capital + 208.33 first-month interest
        assert result == pytest.approx(625, abs=0.1)

    def test_in_fine_interest_only(self):
        result = monthly_payment(100000, 2.5, 240, LoanScheme.IN_FINE)
        assert result == pytest.approx(208.33, abs=0.1)

    def test_bullet_is_zero(self):
        assert monthly_payment(100000, 2.5, 240, LoanScheme.BULLET) == 0

    def test_zero_principal(self):
        for scheme in LoanScheme:
            assert monthly_payment(0, 2.5, 240, scheme) == 0

    def test_zero_duration(self):
        assert monthly_payment(100000, 2.5, 0, LoanScheme.PROGRESSIVE) == 0

    def test_zero_rate_progressive(self):
        result = monthly_payment(100000, 0, 240, LoanScheme.PROGRESSIVE)
        assert result == pytest.approx(417, abs=1)
        assert result == 100000 / 240

    def test_annuity_formula_order(self):
        r = 2.5 / 100 / 12
        expected = 100000 * (r * (1 + r) ** 240) / ((1 + r) ** 240 - 1)
        assert monthly_payment(100000, 2.5, 240, "PROGRESSIVE") == expected

    def test_string_scheme_accepted(self):
        assert monthly_payment(100000, 2.5, 240, "IN_FINE") == monthly_payment(
            100000, 2.5, 240, LoanScheme.IN_FINE
        )

    def test_unknown_scheme_returns_zero(self):
        assert monthly_payment(100000, 2.5, 240, "BALLOON") == 0

    def test_loan_terms_wrapper(self):
        terms = LoanTerms(principal=100000, annual_rate_percent=2.5, duration_months=240,
                          scheme=LoanScheme.PROGRESSIVE)
        assert terms.monthly_rate == pytest.approx(2.5 / 100 / 12)
        assert loan_monthly_payment(terms) == monthly_payment(100000, 2.5, 240, LoanScheme.PROGRESSIVE)


class TestPaymentSchedule:
    """Test payment_schedule function."""

    def test_progressive_repays_principal(self):
        schedule = payment_schedule(100000, 2.5, 240, LoanScheme.PROGRESSIVE)
        assert len(schedule) == 240
        assert sum(p.principal for p in schedule) == pytest.approx(100000, abs=1e-4)
        assert schedule[-1].remaining_balance == 0

    def test_progressive_constant_total(self):
        schedule = payment_schedule(100000, 2.5, 240, LoanScheme.PROGRESSIVE)
        payment = monthly_payment(100000, 2.5, 240, LoanScheme.PROGRESSIVE)
        for p in schedule:
            assert p.total == pytest.approx(payment)

    def test_progressive_interest_declines(self):
        schedule = payment_schedule(100000, 2.5, 240, LoanScheme.PROGRESSIVE)
        assert schedule[0].interest > schedule[120].interest > schedule[-1].interest

    def test_linear_first_payment_matches_monthly_payment(self):
        schedule = payment_schedule(100000, 2.5, 240, LoanScheme.LINEAR)
        assert schedule[0].total == pytest.approx(monthly_payment(100000, 2.5, 240, LoanScheme.LINEAR))
        assert schedule[-1].total < schedule[0].total
        assert schedule[-1].remaining_balance == 0

    def test_in_fine_capital_at_term(self):
        schedule = payment_schedule(100000, 2.5, 12, LoanScheme.IN_FINE)
        assert len(schedule) == 12
        assert all(p.principal == 0 for p in schedule[:-1])
        assert schedule[-1].principal == 100000
        assert schedule[-1].remaining_balance == 0
        assert total_interest(schedule) == pytest.approx(2500)

    def test_bullet_single_payment(self):
        schedule = payment_schedule(100000, 2.5, 24, LoanScheme.BULLET)
        assert len(schedule) == 1
        assert schedule[0].payment_number == 24
        assert schedule[0].principal == 100000
        assert schedule[0].interest == pytest.approx(5000)

    def test_zero_rate(self):
        schedule = payment_schedule(12000, 0, 12, LoanScheme.PROGRESSIVE)
        assert all(p.interest == 0 for p in schedule)
        assert all(p.total == pytest.approx(1000) for p in schedule)

    def test_degenerate_loans(self):
        assert payment_schedule(0, 2.5, 240, LoanScheme.PROGRESSIVE) == []
        assert payment_schedule(100000, 2.5, 0, LoanScheme.LINEAR) == []
        assert payment_schedule(100000, 2.5, 240, "BALLOON") == []
