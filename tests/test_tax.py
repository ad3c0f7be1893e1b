"""Unit tests for wealthcore.analysis.tax module."""

import math

import pytest

from wealthcore.analysis.tax import (
    IFI_BRACKETS,
    IR_BRACKETS,
    TaxBracket,
    build_brackets,
    compute_ifi,
    compute_income_tax,
    compute_progressive_tax,
    marginal_rate,
    per_optimization,
)


class TestIFI:
    def test_below_threshold(self):
        assert compute_progressive_tax(1000000, IFI_BRACKETS) == 0
        assert compute_progressive_tax(1300000, IFI_BRACKETS) == 0

    def test_first_bracket(self):
        assert compute_progressive_tax(1350000, IFI_BRACKETS) == 250

    def test_second_bracket(self):
        expected = 500 + (1500000 - 1400000) * 0.007
        assert compute_progressive_tax(1500000, IFI_BRACKETS) == expected

    def test_higher_bracket(self):
        expected = 32990 + (5500000 - 5000000) * 0.0125
        assert compute_ifi(5500000) == pytest.approx(expected, abs=0.5)

    def test_highest_bracket(self):
        expected = 95490 + (12000000 - 10000000) * 0.015
        assert compute_ifi(12000000) == pytest.approx(expected, abs=0.5)

    @pytest.mark.parametrize("threshold", [1_400_000, 2_570_000, 5_000_000, 10_000_000])
    def test_continuous_at_thresholds(self, threshold):
        below = compute_ifi(threshold)
        above = compute_ifi(threshold + 1)
        assert 0 < above - below < 0.02

    def test_monotonic(self):
        bases = range(0, 15_000_000, 50_000)
        taxes = [compute_ifi(b) for b in bases]
        assert all(a <= b for a, b in zip(taxes, taxes[1:]))

    def test_non_positive_base(self):
        assert compute_ifi(0) == 0
        assert compute_ifi(-100) == 0


class TestProgressiveTax:
    def test_empty_schedule(self):
        assert compute_progressive_tax(100000, []) == 0

    def test_schedule_without_open_bracket_extends_top_rate(self):
        brackets = [
            TaxBracket(upper_bound=1000, marginal_rate=0.1, cumulative_base_tax=100),
            TaxBracket(upper_bound=2000, marginal_rate=0.2, cumulative_base_tax=300),
        ]
        assert compute_progressive_tax(3000, brackets) == pytest.approx(300 + 1000 * 0.2)

    def test_first_bracket_taxed_from_zero(self):
        brackets = build_brackets(thresholds=(1000,), rates=(0.1, 0.2))
        assert compute_progressive_tax(500, brackets) == pytest.approx(50)
        assert compute_progressive_tax(1500, brackets) == pytest.approx(100 + 500 * 0.2)


class TestBuildBrackets:
    def test_reproduces_ifi_schedule(self):
        built = build_brackets(
            thresholds=(1_300_000, 1_400_000, 2_570_000, 5_000_000, 10_000_000),
            rates=(0, 0.005, 0.007, 0.01, 0.0125, 0.015),
        )
        assert len(built) == len(IFI_BRACKETS)
        for got, expected in zip(built, IFI_BRACKETS):
            assert got.upper_bound == expected.upper_bound
            assert got.marginal_rate == expected.marginal_rate
            if math.isinf(expected.cumulative_base_tax):
                assert math.isinf(got.cumulative_base_tax)
            else:
                assert got.cumulative_base_tax == pytest.approx(expected.cumulative_base_tax)

    def test_rate_count_mismatch(self):
        with pytest.raises(ValueError):
            build_brackets(thresholds=(1000, 2000), rates=(0.1, 0.2))

    def test_thresholds_not_increasing(self):
        with pytest.raises(ValueError):
            build_brackets(thresholds=(2000, 1000), rates=(0.1, 0.2, 0.3))

    def test_rate_out_of_range(self):
        with pytest.raises(ValueError):
            build_brackets(thresholds=(1000,), rates=(0.1, 1.5))


class TestIncomeTax:
    def test_below_first_threshold(self):
        assert compute_income_tax(10000) == 0

    def test_single_part(self):
        expected = (28797 - 11294) * 0.11 + (50000 - 28797) * 0.30
        assert compute_income_tax(50000) == pytest.approx(expected)

    def test_family_quotient_lowers_tax(self):
        assert compute_income_tax(100000, household_parts=2) < compute_income_tax(100000)

    def test_family_quotient_formula(self):
        assert compute_income_tax(100000, household_parts=2) == pytest.approx(
            compute_progressive_tax(50000, IR_BRACKETS) * 2
        )

    def test_invalid_parts(self):
        assert compute_income_tax(100000, household_parts=0) == 0

    @pytest.mark.parametrize(
        "income,expected",
        [(10000, 0.0), (11294, 0.0), (20000, 0.11), (50000, 0.30), (100000, 0.41), (500000, 0.45)],
    )
    def test_marginal_rate(self, income, expected):
        assert marginal_rate(income) == expected

    def test_marginal_rate_with_parts(self):
        assert marginal_rate(100000, household_parts=2) == 0.30


class TestPEROptimization:
    def test_standard_case(self):
        result = per_optimization(100000, 0.3)
        assert result["max_per"] == pytest.approx(10000)
        assert result["optimal_amount"] == pytest.approx(9000)
        assert result["estimated_savings"] == pytest.approx(2700)

    def test_ceiling(self):
        assert per_optimization(500000, 0.45)["max_per"] == 35194

    def test_low_income(self):
        result = per_optimization(30000, 0.11)
        assert result["max_per"] == pytest.approx(3000)
        assert result["optimal_amount"] < result["max_per"]
