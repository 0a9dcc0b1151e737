"""Tests for the single-debt closed-form payoff formulas."""

from __future__ import annotations

import math

import pytest

from pockets.services.amortization import (
    UNPAYABLE,
    calculate_payoff_months,
    calculate_total_interest,
    is_unpayable,
    monthly_rate,
)
from tests.conftest import assert_float_equal


class TestPayoffMonths:
    """Months needed to clear one debt on its own."""

    def test_interest_free_is_simple_division(self):
        assert calculate_payoff_months(1200, 100, 0) == 12

    def test_interest_free_rounds_partial_month_up(self):
        assert calculate_payoff_months(1000, 300, 0) == 4

    def test_closed_form_with_interest(self):
        """1000 at 24% (2%/month) paying 50: -ln(0.6)/ln(1.02) = 25.8 -> 26."""
        months = calculate_payoff_months(1000, 50, 24)
        assert months == 26

    def test_closed_form_matches_manual_formula(self):
        rate = monthly_rate(18)
        expected = math.ceil(abs(math.log(1 - 5000 * rate / 150) / math.log(1 + rate)))
        assert calculate_payoff_months(5000, 150, 18) == expected

    @pytest.mark.parametrize(
        "balance,payment",
        [(0, 100), (-50, 100), (1000, 0), (1000, -10)],
    )
    def test_nothing_to_pay_is_zero_months(self, balance, payment):
        assert calculate_payoff_months(balance, payment, 12) == 0

    def test_payment_equal_to_interest_is_unpayable(self):
        # 1000 * 0.02 = 20 interest per month
        months = calculate_payoff_months(1000, 20, 24)
        assert months == UNPAYABLE
        assert is_unpayable(months)

    def test_payment_below_interest_is_unpayable(self):
        assert is_unpayable(calculate_payoff_months(10000, 50, 24))

    def test_finite_results_are_whole_numbers(self):
        months = calculate_payoff_months(2345.67, 123.45, 9.9)
        assert not is_unpayable(months)
        assert months == int(months)


class TestTotalInterest:
    """Lifetime interest assuming full payments every month."""

    def test_interest_free_debt(self):
        assert calculate_total_interest(1200, 100, 0) == 0

    def test_interest_free_counts_full_final_payment(self):
        # ceil(1000 / 300) = 4 payments of 300
        assert calculate_total_interest(1000, 300, 0) == 200

    def test_interest_bearing_debt(self):
        interest = calculate_total_interest(1000, 50, 24)
        assert_float_equal(interest, 50 * 26 - 1000)
        assert interest > 0

    def test_unpayable_debt_reports_zero_interest(self):
        assert calculate_total_interest(1000, 20, 24) == 0

    def test_paid_off_debt_reports_zero_interest(self):
        assert calculate_total_interest(0, 100, 15) == 0


def test_monthly_rate_converts_annual_percentage():
    assert_float_equal(monthly_rate(12), 0.01, tolerance=1e-12)
