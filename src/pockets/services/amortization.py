"""Closed-form amortization for a single debt paid in isolation."""

from __future__ import annotations

import math

UNPAYABLE = math.inf


def monthly_rate(annual_rate: float) -> float:
    """Convert a nominal annual percentage into a monthly periodic rate."""

    return annual_rate / 100 / 12


def calculate_payoff_months(balance: float, monthly_payment: float, annual_rate: float) -> float:
    """Return the number of months needed to clear ``balance``.

    Returns 0 when there is nothing to pay (or nothing being paid) and
    ``UNPAYABLE`` when the payment does not exceed the first month's interest.
    Finite results are whole numbers.
    """

    if monthly_payment <= 0 or balance <= 0:
        return 0

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return math.ceil(balance / monthly_payment)

    if monthly_payment <= balance * rate:
        return UNPAYABLE

    # n = -ln(1 - B*r/P) / ln(1 + r)
    months = math.log(1 - balance * rate / monthly_payment) / math.log(1 + rate)
    return math.ceil(abs(months))


def calculate_total_interest(balance: float, monthly_payment: float, annual_rate: float) -> float:
    """Lifetime interest when paying ``monthly_payment`` every month.

    Assumes every month, including the last, is a full payment. Unpayable
    debts report 0 because the figure is not meaningful for them.
    """

    months = calculate_payoff_months(balance, monthly_payment, annual_rate)
    if months == UNPAYABLE or months == 0:
        return 0.0
    return monthly_payment * months - balance


def is_unpayable(months: float) -> bool:
    return math.isinf(months)


__all__ = [
    "UNPAYABLE",
    "calculate_payoff_months",
    "calculate_total_interest",
    "is_unpayable",
    "monthly_rate",
]
