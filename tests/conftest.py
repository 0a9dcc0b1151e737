"""Pytest configuration and shared fixtures for Pockets tests.

Provides a debt factory and float helpers for exercising the payoff engine
without any storage layer.
"""

from __future__ import annotations

import itertools
import logging

import pytest

from pockets.models import Debt, DebtType


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_pockets_logger():
    """Drop handlers installed by setup_logging so they do not outlive the test."""

    yield
    logger = logging.getLogger("pockets")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point config at a throwaway data dir and quiet console logging."""

    monkeypatch.setenv("POCKETS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("POCKETS_DEV_MODE", "0")
    for name in (
        "POCKETS_MAX_SIMULATION_MONTHS",
        "POCKETS_CONSOLIDATION_RATE",
        "POCKETS_CONSOLIDATION_BALANCE_LIMIT",
        "POCKETS_HIGH_INTEREST_THRESHOLD",
        "POCKETS_DTI_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for building Debt records with sensible defaults.

    Returns:
        Callable: Function that creates Debt instances
    """
    counter = itertools.count(1)

    def _create_debt(
        name: str | None = None,
        *,
        balance: float = 1000.0,
        rate: float = 0.0,
        payment: float = 100.0,
        minimum: float | None = None,
        total: float | None = None,
        debt_type: DebtType = DebtType.OTHER,
        debt_id: str | None = None,
    ) -> Debt:
        """Create a debt; ``total`` defaults to the balance, ``minimum`` to the payment."""
        seq = next(counter)
        return Debt(
            id=debt_id or f"debt-{seq}",
            name=name or f"Debt {seq}",
            type=debt_type,
            total_amount=balance if total is None else total,
            current_balance=balance,
            interest_rate=rate,
            minimum_payment=payment if minimum is None else minimum,
            monthly_payment=payment,
        )

    return _create_debt


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent)."""
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
