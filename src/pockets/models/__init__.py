"""SQLModel record exports."""

from .debt import Debt, DebtType, DebtWithPlan

__all__ = [
    "Debt",
    "DebtType",
    "DebtWithPlan",
]
