"""Service module exports."""

from . import advice, amortization, debts

__all__ = [
    "advice",
    "amortization",
    "debts",
]
