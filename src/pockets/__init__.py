"""Pockets debt payoff planning package."""

from __future__ import annotations

from .config import AdvisorConfig, BaseConfig
from .models import Debt, DebtType, DebtWithPlan

__all__ = ["AdvisorConfig", "BaseConfig", "Debt", "DebtType", "DebtWithPlan"]
