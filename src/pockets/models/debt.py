"""Debt records consumed and produced by the payoff engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class DebtType(str, Enum):
    """Kinds of debt; only the advisory rules look at this."""

    CREDIT_CARD = "credit_card"
    PERSONAL_LOAN = "personal_loan"
    MORTGAGE = "mortgage"
    CAR_LOAN = "car_loan"
    STUDENT_LOAN = "student_loan"
    OTHER = "other"


class Debt(SQLModel):
    """A debt as supplied by the storage layer.

    Amounts are in the user's currency. ``interest_rate`` is a nominal annual
    percentage (15.5 means 15.5%/year). Constraints such as
    ``current_balance <= total_amount`` are checked by the input forms, not
    here; the engine copes with violations instead of rejecting them.
    """

    id: str
    name: str
    type: DebtType = Field(default=DebtType.OTHER)
    total_amount: float
    current_balance: float
    interest_rate: float = Field(default=0.0)
    minimum_payment: float
    monthly_payment: float
    created_at: Optional[datetime] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class DebtWithPlan(Debt):
    """A debt annotated with its place and projection inside a payoff plan."""

    # math.inf when the payment never covers the interest
    payoff_month: float
    total_interest_paid: float
    order: int

    @classmethod
    def from_debt(
        cls, debt: Debt, *, payoff_month: float, total_interest_paid: float, order: int
    ) -> "DebtWithPlan":
        return cls(
            **debt.model_dump(include=set(Debt.model_fields)),
            payoff_month=payoff_month,
            total_interest_paid=total_interest_paid,
            order=order,
        )
