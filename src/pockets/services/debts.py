"""Debt payoff planning (avalanche, snowball and custom ordering).

Every strategy runs the same month-by-month simulation over a prioritized
list of debts. Each debt receives its own ``monthly_payment``; the first debt
still owing additionally receives the extra-payment pool. When a debt is
cleared its ``monthly_payment`` joins the pool, so freed capacity cascades
down the list regardless of how the list was ordered.

Per-debt figures attached to a plan are, by default, the isolated
closed-form projections from :mod:`.amortization`. They ignore the cascade
and therefore do not add up to the plan totals. Pass
``projection="simulated"`` to take them from the simulation instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from ..config import MAX_SIMULATION_MONTHS
from ..logging_config import get_logger
from ..models.debt import Debt, DebtWithPlan
from .amortization import UNPAYABLE, calculate_payoff_months, calculate_total_interest

logger = get_logger(__name__)

PROJECTION_ISOLATED = "isolated"
PROJECTION_SIMULATED = "simulated"
PROJECTION_MODES = (PROJECTION_ISOLATED, PROJECTION_SIMULATED)


class StrategyType(str, Enum):
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class MonthSnapshot:
    """What happened in one simulated month.

    Tuples are aligned with the plan's debt order.
    """

    month: int
    extra_pool: float  # pool available when the month started
    payments: tuple[float, ...]
    balances: tuple[float, ...]  # after this month's payments
    interest: float
    paid_off: tuple[int, ...]  # positions cleared this month


@dataclass(frozen=True, slots=True)
class SimulationState:
    """Immutable running totals between two simulated months."""

    month: int
    balances: tuple[float, ...]
    extra_pool: float
    total_interest: float = 0.0
    total_paid: float = 0.0
    interest_by_debt: tuple[float, ...] = ()
    cleared_in: tuple[int | None, ...] = ()

    @classmethod
    def start(cls, debts: Sequence[Debt], extra_payment: float) -> "SimulationState":
        return cls(
            month=0,
            balances=tuple(float(d.current_balance) for d in debts),
            extra_pool=float(extra_payment),
            interest_by_debt=tuple(0.0 for _ in debts),
            cleared_in=tuple(None for _ in debts),
        )

    @property
    def owing(self) -> bool:
        return any(balance > 0 for balance in self.balances)


@dataclass(frozen=True, slots=True)
class SimulationResult:
    months: int
    total_interest: float
    total_paid: float
    converged: bool
    final_state: SimulationState
    schedule: tuple[MonthSnapshot, ...]


@dataclass(frozen=True, slots=True)
class DebtStrategy:
    """Outcome of one payoff simulation.

    ``months_to_payoff`` equals the month cap when ``converged`` is False; in
    that case it is not a real timeline.
    """

    type: StrategyType
    debts: tuple[DebtWithPlan, ...] = ()
    total_interest: float = 0.0
    months_to_payoff: int = 0
    total_paid: float = 0.0
    converged: bool = True
    schedule: tuple[MonthSnapshot, ...] = field(default=(), repr=False)


@dataclass(frozen=True, slots=True)
class StrategyComparison:
    avalanche: DebtStrategy
    snowball: DebtStrategy
    savings: float  # interest avoided by choosing avalanche; may be negative
    months_saved: int


# ---------------------------------------------------------------------------
# Ordering policies
# ---------------------------------------------------------------------------


def order_avalanche(debts: Iterable[Debt]) -> list[Debt]:
    """Highest interest rate first; ties keep input order."""
    return sorted(debts, key=lambda d: d.interest_rate, reverse=True)


def order_snowball(debts: Iterable[Debt]) -> list[Debt]:
    """Smallest current balance first; ties keep input order."""
    return sorted(debts, key=lambda d: d.current_balance)


def order_custom(debts: Iterable[Debt], custom_order: Iterable[str]) -> list[Debt]:
    """Follow ``custom_order`` (debt ids).

    Unknown ids are skipped and debts missing from ``custom_order`` are left
    out of the result, so callers must pass a complete ordering.
    """
    by_id: dict[str, Debt] = {}
    for debt in debts:
        by_id.setdefault(debt.id, debt)
    return [by_id[debt_id] for debt_id in custom_order if debt_id in by_id]


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


def step_month(debts: Sequence[Debt], state: SimulationState) -> tuple[SimulationState, MonthSnapshot]:
    """Advance the simulation by one month.

    Debts are visited in priority order. "First still owing" is decided as
    each debt is reached, so when a debt clears mid-month the next one picks
    up the pool, including the payment just freed, in that same month.
    """

    month = state.month + 1
    starting_pool = state.extra_pool
    pool = state.extra_pool
    balances = list(state.balances)
    interest_by_debt = list(state.interest_by_debt)
    cleared_in = list(state.cleared_in)
    payments = [0.0] * len(debts)
    paid_off: list[int] = []
    month_interest = 0.0
    month_paid = 0.0

    for index, debt in enumerate(debts):
        balance = balances[index]
        if balance <= 0:
            continue

        rate = debt.interest_rate / 100 / 12
        interest_charge = balance * rate

        payment = debt.monthly_payment
        first_owing = next(i for i, b in enumerate(balances) if b > 0)
        if first_owing == index:
            payment += pool

        # Never pay past the payoff amount.
        payment = min(payment, balance + interest_charge)

        balance -= payment - interest_charge
        month_interest += interest_charge
        month_paid += payment
        interest_by_debt[index] += interest_charge
        payments[index] = payment

        if balance <= 0:
            balance = 0.0
            pool += debt.monthly_payment
            cleared_in[index] = month
            paid_off.append(index)
        balances[index] = balance

    next_state = SimulationState(
        month=month,
        balances=tuple(balances),
        extra_pool=pool,
        total_interest=state.total_interest + month_interest,
        total_paid=state.total_paid + month_paid,
        interest_by_debt=tuple(interest_by_debt),
        cleared_in=tuple(cleared_in),
    )
    snapshot = MonthSnapshot(
        month=month,
        extra_pool=starting_pool,
        payments=tuple(payments),
        balances=next_state.balances,
        interest=month_interest,
        paid_off=tuple(paid_off),
    )
    return next_state, snapshot


def simulate_payoff(
    debts: Sequence[Debt],
    extra_payment: float = 0.0,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> SimulationResult:
    """Run the cascade simulation over debts already in priority order."""

    state = SimulationState.start(debts, extra_payment)
    schedule: list[MonthSnapshot] = []
    converged = True

    while state.owing:
        if state.month >= max_months:
            converged = False
            logger.warning(
                "Payoff simulation stopped at month cap",
                extra={"max_months": max_months, "remaining": sum(state.balances)},
            )
            break
        state, snapshot = step_month(debts, state)
        schedule.append(snapshot)

    return SimulationResult(
        months=state.month,
        total_interest=state.total_interest,
        total_paid=state.total_paid,
        converged=converged,
        final_state=state,
        schedule=tuple(schedule),
    )


def _project(
    debt: Debt, index: int, result: SimulationResult, projection: str
) -> tuple[float, float]:
    if projection == PROJECTION_SIMULATED:
        state = result.final_state
        cleared = state.cleared_in[index]
        if cleared is not None:
            months: float = cleared
        elif debt.current_balance <= 0:
            months = 0
        else:
            months = UNPAYABLE
        return months, state.interest_by_debt[index]

    return (
        calculate_payoff_months(debt.current_balance, debt.monthly_payment, debt.interest_rate),
        calculate_total_interest(debt.current_balance, debt.monthly_payment, debt.interest_rate),
    )


def build_strategy(
    ordered_debts: Sequence[Debt],
    extra_payment: float,
    strategy_type: StrategyType,
    *,
    projection: str = PROJECTION_ISOLATED,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> DebtStrategy:
    """Simulate ``ordered_debts`` and package the plan."""

    if projection not in PROJECTION_MODES:
        raise ValueError(f"Unknown projection mode: {projection!r}")

    result = simulate_payoff(ordered_debts, extra_payment, max_months=max_months)

    planned = []
    for index, debt in enumerate(ordered_debts):
        months, interest = _project(debt, index, result, projection)
        planned.append(
            DebtWithPlan.from_debt(
                debt, payoff_month=months, total_interest_paid=interest, order=index + 1
            )
        )

    logger.debug(
        "Computed %s payoff plan",
        strategy_type.value,
        extra={
            "debts": len(planned),
            "months": result.months,
            "total_interest": round(result.total_interest, 2),
            "converged": result.converged,
        },
    )
    return DebtStrategy(
        type=strategy_type,
        debts=tuple(planned),
        total_interest=result.total_interest,
        months_to_payoff=result.months,
        total_paid=result.total_paid,
        converged=result.converged,
        schedule=result.schedule,
    )


def calculate_debt_avalanche(
    debts: Iterable[Debt],
    extra_payment: float = 0.0,
    *,
    projection: str = PROJECTION_ISOLATED,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> DebtStrategy:
    """Plan that targets the highest interest rate first."""
    return build_strategy(
        order_avalanche(debts),
        extra_payment,
        StrategyType.AVALANCHE,
        projection=projection,
        max_months=max_months,
    )


def calculate_debt_snowball(
    debts: Iterable[Debt],
    extra_payment: float = 0.0,
    *,
    projection: str = PROJECTION_ISOLATED,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> DebtStrategy:
    """Plan that targets the smallest balance first."""
    return build_strategy(
        order_snowball(debts),
        extra_payment,
        StrategyType.SNOWBALL,
        projection=projection,
        max_months=max_months,
    )


def calculate_debt_custom(
    debts: Iterable[Debt],
    custom_order: Iterable[str],
    extra_payment: float = 0.0,
    *,
    projection: str = PROJECTION_ISOLATED,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> DebtStrategy:
    """Plan following a caller-supplied priority list of debt ids."""
    return build_strategy(
        order_custom(debts, custom_order),
        extra_payment,
        StrategyType.CUSTOM,
        projection=projection,
        max_months=max_months,
    )


def calculate_strategy(
    strategy: str | StrategyType,
    debts: Iterable[Debt],
    extra_payment: float = 0.0,
    *,
    custom_order: Iterable[str] | None = None,
    projection: str = PROJECTION_ISOLATED,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> DebtStrategy:
    """Dispatch to a strategy calculator by name."""

    try:
        strategy_type = StrategyType(strategy)
    except ValueError as exc:
        raise ValueError(f"Invalid debt payoff strategy: {strategy!r}") from exc

    if strategy_type is StrategyType.AVALANCHE:
        return calculate_debt_avalanche(
            debts, extra_payment, projection=projection, max_months=max_months
        )
    if strategy_type is StrategyType.SNOWBALL:
        return calculate_debt_snowball(
            debts, extra_payment, projection=projection, max_months=max_months
        )
    if custom_order is None:
        raise ValueError("Custom strategy requires an explicit debt order.")
    return calculate_debt_custom(
        debts, custom_order, extra_payment, projection=projection, max_months=max_months
    )


def compare_strategies(
    debts: Iterable[Debt],
    extra_payment: float = 0.0,
    *,
    projection: str = PROJECTION_ISOLATED,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> StrategyComparison:
    """Run avalanche and snowball side by side."""

    debt_list = list(debts)
    avalanche = calculate_debt_avalanche(
        debt_list, extra_payment, projection=projection, max_months=max_months
    )
    snowball = calculate_debt_snowball(
        debt_list, extra_payment, projection=projection, max_months=max_months
    )
    return StrategyComparison(
        avalanche=avalanche,
        snowball=snowball,
        savings=snowball.total_interest - avalanche.total_interest,
        months_saved=snowball.months_to_payoff - avalanche.months_to_payoff,
    )



__all__ = [
    "DebtStrategy",
    "MonthSnapshot",
    "PROJECTION_ISOLATED",
    "PROJECTION_SIMULATED",
    "SimulationResult",
    "SimulationState",
    "StrategyComparison",
    "StrategyType",
    "build_strategy",
    "calculate_debt_avalanche",
    "calculate_debt_custom",
    "calculate_debt_snowball",
    "calculate_strategy",
    "compare_strategies",
    "order_avalanche",
    "order_custom",
    "order_snowball",
    "simulate_payoff",
    "step_month",
]
