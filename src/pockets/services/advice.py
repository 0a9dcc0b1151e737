"""Rule-based restructuring signals over a list of debts.

Nothing here simulates a timeline except :func:`consolidation_savings`,
which compares two avalanche plans. Thresholds come from
:class:`~pockets.config.AdvisorConfig` and default to the rule-of-thumb
values the app has always shipped with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_ADVISOR, MAX_SIMULATION_MONTHS, AdvisorConfig
from ..logging_config import get_logger
from ..models.debt import Debt, DebtType
from .debts import calculate_debt_avalanche

logger = get_logger(__name__)

# Above these annual rates a debt of the given type is worth refinancing.
REFINANCE_THRESHOLDS: dict[DebtType, float] = {
    DebtType.CREDIT_CARD: 15.0,
    DebtType.PERSONAL_LOAN: 12.0,
    DebtType.CAR_LOAN: 8.0,
}

# Typical annual rates per debt type, for forms that need a starting value.
TYPICAL_INTEREST_RATES: dict[DebtType, float] = {
    DebtType.CREDIT_CARD: 18.0,
    DebtType.PERSONAL_LOAN: 10.0,
    DebtType.MORTGAGE: 3.5,
    DebtType.CAR_LOAN: 6.0,
    DebtType.STUDENT_LOAN: 5.0,
    DebtType.OTHER: 10.0,
}

DTI_SAFE_LIMIT = 28.0
DTI_MODERATE_LIMIT = 36.0

CONSOLIDATED_DEBT_ID = "consolidated"


class DebtToIncomeStatus(str, Enum):
    SAFE = "safe"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class AdviceResource:
    """A place the user can turn to for help."""

    name: str
    description: str
    url: Optional[str] = None
    kind: str = "general"


DEBT_RESOURCES: tuple[AdviceResource, ...] = (
    AdviceResource(
        name="Latvian Financial and Capital Market Commission",
        description="Regulatory authority for financial services in Latvia",
        url="https://www.fktk.lv/en/",
        kind="regulatory",
    ),
    AdviceResource(
        name="Consumer Rights Protection Centre (PTAC)",
        description="Consumer protection and debt counseling services",
        url="https://www.ptac.gov.lv/en",
        kind="consumer_protection",
    ),
    AdviceResource(
        name="Credit Information Bureau",
        description="Check your credit history and score",
        url="https://www.kib.lv/",
        kind="credit_bureau",
    ),
    AdviceResource(
        name="Latvian Commercial Banks Association",
        description="Information about banking services and loans",
        url="https://www.bankasoc.lv/",
        kind="industry",
    ),
)

# Attached to the advice whenever consolidation or refinancing is suggested.
RESTRUCTURING_RESOURCE_KINDS = ("regulatory", "consumer_protection")


@dataclass(frozen=True, slots=True)
class RestructuringAdvice:
    consolidation_suggestion: bool
    refinancing_suggestion: bool
    potential_savings: float
    reasons: tuple[str, ...] = ()
    resources: tuple[AdviceResource, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class DebtSummary:
    """Portfolio-level figures shown above the debt list."""

    debt_count: int
    total_balance: float
    total_monthly_payments: float
    weighted_average_rate: float
    debt_to_income_ratio: float
    debt_to_income_status: DebtToIncomeStatus


def total_monthly_debt_payments(debts: Iterable[Debt]) -> float:
    return sum(debt.monthly_payment for debt in debts)


def total_balance(debts: Iterable[Debt]) -> float:
    return sum(debt.current_balance for debt in debts)


def weighted_average_rate(debts: Iterable[Debt]) -> float:
    """Balance-weighted mean interest rate; 0 when nothing is owed."""

    debt_list = list(debts)
    balance = total_balance(debt_list)
    if balance == 0:
        return 0.0
    weighted = sum(debt.current_balance * debt.interest_rate for debt in debt_list)
    return weighted / balance


def debt_to_income_ratio(monthly_debt_payments: float, monthly_income: float) -> float:
    """Percentage of monthly income committed to debt payments."""

    if monthly_income == 0:
        return 0.0
    return monthly_debt_payments / monthly_income * 100


def debt_to_income_status(
    ratio: float, *, config: AdvisorConfig | None = None
) -> DebtToIncomeStatus:
    limit = (config or DEFAULT_ADVISOR).dti_limit
    if ratio <= DTI_SAFE_LIMIT:
        return DebtToIncomeStatus.SAFE
    if ratio <= DTI_MODERATE_LIMIT:
        return DebtToIncomeStatus.MODERATE
    if ratio <= limit:
        return DebtToIncomeStatus.HIGH
    return DebtToIncomeStatus.CRITICAL


def debt_progress(debt: Debt) -> float:
    """Share of the original principal already repaid, in percent."""

    if debt.total_amount <= 0:
        return 0.0
    return (debt.total_amount - debt.current_balance) / debt.total_amount * 100


def should_consolidate(debts: Sequence[Debt], *, config: AdvisorConfig | None = None) -> bool:
    """Several high-interest debts with a modest combined balance."""

    config = config or DEFAULT_ADVISOR
    if len(debts) < 2:
        return False

    high_interest = [d for d in debts if d.interest_rate > config.high_interest_threshold]
    if len(high_interest) < 2:
        return False

    return total_balance(debts) < config.consolidation_balance_limit


def should_refinance(debt: Debt) -> bool:
    threshold = REFINANCE_THRESHOLDS.get(DebtType(debt.type))
    if threshold is None:
        return False
    return debt.interest_rate > threshold


def consolidated_debt(debts: Sequence[Debt], consolidated_rate: float) -> Debt:
    """Model every debt rolled into one personal loan at ``consolidated_rate``."""

    balance = total_balance(debts)
    payment = total_monthly_debt_payments(debts)
    return Debt(
        id=CONSOLIDATED_DEBT_ID,
        name="Consolidated Loan",
        type=DebtType.PERSONAL_LOAN,
        total_amount=balance,
        current_balance=balance,
        interest_rate=consolidated_rate,
        minimum_payment=payment * 0.5,
        monthly_payment=payment,
    )


def consolidation_savings(
    debts: Sequence[Debt],
    consolidated_rate: float,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> float:
    """Interest avoided by consolidating, against an avalanche plan on the real debts.

    Both plans stop at ``max_months``, so unpayable portfolios compare the
    interest accrued up to the cap.
    """

    current = calculate_debt_avalanche(debts, 0, max_months=max_months)
    consolidated = calculate_debt_avalanche(
        [consolidated_debt(debts, consolidated_rate)], 0, max_months=max_months
    )
    return current.total_interest - consolidated.total_interest


def restructuring_resources() -> tuple[AdviceResource, ...]:
    return tuple(r for r in DEBT_RESOURCES if r.kind in RESTRUCTURING_RESOURCE_KINDS)


def restructuring_advice(
    debts: Sequence[Debt],
    monthly_income: float,
    *,
    config: AdvisorConfig | None = None,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> RestructuringAdvice:
    """Combine the consolidation, refinancing and debt-to-income signals."""

    config = config or DEFAULT_ADVISOR
    debts = list(debts)
    reasons: list[str] = []

    consolidate = should_consolidate(debts, config=config)
    refinance_candidates = [d for d in debts if should_refinance(d)]
    refinance = bool(refinance_candidates)

    potential_savings = 0.0
    if consolidate:
        potential_savings = consolidation_savings(
            debts, config.consolidation_rate, max_months=max_months
        )
        reasons.append(f"You have {len(debts)} debts with varying interest rates.")
        reasons.append(
            "Consolidating into one loan could simplify payments and potentially save money."
        )

    if refinance:
        reasons.append(
            f"You have {len(refinance_candidates)} high-interest debt(s) that could be refinanced."
        )

    dti = debt_to_income_ratio(total_monthly_debt_payments(debts), monthly_income)
    if dti > config.dti_limit:
        reasons.append(
            f"Your debt-to-income ratio ({dti:.1f}%) is above the recommended "
            f"{config.dti_limit:g}% limit."
        )
        reasons.append("Consider seeking professional debt counseling.")

    resources = restructuring_resources() if consolidate or refinance else ()

    logger.debug(
        "Restructuring advice computed",
        extra={
            "consolidate": consolidate,
            "refinance": refinance,
            "dti": round(dti, 1),
            "reasons": len(reasons),
        },
    )
    return RestructuringAdvice(
        consolidation_suggestion=consolidate,
        refinancing_suggestion=refinance,
        potential_savings=potential_savings,
        reasons=tuple(reasons),
        resources=resources,
    )


def summarize_debts(
    debts: Sequence[Debt], monthly_income: float, *, config: AdvisorConfig | None = None
) -> DebtSummary:
    payments = total_monthly_debt_payments(debts)
    ratio = debt_to_income_ratio(payments, monthly_income)
    return DebtSummary(
        debt_count=len(debts),
        total_balance=total_balance(debts),
        total_monthly_payments=payments,
        weighted_average_rate=weighted_average_rate(debts),
        debt_to_income_ratio=ratio,
        debt_to_income_status=debt_to_income_status(ratio, config=config),
    )


__all__ = [
    "AdviceResource",
    "DEBT_RESOURCES",
    "DebtSummary",
    "DebtToIncomeStatus",
    "RestructuringAdvice",
    "TYPICAL_INTEREST_RATES",
    "consolidation_savings",
    "debt_progress",
    "debt_to_income_ratio",
    "debt_to_income_status",
    "restructuring_advice",
    "should_consolidate",
    "should_refinance",
    "summarize_debts",
    "total_monthly_debt_payments",
    "weighted_average_rate",
]
