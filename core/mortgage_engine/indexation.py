"""
Inflation-indexed (UVA) installment projection.

Indexed loans start at the French installment and are then adjusted by
inflation each month, so affordability at origination says little about
affordability a few years in. These helpers project that drift and grade
the resulting income share.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from .models import MortgageOffer


# Longest horizon used for the risk indicator (months)
RISK_HORIZON_MONTHS = 60

# Projected installment as % of projected income
RISK_THRESHOLD_CRITICAL = 50.0
RISK_THRESHOLD_HIGH = 40.0
RISK_THRESHOLD_MEDIUM = 30.0


class IndexationRiskLevel(Enum):
    """
    Affordability risk of an indexed loan.

    Critical: > 50% of income
    High: > 40%
    Medium: > 30%
    Low: otherwise
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class IndexedInstallment:
    """Projected installment for one month."""
    month: int
    installment: float
    income_share_pct: float


@dataclass(frozen=True)
class IndexationRiskAssessment:
    """Current versus projected burden of an indexed installment."""
    horizon_months: int
    initial_installment: float
    projected_installment: float
    projected_income: float
    initial_income_share_pct: float
    projected_income_share_pct: float
    risk_level: IndexationRiskLevel

    def to_dict(self) -> dict:
        return {
            "horizon_months": self.horizon_months,
            "initial_installment": self.initial_installment,
            "projected_installment": self.projected_installment,
            "projected_income": self.projected_income,
            "initial_income_share_pct": self.initial_income_share_pct,
            "projected_income_share_pct": self.projected_income_share_pct,
            "risk_level": self.risk_level.value,
        }


def _monthly_from_annual_pct(annual_pct: float) -> float:
    return annual_pct / 100 / 12


def project_indexed_installments(
    initial_installment: float,
    annual_inflation_pct: float,
    term_months: int,
    monthly_income: float,
) -> List[IndexedInstallment]:
    """
    Project the installment of an indexed loan month by month.

    Month 1 pays the initial installment; each later month compounds the
    monthly inflation once more.

    Raises:
        ValueError: If monthly_income is not positive
    """
    if monthly_income <= 0:
        raise ValueError("monthly_income must be positive")

    inflation = _monthly_from_annual_pct(annual_inflation_pct)
    projection = []

    for month in range(1, term_months + 1):
        amount = initial_installment * (1 + inflation) ** (month - 1)
        projection.append(IndexedInstallment(
            month=month,
            installment=amount,
            income_share_pct=amount / monthly_income * 100,
        ))

    return projection


def classify_income_share(share_pct: float) -> IndexationRiskLevel:
    """Grade a projected income share."""
    if share_pct > RISK_THRESHOLD_CRITICAL:
        return IndexationRiskLevel.CRITICAL
    if share_pct > RISK_THRESHOLD_HIGH:
        return IndexationRiskLevel.HIGH
    if share_pct > RISK_THRESHOLD_MEDIUM:
        return IndexationRiskLevel.MEDIUM
    return IndexationRiskLevel.LOW


def assess_indexation_risk(
    initial_installment: float,
    monthly_income: float,
    term_months: int,
    annual_inflation_pct: float,
    expected_wage_growth_pct: float = 0.0,
) -> IndexationRiskAssessment:
    """
    Compare today's income share with the share at the risk horizon.

    Args:
        initial_installment: Installment at origination
        monthly_income: Current monthly income
        term_months: Loan term; the horizon is capped at 60 months
        annual_inflation_pct: Expected yearly inflation (e.g. 30 for 30%)
        expected_wage_growth_pct: Expected yearly wage growth

    Raises:
        ValueError: If monthly_income is not positive
    """
    if monthly_income <= 0:
        raise ValueError("monthly_income must be positive")

    horizon = min(term_months, RISK_HORIZON_MONTHS)
    projected_installment = initial_installment * (
        1 + _monthly_from_annual_pct(annual_inflation_pct)
    ) ** horizon
    projected_income = monthly_income * (
        1 + _monthly_from_annual_pct(expected_wage_growth_pct)
    ) ** horizon

    projected_share = projected_installment / projected_income * 100

    return IndexationRiskAssessment(
        horizon_months=horizon,
        initial_installment=initial_installment,
        projected_installment=projected_installment,
        projected_income=projected_income,
        initial_income_share_pct=initial_installment / monthly_income * 100,
        projected_income_share_pct=projected_share,
        risk_level=classify_income_share(projected_share),
    )


def has_inflation_indexed_offers(catalog: List[MortgageOffer]) -> bool:
    """Whether any catalog offer is UVA-denominated."""
    return any(offer.is_inflation_indexed for offer in catalog)
