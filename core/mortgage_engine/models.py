"""
Data models for the Mortgage Financing Viability Engine.

Defines catalog offers, borrower inquiries, the three-state viability
outcome and the per-offer simulation result.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union


# Legacy codes used by the hosted catalog and the intake forms
_PROFILE_ALIASES = {
    "empleado_dependencia": "salaried_employee",
    "monotributista": "self_employed_simplified",
    "responsable_inscripto": "self_employed_registered",
    "empleado_publico": "public_sector_employee",
}

_FUND_USE_ALIASES = {
    "primera_vivienda": "first_home",
    "segunda_vivienda": "second_home",
    "construccion": "construction",
    "refaccion": "renovation",
    "otro": "other",
}


def _normalise_code(value: str) -> str:
    return value.lower().strip().replace("-", "_").replace(" ", "_")


class BorrowerProfile(Enum):
    """Employment profile declared by the borrower."""
    SALARIED_EMPLOYEE = "salaried_employee"
    SELF_EMPLOYED_SIMPLIFIED = "self_employed_simplified"
    SELF_EMPLOYED_REGISTERED = "self_employed_registered"
    PUBLIC_SECTOR_EMPLOYEE = "public_sector_employee"

    @classmethod
    def from_string(cls, value: str) -> Optional["BorrowerProfile"]:
        """Convert string to BorrowerProfile, accepting legacy codes."""
        if not value:
            return None
        normalised = _normalise_code(value)
        normalised = _PROFILE_ALIASES.get(normalised, normalised)
        for member in cls:
            if member.value == normalised:
                return member
        return None


class FundUse(Enum):
    """Intended use of the financed funds."""
    FIRST_HOME = "first_home"
    SECOND_HOME = "second_home"
    CONSTRUCTION = "construction"
    RENOVATION = "renovation"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: str) -> Optional["FundUse"]:
        """Convert string to FundUse, accepting legacy codes."""
        if not value:
            return None
        normalised = _normalise_code(value)
        normalised = _FUND_USE_ALIASES.get(normalised, normalised)
        for member in cls:
            if member.value == normalised:
                return member
        return None


class ViabilityState(Enum):
    """
    Feasibility tier of an offer for a given inquiry.

    VIABLE: affordable at the desired term
    EXTENDABLE: affordable at a longer term the lender allows
    NOT_VIABLE: not affordable at any allowed term
    """
    VIABLE = "VIABLE"
    EXTENDABLE = "EXTENDABLE"
    NOT_VIABLE = "NOT_VIABLE"


class FailureReason(Enum):
    """Caller-visible reasons a simulation produced no results."""
    EMPTY_CATALOG = "EMPTY_CATALOG"
    NO_MATCHING_OFFERS = "NO_MATCHING_OFFERS"


# =============================================================================
# Viability Outcome
# =============================================================================

@dataclass(frozen=True)
class Viable:
    """Installment at the desired term fits the income cap."""
    state = ViabilityState.VIABLE

    @property
    def recommended_term_months(self) -> None:
        return None


@dataclass(frozen=True)
class Extendable:
    """Installment fits the cap once the term is extended."""
    recommended_term_months: int
    state = ViabilityState.EXTENDABLE


@dataclass(frozen=True)
class NotViable:
    """
    No allowed term brings the installment under the cap.

    The recommended term is the lender's maximum, shown as the practical
    ceiling even though it does not resolve affordability.
    """
    recommended_term_months: int
    state = ViabilityState.NOT_VIABLE


Viability = Union[Viable, Extendable, NotViable]


# =============================================================================
# Catalog and Inquiry
# =============================================================================

def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _is_positive_amount(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class MortgageOffer:
    """
    One mortgage product from the lender catalog.

    Rates and the cost of credit are decimal fractions (0.21 for 21%).
    Ratio limits are percentages (80 for 80%).
    """
    lender_code: int
    lender_name: str
    product_name: str

    # Limits used by the feasibility math
    max_loan_to_value_pct: Optional[float] = None
    max_debt_to_income_pct: Optional[float] = None
    max_loan_amount: Optional[float] = None
    max_term_months: Optional[int] = None
    annual_effective_rate: Optional[float] = None

    # Display only
    total_cost_of_credit: Optional[float] = None

    # Free-text eligibility, empty means "applies to everyone"
    eligible_borrower_profiles_text: str = ""
    eligible_fund_uses_text: str = ""

    # Metadata
    denomination: str = ""
    offer_id: str = ""

    @property
    def is_complete(self) -> bool:
        """Whether every field the feasibility math needs is usable."""
        for value in (
            self.max_loan_to_value_pct,
            self.max_debt_to_income_pct,
            self.max_loan_amount,
            self.max_term_months,
        ):
            if _is_missing(value) or value <= 0:
                return False
        if _is_missing(self.annual_effective_rate) or self.annual_effective_rate < 0:
            return False
        return True

    @property
    def is_inflation_indexed(self) -> bool:
        """UVA products have their installment adjusted by inflation."""
        return "uva" in (self.denomination or "").lower()


@dataclass(frozen=True)
class MortgageInquiry:
    """A borrower's financial inquiry, built fresh per simulation."""
    property_value: float
    monthly_income: float
    desired_term_months: int
    borrower_profile: BorrowerProfile
    fund_use: FundUse

    def __post_init__(self):
        """Validate inquiry after initialization."""
        if not _is_positive_amount(self.property_value):
            raise ValueError("property_value must be a positive finite amount")
        if not _is_positive_amount(self.monthly_income):
            raise ValueError("monthly_income must be a positive finite amount")
        term = self.desired_term_months
        if not _is_positive_amount(term) or int(term) != term:
            raise ValueError("desired_term_months must be a positive integer")


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class SimulationResult:
    """
    Feasibility of one catalog offer for one inquiry.

    Immutable snapshot, produced and discarded within a single simulation.
    """
    lender_name: str
    product_name: str
    lender_code: int

    financed_amount: float
    required_down_payment: float

    installment_at_desired_term: float
    max_allowed_installment: float

    desired_term_months: int
    max_term_months: int
    viability: Viability

    # Percentages for display
    monthly_rate_pct: float
    annual_rate_pct: float
    total_cost_of_credit_pct: float

    # Income the cap was derived from
    monthly_income: float

    # Back-reference for display, not compared
    offer: Optional[MortgageOffer] = field(default=None, compare=False, repr=False)

    @property
    def viability_state(self) -> ViabilityState:
        return self.viability.state

    @property
    def recommended_term_months(self) -> Optional[int]:
        return self.viability.recommended_term_months

    @property
    def effective_term_months(self) -> int:
        """Term the installment plan would actually run for."""
        if self.recommended_term_months is None:
            return self.desired_term_months
        return self.recommended_term_months

    @property
    def income_share_pct(self) -> float:
        """Installment at the desired term as a percentage of monthly income."""
        return self.installment_at_desired_term / self.monthly_income * 100

    @property
    def is_inflation_indexed(self) -> bool:
        return self.offer is not None and self.offer.is_inflation_indexed

    def amortization_schedule(self) -> list:
        """French amortization table over the effective term."""
        from .amortization import amortization_schedule

        return amortization_schedule(
            self.financed_amount,
            self.monthly_rate_pct / 100,
            self.effective_term_months,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "lender_name": self.lender_name,
            "product_name": self.product_name,
            "lender_code": self.lender_code,
            "financed_amount": self.financed_amount,
            "required_down_payment": self.required_down_payment,
            "installment_at_desired_term": self.installment_at_desired_term,
            "max_allowed_installment": self.max_allowed_installment,
            "desired_term_months": self.desired_term_months,
            "recommended_term_months": self.recommended_term_months,
            "max_term_months": self.max_term_months,
            "viability_state": self.viability_state.value,
            "monthly_rate_pct": self.monthly_rate_pct,
            "annual_rate_pct": self.annual_rate_pct,
            "total_cost_of_credit_pct": self.total_cost_of_credit_pct,
            "income_share_pct": self.income_share_pct,
            "inflation_indexed": self.is_inflation_indexed,
        }


@dataclass(frozen=True)
class SimulationSuccess:
    """Returned when the catalog produced a ranked result list."""
    results: List[SimulationResult]

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {"ok": True, "results": [r.to_dict() for r in self.results]}


@dataclass(frozen=True)
class SimulationFailure:
    """Returned when there was nothing to simulate."""
    reason: FailureReason
    message: str = ""

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {"ok": False, "reason": self.reason.value, "message": self.message}


# Type alias for simulate() return value
SimulationOutcome = Union[SimulationSuccess, SimulationFailure]


@dataclass(frozen=True)
class AmortizationRow:
    """One month of a French amortization table."""
    month: int
    installment: float
    principal_paid: float
    interest: float
    balance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "installment": self.installment,
            "principal_paid": self.principal_paid,
            "interest": self.interest,
            "balance": self.balance,
        }
