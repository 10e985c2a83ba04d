"""
Mortgage Financing Viability Engine

Given a catalog of mortgage offers and a borrower's inquiry, computes
whether each eligible offer is affordable at the desired term, whether
a longer term would make it affordable, and ranks the best offer per
lender.
"""

from .models import (
    BorrowerProfile,
    FundUse,
    ViabilityState,
    FailureReason,
    Viable,
    Extendable,
    NotViable,
    Viability,
    MortgageOffer,
    MortgageInquiry,
    SimulationResult,
    SimulationSuccess,
    SimulationFailure,
    SimulationOutcome,
    AmortizationRow,
)
from .errors import MortgageEngineError, IncompleteOfferError
from .amortization import (
    monthly_rate,
    installment,
    minimum_term_for_installment_cap,
    amortization_schedule,
)
from .filters import OfferEligibilityFilter, filter_offers
from .viability import ViabilityClassifier, classify_offer
from .ranking import select_best_per_lender, rank
from .engine import MortgageSimulationEngine, simulate
from .indexation import (
    IndexationRiskLevel,
    IndexedInstallment,
    IndexationRiskAssessment,
    project_indexed_installments,
    assess_indexation_risk,
    classify_income_share,
    has_inflation_indexed_offers,
)

__all__ = [
    # Models
    "BorrowerProfile",
    "FundUse",
    "ViabilityState",
    "FailureReason",
    "Viable",
    "Extendable",
    "NotViable",
    "Viability",
    "MortgageOffer",
    "MortgageInquiry",
    "SimulationResult",
    "SimulationSuccess",
    "SimulationFailure",
    "SimulationOutcome",
    "AmortizationRow",
    # Errors
    "MortgageEngineError",
    "IncompleteOfferError",
    # Calculator
    "monthly_rate",
    "installment",
    "minimum_term_for_installment_cap",
    "amortization_schedule",
    # Pipeline
    "OfferEligibilityFilter",
    "filter_offers",
    "ViabilityClassifier",
    "classify_offer",
    "select_best_per_lender",
    "rank",
    "MortgageSimulationEngine",
    "simulate",
    # Indexed loans
    "IndexationRiskLevel",
    "IndexedInstallment",
    "IndexationRiskAssessment",
    "project_indexed_installments",
    "assess_indexation_risk",
    "classify_income_share",
    "has_inflation_indexed_offers",
]

__version__ = "1.0"
