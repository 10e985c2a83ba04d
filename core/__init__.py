"""
Financing Viability Engine - Core Business Logic

This module provides the canonical mortgage simulation pipeline:
1. Ingestion (catalog rows normalised to MortgageOffer)
2. Eligibility Filter (borrower profile and fund use)
3. Amortization (French installment and its inverse)
4. Viability Classification (Viable / Extendable / Not viable)
5. Lender Aggregation (best offer per lender)
6. Ranking (deterministic)
"""

# Mortgage Financing Viability Engine
from .mortgage_engine import (
    BorrowerProfile,
    FundUse,
    ViabilityState,
    FailureReason,
    Viable,
    Extendable,
    NotViable,
    MortgageOffer,
    MortgageInquiry,
    SimulationResult,
    SimulationSuccess,
    SimulationFailure,
    SimulationOutcome,
    AmortizationRow,
    MortgageEngineError,
    IncompleteOfferError,
    MortgageSimulationEngine,
    simulate,
)

# Catalog ingestion
from .catalog import (
    CatalogError,
    CatalogFormatError,
    CatalogUnavailableError,
    CatalogSource,
    JsonFileCatalogSource,
    RestCatalogSource,
    get_catalog_source,
    normalise_offer,
    normalise_catalog,
)

__all__ = [
    # Mortgage engine
    "BorrowerProfile",
    "FundUse",
    "ViabilityState",
    "FailureReason",
    "Viable",
    "Extendable",
    "NotViable",
    "MortgageOffer",
    "MortgageInquiry",
    "SimulationResult",
    "SimulationSuccess",
    "SimulationFailure",
    "SimulationOutcome",
    "AmortizationRow",
    "MortgageEngineError",
    "IncompleteOfferError",
    "MortgageSimulationEngine",
    "simulate",
    # Catalog ingestion
    "CatalogError",
    "CatalogFormatError",
    "CatalogUnavailableError",
    "CatalogSource",
    "JsonFileCatalogSource",
    "RestCatalogSource",
    "get_catalog_source",
    "normalise_offer",
    "normalise_catalog",
]
