"""
FastAPI application for the financing engine.

Exposes the mortgage simulation, the amortization table and the
inflation-indexed projection as JSON endpoints.

Production deployment configuration via environment variables.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from core import (
    BorrowerProfile,
    FundUse,
    MortgageInquiry,
    MortgageSimulationEngine,
    CatalogError,
    CatalogSource,
    get_catalog_source,
)
from core.mortgage_engine import (
    amortization_schedule,
    assess_indexation_risk,
    has_inflation_indexed_offers,
    monthly_rate,
    project_indexed_installments,
)
from utils.config import Config


logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

# CORS configuration - explicit origins only in production
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:8000", "http://127.0.0.1:8000"]

# Debug mode - never enabled in production
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true" and not IS_PRODUCTION

API_VERSION = "1.0.0"

# Longest term accepted from clients (50 years)
MAX_TERM_MONTHS = 600


# =============================================================================
# API Request Models
# =============================================================================

class SimulationRequest(BaseModel):
    """Borrower inquiry for a mortgage simulation."""
    property_value: float = Field(gt=0)
    monthly_income: float = Field(gt=0)
    desired_term_months: int = Field(gt=0, le=MAX_TERM_MONTHS)
    borrower_profile: str
    fund_use: str


class AmortizationRequest(BaseModel):
    """Parameters for a French amortization table."""
    principal: float = Field(gt=0)
    annual_effective_rate: float = Field(ge=0)
    term_months: int = Field(gt=0, le=MAX_TERM_MONTHS)


class IndexationRequest(BaseModel):
    """Parameters for an inflation-indexed installment projection."""
    initial_installment: float = Field(gt=0)
    monthly_income: float = Field(gt=0)
    term_months: int = Field(gt=0, le=MAX_TERM_MONTHS)
    annual_inflation_pct: float
    expected_wage_growth_pct: float = 0.0
    include_projection: bool = False


def build_inquiry(request_data: SimulationRequest) -> MortgageInquiry:
    """
    Convert the request body to a MortgageInquiry.

    Raises:
        HTTPException: 422 for unknown profile or fund use codes
    """
    profile = BorrowerProfile.from_string(request_data.borrower_profile)
    if profile is None:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown borrower profile: {request_data.borrower_profile}",
        )

    fund_use = FundUse.from_string(request_data.fund_use)
    if fund_use is None:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown fund use: {request_data.fund_use}",
        )

    return MortgageInquiry(
        property_value=request_data.property_value,
        monthly_income=request_data.monthly_income,
        desired_term_months=request_data.desired_term_months,
        borrower_profile=profile,
        fund_use=fund_use,
    )


def create_app(catalog_source: Optional[CatalogSource] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        catalog_source: Catalog store to read from (default: from Config)
    """
    app = FastAPI(
        title="Financing Viability Engine",
        description="Mortgage offer viability simulation and ranking",
        version=API_VERSION,
        # Production settings: disable docs/redoc for private deployment
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=DEBUG_MODE,
    )

    # Healthcheck endpoints first: synchronous, no IO
    @app.get("/", include_in_schema=False)
    def root():
        """Root healthcheck. No dependencies, no IO."""
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        """Secondary health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    source = catalog_source or get_catalog_source(Config.load())
    engine = MortgageSimulationEngine()

    def load_catalog() -> list:
        """Fetch the catalog once for this request."""
        try:
            return source.fetch_offers()
        except CatalogError as e:
            logger.error("Catalog unavailable: %s", e)
            raise HTTPException(
                status_code=503,
                detail="Mortgage catalog is temporarily unavailable. Please try again later.",
            ) from e

    @app.post("/api/mortgage/simulate")
    def simulate_mortgage(request_data: SimulationRequest):
        """
        Simulate every eligible mortgage offer for the inquiry.

        Returns:
            - ok: true with the ranked best offer per lender
            - ok: false with reason EMPTY_CATALOG or NO_MATCHING_OFFERS
        """
        inquiry = build_inquiry(request_data)
        catalog = load_catalog()
        outcome = engine.simulate(inquiry, catalog)
        return JSONResponse(outcome.to_dict())

    @app.post("/api/mortgage/amortization")
    def amortization_table(request_data: AmortizationRequest):
        """French amortization table for a principal, annual rate and term."""
        rate = monthly_rate(request_data.annual_effective_rate)
        rows = amortization_schedule(
            request_data.principal,
            rate,
            request_data.term_months,
        )
        return {
            "monthly_rate_pct": rate * 100,
            "installment": rows[0].installment if rows else 0.0,
            "total_interest": sum(row.interest for row in rows),
            "rows": [row.to_dict() for row in rows],
        }

    @app.post("/api/mortgage/indexation")
    def indexation_projection(request_data: IndexationRequest):
        """Projected burden of an inflation-indexed (UVA) installment."""
        assessment = assess_indexation_risk(
            initial_installment=request_data.initial_installment,
            monthly_income=request_data.monthly_income,
            term_months=request_data.term_months,
            annual_inflation_pct=request_data.annual_inflation_pct,
            expected_wage_growth_pct=request_data.expected_wage_growth_pct,
        )
        body = {"assessment": assessment.to_dict()}

        if request_data.include_projection:
            projection = project_indexed_installments(
                request_data.initial_installment,
                request_data.annual_inflation_pct,
                request_data.term_months,
                request_data.monthly_income,
            )
            body["projection"] = [
                {
                    "month": p.month,
                    "installment": p.installment,
                    "income_share_pct": p.income_share_pct,
                }
                for p in projection
            ]
        return body

    @app.get("/api/mortgage/catalog/indexed")
    def catalog_has_indexed_products():
        """Whether the catalog offers inflation-indexed (UVA) products."""
        catalog = load_catalog()
        return {"has_inflation_indexed_products": has_inflation_indexed_offers(catalog)}

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": API_VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
        }

    return app


# Create app instance for uvicorn
app = create_app()
