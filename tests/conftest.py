"""
Shared fixtures for the financing engine tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.mortgage_engine import (
    BorrowerProfile,
    FundUse,
    MortgageInquiry,
    MortgageOffer,
)


@pytest.fixture
def create_offer():
    """Factory fixture for creating catalog offers."""
    def _create(
        lender_code: int = 1,
        lender_name: str = "Test Bank",
        product_name: str = "Test Mortgage",
        max_loan_to_value_pct=80.0,
        max_debt_to_income_pct=25.0,
        max_loan_amount=100000.0,
        max_term_months=240,
        annual_effective_rate=0.20,
        total_cost_of_credit=None,
        eligible_borrower_profiles_text: str = "",
        eligible_fund_uses_text: str = "",
        denomination: str = "",
        offer_id: str = None,
    ) -> MortgageOffer:
        return MortgageOffer(
            lender_code=lender_code,
            lender_name=lender_name,
            product_name=product_name,
            max_loan_to_value_pct=max_loan_to_value_pct,
            max_debt_to_income_pct=max_debt_to_income_pct,
            max_loan_amount=max_loan_amount,
            max_term_months=max_term_months,
            annual_effective_rate=annual_effective_rate,
            total_cost_of_credit=total_cost_of_credit,
            eligible_borrower_profiles_text=eligible_borrower_profiles_text,
            eligible_fund_uses_text=eligible_fund_uses_text,
            denomination=denomination,
            offer_id=offer_id or f"OFFER-{lender_code}-{product_name}",
        )
    return _create


@pytest.fixture
def create_inquiry():
    """Factory fixture for creating borrower inquiries."""
    def _create(
        property_value: float = 100000.0,
        monthly_income: float = 2000.0,
        desired_term_months: int = 120,
        borrower_profile: BorrowerProfile = BorrowerProfile.SALARIED_EMPLOYEE,
        fund_use: FundUse = FundUse.FIRST_HOME,
    ) -> MortgageInquiry:
        return MortgageInquiry(
            property_value=property_value,
            monthly_income=monthly_income,
            desired_term_months=desired_term_months,
            borrower_profile=borrower_profile,
            fund_use=fund_use,
        )
    return _create


@pytest.fixture
def standard_inquiry(create_inquiry):
    """Inquiry used by the two-lender end-to-end scenario."""
    return create_inquiry()
