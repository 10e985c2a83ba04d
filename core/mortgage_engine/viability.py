"""
Viability Classifier for the Mortgage Financing Viability Engine

Applies the amortization calculator to one offer and assigns a tier:
- VIABLE: installment at the desired term fits the income cap
- EXTENDABLE: a longer term within the lender's maximum fits the cap
- NOT_VIABLE: no allowed term fits the cap
"""

import logging

from .amortization import installment, minimum_term_for_installment_cap, monthly_rate
from .errors import IncompleteOfferError
from .models import (
    Extendable,
    MortgageInquiry,
    MortgageOffer,
    NotViable,
    SimulationResult,
    Viability,
    Viable,
)


logger = logging.getLogger(__name__)


class ViabilityClassifier:
    """
    Computes the feasibility of a single offer for an inquiry.

    Deterministic and side-effect free; the same inputs always produce
    an equal SimulationResult.
    """

    def classify(self, offer: MortgageOffer, inquiry: MortgageInquiry) -> SimulationResult:
        """
        Classify one offer.

        Args:
            offer: A complete catalog offer
            inquiry: The borrower's inquiry

        Returns:
            SimulationResult with amounts, installments and viability

        Raises:
            IncompleteOfferError: If the offer lacks required numeric data
        """
        if not offer.is_complete:
            raise IncompleteOfferError(offer.offer_id, offer.lender_code)

        financed_amount = self._financed_amount(offer, inquiry)
        required_down_payment = self._required_down_payment(
            inquiry.property_value, financed_amount, offer
        )

        rate = monthly_rate(offer.annual_effective_rate)
        max_allowed_installment = inquiry.monthly_income * offer.max_debt_to_income_pct / 100
        installment_at_desired_term = installment(
            financed_amount, rate, inquiry.desired_term_months
        )

        viability = self._determine_viability(
            financed_amount=financed_amount,
            rate=rate,
            installment_at_desired_term=installment_at_desired_term,
            max_allowed_installment=max_allowed_installment,
            max_term_months=offer.max_term_months,
        )

        return SimulationResult(
            lender_name=offer.lender_name,
            product_name=offer.product_name,
            lender_code=offer.lender_code,
            financed_amount=financed_amount,
            required_down_payment=required_down_payment,
            installment_at_desired_term=installment_at_desired_term,
            max_allowed_installment=max_allowed_installment,
            desired_term_months=inquiry.desired_term_months,
            max_term_months=offer.max_term_months,
            viability=viability,
            monthly_rate_pct=rate * 100,
            annual_rate_pct=offer.annual_effective_rate * 100,
            total_cost_of_credit_pct=(offer.total_cost_of_credit or 0) * 100,
            monthly_income=inquiry.monthly_income,
            offer=offer,
        )

    def _financed_amount(self, offer: MortgageOffer, inquiry: MortgageInquiry) -> float:
        """Lesser of the LTV limit on the property value and the lender's cap."""
        by_appraisal = inquiry.property_value * offer.max_loan_to_value_pct / 100
        return min(by_appraisal, offer.max_loan_amount)

    def _required_down_payment(
        self,
        property_value: float,
        financed_amount: float,
        offer: MortgageOffer,
    ) -> float:
        """Share of the property value the lender will not finance."""
        down_payment = property_value - financed_amount
        if down_payment < 0:
            # Only reachable with an LTV limit above 100%
            logger.warning(
                "Negative down payment for offer %s from lender %s clamped to zero",
                offer.offer_id or offer.product_name,
                offer.lender_code,
            )
            return 0.0
        return down_payment

    def _determine_viability(
        self,
        financed_amount: float,
        rate: float,
        installment_at_desired_term: float,
        max_allowed_installment: float,
        max_term_months: int,
    ) -> Viability:
        """
        Assign the viability tier.

        The boundary is inclusive: an installment equal to the cap is viable.
        """
        if installment_at_desired_term <= max_allowed_installment:
            return Viable()

        candidate_term = minimum_term_for_installment_cap(
            financed_amount, rate, max_allowed_installment
        )

        if candidate_term is not None and candidate_term <= max_term_months:
            return Extendable(recommended_term_months=candidate_term)

        return NotViable(recommended_term_months=max_term_months)


def classify_offer(offer: MortgageOffer, inquiry: MortgageInquiry) -> SimulationResult:
    """Module-level shortcut for ViabilityClassifier().classify()."""
    return ViabilityClassifier().classify(offer, inquiry)
