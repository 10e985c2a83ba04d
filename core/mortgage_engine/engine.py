"""
Simulation Engine for the Mortgage Financing Viability Engine

Pipeline order:
1. FILTER - Keep offers eligible for the profile and fund use
2. COMPLETENESS - Skip offers missing rate, ratio, amount or term data
3. CLASSIFY - Compute installments and viability per offer
4. AGGREGATE - Keep the best offer per lender
5. RANK - Order by viability tier, then installment
"""

import logging
from typing import List

from .filters import OfferEligibilityFilter
from .models import (
    FailureReason,
    MortgageInquiry,
    MortgageOffer,
    SimulationFailure,
    SimulationOutcome,
    SimulationResult,
    SimulationSuccess,
)
from .ranking import rank, select_best_per_lender
from .viability import ViabilityClassifier


logger = logging.getLogger(__name__)


# Caller-facing messages
EMPTY_CATALOG_MESSAGE = "No mortgage products are available."
NO_MATCHING_OFFERS_MESSAGE = "No mortgage products match your profile and intended use of funds."


class MortgageSimulationEngine:
    """
    Runs a complete mortgage simulation over an in-memory catalog.

    Holds no state between calls; fetching the catalog is the caller's job.
    """

    def __init__(self):
        self._filter = OfferEligibilityFilter()
        self._classifier = ViabilityClassifier()

    def simulate(
        self,
        inquiry: MortgageInquiry,
        catalog: List[MortgageOffer],
    ) -> SimulationOutcome:
        """
        Simulate every eligible offer and rank the best per lender.

        Args:
            inquiry: The borrower's inquiry
            catalog: All offers from the catalog store

        Returns:
            SimulationSuccess with ranked results, or SimulationFailure
            with EMPTY_CATALOG / NO_MATCHING_OFFERS
        """
        if not catalog:
            logger.info("Simulation aborted: empty catalog")
            return SimulationFailure(
                reason=FailureReason.EMPTY_CATALOG,
                message=EMPTY_CATALOG_MESSAGE,
            )

        eligible = self._filter.filter(catalog, inquiry.borrower_profile, inquiry.fund_use)
        if not eligible:
            logger.info(
                "Simulation aborted: none of %d offers match profile=%s fund_use=%s",
                len(catalog),
                inquiry.borrower_profile.value,
                inquiry.fund_use.value,
            )
            return SimulationFailure(
                reason=FailureReason.NO_MATCHING_OFFERS,
                message=NO_MATCHING_OFFERS_MESSAGE,
            )

        results = self.classify_all(eligible, inquiry)
        ranked = rank(select_best_per_lender(results))

        logger.info(
            "Simulated %d of %d eligible offers, %d lenders ranked",
            len(results),
            len(eligible),
            len(ranked),
        )
        return SimulationSuccess(results=ranked)

    def classify_all(
        self,
        offers: List[MortgageOffer],
        inquiry: MortgageInquiry,
    ) -> List[SimulationResult]:
        """
        Classify every complete offer, silently skipping incomplete ones.

        Useful for auditing the per-offer results before aggregation.
        """
        results = []
        for offer in offers:
            if not offer.is_complete:
                logger.debug(
                    "Skipping incomplete offer %s (%s) from lender %s",
                    offer.offer_id,
                    offer.product_name,
                    offer.lender_code,
                )
                continue
            results.append(self._classifier.classify(offer, inquiry))
        return results


def simulate(inquiry: MortgageInquiry, catalog: List[MortgageOffer]) -> SimulationOutcome:
    """Module-level shortcut for MortgageSimulationEngine().simulate()."""
    return MortgageSimulationEngine().simulate(inquiry, catalog)
