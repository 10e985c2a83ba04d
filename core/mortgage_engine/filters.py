"""
Offer Eligibility Filter for the Mortgage Financing Viability Engine

Narrows the catalog to offers whose free-text eligibility matches the
borrower's profile and intended use of funds:
- Borrower profile (keyword match on eligible profiles text)
- Fund use (keyword match on eligible fund uses text)

Empty eligibility text, or text naming everyone, matches every inquiry.
"""

from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from .models import BorrowerProfile, FundUse, MortgageOffer


# =============================================================================
# Keyword Tables
# =============================================================================

# Catalog texts are mostly Spanish; English synonyms cover curated rows
PROFILE_KEYWORDS: Mapping[BorrowerProfile, Tuple[str, ...]] = MappingProxyType({
    BorrowerProfile.SALARIED_EMPLOYEE: (
        "empleado",
        "relación de dependencia",
        "dependencia",
        "clientes que acrediten sueldos",
        "salaried",
        "employee",
    ),
    BorrowerProfile.SELF_EMPLOYED_SIMPLIFIED: (
        "monotributista",
        "autónomo",
        "independiente",
        "self-employed",
    ),
    BorrowerProfile.SELF_EMPLOYED_REGISTERED: (
        "responsable inscripto",
        "autónomo",
        "independiente",
        "self-employed",
    ),
    BorrowerProfile.PUBLIC_SECTOR_EMPLOYEE: (
        "empleado público",
        "público",
        "empleado",
        "clientes que acrediten sueldos",
        "public sector",
        "employee",
    ),
})

FUND_USE_KEYWORDS: Mapping[FundUse, Tuple[str, ...]] = MappingProxyType({
    FundUse.FIRST_HOME: (
        "primera vivienda",
        "vivienda propia única",
        "vivienda única",
        "vivienda permanente",
        "first home",
    ),
    FundUse.SECOND_HOME: (
        "segunda vivienda",
        "vivienda",
        "second home",
    ),
    FundUse.CONSTRUCTION: (
        "construcción",
        "construir",
        "construction",
    ),
    FundUse.RENOVATION: (
        "refacción",
        "mejora",
        "ampliación",
        "renovation",
    ),
    FundUse.OTHER: (),
})

# Eligibility text containing any of these applies to everyone
# Substring match: "all" also hits words such as "calle" or "detalle"
GENERIC_MARKERS: Tuple[str, ...] = ("todos", "all", "everyone")


def keywords_for_profile(profile: BorrowerProfile) -> Tuple[str, ...]:
    """Keywords for a profile; unmapped profiles get none."""
    return PROFILE_KEYWORDS.get(profile, ())


def keywords_for_fund_use(fund_use: FundUse) -> Tuple[str, ...]:
    """Keywords for a fund use; unmapped uses get none."""
    return FUND_USE_KEYWORDS.get(fund_use, ())


def matches_eligibility_text(text: str, keywords: Sequence[str]) -> bool:
    """
    Check free-text eligibility against a keyword list.

    Matches when there are no keywords, any keyword is a case-insensitive
    substring, the text is generic, or the text is empty.
    """
    normalised = (text or "").lower()

    if not keywords:
        return True
    if any(keyword in normalised for keyword in keywords):
        return True
    if any(marker in normalised for marker in GENERIC_MARKERS):
        return True
    return normalised == ""


class OfferEligibilityFilter:
    """
    Applies profile and fund-use filters to the catalog.

    An offer must pass BOTH filters to be simulated.
    """

    def filter(
        self,
        catalog: List[MortgageOffer],
        profile: BorrowerProfile,
        fund_use: FundUse,
    ) -> List[MortgageOffer]:
        """
        Filter the catalog to offers eligible for the inquiry.

        Args:
            catalog: All offers from the catalog store
            profile: Borrower's declared profile
            fund_use: Borrower's intended use of funds

        Returns:
            Eligible offers in catalog order
        """
        profile_keywords = keywords_for_profile(profile)
        fund_use_keywords = keywords_for_fund_use(fund_use)

        return [
            offer for offer in catalog
            if matches_eligibility_text(offer.eligible_borrower_profiles_text, profile_keywords)
            and matches_eligibility_text(offer.eligible_fund_uses_text, fund_use_keywords)
        ]

    def filter_by_profile(
        self,
        catalog: List[MortgageOffer],
        profile: BorrowerProfile,
    ) -> List[MortgageOffer]:
        """Filter offers on the borrower profile only."""
        keywords = keywords_for_profile(profile)
        return [
            offer for offer in catalog
            if matches_eligibility_text(offer.eligible_borrower_profiles_text, keywords)
        ]

    def filter_by_fund_use(
        self,
        catalog: List[MortgageOffer],
        fund_use: FundUse,
    ) -> List[MortgageOffer]:
        """Filter offers on the fund use only."""
        keywords = keywords_for_fund_use(fund_use)
        return [
            offer for offer in catalog
            if matches_eligibility_text(offer.eligible_fund_uses_text, keywords)
        ]


def filter_offers(
    catalog: List[MortgageOffer],
    profile: BorrowerProfile,
    fund_use: FundUse,
) -> List[MortgageOffer]:
    """Module-level shortcut for OfferEligibilityFilter().filter()."""
    return OfferEligibilityFilter().filter(catalog, profile, fund_use)
