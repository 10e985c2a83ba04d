"""
Exceptions raised by the Mortgage Financing Viability Engine.

Empty catalogs and unmatched inquiries are not exceptions; they are
reported through SimulationFailure.
"""


class MortgageEngineError(Exception):
    """Base class for engine errors."""


class IncompleteOfferError(MortgageEngineError):
    """An offer lacks a field the feasibility math needs."""

    def __init__(self, offer_id: str, lender_code: int):
        self.offer_id = offer_id
        self.lender_code = lender_code
        super().__init__(
            f"Offer {offer_id or '<unidentified>'} from lender {lender_code} "
            "is missing rate, ratio, amount or term data"
        )
