"""
Catalog Row Schema - Normalisation of hosted catalog rows

The hosted catalog table keeps the regulator's column names. This module
maps a raw row (from the REST endpoint or a JSON export) to the engine's
MortgageOffer. Rows already using the engine's field names are accepted
as-is.

Numeric columns arrive as numbers or numeric strings. Blank or
unparseable values become None, which leaves the offer incomplete; the
engine then skips it instead of failing the simulation.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Final, Mapping, Optional

from core.catalog.errors import CatalogFormatError
from core.mortgage_engine.models import MortgageOffer


logger = logging.getLogger(__name__)


# =============================================================================
# Column Mapping
# =============================================================================

# Hosted column name -> MortgageOffer field
CATALOG_COLUMN_MAP: Final[dict[str, str]] = {
    "id": "offer_id",
    "codigo_de_entidad": "lender_code",
    "descripcion_de_entidad": "lender_name",
    "nombre_corto_del_prestamo_hipotecario": "product_name",
    "relacion_monto_tasacion": "max_loan_to_value_pct",
    "relacion_cuota_ingreso": "max_debt_to_income_pct",
    "monto_maximo_otorgable_del_prestamo": "max_loan_amount",
    "plazo_maximo_otorgable": "max_term_months",
    "tasa_efectiva_anual_maxima": "annual_effective_rate",
    "costo_financiero_efectivo_total_maximo": "total_cost_of_credit",
    "beneficiarios": "eligible_borrower_profiles_text",
    "destino_de_los_fondos": "eligible_fund_uses_text",
    "denominacion": "denomination",
}

# =============================================================================
# Value Parsing
# =============================================================================


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a numeric cell.

    Accepts numbers and strings with either decimal separator
    ("0.21", "0,21"). Returns None for blanks, NaN and garbage.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(" ", "")
        if not text:
            return None
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_int(value: Any) -> Optional[int]:
    """Parse an integer cell, truncating numeric strings like '240.0'."""
    number = parse_number(value)
    if number is None:
        return None
    return int(number)


def parse_text(value: Any) -> str:
    """Parse a text cell; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


# =============================================================================
# Row Normalisation
# =============================================================================


def normalise_offer(row: Mapping[str, Any]) -> MortgageOffer:
    """
    Convert a raw catalog row to a MortgageOffer.

    Args:
        row: Mapping with hosted column names or engine field names

    Returns:
        MortgageOffer (possibly incomplete)

    Raises:
        CatalogFormatError: If row is not a mapping
    """
    if not isinstance(row, Mapping):
        raise CatalogFormatError(
            f"Catalog row must be an object, got {type(row).__name__}"
        )

    fields: dict[str, Any] = {}
    for key, value in row.items():
        field_name = CATALOG_COLUMN_MAP.get(key, key)
        fields[field_name] = value

    offer = MortgageOffer(
        lender_code=parse_int(fields.get("lender_code")) or 0,
        lender_name=parse_text(fields.get("lender_name")),
        product_name=parse_text(fields.get("product_name")),
        max_loan_to_value_pct=parse_number(fields.get("max_loan_to_value_pct")),
        max_debt_to_income_pct=parse_number(fields.get("max_debt_to_income_pct")),
        max_loan_amount=parse_number(fields.get("max_loan_amount")),
        max_term_months=parse_int(fields.get("max_term_months")),
        annual_effective_rate=parse_number(fields.get("annual_effective_rate")),
        total_cost_of_credit=parse_number(fields.get("total_cost_of_credit")),
        eligible_borrower_profiles_text=parse_text(fields.get("eligible_borrower_profiles_text")),
        eligible_fund_uses_text=parse_text(fields.get("eligible_fund_uses_text")),
        denomination=parse_text(fields.get("denomination")),
        offer_id=parse_text(fields.get("offer_id")),
    )

    if not offer.eligible_borrower_profiles_text or not offer.eligible_fund_uses_text:
        logger.debug(
            "Catalog offer %s (%s) has empty eligibility text and will match every inquiry",
            offer.offer_id or "<no id>",
            offer.product_name,
        )

    return offer


def normalise_catalog(rows: Any) -> list[MortgageOffer]:
    """
    Convert a list of raw rows to MortgageOffers.

    Raises:
        CatalogFormatError: If rows is not a list or contains a non-object
    """
    if not isinstance(rows, list):
        raise CatalogFormatError(
            f"Catalog payload must be a list of rows, got {type(rows).__name__}"
        )
    offers = [normalise_offer(row) for row in rows]

    open_offers = sum(
        1 for offer in offers
        if not offer.eligible_borrower_profiles_text or not offer.eligible_fund_uses_text
    )
    if open_offers:
        # Empty eligibility matches every borrower; usually a curation gap
        logger.warning(
            "%d of %d catalog offers have empty eligibility text and will match every inquiry",
            open_offers,
            len(offers),
        )
    return offers
