"""
Mortgage Catalog - Ingestion Layer

Single entry point for catalog data entering the simulation engine. All
stores normalise their rows to MortgageOffer.
"""

from core.catalog.errors import (
    CatalogError,
    CatalogFormatError,
    CatalogUnavailableError,
)
from core.catalog.schema import (
    CATALOG_COLUMN_MAP,
    normalise_offer,
    normalise_catalog,
)
from core.catalog.sources import (
    CatalogSource,
    JsonFileCatalogSource,
    RestCatalogSource,
    get_catalog_source,
)

__all__ = [
    # Errors
    "CatalogError",
    "CatalogFormatError",
    "CatalogUnavailableError",
    # Row schema
    "CATALOG_COLUMN_MAP",
    "normalise_offer",
    "normalise_catalog",
    # Sources
    "CatalogSource",
    "JsonFileCatalogSource",
    "RestCatalogSource",
    "get_catalog_source",
]
