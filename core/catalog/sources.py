"""
Catalog Sources - Fetching the mortgage catalog

The engine never queries the store itself. Callers fetch the catalog
once per simulation through one of these sources and pass the resulting
list of offers in.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import requests

from core.catalog.errors import CatalogError, CatalogFormatError, CatalogUnavailableError
from core.catalog.schema import normalise_catalog
from core.mortgage_engine.models import MortgageOffer
from utils.config import Config


logger = logging.getLogger(__name__)


USER_AGENT = "FinancingViabilityEngine/1.0"


class CatalogSource(ABC):
    """
    Abstract interface for catalog stores.

    Subclasses must implement:
    - fetch_rows: return the raw rows of the catalog table
    """

    @abstractmethod
    def fetch_rows(self) -> list:
        """
        Fetch the raw catalog rows.

        Raises:
            CatalogUnavailableError: If the store cannot be read
            CatalogFormatError: If the payload is not a list of rows
        """
        ...

    def fetch_offers(self) -> list[MortgageOffer]:
        """Fetch and normalise the whole catalog."""
        offers = normalise_catalog(self.fetch_rows())
        logger.info("Loaded %d catalog offers from %s", len(offers), self.describe())
        return offers

    def describe(self) -> str:
        """Human-readable source description for logs."""
        return type(self).__name__


class JsonFileCatalogSource(CatalogSource):
    """Reads a JSON export of the catalog table from disk."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def describe(self) -> str:
        return str(self._path)

    def fetch_rows(self) -> list:
        if not self._path.exists():
            raise CatalogUnavailableError(f"Catalog file not found: {self._path}")

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogFormatError(f"Invalid catalog JSON in {self._path}: {e}") from e

        if not isinstance(data, list):
            raise CatalogFormatError(
                f"Catalog file {self._path} must contain a JSON array"
            )
        return data


class RestCatalogSource(CatalogSource):
    """
    Reads the catalog table from the hosted data service's REST endpoint.

    Issues a single GET {base_url}/rest/v1/{table}?select=* per fetch.
    """

    def __init__(
        self,
        base_url: str,
        table: str,
        api_key: str = "",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise CatalogError("A catalog URL is required for the REST catalog source")

        self._url = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        })
        if api_key:
            self._session.headers.update({
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            })

    def describe(self) -> str:
        return self._url

    def fetch_rows(self) -> list:
        try:
            response = self._session.get(
                self._url,
                params={"select": "*"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Catalog request to %s failed: %s", self._url, e)
            raise CatalogUnavailableError(f"Catalog store unavailable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogFormatError(f"Catalog store returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise CatalogFormatError("Catalog store response must be a JSON array")
        return data


def get_catalog_source(config: Optional[Config] = None) -> CatalogSource:
    """
    Build the catalog source selected by configuration.

    CATALOG_SOURCE=file reads CATALOG_FILE; CATALOG_SOURCE=rest queries
    CATALOG_URL / CATALOG_TABLE.
    """
    config = config or Config.load()

    if config.catalog_source == "rest":
        return RestCatalogSource(
            base_url=config.catalog_url,
            table=config.catalog_table,
            api_key=config.catalog_api_key,
            timeout=config.request_timeout,
        )
    if config.catalog_source == "file":
        return JsonFileCatalogSource(config.catalog_file)

    raise CatalogError(f"Unknown catalog source: {config.catalog_source}")
