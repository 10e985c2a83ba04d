"""
Exceptions raised while loading the mortgage catalog.
"""


class CatalogError(Exception):
    """Base class for catalog loading errors."""


class CatalogFormatError(CatalogError):
    """The catalog payload is not shaped like a list of offer rows."""


class CatalogUnavailableError(CatalogError):
    """The catalog store could not be reached or refused the request."""
