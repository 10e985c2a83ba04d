"""
Configuration management.
"""

import os
from dataclasses import dataclass, field


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Catalog store
    catalog_source: str = field(default_factory=lambda: os.getenv("CATALOG_SOURCE", "file").lower())
    catalog_file: str = field(
        default_factory=lambda: os.getenv("CATALOG_FILE", "./data/mortgage_catalog.json")
    )
    catalog_url: str = field(default_factory=lambda: os.getenv("CATALOG_URL", ""))
    catalog_api_key: str = field(default_factory=lambda: os.getenv("CATALOG_API_KEY", ""), repr=False)
    catalog_table: str = field(
        default_factory=lambda: os.getenv("CATALOG_TABLE", "creditos_hipotecarios")
    )
    request_timeout: int = field(default_factory=lambda: int(os.getenv("REQUEST_TIMEOUT", "30")))

    # Display
    default_currency: str = field(default_factory=lambda: os.getenv("DEFAULT_CURRENCY", "ARS"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary. The API key is never included."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "catalog_source": self.catalog_source,
            "catalog_file": self.catalog_file,
            "catalog_url": self.catalog_url,
            "catalog_table": self.catalog_table,
            "request_timeout": self.request_timeout,
            "default_currency": self.default_currency,
        }
