"""
Utility modules for the financing engine.
"""

from .formatting import format_currency, format_percent, format_term
from .config import Config

__all__ = ["format_currency", "format_percent", "format_term", "Config"]
