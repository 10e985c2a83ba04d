"""
Formatting utilities.
"""

from typing import Optional


def format_currency(amount: float, currency: str = "ARS", decimals: int = 2) -> str:
    """
    Format an amount as currency.

    Args:
        amount: The amount in whole units.
        currency: Currency code (default ARS).
        decimals: Number of decimal places.

    Returns:
        Formatted currency string.
    """
    symbols = {
        "ARS": "$",
        "USD": "US$",
        "EUR": "€",
    }
    symbol = symbols.get(currency, currency + " ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"


def format_percent(value: float, decimals: int = 1) -> str:
    """
    Format a number as a percentage.

    Args:
        value: The percentage value.
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string.
    """
    return f"{value:.{decimals}f}%"


def format_term(months: Optional[int]) -> str:
    """Format a term in months, with years when it divides evenly."""
    if months is None:
        return "-"
    if months % 12 == 0:
        return f"{months} months ({months // 12} years)"
    return f"{months} months"
