"""
Amortization Calculator for the Mortgage Financing Viability Engine

Pure numeric functions for the French (annuity) system:
- Annual effective rate to monthly rate conversion
- Fixed installment for a principal, rate and term
- Minimum term that keeps the installment under a cap
- Month-by-month amortization table
"""

import math
from typing import List, Optional

from .models import AmortizationRow


# Remaining balance below this is treated as fully repaid
BALANCE_ROUNDING_TOLERANCE = 0.01


def monthly_rate(annual_effective_rate: float) -> float:
    """
    Convert an annual effective rate to the equivalent monthly rate.

    Args:
        annual_effective_rate: Decimal fraction (0.21 for 21%)

    Returns:
        Monthly effective rate as a decimal fraction
    """
    return (1 + annual_effective_rate) ** (1 / 12) - 1


def installment(principal: float, monthly_rate: float, term_months: int) -> float:
    """
    Fixed monthly installment that fully amortizes the principal.

    installment = P * r / (1 - (1 + r)^-n)

    Degrades to P / n when the rate is zero. For very long terms the
    discount factor underflows to zero and the installment tends to P * r.

    Raises:
        ValueError: If term_months is not positive
    """
    if term_months <= 0:
        raise ValueError("term_months must be positive")

    if monthly_rate == 0:
        return principal / term_months

    discount = (1 + monthly_rate) ** -term_months
    return principal * monthly_rate / (1 - discount)


def minimum_term_for_installment_cap(
    principal: float,
    monthly_rate: float,
    max_installment: float,
) -> Optional[int]:
    """
    Shortest term whose installment does not exceed max_installment.

    Inverse of the annuity formula solved for n:

        n = ceil( ln(cap / (cap - P * r)) / ln(1 + r) )

    Args:
        principal: Amount to finance
        monthly_rate: Monthly effective rate (decimal fraction)
        max_installment: Highest installment the borrower may pay

    Returns:
        Term in months, or None when no term satisfies the cap
        (interest alone already exceeds it)
    """
    if monthly_rate == 0:
        if max_installment <= 0:
            return None
        months = principal / max_installment
        if not math.isfinite(months) or months <= 0:
            return None
        return math.ceil(months)

    denominator = max_installment - principal * monthly_rate
    if denominator <= 0:
        return None

    ratio = max_installment / denominator
    if ratio <= 1:
        return None

    return math.ceil(math.log(ratio) / math.log(1 + monthly_rate))


def amortization_schedule(
    principal: float,
    monthly_rate: float,
    term_months: int,
) -> List[AmortizationRow]:
    """
    Build the French amortization table.

    Interest accrues on the outstanding balance; the rest of the fixed
    installment repays principal.

    Returns:
        One row per month, empty if principal or term is not positive
    """
    if principal <= 0 or term_months <= 0:
        return []

    fixed_installment = installment(principal, monthly_rate, term_months)
    balance = principal
    rows = []

    for month in range(1, term_months + 1):
        interest = balance * monthly_rate
        principal_paid = fixed_installment - interest
        balance -= principal_paid

        if month == term_months and abs(balance) < BALANCE_ROUNDING_TOLERANCE:
            balance = 0.0

        rows.append(AmortizationRow(
            month=month,
            installment=fixed_installment,
            principal_paid=principal_paid,
            interest=interest,
            balance=max(0.0, balance),
        ))

    return rows
