"""
Plain-text rendering of simulation results.

Produces the table a broker reads in the terminal: one line per lender
with amounts, installments, term advice and viability.
"""

from typing import List

from core.mortgage_engine.models import (
    AmortizationRow,
    SimulationFailure,
    SimulationOutcome,
    SimulationResult,
    ViabilityState,
)
from utils.formatting import format_currency, format_percent, format_term


STATE_LABELS = {
    ViabilityState.VIABLE: "Viable",
    ViabilityState.EXTENDABLE: "Viable with longer term",
    ViabilityState.NOT_VIABLE: "Not viable",
}


def describe_result(result: SimulationResult, currency: str = "ARS") -> str:
    """One-line verdict for a single lender."""
    label = STATE_LABELS[result.viability_state]

    if result.viability_state == ViabilityState.VIABLE:
        return f"{label} at {format_term(result.desired_term_months)}"
    if result.viability_state == ViabilityState.EXTENDABLE:
        return f"{label}: extend to {format_term(result.recommended_term_months)}"
    return (
        f"{label}: installment cap {format_currency(result.max_allowed_installment, currency)} "
        f"not reachable within {format_term(result.max_term_months)}"
    )


def render_results(results: List[SimulationResult], currency: str = "ARS") -> str:
    """Render ranked results as a text table."""
    lines = []
    for position, result in enumerate(results, start=1):
        indexed = " [UVA]" if result.is_inflation_indexed else ""
        lines.append(f"{position}. {result.lender_name} - {result.product_name}{indexed}")
        lines.append(f"   Financed amount:      {format_currency(result.financed_amount, currency)}")
        lines.append(f"   Down payment:         {format_currency(result.required_down_payment, currency)}")
        lines.append(
            f"   Installment:          {format_currency(result.installment_at_desired_term, currency)}"
            f" (max {format_currency(result.max_allowed_installment, currency)})"
        )
        lines.append(
            f"   Rate:                 {format_percent(result.annual_rate_pct, 2)} yearly,"
            f" {format_percent(result.monthly_rate_pct, 3)} monthly,"
            f" CFT {format_percent(result.total_cost_of_credit_pct, 2)}"
        )
        lines.append(f"   {describe_result(result, currency)}")
    return "\n".join(lines)


def render_outcome(outcome: SimulationOutcome, currency: str = "ARS") -> str:
    """Render a full simulation outcome."""
    if isinstance(outcome, SimulationFailure):
        return f"{outcome.message} ({outcome.reason.value})"
    if not outcome.results:
        return "No catalog offer had enough data to simulate."
    return render_results(outcome.results, currency)


def render_schedule(rows: List[AmortizationRow], currency: str = "ARS") -> str:
    """Render an amortization table."""
    header = f"{'Month':>5}  {'Installment':>16}  {'Principal':>16}  {'Interest':>16}  {'Balance':>18}"
    lines = [header, "-" * len(header)]
    for row in rows:
        lines.append(
            f"{row.month:>5}  "
            f"{format_currency(row.installment, currency):>16}  "
            f"{format_currency(row.principal_paid, currency):>16}  "
            f"{format_currency(row.interest, currency):>16}  "
            f"{format_currency(row.balance, currency):>18}"
        )
    return "\n".join(lines)
