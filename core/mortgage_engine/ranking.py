"""
Lender Aggregation and Ranking for the Mortgage Financing Viability Engine

- Aggregation keeps one representative offer per lender
- Ranking orders the representatives for display
"""

from typing import Callable, Dict, List, Optional

from .models import SimulationResult, ViabilityState


# Lower sorts first
STATE_PRIORITY: Dict[ViabilityState, int] = {
    ViabilityState.VIABLE: 0,
    ViabilityState.EXTENDABLE: 1,
    ViabilityState.NOT_VIABLE: 2,
}


def _lowest(
    results: List[SimulationResult],
    key: Callable[[SimulationResult], float],
) -> Optional[SimulationResult]:
    """Minimum by key; the first encountered wins ties."""
    best = None
    for result in results:
        if best is None or key(result) < key(best):
            best = result
    return best


def _best_for_lender(results: List[SimulationResult]) -> SimulationResult:
    """
    Pick a lender's representative offer.

    Strict tier order:
    1. VIABLE with the lowest installment
    2. EXTENDABLE with the lowest recommended term
    3. NOT_VIABLE with the lowest installment
    """
    by_state: Dict[ViabilityState, List[SimulationResult]] = {
        state: [] for state in ViabilityState
    }
    for result in results:
        by_state[result.viability_state].append(result)

    if by_state[ViabilityState.VIABLE]:
        return _lowest(
            by_state[ViabilityState.VIABLE],
            lambda r: r.installment_at_desired_term,
        )
    if by_state[ViabilityState.EXTENDABLE]:
        return _lowest(
            by_state[ViabilityState.EXTENDABLE],
            lambda r: r.recommended_term_months,
        )
    return _lowest(
        by_state[ViabilityState.NOT_VIABLE],
        lambda r: r.installment_at_desired_term,
    )


def select_best_per_lender(results: List[SimulationResult]) -> List[SimulationResult]:
    """
    Collapse results to one per lender_code.

    Args:
        results: Simulation results in catalog order

    Returns:
        One result per distinct lender, in order of first appearance
    """
    grouped: Dict[int, List[SimulationResult]] = {}
    for result in results:
        grouped.setdefault(result.lender_code, []).append(result)

    return [_best_for_lender(lender_results) for lender_results in grouped.values()]


def rank(results: List[SimulationResult]) -> List[SimulationResult]:
    """
    Order results by viability tier, then by installment ascending.

    Stable: equal keys keep their input order.
    """
    return sorted(
        results,
        key=lambda r: (STATE_PRIORITY[r.viability_state], r.installment_at_desired_term),
    )
