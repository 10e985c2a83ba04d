"""
Reporting module for the financing engine.

Renders simulation outcomes and amortization tables as plain text and
provides the command-line front end.

Usage:
    from reporting import render_outcome

    outcome = MortgageSimulationEngine().simulate(inquiry, catalog)
    print(render_outcome(outcome))
"""

from .summary import (
    STATE_LABELS,
    describe_result,
    render_results,
    render_outcome,
    render_schedule,
)

__all__ = [
    "STATE_LABELS",
    "describe_result",
    "render_results",
    "render_outcome",
    "render_schedule",
]
