"""
Tests for the Amortization Calculator

Verifies:
- Annual to monthly rate conversion
- Annuity installment, including the zero-rate case
- Inverse formula for the minimum term under an installment cap
- French amortization table
"""

import math

import pytest

from core.mortgage_engine.amortization import (
    amortization_schedule,
    installment,
    minimum_term_for_installment_cap,
    monthly_rate,
)


# =============================================================================
# Test: Monthly Rate Conversion
# =============================================================================

class TestMonthlyRate:
    """Tests for annual effective to monthly rate conversion."""

    def test_zero_annual_rate_is_zero_monthly(self):
        assert monthly_rate(0) == 0

    def test_twenty_one_percent(self):
        assert monthly_rate(0.21) == pytest.approx(0.01601, abs=1e-4)

    def test_compounds_back_to_annual(self):
        """Twelve monthly periods reproduce the annual effective rate."""
        rate = monthly_rate(0.35)
        assert (1 + rate) ** 12 - 1 == pytest.approx(0.35)

    def test_monthly_rate_below_nominal_twelfth(self):
        """Effective conversion is lower than dividing by twelve."""
        assert monthly_rate(0.21) < 0.21 / 12


# =============================================================================
# Test: Installment
# =============================================================================

class TestInstallment:
    """Tests for the fixed annuity installment."""

    @pytest.mark.parametrize("principal,rate,term", [
        (100000, 0.01, 120),
        (50000, 0.0153, 240),
        (1000, 0.5, 1),
        (250000, 0.002, 360),
    ])
    def test_total_paid_exceeds_principal(self, principal, rate, term):
        """Interest is non-negative, so the total paid exceeds the principal."""
        assert installment(principal, rate, term) * term > principal

    def test_zero_rate_is_linear(self):
        assert installment(60000, 0, 120) == 60000 / 120

    def test_single_month_term(self):
        """One period repays principal plus one month of interest."""
        assert installment(1000, 0.02, 1) == pytest.approx(1020)

    def test_known_value(self):
        """100,000 at 1% monthly over 12 months."""
        assert installment(100000, 0.01, 12) == pytest.approx(8884.88, abs=0.01)

    def test_longer_term_lowers_installment(self):
        assert installment(80000, 0.015, 240) < installment(80000, 0.015, 120)

    def test_non_positive_term_raises(self):
        with pytest.raises(ValueError):
            installment(1000, 0.01, 0)


# =============================================================================
# Test: Minimum Term For Installment Cap
# =============================================================================

class TestMinimumTerm:
    """Tests for the inverse annuity formula."""

    @pytest.mark.parametrize("principal,rate,term", [
        (80000, 0.0153, 120),
        (70000, 0.0188, 180),
        (10000, 0.005, 36),
    ])
    def test_cap_above_installment_gives_shorter_or_equal_term(self, principal, rate, term):
        cap = installment(principal, rate, term) + 1
        result = minimum_term_for_installment_cap(principal, rate, cap)
        assert result is not None
        assert result <= term

    def test_result_satisfies_cap(self):
        """The returned term's installment fits the cap, one month less does not."""
        principal, rate, cap = 80000, 0.0153, 1500
        term = minimum_term_for_installment_cap(principal, rate, cap)

        assert installment(principal, rate, term) <= cap
        assert installment(principal, rate, term - 1) > cap

    def test_interest_exceeding_cap_is_impossible(self):
        """Cap below the first month's interest can never amortize."""
        assert minimum_term_for_installment_cap(80000, 0.0153, 80000 * 0.0153 - 1) is None

    def test_cap_equal_to_interest_is_impossible(self):
        assert minimum_term_for_installment_cap(100000, 0.01, 1000) is None

    def test_non_positive_principal_returns_none(self):
        """ratio collapses to 1 when nothing is financed."""
        assert minimum_term_for_installment_cap(0, 0.01, 500) is None

    def test_zero_rate_rounds_up(self):
        assert minimum_term_for_installment_cap(60000, 0, 700) == math.ceil(60000 / 700)

    def test_zero_rate_exact_division(self):
        assert minimum_term_for_installment_cap(60000, 0, 500) == 120

    def test_zero_rate_zero_cap_returns_none(self):
        assert minimum_term_for_installment_cap(60000, 0, 0) is None

    def test_zero_rate_zero_principal_returns_none(self):
        assert minimum_term_for_installment_cap(0, 0, 500) is None


# =============================================================================
# Test: Amortization Schedule
# =============================================================================

class TestAmortizationSchedule:
    """Tests for the French amortization table."""

    def test_one_row_per_month(self):
        rows = amortization_schedule(100000, 0.01, 24)
        assert len(rows) == 24
        assert [r.month for r in rows] == list(range(1, 25))

    def test_balance_reaches_zero(self):
        rows = amortization_schedule(100000, 0.01, 120)
        assert rows[-1].balance == 0.0

    def test_principal_portions_sum_to_principal(self):
        rows = amortization_schedule(80000, 0.0153, 240)
        assert sum(r.principal_paid for r in rows) == pytest.approx(80000)

    def test_fixed_installment(self):
        rows = amortization_schedule(80000, 0.0153, 60)
        expected = installment(80000, 0.0153, 60)
        assert all(r.installment == pytest.approx(expected) for r in rows)

    def test_interest_decreases_principal_increases(self):
        rows = amortization_schedule(50000, 0.02, 36)
        assert rows[0].interest > rows[-1].interest
        assert rows[0].principal_paid < rows[-1].principal_paid

    def test_first_month_interest(self):
        rows = amortization_schedule(50000, 0.02, 36)
        assert rows[0].interest == pytest.approx(1000)

    def test_zero_rate_is_linear(self):
        rows = amortization_schedule(1200, 0, 12)
        assert all(r.interest == 0 for r in rows)
        assert all(r.principal_paid == pytest.approx(100) for r in rows)
        assert rows[-1].balance == 0.0

    def test_balances_never_negative(self):
        rows = amortization_schedule(33333.33, 0.0137, 97)
        assert all(r.balance >= 0 for r in rows)

    @pytest.mark.parametrize("principal,term", [(0, 12), (-100, 12), (1000, 0)])
    def test_degenerate_inputs_return_empty(self, principal, term):
        assert amortization_schedule(principal, 0.01, term) == []


class TestLongTerms:
    """Very long terms stay finite."""

    def test_installment_tends_to_interest(self):
        assert installment(80000, 0.0153, 100000) == pytest.approx(80000 * 0.0153)

    def test_installment_at_term_beyond_overflow_threshold(self):
        # (1 + r)^n alone would overflow a float here
        assert math.isfinite(installment(100000, 0.0153, 1_000_000))
