"""
Tests for the Mortgage Simulation Engine

End-to-end pipeline checks:
- Empty catalog and unmatched inquiries report structured failures
- Incomplete offers are skipped, not reported
- Two-lender scenario with independently computed expectations
- Deterministic results for same input
"""

import logging

import pytest

from core.mortgage_engine import (
    BorrowerProfile,
    FailureReason,
    FundUse,
    MortgageInquiry,
    MortgageSimulationEngine,
    SimulationFailure,
    SimulationSuccess,
    ViabilityState,
    simulate,
)


@pytest.fixture
def engine():
    return MortgageSimulationEngine()


@pytest.fixture
def two_lender_catalog(create_offer):
    """Lender A and Lender B from the reference scenario."""
    return [
        create_offer(
            lender_code=100,
            lender_name="Lender A",
            max_loan_to_value_pct=80,
            max_debt_to_income_pct=25,
            max_loan_amount=100000,
            max_term_months=240,
            annual_effective_rate=0.20,
        ),
        create_offer(
            lender_code=200,
            lender_name="Lender B",
            max_loan_to_value_pct=70,
            max_debt_to_income_pct=30,
            max_loan_amount=80000,
            max_term_months=180,
            annual_effective_rate=0.25,
        ),
    ]


def expected_installment(principal, annual_rate, term):
    """Annuity installment computed independently of the engine."""
    r = (1 + annual_rate) ** (1 / 12) - 1
    return principal * r / (1 - (1 + r) ** -term)


# =============================================================================
# Test: Failure Reasons
# =============================================================================

class TestFailureReasons:
    """Tests for caller-visible failure conditions."""

    def test_empty_catalog(self, engine, standard_inquiry):
        outcome = engine.simulate(standard_inquiry, [])

        assert isinstance(outcome, SimulationFailure)
        assert not outcome.ok
        assert outcome.reason == FailureReason.EMPTY_CATALOG

    def test_no_matching_offers(self, engine, create_offer, create_inquiry):
        catalog = [create_offer(eligible_borrower_profiles_text="Monotributistas")]
        inquiry = create_inquiry(borrower_profile=BorrowerProfile.SALARIED_EMPLOYEE)

        outcome = engine.simulate(inquiry, catalog)

        assert not outcome.ok
        assert outcome.reason == FailureReason.NO_MATCHING_OFFERS
        assert outcome.message

    def test_failure_to_dict(self, engine, standard_inquiry):
        assert engine.simulate(standard_inquiry, []).to_dict() == {
            "ok": False,
            "reason": "EMPTY_CATALOG",
            "message": "No mortgage products are available.",
        }


# =============================================================================
# Test: Incomplete Offers
# =============================================================================

class TestIncompleteOffers:
    """Incomplete offers are excluded silently."""

    def test_incomplete_offer_skipped(self, engine, create_offer, standard_inquiry):
        complete = create_offer(lender_code=1)
        incomplete = create_offer(lender_code=2, annual_effective_rate=None)

        outcome = engine.simulate(standard_inquiry, [incomplete, complete])

        assert outcome.ok
        assert [r.lender_code for r in outcome.results] == [1]

    def test_all_incomplete_returns_empty_success(self, engine, create_offer, standard_inquiry):
        outcome = engine.simulate(
            standard_inquiry, [create_offer(max_term_months=None)]
        )

        assert isinstance(outcome, SimulationSuccess)
        assert outcome.results == []

    def test_skip_is_logged_at_debug(self, engine, create_offer, standard_inquiry, caplog):
        with caplog.at_level(logging.DEBUG, logger="core.mortgage_engine.engine"):
            engine.simulate(standard_inquiry, [create_offer(max_loan_amount=None)])
        assert "Skipping incomplete offer" in caplog.text


# =============================================================================
# Test: End-to-End Scenario
# =============================================================================

class TestTwoLenderScenario:
    """Reference scenario with two lenders and empty eligibility text."""

    def test_two_results(self, engine, standard_inquiry, two_lender_catalog):
        outcome = engine.simulate(standard_inquiry, two_lender_catalog)

        assert outcome.ok
        assert len(outcome.results) == 2

    def test_financed_amounts(self, engine, standard_inquiry, two_lender_catalog):
        outcome = engine.simulate(standard_inquiry, two_lender_catalog)
        by_lender = {r.lender_name: r for r in outcome.results}

        assert by_lender["Lender A"].financed_amount == 80000
        assert by_lender["Lender B"].financed_amount == 70000
        assert by_lender["Lender A"].required_down_payment == 20000
        assert by_lender["Lender B"].required_down_payment == 30000

    def test_installments(self, engine, standard_inquiry, two_lender_catalog):
        outcome = engine.simulate(standard_inquiry, two_lender_catalog)
        by_lender = {r.lender_name: r for r in outcome.results}

        assert by_lender["Lender A"].installment_at_desired_term == pytest.approx(
            expected_installment(80000, 0.20, 120)
        )
        assert by_lender["Lender B"].installment_at_desired_term == pytest.approx(
            expected_installment(70000, 0.25, 120)
        )
        assert by_lender["Lender A"].max_allowed_installment == 500
        assert by_lender["Lender B"].max_allowed_installment == 600

    def test_both_not_viable_with_lender_max_term(self, engine, standard_inquiry, two_lender_catalog):
        """Monthly interest alone exceeds each cap."""
        outcome = engine.simulate(standard_inquiry, two_lender_catalog)
        by_lender = {r.lender_name: r for r in outcome.results}

        assert by_lender["Lender A"].viability_state == ViabilityState.NOT_VIABLE
        assert by_lender["Lender A"].recommended_term_months == 240
        assert by_lender["Lender B"].viability_state == ViabilityState.NOT_VIABLE
        assert by_lender["Lender B"].recommended_term_months == 180

    def test_lower_installment_first(self, engine, standard_inquiry, two_lender_catalog):
        outcome = engine.simulate(standard_inquiry, two_lender_catalog)

        assert [r.lender_name for r in outcome.results] == ["Lender A", "Lender B"]
        assert (
            outcome.results[0].installment_at_desired_term
            <= outcome.results[1].installment_at_desired_term
        )

    def test_viable_lender_ranked_first(self, engine, create_inquiry, two_lender_catalog):
        """With enough income Lender B becomes viable, Lender A does not."""
        inquiry = create_inquiry(monthly_income=5000)
        outcome = engine.simulate(inquiry, two_lender_catalog)

        # A: cap 1,250 < ~1,461 and needs ~257 months; B: cap 1,500 >= ~1,472
        assert outcome.results[0].lender_name == "Lender B"
        assert outcome.results[0].viability_state == ViabilityState.VIABLE
        assert outcome.results[1].lender_name == "Lender A"
        assert outcome.results[1].viability_state == ViabilityState.NOT_VIABLE

    def test_catalog_order_does_not_change_ranking(self, engine, standard_inquiry, two_lender_catalog):
        forward = engine.simulate(standard_inquiry, two_lender_catalog)
        backward = engine.simulate(standard_inquiry, list(reversed(two_lender_catalog)))
        assert forward.results == backward.results

    def test_deterministic(self, standard_inquiry, two_lender_catalog):
        assert simulate(standard_inquiry, two_lender_catalog) == simulate(
            standard_inquiry, two_lender_catalog
        )

    def test_success_to_dict(self, engine, standard_inquiry, two_lender_catalog):
        body = engine.simulate(standard_inquiry, two_lender_catalog).to_dict()

        assert body["ok"] is True
        assert body["results"][0]["viability_state"] == "NOT_VIABLE"
        assert body["results"][0]["recommended_term_months"] == 240


# =============================================================================
# Test: Aggregation Through The Pipeline
# =============================================================================

class TestPipelineAggregation:
    """Multiple offers from one lender collapse to one result."""

    def test_best_offer_per_lender(self, engine, create_offer, create_inquiry):
        catalog = [
            create_offer(lender_code=1, product_name="Dear", annual_effective_rate=0.12),
            create_offer(lender_code=1, product_name="Cheap", annual_effective_rate=0.04),
            create_offer(lender_code=2, product_name="Only", annual_effective_rate=0.08),
        ]
        inquiry = create_inquiry(monthly_income=10000, desired_term_months=240)

        outcome = engine.simulate(inquiry, catalog)

        assert [(r.lender_code, r.product_name) for r in outcome.results] == [
            (1, "Cheap"),
            (2, "Only"),
        ]

    def test_classify_all_keeps_every_complete_offer(self, engine, create_offer, standard_inquiry):
        catalog = [create_offer(lender_code=1), create_offer(lender_code=1, product_name="Other")]
        assert len(engine.classify_all(catalog, standard_inquiry)) == 2


# =============================================================================
# Test: Inquiry Validation
# =============================================================================

class TestInquiryValidation:
    """MortgageInquiry rejects impossible inputs."""

    @pytest.mark.parametrize("kwargs", [
        {"property_value": 0},
        {"monthly_income": -1},
        {"desired_term_months": 0},
        {"desired_term_months": 12.5},
        {"property_value": float("nan")},
        {"property_value": float("inf")},
        {"monthly_income": float("nan")},
        {"monthly_income": float("inf")},
        {"desired_term_months": float("inf")},
        {"desired_term_months": float("nan")},
    ])
    def test_invalid_inquiry_raises(self, kwargs):
        values = {
            "property_value": 100000,
            "monthly_income": 2000,
            "desired_term_months": 120,
            "borrower_profile": BorrowerProfile.SALARIED_EMPLOYEE,
            "fund_use": FundUse.FIRST_HOME,
        }
        values.update(kwargs)
        with pytest.raises(ValueError):
            MortgageInquiry(**values)

    def test_profile_from_legacy_code(self):
        assert BorrowerProfile.from_string("monotributista") == BorrowerProfile.SELF_EMPLOYED_SIMPLIFIED
        assert BorrowerProfile.from_string("salaried-employee") == BorrowerProfile.SALARIED_EMPLOYEE
        assert BorrowerProfile.from_string("PUBLIC_SECTOR_EMPLOYEE") == BorrowerProfile.PUBLIC_SECTOR_EMPLOYEE
        assert BorrowerProfile.from_string("retired") is None

    def test_fund_use_from_legacy_code(self):
        assert FundUse.from_string("refaccion") == FundUse.RENOVATION
        assert FundUse.from_string("first_home") == FundUse.FIRST_HOME
        assert FundUse.from_string("") is None


# =============================================================================
# Test: Long Terms and Income Share
# =============================================================================

class TestLongTermsAndIncomeShare:
    """Results stay finite and carry the income share."""

    def test_very_long_desired_term(self, engine, create_offer, create_inquiry):
        """Installment tends to monthly interest instead of overflowing."""
        inquiry = create_inquiry(desired_term_months=100000)
        outcome = engine.simulate(inquiry, [create_offer(annual_effective_rate=0.20)])

        result = outcome.results[0]
        monthly_interest = 80000 * ((1.20) ** (1 / 12) - 1)
        assert result.installment_at_desired_term == pytest.approx(monthly_interest)
        assert result.viability_state == ViabilityState.NOT_VIABLE
        assert result.recommended_term_months == 240

    def test_income_share(self, engine, standard_inquiry, two_lender_catalog):
        outcome = engine.simulate(standard_inquiry, two_lender_catalog)
        by_lender = {r.lender_name: r for r in outcome.results}

        assert by_lender["Lender A"].income_share_pct == pytest.approx(
            expected_installment(80000, 0.20, 120) / 2000 * 100
        )
        assert by_lender["Lender A"].monthly_income == 2000

    def test_income_share_in_dict(self, engine, standard_inquiry, two_lender_catalog):
        body = engine.simulate(standard_inquiry, two_lender_catalog).to_dict()
        first = body["results"][0]
        assert first["income_share_pct"] == pytest.approx(
            first["installment_at_desired_term"] / 2000 * 100
        )
