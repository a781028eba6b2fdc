"""
Tests for scenario descriptions, key focus text and priority actions.
"""
from chowpilot.engine import (
    CONFIDENCE_GUIDANCE,
    classify,
    key_focus,
    priority_actions,
    scenario_description,
)
from chowpilot.models import Confidence, RiskLevel

from helpers import FUTURE, make_facts


def focus_for(**overrides) -> str:
    facts = make_facts(**overrides)
    return key_focus(facts, classify(facts).level)


def actions_for(**overrides):
    facts = make_facts(**overrides)
    return priority_actions(facts, classify(facts).level)


# =============================================================================
# Scenario Description
# =============================================================================

class TestScenarioDescription:
    """Tests for the one-line scenario label."""

    def test_full_label(self):
        assert scenario_description(make_facts()) == (
            "Past CHOW | Asset Sale | Outstanding AR | Has FBS | No Contract"
        )

    def test_contract_signed(self):
        facts = make_facts(
            acquisition_date=FUTURE,
            sale_type="stock",
            contract_signed="yes",
            outstanding_ar="no",
            future_booked_shifts="no",
        )
        assert scenario_description(facts) == "Future CHOW | Stock Sale | Contract Signed"

    def test_unknown_contract_omitted(self):
        facts = make_facts(sale_type="unknown", contract_signed="unknown", future_booked_shifts="no")
        assert scenario_description(facts) == "Past CHOW | Unknown Sale Type | Outstanding AR"


# =============================================================================
# Key Focus
# =============================================================================

class TestKeyFocus:
    """Tests for the guidance paragraph."""

    def test_no_exposure(self):
        text = focus_for(outstanding_ar="no", future_booked_shifts="no")
        assert text.startswith("Low risk situation. No immediate financial exposure.")

    def test_high_distress(self):
        text = focus_for(contract_signed="yes", financial_distress="yes")
        assert text.startswith("High-risk scenario. Old owner shows signs of financial distress")

    def test_high_past_no_contract_with_ar(self):
        text = focus_for()
        assert text.startswith("High-risk scenario. Ownership already changed with no contract")

    def test_high_new_owner_blacklisted(self):
        text = focus_for(acquisition_date=FUTURE, contract_signed="yes", blacklisted="new")
        assert text.startswith("Critical: New owner is blacklisted.")

    def test_high_fbs_no_contract(self):
        text = focus_for(outstanding_ar="no")
        assert text.startswith("High-risk scenario. Future shifts are booked but no contract in place.")

    def test_medium_future_asset_ar(self):
        text = focus_for(acquisition_date=FUTURE)
        assert text.startswith("Medium risk. CHOW is upcoming which gives time to act.")

    def test_medium_asset_contract_ar(self):
        text = focus_for(contract_signed="yes")
        assert text.startswith("Medium risk. Contract is in place but pre-sale AR needs attention.")

    def test_stock_contract(self):
        text = focus_for(sale_type="stock", contract_signed="yes")
        assert text.startswith("Stock sale with contract signed.")

    def test_stock_no_contract(self):
        text = focus_for(acquisition_date=FUTURE, sale_type="stock")
        assert text.startswith("Stock sale without contract.")

    def test_default(self):
        text = focus_for(contract_signed="yes", outstanding_ar="no")
        assert text == (
            "Gather remaining information, confirm financial responsibility, and "
            "coordinate with Sales on contract status."
        )


# =============================================================================
# Priority Actions
# =============================================================================

class TestPriorityActions:
    """Tests for ordered recommended actions."""

    def test_no_exposure(self):
        actions = actions_for(outstanding_ar="no", future_booked_shifts="no")
        assert [a.text for a in actions] == [
            "Alert leadership of the CHOW",
            "Archive the account to prevent posting under new ownership without contract",
            "Sales treats this as standard new customer onboarding if they want to continue",
        ]
        assert all(a.confidence == Confidence.HIGH for a in actions)

    def test_no_exposure_new_owner_blacklisted(self):
        actions = actions_for(outstanding_ar="no", future_booked_shifts="no", blacklisted="new")
        assert actions[-1].text == (
            "Inform collections team - new owner is blacklisted, relationship cannot continue"
        )

    def test_new_owner_blacklisted_overrides_risk_branches(self):
        actions = actions_for(blacklisted="both")
        assert actions[0].text.startswith("Check CBH App for upcoming shifts")
        assert len(actions) == 3

    def test_high_past_no_contract_with_fbs(self):
        actions = actions_for()
        assert [a.confidence for a in actions] == [
            Confidence.HIGH, Confidence.HIGH, Confidence.MEDIUM, Confidence.HIGH,
        ]
        assert actions[2].text.startswith("If no response within 24-48 hours, consider SUSPEND")

    def test_high_past_no_contract_without_fbs(self):
        actions = actions_for(future_booked_shifts="no")
        assert len(actions) == 3
        assert not any("SUSPEND" in a.text for a in actions)

    def test_high_asset_distress_ar(self):
        actions = actions_for(contract_signed="yes", financial_distress="yes")
        assert actions[0].text == "PEND account - old owner in distress unlikely to pay pre-sale debt"
        assert len(actions) == 4

    def test_high_unknown_sale(self):
        actions = actions_for(sale_type="unknown", contract_signed="yes")
        assert actions[0].text.startswith("URGENT: Determine sale type")

    def test_high_default(self):
        actions = actions_for(contract_signed="yes", willingness_to_pay="no")
        assert actions[0].text == "PEND account to prevent additional exposure"

    def test_medium_future_asset(self):
        actions = actions_for(acquisition_date=FUTURE)
        assert [a.text for a in actions] == [
            "Work with Sales to get new contract signed before transition date",
            "Confirm with old owner they understand responsibility for pre-sale invoices",
            "Establish payment timeline with old owner before transition",
        ]

    def test_medium_future_stock(self):
        actions = actions_for(acquisition_date=FUTURE, sale_type="stock")
        assert actions[-1].text == "Confirm new owner understands they will assume all outstanding debt"

    def test_medium_future_contract_signed_skips_contract_action(self):
        actions = actions_for(acquisition_date=FUTURE, contract_signed="yes")
        assert actions[0].text.startswith("Confirm with old owner")

    def test_medium_asset_contract_ar(self):
        actions = actions_for(contract_signed="yes")
        assert actions[0].text == "Create new account for old entity to track pre-sale invoices separately"
        assert len(actions) == 3

    def test_medium_default(self):
        actions = actions_for(contract_signed="yes", outstanding_ar="no")
        assert actions[-1].confidence == Confidence.LOW

    def test_low_stock_contract(self):
        actions = actions_for(sale_type="stock", contract_signed="yes")
        assert actions[0].text == (
            "Update account information across all platforms (Salesforce, CBH App, Invoiced)"
        )
        assert actions[0].confidence == Confidence.HIGH

    def test_low_future_contract(self):
        actions = actions_for(acquisition_date=FUTURE, contract_signed="yes", outstanding_ar="no")
        assert [a.text for a in actions] == [
            "Coordinate transition plan with Sales and new owner",
            "Prepare account updates for transition date",
        ]

    def test_low_default_when_level_forced(self):
        facts = make_facts(contract_signed="yes", outstanding_ar="no")
        actions = priority_actions(facts, RiskLevel.LOW)
        assert actions[0].text == "Follow standard CHOW process - situation is low risk"


class TestConfidenceGuidance:
    """Tests for confidence guidance text."""

    def test_every_level_has_guidance(self):
        assert set(CONFIDENCE_GUIDANCE) == set(Confidence)

    def test_low_mentions_escalation(self):
        assert "Consider escalating" in CONFIDENCE_GUIDANCE[Confidence.LOW]
