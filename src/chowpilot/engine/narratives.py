"""
ChowPilot Narrative Generators

Human-facing text derived from the facts and the risk level:
- scenario_description: one-line label ("Past CHOW | Asset Sale | ...")
- key_focus: the guidance paragraph
- priority_actions: ordered actions with editorial confidence

Confidence is fixed per branch:
- HIGH: clear-cut scenario, standard response, follow it
- MEDIUM: reasonable approach, context matters
- LOW: unusual scenario, consider escalating
"""
from __future__ import annotations

from dataclasses import dataclass

from ..models import Action, Confidence, RiskLevel
from .cascade import Rule, always, first_match
from .normalizer import Facts


CONFIDENCE_GUIDANCE: dict[Confidence, str] = {
    Confidence.HIGH: (
        "High confidence: This is a standard response for this scenario. "
        "Follow this action."
    ),
    Confidence.MEDIUM: (
        "Medium confidence: This is a reasonable approach, but context matters. "
        "Use your judgment based on the specific situation."
    ),
    Confidence.LOW: (
        "Low confidence: This is an unusual scenario with multiple valid approaches. "
        "Consider escalating to Louis Case or Charlie Eikenberg for guidance."
    ),
}


@dataclass(frozen=True)
class Assessment:
    """Facts paired with the classified risk level."""
    facts: Facts
    level: RiskLevel

    @property
    def high(self) -> bool:
        return self.level == RiskLevel.HIGH

    @property
    def medium(self) -> bool:
        return self.level == RiskLevel.MEDIUM


# =============================================================================
# Scenario Description
# =============================================================================

def scenario_description(facts: Facts) -> str:
    """One-line scenario label, parts joined by ' | '."""
    parts = ["Past CHOW" if facts.is_past else "Future CHOW"]

    if facts.is_asset_sale:
        parts.append("Asset Sale")
    elif facts.is_stock_sale:
        parts.append("Stock Sale")
    else:
        parts.append("Unknown Sale Type")

    if facts.has_ar:
        parts.append("Outstanding AR")
    if facts.has_fbs:
        parts.append("Has FBS")
    if facts.contract_signed:
        parts.append("Contract Signed")
    elif facts.no_contract:
        parts.append("No Contract")

    return " | ".join(parts)


# =============================================================================
# Key Focus
# =============================================================================

def _text(value: str):
    return lambda _a: value


KEY_FOCUS_RULES: tuple[Rule[Assessment, str], ...] = (
    Rule(
        "no_exposure",
        lambda a: not a.facts.has_ar and not a.facts.has_fbs,
        _text(
            "Low risk situation. No immediate financial exposure. Archive the old "
            "account and treat as standard new customer onboarding if they want to "
            "continue with Clipboard."
        ),
    ),
    Rule(
        "high_distress",
        lambda a: a.high and a.facts.has_distress,
        _text(
            "High-risk scenario. Old owner shows signs of financial distress and is "
            "unlikely to pay. Immediate action needed: PEND the account now, attempt "
            "contact to assess situation, and escalate to Charlie if no response."
        ),
    ),
    Rule(
        "high_past_no_contract_ar",
        lambda a: a.high and a.facts.is_past and a.facts.contract_missing and a.facts.has_ar,
        _text(
            "High-risk scenario. Ownership already changed with no contract and money "
            "owed. PEND immediately. Call old and new owners to understand the situation "
            "and determine path forward. Focus on securing a new contract or shutting "
            "down services."
        ),
    ),
    Rule(
        "high_new_owner_blacklisted",
        lambda a: a.high and a.facts.new_owner_blacklisted,
        _text(
            "Critical: New owner is blacklisted. Check for upcoming shifts and inform "
            "collections team (Erick, Gayah, Mike Amicucci). Mike will assess risk and "
            "determine if services can continue."
        ),
    ),
    Rule(
        "high_fbs_no_contract",
        lambda a: a.high and a.facts.has_fbs and a.facts.contract_missing,
        _text(
            "High-risk scenario. Future shifts are booked but no contract in place. "
            "PEND immediately to prevent additional exposure. Contact both parties "
            "urgently to clarify contract status."
        ),
    ),
    Rule(
        "medium_future_asset_ar",
        lambda a: (
            a.medium
            and a.facts.is_future
            and a.facts.is_asset_sale
            and a.facts.contract_missing
            and a.facts.has_ar
        ),
        _text(
            "Medium risk. CHOW is upcoming which gives time to act. Focus on confirming "
            "who is responsible for pre-sale debt and getting a new contract signed "
            "before the transition date."
        ),
    ),
    Rule(
        "medium_asset_contract_ar",
        lambda a: a.medium and a.facts.is_asset_sale and a.facts.contract_signed and a.facts.has_ar,
        _text(
            "Medium risk. Contract is in place but pre-sale AR needs attention. Create "
            "new account for old entity, transfer pre-sale invoices, and establish clear "
            "payment expectations with old owner."
        ),
    ),
    Rule(
        "stock_contract",
        lambda a: a.facts.is_stock_sale and a.facts.contract_signed,
        _text(
            "Stock sale with contract signed. New owner assumes all debt including "
            "pre-sale invoices. Update account information across platforms and confirm "
            "new owner understands payment expectations."
        ),
    ),
    Rule(
        "stock_no_contract",
        lambda a: a.facts.is_stock_sale and a.facts.contract_missing,
        _text(
            "Stock sale without contract. New owner would assume debt but needs to sign "
            "contract. PEND account until contract is secured. Focus on getting Sales to "
            "close the new contract."
        ),
    ),
    Rule(
        "default",
        always,
        _text(
            "Gather remaining information, confirm financial responsibility, and "
            "coordinate with Sales on contract status."
        ),
    ),
)


def key_focus(facts: Facts, level: RiskLevel) -> str:
    """Guidance paragraph for the scenario."""
    _, text = first_match(KEY_FOCUS_RULES, Assessment(facts, level))
    return text


# =============================================================================
# Priority Actions
# =============================================================================

H = Confidence.HIGH
M = Confidence.MEDIUM
L = Confidence.LOW


def _no_exposure_actions(a: Assessment) -> list[Action]:
    actions = [
        Action("Alert leadership of the CHOW", H),
        Action("Archive the account to prevent posting under new ownership without contract", H),
    ]
    if a.facts.new_owner_blacklisted:
        actions.append(Action("Inform collections team - new owner is blacklisted, relationship cannot continue", H))
    else:
        actions.append(Action("Sales treats this as standard new customer onboarding if they want to continue", H))
    return actions


def _high_past_no_contract_actions(a: Assessment) -> list[Action]:
    actions = [
        Action('PEND account immediately using "Change of ownership" reason', H),
        Action("Call old and new owners to assess situation and gather information", H),
    ]
    if a.facts.has_fbs:
        actions.append(Action("If no response within 24-48 hours, consider SUSPEND to prevent further exposure", M))
    actions.append(Action("Alert Sales about potential new contract opportunity", H))
    return actions


def _medium_future_actions(a: Assessment) -> list[Action]:
    f = a.facts
    actions = []
    if not f.contract_signed:
        actions.append(Action("Work with Sales to get new contract signed before transition date", H))
    if f.is_asset_sale and f.has_ar:
        actions.append(Action("Confirm with old owner they understand responsibility for pre-sale invoices", H))
        actions.append(Action("Establish payment timeline with old owner before transition", M))
    if f.is_unknown_sale:
        actions.append(Action("Determine sale type before transition to clarify debt responsibility", H))
    if f.is_stock_sale:
        actions.append(Action("Confirm new owner understands they will assume all outstanding debt", H))
    return actions


def _medium_asset_contract_ar_actions(a: Assessment) -> list[Action]:
    actions = [
        Action("Create new account for old entity to track pre-sale invoices separately", H),
        Action("Transfer pre-sale invoices to old entity account", H),
        Action("Establish payment plan with old owner for pre-sale debt", M),
    ]
    if a.facts.has_distress:
        actions.append(Action("Monitor old owner closely - distress signals present", M))
    return actions


def _low_future_contract_actions(a: Assessment) -> list[Action]:
    actions = [Action("Coordinate transition plan with Sales and new owner", H)]
    if a.facts.is_asset_sale and a.facts.has_ar:
        actions.append(Action("Confirm old owner payment plan for pre-sale invoices", M))
    actions.append(Action("Prepare account updates for transition date", H))
    return actions


def _fixed(*actions: Action):
    return lambda _a: list(actions)


# Rows after the medium block are only reached at LOW risk.
PRIORITY_ACTION_RULES: tuple[Rule[Assessment, list[Action]], ...] = (
    Rule("no_exposure", lambda a: not a.facts.has_exposure, _no_exposure_actions),
    Rule(
        "new_owner_blacklisted",
        lambda a: a.facts.new_owner_blacklisted,
        _fixed(
            Action("Check CBH App for upcoming shifts at affected facilities and document them", H),
            Action("Inform Erick, Gayah, and Mike Amicucci in #collections-team immediately", H),
            Action("Wait for Mike to assess risk and determine if services can continue", H),
        ),
    ),
    # High
    Rule(
        "high_past_no_contract",
        lambda a: a.high and a.facts.is_past and a.facts.contract_missing,
        _high_past_no_contract_actions,
    ),
    Rule(
        "high_asset_distress_ar",
        lambda a: a.high and a.facts.is_asset_sale and a.facts.has_distress and a.facts.has_ar,
        _fixed(
            Action("PEND account - old owner in distress unlikely to pay pre-sale debt", H),
            Action("Attempt contact with old owner to understand their situation and payment ability", M),
            Action("Prioritize getting new contract signed to protect ongoing relationship", H),
            Action("Consider escalating to Charlie if old owner is completely unresponsive", M),
        ),
    ),
    Rule(
        "high_unknown_sale",
        lambda a: a.high and a.facts.is_unknown_sale,
        _fixed(
            Action("URGENT: Determine sale type (asset vs stock) - this determines who owes the debt", H),
            Action("PEND account until sale type is confirmed", H),
            Action("Contact both old and new owners to clarify transaction structure", M),
        ),
    ),
    Rule(
        "high_default",
        lambda a: a.high,
        _fixed(
            Action("PEND account to prevent additional exposure", H),
            Action("Escalate to leadership for guidance on approach", M),
            Action("Attempt contact with responsible party to assess payment likelihood", M),
        ),
    ),
    # Medium
    Rule("medium_future", lambda a: a.medium and a.facts.is_future, _medium_future_actions),
    Rule(
        "medium_stock_no_contract",
        lambda a: a.medium and a.facts.is_stock_sale and not a.facts.contract_signed,
        _fixed(
            Action("PEND account until new contract is signed", H),
            Action("New owner would assume debt - focus on getting contract signed quickly", H),
            Action("Alert Sales to prioritize this contract", M),
        ),
    ),
    Rule(
        "medium_asset_contract_ar",
        lambda a: a.medium and a.facts.is_asset_sale and a.facts.contract_signed and a.facts.has_ar,
        _medium_asset_contract_ar_actions,
    ),
    Rule(
        "medium_default",
        lambda a: a.medium,
        _fixed(
            Action("Confirm financial responsibility with appropriate party", M),
            Action("Coordinate with Sales on contract and account setup", M),
            Action("Consider PEND if situation is unclear - use your judgment", L),
        ),
    ),
    # Low
    Rule(
        "low_stock_contract",
        lambda a: a.facts.is_stock_sale and a.facts.contract_signed,
        _fixed(
            Action("Update account information across all platforms (Salesforce, CBH App, Invoiced)", H),
            Action("Confirm new owner understands they assume all outstanding debt", H),
            Action("Verify and update all child facility links", H),
        ),
    ),
    Rule(
        "low_future_contract",
        lambda a: a.facts.is_future and a.facts.contract_signed,
        _low_future_contract_actions,
    ),
    Rule(
        "low_default",
        always,
        _fixed(
            Action("Follow standard CHOW process - situation is low risk", H),
            Action("Confirm payment expectations with responsible party", M),
            Action("Tag leadership in Slack for visibility", H),
        ),
    ),
)


def priority_actions(facts: Facts, level: RiskLevel) -> list[Action]:
    """Ordered recommended actions for the scenario."""
    _, actions = first_match(PRIORITY_ACTION_RULES, Assessment(facts, level))
    return actions
