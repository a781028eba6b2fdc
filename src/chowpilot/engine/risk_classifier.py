"""
ChowPilot Risk Classifier

Maps normalized facts to a discrete risk level with justification strings.

Risk = financial exposure x likelihood of loss:
- No exposure ($0 AR, no FBS) is LOW whatever else is true
- Stock sale with signed contract is LOW (new owner committed and takes the debt)
- HIGH needs both exposure and a danger signal

Rules are evaluated in order, first match wins. Each row builds its own
level and reasons; conditional notes are appended inside the row.
"""
from __future__ import annotations

import logging

from ..models import RiskLevel, RiskResult
from .cascade import Rule, always, first_match
from .normalizer import Facts

logger = logging.getLogger(__name__)

_Outcome = tuple[RiskLevel, list[str]]


# =============================================================================
# Low-risk rows
# =============================================================================

def _no_exposure(f: Facts) -> _Outcome:
    reasons = ["No financial exposure ($0 AR, no future booked shifts)"]
    if f.new_owner_blacklisted:
        reasons.append("Note: New owner is blacklisted - relationship cannot continue")
        return RiskLevel.MEDIUM, reasons
    return RiskLevel.LOW, reasons


def _stock_sale_contract(f: Facts) -> _Outcome:
    reasons = ["Stock sale with signed contract - new owner assumes debt and is committed"]
    if f.has_distress:
        reasons.append("Note: Financial distress signals present, but new owner has signed contract")
    if f.new_owner_blacklisted:
        reasons.append("Warning: New owner is blacklisted - escalate to collections team")
        return RiskLevel.HIGH, reasons
    return RiskLevel.LOW, reasons


def _future_contract(f: Facts) -> _Outcome:
    reasons = ["Future CHOW with contract already signed - time to prepare"]
    if f.is_asset_sale and f.has_ar:
        reasons.append("Asset sale with AR - need to confirm old owner payment plan")
        return RiskLevel.MEDIUM, reasons
    return RiskLevel.LOW, reasons


# =============================================================================
# High-risk rows
# =============================================================================

def _past_no_contract(f: Facts) -> _Outcome:
    reasons = ["Past CHOW with no contract and financial exposure"]
    if f.is_unknown_sale:
        reasons.append("Sale type unknown - cannot determine who is responsible for debt")
    return RiskLevel.HIGH, reasons


# =============================================================================
# Medium-risk rows
# =============================================================================

def _future_no_contract(f: Facts) -> _Outcome:
    reasons = ["Future CHOW without signed contract but time to act"]
    if f.has_distress and f.is_asset_sale:
        reasons.append("Financial distress with asset sale - prioritize securing new contract")
    return RiskLevel.MEDIUM, reasons


def _asset_contract_ar(f: Facts) -> _Outcome:
    reasons = ["Asset sale with contract - need to collect from old owner"]
    if f.has_distress:
        # Stays medium: the signed contract protects the new relationship
        reasons.append("Financial distress signals - old owner may have difficulty paying")
    return RiskLevel.MEDIUM, reasons


def _fixed(level: RiskLevel, reason: str):
    return lambda f: (level, [reason])


# =============================================================================
# Rule Table
# =============================================================================

RISK_RULES: tuple[Rule[Facts, _Outcome], ...] = (
    Rule("no_exposure", lambda f: not f.has_exposure, _no_exposure),
    Rule("stock_sale_contract", lambda f: f.is_stock_sale and f.contract_signed, _stock_sale_contract),
    Rule(
        "future_contract",
        lambda f: f.is_future and f.contract_signed and not f.new_owner_blacklisted,
        _future_contract,
    ),
    Rule(
        "new_owner_blacklisted",
        lambda f: f.new_owner_blacklisted and f.has_exposure,
        _fixed(RiskLevel.HIGH, "New owner is blacklisted with financial exposure - cannot safely continue"),
    ),
    Rule(
        "past_no_contract",
        lambda f: f.is_past and f.contract_missing and f.has_exposure,
        _past_no_contract,
    ),
    Rule(
        "asset_distress_ar",
        lambda f: f.is_asset_sale and f.has_distress and f.has_ar,
        _fixed(RiskLevel.HIGH, "Asset sale with financial distress and outstanding AR - old owner unlikely to pay"),
    ),
    Rule(
        "unwilling_ar",
        lambda f: f.unwilling_to_pay and f.has_ar,
        _fixed(RiskLevel.HIGH, "Responsible party indicates unwillingness to pay with outstanding AR"),
    ),
    Rule(
        "unknown_sale_past",
        lambda f: f.is_unknown_sale and f.has_exposure and f.is_past,
        _fixed(RiskLevel.HIGH, "Past CHOW with unknown sale type - unclear who is responsible for debt"),
    ),
    Rule(
        "bad_debt_stock",
        lambda f: f.in_bad_debt and f.is_stock_sale and not f.contract_signed,
        _fixed(RiskLevel.HIGH, "Account in bad debt collections with stock sale and no new contract"),
    ),
    Rule(
        "future_no_contract",
        lambda f: f.is_future and not f.contract_signed and f.has_exposure,
        _future_no_contract,
    ),
    Rule(
        "stock_no_contract",
        lambda f: f.is_stock_sale and not f.contract_signed and f.has_exposure,
        _fixed(RiskLevel.MEDIUM, "Stock sale without contract - new owner would assume debt but needs to commit"),
    ),
    Rule(
        "asset_contract_ar",
        lambda f: f.is_asset_sale and f.contract_signed and f.has_ar,
        _asset_contract_ar,
    ),
    Rule(
        "unknown_willingness_ar",
        lambda f: f.unknown_willingness and f.has_ar,
        _fixed(RiskLevel.MEDIUM, "Unknown willingness to pay with outstanding AR"),
    ),
    Rule(
        "old_owner_blacklisted",
        lambda f: f.old_owner_blacklisted and f.has_ar and f.is_asset_sale,
        _fixed(RiskLevel.MEDIUM, "Old owner blacklisted - may affect collection of pre-sale debt"),
    ),
    Rule(
        "unknown_contract",
        lambda f: f.unknown_contract and f.has_exposure,
        _fixed(RiskLevel.MEDIUM, "Contract status unknown with financial exposure"),
    ),
    Rule("default", always, _fixed(RiskLevel.MEDIUM, "Standard CHOW scenario - follow normal process")),
)


def classify(facts: Facts) -> RiskResult:
    """Classify risk for the given facts."""
    rule_id, (level, reasons) = first_match(RISK_RULES, facts)
    logger.debug(
        "Risk rule matched: %s -> %s",
        rule_id,
        level.value,
        extra={"rule_id": rule_id, "risk_level": level.value, "case_ref": facts.case.case_ref},
    )
    return RiskResult(level=level, reasons=tuple(reasons), rule_id=rule_id)
