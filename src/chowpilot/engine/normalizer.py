"""
ChowPilot Input Normalizer

Derives the boolean facts every downstream stage reads from one CaseInput.
This is the only place enum comparisons against the raw input happen.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..models import (
    BlacklistStatus,
    CaseInput,
    ContractStatus,
    SaleType,
    Timing,
    YesNo,
    YesNoUnknown,
)


def get_timing(acquisition_date: date, today: date) -> Timing:
    """
    Classify the acquisition as past or future.

    Comparison is date-only; a closing date equal to today is PAST.
    """
    if isinstance(acquisition_date, datetime):
        acquisition_date = acquisition_date.date()
    if isinstance(today, datetime):
        today = today.date()
    return Timing.PAST if acquisition_date <= today else Timing.FUTURE


@dataclass(frozen=True)
class Facts:
    """Normalized view of a case for one evaluation date."""
    case: CaseInput
    today: date
    timing: Timing

    # Exposure
    has_ar: bool
    has_fbs: bool
    has_exposure: bool

    # Contract
    contract_signed: bool
    no_contract: bool
    unknown_contract: bool

    # Sale type
    is_asset_sale: bool
    is_stock_sale: bool
    is_unknown_sale: bool

    # Payment signals
    has_distress: bool
    unknown_distress: bool
    unwilling_to_pay: bool
    willing_to_pay: bool
    unknown_willingness: bool

    # Collections
    new_owner_blacklisted: bool
    old_owner_blacklisted: bool
    in_bad_debt: bool

    @property
    def is_past(self) -> bool:
        return self.timing == Timing.PAST

    @property
    def is_future(self) -> bool:
        return self.timing == Timing.FUTURE

    @property
    def contract_missing(self) -> bool:
        """Contract answer is no or unknown."""
        return self.no_contract or self.unknown_contract


def normalize(case: CaseInput, today: date) -> Facts:
    """Build the Facts for a case as of ``today``."""
    has_ar = case.outstanding_ar == YesNo.YES
    has_fbs = case.future_booked_shifts == YesNo.YES

    return Facts(
        case=case,
        today=today,
        timing=get_timing(case.acquisition_date, today),
        has_ar=has_ar,
        has_fbs=has_fbs,
        has_exposure=has_ar or has_fbs,
        contract_signed=case.contract_signed == ContractStatus.YES,
        no_contract=case.contract_signed == ContractStatus.NO,
        unknown_contract=case.contract_signed == ContractStatus.UNKNOWN,
        is_asset_sale=case.sale_type == SaleType.ASSET,
        is_stock_sale=case.sale_type == SaleType.STOCK,
        is_unknown_sale=case.sale_type == SaleType.UNKNOWN,
        has_distress=case.financial_distress == YesNoUnknown.YES,
        unknown_distress=case.financial_distress == YesNoUnknown.UNKNOWN,
        unwilling_to_pay=case.willingness_to_pay == YesNoUnknown.NO,
        willing_to_pay=case.willingness_to_pay == YesNoUnknown.YES,
        unknown_willingness=case.willingness_to_pay == YesNoUnknown.UNKNOWN,
        new_owner_blacklisted=case.blacklisted in (BlacklistStatus.NEW, BlacklistStatus.BOTH),
        old_owner_blacklisted=case.blacklisted in (BlacklistStatus.OLD, BlacklistStatus.BOTH),
        in_bad_debt=case.bad_debt == YesNo.YES,
    )
