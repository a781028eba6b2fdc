"""
ChowPilot Case Model

CaseInput is the sole input entity of the decision engine. It is immutable
for the duration of one evaluation and carries no identity or lifecycle.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from pydantic import ValidationError

from ..exceptions import InvalidCaseInputError
from .enums import (
    BlacklistStatus,
    ContractStatus,
    SaleType,
    YesNo,
    YesNoUnknown,
)
from .schema import validate_case_input


@dataclass(frozen=True)
class CaseInput:
    """
    Business facts about one change-of-ownership event.

    Attributes:
        acquisition_date: Transaction closing date
        sale_type: Legal structure of the sale
        contract_signed: Whether the new owner signed a service contract
        outstanding_ar: Pre-sale accounts receivable exposure exists
        future_booked_shifts: Forward-looking service exposure exists
        financial_distress: Signals the responsible owner cannot pay
        willingness_to_pay: Responsible party's stated intent to pay
        blacklisted: Collections blacklist status per party
        bad_debt: Account already in collections
        old_owner_name..new_owner_contact: Free text, no branching logic
    """
    acquisition_date: date
    sale_type: SaleType
    contract_signed: ContractStatus
    outstanding_ar: YesNo
    future_booked_shifts: YesNo
    financial_distress: YesNoUnknown = YesNoUnknown.UNKNOWN
    willingness_to_pay: YesNoUnknown = YesNoUnknown.UNKNOWN
    blacklisted: BlacklistStatus = BlacklistStatus.NONE
    bad_debt: YesNo = YesNo.NO

    old_owner_name: str = ""
    new_owner_name: str = ""
    affected_facilities: str = ""
    new_facility_names: str = ""
    new_owner_contact: str = ""

    @property
    def case_ref(self) -> str:
        """Short reference used in logs and error messages."""
        old = self.old_owner_name or "Unknown"
        new = self.new_owner_name or "Unknown"
        return f"{old} → {new}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CaseInput":
        """
        Build a CaseInput from raw form data.

        Accepts camelCase (wire) or snake_case keys.

        Raises:
            InvalidCaseInputError: If any field is outside its declared domain
        """
        if not isinstance(data, dict):
            raise InvalidCaseInputError(
                message="Case input must be a mapping",
                details={"received_type": type(data).__name__},
            )
        try:
            schema = validate_case_input(data)
        except ValidationError as e:
            raise InvalidCaseInputError(
                message=f"Case input validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        return cls(
            acquisition_date=schema.acquisition_date,
            sale_type=SaleType(schema.sale_type),
            contract_signed=ContractStatus(schema.contract_signed),
            outstanding_ar=YesNo(schema.outstanding_ar),
            future_booked_shifts=YesNo(schema.future_booked_shifts),
            financial_distress=YesNoUnknown(schema.financial_distress),
            willingness_to_pay=YesNoUnknown(schema.willingness_to_pay),
            blacklisted=BlacklistStatus(schema.blacklisted),
            bad_debt=YesNo(schema.bad_debt),
            old_owner_name=schema.old_owner_name,
            new_owner_name=schema.new_owner_name,
            affected_facilities=schema.affected_facilities,
            new_facility_names=schema.new_facility_names,
            new_owner_contact=schema.new_owner_contact,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire form."""
        return {
            "oldOwnerName": self.old_owner_name,
            "newOwnerName": self.new_owner_name,
            "affectedFacilities": self.affected_facilities,
            "newFacilityNames": self.new_facility_names,
            "newOwnerContact": self.new_owner_contact,
            "acquisitionDate": self.acquisition_date.isoformat(),
            "saleType": self.sale_type.value,
            "contractSigned": self.contract_signed.value,
            "outstandingAR": self.outstanding_ar.value,
            "futureBookedShifts": self.future_booked_shifts.value,
            "financialDistress": self.financial_distress.value,
            "willingnessToPay": self.willingness_to_pay.value,
            "blacklisted": self.blacklisted.value,
            "badDebt": self.bad_debt.value,
        }
