"""
ChowPilot Case Input Schema

Pydantic model for validating raw case input (form submissions,
YAML/JSON case files, API request bodies).

The wire format uses the camelCase keys of the intake form
(``acquisitionDate``, ``saleType``, ...). Snake_case keys are accepted too.

Optional categorical fields fall back to their baseline values when they
are missing or null:
- financialDistress, willingnessToPay -> "unknown"
- blacklisted -> "none"
- badDebt -> "no"

acquisitionDate keeps only the calendar date; a time of day is dropped.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Enums as Literals (for input validation)
# =============================================================================

SaleTypeValue = Literal["asset", "stock", "unknown"]

ContractStatusValue = Literal["yes", "no", "unknown"]

YesNoValue = Literal["yes", "no"]

YesNoUnknownValue = Literal["yes", "no", "unknown"]

BlacklistValue = Literal["none", "old", "new", "both"]


# =============================================================================
# Case Input
# =============================================================================

# Fields that drive the rules; descriptive fields pass through untouched
CATEGORICAL_FIELDS = (
    "sale_type",
    "contract_signed",
    "outstanding_ar",
    "future_booked_shifts",
    "financial_distress",
    "willingness_to_pay",
    "blacklisted",
    "bad_debt",
)


class CaseInputSchema(BaseModel):
    """Schema for one CHOW case as submitted by the intake form."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    # Categorical facts (drive the rules)
    acquisition_date: date = Field(..., alias="acquisitionDate", description="Closing date (YYYY-MM-DD)")
    sale_type: SaleTypeValue = Field(..., alias="saleType")
    contract_signed: ContractStatusValue = Field(..., alias="contractSigned")
    outstanding_ar: YesNoValue = Field(..., alias="outstandingAR")
    future_booked_shifts: YesNoValue = Field(..., alias="futureBookedShifts")
    financial_distress: YesNoUnknownValue = Field("unknown", alias="financialDistress")
    willingness_to_pay: YesNoUnknownValue = Field("unknown", alias="willingnessToPay")
    blacklisted: BlacklistValue = Field("none", alias="blacklisted")
    bad_debt: YesNoValue = Field("no", alias="badDebt")

    # Descriptive fields (pass-through only)
    old_owner_name: str = Field("", alias="oldOwnerName")
    new_owner_name: str = Field("", alias="newOwnerName")
    affected_facilities: str = Field("", alias="affectedFacilities", description="One facility per line")
    new_facility_names: str = Field("", alias="newFacilityNames", description="One name per line")
    new_owner_contact: str = Field("", alias="newOwnerContact")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat null values as missing so baseline defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator(*CATEGORICAL_FIELDS, mode="before")
    @classmethod
    def normalize_answer(cls, value: Any) -> Any:
        """
        Trim answers; YAML reads bare yes/no as booleans, map them back.
        """
        if isinstance(value, bool):
            return "yes" if value else "no"
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("acquisition_date", mode="before")
    @classmethod
    def date_only(cls, value: Any) -> Any:
        """
        Strip time of day from datetimes and ISO datetime strings.

        Numbers are rejected rather than read as Unix timestamps.
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, (int, float)):
            raise ValueError("acquisitionDate must be a date (YYYY-MM-DD), not a number")
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text).date()
            except ValueError:
                return text
        return value


def validate_case_input(data: dict[str, Any]) -> CaseInputSchema:
    """
    Validate raw case data against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return CaseInputSchema.model_validate(data)
