"""
Tests for ChowPilot models.

Tests cover:
- CaseInput validation from wire data
- Baseline defaults
- Serialization
- Result model helpers
- Exception formatting
"""
import pytest
from datetime import date, datetime

from chowpilot import evaluate
from chowpilot.exceptions import (
    ChowPilotError,
    InvalidCaseInputError,
    TicketingNotConnectedError,
    TicketingError,
)
from chowpilot.models import (
    BlacklistStatus,
    CaseInput,
    Checklist,
    ChecklistStage,
    ChecklistTask,
    ContractStatus,
    RiskLevel,
    SaleType,
    TaskLabel,
    YesNo,
    YesNoUnknown,
)

from helpers import PAST, case_payload, make_case


# =============================================================================
# CaseInput Validation
# =============================================================================

class TestCaseInputFromDict:
    """Tests for building CaseInput from form data."""

    def test_camel_case_keys(self):
        case = CaseInput.from_dict({
            "acquisitionDate": "2025-06-01",
            "saleType": "stock",
            "contractSigned": "unknown",
            "outstandingAR": "yes",
            "futureBookedShifts": "no",
            "oldOwnerName": "Sunrise Care LLC",
        })
        assert case.acquisition_date == date(2025, 6, 1)
        assert case.sale_type == SaleType.STOCK
        assert case.contract_signed == ContractStatus.UNKNOWN
        assert case.outstanding_ar == YesNo.YES
        assert case.future_booked_shifts == YesNo.NO
        assert case.old_owner_name == "Sunrise Care LLC"

    def test_snake_case_keys(self):
        case = CaseInput.from_dict({
            "acquisition_date": "2025-06-01",
            "sale_type": "asset",
            "contract_signed": "yes",
            "outstanding_ar": "no",
            "future_booked_shifts": "yes",
        })
        assert case.sale_type == SaleType.ASSET
        assert case.contract_signed == ContractStatus.YES

    def test_date_object_accepted(self):
        case = CaseInput.from_dict(case_payload(acquisitionDate=PAST))
        assert case.acquisition_date == PAST

    def test_baseline_defaults_applied(self):
        case = CaseInput.from_dict({
            "acquisitionDate": "2025-06-01",
            "saleType": "asset",
            "contractSigned": "no",
            "outstandingAR": "yes",
            "futureBookedShifts": "yes",
        })
        assert case.financial_distress == YesNoUnknown.UNKNOWN
        assert case.willingness_to_pay == YesNoUnknown.UNKNOWN
        assert case.blacklisted == BlacklistStatus.NONE
        assert case.bad_debt == YesNo.NO
        assert case.old_owner_name == ""

    def test_null_values_fall_back_to_defaults(self):
        case = CaseInput.from_dict(case_payload(financialDistress=None, blacklisted=None))
        assert case.financial_distress == YesNoUnknown.UNKNOWN
        assert case.blacklisted == BlacklistStatus.NONE

    def test_unknown_keys_ignored(self):
        case = CaseInput.from_dict(case_payload(notes="extra"))
        assert case.sale_type == SaleType.ASSET

    def test_out_of_domain_value_rejected(self):
        with pytest.raises(InvalidCaseInputError) as exc_info:
            CaseInput.from_dict(case_payload(saleType="merger"))
        error = exc_info.value
        assert error.code == "CHOW_INVALID_CASE_INPUT"
        locs = [e["loc"] for e in error.details["errors"]]
        assert ("saleType",) in locs

    def test_missing_required_field_rejected(self):
        payload = case_payload()
        del payload["outstandingAR"]
        with pytest.raises(InvalidCaseInputError):
            CaseInput.from_dict(payload)

    def test_bad_date_rejected(self):
        with pytest.raises(InvalidCaseInputError):
            CaseInput.from_dict(case_payload(acquisitionDate="next tuesday"))

    def test_datetime_string_truncated_to_date(self):
        case = CaseInput.from_dict(case_payload(acquisitionDate="2025-01-15T10:30:00"))
        assert case.acquisition_date == date(2025, 1, 15)

    def test_utc_datetime_string_truncated_to_date(self):
        case = CaseInput.from_dict(case_payload(acquisitionDate="2025-01-15T23:59:00Z"))
        assert case.acquisition_date == date(2025, 1, 15)

    def test_datetime_object_truncated_to_date(self):
        case = CaseInput.from_dict(case_payload(acquisitionDate=datetime(2025, 1, 15, 10, 30)))
        assert case.acquisition_date == date(2025, 1, 15)

    def test_datetime_on_evaluation_day_is_past(self):
        result = evaluate(case_payload(acquisitionDate="2025-01-15T10:30:00"), today=date(2025, 1, 15))
        assert result.checklist.pre_outreach[2].note == "PAST"
        assert result.risk.rule_id == "past_no_contract"

    @pytest.mark.parametrize("value", [1736899200, 1736899200.0, True])
    def test_numeric_date_rejected(self, value):
        with pytest.raises(InvalidCaseInputError) as exc_info:
            CaseInput.from_dict(case_payload(acquisitionDate=value))
        locs = [e["loc"] for e in exc_info.value.details["errors"]]
        assert ("acquisitionDate",) in locs

    def test_categorical_answers_trimmed(self):
        case = CaseInput.from_dict(case_payload(saleType=" stock ", blacklisted="old\n"))
        assert case.sale_type == SaleType.STOCK
        assert case.blacklisted == BlacklistStatus.OLD

    def test_boolean_answers_mapped(self):
        case = CaseInput.from_dict(case_payload(outstandingAR=True, badDebt=False))
        assert case.outstanding_ar == YesNo.YES
        assert case.bad_debt == YesNo.NO

    def test_boolean_name_rejected(self):
        with pytest.raises(InvalidCaseInputError) as exc_info:
            CaseInput.from_dict(case_payload(oldOwnerName=True))
        locs = [e["loc"] for e in exc_info.value.details["errors"]]
        assert ("oldOwnerName",) in locs

    def test_descriptive_fields_kept_verbatim(self):
        case = CaseInput.from_dict(case_payload(
            newOwnerContact="  Jane Doe <jane@example.com>\n",
            affectedFacilities="Sunrise Manor\nSunrise Gardens\n",
        ))
        assert case.new_owner_contact == "  Jane Doe <jane@example.com>\n"
        assert case.affected_facilities == "Sunrise Manor\nSunrise Gardens\n"

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidCaseInputError) as exc_info:
            CaseInput.from_dict(["asset"])
        assert exc_info.value.details["received_type"] == "list"


class TestCaseInputSerialization:
    """Tests for CaseInput.to_dict and helpers."""

    def test_to_dict_uses_wire_keys(self):
        data = make_case().to_dict()
        assert data["acquisitionDate"] == "2025-06-01"
        assert data["saleType"] == "asset"
        assert data["outstandingAR"] == "yes"
        assert data["badDebt"] == "no"

    def test_to_dict_is_accepted_by_from_dict(self):
        case = make_case(blacklisted="old", new_owner_contact="jane@example.com")
        assert CaseInput.from_dict(case.to_dict()) == case

    def test_case_ref(self):
        assert make_case().case_ref == "Sunrise Care LLC → Harbor Health Partners"

    def test_case_ref_blank_names(self):
        case = make_case(old_owner_name="", new_owner_name="")
        assert case.case_ref == "Unknown → Unknown"

    def test_case_is_immutable(self):
        case = make_case()
        with pytest.raises(AttributeError):
            case.sale_type = SaleType.STOCK


# =============================================================================
# Results
# =============================================================================

class TestChecklist:
    """Tests for Checklist helpers."""

    def test_stage_headings(self):
        assert ChecklistStage.PRE_OUTREACH.heading == "Stage 1: Pre-Outreach"
        assert ChecklistStage.CONTINUOUS.heading == "Stage 4: Continuous"

    def test_stages_in_fixed_order(self):
        checklist = Checklist(continuous=(ChecklistTask("c"),), pre_outreach=(ChecklistTask("a"),))
        keys = [stage.value for stage, _ in checklist.stages()]
        assert keys == ["stage1", "stage2", "stage3", "stage4"]

    def test_to_dict(self):
        task = ChecklistTask("Archive old account", label=TaskLabel.BILLING)
        data = Checklist(post_outreach=(task,)).to_dict()
        assert data["stage2"] == []
        assert data["stage3"] == [{
            "text": "Archive old account",
            "completed": False,
            "note": None,
            "label": "billing",
        }]

    def test_risk_levels_are_strings(self):
        assert RiskLevel.HIGH == "high"


# =============================================================================
# Exceptions
# =============================================================================

class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_str_includes_code_and_case(self):
        error = InvalidCaseInputError(message="bad input", case_ref="A → B")
        assert str(error) == "[CHOW_INVALID_CASE_INPUT] bad input (case: A → B)"

    def test_to_dict(self):
        error = ChowPilotError(message="boom", details={"k": 1})
        assert error.to_dict() == {
            "code": "CHOW_INTERNAL_ERROR",
            "message": "boom",
            "details": {"k": 1},
        }

    def test_ticketing_hierarchy(self):
        error = TicketingNotConnectedError(message="no key")
        assert isinstance(error, TicketingError)
        assert isinstance(error, ChowPilotError)
        assert error.code == "CHOW_TICKETING_NOT_CONNECTED"
