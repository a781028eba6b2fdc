"""
ChowPilot Models

All domain models for the ChowPilot CHOW action plan engine.

    from chowpilot.models import (
        # Enums
        SaleType, ContractStatus, BlacklistStatus, RiskLevel,
        # Input
        CaseInput,
        # Results
        RiskResult, Action, ChecklistTask, Checklist, Alert, EvaluationResult,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    AlertType,
    BlacklistStatus,
    ChecklistStage,
    Confidence,
    ContractStatus,
    RiskLevel,
    SaleType,
    TaskLabel,
    Timing,
    YesNo,
    YesNoUnknown,
)

# =============================================================================
# Input
# =============================================================================
from .schema import CaseInputSchema, validate_case_input
from .case import CaseInput

# =============================================================================
# Results
# =============================================================================
from .results import (
    Action,
    Alert,
    Checklist,
    ChecklistTask,
    EvaluationResult,
    RiskResult,
)


__all__ = [
    # Enums
    "AlertType",
    "BlacklistStatus",
    "ChecklistStage",
    "Confidence",
    "ContractStatus",
    "RiskLevel",
    "SaleType",
    "TaskLabel",
    "Timing",
    "YesNo",
    "YesNoUnknown",
    # Input
    "CaseInputSchema",
    "validate_case_input",
    "CaseInput",
    # Results
    "Action",
    "Alert",
    "Checklist",
    "ChecklistTask",
    "EvaluationResult",
    "RiskResult",
]
