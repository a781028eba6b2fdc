"""
ChowPilot - Change-of-Ownership (CHOW) Action Plan Engine

ChowPilot turns the facts of a facility change of ownership into a risk
rating and a staged action plan for the billing and sales teams.
It produces RECOMMENDATIONS, not decisions: the specialist decides.

Core Principle: "Risk = financial exposure x likelihood of loss."

Key Features:
- Deterministic first-match rule tables (no scoring, no learning)
- Risk level with justification strings
- Scenario label, key focus and confidence-annotated priority actions
- Four-stage checklist with team labels
- Blacklist, bad-debt and distress alerts
- Markdown documents for ticket creation (full plan and per stage)

Quick Start:
    from datetime import date
    from chowpilot import CaseInput, evaluate

    case = CaseInput.from_dict({
        "acquisitionDate": "2025-01-10",
        "saleType": "asset",
        "contractSigned": "no",
        "outstandingAR": "yes",
        "futureBookedShifts": "yes",
    })
    result = evaluate(case, today=date(2025, 1, 15))
    print(result.risk.level)          # RiskLevel.HIGH
    print(result.full_document)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "ChowPilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
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
    # Input
    CaseInput,
    # Results
    Action,
    Alert,
    Checklist,
    ChecklistTask,
    EvaluationResult,
    RiskResult,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import evaluate, get_timing

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    CaseLoadError,
    ChowPilotError,
    InvalidCaseInputError,
    StateStoreError,
    TicketingError,
    TicketingNotConnectedError,
    TicketingRequestError,
    UnknownStageError,
)


__all__ = [
    "__version__",
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
    # Models
    "CaseInput",
    "Action",
    "Alert",
    "Checklist",
    "ChecklistTask",
    "EvaluationResult",
    "RiskResult",
    # Engine
    "evaluate",
    "get_timing",
    # Exceptions
    "ChowPilotError",
    "InvalidCaseInputError",
    "CaseLoadError",
    "UnknownStageError",
    "StateStoreError",
    "TicketingError",
    "TicketingNotConnectedError",
    "TicketingRequestError",
]
