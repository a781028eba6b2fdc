"""
ChowPilot Exception Hierarchy

Domain-specific exceptions for change-of-ownership (CHOW) action planning.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: CHOW_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ChowPilotError(Exception):
    """
    Base exception for all ChowPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (CHOW_*)
        details: Additional context about the error
        case_ref: Short case reference (old -> new owner) if applicable
    """
    message: str
    code: str = "CHOW_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    case_ref: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.case_ref:
            parts.append(f"(case: {self.case_ref})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.case_ref:
            result["case_ref"] = self.case_ref
        return result


# =============================================================================
# Case Input Errors
# =============================================================================

@dataclass
class InvalidCaseInputError(ChowPilotError):
    """Case input has a field outside its declared domain."""
    code: str = "CHOW_INVALID_CASE_INPUT"


@dataclass
class CaseLoadError(ChowPilotError):
    """Failed to read or parse a case file."""
    code: str = "CHOW_CASE_LOAD_ERROR"


# =============================================================================
# Output Errors
# =============================================================================

@dataclass
class UnknownStageError(ChowPilotError):
    """Requested checklist stage does not exist."""
    code: str = "CHOW_UNKNOWN_STAGE"


# =============================================================================
# Persistence Errors
# =============================================================================

@dataclass
class StateStoreError(ChowPilotError):
    """Saved form state could not be read or written."""
    code: str = "CHOW_STATE_STORE_ERROR"


# =============================================================================
# Ticketing Errors
# =============================================================================

@dataclass
class TicketingError(ChowPilotError):
    """Issue tracker integration failed."""
    code: str = "CHOW_TICKETING_ERROR"


@dataclass
class TicketingNotConnectedError(TicketingError):
    """Issue tracker has no API key or team configured."""
    code: str = "CHOW_TICKETING_NOT_CONNECTED"


@dataclass
class TicketingRequestError(TicketingError):
    """Issue tracker returned an HTTP or GraphQL error."""
    code: str = "CHOW_TICKETING_REQUEST_FAILED"
