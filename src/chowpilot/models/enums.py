"""
ChowPilot Enumerations

All enumeration types used throughout the ChowPilot system.
Organized by domain area for clarity.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Case Input Domains
# =============================================================================

class SaleType(str, Enum):
    """Legal structure of the ownership transfer."""
    ASSET = "asset"                    # Buyer takes assets, seller keeps liabilities
    STOCK = "stock"                    # Buyer takes the legal entity and its debt
    UNKNOWN = "unknown"


class ContractStatus(str, Enum):
    """Whether the new owner has a signed service contract."""
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"


class YesNo(str, Enum):
    """Binary answer."""
    YES = "yes"
    NO = "no"


class YesNoUnknown(str, Enum):
    """Binary answer that may not be known yet."""
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"


class BlacklistStatus(str, Enum):
    """Collections blacklist status per party."""
    NONE = "none"
    OLD = "old"                        # Old owner only
    NEW = "new"                        # New owner only
    BOTH = "both"


# =============================================================================
# Derived Facts
# =============================================================================

class Timing(str, Enum):
    """Whether the acquisition has already closed."""
    PAST = "past"                      # On or before today
    FUTURE = "future"


# =============================================================================
# Outputs
# =============================================================================

class RiskLevel(str, Enum):
    """Discrete risk classification. Not a probability."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Confidence(str, Enum):
    """
    Editorial confidence attached to a priority action.

    Fixed per rule branch, never computed.
    """
    HIGH = "high"                      # Standard response, follow it
    MEDIUM = "medium"                  # Reasonable, context matters
    LOW = "low"                        # Unusual, multiple valid paths


class TaskLabel(str, Enum):
    """Team that owns a checklist task."""
    BILLING = "billing"
    SALES = "sales"
    ESCALATE = "escalate"


class AlertType(str, Enum):
    """Severity of a standalone alert."""
    WARNING = "warning"
    CRITICAL = "critical"


class ChecklistStage(str, Enum):
    """
    Checklist stages in their fixed order.

    The value is the stage key used in documents and APIs.
    """
    PRE_OUTREACH = "stage1"
    OUTREACH = "stage2"
    POST_OUTREACH = "stage3"
    CONTINUOUS = "stage4"

    @property
    def heading(self) -> str:
        return _STAGE_HEADINGS[self]


_STAGE_HEADINGS = {
    ChecklistStage.PRE_OUTREACH: "Stage 1: Pre-Outreach",
    ChecklistStage.OUTREACH: "Stage 2: Outreach",
    ChecklistStage.POST_OUTREACH: "Stage 3: Post-Outreach",
    ChecklistStage.CONTINUOUS: "Stage 4: Continuous",
}
