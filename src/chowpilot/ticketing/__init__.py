"""
ChowPilot Ticketing

Issue tracker (Linear) integration for publishing action plans.
"""
from __future__ import annotations

from .linear import STATE_ORDER, LinearClient, default_issue_title
from .settings import (
    API_KEY_PREFIX,
    TicketingSettings,
    TicketingSettingsStore,
    looks_like_api_key,
    redact_api_key,
)


__all__ = [
    "API_KEY_PREFIX",
    "STATE_ORDER",
    "LinearClient",
    "TicketingSettings",
    "TicketingSettingsStore",
    "default_issue_title",
    "looks_like_api_key",
    "redact_api_key",
]
