"""
ChowPilot Alert Generator

Standalone notices that must be read before acting, independent of the
risk level. Guards are evaluated in order and every matching one emits.
"""
from __future__ import annotations

from ..models import Alert, AlertType, BlacklistStatus
from .normalizer import Facts


NEW_OWNER_BLACKLISTED = (
    "NEW OWNER IS BLACKLISTED: Must inform Erick, Gayah, and Mike Amicucci in "
    "#collections-team before proceeding. Mike will determine if services can continue."
)

OLD_OWNER_BLACKLISTED = (
    "Old owner is blacklisted. If facility was previously blacklisted, follow Process "
    "of Reinstatement SOP. Accounts with debt under $5k and reliable payment history "
    "may be reinstated."
)

IN_BAD_DEBT = (
    "Account is in Bad Debt (Handled by Internet Bad Debts Collections). Additional "
    "steps required before re-enrollment - see Bad Debt section of SOP."
)

FINANCIAL_DISTRESS = (
    "Financial distress signals detected. Higher risk of non-payment. Consider "
    "escalating to Charlie for guidance on approach."
)


def build_alerts(facts: Facts) -> list[Alert]:
    """Alerts for the case, critical first."""
    alerts = []

    if facts.new_owner_blacklisted:
        alerts.append(Alert(AlertType.CRITICAL, NEW_OWNER_BLACKLISTED))

    # Exactly "old": with "both" the critical alert already covers it
    if facts.case.blacklisted == BlacklistStatus.OLD:
        alerts.append(Alert(AlertType.WARNING, OLD_OWNER_BLACKLISTED))

    if facts.in_bad_debt:
        alerts.append(Alert(AlertType.WARNING, IN_BAD_DEBT))

    if facts.has_distress:
        alerts.append(Alert(AlertType.WARNING, FINANCIAL_DISTRESS))

    return alerts
