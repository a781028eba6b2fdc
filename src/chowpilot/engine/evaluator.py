"""
ChowPilot Evaluator

The pipeline that turns one case into a complete action plan:

    normalize -> classify -> narratives -> checklist -> alerts -> documents

``today`` is read once per evaluation so every stage agrees on timing.
"""
from __future__ import annotations

import logging
import time
from datetime import date
from typing import Any, Optional, Union

from ..models import CaseInput, EvaluationResult
from .alerts import build_alerts
from .checklist_builder import build_checklist
from .formatter import (
    DEFAULT_ESCALATION_CONTACTS,
    format_full_document,
    format_stage_documents,
)
from .narratives import key_focus, priority_actions, scenario_description
from .normalizer import normalize
from .risk_classifier import classify

logger = logging.getLogger(__name__)


def evaluate(
    case: Union[CaseInput, dict[str, Any]],
    today: Optional[date] = None,
    escalation_contacts: str = DEFAULT_ESCALATION_CONTACTS,
) -> EvaluationResult:
    """
    Evaluate a CHOW case.

    Args:
        case: CaseInput or raw camelCase form data
        today: Evaluation date (defaults to the local date, read once)
        escalation_contacts: Names in the full document's escalation reminder

    Returns:
        EvaluationResult with risk, narratives, checklist, alerts and documents

    Raises:
        InvalidCaseInputError: If raw data fails validation
    """
    start = time.perf_counter()

    if not isinstance(case, CaseInput):
        case = CaseInput.from_dict(case)
    if today is None:
        today = date.today()

    facts = normalize(case, today)
    risk = classify(facts)
    focus = key_focus(facts, risk.level)
    actions = priority_actions(facts, risk.level)
    checklist = build_checklist(facts, risk.level)
    alerts = build_alerts(facts)

    result = EvaluationResult(
        case=case,
        today=today,
        risk=risk,
        scenario=scenario_description(facts),
        key_focus=focus,
        priority_actions=tuple(actions),
        checklist=checklist,
        alerts=tuple(alerts),
        full_document=format_full_document(
            facts, risk, focus, actions, checklist, alerts,
            escalation_contacts=escalation_contacts,
        ),
        stage_documents=format_stage_documents(case, checklist),
    )

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.info(
        "CHOW evaluated: %s risk=%s rule=%s",
        case.case_ref,
        risk.level.value,
        risk.rule_id,
        extra={
            "case_ref": case.case_ref,
            "risk_level": risk.level.value,
            "rule_id": risk.rule_id,
            "duration_ms": duration_ms,
        },
    )
    return result
