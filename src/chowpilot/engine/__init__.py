"""
ChowPilot Engine

Pure decision pipeline for change-of-ownership cases.

Stages:
- normalize: derive boolean facts and timing
- classify: first-match risk rule table
- scenario_description / key_focus / priority_actions: narratives
- build_checklist: four-stage checklist
- build_alerts: standalone notices
- format_full_document / format_stage_documents: markdown for tickets

Usage:
    from chowpilot.engine import evaluate

    result = evaluate(case, today=date(2025, 1, 15))
    print(result.risk.level, result.full_document)
"""
from __future__ import annotations

from .alerts import build_alerts
from .cascade import Rule, always, first_match
from .checklist_builder import build_checklist
from .evaluator import evaluate
from .formatter import (
    DEFAULT_ESCALATION_CONTACTS,
    format_full_document,
    format_stage_document,
    format_stage_documents,
    resolve_stage,
    stage_document,
)
from .narratives import (
    CONFIDENCE_GUIDANCE,
    KEY_FOCUS_RULES,
    PRIORITY_ACTION_RULES,
    key_focus,
    priority_actions,
    scenario_description,
)
from .normalizer import Facts, get_timing, normalize
from .risk_classifier import RISK_RULES, classify


__all__ = [
    # Pipeline
    "evaluate",
    # Normalizer
    "Facts",
    "get_timing",
    "normalize",
    # Rules
    "Rule",
    "always",
    "first_match",
    "RISK_RULES",
    "classify",
    # Narratives
    "CONFIDENCE_GUIDANCE",
    "KEY_FOCUS_RULES",
    "PRIORITY_ACTION_RULES",
    "key_focus",
    "priority_actions",
    "scenario_description",
    # Checklist and alerts
    "build_checklist",
    "build_alerts",
    # Formatter
    "DEFAULT_ESCALATION_CONTACTS",
    "format_full_document",
    "format_stage_document",
    "format_stage_documents",
    "resolve_stage",
    "stage_document",
]
