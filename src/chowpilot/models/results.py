"""
ChowPilot Result Models

Models for the output of the decision engine: the risk rating, the
narrative pieces, the staged checklist and the alerts.

Every result is a pure function of one CaseInput and the evaluation date.
Nothing here is stored between evaluations.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterator, Optional

from .case import CaseInput
from .enums import (
    AlertType,
    ChecklistStage,
    Confidence,
    RiskLevel,
    TaskLabel,
)


# =============================================================================
# Risk
# =============================================================================

@dataclass(frozen=True)
class RiskResult:
    """
    Risk classification with its justification.

    Attributes:
        level: Discrete risk level
        reasons: Justification strings in rule-evaluation order
        rule_id: Identifier of the rule that produced the level
    """
    level: RiskLevel
    reasons: tuple[str, ...]
    rule_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "reasons": list(self.reasons),
            "rule_id": self.rule_id,
        }


# =============================================================================
# Priority Actions
# =============================================================================

@dataclass(frozen=True)
class Action:
    """A recommended action with its editorial confidence."""
    text: str
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "confidence": self.confidence.value}


# =============================================================================
# Checklist
# =============================================================================

@dataclass(frozen=True)
class ChecklistTask:
    """
    A single checklist line.

    Attributes:
        text: What to do
        completed: Already answered by the intake form
        note: Inline annotation rendered after the text
        label: Owning team, if any
    """
    text: str
    completed: bool = False
    note: Optional[str] = None
    label: Optional[TaskLabel] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "completed": self.completed,
            "note": self.note,
            "label": self.label.value if self.label else None,
        }


@dataclass(frozen=True)
class Checklist:
    """Four ordered stages of checklist tasks."""
    pre_outreach: tuple[ChecklistTask, ...] = ()
    outreach: tuple[ChecklistTask, ...] = ()
    post_outreach: tuple[ChecklistTask, ...] = ()
    continuous: tuple[ChecklistTask, ...] = ()

    def stage(self, stage: ChecklistStage) -> tuple[ChecklistTask, ...]:
        """Tasks for one stage."""
        return {
            ChecklistStage.PRE_OUTREACH: self.pre_outreach,
            ChecklistStage.OUTREACH: self.outreach,
            ChecklistStage.POST_OUTREACH: self.post_outreach,
            ChecklistStage.CONTINUOUS: self.continuous,
        }[stage]

    def stages(self) -> Iterator[tuple[ChecklistStage, tuple[ChecklistTask, ...]]]:
        """Iterate (stage, tasks) in fixed stage order."""
        for stage in ChecklistStage:
            yield stage, self.stage(stage)

    def to_dict(self) -> dict[str, Any]:
        return {
            stage.value: [task.to_dict() for task in tasks]
            for stage, tasks in self.stages()
        }


# =============================================================================
# Alerts
# =============================================================================

@dataclass(frozen=True)
class Alert:
    """A standalone warning or critical notice."""
    type: AlertType
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text}


# =============================================================================
# Evaluation Result
# =============================================================================

@dataclass(frozen=True)
class EvaluationResult:
    """
    Complete output of one evaluation.

    Attributes:
        case: The evaluated input
        today: Evaluation date used for timing
        risk: Risk classification
        scenario: One-line scenario label
        key_focus: Guidance paragraph
        priority_actions: Ordered recommended actions
        checklist: Four-stage checklist
        alerts: Standalone notices
        full_document: Markdown document for the whole plan
        stage_documents: Markdown per non-empty stage, keyed stage1..stage4
    """
    case: CaseInput
    today: date
    risk: RiskResult
    scenario: str
    key_focus: str
    priority_actions: tuple[Action, ...]
    checklist: Checklist
    alerts: tuple[Alert, ...]
    full_document: str
    stage_documents: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "case": self.case.to_dict(),
            "today": self.today.isoformat(),
            "risk": self.risk.to_dict(),
            "scenario": self.scenario,
            "keyFocus": self.key_focus,
            "priorityActions": [a.to_dict() for a in self.priority_actions],
            "checklist": self.checklist.to_dict(),
            "alerts": [a.to_dict() for a in self.alerts],
            "fullDocument": self.full_document,
            "stageDocuments": dict(self.stage_documents),
        }
