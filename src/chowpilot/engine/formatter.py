"""
ChowPilot Presentation Formatter

Markdown rendering of an evaluation for pasting into a ticket tracker:
- format_full_document: the whole action plan
- format_stage_document: one checklist stage with CHOW context
- format_stage_documents: every non-empty stage, keyed stage1..stage4

No business logic lives here, only presentation.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ..exceptions import UnknownStageError
from ..models import (
    Action,
    Alert,
    CaseInput,
    Checklist,
    ChecklistStage,
    ChecklistTask,
    RiskResult,
)
from .normalizer import Facts

DEFAULT_ESCALATION_CONTACTS = "Louis Case or Charlie Eikenberg"


# ── Markdown helpers ─────────────────────────────────────────────────────────

def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n")]


def _bullets(text: str) -> str:
    return "\n".join(f"- {line}" for line in _lines(text))


def _task_line(task: ChecklistTask) -> str:
    checkbox = "[x]" if task.completed else "[ ]"
    line = f"- {checkbox} {task.text}"
    if task.note:
        line += f" *({task.note})*"
    return line


def _task_lines(tasks: Iterable[ChecklistTask]) -> str:
    return "".join(_task_line(task) + "\n" for task in tasks)


def resolve_stage(key: str | ChecklistStage) -> ChecklistStage:
    """
    Look up a stage by key (stage1..stage4).

    Raises:
        UnknownStageError: If the key is not a checklist stage
    """
    try:
        return ChecklistStage(key)
    except ValueError:
        raise UnknownStageError(
            message=f"Unknown checklist stage: {key}",
            details={"stage": str(key), "valid_stages": [s.value for s in ChecklistStage]},
        ) from None


# ── Full document ────────────────────────────────────────────────────────────

def format_full_document(
    facts: Facts,
    risk: RiskResult,
    key_focus: str,
    actions: Sequence[Action],
    checklist: Checklist,
    alerts: Sequence[Alert],
    escalation_contacts: str = DEFAULT_ESCALATION_CONTACTS,
) -> str:
    """Render the full action plan as markdown."""
    case = facts.case
    output = ""

    # Header
    output += "## CHOW Details\n"
    output += f"**Old Owner:** {case.old_owner_name}\n"
    output += f"**New Owner:** {case.new_owner_name}\n"
    output += f"**Affected Facilities:**\n{_bullets(case.affected_facilities)}\n"
    if case.new_facility_names:
        output += f"**New Facility Names:**\n{_bullets(case.new_facility_names)}\n"
    output += f"**Acquisition Date:** {case.acquisition_date.isoformat()} ({facts.timing.value.upper()})\n"
    output += f"**Sale Type:** {case.sale_type.value.upper()}\n"
    if case.new_owner_contact:
        output += f"**New Owner Contact:**\n{case.new_owner_contact}\n"
    output += "\n---\n\n"

    # Risk assessment
    output += f"## Risk Assessment: {risk.level.value.upper()}\n\n"
    output += f"{key_focus}\n\n"

    output += "### Priority Actions\n"
    for i, action in enumerate(actions, start=1):
        output += f"{i}. {action.text}\n"
    output += (
        f"\n*Use your judgment and escalate to {escalation_contacts} "
        "if the situation is unclear.*\n\n---\n\n"
    )

    # Checklist
    for stage, tasks in checklist.stages():
        if not tasks:
            continue
        output += f"### {stage.heading}\n"
        output += _task_lines(tasks)
        output += "\n"

    # Alerts
    if alerts:
        output += "### Special Considerations\n"
        for alert in alerts:
            output += f"- **{alert.type.value.upper()}:** {alert.text}\n"

    return output


# ── Stage documents ──────────────────────────────────────────────────────────

def format_stage_document(
    stage: ChecklistStage,
    tasks: Sequence[ChecklistTask],
    case: CaseInput,
) -> str:
    """Render one stage with enough CHOW context to stand alone as a ticket."""
    output = f"## {stage.heading}\n"
    output += f"**CHOW:** {case.old_owner_name} → {case.new_owner_name}\n"
    output += f"**Facilities:** {', '.join(_lines(case.affected_facilities))}\n"
    if case.new_facility_names:
        output += f"**New Names:** {', '.join(_lines(case.new_facility_names))}\n"
    output += "\n---\n\n"

    output += "### Tasks\n"
    output += _task_lines(tasks)
    return output


def format_stage_documents(case: CaseInput, checklist: Checklist) -> dict[str, str]:
    """Stage documents for every non-empty stage, in stage order."""
    return {
        stage.value: format_stage_document(stage, tasks, case)
        for stage, tasks in checklist.stages()
        if tasks
    }


def stage_document(documents: Mapping[str, str], key: str) -> str:
    """
    Fetch one rendered stage document.

    Raises:
        UnknownStageError: If the key is not a stage or the stage is empty
    """
    stage = resolve_stage(key)
    try:
        return documents[stage.value]
    except KeyError:
        raise UnknownStageError(
            message=f"Checklist stage has no tasks: {stage.value}",
            details={"stage": stage.value, "available_stages": list(documents)},
        ) from None
