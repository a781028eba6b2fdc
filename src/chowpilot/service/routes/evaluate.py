"""Case evaluation endpoints."""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from ...config import Settings
from ...engine import CONFIDENCE_GUIDANCE, evaluate, get_timing, resolve_stage, stage_document
from ...models import CaseInput, EvaluationResult
from ..dependencies import get_settings
from ..schemas import (
    ActionResponse,
    AlertResponse,
    EvaluateResponse,
    RiskResponse,
    StageDocumentResponse,
    TaskResponse,
)

router = APIRouter(prefix="/evaluate", tags=["Evaluation"])


def to_response(result: EvaluationResult) -> EvaluateResponse:
    return EvaluateResponse(
        case=result.case.to_dict(),
        today=result.today,
        timing=get_timing(result.case.acquisition_date, result.today).value,
        risk=RiskResponse(**result.risk.to_dict()),
        scenario=result.scenario,
        key_focus=result.key_focus,
        priority_actions=[
            ActionResponse(
                text=a.text,
                confidence=a.confidence.value,
                guidance=CONFIDENCE_GUIDANCE[a.confidence],
            )
            for a in result.priority_actions
        ],
        checklist={
            stage.value: [TaskResponse(**t.to_dict()) for t in tasks]
            for stage, tasks in result.checklist.stages()
        },
        alerts=[AlertResponse(**a.to_dict()) for a in result.alerts],
        full_document=result.full_document,
        stage_documents=result.stage_documents,
    )


@router.post("", response_model=EvaluateResponse)
async def evaluate_case(
    case: dict[str, Any] = Body(..., description="Case in camelCase form keys"),
    today: Optional[date] = Query(None, description="Evaluation date (defaults to today)"),
    settings: Settings = Depends(get_settings),
):
    """
    Evaluate a CHOW case and return the full action plan.

    Returns the risk level with reasons, key focus, priority actions,
    checklist, alerts and the markdown documents.
    """
    result = evaluate(
        CaseInput.from_dict(case),
        today=today,
        escalation_contacts=settings.escalation_contacts,
    )
    return to_response(result)


@router.post("/stage/{stage}", response_model=StageDocumentResponse)
async def evaluate_stage(
    stage: str,
    case: dict[str, Any] = Body(..., description="Case in camelCase form keys"),
    today: Optional[date] = Query(None),
    settings: Settings = Depends(get_settings),
):
    """Markdown document for a single checklist stage."""
    checklist_stage = resolve_stage(stage)
    result = evaluate(
        CaseInput.from_dict(case),
        today=today,
        escalation_contacts=settings.escalation_contacts,
    )
    return StageDocumentResponse(
        stage=checklist_stage.value,
        title=checklist_stage.heading,
        document=stage_document(result.stage_documents, checklist_stage.value),
    )
