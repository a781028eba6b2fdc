"""Issue tracker endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ...config import Settings
from ...engine import evaluate, resolve_stage, stage_document
from ...models import CaseInput
from ...ticketing import LinearClient, TicketingSettingsStore, default_issue_title
from ..dependencies import get_linear_client, get_settings, get_ticketing_store
from ..schemas import TicketingStatusResponse, TicketRequest, TicketResponse

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.get("/status", response_model=TicketingStatusResponse)
async def ticketing_status(store: TicketingSettingsStore = Depends(get_ticketing_store)):
    """Connection settings with the API key redacted."""
    return TicketingStatusResponse(**store.load().to_public_dict())


@router.post("", response_model=TicketResponse, status_code=201)
def create_ticket(
    request: TicketRequest,
    settings: Settings = Depends(get_settings),
    client: LinearClient = Depends(get_linear_client),
):
    """
    Evaluate a case and create an issue with its plan.

    With ``stage`` set, the issue holds only that stage's tasks.
    """
    case = CaseInput.from_dict(request.case)
    stage = resolve_stage(request.stage) if request.stage else None
    result = evaluate(case, today=request.today, escalation_contacts=settings.escalation_contacts)

    if stage is not None:
        description = stage_document(result.stage_documents, stage.value)
    else:
        description = result.full_document
    title = request.title or default_issue_title(case, stage)

    issue = client.create_issue(
        title,
        description,
        priority=request.priority,
        assignee_id=request.assignee_id,
        state_id=request.state_id,
    )
    return TicketResponse(
        id=issue["id"],
        identifier=issue["identifier"],
        url=issue["url"],
        title=title,
    )
