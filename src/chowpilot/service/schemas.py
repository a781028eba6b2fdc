"""Request and response schemas for the API."""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    version: str


class RiskResponse(BaseModel):
    level: str  # low|medium|high
    reasons: list[str]
    rule_id: str


class ActionResponse(BaseModel):
    text: str
    confidence: str  # high|medium|low
    guidance: str


class TaskResponse(BaseModel):
    text: str
    completed: bool
    note: Optional[str] = None
    label: Optional[str] = None  # billing|sales|escalate


class AlertResponse(BaseModel):
    type: str  # warning|critical
    text: str


class EvaluateResponse(BaseModel):
    """Complete action plan for one case."""
    case: dict[str, Any]
    today: date
    timing: str  # past|future
    risk: RiskResponse
    scenario: str
    key_focus: str
    priority_actions: list[ActionResponse]
    checklist: dict[str, list[TaskResponse]]
    alerts: list[AlertResponse]
    full_document: str
    stage_documents: dict[str, str]


class StageDocumentResponse(BaseModel):
    stage: str
    title: str
    document: str


class StateResponse(BaseModel):
    """Last saved case, or null."""
    case: Optional[dict[str, Any]] = None


class ClearStateResponse(BaseModel):
    cleared: bool


class TicketRequest(BaseModel):
    """Create an issue from a case."""
    case: dict[str, Any] = Field(..., description="Case in camelCase form keys")
    stage: Optional[str] = Field(None, description="stage1..stage4 for a single-stage issue")
    title: Optional[str] = None
    priority: Optional[int] = Field(None, ge=0, le=4)
    assignee_id: Optional[str] = None
    state_id: Optional[str] = None
    today: Optional[date] = None


class TicketResponse(BaseModel):
    id: str
    identifier: str
    url: str
    title: str


class TicketingStatusResponse(BaseModel):
    api_key: str
    team_id: str
    team_name: str
    project_id: str
    project_name: str
    is_connected: bool
