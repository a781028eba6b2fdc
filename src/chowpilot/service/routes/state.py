"""Saved form state endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from ...models import CaseInput
from ...persistence import FormStateStore
from ..dependencies import get_form_state_store
from ..schemas import ClearStateResponse, StateResponse

router = APIRouter(prefix="/state", tags=["Form State"])


@router.get("", response_model=StateResponse)
async def get_state(store: FormStateStore = Depends(get_form_state_store)):
    """Last submitted case, with form defaults applied."""
    case = store.load()
    return StateResponse(case=case.to_dict() if case else None)


@router.put("", response_model=StateResponse)
async def put_state(
    case: dict[str, Any] = Body(...),
    store: FormStateStore = Depends(get_form_state_store),
):
    """Validate and remember a case."""
    validated = CaseInput.from_dict(case)
    store.save(validated)
    return StateResponse(case=validated.to_dict())


@router.delete("", response_model=ClearStateResponse)
async def delete_state(store: FormStateStore = Depends(get_form_state_store)):
    return ClearStateResponse(cleared=store.clear())
