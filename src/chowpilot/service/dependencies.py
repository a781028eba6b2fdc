"""Shared dependencies for route handlers."""
from __future__ import annotations

from fastapi import Depends, Request

from ..config import Settings
from ..persistence import FormStateStore
from ..ticketing import LinearClient, TicketingSettingsStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_form_state_store(settings: Settings = Depends(get_settings)) -> FormStateStore:
    return FormStateStore(settings.form_state_path)


def get_ticketing_store(settings: Settings = Depends(get_settings)) -> TicketingSettingsStore:
    return TicketingSettingsStore(settings.ticketing_settings_path)


def get_linear_client(
    settings: Settings = Depends(get_settings),
    store: TicketingSettingsStore = Depends(get_ticketing_store),
) -> LinearClient:
    return LinearClient(store.load(), api_url=settings.linear_api_url, timeout=settings.http_timeout)
