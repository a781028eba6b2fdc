"""
ChowPilot HTTP service (FastAPI).

Run with:
    python -m chowpilot.service
    uvicorn chowpilot.service:create_app --factory
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
