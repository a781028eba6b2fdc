"""
ChowPilot Ticketing Settings

Connection settings for the issue tracker: API key, team and optional
project. Persisted as JSON next to the form state.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Union

from ..exceptions import StateStoreError
from ..persistence import write_json_atomic

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "lin_api_"


def looks_like_api_key(key: str) -> bool:
    """Tracker personal API keys start with ``lin_api_``."""
    return bool(key) and key.strip().startswith(API_KEY_PREFIX)


def redact_api_key(key: str) -> str:
    if not key:
        return ""
    return f"{key[:len(API_KEY_PREFIX)]}****{key[-4:]}"


@dataclass(frozen=True)
class TicketingSettings:
    """Issue tracker connection settings."""
    api_key: str = ""
    team_id: str = ""
    team_name: str = ""
    project_id: str = ""
    project_name: str = ""

    @property
    def is_connected(self) -> bool:
        """Connected once both an API key and a team are set."""
        return bool(self.api_key and self.team_id)

    def to_dict(self) -> dict[str, str]:
        """Storage form (camelCase)."""
        return {
            "apiKey": self.api_key,
            "teamId": self.team_id,
            "teamName": self.team_name,
            "projectId": self.project_id,
            "projectName": self.project_name,
        }

    def to_public_dict(self) -> dict[str, Any]:
        """Settings safe to print or return from the API."""
        data = asdict(self)
        data["api_key"] = redact_api_key(self.api_key)
        data["is_connected"] = self.is_connected
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TicketingSettings":
        return cls(
            api_key=data.get("apiKey") or "",
            team_id=data.get("teamId") or "",
            team_name=data.get("teamName") or "",
            project_id=data.get("projectId") or "",
            project_name=data.get("projectName") or "",
        )


class TicketingSettingsStore:
    """File-backed TicketingSettings."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> TicketingSettings:
        """Saved settings, or empty settings when nothing is saved."""
        if not self.path.exists():
            return TicketingSettings()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StateStoreError(
                message=f"Failed to read ticketing settings: {e}",
                details={"path": str(self.path)},
            ) from e
        if not isinstance(data, dict):
            raise StateStoreError(
                message="Ticketing settings are not a JSON object",
                details={"path": str(self.path)},
            )
        return TicketingSettings.from_dict(data)

    def save(self, settings: TicketingSettings) -> None:
        try:
            write_json_atomic(self.path, settings.to_dict())
        except OSError as e:
            raise StateStoreError(
                message=f"Failed to save ticketing settings: {e}",
                details={"path": str(self.path)},
            ) from e
        logger.info("Ticketing settings saved for team %s", settings.team_name or settings.team_id)

    def update(self, **changes: str) -> TicketingSettings:
        """Merge changes into the saved settings and persist them."""
        settings = replace(self.load(), **changes)
        self.save(settings)
        return settings

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StateStoreError(
                message=f"Failed to clear ticketing settings: {e}",
                details={"path": str(self.path)},
            ) from e
        logger.info("Ticketing settings cleared")
