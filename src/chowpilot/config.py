"""
ChowPilot Configuration

Settings come from CHOW_* environment variables. Nothing is read at import
time; call ``Settings.from_env()`` where configuration is needed.

    CHOW_LOG_LEVEL                 Logging level (INFO)
    CHOW_STATE_DIR                 Directory for local state (~/.chowpilot)
    CHOW_FORM_STATE_FILE           Last submitted case (<state_dir>/form-state.json)
    CHOW_TICKETING_SETTINGS_FILE   Tracker settings (<state_dir>/linear-settings.json)
    CHOW_LINEAR_API_URL            Tracker GraphQL endpoint
    CHOW_HTTP_TIMEOUT              Seconds per tracker request (10)
    CHOW_DOCS_ENABLED              Serve OpenAPI docs (true)
    CHOW_ESCALATION_CONTACTS       Names in the escalation reminder
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .engine.formatter import DEFAULT_ESCALATION_CONTACTS

LINEAR_API_URL = "https://api.linear.app/graphql"


def _bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""
    log_level: str = "INFO"
    state_dir: Path = Path("~/.chowpilot").expanduser()
    form_state_file: Optional[Path] = None
    ticketing_settings_file: Optional[Path] = None
    linear_api_url: str = LINEAR_API_URL
    http_timeout: float = 10.0
    docs_enabled: bool = True
    escalation_contacts: str = DEFAULT_ESCALATION_CONTACTS

    @property
    def form_state_path(self) -> Path:
        return self.form_state_file or self.state_dir / "form-state.json"

    @property
    def ticketing_settings_path(self) -> Path:
        return self.ticketing_settings_file or self.state_dir / "linear-settings.json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment (or any mapping)."""
        env = os.environ if environ is None else environ

        state_dir = Path(env.get("CHOW_STATE_DIR", "~/.chowpilot")).expanduser()
        form_state = env.get("CHOW_FORM_STATE_FILE")
        ticketing = env.get("CHOW_TICKETING_SETTINGS_FILE")

        return cls(
            log_level=env.get("CHOW_LOG_LEVEL", "INFO").upper(),
            state_dir=state_dir,
            form_state_file=Path(form_state).expanduser() if form_state else None,
            ticketing_settings_file=Path(ticketing).expanduser() if ticketing else None,
            linear_api_url=env.get("CHOW_LINEAR_API_URL", LINEAR_API_URL),
            http_timeout=float(env.get("CHOW_HTTP_TIMEOUT", "10")),
            docs_enabled=_bool(env.get("CHOW_DOCS_ENABLED", "true")),
            escalation_contacts=env.get("CHOW_ESCALATION_CONTACTS", DEFAULT_ESCALATION_CONTACTS),
        )
