"""
ChowPilot Form State Store

Keeps the last submitted case on disk so the form can be restored on the
next run. Only one case is kept; saving replaces it.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from .exceptions import InvalidCaseInputError, StateStoreError
from .models import CaseInput

logger = logging.getLogger(__name__)


# Baseline answers applied to a restored form when a field is missing
FORM_DEFAULTS: dict[str, str] = {
    "financialDistress": "unknown",
    "willingnessToPay": "unknown",
    "blacklisted": "none",
    "badDebt": "no",
}


def write_json_atomic(path: Path, data: Any) -> None:
    """Write JSON through a temp file so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    os.replace(tmp, path)


class FormStateStore:
    """
    File-backed store for the last submitted case.

    Usage:
        store = FormStateStore(settings.form_state_path)
        store.save(case)
        case = store.load()   # None when nothing is saved
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def save(self, case: CaseInput) -> None:
        """Persist the case in its camelCase wire form."""
        try:
            write_json_atomic(self.path, case.to_dict())
        except OSError as e:
            raise StateStoreError(
                message=f"Failed to save form state: {e}",
                details={"path": str(self.path)},
                case_ref=case.case_ref,
            ) from e
        logger.info("Form state saved", extra={"case_ref": case.case_ref})

    def load_raw(self) -> Optional[dict[str, Any]]:
        """Saved form values with baseline defaults filled in, or None."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StateStoreError(
                message=f"Failed to read form state: {e}",
                details={"path": str(self.path)},
            ) from e
        if not isinstance(data, dict):
            raise StateStoreError(
                message="Form state is not a JSON object",
                details={"path": str(self.path)},
            )
        restored = dict(FORM_DEFAULTS)
        restored.update({k: v for k, v in data.items() if v not in (None, "")})
        return restored

    def load(self) -> Optional[CaseInput]:
        """
        Restore the last saved case.

        Raises:
            StateStoreError: If the saved state is unreadable or no longer valid
        """
        data = self.load_raw()
        if data is None:
            return None
        try:
            return CaseInput.from_dict(data)
        except InvalidCaseInputError as e:
            raise StateStoreError(
                message="Saved form state is not a valid case",
                details={"path": str(self.path), **e.details},
            ) from e

    def clear(self) -> bool:
        """Remove saved state. Returns True if something was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StateStoreError(
                message=f"Failed to clear form state: {e}",
                details={"path": str(self.path)},
            ) from e
        logger.info("Form state cleared")
        return True
