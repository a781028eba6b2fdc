"""
ChowPilot Case Loader

Loads CHOW cases from YAML or JSON files and validates them into CaseInput.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import yaml

from .exceptions import CaseLoadError
from .models import CaseInput


def _load_file(path: Path) -> Any:
    """Load data from YAML or JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(f)
        elif path.suffix.lower() == ".json":
            return json.load(f)
        else:
            # Try YAML first, then JSON
            content = f.read()
            try:
                return yaml.safe_load(content)
            except yaml.YAMLError:
                return json.loads(content)


def load_case_file(path: Union[str, Path]) -> CaseInput:
    """
    Load a case from a file.

    Args:
        path: Path to YAML or JSON file with camelCase form keys

    Raises:
        CaseLoadError: If the file cannot be read or parsed
        InvalidCaseInputError: If the content fails validation
    """
    path = Path(path)
    try:
        data = _load_file(path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise CaseLoadError(
            message=f"Failed to load case file: {e}",
            details={"path": str(path), "error": str(e)},
        ) from e
    return CaseInput.from_dict(data)


def load_case_string(content: str, format: str = "yaml") -> CaseInput:
    """
    Load a case from a string.

    Args:
        content: YAML or JSON text
        format: "yaml" or "json"
    """
    try:
        if format == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CaseLoadError(
            message=f"Failed to parse case: {e}",
            details={"format": format, "error": str(e)},
        ) from e
    return CaseInput.from_dict(data)
