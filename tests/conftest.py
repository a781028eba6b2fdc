"""
Pytest configuration and fixtures for ChowPilot tests.

Provides path setup and common fixtures. Factory helpers live in
tests/helpers so test modules can import them directly.
"""
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent

# Allow ``import chowpilot`` without installing (src layout)
sys.path.insert(0, str(_ROOT / "src"))

# Allow ``from helpers import ...``
sys.path.insert(0, str(Path(__file__).resolve().parent))

from helpers import TODAY, case_payload, make_case  # noqa: E402

from chowpilot.config import Settings  # noqa: E402


@pytest.fixture
def today():
    """Fixed evaluation date."""
    return TODAY


@pytest.fixture
def sample_case():
    """Stock sale with signed contract and no exposure."""
    return make_case(
        sale_type="stock",
        contract_signed="yes",
        outstanding_ar="no",
        future_booked_shifts="no",
    )


@pytest.fixture
def sample_payload():
    """Wire-form (camelCase) payload for a high-risk past CHOW."""
    return case_payload()


@pytest.fixture
def settings(tmp_path):
    """Settings writing all state under a temp directory."""
    return Settings(state_dir=tmp_path, docs_enabled=True)
