"""Test helpers for ChowPilot."""
from .cases import FUTURE, PAST, TODAY, all_input_facts, case_payload, make_case, make_facts

__all__ = [
    "FUTURE",
    "PAST",
    "TODAY",
    "all_input_facts",
    "case_payload",
    "make_case",
    "make_facts",
]
