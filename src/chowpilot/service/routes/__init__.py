from . import evaluate, state, tickets

__all__ = ["evaluate", "state", "tickets"]
