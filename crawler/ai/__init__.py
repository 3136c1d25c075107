"""AI layer: per-monster state machines."""

from crawler.ai.states import take_turn

__all__ = ["take_turn"]
