"""Engine layer: the turn engine and its input contract."""

from crawler.engine.input import Controller, ScriptedController, parse_token
from crawler.engine.turn_engine import Frame, TurnEngine

__all__ = ["Controller", "Frame", "ScriptedController", "TurnEngine", "parse_token"]
