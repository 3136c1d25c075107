"""Line-oriented terminal front end: a text renderer and a stdin controller."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence, TextIO

from crawler.core.enums import PlayerAction, StatChoice
from crawler.core.models import Entity, Vector2
from crawler.engine.input import parse_token

if TYPE_CHECKING:
    from crawler.engine.turn_engine import Frame, TurnEngine

logger = logging.getLogger(__name__)

_STAT_KEYS = {"a": StatChoice.CONSTITUTION, "b": StatChoice.STRENGTH, "c": StatChoice.AGILITY}
_STAT_TEXT = {
    StatChoice.CONSTITUTION: "Constitution (+20 HP)",
    StatChoice.STRENGTH: "Strength (+1 attack)",
    StatChoice.AGILITY: "Agility (+1 defense)",
}


def render_text(frame: Frame) -> str:
    """Draw explored cells, visible entities, the status line and the log tail."""
    grid = frame.grid
    rows: list[list[str]] = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            tile = grid.tile(x, y)
            if not tile.explored:
                row.append(" ")
            elif tile.block_sight:
                row.append("#")
            else:
                row.append("." if (x, y) in frame.visible else ",")
        rows.append(row)
    # later entities overwrite earlier ones, so blockers land on top
    for e in frame.entities:
        rows[e.pos.y][e.pos.x] = e.glyph

    s = frame.status
    lines = ["".join(r).rstrip() for r in rows]
    lines.append(
        f"HP {s['hp']}/{s['max_hp']}  XP {s['xp']}/{s['xp_to_next']}  "
        f"Lvl {s['level']}  Depth {frame.depth}"
    )
    lines.extend(m.text for m in frame.messages)
    if frame.game_over:
        lines.append("*** You are dead. Press q to quit. ***")
    return "\n".join(lines)


class TerminalController:
    """Answers engine prompts by reading lines from a text stream.

    An empty line or ``q`` cancels a tile or item prompt. The level-up
    prompt keeps asking until it gets a valid letter.
    """

    def __init__(self, read_line: Callable[[], str], out: TextIO) -> None:
        self._read_line = read_line
        self._out = out

    def _ask(self, prompt: str) -> str | None:
        self._out.write(prompt + "\n> ")
        self._out.flush()
        try:
            return self._read_line().strip()
        except EOFError:
            return None

    def pick_tile(self) -> Vector2 | None:
        answer = self._ask("Target tile as 'x y' (empty to cancel):")
        if not answer or answer.lower() == "q":
            return None
        parts = answer.replace(",", " ").split()
        try:
            x, y = (int(p) for p in parts)
        except ValueError:
            logger.debug("Bad tile answer %r", answer)
            return None
        return Vector2(x, y)

    def choose_item(self, prompt: str, inventory: Sequence[Entity]) -> int | None:
        if not inventory:
            self._out.write("Inventory is empty.\n")
            return None
        listing = "\n".join(f"({chr(ord('a') + i)}) {item.name}" for i, item in enumerate(inventory))
        answer = self._ask(f"{prompt}\n{listing}")
        if not answer or len(answer) != 1:
            return None
        index = ord(answer.lower()) - ord("a")
        return index if 0 <= index < len(inventory) else None

    def choose_stat(self, options: Sequence[StatChoice]) -> StatChoice | None:
        listing = "\n".join(
            f"({key}) {_STAT_TEXT[stat]}" for key, stat in _STAT_KEYS.items() if stat in options
        )
        answer = self._ask(f"Level up! Choose a stat to raise:\n{listing}")
        if answer is None:
            raise EOFError("input closed during level-up prompt")
        return _STAT_KEYS.get(answer.lower())


def run_session(engine: TurnEngine, read_line: Callable[[], str], out: TextIO) -> int:
    """Play one command per line until the player quits or input runs out.

    Closed input is treated as quitting, including in the middle of a
    prompt, so the game is always saved on the way out.
    """
    controller = TerminalController(read_line, out)
    while True:
        out.write(render_text(engine.render_frame()) + "\n> ")
        out.flush()
        try:
            line = read_line()
        except EOFError:
            line = "q"
        try:
            result = engine.play_tick(parse_token(line), controller)
        except EOFError:
            logger.warning("Input closed during a prompt; saving before exit")
            engine.save()
            result = PlayerAction.EXIT
        if result == PlayerAction.EXIT:
            out.write(f"Game saved to {engine.save_path}.\n")
            return 0
