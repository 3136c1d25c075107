"""TurnEngine: the authoritative per-input tick.

Phase cycle (one call to ``play_tick``):
  1. Visibility: recompute only when the player moved since the last pass
  2. Player action: exactly one resolved action for the input token
  3. Classification: TOOK_TURN, DID_NOT_TAKE_TURN or EXIT (EXIT saves first)
  4. AI activation: every AI-bearing entity in index order, TOOK_TURN only
  5. Progression: at most one level-up
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from crawler.actions import combat
from crawler.actions.inventory import drop, pick_up_here
from crawler.actions.items import use_item
from crawler.actions.move import player_move_or_attack
from crawler.ai.states import take_turn
from crawler.core import colors
from crawler.core.enums import ActionToken, PlayerAction
from crawler.core.errors import EmptyDungeonError
from crawler.core.models import DIRECTION_OFFSETS, Entity, Vector2, make_player
from crawler.core.world_state import PLAYER, World
from crawler.persistence.codec import save_game
from crawler.systems import dungeon, progression
from crawler.systems.spawn_tables import make_item
from crawler.systems.rng import DeterministicRNG
from crawler.systems.visibility import LineOfSightOracle

if TYPE_CHECKING:
    from crawler.config import GameConfig
    from crawler.core.grid import Grid
    from crawler.engine.input import Controller
    from crawler.systems.visibility import VisibilityOracle
    from crawler.utils.message_log import Message

logger = logging.getLogger(__name__)

_MOVES: dict[ActionToken, Vector2] = {
    ActionToken.MOVE_N: DIRECTION_OFFSETS["N"],
    ActionToken.MOVE_S: DIRECTION_OFFSETS["S"],
    ActionToken.MOVE_W: DIRECTION_OFFSETS["W"],
    ActionToken.MOVE_E: DIRECTION_OFFSETS["E"],
    ActionToken.MOVE_NW: DIRECTION_OFFSETS["NW"],
    ActionToken.MOVE_NE: DIRECTION_OFFSETS["NE"],
    ActionToken.MOVE_SW: DIRECTION_OFFSETS["SW"],
    ActionToken.MOVE_SE: DIRECTION_OFFSETS["SE"],
}

# Tokens still honored once the player is dead
_DEAD_TOKENS = frozenset({ActionToken.QUIT, ActionToken.CHARACTER, ActionToken.FULLSCREEN})

USE_PROMPT = "Press the key next to an item to use it, or any other to cancel."
DROP_PROMPT = "Press the key next to an item to drop it, or any other to cancel."


@dataclass(slots=True)
class Frame:
    """Everything a renderer needs for one screen."""

    grid: Grid
    visible: frozenset[tuple[int, int]]
    entities: list[Entity]
    messages: list[Message]
    status: dict[str, int]
    depth: int
    game_over: bool = False
    level_up_pending: bool = False
    fullscreen: bool = False
    inventory: list[str] = field(default_factory=list)


class TurnEngine:
    """Single-threaded owner of one World.

    The engine never reads input on its own: callers push one token at a
    time and supply a ``Controller`` for any prompt the action raises.
    """

    __slots__ = (
        "_config",
        "_world",
        "_oracle",
        "_fov_origin",
        "_save_path",
        "fullscreen",
    )

    def __init__(
        self,
        config: GameConfig,
        world: World | None = None,
        save_path: str | Path | None = None,
    ) -> None:
        self._config = config
        self._save_path = Path(save_path if save_path is not None else config.save_file)
        self._world: World | None = None
        self._oracle: VisibilityOracle | None = None
        self._fov_origin: Vector2 | None = None
        self.fullscreen = False
        if world is not None:
            self.attach_world(world)

    # -- accessors --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def world(self) -> World:
        if self._world is None:
            raise RuntimeError("no game in progress")
        return self._world

    @property
    def oracle(self) -> VisibilityOracle:
        if self._oracle is None:
            raise RuntimeError("no game in progress")
        return self._oracle

    @property
    def save_path(self) -> Path:
        return self._save_path

    @property
    def game_over(self) -> bool:
        return self._world is not None and not self._world.player.alive

    @property
    def level_up_pending(self) -> bool:
        if self._world is None:
            return False
        player = self._world.player
        if not player.alive or player.combatant is None:
            return False
        return player.combatant.xp >= progression.level_up_xp(player.level, self._config)

    # -- lifecycle --

    def new_game(self) -> World:
        """Build a fresh depth-1 world with the player at entity index 0."""
        cfg = self._config
        rng = DeterministicRNG(cfg.seed)
        level = self._generate(1, rng)
        player = make_player(level.start, cfg.player_hp, cfg.player_defense, cfg.player_power)
        dagger = make_item("dagger", player.pos)
        dagger.equipment.equipped = True
        world = World(level.grid, [player, *level.placements], rng, inventory=[dagger], depth=1)
        world.log.add(
            "Welcome stranger! Prepare to perish in the Tombs of the Ancient Kings.",
            colors.RED,
        )
        self.attach_world(world)
        logger.info("New game: seed=%d, %d entities", cfg.seed, len(world.entities))
        return world

    def attach_world(self, world: World) -> None:
        """Adopt *world* (fresh or loaded) and derive a new oracle from its grid."""
        self._world = world
        self._reset_visibility()

    def save(self) -> Path:
        save_game(self.world, self._save_path)
        return self._save_path

    def _generate(self, depth: int, rng: DeterministicRNG) -> dungeon.GeneratedLevel:
        attempts = self._config.max_generation_attempts
        for attempt in range(1, attempts + 1):
            try:
                return dungeon.generate(depth, self._config, rng)
            except EmptyDungeonError:
                logger.warning("Depth %d: no rooms accepted (attempt %d/%d)", depth, attempt, attempts)
        raise EmptyDungeonError(depth, attempts)

    # -- visibility --

    def _reset_visibility(self) -> None:
        self._oracle = LineOfSightOracle(self.world.grid)
        self._fov_origin = None

    def refresh_visibility(self) -> bool:
        """Recompute the visible set if the player moved. Returns True if it ran."""
        world = self.world
        pos = world.player.pos
        if pos == self._fov_origin:
            return False
        self.oracle.recompute(pos.x, pos.y, self._config.torch_radius)
        self._fov_origin = pos
        self._mark_explored()
        return True

    def _mark_explored(self) -> None:
        grid = self.world.grid
        oracle = self.oracle
        for y in range(grid.height):
            for x in range(grid.width):
                if oracle.is_visible(x, y):
                    grid.mark_explored(x, y)

    # -- the tick --

    def play_tick(
        self,
        token: ActionToken | None,
        controller: Controller,
        *,
        check_progression: bool = True,
    ) -> PlayerAction:
        """Resolve one input token and, if it took a turn, let every monster act."""
        world = self.world

        # Phase 1: visibility shared by the player action and all AI
        self.refresh_visibility()

        # Phase 2 + 3: player action and classification
        if token is None:
            result = PlayerAction.DID_NOT_TAKE_TURN
        elif not world.player.alive and token not in _DEAD_TOKENS:
            result = PlayerAction.DID_NOT_TAKE_TURN
        else:
            result = self._player_action(token, controller)

        if result == PlayerAction.EXIT:
            path = self.save()
            logger.info("Saved game to %s on exit", path)
            return result

        # Phase 4: AI activation
        if result == PlayerAction.TOOK_TURN and world.player.alive:
            self._run_ai()

        # Phase 5: progression
        if check_progression:
            self.level_up(controller)

        logger.debug("Tick: %s -> %s", token.name if token is not None else None, result.name)
        return result

    def _player_action(self, token: ActionToken, controller: Controller) -> PlayerAction:
        world = self.world
        match token:
            case _ if token in _MOVES:
                step = _MOVES[token]
                player_move_or_attack(world, step.x, step.y)
                return PlayerAction.TOOK_TURN
            case ActionToken.WAIT:
                return PlayerAction.TOOK_TURN
            case ActionToken.PICKUP:
                pick_up_here(world, self._config)
                return PlayerAction.DID_NOT_TAKE_TURN
            case ActionToken.INVENTORY:
                choice = controller.choose_item(USE_PROMPT, world.inventory)
                if choice is not None:
                    use_item(world, choice, self._config, self.oracle, controller)
                return PlayerAction.DID_NOT_TAKE_TURN
            case ActionToken.DROP:
                choice = controller.choose_item(DROP_PROMPT, world.inventory)
                if choice is not None:
                    drop(world, choice)
                return PlayerAction.DID_NOT_TAKE_TURN
            case ActionToken.DESCEND:
                return self.descend()
            case ActionToken.CHARACTER:
                return PlayerAction.DID_NOT_TAKE_TURN
            case ActionToken.FULLSCREEN:
                self.fullscreen = not self.fullscreen
                return PlayerAction.DID_NOT_TAKE_TURN
            case ActionToken.QUIT:
                return PlayerAction.EXIT
        return PlayerAction.DID_NOT_TAKE_TURN

    def _run_ai(self) -> None:
        world = self.world
        # the entity list does not grow or shrink during AI turns
        for index in range(len(world.entities)):
            if index == PLAYER:
                continue
            take_turn(index, world, self.oracle)
        if not world.player.alive:
            logger.info("Player killed at depth %d", world.depth)

    def level_up(self, controller: Controller) -> bool:
        return progression.check_level_up(self.world, self._config, controller)

    # -- level transition --

    def descend(self) -> PlayerAction:
        """Take the stairs under the player into a freshly generated level.

        The player, inventory and message log carry over; the grid and
        every other entity are replaced.
        """
        world = self.world
        stairs = world.stairs_index()
        player = world.player
        if stairs is None or world.entities[stairs].pos != player.pos:
            world.log.add("There are no stairs here.", colors.LIGHT_GREY)
            return PlayerAction.DID_NOT_TAKE_TURN

        world.log.add("You take a moment to rest, and recover your strength.", colors.LIGHT_VIOLET)
        fighter = player.combatant
        if fighter is not None:
            ceiling = combat.max_hp(player, world)
            fighter.hp = min(fighter.hp + ceiling // 2, ceiling)
        world.log.add(
            "After a rare moment of peace, you descend deeper into the heart of the dungeon...",
            colors.RED,
        )

        world.depth += 1
        level = self._generate(world.depth, world.rng)
        player.pos = level.start
        world.grid = level.grid
        world.entities = [player, *level.placements]
        self._reset_visibility()
        logger.info("Descended to depth %d (%d entities)", world.depth, len(world.entities))
        return PlayerAction.TOOK_TURN

    # -- rendering --

    def render_frame(self, message_count: int = 10) -> Frame:
        """Snapshot for a renderer: non-blocking entities sort first so
        creatures draw on top of items, stairs and remains."""
        self.refresh_visibility()
        world = self.world
        oracle = self.oracle
        drawn = [
            e for e in world.entities
            if (e.always_visible and world.grid.tile(e.pos.x, e.pos.y).explored)
            or oracle.is_visible(e.pos.x, e.pos.y)
        ]
        drawn.sort(key=lambda e: e.blocks)
        visible = frozenset(
            (x, y)
            for y in range(world.grid.height)
            for x in range(world.grid.width)
            if oracle.is_visible(x, y)
        )
        return Frame(
            grid=world.grid,
            visible=visible,
            entities=drawn,
            messages=world.log.latest(message_count),
            status=progression.character_sheet(world, self._config),
            depth=world.depth,
            game_over=self.game_over,
            level_up_pending=self.level_up_pending,
            fullscreen=self.fullscreen,
            inventory=[_inventory_label(item) for item in world.inventory],
        )


def _inventory_label(item: Entity) -> str:
    if item.equipment is not None and item.equipment.equipped:
        return f"{item.name} (on {item.equipment.slot.label})"
    return item.name
