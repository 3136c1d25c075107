"""Player and monster actions: movement, combat, inventory, item effects."""

from crawler.actions.combat import attack, take_damage
from crawler.actions.items import use_item
from crawler.actions.move import move_by, player_move_or_attack

__all__ = ["attack", "move_by", "player_move_or_attack", "take_damage", "use_item"]
