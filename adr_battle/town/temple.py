"""
Temple module.

The temple heals wounded characters and brings dead ones back, for gold.
"""

import math

from catchery import log_info

from ..core.config import BattleConfig
from ..core.errors import StateError
from ..storage.base import CharacterStore, GameStore


class Temple:
    """Sells healing and resurrection."""

    def __init__(self, store: GameStore, config: BattleConfig | None = None) -> None:
        self.store = store
        self.config = config or BattleConfig()

    def heal(self, player_id: int) -> int:
        """
        Restores the character's hp and mp to their maximums.

        Args:
            player_id (int): The player to heal.

        Returns:
            int: The gold paid.

        Raises:
            StateError: If the character is dead, battling, unhurt or too poor.

        """
        cost = self.config.temple_heal_cost
        with self.store.atomic(player_id):
            character = _require_character(self.store, player_id)
            if character.is_battling:
                raise StateError("You cannot visit the temple during a battle.")
            if character.is_dead:
                raise StateError("The dead must be resurrected, not healed.")
            if character.hp >= character.hp_max:
                raise StateError("You are already in perfect health.")
            if character.gold < cost:
                raise StateError(f"Healing costs {cost} gold.")
            character.hp = character.hp_max
            character.mp = character.mp_max
            character.gold -= cost
            self.store.save_character(character)
        log_info(f"{character.name} was healed", {"player_id": player_id, "cost": cost})
        return cost

    def resurrect(self, player_id: int) -> int:
        """
        Brings a dead character back with half of its hp and mp.

        Args:
            player_id (int): The player to resurrect.

        Returns:
            int: The gold paid.

        Raises:
            StateError: If the character is alive or too poor.

        """
        cost = self.config.temple_resurrect_cost
        with self.store.atomic(player_id):
            character = _require_character(self.store, player_id)
            if character.is_alive():
                raise StateError("You are not dead.")
            if character.gold < cost:
                raise StateError(f"Resurrection costs {cost} gold.")
            character.hp = math.ceil(character.hp_max / 2)
            character.mp = math.ceil(character.mp_max / 2)
            character.is_dead = False
            character.gold -= cost
            self.store.save_character(character)
        log_info(f"{character.name} was resurrected", {"player_id": player_id, "cost": cost})
        return cost


def _require_character(store: CharacterStore, player_id: int):
    character = store.get_character(player_id)
    if character is None:
        raise StateError("No character found.")
    return character
