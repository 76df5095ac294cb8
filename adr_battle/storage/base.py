"""
Storage protocols consumed by the battle engine.

The engine never owns persistence: it reads and writes characters, battle
sessions and equipment through these interfaces, and wraps every
read-modify-write in ``atomic(player_id)``.
"""

from contextlib import AbstractContextManager
from typing import Protocol

from ..character.main import Character
from ..combat.battle import BattleSession
from ..items.equipment import EquipmentBonuses, Item


class CharacterStore(Protocol):
    """Reads and writes character records."""

    def get_character(self, player_id: int) -> Character | None: ...

    def save_character(self, character: Character) -> None: ...


class BattleStore(Protocol):
    """Reads and writes battle sessions."""

    def next_battle_id(self) -> int: ...

    def get_battle(self, battle_id: int) -> BattleSession | None: ...

    def find_active_battle(self, player_id: int) -> BattleSession | None: ...

    def save_battle(self, session: BattleSession) -> None: ...


class EquipmentProvider(Protocol):
    """Reads, aggregates and wears the items of a player."""

    def get_items(self, player_id: int) -> list[Item]: ...

    def save_item(self, item: Item) -> None: ...

    def get_bonuses(self, player_id: int) -> EquipmentBonuses: ...

    def decrement_durability(self, player_id: int) -> None: ...


class GameStore(CharacterStore, BattleStore, EquipmentProvider, Protocol):
    """Everything the battle engine needs, with per-player atomic commits."""

    def atomic(self, player_id: int) -> AbstractContextManager[None]:
        """
        Serializes the writes of one player and applies them all or none.

        Args:
            player_id (int): The player whose records are being updated.

        Returns:
            AbstractContextManager[None]: A context that rolls back on error.

        """
        ...
