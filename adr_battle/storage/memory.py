"""
In-memory storage for the battle engine.

Implements every storage protocol on plain dictionaries. Records are handed
out as deep copies, so callers only change the store through explicit saves.
"""

import itertools
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from catchery import log_debug, log_warning

from ..character.main import Character
from ..combat.battle import BattleSession
from ..items.equipment import (
    EquipmentBonuses,
    Item,
    calculate_equipment_bonuses,
    wear_equipment,
)


class InMemoryGameStore:
    """
    Dictionary-backed character, battle and item store.
    """

    def __init__(self) -> None:
        self._characters: dict[int, Character] = {}
        self._battles: dict[int, BattleSession] = {}
        self._items: dict[int, list[Item]] = {}
        self._battle_ids = itertools.count(1)
        self._locks: dict[int, threading.RLock] = {}
        self._guard = threading.Lock()

    # =========================================================================
    # Transactions
    # =========================================================================

    def _lock_for(self, player_id: int) -> threading.RLock:
        with self._guard:
            return self._locks.setdefault(player_id, threading.RLock())

    @contextmanager
    def atomic(self, player_id: int) -> Iterator[None]:
        """
        Holds the player's lock and rolls back its records if the block raises.

        Args:
            player_id (int): The player whose records are being updated.

        """
        with self._lock_for(player_id):
            character = self._characters.get(player_id)
            saved_character = character.model_copy(deep=True) if character else None
            saved_battles = {
                battle_id: session.model_copy(deep=True)
                for battle_id, session in self._battles.items()
                if session.player_id == player_id
            }
            saved_items = [item.model_copy(deep=True) for item in self._items.get(player_id, [])]
            try:
                yield
            except Exception:
                log_debug("Rolling back player records", {"player_id": player_id})
                if saved_character is None:
                    self._characters.pop(player_id, None)
                else:
                    self._characters[player_id] = saved_character
                for battle_id in [
                    bid for bid, s in self._battles.items() if s.player_id == player_id
                ]:
                    if battle_id not in saved_battles:
                        del self._battles[battle_id]
                self._battles.update(saved_battles)
                self._items[player_id] = saved_items
                raise

    # =========================================================================
    # Characters
    # =========================================================================

    def get_character(self, player_id: int) -> Character | None:
        character = self._characters.get(player_id)
        return character.model_copy(deep=True) if character else None

    def save_character(self, character: Character) -> None:
        self._characters[character.player_id] = character.model_copy(deep=True)

    # =========================================================================
    # Battles
    # =========================================================================

    def next_battle_id(self) -> int:
        with self._guard:
            return next(self._battle_ids)

    def get_battle(self, battle_id: int) -> BattleSession | None:
        session = self._battles.get(battle_id)
        return session.model_copy(deep=True) if session else None

    def find_active_battle(self, player_id: int) -> BattleSession | None:
        for session in self._battles.values():
            if session.player_id == player_id and session.is_active:
                return session.model_copy(deep=True)
        return None

    def save_battle(self, session: BattleSession) -> None:
        self._battles[session.battle_id] = session.model_copy(deep=True)

    def battles_of(self, player_id: int) -> list[BattleSession]:
        """Returns every battle of a player, oldest first."""
        return [
            session.model_copy(deep=True)
            for _, session in sorted(self._battles.items())
            if session.player_id == player_id
        ]

    # =========================================================================
    # Equipment
    # =========================================================================

    def add_item(self, item: Item) -> None:
        """Gives an item to its owner."""
        self._items.setdefault(item.owner_id, []).append(item.model_copy(deep=True))

    def get_items(self, player_id: int) -> list[Item]:
        return [item.model_copy(deep=True) for item in self._items.get(player_id, [])]

    def save_item(self, item: Item) -> None:
        """Replaces the stored copy of an item, matched by id."""
        items = self._items.setdefault(item.owner_id, [])
        for index, stored in enumerate(items):
            if stored.id == item.id:
                items[index] = item.model_copy(deep=True)
                return
        items.append(item.model_copy(deep=True))

    def get_bonuses(self, player_id: int) -> EquipmentBonuses:
        return calculate_equipment_bonuses(self._items.get(player_id, []))

    def decrement_durability(self, player_id: int) -> None:
        items = self._items.get(player_id)
        if not items:
            return
        breaking = [item for item in items if item.equipped and item.duration == 1]
        worn = wear_equipment(items)
        for item in breaking:
            log_warning(
                f"{item.name} is worn out.",
                {"player_id": player_id, "item_id": item.id},
            )
        log_debug("Wore equipment", {"player_id": player_id, "worn": worn})
