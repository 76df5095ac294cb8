"""
Inventory module.

Equips and unequips the items of a character. Equipment is locked while the
character is battling, since the combat snapshot is taken once at the start
of a battle.
"""

from catchery import log_info

from ..character.main import Character
from ..core.errors import StateError
from ..storage.base import GameStore
from .equipment import Item


class Inventory:
    """Changes what a character wears."""

    def __init__(self, store: GameStore) -> None:
        self.store = store

    def equip_item(self, player_id: int, item_id: int) -> Item:
        """
        Equips an item, taking off whatever occupied the same slot.

        Args:
            player_id (int): The owner of the item.
            item_id (int): The item to equip.

        Returns:
            Item: The equipped item.

        Raises:
            StateError: If the character is battling, or the item is missing,
                already equipped or broken.

        """
        with self.store.atomic(player_id):
            character = self._require_idle_character(player_id)
            items = self.store.get_items(player_id)
            item = _find_item(items, item_id)
            if item.equipped:
                raise StateError(f"{item.name} is already equipped.")
            if item.duration <= 0:
                raise StateError(f"{item.name} is broken and cannot be equipped.")
            for other in items:
                if other.equipped and other.slot == item.slot:
                    other.equipped = False
                    self.store.save_item(other)
            item.equipped = True
            self.store.save_item(item)
        log_info(
            f"{character.name} equips {item.name}",
            {"player_id": player_id, "item_id": item_id, "slot": item.slot.name},
        )
        return item

    def unequip_item(self, player_id: int, item_id: int) -> Item:
        """
        Takes off an equipped item.

        Args:
            player_id (int): The owner of the item.
            item_id (int): The item to take off.

        Returns:
            Item: The unequipped item.

        Raises:
            StateError: If the character is battling, or the item is missing
                or not equipped.

        """
        with self.store.atomic(player_id):
            character = self._require_idle_character(player_id)
            item = _find_item(self.store.get_items(player_id), item_id)
            if not item.equipped:
                raise StateError(f"{item.name} is not equipped.")
            item.equipped = False
            self.store.save_item(item)
        log_info(
            f"{character.name} unequips {item.name}",
            {"player_id": player_id, "item_id": item_id},
        )
        return item

    def _require_idle_character(self, player_id: int) -> Character:
        character = self.store.get_character(player_id)
        if character is None:
            raise StateError("No character found.")
        if character.is_battling:
            raise StateError("You cannot change equipment during a battle.")
        return character


def _find_item(items: list[Item], item_id: int) -> Item:
    for item in items:
        if item.id == item_id:
            return item
    raise StateError("Item not found in your inventory.")
