"""
Equipment module for the battle engine.

Defines equippable items and aggregates the bonuses of everything a character
has equipped into the single record the battle engine consumes.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from ..core.constants import (
    DEFAULT_CRIT_MULTIPLIER,
    DEFAULT_THREAT_RANGE,
    NEUTRAL_ELEMENT,
    ItemSlot,
)


class Item(BaseModel):
    """
    Represents an item owned by a character.

    Only equipped items contribute to combat. Weapons carry the threat range,
    crit multiplier and element used by the player attack.
    """

    id: int = Field(description="The unique id of the item.")
    owner_id: int = Field(description="The id of the owning player.")
    name: str = Field(description="The name of the item.")
    slot: ItemSlot = Field(description="The equipment slot of the item.")
    power: int = Field(default=0, ge=0, description="Base power of the item.")
    add_power: int = Field(default=0, ge=0, description="Power added by enchantment.")
    bonus_ac: int = Field(default=0, ge=0, description="Armor class granted.")
    element_id: int = Field(default=NEUTRAL_ELEMENT, ge=0, description="Element of a weapon.")
    crit_hit: int = Field(
        default=DEFAULT_THREAT_RANGE,
        ge=2,
        le=20,
        description="Minimum natural roll that threatens a critical hit.",
    )
    crit_hit_mod: int = Field(
        default=DEFAULT_CRIT_MULTIPLIER,
        ge=1,
        description="Damage multiplier of a confirmed critical hit.",
    )
    duration: int = Field(default=100, ge=0, description="Remaining durability.")
    duration_max: int = Field(default=100, ge=0, description="Maximum durability.")
    equipped: bool = Field(default=False)

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if self.duration > self.duration_max:
            raise ValueError("duration must not exceed duration_max")

    @property
    def total_power(self) -> int:
        return self.power + self.add_power


class EquipmentBonuses(BaseModel):
    """Combat bonuses derived from the equipped items of a character."""

    def_bonus: int = Field(default=0, description="Physical defense bonus.")
    weapon_power: int = Field(default=0, description="Power of the equipped weapon, 0 if unarmed.")
    weapon_crit_range: int = Field(default=DEFAULT_THREAT_RANGE, description="Weapon threat range.")
    weapon_crit_mod: int = Field(default=DEFAULT_CRIT_MULTIPLIER, description="Weapon crit multiplier.")
    weapon_element: int = Field(default=NEUTRAL_ELEMENT, description="Element of the weapon.")
    hp_regen: int = Field(default=0, description="Hit points regenerated per turn.")
    mp_regen: int = Field(default=0, description="Mana points regenerated per turn.")
    magic_att_bonus: int = Field(default=0, description="Magic attack bonus.")
    magic_def_bonus: int = Field(default=0, description="Magic defense bonus.")

    @property
    def is_armed(self) -> bool:
        return self.weapon_power > 0


def calculate_equipment_bonuses(items: Iterable[Item]) -> EquipmentBonuses:
    """
    Aggregates the bonuses of the equipped items.

    Args:
        items (Iterable[Item]):
            The items of a character. Unequipped items are ignored.

    Returns:
        EquipmentBonuses: The aggregated bonuses.

    """
    bonuses = EquipmentBonuses()
    for item in items:
        if not item.equipped:
            continue
        if item.slot == ItemSlot.WEAPON:
            bonuses.weapon_power = item.total_power
            bonuses.weapon_crit_range = item.crit_hit
            bonuses.weapon_crit_mod = item.crit_hit_mod
            bonuses.weapon_element = item.element_id
        elif item.slot.is_defensive:
            bonuses.def_bonus += item.total_power + item.bonus_ac
        elif item.slot == ItemSlot.AMULET:
            bonuses.hp_regen = item.total_power
        elif item.slot == ItemSlot.RING:
            bonuses.mp_regen = item.total_power
        elif item.slot == ItemSlot.MAGIC_ATTACK:
            bonuses.magic_att_bonus = item.total_power
        elif item.slot == ItemSlot.MAGIC_DEFENSE:
            bonuses.magic_def_bonus = item.total_power
    return bonuses


def wear_equipment(items: Iterable[Item]) -> int:
    """
    Removes one point of durability from every equipped item that has any left.

    Args:
        items (Iterable[Item]): The items of a character, updated in place.

    Returns:
        int: The number of items that lost durability.

    """
    worn = 0
    for item in items:
        if item.equipped and item.duration > 0:
            item.duration -= 1
            worn += 1
    return worn
