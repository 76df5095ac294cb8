"""
Tests for items and the equipment aggregate.
"""

import pytest
from adr_battle.core.constants import ItemSlot
from adr_battle.items.equipment import (
    EquipmentBonuses,
    Item,
    calculate_equipment_bonuses,
    wear_equipment,
)


def make_item(item_id, slot, power=0, **kwargs):
    return Item(
        id=item_id,
        owner_id=1,
        name=f"{slot.display_name} {item_id}",
        slot=slot,
        power=power,
        equipped=kwargs.pop("equipped", True),
        **kwargs,
    )


def test_no_items_means_unarmed_defaults():
    bonuses = calculate_equipment_bonuses([])
    assert bonuses == EquipmentBonuses()
    assert not bonuses.is_armed
    assert bonuses.weapon_crit_range == 20
    assert bonuses.weapon_crit_mod == 2


def test_weapon_sets_attack_fields():
    sword = make_item(1, ItemSlot.WEAPON, power=6, add_power=2, crit_hit=18, crit_hit_mod=3, element_id=4)
    bonuses = calculate_equipment_bonuses([sword])
    assert bonuses.is_armed
    assert bonuses.weapon_power == 8
    assert bonuses.weapon_crit_range == 18
    assert bonuses.weapon_crit_mod == 3
    assert bonuses.weapon_element == 4


def test_defensive_slots_add_up():
    items = [
        make_item(1, ItemSlot.ARMOR, power=3, bonus_ac=1),
        make_item(2, ItemSlot.SHIELD, power=2),
        make_item(3, ItemSlot.HELM, power=1, add_power=1),
        make_item(4, ItemSlot.GLOVES, power=1),
    ]
    assert calculate_equipment_bonuses(items).def_bonus == 4 + 2 + 2 + 1


def test_accessories_set_their_bonus():
    items = [
        make_item(1, ItemSlot.AMULET, power=2),
        make_item(2, ItemSlot.RING, power=1),
        make_item(3, ItemSlot.MAGIC_ATTACK, power=5),
        make_item(4, ItemSlot.MAGIC_DEFENSE, power=4),
    ]
    bonuses = calculate_equipment_bonuses(items)
    assert bonuses.hp_regen == 2
    assert bonuses.mp_regen == 1
    assert bonuses.magic_att_bonus == 5
    assert bonuses.magic_def_bonus == 4


def test_unequipped_items_are_ignored():
    items = [
        make_item(1, ItemSlot.WEAPON, power=9, equipped=False),
        make_item(2, ItemSlot.ARMOR, power=3, equipped=False),
    ]
    assert calculate_equipment_bonuses(items) == EquipmentBonuses()


def test_wear_equipment_only_touches_equipped_items():
    worn_out = make_item(1, ItemSlot.HELM, duration=0)
    stored = make_item(2, ItemSlot.ARMOR, equipped=False)
    sword = make_item(3, ItemSlot.WEAPON, power=4)
    assert wear_equipment([worn_out, stored, sword]) == 1
    assert worn_out.duration == 0
    assert stored.duration == 100
    assert sword.duration == 99


@pytest.mark.parametrize("fields", [{"crit_hit": 1}, {"crit_hit": 21}, {"crit_hit_mod": 0}, {"duration": 120}])
def test_invalid_items_are_rejected(fields):
    with pytest.raises(ValueError):
        make_item(1, ItemSlot.WEAPON, power=1, **fields)
