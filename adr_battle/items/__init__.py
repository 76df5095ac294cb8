"""
Item system module for the ADR battle engine.
"""

from .equipment import EquipmentBonuses, Item, calculate_equipment_bonuses, wear_equipment

__all__ = [
    # Import from equipment.py
    "EquipmentBonuses",
    "Item",
    "calculate_equipment_bonuses",
    "wear_equipment",
]
