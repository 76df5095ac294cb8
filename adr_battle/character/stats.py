"""
Character stats module for the battle engine.

Maps raw characteristics to the combat numbers used during a battle: the
ability modifier step function, physical and magic attack, physical and magic
defense.
"""

import math


def modifier(stat: int) -> int:
    """
    Calculates the ability modifier of a characteristic.

    The modifier is 0 up to 11 and grows by one every two points from 12
    (12-13: +1, 14-15: +2, 16-17: +3, ...).

    Args:
        stat (int): The characteristic value.

    Returns:
        int: The modifier for the given characteristic.

    """
    if stat > 11:
        return (stat - 12) // 2 + 1
    return 0


def physical_attack(might: int, constitution: int) -> int:
    """
    Computes physical attack from might and the constitution modifier.

    Args:
        might (int): The might characteristic.
        constitution (int): The constitution characteristic.

    Returns:
        int: ``ceil(might * 1.5 + modifier(constitution))``.

    """
    return math.ceil(might * 1.5 + modifier(constitution))


def magic_attack(intelligence: int, bonus: int = 0) -> int:
    """Computes magic attack, ``ceil(intelligence * 1.75)`` plus equipment bonus."""
    return math.ceil(intelligence * 1.75) + bonus


def physical_defense(ac: int, dexterity: int, bonus: int = 0) -> int:
    """
    Computes physical defense from armor class and the dexterity modifier.

    Args:
        ac (int): The armor class of the character.
        dexterity (int): The dexterity characteristic.
        bonus (int): Defense granted by equipped armor. Defaults to 0.

    Returns:
        int: ``ceil(ac * 1.5 + modifier(dexterity))`` plus the bonus.

    """
    return math.ceil(ac * 1.5 + modifier(dexterity)) + bonus


def magic_defense(wisdom: int, bonus: int = 0) -> int:
    """Computes magic defense, ``ceil(wisdom * 1.75)`` plus equipment bonus."""
    return math.ceil(wisdom * 1.75) + bonus
