"""
Leveling module for the battle engine.

Computes the XP threshold of each level and the hp/mp gains granted when a
character levels up.
"""

import math

from pydantic import BaseModel, Field

from ..core.dice import Dice
from .character_class import CharacterClass
from .main import Character


class LevelUp(BaseModel):
    """The outcome of a level up."""

    new_level: int = Field(description="The level reached.")
    hp_gain: int = Field(description="Maximum hp gained.")
    mp_gain: int = Field(description="Maximum mp gained.")
    ac_gain: int = Field(description="Armor class gained.")


def xp_for_level(level: int, penalty_percent: int = 10) -> int:
    """
    Returns the XP required to reach a level.

    Args:
        level (int): The target level.
        penalty_percent (int): Growth of the threshold per level, in percent.

    Returns:
        int: ``floor(100 * (1 + penalty)^(level - 1))``.

    """
    return math.floor(100 * (1 + penalty_percent / 100) ** (level - 1))


def xp_to_next_level(level: int, xp: int, penalty_percent: int = 10) -> int:
    """Returns the XP still missing to reach the next level."""
    return max(0, xp_for_level(level + 1, penalty_percent) - xp)


def should_level_up(level: int, xp: int, penalty_percent: int = 10) -> bool:
    """Returns True once the accumulated XP reaches the next threshold."""
    return xp >= xp_for_level(level + 1, penalty_percent)


def hp_gain_on_level_up(dice: Dice, constitution: int, class_hp_bonus: int = 0) -> int:
    """Rolls the hp gained on level up, at least 1."""
    con_mod = max(1, (constitution - 10) // 2)
    return max(1, con_mod + class_hp_bonus + dice.rand_range(1, 4))


def mp_gain_on_level_up(dice: Dice, intelligence: int, class_mp_bonus: int = 0) -> int:
    """Rolls the mp gained on level up, never negative."""
    int_mod = max(0, (intelligence - 10) // 2)
    return max(0, int_mod + class_mp_bonus + dice.rand_range(0, 2))


def apply_level_up(
    character: Character,
    character_class: CharacterClass,
    dice: Dice,
    penalty_percent: int = 10,
) -> LevelUp | None:
    """
    Levels the character up once if its XP crossed the next threshold.

    On level up the character gains hp, mp and armor class from its
    characteristics and class growth, and is fully healed to the new maximums.

    Args:
        character (Character): The character to update in place.
        character_class (CharacterClass): The class of the character.
        dice (Dice): The dice used for the random part of the gains.
        penalty_percent (int): Growth of the threshold per level, in percent.

    Returns:
        LevelUp | None: The gains, or None if no level was gained.

    """
    if not should_level_up(character.level, character.xp, penalty_percent):
        return None
    hp_gain = hp_gain_on_level_up(dice, character.constitution, character_class.update_hp)
    mp_gain = mp_gain_on_level_up(dice, character.intelligence, character_class.update_mp)
    character.level += 1
    character.hp_max += hp_gain
    character.mp_max += mp_gain
    character.ac += character_class.update_ac
    character.hp = character.hp_max
    character.mp = character.mp_max
    return LevelUp(
        new_level=character.level,
        hp_gain=hp_gain,
        mp_gain=mp_gain,
        ac_gain=character_class.update_ac,
    )
