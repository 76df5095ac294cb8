"""
Combat rolls module for the battle engine.

Every check here is a single d20 with the natural 1 / natural 20 short
circuits, followed by a threshold comparison. The comparison operator differs
per roll type and must not be swapped: the player attack and the crit
confirmation need to beat the threshold strictly, the magic and monster rolls
only need to meet it.
"""

import math

from catchery import log_debug
from pydantic import BaseModel, Field

from ..character.stats import modifier
from ..core.constants import NATURAL_HIT, NATURAL_MISS, MonsterAttackType
from ..core.dice import Dice

# A monster with enough mana casts on a d20 above this value (20% chance).
MONSTER_MAGIC_THRESHOLD = 16


class AttackRoll(BaseModel):
    """The outcome of a to-hit roll."""

    hit: bool = Field(description="Whether the attack landed.")
    roll: int = Field(description="The natural d20 result.")


class FleeRoll(BaseModel):
    """The outcome of a flee attempt."""

    success: bool = Field(description="Whether the player escaped.")
    player_roll: int = Field(description="The player's natural d20.")
    monster_roll: int = Field(description="The monster's natural d20.")


class InitiativeRoll(BaseModel):
    """The outcome of the initiative roll made at battle start."""

    player_first: bool = Field(description="Whether the player wins initiative.")
    player_roll: int = Field(description="The player's d20 plus modifier.")
    monster_roll: int = Field(description="The monster's d20 plus modifier.")


def player_attack_roll(
    dice: Dice,
    att: int,
    level: int,
    opponent_def: int,
    opponent_level: int,
    quality: int = 0,
) -> AttackRoll:
    """
    Rolls a player's physical attack.

    Hits when ``att + quality + roll + level > opponent_def + opponent_level``.
    """
    roll = dice.d20()
    if roll == NATURAL_MISS:
        return AttackRoll(hit=False, roll=roll)
    if roll == NATURAL_HIT:
        return AttackRoll(hit=True, roll=roll)
    hit = (att + quality + roll + level) > (opponent_def + opponent_level)
    log_debug(
        "Player attack roll",
        {"roll": roll, "att": att, "level": level, "def": opponent_def, "hit": hit},
    )
    return AttackRoll(hit=hit, roll=roll)


def crit_confirm(
    dice: Dice,
    att: int,
    level: int,
    opponent_def: int,
    opponent_level: int,
    threat_range: int,
    quality: int = 0,
) -> bool:
    """
    Rolls the confirmation of a threatened critical hit.

    A natural 1 never confirms, a roll at or above the threat range always
    confirms, anything else must pass the player attack comparison again.
    """
    roll = dice.d20()
    if roll == NATURAL_MISS:
        return False
    if roll >= threat_range:
        return True
    return (att + quality + roll + level) > (opponent_def + opponent_level)


def magic_attack_roll(
    dice: Dice,
    spell_power: int,
    attacker_int: int,
    defender_wis: int,
) -> AttackRoll:
    """
    Rolls a spell against its target.

    Hits when ``ceil(roll + spell_power + modifier(int)) >= 11 + modifier(wis)``.
    """
    roll = dice.d20()
    if roll == NATURAL_MISS:
        return AttackRoll(hit=False, roll=roll)
    if roll == NATURAL_HIT:
        return AttackRoll(hit=True, roll=roll)
    magic_check = math.ceil(roll + spell_power + modifier(attacker_int))
    fort_save = 11 + modifier(defender_wis)
    return AttackRoll(hit=magic_check >= fort_save, roll=roll)


def monster_attack_roll(
    dice: Dice,
    monster_att: int,
    player_def: int,
    player_dex: int,
) -> AttackRoll:
    """
    Rolls a monster's physical attack.

    Hits when ``monster_att + roll >= player_def + modifier(player_dex)``.
    """
    roll = dice.d20()
    if roll == NATURAL_MISS:
        return AttackRoll(hit=False, roll=roll)
    if roll == NATURAL_HIT:
        return AttackRoll(hit=True, roll=roll)
    hit = (monster_att + roll) >= (player_def + modifier(player_dex))
    return AttackRoll(hit=hit, roll=roll)


def monster_decision(dice: Dice, monster_mp: int, mp_power: int) -> MonsterAttackType:
    """
    Chooses between a physical attack and a spell for the monster.

    Without enough mana the monster always attacks physically; otherwise it
    casts on a d20 above 16.
    """
    if monster_mp <= 0 or monster_mp < mp_power:
        return MonsterAttackType.PHYSICAL
    if dice.d20() > MONSTER_MAGIC_THRESHOLD:
        return MonsterAttackType.MAGIC
    return MonsterAttackType.PHYSICAL


def flee_check(dice: Dice) -> FleeRoll:
    """
    Opposes a player d20 against a monster d20.

    A natural 20 always escapes, a natural 1 never does, otherwise the player
    must roll strictly higher. Ties favor the monster.
    """
    player_roll = dice.d20()
    monster_roll = dice.d20()
    if player_roll == NATURAL_HIT:
        success = True
    elif player_roll == NATURAL_MISS:
        success = False
    else:
        success = player_roll > monster_roll
    return FleeRoll(success=success, player_roll=player_roll, monster_roll=monster_roll)


def initiative_roll(dice: Dice, player_dex: int, monster_level: int) -> InitiativeRoll:
    """
    Rolls initiative for both sides.

    The monster's dexterity is ``10 + uniform[1, level] * 2``. The player goes
    first on a tie.
    """
    monster_dex = 10 + dice.rand_range(1, monster_level) * 2
    player_roll = dice.d20() + modifier(player_dex)
    monster_roll = dice.d20() + modifier(monster_dex)
    return InitiativeRoll(
        player_first=player_roll >= monster_roll,
        player_roll=player_roll,
        monster_roll=monster_roll,
    )


def monster_damage(
    dice: Dice,
    monster_level: int,
    is_defending: bool,
    attack_type: MonsterAttackType,
    monster_str: int,
    mp_power: int,
) -> int:
    """
    Rolls the damage of a monster hit, before elements and crits.

    The base power is ``level * uniform[1, 3]``, halved if the player defends.
    A physical hit deals half of it plus the strength modifier, a spell deals
    all of it plus the modifier of its power. Results below 1 are replaced by
    a uniform[1, 3] roll.
    """
    base_power = monster_level * dice.rand_range(1, 3)
    if is_defending:
        base_power //= 2
    if attack_type == MonsterAttackType.PHYSICAL:
        damage = math.ceil(base_power / 2) + modifier(monster_str)
    else:
        damage = base_power + modifier(mp_power)
    if damage < 1:
        damage = dice.rand_range(1, 3)
    return damage
