"""
Rewards module for the battle engine.

Computes the XP, gold and skill points granted for a victory.
"""

import math

from pydantic import BaseModel, Field

from ..core.config import BattleConfig
from ..core.dice import Dice


class Rewards(BaseModel):
    """Rewards granted for a victory."""

    xp: int = Field(ge=1, description="Experience gained.")
    gold: int = Field(ge=1, description="Gold gained.")
    sp: int = Field(ge=0, description="Skill points gained.")
    leveled_up: bool = Field(default=False, description="Whether the victory caused a level up.")
    new_level: int | None = Field(default=None, description="The level reached, on level up.")


def calculate_rewards(
    dice: Dice,
    monster_level: int,
    player_level: int,
    monster_sp: int,
    config: BattleConfig,
) -> Rewards:
    """
    Computes the rewards of a victory.

    Beating a monster more than one level above the player pays a fixed
    percentage per level of difference; anything else pays a random amount
    within the configured ranges. XP and gold are at least 1, skill points are
    the monster's value unchanged.

    Args:
        dice (Dice): The dice used for the random rewards.
        monster_level (int): The level of the defeated monster.
        player_level (int): The level of the player.
        monster_sp (int): The skill point reward of the monster.
        config (BattleConfig): The battle configuration.

    Returns:
        Rewards: The rewards, without level up information.

    """
    level_diff = monster_level - player_level
    if level_diff > 1:
        xp = math.floor(level_diff * config.base_exp_modifier / 100)
        gold = math.floor(level_diff * config.base_reward_modifier / 100)
    else:
        xp = dice.rand_range(config.base_exp_min, config.base_exp_max)
        gold = dice.rand_range(config.base_reward_min, config.base_reward_max)
    return Rewards(xp=max(1, xp), gold=max(1, gold), sp=monster_sp)
