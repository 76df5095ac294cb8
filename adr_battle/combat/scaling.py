"""
Monster scaling module for the battle engine.

Battles only draw monsters at or below the player level. The gap between the
two levels produces a multiplier that is applied to every combat stat of the
template, so low-level monsters remain a threat to stronger players.
"""

import math

from catchery import log_debug

from ..core.config import BattleConfig
from ..core.constants import ScalingMethod
from .monster import MonsterInstance, MonsterTemplate


def monster_scaling(
    player_level: int,
    monster_level: int,
    stats_modifier: int = 150,
    method: ScalingMethod = ScalingMethod.WEIGHTED,
) -> float:
    """
    Computes the stat multiplier for a monster fought by a player.

    Args:
        player_level (int): The level of the player.
        monster_level (int): The level of the monster.
        stats_modifier (int): The scaling percentage. Defaults to 150.
        method (ScalingMethod): The formula to use. Defaults to WEIGHTED.

    Returns:
        float: The multiplier, exactly 1 when the monster is not below the
        player level.

    """
    if monster_level >= player_level:
        return 1
    gap = player_level - monster_level
    if method == ScalingMethod.WEIGHTED:
        return ((stats_modifier - 100) / 100) * gap + 1
    return (stats_modifier / 100) * gap


def _scale_stat(base: int, scale: float, floor: int) -> int:
    return max(floor, math.ceil(base * scale))


def scale_monster(
    template: MonsterTemplate,
    player_level: int,
    config: BattleConfig,
) -> MonsterInstance:
    """
    Creates a battle instance of a monster scaled to the player level.

    Every scaled stat is ``ceil(base * scale)``; hit points never drop below
    ``config.monster_hp_floor`` and every other stat never drops below
    ``config.monster_stat_floor``.

    Args:
        template (MonsterTemplate): The catalog entry to scale.
        player_level (int): The level of the player.
        config (BattleConfig): The battle configuration.

    Returns:
        MonsterInstance: A fresh instance at full hp and mp.

    """
    scale = monster_scaling(
        player_level,
        template.level,
        config.monster_stats_modifier,
        config.battle_calc_type,
    )
    floor = config.monster_stat_floor
    hp = _scale_stat(template.hp, scale, config.monster_hp_floor)
    mp = _scale_stat(template.mp, scale, floor)
    log_debug(
        f"Scaled {template.name} by {scale:.2f}",
        {"monster_id": template.id, "player_level": player_level, "scale": scale},
    )
    return MonsterInstance(
        id=template.id,
        name=template.name,
        level=template.level,
        hp=hp,
        hp_max=hp,
        mp=mp,
        mp_max=mp,
        attack=_scale_stat(template.attack, scale, floor),
        defense=_scale_stat(template.defense, scale, floor),
        magic_attack=_scale_stat(template.magic_attack, scale, floor),
        magic_resistance=_scale_stat(template.magic_resistance, scale, floor),
        mp_power=template.mp_power,
        sp=_scale_stat(template.sp, scale, floor),
        element_id=template.element_id,
        custom_spell=template.custom_spell,
    )
