"""
Configuration module for the battle engine.

Holds the tunable game settings (daily allowance, monster scaling, reward
ranges, leveling penalty, temple prices) and loads them from JSON.
"""

import json
from pathlib import Path
from typing import Any

from catchery import ensure_int_in_range
from pydantic import BaseModel, Field

from .constants import ScalingMethod
from .errors import DataIntegrityError

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_CONFIG_PATH = DATA_DIR / "config.json"


class BattleConfig(BaseModel):
    """Game settings consumed by the battle engine and its collaborators."""

    battle_limit: int = Field(
        default=20,
        ge=0,
        description="Battles a character may start per day.",
    )
    monster_stats_modifier: int = Field(
        default=150,
        description="Percentage driving monster scaling.",
    )
    battle_calc_type: ScalingMethod = Field(
        default=ScalingMethod.WEIGHTED,
        description="Formula used to scale monsters below the player level.",
    )
    base_exp_min: int = Field(default=10, ge=0, description="Minimum random XP reward.")
    base_exp_max: int = Field(default=40, ge=0, description="Maximum random XP reward.")
    base_exp_modifier: int = Field(
        default=120,
        ge=0,
        description="XP percentage per level of difference above the player.",
    )
    base_reward_min: int = Field(default=10, ge=0, description="Minimum random gold reward.")
    base_reward_max: int = Field(default=40, ge=0, description="Maximum random gold reward.")
    base_reward_modifier: int = Field(
        default=120,
        ge=0,
        description="Gold percentage per level of difference above the player.",
    )
    next_level_penalty: int = Field(
        default=10,
        ge=0,
        description="Percentage growth of the XP threshold per level.",
    )
    temple_heal_cost: int = Field(default=100, ge=0, description="Gold cost of a temple heal.")
    temple_resurrect_cost: int = Field(
        default=300,
        ge=0,
        description="Gold cost of a temple resurrection.",
    )
    monster_hp_floor: int = Field(
        default=8,
        ge=1,
        description="Minimum hp of a scaled monster.",
    )
    monster_stat_floor: int = Field(
        default=1,
        ge=0,
        description="Minimum value of every other scaled monster stat.",
    )
    min_characteristic: int = Field(default=3, ge=1, description="Lowest allowed characteristic.")
    max_characteristic: int = Field(default=20, ge=1, description="Highest allowed characteristic.")

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        self.monster_stats_modifier = ensure_int_in_range(
            self.monster_stats_modifier,
            "monster_stats_modifier",
            0,
            1000,
            default=150,
        )
        if self.base_exp_min > self.base_exp_max:
            raise ValueError("base_exp_min must not exceed base_exp_max")
        if self.base_reward_min > self.base_reward_max:
            raise ValueError("base_reward_min must not exceed base_reward_max")
        if self.min_characteristic > self.max_characteristic:
            raise ValueError("min_characteristic must not exceed max_characteristic")


def load_config(path: Path | None = None) -> BattleConfig:
    """
    Loads the battle configuration from a JSON file.

    Args:
        path (Path | None):
            The JSON file to read. Defaults to the bundled configuration.

    Returns:
        BattleConfig: The validated configuration.

    Raises:
        DataIntegrityError: If the file is missing or invalid.

    """
    path = path or DEFAULT_CONFIG_PATH
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected object in {path}, got {type(data).__name__}")
        return BattleConfig(**data)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        raise DataIntegrityError(f"Configuration {path} raised an error: {e}") from e
