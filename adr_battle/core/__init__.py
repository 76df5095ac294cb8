"""
Core system module for the ADR battle engine.

This module contains the fundamental components shared by every subsystem,
including constants, errors, dice, configuration and display utilities. The
content repository lives in ``core.content`` and is imported from there.
"""

from .config import (
    DATA_DIR,
    BattleConfig,
    load_config,
)
from .constants import (
    BattleAction,
    BattleResult,
    ItemSlot,
    MonsterAttackType,
    ScalingMethod,
)
from .dice import (
    Dice,
    RandomSource,
    RollBreakdown,
)
from .errors import (
    BattleError,
    DataIntegrityError,
    StateError,
    ValidationError,
)
from .utils import (
    ccapture,
    cprint,
    crule,
    format_pool,
    make_bar,
)

__all__ = [
    # Import from config.py
    "DATA_DIR",
    "BattleConfig",
    "load_config",
    # Import from constants.py
    "BattleAction",
    "BattleResult",
    "ItemSlot",
    "MonsterAttackType",
    "ScalingMethod",
    # Import from dice.py
    "Dice",
    "RandomSource",
    "RollBreakdown",
    # Import from errors.py
    "BattleError",
    "DataIntegrityError",
    "StateError",
    "ValidationError",
    # Import from utils.py
    "ccapture",
    "cprint",
    "crule",
    "format_pool",
    "make_bar",
]
