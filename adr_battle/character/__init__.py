"""
Character system module for the ADR battle engine.

This module handles the character record, character classes, stat derivation
and leveling. Character creation lives in ``character.creation``.
"""

from .character_class import CharacterClass
from .leveling import LevelUp, apply_level_up, should_level_up, xp_for_level
from .main import CHARACTERISTICS, Character
from .stats import magic_attack, magic_defense, modifier, physical_attack, physical_defense

__all__ = [
    # Import from character_class.py
    "CharacterClass",
    # Import from leveling.py
    "LevelUp",
    "apply_level_up",
    "should_level_up",
    "xp_for_level",
    # Import from main.py
    "CHARACTERISTICS",
    "Character",
    # Import from stats.py
    "magic_attack",
    "magic_defense",
    "modifier",
    "physical_attack",
    "physical_defense",
]
