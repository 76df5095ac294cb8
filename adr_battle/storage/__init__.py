"""
Storage module for the ADR battle engine.

Defines the storage interfaces the engine depends on and an in-memory
implementation of them.
"""

from .base import BattleStore, CharacterStore, EquipmentProvider, GameStore
from .memory import InMemoryGameStore

__all__ = [
    # Import from base.py
    "BattleStore",
    "CharacterStore",
    "EquipmentProvider",
    "GameStore",
    # Import from memory.py
    "InMemoryGameStore",
]
