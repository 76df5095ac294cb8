"""
User interface module for the ADR battle engine.
"""

from .cli_interface import PlayerInterface, print_battle_status

__all__ = [
    "PlayerInterface",
    "print_battle_status",
]
