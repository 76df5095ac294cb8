"""
Town module for the ADR battle engine.
"""

from .temple import Temple

__all__ = [
    "Temple",
]
