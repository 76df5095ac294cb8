"""
ADR battle engine.

Monster battle resolution for a browser role-playing game: dice and stat
primitives, the elemental wheel, monster scaling, the turn-based battle state
machine, and the rewards and leveling applied on victory.
"""

__version__ = "0.1.0"
