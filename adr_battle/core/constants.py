"""
Constants and enumerations for the battle engine.

Defines the enumerations shared across the engine: the actions a player may
submit, the lifecycle of a battle, the monster scaling methods, the monster
attack kinds and the equipment slots.
"""

from enum import Enum

# Element id used for "no element". Any pairing involving it is neutral.
NEUTRAL_ELEMENT = 0

# Natural die results that short-circuit every d20 check.
NATURAL_MISS = 1
NATURAL_HIT = 20

# Defaults used when no weapon is equipped.
DEFAULT_THREAT_RANGE = 20
DEFAULT_CRIT_MULTIPLIER = 2


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class BattleAction(NiceEnum):
    """Defines the actions a player can submit on their turn."""

    ATTACK = "attack"
    DEFEND = "defend"
    FLEE = "flee"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this action."""
        return {
            BattleAction.ATTACK: "⚔️",
            BattleAction.DEFEND: "🛡️",
            BattleAction.FLEE: "🏃",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this action."""
        return {
            BattleAction.ATTACK: "bold red",
            BattleAction.DEFEND: "bold blue",
            BattleAction.FLEE: "bold yellow",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies action color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class BattleResult(NiceEnum):
    """Defines the lifecycle state of a battle session."""

    IN_PROGRESS = "in_progress"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"

    @property
    def is_terminal(self) -> bool:
        """Returns True once the battle accepts no further turns."""
        return self != BattleResult.IN_PROGRESS

    @property
    def color(self) -> str:
        """Returns the color string associated with this result."""
        return {
            BattleResult.IN_PROGRESS: "bold white",
            BattleResult.VICTORY: "bold green",
            BattleResult.DEFEAT: "bold red",
            BattleResult.FLED: "bold yellow",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies result color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class ScalingMethod(NiceEnum):
    """Defines how a monster template is scaled to the player level."""

    WEIGHTED = "WEIGHTED"
    LINEAR = "LINEAR"


class MonsterAttackType(NiceEnum):
    """Defines the kind of attack chosen by the monster AI."""

    PHYSICAL = "PHYSICAL"
    MAGIC = "MAGIC"


class ItemSlot(NiceEnum):
    """Defines the equipment slot an item occupies."""

    WEAPON = "WEAPON"
    ARMOR = "ARMOR"
    SHIELD = "SHIELD"
    HELM = "HELM"
    GLOVES = "GLOVES"
    AMULET = "AMULET"
    RING = "RING"
    MAGIC_ATTACK = "MAGIC_ATTACK"
    MAGIC_DEFENSE = "MAGIC_DEFENSE"

    @property
    def is_defensive(self) -> bool:
        """Returns True for slots that contribute to physical defense."""
        return self in (
            ItemSlot.ARMOR,
            ItemSlot.SHIELD,
            ItemSlot.HELM,
            ItemSlot.GLOVES,
        )
