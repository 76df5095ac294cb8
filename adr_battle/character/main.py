"""
Character record module for the battle engine.

The character record is owned by the storage collaborator. The engine reads
the characteristics and progression fields from it and writes back hp, mp,
rewards, counters and the battling and dead flags.
"""

from typing import Any

from pydantic import BaseModel, Field

from ..core.constants import NEUTRAL_ELEMENT

CHARACTERISTICS = (
    "might",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)


class Character(BaseModel):
    """A player character as persisted by the character store."""

    player_id: int = Field(description="The id of the owning player.")
    name: str = Field(description="The name of the character.")
    # Characteristics.
    might: int = Field(default=10, ge=0)
    dexterity: int = Field(default=10, ge=0)
    constitution: int = Field(default=10, ge=0)
    intelligence: int = Field(default=10, ge=0)
    wisdom: int = Field(default=10, ge=0)
    charisma: int = Field(default=10, ge=0)
    # Vitals.
    hp: int = Field(default=20, ge=0, description="Current hit points.")
    hp_max: int = Field(default=20, ge=1, description="Maximum hit points.")
    mp: int = Field(default=10, ge=0, description="Current mana points.")
    mp_max: int = Field(default=10, ge=0, description="Maximum mana points.")
    ac: int = Field(default=0, ge=0, description="Base armor class.")
    # Progression.
    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0)
    sp: int = Field(default=0, ge=0)
    gold: int = Field(default=100, ge=0)
    class_id: int = Field(default=1, description="The id of the character class.")
    element_id: int = Field(default=NEUTRAL_ELEMENT, ge=0, description="The character element.")
    # Battle bookkeeping.
    battle_limit: int = Field(default=20, ge=0, description="Battles left today.")
    is_dead: bool = Field(default=False)
    is_battling: bool = Field(default=False)
    victories: int = Field(default=0, ge=0)
    defeats: int = Field(default=0, ge=0)
    flees: int = Field(default=0, ge=0)

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if self.hp > self.hp_max:
            raise ValueError("hp must not exceed hp_max")
        if self.mp > self.mp_max:
            raise ValueError("mp must not exceed mp_max")

    def is_alive(self) -> bool:
        return not self.is_dead and self.hp > 0

    @property
    def colored_name(self) -> str:
        return f"[bold blue]{self.name}[/]"
