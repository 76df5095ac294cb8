"""
Monster module for the battle engine.

Defines the immutable monster template read from the catalog and the mutable
per-battle instance created from it.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import NEUTRAL_ELEMENT


class MonsterTemplate(BaseModel):
    """A monster as stored in the read-only catalog."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="The unique id of the monster.")
    name: str = Field(description="The name of the monster.")
    level: int = Field(ge=1, description="The level of the monster.")
    hp: int = Field(ge=1, description="Base hit points.")
    mp: int = Field(ge=0, description="Base mana points.")
    attack: int = Field(ge=0, description="Base physical attack.")
    defense: int = Field(ge=0, description="Base physical defense.")
    magic_attack: int = Field(default=10, ge=0, description="Base magic attack.")
    magic_resistance: int = Field(default=10, ge=0, description="Base magic resistance.")
    mp_power: int = Field(default=1, ge=0, description="MP cost and power of its spell.")
    sp: int = Field(default=0, ge=0, description="Skill points rewarded on defeat.")
    element_id: int = Field(default=NEUTRAL_ELEMENT, ge=0, description="The monster element.")
    custom_spell: str = Field(
        default="a magical spell",
        description="Label of the spell the monster casts.",
    )

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not self.name.strip():
            raise ValueError("name must be a non-empty string")


class MonsterInstance(BaseModel):
    """A scaled copy of a monster template, alive for one battle."""

    id: int = Field(description="The id of the template this instance came from.")
    name: str = Field(description="The name of the monster.")
    level: int = Field(ge=1, description="The level of the monster.")
    hp: int = Field(description="Current hit points.")
    hp_max: int = Field(ge=1, description="Maximum hit points.")
    mp: int = Field(description="Current mana points.")
    mp_max: int = Field(ge=0, description="Maximum mana points.")
    attack: int = Field(description="Scaled physical attack.")
    defense: int = Field(description="Scaled physical defense.")
    magic_attack: int = Field(description="Scaled magic attack.")
    magic_resistance: int = Field(description="Scaled magic resistance.")
    mp_power: int = Field(description="MP cost and power of its spell.")
    sp: int = Field(description="Scaled skill point reward.")
    element_id: int = Field(description="The monster element.")
    custom_spell: str = Field(description="Label of the spell the monster casts.")

    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def colored_name(self) -> str:
        return f"[bold red]{self.name}[/]"
