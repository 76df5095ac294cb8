"""
Elemental damage module for the battle engine.

Elements form a configuration-driven wheel: each element record names the
element it is strong against, the element it is weak against, and the damage
percentages applied in each case. Relations are plain data and are not
required to be symmetric.
"""

from pydantic import BaseModel, Field

from ..core.constants import NEUTRAL_ELEMENT


class Element(BaseModel):
    """An element record of the elemental wheel."""

    id: int = Field(
        ge=1,
        description="The unique id of the element.",
    )
    name: str = Field(
        description="The display name of the element.",
    )
    description: str = Field(
        default="",
        description="A description of the element.",
    )
    color: str = Field(
        default="#ffffff",
        description="The display color of the element.",
    )
    oppose_strong: int = Field(
        default=NEUTRAL_ELEMENT,
        description="The element this element is strong against.",
    )
    oppose_strong_dmg: int = Field(
        default=100,
        ge=0,
        description="Damage percentage taken from the element this one is weak against.",
    )
    oppose_same_dmg: int = Field(
        default=100,
        ge=0,
        description="Damage percentage taken from the same element.",
    )
    oppose_weak: int = Field(
        default=NEUTRAL_ELEMENT,
        description="The element this element is weak against.",
    )
    oppose_weak_dmg: int = Field(
        default=100,
        ge=0,
        description="Damage percentage taken from the element this one is strong against.",
    )

    @property
    def colored_name(self) -> str:
        return f"[{self.color}]{self.name}[/]"


def element_multiplier(
    attacker_element: int,
    defender_element: int,
    defender: Element | None,
) -> float:
    """
    Returns the damage multiplier for an attack of one element against another.

    The relation is always read from the defender's record: an attacker using
    the element the defender is weak against deals the defender's
    ``oppose_strong_dmg`` percentage, a same-element attack deals
    ``oppose_same_dmg``, and an attacker using the element the defender is
    strong against deals ``oppose_weak_dmg``.

    Args:
        attacker_element (int):
            The element id of the attack.
        defender_element (int):
            The element id of the defender.
        defender (Element | None):
            The defender's element record. Only consulted when neither side
            is neutral.

    Returns:
        float: The multiplier to apply to the damage.

    """
    if attacker_element == NEUTRAL_ELEMENT or defender_element == NEUTRAL_ELEMENT:
        return 1.0
    if defender is None:
        return 1.0
    if attacker_element == defender.oppose_weak:
        return defender.oppose_strong_dmg / 100
    if attacker_element == defender_element:
        return defender.oppose_same_dmg / 100
    if attacker_element == defender.oppose_strong:
        return defender.oppose_weak_dmg / 100
    return 1.0
