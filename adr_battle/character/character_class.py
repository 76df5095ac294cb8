from pydantic import BaseModel, Field


class CharacterClass(BaseModel):
    """
    Represents a character class with its starting values and the stats it
    gains on every level up.
    """

    id: int = Field(
        description="The unique id of the character class.",
    )
    name: str = Field(
        description="The name of the character class.",
    )
    description: str = Field(
        default="",
        description="A description of the character class.",
    )
    selectable: bool = Field(
        default=True,
        description="Whether new characters may pick this class.",
    )
    base_hp: int = Field(
        default=0,
        description="HP bonus granted at character creation.",
    )
    base_mp: int = Field(
        default=0,
        description="MP bonus granted at character creation.",
    )
    base_ac: int = Field(
        default=0,
        description="Armor class granted at character creation.",
    )
    update_hp: int = Field(
        default=0,
        ge=0,
        description="HP growth per level.",
    )
    update_mp: int = Field(
        default=0,
        ge=0,
        description="MP growth per level.",
    )
    update_ac: int = Field(
        default=0,
        ge=0,
        description="Armor class growth per level.",
    )

    def __hash__(self) -> int:
        """
        Hash the character class based on its id.

        Returns:
            int:
                The hash value of the character class.

        """
        return hash(self.id)
