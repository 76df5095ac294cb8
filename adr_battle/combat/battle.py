"""
Battle models for the battle engine.

Holds the frozen combat snapshot of the challenger, the persisted battle
session and the results returned to callers. Turn results form a tagged
union discriminated on their ``result`` field.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ..character.main import Character
from ..character.stats import magic_attack, magic_defense, physical_attack, physical_defense
from ..core.constants import BattleAction, BattleResult
from ..items.equipment import EquipmentBonuses
from .monster import MonsterInstance
from .rewards import Rewards


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CombatSnapshot(BaseModel):
    """
    The challenger's combat numbers, frozen when the battle starts.

    Only hp and mp change during the battle; every derived stat keeps the
    value computed from the characteristics and equipment at start.
    """

    hp: int = Field(description="Current hit points.")
    hp_max: int = Field(description="Maximum hit points.")
    mp: int = Field(description="Current mana points.")
    mp_max: int = Field(description="Maximum mana points.")
    att: int = Field(description="Physical attack.")
    defense: int = Field(description="Physical defense.")
    magic_att: int = Field(description="Magic attack.")
    magic_def: int = Field(description="Magic defense.")
    hp_regen: int = Field(default=0, description="Hit points regenerated per turn.")
    mp_regen: int = Field(default=0, description="Mana points regenerated per turn.")
    element_id: int = Field(description="The challenger element.")
    weapon_power: int = Field(default=0, description="Power of the weapon, 0 if unarmed.")
    weapon_crit_range: int = Field(description="Threat range of the weapon.")
    weapon_crit_mod: int = Field(description="Crit multiplier of the weapon.")
    weapon_element: int = Field(description="Element of the weapon.")


def build_combat_snapshot(character: Character, bonuses: EquipmentBonuses) -> CombatSnapshot:
    """
    Derives the combat snapshot of a character and its equipment.

    Args:
        character (Character): The character entering the battle.
        bonuses (EquipmentBonuses): The aggregate of its equipped items.

    Returns:
        CombatSnapshot: The frozen combat numbers.

    """
    return CombatSnapshot(
        hp=character.hp,
        hp_max=character.hp_max,
        mp=character.mp,
        mp_max=character.mp_max,
        att=physical_attack(character.might, character.constitution),
        defense=physical_defense(character.ac, character.dexterity, bonuses.def_bonus),
        magic_att=magic_attack(character.intelligence, bonuses.magic_att_bonus),
        magic_def=magic_defense(character.wisdom, bonuses.magic_def_bonus),
        hp_regen=bonuses.hp_regen,
        mp_regen=bonuses.mp_regen,
        element_id=character.element_id,
        weapon_power=bonuses.weapon_power,
        weapon_crit_range=bonuses.weapon_crit_range,
        weapon_crit_mod=bonuses.weapon_crit_mod,
        weapon_element=bonuses.weapon_element,
    )


class BattleSession(BaseModel):
    """A battle between one player and one monster, as persisted by the store."""

    battle_id: int = Field(description="The unique id of the battle.")
    player_id: int = Field(description="The id of the owning player.")
    turn: int = Field(default=0, ge=0, description="Number of completed exchanges.")
    result: BattleResult = Field(default=BattleResult.IN_PROGRESS)
    challenger: CombatSnapshot = Field(description="The frozen challenger snapshot.")
    monster: MonsterInstance = Field(description="The live monster instance.")
    player_first: bool = Field(default=True, description="Initiative outcome, display only.")
    initiative_player: int = Field(default=0, description="The player's initiative total.")
    initiative_monster: int = Field(default=0, description="The monster's initiative total.")
    log: list[str] = Field(default_factory=list, description="Cumulative battle messages.")
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: datetime | None = Field(default=None)

    @property
    def is_active(self) -> bool:
        return self.result == BattleResult.IN_PROGRESS


class BattleSnapshot(BaseModel):
    """The view of a battle returned by start and current-battle queries."""

    battle_id: int
    player_id: int
    round: int
    result: BattleResult
    player_first: bool
    initiative_player: int
    initiative_monster: int
    challenger: CombatSnapshot
    monster: MonsterInstance
    messages: list[str] = Field(default_factory=list)

    @classmethod
    def from_session(cls, session: BattleSession) -> "BattleSnapshot":
        return cls(
            battle_id=session.battle_id,
            player_id=session.player_id,
            round=session.turn,
            result=session.result,
            player_first=session.player_first,
            initiative_player=session.initiative_player,
            initiative_monster=session.initiative_monster,
            challenger=session.challenger.model_copy(deep=True),
            monster=session.monster.model_copy(deep=True),
            messages=list(session.log),
        )


# =============================================================================
# Turn results
# =============================================================================


class TurnResultBase(BaseModel):
    """Fields shared by every turn result."""

    battle_id: int = Field(description="The battle the turn belongs to.")
    round: int = Field(description="The exchange that was resolved.")
    action: BattleAction = Field(description="The action submitted by the player.")
    messages: list[str] = Field(default_factory=list, description="Messages of this turn, in order.")
    player_hp: int
    player_hp_max: int
    player_mp: int
    player_mp_max: int
    monster_hp: int
    monster_hp_max: int
    monster_mp: int
    monster_mp_max: int
    battle_over: bool = Field(description="Whether the battle reached a terminal state.")


class OngoingTurn(TurnResultBase):
    result: Literal["ongoing"] = "ongoing"
    battle_over: bool = False


class VictoryTurn(TurnResultBase):
    result: Literal["victory"] = "victory"
    battle_over: bool = True
    rewards: Rewards = Field(description="Rewards granted for the victory.")


class DefeatTurn(TurnResultBase):
    result: Literal["defeat"] = "defeat"
    battle_over: bool = True


class FledTurn(TurnResultBase):
    result: Literal["fled"] = "fled"
    battle_over: bool = True


TurnResult = Annotated[
    Union[OngoingTurn, VictoryTurn, DefeatTurn, FledTurn],
    Field(discriminator="result"),
]
