"""
Shared fixtures for the battle engine tests.
"""

from collections import deque

import pytest
from adr_battle.character.main import Character
from adr_battle.combat.battle_engine import BattleEngine
from adr_battle.core.config import BattleConfig
from adr_battle.core.content import ContentRepository
from adr_battle.core.dice import Dice
from adr_battle.storage.memory import InMemoryGameStore

PLAYER_ID = 1


class ScriptedSource:
    """
    Random source returning a fixed sequence of values.

    Every value is checked against the requested range, so a test whose
    script drifts from the engine's draw order fails loudly.
    """

    def __init__(self, *values: int) -> None:
        self.values: deque[int] = deque(values)
        self.requests: list[tuple[int, int]] = []

    def push(self, *values: int) -> None:
        self.values.extend(values)

    def randint(self, a: int, b: int) -> int:
        self.requests.append((a, b))
        assert self.values, f"No scripted value left for randint({a}, {b})"
        value = self.values.popleft()
        assert a <= value <= b, f"Scripted value {value} outside [{a}, {b}]"
        return value

    @property
    def remaining(self) -> int:
        return len(self.values)


@pytest.fixture
def scripted():
    return ScriptedSource()


@pytest.fixture
def dice(scripted):
    return Dice(scripted)


@pytest.fixture(scope="session")
def content():
    return ContentRepository()


@pytest.fixture
def config():
    return BattleConfig()


@pytest.fixture
def store():
    return InMemoryGameStore()


@pytest.fixture
def hero(store):
    """
    A level 1 fighter without element.

    Physical attack 23, physical defense 4, unarmed weapon power 11.
    """
    character = Character(
        player_id=PLAYER_ID,
        name="Hero",
        might=14,
        dexterity=12,
        constitution=14,
        intelligence=10,
        wisdom=10,
        charisma=10,
        hp=30,
        hp_max=30,
        mp=10,
        mp_max=10,
        ac=2,
        class_id=1,
    )
    store.save_character(character)
    return character


@pytest.fixture
def engine(store, content, config, dice):
    return BattleEngine(store, content, config, dice)
