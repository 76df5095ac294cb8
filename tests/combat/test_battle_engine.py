"""
Tests for the battle engine.

Every scenario scripts the exact die sequence. Starting a battle draws the
monster index, then the initiative rolls; with ``START`` the hero meets
Globuz (hp 15, defense 3, level 1, Water) and wins initiative.
"""

import json
import shutil

import pytest
from adr_battle.combat.battle import DefeatTurn, FledTurn, OngoingTurn, VictoryTurn
from adr_battle.combat.battle_engine import BattleEngine
from adr_battle.core.config import DATA_DIR
from adr_battle.core.constants import BattleAction, BattleResult, ItemSlot
from adr_battle.core.content import ContentRepository
from adr_battle.core.errors import DataIntegrityError, StateError, ValidationError
from adr_battle.items.equipment import Item

PLAYER_ID = 1

# Monster index 0 (Globuz), monster dexterity roll, player d20, monster d20.
START = (0, 1, 10, 10)
# Monster strength, monster intelligence, decision d20 (physical),
# hit d20, damage roll: a 2 damage physical hit.
MONSTER_HITS_FOR_TWO = (1, 1, 5, 10, 2)
# Same, but the monster rolls a natural 1.
MONSTER_MISSES = (1, 1, 5, 1)


@pytest.fixture
def battle(engine, scripted, hero):
    scripted.push(*START)
    return engine.start_battle(PLAYER_ID)


def save(store, character, **changes):
    for field, value in changes.items():
        setattr(character, field, value)
    store.save_character(character)


# =============================================================================
# Starting a battle
# =============================================================================


def test_start_battle_returns_round_zero(battle, store, scripted):
    assert battle.round == 0
    assert battle.result == BattleResult.IN_PROGRESS
    assert battle.monster.name == "Globuz"
    assert battle.monster.hp == battle.monster.hp_max == 15
    assert battle.challenger.att == 23
    assert battle.challenger.defense == 4
    assert battle.challenger.hp == 30
    assert battle.player_first
    assert battle.initiative_player == battle.initiative_monster == 11
    assert scripted.remaining == 0

    character = store.get_character(PLAYER_ID)
    assert character.battle_limit == 19
    assert character.is_battling


def test_start_battle_draws_only_eligible_monsters(battle, scripted):
    assert scripted.requests[0] == (0, 3)


def test_current_battle_matches_started_battle(engine, battle):
    current = engine.get_current_battle(PLAYER_ID)
    assert current.battle_id == battle.battle_id
    assert current.messages == battle.messages


def test_no_current_battle_without_battling(engine, hero):
    assert engine.get_current_battle(PLAYER_ID) is None


def test_start_battle_without_character(engine):
    with pytest.raises(StateError):
        engine.start_battle(PLAYER_ID)


@pytest.mark.parametrize(
    "changes",
    [{"is_dead": True}, {"hp": 0}, {"battle_limit": 0}, {"is_battling": True}],
)
def test_start_battle_preconditions(engine, store, hero, scripted, changes):
    save(store, hero, **changes)
    with pytest.raises(StateError):
        engine.start_battle(PLAYER_ID)
    assert scripted.requests == []
    assert store.get_character(PLAYER_ID) == hero
    assert store.battles_of(PLAYER_ID) == []


def test_start_battle_twice_is_rejected(engine, battle, store, scripted):
    scripted.push(*START)
    with pytest.raises(StateError):
        engine.start_battle(PLAYER_ID)
    assert store.get_character(PLAYER_ID).battle_limit == 19
    assert len(store.battles_of(PLAYER_ID)) == 1


def test_start_battle_wears_equipment(engine, store, hero, scripted):
    store.add_item(Item(id=1, owner_id=PLAYER_ID, name="Dagger", slot=ItemSlot.WEAPON, power=3, equipped=True))
    store.add_item(Item(id=2, owner_id=PLAYER_ID, name="Spare", slot=ItemSlot.WEAPON, power=5))
    scripted.push(*START)
    engine.start_battle(PLAYER_ID)
    durations = {item.name: item.duration for item in store.get_items(PLAYER_ID)}
    assert durations == {"Dagger": 99, "Spare": 100}


def test_start_battle_rejects_missing_class(store, hero, dice, config, scripted, tmp_path):
    for name in ("monsters.json", "elements.json"):
        shutil.copy(DATA_DIR / name, tmp_path / name)
    classes = json.loads((DATA_DIR / "classes.json").read_text())
    (tmp_path / "classes.json").write_text(json.dumps([c for c in classes if c["id"] != 1]))
    engine = BattleEngine(store, ContentRepository(tmp_path), config, dice)

    with pytest.raises(DataIntegrityError):
        engine.start_battle(PLAYER_ID)
    assert store.get_character(PLAYER_ID) == hero
    assert scripted.requests == []


def test_start_battle_rejects_missing_monster_element(store, hero, dice, config, scripted, tmp_path):
    for name in ("monsters.json", "classes.json"):
        shutil.copy(DATA_DIR / name, tmp_path / name)
    elements = json.loads((DATA_DIR / "elements.json").read_text())
    (tmp_path / "elements.json").write_text(json.dumps([e for e in elements if e["id"] != 1]))
    engine = BattleEngine(store, ContentRepository(tmp_path), config, dice)

    scripted.push(*START)
    with pytest.raises(DataIntegrityError):
        engine.start_battle(PLAYER_ID)
    assert store.get_character(PLAYER_ID) == hero
    assert store.battles_of(PLAYER_ID) == []


# =============================================================================
# Attacking
# =============================================================================


def test_natural_twenty_hits_and_checks_crit(engine, battle, store, scripted):
    # Natural 20, damage 5 out of 11 unarmed, confirmation 15 doubles it.
    scripted.push(20, 5, 15, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, BattleAction.ATTACK)

    assert isinstance(turn, OngoingTurn)
    assert turn.result == "ongoing"
    assert not turn.battle_over
    assert turn.round == 1
    assert turn.monster_hp == 5
    assert turn.player_hp == 28
    assert "Critical hit!" in turn.messages
    assert scripted.requests[len(START) + 1] == (1, 11)
    assert scripted.remaining == 0

    assert store.get_character(PLAYER_ID).hp == 28
    assert store.get_battle(battle.battle_id).turn == 1


def test_unconfirmed_crit_deals_normal_damage(engine, battle, scripted):
    scripted.push(20, 5, 1, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert turn.monster_hp == 10
    assert "Critical hit!" not in turn.messages


def test_crit_is_only_checked_in_threat_range(engine, battle, scripted):
    scripted.push(19, 5, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert turn.monster_hp == 10
    assert scripted.remaining == 0


def test_natural_one_misses(engine, battle, scripted):
    scripted.push(1, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert turn.monster_hp == 15
    assert turn.player_hp == 28


def test_elements_change_damage_both_ways(engine, store, hero, scripted):
    save(store, hero, element_id=4)
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)
    # Fire against Water deals 75%, Water against Fire deals 125%.
    scripted.push(10, 8, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert turn.monster_hp == 15 - 6
    assert turn.player_hp == 30 - 3


def test_weapon_power_crit_and_element(engine, store, hero, scripted):
    store.add_item(
        Item(
            id=1,
            owner_id=PLAYER_ID,
            name="Earth Axe",
            slot=ItemSlot.WEAPON,
            power=6,
            crit_hit=18,
            crit_hit_mod=3,
            element_id=2,
            equipped=True,
        )
    )
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)
    assert battle.challenger.weapon_power == 6

    # 4 damage, tripled by the crit, 125% against Water, clamped to 15.
    scripted.push(18, 4, 18, 20, 20)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert isinstance(turn, VictoryTurn)
    assert turn.monster_hp == 0
    assert scripted.requests[len(START) + 1] == (1, 6)


# =============================================================================
# Monster phase
# =============================================================================


def test_defending_halves_monster_damage(engine, battle, scripted):
    # Base 1 * 3 halved to 1, half rounds up to 1, plus strength modifier 1.
    scripted.push(1, 1, 5, 10, 3)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    assert turn.player_hp == 28
    assert turn.monster_hp == 15


def test_monster_casts_its_spell(engine, hero, scripted):
    scripted.push(1, 1, 10, 10)
    battle = engine.start_battle(PLAYER_ID)
    assert battle.monster.name == "Bouglou"

    scripted.push(1, 1, 17, 10, 2)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    assert turn.monster_mp == 10 - 3
    assert turn.player_hp == 29
    assert any("an ice shard" in message for message in turn.messages)


def test_round_zero_protection(engine, store, hero, scripted):
    save(store, hero, hp=3)
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)

    # A natural 20 doubles the monster damage to 4, which would be lethal.
    scripted.push(1, 1, 5, 20, 3)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    assert isinstance(turn, OngoingTurn)
    assert turn.player_hp == 1
    assert not store.get_character(PLAYER_ID).is_dead


def test_round_zero_protection_keeps_the_minimum_damage(engine, store, hero, scripted):
    save(store, hero, hp=1)
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)

    # The player misses; the monster hit cannot go below 1 damage.
    scripted.push(1, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert isinstance(turn, DefeatTurn)
    assert turn.round == 1
    assert turn.player_hp == 0


def test_monster_critical_doubles_after_the_element(engine, store, hero, scripted):
    save(store, hero, element_id=4)
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)

    # 2 damage, 125% against Fire rounds up to 3, then the natural 20 doubles it.
    scripted.push(1, 1, 1, 5, 20, 2)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert turn.player_hp == 30 - 6
    assert scripted.remaining == 0


def test_defeat_after_round_zero(engine, store, hero, scripted):
    save(store, hero, hp=3)
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)
    scripted.push(1, 1, 5, 20, 3)
    engine.process_turn(PLAYER_ID, battle.battle_id, "defend")

    scripted.push(1, 1, 5, 10, 2)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    assert isinstance(turn, DefeatTurn)
    assert turn.battle_over
    assert turn.player_hp == 0

    character = store.get_character(PLAYER_ID)
    assert character.is_dead
    assert character.hp == 0
    assert character.defeats == 1
    assert not character.is_battling
    assert character.gold == 100
    assert store.get_battle(battle.battle_id).result == BattleResult.DEFEAT


def test_regeneration_after_monster_phase(engine, store, hero, scripted):
    save(store, hero, hp=20, mp=5)
    store.add_item(Item(id=1, owner_id=PLAYER_ID, name="Amulet", slot=ItemSlot.AMULET, power=3, equipped=True))
    store.add_item(Item(id=2, owner_id=PLAYER_ID, name="Ring", slot=ItemSlot.RING, power=1, equipped=True))
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)

    scripted.push(*MONSTER_MISSES)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    assert (turn.player_hp, turn.player_mp) == (23, 6)


def test_regeneration_is_capped(engine, store, hero, scripted):
    store.add_item(Item(id=1, owner_id=PLAYER_ID, name="Amulet", slot=ItemSlot.AMULET, power=9, equipped=True))
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)
    scripted.push(*MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    assert turn.player_hp == 30


def test_regeneration_can_save_the_player(engine, store, hero, scripted):
    store.add_item(Item(id=1, owner_id=PLAYER_ID, name="Amulet", slot=ItemSlot.AMULET, power=5, equipped=True))
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)
    scripted.push(*MONSTER_MISSES)
    engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    session = store.get_battle(battle.battle_id)
    session.challenger.hp = 2
    store.save_battle(session)

    # The monster hit drops the player to 0, the amulet brings them back to 5.
    scripted.push(1, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert isinstance(turn, OngoingTurn)
    assert turn.player_hp == 5
    assert not store.get_character(PLAYER_ID).is_dead


# =============================================================================
# Victory
# =============================================================================


def test_victory_grants_rewards(engine, battle, store, scripted):
    # Natural 20, damage 8 doubled to 16; then xp 30 and gold 25.
    scripted.push(20, 8, 15, 30, 25)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")

    assert isinstance(turn, VictoryTurn)
    assert turn.result == "victory"
    assert turn.battle_over
    assert turn.round == 1
    assert turn.monster_hp == 0
    assert turn.rewards.xp == 30
    assert turn.rewards.gold == 25
    assert turn.rewards.sp == 5
    assert not turn.rewards.leveled_up
    assert scripted.remaining == 0

    character = store.get_character(PLAYER_ID)
    assert (character.xp, character.gold, character.sp) == (30, 125, 5)
    assert character.victories == 1
    assert not character.is_battling
    assert engine.get_current_battle(PLAYER_ID) is None
    assert store.get_battle(battle.battle_id).finished_at is not None


def test_victory_levels_up(engine, store, hero, scripted):
    save(store, hero, xp=100)
    scripted.push(*START)
    battle = engine.start_battle(PLAYER_ID)

    # Hp gain 2 + 3 + 4, mp gain 0 + 0 + 1.
    scripted.push(20, 8, 15, 30, 25, 4, 1)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert turn.rewards.leveled_up
    assert turn.rewards.new_level == 2
    assert turn.player_hp == turn.player_hp_max == 39

    character = store.get_character(PLAYER_ID)
    assert character.level == 2
    assert character.hp == character.hp_max == 39
    assert character.mp_max == 11
    assert character.ac == 3


def test_mutual_knockout_resolves_as_victory(engine, battle, store, scripted):
    session = store.get_battle(battle.battle_id)
    session.challenger.hp = 0
    store.save_battle(session)

    scripted.push(20, 8, 15, 30, 25)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    assert isinstance(turn, VictoryTurn)
    assert turn.player_hp == 1

    character = store.get_character(PLAYER_ID)
    assert character.hp == 1
    assert not character.is_dead


# =============================================================================
# Fleeing
# =============================================================================


@pytest.mark.parametrize("monster_roll", [1, 19, 20])
def test_flee_with_natural_twenty(engine, battle, store, scripted, monster_roll):
    scripted.push(20, monster_roll)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "flee")

    assert isinstance(turn, FledTurn)
    assert turn.battle_over
    assert turn.round == 0
    assert turn.monster_hp == 15
    assert scripted.remaining == 0

    character = store.get_character(PLAYER_ID)
    assert character.flees == 1
    assert not character.is_battling
    assert store.get_battle(battle.battle_id).result == BattleResult.FLED


def test_failed_flee_lets_monster_act(engine, battle, scripted):
    scripted.push(12, 12, *MONSTER_HITS_FOR_TWO)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, "flee")
    assert isinstance(turn, OngoingTurn)
    assert "fails to escape" in turn.messages[0]
    assert turn.player_hp == 28


# =============================================================================
# Rejected turns
# =============================================================================


def test_terminal_battle_rejects_turns(engine, battle, store, scripted):
    scripted.push(20, 1)
    engine.process_turn(PLAYER_ID, battle.battle_id, "flee")
    character = store.get_character(PLAYER_ID)
    session = store.get_battle(battle.battle_id)

    for action in BattleAction:
        with pytest.raises(StateError):
            engine.process_turn(PLAYER_ID, battle.battle_id, action)
    assert store.get_character(PLAYER_ID) == character
    assert store.get_battle(battle.battle_id) == session


@pytest.mark.parametrize("action", ["cast", "", 3, None])
def test_unknown_action_is_rejected(engine, battle, store, scripted, action):
    drawn = len(scripted.requests)
    with pytest.raises(ValidationError):
        engine.process_turn(PLAYER_ID, battle.battle_id, action)
    assert len(scripted.requests) == drawn
    assert store.get_battle(battle.battle_id).turn == 0


def test_actions_are_case_insensitive(engine, battle, scripted):
    scripted.push(*MONSTER_MISSES)
    turn = engine.process_turn(PLAYER_ID, battle.battle_id, " Defend ")
    assert turn.action == BattleAction.DEFEND


def test_missing_identifiers_are_rejected(engine, battle):
    with pytest.raises(ValidationError):
        engine.process_turn(PLAYER_ID, None, "attack")
    with pytest.raises(ValidationError):
        engine.start_battle(None)


@pytest.mark.parametrize("player_id, battle_id", [(1, 999), (2, None)])
def test_unknown_battle_is_rejected(engine, battle, player_id, battle_id):
    with pytest.raises(StateError):
        engine.process_turn(player_id, battle_id or battle.battle_id, "attack")


def test_failed_turn_is_rolled_back(engine, battle, store, scripted, mocker):
    mocker.patch.object(store, "save_battle", side_effect=RuntimeError("disk full"))
    scripted.push(20, 5, 15, *MONSTER_HITS_FOR_TWO)
    with pytest.raises(RuntimeError):
        engine.process_turn(PLAYER_ID, battle.battle_id, "attack")
    mocker.stopall()

    assert store.get_character(PLAYER_ID).hp == 30
    session = store.get_battle(battle.battle_id)
    assert session.turn == 0
    assert session.monster.hp == 15


def test_battle_log_accumulates(engine, battle, scripted):
    scripted.push(*MONSTER_HITS_FOR_TWO, *MONSTER_MISSES)
    first = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    second = engine.process_turn(PLAYER_ID, battle.battle_id, "defend")
    assert (first.round, second.round) == (1, 2)
    current = engine.get_current_battle(PLAYER_ID)
    assert current.round == 2
    assert current.messages == battle.messages + first.messages + second.messages
