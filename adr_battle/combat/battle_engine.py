"""
Battle engine module.

Resolves monster battles: starting a battle against a random monster scaled
to the player, resolving one player action plus the monster's response per
call, and applying the victory, defeat and flee branches.
"""

import math

from catchery import log_critical, log_debug, log_info

from ..character.character_class import CharacterClass
from ..character.leveling import apply_level_up
from ..character.main import Character
from ..core.config import BattleConfig
from ..core.constants import (
    NATURAL_HIT,
    NEUTRAL_ELEMENT,
    BattleAction,
    BattleResult,
    MonsterAttackType,
)
from ..core.content import ContentRepository
from ..core.dice import Dice
from ..core.errors import DataIntegrityError, StateError, ValidationError
from ..storage.base import GameStore
from .battle import (
    BattleSession,
    BattleSnapshot,
    DefeatTurn,
    FledTurn,
    OngoingTurn,
    TurnResult,
    VictoryTurn,
    build_combat_snapshot,
    utc_now,
)
from .elements import Element, element_multiplier
from .rewards import calculate_rewards
from .rolls import (
    crit_confirm,
    flee_check,
    initiative_roll,
    magic_attack_roll,
    monster_attack_roll,
    monster_damage,
    monster_decision,
    player_attack_roll,
)
from .scaling import scale_monster


class BattleEngine:
    """
    Turn-based battle state machine between a player and a monster.

    Every request is validated before anything is written; the writes of a
    request are committed together inside the store's ``atomic`` block.
    """

    def __init__(
        self,
        store: GameStore,
        content: ContentRepository,
        config: BattleConfig | None = None,
        dice: Dice | None = None,
    ) -> None:
        """
        Initialize the BattleEngine.

        Args:
            store (GameStore): The character, battle and equipment storage.
            content (ContentRepository): The monster, element and class catalogs.
            config (BattleConfig | None): The battle configuration.
            dice (Dice | None): The dice used for every roll.

        """
        self.store = store
        self.content = content
        self.config = config or BattleConfig()
        self.dice = dice or Dice()

    # =========================================================================
    # Public operations
    # =========================================================================

    def start_battle(self, player_id: int) -> BattleSnapshot:
        """
        Starts a battle against a random monster at or below the player level.

        Args:
            player_id (int): The player starting the battle.

        Returns:
            BattleSnapshot: The battle at round 0.

        Raises:
            ValidationError: If the player id is missing.
            StateError: If the player cannot battle right now.
            DataIntegrityError: If a referenced catalog entry is missing.

        """
        if player_id is None:
            raise ValidationError("A player id is required.")
        with self.store.atomic(player_id):
            character = self._require_character(player_id)
            if character.is_dead or character.hp <= 0:
                raise StateError("You are dead. Visit the temple to be resurrected.")
            if character.is_battling or self.store.find_active_battle(player_id):
                raise StateError("You are already in a battle.")
            if character.battle_limit <= 0:
                raise StateError("You have no battles left for today.")
            candidates = self.content.monsters_up_to_level(character.level)
            if not candidates:
                raise StateError("There are no monsters available for your level.")
            self._require_class(character.class_id)
            self._element(character.element_id)

            template = self.dice.choice(candidates)
            self._element(template.element_id)
            monster = scale_monster(template, character.level, self.config)
            challenger = build_combat_snapshot(character, self.store.get_bonuses(player_id))
            initiative = initiative_roll(self.dice, character.dexterity, monster.level)

            messages = [f"A wild {monster.name} (level {monster.level}) appears!"]
            if initiative.player_first:
                messages.append(f"{character.name} is quicker than the {monster.name}.")
            else:
                messages.append(f"The {monster.name} is quicker than {character.name}.")

            character.battle_limit -= 1
            character.is_battling = True
            self.store.save_character(character)
            self.store.decrement_durability(player_id)

            session = BattleSession(
                battle_id=self.store.next_battle_id(),
                player_id=player_id,
                challenger=challenger,
                monster=monster,
                player_first=initiative.player_first,
                initiative_player=initiative.player_roll,
                initiative_monster=initiative.monster_roll,
                log=messages,
            )
            self.store.save_battle(session)

        log_info(
            f"{character.name} engages {monster.name}",
            {
                "player_id": player_id,
                "battle_id": session.battle_id,
                "monster_id": monster.id,
                "monster_hp": monster.hp,
            },
        )
        return BattleSnapshot.from_session(session)

    def process_turn(
        self,
        player_id: int,
        battle_id: int,
        action: BattleAction | str,
    ) -> TurnResult:
        """
        Resolves one player action and the monster's response.

        Args:
            player_id (int): The player submitting the action.
            battle_id (int): The battle the action belongs to.
            action (BattleAction | str): One of attack, defend or flee.

        Returns:
            TurnResult: The outcome of the turn.

        Raises:
            ValidationError: If an identifier is missing or the action is unknown.
            StateError: If the battle does not exist or is already over.
            DataIntegrityError: If a referenced catalog entry is missing.

        """
        if player_id is None or battle_id is None:
            raise ValidationError("Both a player id and a battle id are required.")
        action = self._parse_action(action)

        with self.store.atomic(player_id):
            session = self.store.get_battle(battle_id)
            if session is None or session.player_id != player_id:
                raise StateError("No battle found.")
            if session.result.is_terminal:
                raise StateError("This battle is already over.")
            character = self._require_character(player_id)

            messages: list[str] = []
            defending = False

            # Player phase.
            if action == BattleAction.FLEE:
                flee = flee_check(self.dice)
                log_debug(
                    "Flee check",
                    {"player_roll": flee.player_roll, "monster_roll": flee.monster_roll},
                )
                if flee.success:
                    messages.append(f"{character.name} flees from the {session.monster.name}!")
                    return self._on_fled(session, character, action, messages)
                messages.append(f"{character.name} fails to escape!")
            elif action == BattleAction.DEFEND:
                defending = True
                messages.append(f"{character.name} raises their guard.")
            else:
                self._player_attack(session, character, messages)

            if session.monster.hp <= 0:
                return self._on_victory(session, character, action, messages)

            # Monster phase.
            self._monster_attack(session, character, defending, messages)
            self._regenerate(session)

            if session.challenger.hp <= 0:
                return self._on_defeat(session, character, action, messages)

            session.turn += 1
            session.log.extend(messages)
            character.hp = session.challenger.hp
            character.mp = session.challenger.mp
            self.store.save_character(character)
            self.store.save_battle(session)
            return OngoingTurn(**self._turn_fields(session, action, messages, session.turn))

    def get_current_battle(self, player_id: int) -> BattleSnapshot | None:
        """
        Returns the in-progress battle of a player, if any.

        Args:
            player_id (int): The player to look up.

        Returns:
            BattleSnapshot | None: The active battle, or None.

        """
        if player_id is None:
            raise ValidationError("A player id is required.")
        session = self.store.find_active_battle(player_id)
        if session is None:
            return None
        return BattleSnapshot.from_session(session)

    # =========================================================================
    # Player and monster phases
    # =========================================================================

    def _player_attack(
        self,
        session: BattleSession,
        character: Character,
        messages: list[str],
    ) -> None:
        """Resolves the player's physical attack against the monster."""
        challenger = session.challenger
        monster = session.monster

        attack = player_attack_roll(
            self.dice,
            challenger.att,
            character.level,
            monster.defense,
            monster.level,
        )
        if not attack.hit:
            messages.append(f"{character.name} attacks the {monster.name} and misses.")
            return

        if challenger.weapon_power > 0:
            weapon_power = challenger.weapon_power
        else:
            weapon_power = max(1, challenger.att // 2)
        damage = self.dice.rand_range(1, weapon_power)

        if attack.roll >= challenger.weapon_crit_range:
            confirmed = crit_confirm(
                self.dice,
                challenger.att,
                character.level,
                monster.defense,
                monster.level,
                challenger.weapon_crit_range,
            )
            if confirmed:
                damage *= challenger.weapon_crit_mod
                messages.append("Critical hit!")

        attack_element = challenger.weapon_element or challenger.element_id
        multiplier = element_multiplier(
            attack_element,
            monster.element_id,
            self._element(monster.element_id),
        )
        damage = math.ceil(damage * multiplier)
        damage = max(1, min(damage, monster.hp))
        monster.hp -= damage

        log_debug(
            "Player hit",
            {"roll": attack.roll, "multiplier": multiplier, "damage": damage},
        )
        messages.append(f"{character.name} hits the {monster.name} for {damage} damage.")

    def _monster_attack(
        self,
        session: BattleSession,
        character: Character,
        defending: bool,
        messages: list[str],
    ) -> None:
        """Resolves the monster's automatic response."""
        challenger = session.challenger
        monster = session.monster

        monster_str = 10 + self.dice.rand_range(1, monster.level) * 2
        monster_int = 10 + self.dice.rand_range(1, monster.level) * 2
        attack_type = monster_decision(self.dice, monster.mp, monster.mp_power)

        if attack_type == MonsterAttackType.MAGIC:
            monster.mp = max(0, monster.mp - monster.mp_power)
            attack = magic_attack_roll(
                self.dice,
                monster.mp_power,
                monster_int,
                character.wisdom,
            )
            verb = f"casts {monster.custom_spell}"
        else:
            attack = monster_attack_roll(
                self.dice,
                monster.attack,
                challenger.defense,
                character.dexterity,
            )
            verb = "attacks"

        if not attack.hit:
            messages.append(f"The {monster.name} {verb} but misses.")
            return

        damage = monster_damage(
            self.dice,
            monster.level,
            defending,
            attack_type,
            monster_str,
            monster.mp_power,
        )
        multiplier = element_multiplier(
            monster.element_id,
            challenger.element_id,
            self._element(challenger.element_id),
        )
        damage = math.ceil(damage * multiplier)
        if attack.roll == NATURAL_HIT:
            damage *= 2
            messages.append(f"The {monster.name} lands a critical blow!")
        # Opening exchange protection, still subject to the 1 damage minimum.
        if session.turn == 0 and challenger.hp - damage < 1:
            damage = challenger.hp - 1
        damage = min(max(1, damage), challenger.hp)
        challenger.hp -= damage

        log_debug(
            "Monster hit",
            {
                "type": attack_type.name,
                "roll": attack.roll,
                "defending": defending,
                "damage": damage,
            },
        )
        messages.append(f"The {monster.name} {verb} and deals {damage} damage.")

    def _regenerate(self, session: BattleSession) -> None:
        """Applies the equipment regeneration, before the defeat check."""
        challenger = session.challenger
        challenger.hp = min(challenger.hp_max, challenger.hp + challenger.hp_regen)
        challenger.mp = min(challenger.mp_max, challenger.mp + challenger.mp_regen)

    # =========================================================================
    # Terminal handlers
    # =========================================================================

    def _on_victory(
        self,
        session: BattleSession,
        character: Character,
        action: BattleAction,
        messages: list[str],
    ) -> VictoryTurn:
        """Grants rewards, levels the character up and closes the battle."""
        monster = session.monster
        messages.append(f"The {monster.name} is defeated!")

        rewards = calculate_rewards(
            self.dice,
            monster.level,
            character.level,
            monster.sp,
            self.config,
        )
        character.xp += rewards.xp
        character.gold += rewards.gold
        character.sp += rewards.sp
        messages.append(
            f"{character.name} gains {rewards.xp} xp, {rewards.gold} gold and {rewards.sp} sp."
        )

        # A simultaneous knock-out resolves in the player's favor.
        session.challenger.hp = max(1, session.challenger.hp)
        character.hp = session.challenger.hp
        character.mp = session.challenger.mp

        level_up = apply_level_up(
            character,
            self._require_class(character.class_id),
            self.dice,
            self.config.next_level_penalty,
        )
        if level_up:
            rewards.leveled_up = True
            rewards.new_level = level_up.new_level
            session.challenger.hp = session.challenger.hp_max = character.hp_max
            session.challenger.mp = session.challenger.mp_max = character.mp_max
            messages.append(f"{character.name} reaches level {level_up.new_level}!")

        character.victories += 1
        self._close(session, character, BattleResult.VICTORY, messages)
        return VictoryTurn(
            **self._turn_fields(session, action, messages, session.turn + 1),
            rewards=rewards,
        )

    def _on_defeat(
        self,
        session: BattleSession,
        character: Character,
        action: BattleAction,
        messages: list[str],
    ) -> DefeatTurn:
        """Marks the character dead and closes the battle."""
        session.challenger.hp = 0
        character.hp = 0
        character.mp = session.challenger.mp
        character.is_dead = True
        character.defeats += 1
        messages.append(f"{character.name} has been slain by the {session.monster.name}.")
        self._close(session, character, BattleResult.DEFEAT, messages)
        return DefeatTurn(**self._turn_fields(session, action, messages, session.turn + 1))

    def _on_fled(
        self,
        session: BattleSession,
        character: Character,
        action: BattleAction,
        messages: list[str],
    ) -> FledTurn:
        character.hp = session.challenger.hp
        character.mp = session.challenger.mp
        character.flees += 1
        self._close(session, character, BattleResult.FLED, messages)
        return FledTurn(**self._turn_fields(session, action, messages, session.turn))

    def _close(
        self,
        session: BattleSession,
        character: Character,
        result: BattleResult,
        messages: list[str],
    ) -> None:
        """Writes the terminal state of a battle and frees the character."""
        session.result = result
        session.finished_at = utc_now()
        session.log.extend(messages)
        character.is_battling = False
        self.store.save_character(character)
        self.store.save_battle(session)
        log_info(
            f"Battle {session.battle_id} ended: {result.name}",
            {
                "player_id": session.player_id,
                "battle_id": session.battle_id,
                "monster_id": session.monster.id,
                "round": session.turn,
            },
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _parse_action(action: BattleAction | str) -> BattleAction:
        if isinstance(action, BattleAction):
            return action
        if isinstance(action, str):
            try:
                return BattleAction(action.strip().lower())
            except ValueError:
                pass
        raise ValidationError(f"Unknown action: {action!r}")

    @staticmethod
    def _turn_fields(
        session: BattleSession,
        action: BattleAction,
        messages: list[str],
        resolved_round: int,
    ) -> dict:
        return {
            "battle_id": session.battle_id,
            "round": resolved_round,
            "action": action,
            "messages": list(messages),
            "player_hp": session.challenger.hp,
            "player_hp_max": session.challenger.hp_max,
            "player_mp": session.challenger.mp,
            "player_mp_max": session.challenger.mp_max,
            "monster_hp": session.monster.hp,
            "monster_hp_max": session.monster.hp_max,
            "monster_mp": session.monster.mp,
            "monster_mp_max": session.monster.mp_max,
        }

    def _require_character(self, player_id: int) -> Character:
        character = self.store.get_character(player_id)
        if character is None:
            raise StateError("No character found.")
        return character

    def _require_class(self, class_id: int) -> CharacterClass:
        character_class = self.content.get_character_class(class_id)
        if character_class is None:
            message = f"Character class {class_id} is missing from the catalog."
            log_critical(message, {"class_id": class_id}, DataIntegrityError(message), True)
        return character_class

    def _element(self, element_id: int) -> Element | None:
        """Returns the element record, None for the neutral element."""
        if element_id == NEUTRAL_ELEMENT:
            return None
        element = self.content.get_element(element_id)
        if element is None:
            message = f"Element {element_id} is missing from the catalog."
            log_critical(message, {"element_id": element_id}, DataIntegrityError(message), True)
        return element
