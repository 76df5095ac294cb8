"""
Main entry point for the ADR battle engine.

Builds an in-memory world from the bundled data, creates a character and runs
battles in the terminal until the daily allowance runs out, the character
dies, or the player quits.
"""

import logging

from .character.creation import create_character, roll_characteristics
from .character.main import CHARACTERISTICS
from .combat.battle_engine import BattleEngine
from .core.config import load_config
from .core.constants import BattleAction, BattleResult
from .core.content import ContentRepository
from .core.dice import Dice
from .core.errors import DataIntegrityError, StateError
from .core.logging import setup_logging
from .core.utils import cprint, crule
from .storage.memory import InMemoryGameStore
from .town.temple import Temple
from .ui.cli_interface import PlayerInterface, print_battle_status

PLAYER_ID = 1


def main() -> None:
    setup_logging(logging.WARNING)

    crule("ADR Battle", style="bold green")

    config = load_config()
    content = ContentRepository()
    store = InMemoryGameStore()
    dice = Dice()
    engine = BattleEngine(store, content, config, dice)
    temple = Temple(store, config)
    ui = PlayerInterface()

    # =========================================================================

    crule("Character Creation", style="bold green")

    characteristics = roll_characteristics(dice)
    for stat in CHARACTERISTICS:
        cprint(f"  {stat.capitalize():<13} {characteristics[stat]:>2}")
    character_class = ui.choose_class(content.selectable_classes())
    if character_class is None:
        raise DataIntegrityError("No selectable class in the catalog.")
    character = create_character(
        PLAYER_ID,
        ui.ask_name(),
        characteristics,
        character_class.id,
        content,
        config,
    )
    store.save_character(character)
    cprint(
        f"{character.colored_name} the {character_class.name} "
        f"(HP {character.hp}, MP {character.mp}, AC {character.ac})"
    )

    # =========================================================================

    actions = list(BattleAction)
    while True:
        character = store.get_character(PLAYER_ID)
        if character is None:
            raise StateError("The character was lost from the store.")
        if character.is_dead:
            try:
                temple.resurrect(PLAYER_ID)
                cprint("[yellow]The temple priests bring you back to life.[/]")
                continue
            except StateError as e:
                cprint(f"[bold red]{e}[/]")
                break
        if character.battle_limit <= 0:
            cprint("[yellow]You have no battles left for today.[/]")
            break
        if not ui.confirm(f"Start a battle? ({character.battle_limit} left)"):
            break

        snapshot = engine.start_battle(PLAYER_ID)
        monster_name = snapshot.monster.name
        crule(f"{character.name} vs {monster_name}", style="bold red")
        for message in snapshot.messages:
            cprint(message)
        print_battle_status(character.name, monster_name, snapshot)

        battle_id = snapshot.battle_id
        while True:
            action = ui.choose_action(actions)
            if action == "q" or action is None:
                return
            turn = engine.process_turn(PLAYER_ID, battle_id, action)
            crule(f"Round {turn.round}", style="dim")
            for message in turn.messages:
                cprint(message)
            print_battle_status(character.name, monster_name, turn)
            if turn.battle_over:
                break

        result = BattleResult(turn.result)
        crule(result.colorize(result.display_name), style=result.color)
        if result == BattleResult.VICTORY and turn.rewards.leveled_up:
            cprint(f"[bold green]You are now level {turn.rewards.new_level}![/]")

    crule("Goodbye", style="bold green")


if __name__ == "__main__":
    main()
