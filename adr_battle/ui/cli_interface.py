"""
User interface module for the battle engine.

Provides the console prompts of the terminal driver: choosing a battle action,
choosing a character class and typing a character name.
"""

from typing import Any

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from ..character.character_class import CharacterClass
from ..combat.battle import BattleSnapshot, TurnResultBase
from ..core.constants import BattleAction
from ..core.utils import ccapture, cprint, format_pool

# one session keeps history
session: PromptSession = PromptSession(erase_when_done=True)


class PlayerInterface:
    """
    Command-line interface for the player of a terminal battle.

    Provides Rich table-based menus and uses prompt_toolkit for input with
    numeric shortcuts.
    """

    def __init__(self) -> None:
        """Initialize the PlayerInterface with no configuration needed."""

    def choose_action(
        self,
        actions: list[BattleAction],
        exit_entry: str | None = "Quit",
    ) -> BattleAction | str | None:
        """Choose a battle action.

        Args:
            actions (list[BattleAction]): The actions to choose from.
            exit_entry (str | None): Text for the exit option. Defaults to "Quit".

        Returns:
            BattleAction | str | None: The selected action, or "q" for exit.

        """
        if not actions:
            return None
        table = Table(title="Actions", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Action", style="bold")
        for i, action in enumerate(actions, 1):
            table.add_row(str(i), f"{action.emoji} {action.colored_name}")
        if exit_entry:
            table.add_row()
            table.add_row("q", exit_entry)
        prompt = "\n" + ccapture(table) + "\nAction > "
        while True:
            answer = session.prompt(ANSI(prompt))
            if not answer:
                continue
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(actions):
                return actions[index]
            if exit_entry and answer.lower() == "q":
                return "q"

    def choose_class(self, classes: list[CharacterClass]) -> CharacterClass | None:
        """Choose a character class.

        Args:
            classes (list[CharacterClass]): The selectable classes.

        Returns:
            CharacterClass | None: The selected class.

        """
        if not classes:
            return None
        table = Table(title="Classes", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("HP", justify="right")
        table.add_column("MP", justify="right")
        table.add_column("AC", justify="right")
        table.add_column("Description")
        for i, character_class in enumerate(classes, 1):
            table.add_row(
                str(i),
                character_class.name,
                f"+{character_class.base_hp}",
                f"+{character_class.base_mp}",
                str(character_class.base_ac),
                character_class.description,
            )
        prompt = "\n" + ccapture(table) + "\nClass > "
        while True:
            answer = session.prompt(ANSI(prompt))
            if answer.isdigit() and 0 < int(answer) <= len(classes):
                return classes[int(answer) - 1]

    def ask_name(self) -> str:
        """Ask for a character name."""
        while True:
            answer = session.prompt("Name > ").strip()
            if answer:
                return answer

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question, defaulting to yes."""
        answer = session.prompt(f"{question} [Y/n] > ").strip().lower()
        return answer in ("", "y", "yes")

    @staticmethod
    def get_digit_choice(answer: str) -> int:
        """
        Convert a single digit string input to its integer value.

        Args:
            answer (str): User input string to parse.

        Returns:
            int: The integer value of the digit (0-9), or -1 if invalid input.

        """
        if isinstance(answer, str) and len(answer) == 1 and answer.isdigit():
            return int(answer)
        return -1


def print_battle_status(name: str, monster_name: str, status: Any) -> None:
    """
    Prints the hp and mp bars of both sides.

    Args:
        name (str): The name of the player character.
        monster_name (str): The name of the monster.
        status (BattleSnapshot | TurnResultBase): The state to print.

    """
    if isinstance(status, BattleSnapshot):
        values = (
            status.challenger.hp,
            status.challenger.hp_max,
            status.challenger.mp,
            status.challenger.mp_max,
            status.monster.hp,
            status.monster.hp_max,
        )
    elif isinstance(status, TurnResultBase):
        values = (
            status.player_hp,
            status.player_hp_max,
            status.player_mp,
            status.player_mp_max,
            status.monster_hp,
            status.monster_hp_max,
        )
    else:
        raise TypeError(f"Cannot print the status of {type(status).__name__}")
    hp, hp_max, mp, mp_max, monster_hp, monster_hp_max = values
    cprint(
        f"  [bold blue]{name:<20}[/] "
        f"{format_pool('HP', hp, hp_max, 'green')} "
        f"{format_pool('MP', mp, mp_max, 'blue')}"
    )
    cprint(
        f"  [bold red]{monster_name:<20}[/] "
        f"{format_pool('HP', monster_hp, monster_hp_max, 'red')}"
    )
