"""
Character creation module for the battle engine.

Rolls the six characteristics of a new character and builds its starting
record from the chosen class and element.
"""

from catchery import log_info

from ..core.config import BattleConfig
from ..core.constants import NEUTRAL_ELEMENT
from ..core.content import ContentRepository
from ..core.dice import Dice
from ..core.errors import ValidationError
from .main import CHARACTERISTICS, Character

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 30


def roll_characteristics(dice: Dice) -> dict[str, int]:
    """
    Rolls every characteristic with 4d6, dropping the lowest die.

    Args:
        dice (Dice): The dice to roll.

    Returns:
        dict[str, int]: The rolled value of each characteristic, in order.

    """
    return {name: dice.roll_stat().value for name in CHARACTERISTICS}


def starting_hp(constitution: int, class_base_hp: int) -> int:
    return max(10, 10 + constitution // 2 + class_base_hp)


def starting_mp(intelligence: int, class_base_mp: int) -> int:
    return max(5, 5 + intelligence // 3 + class_base_mp)


def create_character(
    player_id: int,
    name: str,
    characteristics: dict[str, int],
    class_id: int,
    content: ContentRepository,
    config: BattleConfig,
    element_id: int = NEUTRAL_ELEMENT,
) -> Character:
    """
    Creates a level 1 character.

    Args:
        player_id (int): The id of the owning player.
        name (str): The character name, 2 to 30 characters.
        characteristics (dict[str, int]): A value for every characteristic.
        class_id (int): A selectable character class.
        content (ContentRepository): The class and element catalogs.
        config (BattleConfig): The battle configuration.
        element_id (int): The character element. Defaults to neutral.

    Returns:
        Character: The new character at full hp and mp.

    Raises:
        ValidationError: If any of the choices is invalid.

    """
    name = name.strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
        )

    missing = [stat for stat in CHARACTERISTICS if stat not in characteristics]
    if missing:
        raise ValidationError(f"Missing characteristics: {', '.join(missing)}")
    for stat in CHARACTERISTICS:
        value = characteristics[stat]
        if not config.min_characteristic <= value <= config.max_characteristic:
            raise ValidationError(
                f"{stat.capitalize()} must be between "
                f"{config.min_characteristic} and {config.max_characteristic}."
            )

    character_class = content.get_character_class(class_id)
    if character_class is None or not character_class.selectable:
        raise ValidationError(f"Class {class_id} cannot be chosen.")
    if element_id != NEUTRAL_ELEMENT and content.get_element(element_id) is None:
        raise ValidationError(f"Element {element_id} does not exist.")

    hp = starting_hp(characteristics["constitution"], character_class.base_hp)
    mp = starting_mp(characteristics["intelligence"], character_class.base_mp)
    character = Character(
        player_id=player_id,
        name=name,
        **{stat: characteristics[stat] for stat in CHARACTERISTICS},
        hp=hp,
        hp_max=hp,
        mp=mp,
        mp_max=mp,
        ac=character_class.base_ac,
        class_id=class_id,
        element_id=element_id,
        battle_limit=config.battle_limit,
    )
    log_info(
        f"Created {character.name} the {character_class.name}",
        {"player_id": player_id, "hp": hp, "mp": mp},
    )
    return character
