"""
Content repository module for the battle engine.

Loads the read-only game catalogs (monsters, elements, character classes)
from JSON and serves them by id.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_debug, log_warning

from ..character.character_class import CharacterClass
from ..combat.elements import Element
from ..combat.monster import MonsterTemplate
from .config import DATA_DIR
from .errors import DataIntegrityError


class ContentRepository:
    """
    Id-keyed registry of the immutable game catalogs.
    """

    monsters: dict[int, MonsterTemplate]
    elements: dict[int, Element]
    classes: dict[int, CharacterClass]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing the data files. Defaults to the
                bundled data directory.

        Raises:
            DataIntegrityError: If any catalog is missing or malformed.

        """
        self.data_dir = data_dir or DATA_DIR
        self.reload(self.data_dir)

    def reload(self, root: Path) -> None:
        """
        (Re)load all catalogs from disk.

        Args:
            root (Path):
                The directory containing data files to load.
        """
        self.monsters = _load_json_file(
            root / "monsters.json",
            self._load_monsters,
            "monsters",
        )
        self.elements = _load_json_file(
            root / "elements.json",
            self._load_elements,
            "elements",
        )
        self.classes = _load_json_file(
            root / "classes.json",
            self._load_character_classes,
            "character classes",
        )

    def _get_from_collection(self, collection_name: str, item_id: int) -> Any | None:
        """
        Generic helper to get an entry from any collection.

        Args:
            collection_name (str):
                Name of the collection attribute (e.g., 'monsters', 'elements')
            item_id (int):
                Id of the entry to retrieve

        Returns:
            Any | None:
                The entry if found, None otherwise

        """
        collection: dict[int, Any] = getattr(self, collection_name, {})
        entry = collection.get(item_id)
        if entry is None:
            log_warning(
                f"Entry {item_id} not found in collection '{collection_name}'.",
                {"collection_name": collection_name, "item_id": item_id},
            )
        return entry

    def get_monster(self, monster_id: int) -> MonsterTemplate | None:
        """Get a monster template by id, or None if not found."""
        return self._get_from_collection("monsters", monster_id)

    def get_element(self, element_id: int) -> Element | None:
        """Get an element by id, or None if not found."""
        return self._get_from_collection("elements", element_id)

    def get_character_class(self, class_id: int) -> CharacterClass | None:
        """Get a character class by id, or None if not found."""
        return self._get_from_collection("classes", class_id)

    def monsters_up_to_level(self, level: int) -> list[MonsterTemplate]:
        """
        Returns the monsters a character of the given level may fight.

        Args:
            level (int): The level of the character.

        Returns:
            list[MonsterTemplate]: The templates with ``level <= level``, by id.

        """
        return [m for _, m in sorted(self.monsters.items()) if m.level <= level]

    def selectable_classes(self) -> list[CharacterClass]:
        """Returns the classes offered at character creation, by id."""
        return [c for _, c in sorted(self.classes.items()) if c.selectable]

    @staticmethod
    def _load_monsters(data: list[dict]) -> dict[int, MonsterTemplate]:
        """
        Load monster templates from JSON data.

        Raises:
            ValueError: If duplicate monster ids are found.

        """
        monsters: dict[int, MonsterTemplate] = {}
        for monster_data in data:
            monster = MonsterTemplate(**monster_data)
            if monster.id in monsters:
                raise ValueError(f"Duplicate monster id: {monster.id}")
            monsters[monster.id] = monster
        return monsters

    @staticmethod
    def _load_elements(data: list[dict]) -> dict[int, Element]:
        """
        Load elements from JSON data.

        Raises:
            ValueError: If duplicate element ids are found.

        """
        elements: dict[int, Element] = {}
        for element_data in data:
            element = Element(**element_data)
            if element.id in elements:
                raise ValueError(f"Duplicate element id: {element.id}")
            elements[element.id] = element
        return elements

    @staticmethod
    def _load_character_classes(data: list[dict]) -> dict[int, CharacterClass]:
        """
        Load character classes from JSON data.

        Raises:
            ValueError: If duplicate class ids are found.

        """
        classes: dict[int, CharacterClass] = {}
        for class_data in data:
            character_class = CharacterClass(**class_data)
            if character_class.id in classes:
                raise ValueError(f"Duplicate class id: {character_class.id}")
            classes[character_class.id] = character_class
        return classes


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[int, Any]],
    description: str,
) -> dict[int, Any]:
    """Helper to load and validate JSON files"""
    try:
        log_debug(
            f"Loading {description} using {loader_func.__name__}...",
            {"filepath": str(filepath)},
        )
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise DataIntegrityError(f"File {filepath} raised an error: {e}") from e
