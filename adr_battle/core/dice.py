"""
Dice module for the battle engine.

Provides the probability primitives used by every combat formula: single d20
rolls, multi-die rolls, the "roll four, keep the best three" characteristic
roll and uniform ranges. All randomness flows through an injectable source so
that tests can feed exact die sequences.
"""

import random
from collections.abc import Sequence
from typing import Protocol

from catchery import log_debug
from pydantic import BaseModel, Field
from typing_extensions import TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything able to produce a uniform integer in [a, b]."""

    def randint(self, a: int, b: int) -> int: ...


class RollBreakdown(BaseModel):
    """Class to hold roll breakdown information."""

    value: int = Field(
        description="Total roll result",
    )
    description: str = Field(
        description="Description of the roll",
    )
    rolls: list[int] = Field(
        description="List of individual dice rolls",
        default_factory=list,
    )


class Dice:
    """
    Dice roller bound to a random source.

    Args:
        source (RandomSource | None):
            The random source to draw from. Defaults to a fresh
            ``random.Random`` instance.

    """

    def __init__(self, source: RandomSource | None = None) -> None:
        self.source: RandomSource = source if source is not None else random.Random()

    def rand_range(self, minimum: int, maximum: int) -> int:
        """
        Returns a uniform integer in [minimum, maximum].

        Args:
            minimum (int): The lower bound, inclusive.
            maximum (int): The upper bound, inclusive.

        Returns:
            int: The rolled value.

        Raises:
            ValueError: If the range is empty.

        """
        if maximum < minimum:
            raise ValueError(f"Empty range [{minimum}, {maximum}]")
        return self.source.randint(minimum, maximum)

    def roll_dice(self, count: int, sides: int) -> list[int]:
        """
        Rolls ``count`` dice with ``sides`` faces each.

        Args:
            count (int): Number of dice to roll.
            sides (int): Number of faces on each die.

        Returns:
            list[int]: The individual results, in roll order.

        """
        if count < 0:
            raise ValueError(f"Invalid dice count: {count}")
        if sides <= 0:
            raise ValueError(f"Invalid dice sides: {sides}")
        return [self.rand_range(1, sides) for _ in range(count)]

    def d20(self) -> int:
        """Rolls a single twenty-sided die."""
        return self.rand_range(1, 20)

    def roll_stat(self) -> RollBreakdown:
        """
        Rolls 4d6 and keeps the three highest dice.

        Returns:
            RollBreakdown: The kept total, with all four dice in ``rolls``.

        """
        rolls = self.roll_dice(4, 6)
        kept = sorted(rolls)[1:]
        value = sum(kept)
        log_debug("Rolled characteristic", {"rolls": rolls, "value": value})
        return RollBreakdown(
            value=value,
            description=f"4d6({'+'.join(map(str, rolls))}) drop lowest",
            rolls=rolls,
        )

    def choice(self, seq: Sequence[T]) -> T:
        """Returns a uniformly chosen element of a non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.rand_range(0, len(seq) - 1)]
