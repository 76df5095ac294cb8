"""
Console helpers for the terminal driver.

Everything the driver shows goes through one rich console, so battle logs,
menus captured for prompt_toolkit and the hp/mp bars share the same width
and markup rules.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.rule import Rule

_console = Console(markup=True, width=120, force_jupyter=False)

FILLED_CELL = "▮"
EMPTY_CELL = "▯"


def cprint(*args: Any, **kwargs: Any) -> None:
    """Prints rich markup on the shared console."""
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """Prints a horizontal rule, used to separate battles and rounds."""
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Renders a renderable to an ANSI string instead of printing it.

    The driver uses this to turn rich tables into prompt_toolkit prompts.

    Args:
        content (Any): A string with markup or any rich renderable.

    Returns:
        str: The rendered text, escape codes included.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Draws a resource bar such as the hp of a combatant.

    Values below zero draw an empty bar, values above the maximum a full one.

    Args:
        current (int): The current amount.
        maximum (int): The full amount, a bar of 0 maximum is drawn empty.
        length (int): The number of cells. Defaults to 10.
        color (str): The rich color of the filled cells. Defaults to "white".

    Returns:
        str: The bar as rich markup.

    """
    if maximum <= 0:
        filled = 0
    else:
        filled = int(max(0, min(current, maximum)) * length / maximum)
    bar = f"[{color}]{FILLED_CELL * filled}[/]"
    if filled < length:
        bar += f"[dim white]{EMPTY_CELL * (length - filled)}[/]"
    return bar


def format_pool(label: str, current: int, maximum: int, color: str) -> str:
    """Formats a labelled bar followed by the numbers, e.g. ``HP ▮▮▯ 12/30``."""
    return f"{label} {make_bar(current, maximum, color=color)} {current:>3}/{maximum:<3}"
