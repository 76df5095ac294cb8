"""
Logging setup for the battle engine.

The engine reports through catchery (``log_info`` when a battle starts or
ends, ``log_debug`` for every roll, ``log_critical`` for broken catalog
data). This module points catchery's default handler at the ``adr_battle``
logger and renders that logger with rich.
"""

import logging

from catchery import ErrorHandler, set_default_handler
from rich.console import Console
from rich.logging import RichHandler

ENGINE_LOGGER = "adr_battle"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Installs a rich handler on the root logger and routes catchery to it.

    Args:
        level (int): The lowest level shown. Use logging.DEBUG to see the
            individual dice rolls. Defaults to logging.INFO.

    Returns:
        logging.Logger: The engine logger catchery now writes to.

    """
    handler = RichHandler(
        # stderr keeps log lines out of the battle transcript.
        console=Console(width=120, stderr=True, force_jupyter=False),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)

    engine_logger = logging.getLogger(ENGINE_LOGGER)
    engine_logger.setLevel(level)
    set_default_handler(ErrorHandler(logger=engine_logger))
    return engine_logger
