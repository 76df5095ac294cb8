"""
Error taxonomy for the battle engine.

Every error raised by the engine derives from BattleError. Validation and
state errors are raised before any mutation takes place; data integrity errors
signal an inconsistent catalog and are not recoverable game events.
"""


class BattleError(Exception):
    """Base class for every error raised by the battle engine."""


class ValidationError(BattleError):
    """Raised for malformed requests: unknown actions, missing identifiers."""


class StateError(BattleError):
    """Raised when a request is illegal in the current game state."""


class DataIntegrityError(BattleError):
    """Raised when a referenced template is missing or malformed."""
