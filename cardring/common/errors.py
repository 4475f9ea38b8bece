# cardring/common/errors.py

from .logging_utils import get_logger

_log = get_logger("errors")


class InvalidInput(ValueError):
    """Raised when a card, deck, player or pack violates the game's preconditions."""
    pass


def require(condition: bool, msg: str) -> None:
    if not condition:
        _log.warning(f"InvalidInput: {msg}")
        raise InvalidInput(msg)
