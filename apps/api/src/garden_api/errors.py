"""Domain errors raised by repositories and rendered by the API.

Each error carries the HTTP status it maps to, a stable machine-readable
code and optional structured detail (e.g. ``need``/``have``) so callers can
react without parsing the message.
"""

from typing import Any


class GameError(Exception):
    """Base class for rejected player commands. Nothing is committed."""

    status_code: int = 400
    code: str = "GAME_ERROR"

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "error_type": self.code, **self.extra}


class InvalidRequest(GameError):
    """Bad or missing parameters."""

    code = "INVALID_REQUEST"


class NotFound(GameError):
    status_code = 404
    code = "NOT_FOUND"


class NotOwner(GameError):
    """Acting on an entity owned by another player."""

    status_code = 403
    code = "NOT_OWNER"


class PreconditionFailed(GameError):
    """Entity is in the wrong state for the command."""

    code = "PRECONDITION_FAILED"


class InsufficientCoins(PreconditionFailed):
    code = "NOT_ENOUGH_COINS"


class NotEnoughMaterials(PreconditionFailed):
    code = "NOT_ENOUGH_MATERIALS"


class CapacityExceeded(PreconditionFailed):
    code = "TRAP_CAPACITY"


class PlotLocked(GameError):
    status_code = 409
    code = "PLOT_LOCKED"


class ConcurrencyConflict(GameError):
    """Rows selected for the command changed before commit; safe to retry."""

    status_code = 409
    code = "INV_CHANGED_RETRY"

    def __init__(self, message: str = "Inventory changed, please retry", **extra: Any) -> None:
        super().__init__(message, retryable=True, **extra)
