"""Error taxonomy for rejected game operations.

Every rejection leaves the session untouched and carries a stable ``kind``
that clients can switch on, plus the HTTP status the API maps it to.
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for all recoverable game errors."""

    kind = "GameError"
    status_code = 400
    default_message = "Request rejected"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(GameError):
    kind = "InvalidInput"
    default_message = "Malformed request"


class NotFound(GameError):
    kind = "NotFound"
    status_code = 404
    default_message = "Game not found"


class UnknownPlayer(GameError):
    kind = "UnknownPlayer"
    status_code = 403
    default_message = "Player not in this game"


class NotInProgress(GameError):
    kind = "NotInProgress"
    status_code = 409
    default_message = "Game is not in progress"


class AlreadyStarted(GameError):
    kind = "AlreadyStarted"
    status_code = 409
    default_message = "Game has already started"


class Full(GameError):
    kind = "Full"
    status_code = 409
    default_message = "Game is full"


class InvalidSelection(GameError):
    kind = "InvalidSelection"
    default_message = "Cell must be adjacent to the last selected cell"


class PowerNotReady(GameError):
    kind = "PowerNotReady"
    status_code = 409
    default_message = "Power already used"


class PowerMismatch(GameError):
    kind = "PowerMismatch"
    status_code = 409
    default_message = "Player does not hold this power"


class WordTooShort(GameError):
    kind = "WordTooShort"
    default_message = "Words need at least 3 letters"


class WordNotRecognized(GameError):
    kind = "WordNotRecognized"
    default_message = "Not a valid word"


class WordAlreadyFound(GameError):
    kind = "WordAlreadyFound"
    status_code = 409
    default_message = "Word already found"
