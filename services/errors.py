class GameError(Exception):
    """Base error of the game API. ``status_code`` is the HTTP status sent back."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(GameError):
    status_code = 400


class MalformedInputError(BadRequestError):
    """Board shape, cell values or request fields are unusable."""


class InvalidMoveError(BadRequestError):
    """A move that cannot be applied to the supplied board."""


class InternalServerError(GameError):
    pass


class PersistenceError(GameError):
    pass


class NoValidMovesError(GameError):
    """Raised by an AI asked to play on a full board."""


class AIClientError(GameError):
    """Transport or parsing failure of a remote AI adviser. Never leaves the client."""


# Raised by validate_move; plain ValueErrors so pure code does not depend on HTTP codes
class MoveValidationError(ValueError):
    pass


class InvalidBoardError(MoveValidationError):
    pass


class OutOfBoundsError(MoveValidationError):
    pass


class CellOccupiedError(MoveValidationError):
    pass
