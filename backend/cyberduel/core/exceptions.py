# =============================================================================
# Cyber Duel - Game Errors
# =============================================================================
"""
Request-scoped failures raised by the session controller.
None of them is fatal; the API turns each one into a 400 response.
"""


class GameError(Exception):
    """Base class for rejected moves"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTurnError(GameError):
    """Wrong side to move, or the game is already over"""


class UnknownMoveError(GameError):
    """Move id is not in the catalog"""


class InsufficientResourcesError(GameError):
    """Move costs more than the side currently holds"""


class NoLegalMoveError(GameError):
    """The search found no affordable defense"""
