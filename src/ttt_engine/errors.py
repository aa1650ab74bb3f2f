"""
Typed errors raised by the engine.

Every error here signals a caller bug (bad board, bad configuration,
search on a finished game). Nothing inside the engine catches them.
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class InvalidBoardError(EngineError, ValueError):
    """Board has the wrong length or holds values that are not cells or marks."""


class InvalidMoveError(EngineError, ValueError):
    """Move index is outside the board."""


class OccupiedCellError(InvalidMoveError):
    """Mark placed on a cell that is already taken."""

    def __init__(self, index: int):
        super().__init__(f"Cell {index} is already occupied")
        self.index = index


class InvalidLineSpecError(EngineError, ValueError):
    """Grid size / win length pair cannot produce winning lines."""


class UnsupportedGridSizeError(EngineError, ValueError):
    """Search requested for a grid size the strategy does not handle."""


class TerminalBoardError(EngineError):
    """Search requested on a board that is already won or full."""


class GameOverError(EngineError):
    """Move applied to a game that is not in progress."""
