"""Exceptions raised by the core domain layer."""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for all errors raised by :mod:`cheso.core`."""


class InvalidSquareError(ChessError):
    """Coordinates outside the 8x8 board, or an unparsable square name."""


class InvalidBoardError(ChessError):
    """A board whose state violates its invariants."""


class MoveNotApplicableError(ChessError):
    """A move that cannot be applied to the board it was handed."""


class UndoMismatchError(ChessError):
    """An undo record that does not belong to the move or board being undone."""
