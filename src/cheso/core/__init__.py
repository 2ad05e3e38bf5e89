"""Core domain layer: board state, move generation and make/unmake.

Quick start::

    from cheso.core import Board, generate_moves

    board = Board.initial()
    for move in generate_moves(board):
        record = board.make_move(move)
        ...
        board.unmake_move(move, record)
"""

from cheso.core.board import Board, UndoRecord
from cheso.core.enums import CastlingRights, Color, PieceType
from cheso.core.errors import (
    ChessError,
    InvalidBoardError,
    InvalidSquareError,
    MoveNotApplicableError,
    UndoMismatchError,
)
from cheso.core.move import Movement
from cheso.core.move_generator import MoveGenerator, generate_moves
from cheso.core.piece import Piece
from cheso.core.square import ALL_SQUARES, Square

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceType",
    # Errors
    "ChessError",
    "InvalidBoardError",
    "InvalidSquareError",
    "MoveNotApplicableError",
    "UndoMismatchError",
    # Domain objects
    "ALL_SQUARES",
    "Board",
    "Movement",
    "MoveGenerator",
    "Piece",
    "Square",
    "UndoRecord",
    "generate_moves",
]
