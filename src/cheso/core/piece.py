"""Piece value object returned by board lookups."""

from __future__ import annotations

from dataclasses import dataclass

from cheso.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

_UNICODE: dict[tuple[PieceType, Color], str] = {
    (PieceType.PAWN, Color.WHITE): "♙",
    (PieceType.KNIGHT, Color.WHITE): "♘",
    (PieceType.BISHOP, Color.WHITE): "♗",
    (PieceType.ROOK, Color.WHITE): "♖",
    (PieceType.QUEEN, Color.WHITE): "♕",
    (PieceType.KING, Color.WHITE): "♔",
    (PieceType.PAWN, Color.BLACK): "♟",
    (PieceType.KNIGHT, Color.BLACK): "♞",
    (PieceType.BISHOP, Color.BLACK): "♝",
    (PieceType.ROOK, Color.BLACK): "♜",
    (PieceType.QUEEN, Color.BLACK): "♛",
    (PieceType.KING, Color.BLACK): "♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """A piece kind together with the color that owns it.

    The board itself stores bare :class:`PieceType` values in one mapping per
    color; a ``Piece`` only exists as the answer to "what stands here?".
    """

    piece_type: PieceType
    color: Color

    def __str__(self) -> str:
        """Diagram letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.piece_type, self.color)]
