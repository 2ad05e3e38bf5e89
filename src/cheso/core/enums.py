"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color.

    White advances toward increasing rank, Black toward decreasing rank.
    """

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @staticmethod
    def kingside(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_KINGSIDE
        return CastlingRights.BLACK_KINGSIDE

    @staticmethod
    def queenside(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_QUEENSIDE
        return CastlingRights.BLACK_QUEENSIDE

    @staticmethod
    def both(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_BOTH
        return CastlingRights.BLACK_BOTH
