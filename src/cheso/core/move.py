"""Movement value object."""

from __future__ import annotations

from dataclasses import dataclass

from cheso.core.enums import PieceType
from cheso.core.square import Square


@dataclass(frozen=True, slots=True)
class Movement:
    """Immutable value object describing a single pseudo-legal move.

    Castling carries no flag of its own: it is the king move whose
    :attr:`file_distance` exceeds one.  En passant is the pawn capture whose
    destination is the board's en-passant target.
    """

    from_sq: Square
    to_sq: Square
    captured: PieceType | None = None
    promotion: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    @property
    def file_distance(self) -> int:
        return abs(self.to_sq.file - self.from_sq.file)

    def sort_key(self) -> tuple[Square, Square, int]:
        """Total order: origin, destination, then promotion kind."""
        promotion = 0 if self.promotion is None else int(self.promotion)
        return (self.from_sq, self.to_sq, promotion)
