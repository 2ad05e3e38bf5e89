"""Square value object and coordinate helpers.

Ranks and files are both numbered 1-8: rank 1 is White's back rank and
file 1 is the a-file.  A :class:`Square` can only ever hold on-board
coordinates; every step off the board goes through :meth:`Square.translate`,
which answers ``None`` instead of building an invalid square.

Table index layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63
"""

from __future__ import annotations

from dataclasses import dataclass

from cheso.core.enums import Color
from cheso.core.errors import InvalidSquareError

BOARD_SIZE = 8
_FILE_NAMES = "abcdefgh"


def _check_coordinate(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSquareError(f"Square {name} must be an int, got {value!r}")
    if not 1 <= value <= BOARD_SIZE:
        raise InvalidSquareError(f"Square {name} out of range 1-8: {value}")


@dataclass(frozen=True, order=True, slots=True)
class Square:
    """Immutable (rank, file) pair; equality and ordering by rank, then file."""

    rank: int
    file: int

    def __post_init__(self) -> None:
        _check_coordinate("rank", self.rank)
        _check_coordinate("file", self.file)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def parse(cls, name: str) -> Square:
        """Parse square name, e.g. 'e4' → Square(rank=4, file=5)."""
        if len(name) != 2 or name[0] not in _FILE_NAMES or name[1] not in "12345678":
            raise InvalidSquareError(f"Invalid square name: {name!r}")
        return cls(int(name[1]), _FILE_NAMES.index(name[0]) + 1)

    @classmethod
    def from_index(cls, index: int) -> Square:
        """Inverse of :attr:`index`."""
        if not 0 <= index < BOARD_SIZE * BOARD_SIZE:
            raise InvalidSquareError(f"Square index out of range 0-63: {index}")
        return cls(index // BOARD_SIZE + 1, index % BOARD_SIZE + 1)

    @property
    def index(self) -> int:
        """Table index 0-63 (a1=0, h8=63)."""
        return (self.rank - 1) * BOARD_SIZE + (self.file - 1)

    # ── Translation ──────────────────────────────────────────────────────

    def translate(self, rank_offset: int, file_offset: int) -> Square | None:
        """The square shifted by the offsets, or ``None`` when off the board."""
        rank = self.rank + rank_offset
        file = self.file + file_offset
        if 1 <= rank <= BOARD_SIZE and 1 <= file <= BOARD_SIZE:
            return Square(rank, file)
        return None

    def north(self) -> Square | None:
        return self.translate(1, 0)

    def south(self) -> Square | None:
        return self.translate(-1, 0)

    def east(self) -> Square | None:
        return self.translate(0, 1)

    def west(self) -> Square | None:
        return self.translate(0, -1)

    def northeast(self) -> Square | None:
        return self.translate(1, 1)

    def northwest(self) -> Square | None:
        return self.translate(1, -1)

    def southeast(self) -> Square | None:
        return self.translate(-1, 1)

    def southwest(self) -> Square | None:
        return self.translate(-1, -1)

    # ── Pawn geometry (relative to the mover) ────────────────────────────

    def forward(self, color: Color) -> Square | None:
        return self.north() if color == Color.WHITE else self.south()

    def forward_two(self, color: Color) -> Square | None:
        return self.translate(2, 0) if color == Color.WHITE else self.translate(-2, 0)

    def pawn_left_capture(self, color: Color) -> Square | None:
        """Diagonal capture toward the mover's left hand."""
        return self.northwest() if color == Color.WHITE else self.southeast()

    def pawn_right_capture(self, color: Color) -> Square | None:
        """Diagonal capture toward the mover's right hand."""
        return self.northeast() if color == Color.WHITE else self.southwest()

    def is_last_rank(self, color: Color) -> bool:
        """Promotion rank for *color*."""
        return self.rank == (BOARD_SIZE if color == Color.WHITE else 1)

    def is_pawn_start_rank(self, color: Color) -> bool:
        return self.rank == (2 if color == Color.WHITE else BOARD_SIZE - 1)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Human-readable name, e.g. 'e4'."""
        return f"{_FILE_NAMES[self.file - 1]}{self.rank}"

    def __repr__(self) -> str:
        return f"Square({self})"


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(rank, file)
    for rank in range(1, BOARD_SIZE + 1)
    for file in range(1, BOARD_SIZE + 1)
)

# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[56:64]
