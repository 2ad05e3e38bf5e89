"""Zobrist keys for positions held as per-color square mappings.

A position key is the XOR of one key per part of the position, so
:class:`~cheso.core.board.Board` keeps its key current by toggling only the
parts a move changes.  :func:`position_key` computes the same value from
scratch.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Final

from cheso.core.enums import CastlingRights, Color, PieceType
from cheso.core.square import ALL_SQUARES, Square

_SEED: Final = 0xC4E5_0B0A_2D17_9F63
_GAMMA: Final = 0x9E3779B97F4A7C15
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF


def _key_stream(seed: int) -> Iterator[int]:
    """Endless splitmix64 sequence; the same seed always yields the same keys."""
    state = seed
    while True:
        state = (state + _GAMMA) & _MASK_64
        z = ((state ^ (state >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
        yield z ^ (z >> 31)


_keys = _key_stream(_SEED)

PIECE_KEYS: Final[dict[tuple[Color, PieceType, Square], int]] = {
    (color, piece_type, sq): next(_keys)
    for color in Color
    for piece_type in PieceType
    for sq in ALL_SQUARES
}
BLACK_TO_MOVE_KEY: Final = next(_keys)
# One key per single right; a set of rights hashes to the XOR of its members.
CASTLING_KEYS: Final[dict[CastlingRights, int]] = {
    right: next(_keys)
    for right in (
        CastlingRights.WHITE_KINGSIDE,
        CastlingRights.WHITE_QUEENSIDE,
        CastlingRights.BLACK_KINGSIDE,
        CastlingRights.BLACK_QUEENSIDE,
    )
}
# The target rank follows from the side to move, so only the file is keyed.
EN_PASSANT_FILE_KEYS: Final[dict[int, int]] = {file: next(_keys) for file in range(1, 9)}

del _keys


def piece_key(piece_type: PieceType, color: Color, sq: Square) -> int:
    return PIECE_KEYS[(color, piece_type, sq)]


def castling_key(castling: CastlingRights) -> int:
    """Key of a whole set of castling rights."""
    key = 0
    for right, right_key in CASTLING_KEYS.items():
        if castling & right:
            key ^= right_key
    return key


def en_passant_key(ep_square: Square | None) -> int:
    return 0 if ep_square is None else EN_PASSANT_FILE_KEYS[ep_square.file]


def side_key(side_to_move: Color) -> int:
    return BLACK_TO_MOVE_KEY if side_to_move == Color.BLACK else 0


def position_key(
    white: Mapping[Square, PieceType],
    black: Mapping[Square, PieceType],
    side_to_move: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> int:
    """Full key of a position, computed from every part."""
    key = side_key(side_to_move) ^ castling_key(castling) ^ en_passant_key(en_passant)
    for color, placement in ((Color.WHITE, white), (Color.BLACK, black)):
        for sq, piece_type in placement.items():
            key ^= PIECE_KEYS[(color, piece_type, sq)]
    return key
