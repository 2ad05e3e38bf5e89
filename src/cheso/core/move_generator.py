"""Pseudo-legal move generation.

Knights, kings, bishops, rooks and queens share one traversal: walk each
precomputed ray from the origin square, emit a quiet move per empty square,
and stop at the first occupied square (emitting a capture when the occupant
is an enemy).  Knight and king rays are one step long; slider rays run to the
board edge.  Pawns and castling have their own rules.

Generated moves are *pseudo-legal*: nothing here checks whether the mover's
king is left attacked, and castling does not look at transit-square attacks.
"""

from __future__ import annotations

from cheso.core.board import KING_HOME, Board
from cheso.core.enums import Color, PieceType
from cheso.core.move import Movement
from cheso.core.square import (
    A1,
    A8,
    ALL_SQUARES,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
)

# (rank offset, file offset)
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Per color: (kingside, queenside) as (rook corner, squares between, king target).
_CASTLING_PATHS: dict[Color, tuple[tuple[Square, tuple[Square, ...], Square], ...]] = {
    Color.WHITE: ((H1, (F1, G1), G1), (A1, (B1, C1, D1), C1)),
    Color.BLACK: ((H8, (F8, G8), G8), (A8, (B8, C8, D8), C8)),
}

Ray = tuple[Square, ...]


# -- Precomputed lookup tables ---------------------------------------------


def _build_rays(
    directions: tuple[tuple[int, int], ...],
    max_distance: int,
) -> dict[Square, tuple[Ray, ...]]:
    rays_per_square: dict[Square, tuple[Ray, ...]] = {}
    for sq in ALL_SQUARES:
        square_rays: list[Ray] = []
        for dr, df in directions:
            ray: list[Square] = []
            to_sq = sq.translate(dr, df)
            while to_sq is not None and len(ray) < max_distance:
                ray.append(to_sq)
                to_sq = to_sq.translate(dr, df)
            if ray:
                square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_RAYS: dict[PieceType, dict[Square, tuple[Ray, ...]]] = {
    PieceType.KNIGHT: _build_rays(KNIGHT_OFFSETS, 1),
    PieceType.BISHOP: _build_rays(BISHOP_DIRS, 7),
    PieceType.ROOK: _build_rays(ROOK_DIRS, 7),
    PieceType.QUEEN: _build_rays(QUEEN_DIRS, 7),
    PieceType.KING: _build_rays(KING_OFFSETS, 1),
}


class MoveGenerator:
    """Generates pseudo-legal moves for a given :class:`Board`.

    The board is only read, never mutated.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self) -> list[Movement]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Movement] = []
        board = self._board
        color = board.side_to_move

        for sq, piece_type in board.pieces_of_side_to_move().items():
            if piece_type == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
                continue
            self._gen_rays(sq, color, _RAYS[piece_type][sq], moves)
            if piece_type == PieceType.KING:
                self._gen_castling(sq, color, moves)

        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_rays(
        self,
        sq: Square,
        color: Color,
        rays: tuple[Ray, ...],
        moves: list[Movement],
    ) -> None:
        own = self._board.pieces(color)
        enemy = self._board.pieces(color.opposite)
        for ray in rays:
            for to_sq in ray:
                if to_sq in own:
                    break
                captured = enemy.get(to_sq)
                moves.append(Movement(sq, to_sq, captured))
                if captured is not None:
                    break

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Movement]) -> None:
        board = self._board
        enemy = board.pieces(color.opposite)

        one_step = sq.forward(color)
        if one_step is not None and board.is_empty(one_step):
            _add_pawn_move(sq, one_step, None, color, moves)
            if sq.is_pawn_start_rank(color):
                two_step = sq.forward_two(color)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(Movement(sq, two_step))

        for cap_sq in (sq.pawn_left_capture(color), sq.pawn_right_capture(color)):
            if cap_sq is None:
                continue
            target = enemy.get(cap_sq)
            if target is not None:
                _add_pawn_move(sq, cap_sq, target, color, moves)
            elif (
                cap_sq == board.en_passant
                and board.is_empty(cap_sq)
                and enemy.get(Square(sq.rank, cap_sq.file)) == PieceType.PAWN
            ):
                moves.append(Movement(sq, cap_sq, PieceType.PAWN))

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Movement]) -> None:
        if king_sq != KING_HOME[color]:
            return

        board = self._board
        own = board.pieces(color)
        queenside, kingside = board.castling_rights(color)

        for allowed, (rook_sq, between, king_to) in zip(
            (kingside, queenside), _CASTLING_PATHS[color]
        ):
            if (
                allowed
                and own.get(rook_sq) == PieceType.ROOK
                and all(board.is_empty(s) for s in between)
            ):
                moves.append(Movement(king_sq, king_to))


def _add_pawn_move(
    from_sq: Square,
    to_sq: Square,
    captured: PieceType | None,
    color: Color,
    moves: list[Movement],
) -> None:
    if to_sq.is_last_rank(color):
        for pt in PROMOTION_TYPES:
            moves.append(Movement(from_sq, to_sq, captured, pt))
    else:
        moves.append(Movement(from_sq, to_sq, captured))


def generate_moves(board: Board) -> list[Movement]:
    """All pseudo-legal moves for the side to move on *board*."""
    return MoveGenerator(board).generate_pseudo_legal_moves()
