"""Board - complete position state with make/unmake.

Piece placement is held in two mappings, one per color, from
:class:`Square` to :class:`PieceType`.  A square is claimed by at most one of
them; :meth:`Board.validate` enforces that on every externally built board
and :meth:`Board.make_move` preserves it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from cheso.core.enums import CastlingRights, Color, PieceType
from cheso.core.errors import (
    InvalidBoardError,
    MoveNotApplicableError,
    UndoMismatchError,
)
from cheso.core.move import Movement
from cheso.core.piece import Piece
from cheso.core.square import A1, A8, E1, E8, H1, H8, Square
from cheso.core.zobrist import (
    castling_key,
    en_passant_key,
    piece_key,
    position_key,
    side_key,
)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_PROMOTABLE: frozenset[PieceType] = frozenset(
    (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)
)

KING_HOME: dict[Color, Square] = {Color.WHITE: E1, Color.BLACK: E8}

# Rook corner -> the right lost when anything moves from or to it.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}


def castling_rook_squares(king_from: Square, king_to: Square) -> tuple[Square, Square]:
    """(rook origin, rook destination) for a castling king move."""
    rank = king_from.rank
    if king_to.file > king_from.file:
        return Square(rank, 8), Square(rank, king_to.file - 1)
    return Square(rank, 1), Square(rank, king_to.file + 1)


@dataclass(frozen=True, slots=True)
class UndoRecord:
    """Snapshot of everything :meth:`Board.make_move` overwrote."""

    movement: Movement
    moved: PieceType
    captured: PieceType | None
    captured_sq: Square | None
    rook_move: tuple[Square, Square] | None
    castling: CastlingRights
    en_passant: Square | None
    reversible_moves: int
    fullmove_number: int
    side_to_move: Color
    key_before: int
    key_after: int


class Board:
    """Mutable chess position: placement, side to move, castling, en passant, clocks.

    Boards are changed only through :meth:`make_move` and :meth:`unmake_move`.
    Give every concurrent worker its own :meth:`copy`.

    The Zobrist key is maintained incrementally: placement changes go through
    :meth:`_put` / :meth:`_take`, and the side, castling and en-passant
    setters toggle their own keys.
    """

    __slots__ = (
        "_pieces",
        "_side_to_move",
        "_castling",
        "_en_passant",
        "reversible_moves",
        "fullmove_number",
        "_key",
    )

    def __init__(
        self,
        white: Mapping[Square, PieceType] | None = None,
        black: Mapping[Square, PieceType] | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
        reversible_moves: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        # Indexed by int(Color).
        self._pieces: tuple[dict[Square, PieceType], dict[Square, PieceType]] = (
            dict(white or {}),
            dict(black or {}),
        )
        self._side_to_move = side_to_move
        self._castling = castling
        self._en_passant = en_passant
        self.reversible_moves = reversible_moves
        self.fullmove_number = fullmove_number
        self._check_state()
        self._key = self._compute_key()

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        white: dict[Square, PieceType] = {}
        black: dict[Square, PieceType] = {}
        for file, pt in enumerate(_BACK_RANK, start=1):
            white[Square(1, file)] = pt
            white[Square(2, file)] = PieceType.PAWN
            black[Square(8, file)] = pt
            black[Square(7, file)] = PieceType.PAWN
        return cls(white, black, castling=CastlingRights.ALL)

    # -- State with hashed keys ---------------------------------------------

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @side_to_move.setter
    def side_to_move(self, color: Color) -> None:
        self._key ^= side_key(self._side_to_move) ^ side_key(color)
        self._side_to_move = color

    @property
    def castling(self) -> CastlingRights:
        return self._castling

    @castling.setter
    def castling(self, rights: CastlingRights) -> None:
        self._key ^= castling_key(self._castling) ^ castling_key(rights)
        self._castling = rights

    @property
    def en_passant(self) -> Square | None:
        """Square a pawn just skipped over, or ``None``."""
        return self._en_passant

    @en_passant.setter
    def en_passant(self, sq: Square | None) -> None:
        self._key ^= en_passant_key(self._en_passant) ^ en_passant_key(sq)
        self._en_passant = sq

    # -- Query helpers ------------------------------------------------------

    @property
    def white(self) -> Mapping[Square, PieceType]:
        return self._pieces[Color.WHITE]

    @property
    def black(self) -> Mapping[Square, PieceType]:
        return self._pieces[Color.BLACK]

    def pieces(self, color: Color) -> Mapping[Square, PieceType]:
        """Placement owned by *color* (the live mapping, not a copy)."""
        return self._pieces[color]

    def pieces_of_side_to_move(self) -> Mapping[Square, PieceType]:
        return self._pieces[self.side_to_move]

    def piece_at(self, sq: Square) -> Piece | None:
        """What stands on *sq*, looking at White first, then Black."""
        piece_type = self._pieces[Color.WHITE].get(sq)
        if piece_type is not None:
            return Piece(piece_type, Color.WHITE)
        piece_type = self._pieces[Color.BLACK].get(sq)
        if piece_type is not None:
            return Piece(piece_type, Color.BLACK)
        return None

    def is_empty(self, sq: Square) -> bool:
        return sq not in self._pieces[Color.WHITE] and sq not in self._pieces[Color.BLACK]

    def castling_rights(self, color: Color) -> tuple[bool, bool]:
        """(queenside, kingside) castling availability for *color*."""
        return (
            bool(self.castling & CastlingRights.queenside(color)),
            bool(self.castling & CastlingRights.kingside(color)),
        )

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        for sq, piece_type in self._pieces[color].items():
            if piece_type == PieceType.KING:
                return sq
        raise ValueError(f"No {color.name} king on board")

    def validate(self) -> None:
        """Raise :class:`InvalidBoardError` if the state breaks an invariant.

        Besides the placement and clock checks done at construction, the
        stored key must match a full recompute; a mismatch means a placement
        mapping was edited behind the board's back.
        """
        self._check_state()
        if self._key != self._compute_key():
            raise InvalidBoardError("Zobrist key is out of sync with the position")

    def _check_state(self) -> None:
        for color in Color:
            for sq, piece_type in self._pieces[color].items():
                if not isinstance(sq, Square):
                    raise InvalidBoardError(f"{color!s} placement key is not a Square: {sq!r}")
                if not isinstance(piece_type, PieceType):
                    raise InvalidBoardError(f"{color!s} piece on {sq} is not a PieceType")

        shared = self._pieces[Color.WHITE].keys() & self._pieces[Color.BLACK].keys()
        if shared:
            names = ", ".join(str(sq) for sq in sorted(shared))
            raise InvalidBoardError(f"Squares claimed by both colors: {names}")

        if self._en_passant is not None:
            self._check_en_passant(self._en_passant)
        if self.reversible_moves < 0:
            raise InvalidBoardError(
                f"Reversible-move clock must be >= 0: {self.reversible_moves}"
            )
        if self.fullmove_number < 1:
            raise InvalidBoardError(f"Fullmove number must be >= 1: {self.fullmove_number}")

    def _check_en_passant(self, target: object) -> None:
        if not isinstance(target, Square):
            raise InvalidBoardError(f"En-passant target is not a Square: {target!r}")
        mover = self._side_to_move
        rank = 6 if mover == Color.WHITE else 3
        if target.rank != rank:
            raise InvalidBoardError(
                f"En-passant target {target} must be on rank {rank} with {mover!s} to move"
            )
        if not self.is_empty(target):
            raise InvalidBoardError(f"En-passant target {target} is occupied")
        # The pawn that just double-pushed stands one step past the target.
        behind = Square(target.rank - 1 if mover == Color.WHITE else target.rank + 1, target.file)
        if self._pieces[mover.opposite].get(behind) != PieceType.PAWN:
            raise InvalidBoardError(
                f"No {mover.opposite!s} pawn on {behind} behind en-passant target {target}"
            )

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Movement) -> UndoRecord:
        """Apply *move* in place and return what :meth:`unmake_move` needs."""
        color = self.side_to_move
        own = self._pieces[color]
        enemy = self._pieces[color.opposite]

        piece = own.get(move.from_sq)
        if piece is None:
            raise MoveNotApplicableError(f"No {color!s} piece on {move.from_sq}")
        if move.to_sq in own:
            raise MoveNotApplicableError(f"{move.to_sq} is occupied by a {color!s} piece")
        if move.promotion is not None and (
            piece != PieceType.PAWN or move.promotion not in _PROMOTABLE
        ):
            raise MoveNotApplicableError(
                f"Cannot promote {piece.name} on {move.from_sq} to {move.promotion.name}"
            )

        # Captured piece; en passant takes the pawn beside the origin square.
        captured: PieceType | None = None
        captured_sq: Square | None = None
        if move.captured is not None:
            captured_sq = move.to_sq
            if (
                piece == PieceType.PAWN
                and move.to_sq == self.en_passant
                and move.to_sq not in enemy
            ):
                captured_sq = Square(move.from_sq.rank, move.to_sq.file)
            captured = enemy.get(captured_sq)
            if captured != move.captured:
                raise MoveNotApplicableError(
                    f"Expected {move.captured.name} to capture on {captured_sq}, "
                    f"found {captured.name if captured is not None else 'nothing'}"
                )
        elif move.to_sq in enemy:
            raise MoveNotApplicableError(
                f"{move.to_sq} holds an enemy piece but the move is not a capture"
            )

        rook_move: tuple[Square, Square] | None = None
        if piece == PieceType.KING and move.file_distance > 1:
            rook_move = castling_rook_squares(move.from_sq, move.to_sq)
            rook_from, rook_to = rook_move
            if own.get(rook_from) != PieceType.ROOK:
                raise MoveNotApplicableError(f"No {color!s} rook on {rook_from} to castle with")
            if not self.is_empty(rook_to):
                raise MoveNotApplicableError(f"Castling rook destination {rook_to} is occupied")

        prior_castling = self._castling
        prior_en_passant = self._en_passant
        prior_reversible = self.reversible_moves
        prior_fullmove = self.fullmove_number
        prior_key = self._key

        # Lift, capture, place.
        self._take(color, move.from_sq)
        if captured_sq is not None:
            self._take(color.opposite, captured_sq)
        self._put(color, move.to_sq, move.promotion if move.promotion is not None else piece)

        if rook_move is not None:
            self._put(color, rook_move[1], self._take(color, rook_move[0]))

        self._update_castling(move, piece, color)

        # En passant target for the opponent
        self.en_passant = None
        if piece == PieceType.PAWN and abs(move.to_sq.rank - move.from_sq.rank) == 2:
            self.en_passant = Square(
                (move.from_sq.rank + move.to_sq.rank) // 2, move.from_sq.file
            )

        if piece == PieceType.PAWN or captured is not None:
            self.reversible_moves = 0
        else:
            self.reversible_moves += 1

        if color == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = color.opposite

        return UndoRecord(
            movement=move,
            moved=piece,
            captured=captured,
            captured_sq=captured_sq,
            rook_move=rook_move,
            castling=prior_castling,
            en_passant=prior_en_passant,
            reversible_moves=prior_reversible,
            fullmove_number=prior_fullmove,
            side_to_move=color,
            key_before=prior_key,
            key_after=self._key,
        )

    def unmake_move(self, move: Movement, record: UndoRecord) -> None:
        """Undo the :meth:`make_move` of *move* that produced *record*."""
        if record.movement != move:
            raise UndoMismatchError(f"Undo record belongs to {record.movement}, not {move}")
        if self._side_to_move != record.side_to_move.opposite or self._key != record.key_after:
            raise UndoMismatchError("Board has changed since the recorded move was made")

        color = record.side_to_move
        own = self._pieces[color]
        enemy = self._pieces[color.opposite]

        del own[move.to_sq]
        own[move.from_sq] = record.moved
        if record.captured is not None and record.captured_sq is not None:
            enemy[record.captured_sq] = record.captured

        # Undo rook slide for castling
        if record.rook_move is not None:
            rook_from, rook_to = record.rook_move
            own[rook_from] = own.pop(rook_to)

        self._side_to_move = color
        self._castling = record.castling
        self._en_passant = record.en_passant
        self.reversible_moves = record.reversible_moves
        self.fullmove_number = record.fullmove_number
        self._key = record.key_before

    # ── Placement with key upkeep ────────────────────────────────────────

    def _put(self, color: Color, sq: Square, piece_type: PieceType) -> None:
        self._pieces[color][sq] = piece_type
        self._key ^= piece_key(piece_type, color, sq)

    def _take(self, color: Color, sq: Square) -> PieceType:
        piece_type = self._pieces[color].pop(sq)
        self._key ^= piece_key(piece_type, color, sq)
        return piece_type

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _update_castling(self, move: Movement, piece: PieceType, color: Color) -> None:
        if piece == PieceType.KING:
            self.castling &= ~CastlingRights.both(color)
        for sq in (move.from_sq, move.to_sq):
            right = _ROOK_CORNERS.get(sq)
            if right is not None:
                self.castling &= ~right

    # ── Utilities ────────────────────────────────────────────────────────

    @property
    def zobrist_hash(self) -> int:
        """Zobrist key of placement, side to move, castling and en passant."""
        return self._key

    def _compute_key(self) -> int:
        return position_key(
            self._pieces[Color.WHITE],
            self._pieces[Color.BLACK],
            self._side_to_move,
            self._castling,
            self._en_passant,
        )

    def copy(self) -> Board:
        cls = type(self)
        b = cls.__new__(cls)
        b._pieces = (self._pieces[0].copy(), self._pieces[1].copy())
        b._side_to_move = self._side_to_move
        b._castling = self._castling
        b._en_passant = self._en_passant
        b.reversible_moves = self.reversible_moves
        b.fullmove_number = self.fullmove_number
        b._key = self._key
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._pieces == other._pieces
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.reversible_moves == other.reversible_moves
            and self.fullmove_number == other.fullmove_number
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8, 0, -1):
            row = []
            for file in range(1, 9):
                p = self.piece_at(Square(rank, file))
                row.append(str(p) if p else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
