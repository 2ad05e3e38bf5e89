"""Tests for pseudo-legal move generation."""

from collections.abc import Callable

from cheso.core.board import Board
from cheso.core.enums import CastlingRights, Color, PieceType
from cheso.core.move import Movement
from cheso.core.move_generator import (
    KNIGHT_OFFSETS,
    PROMOTION_TYPES,
    MoveGenerator,
    generate_moves,
)
from cheso.core.square import (
    A1, A2, B1, C1, C6, D4, D5, D6, D7, D8, E1, E2, E3, E4, E5, E6, E7, E8,
    F1, F5, F6, G1, G8, H1,
    Square,
)

Diagram = Callable[..., Board]


def destinations(moves: list[Movement], from_sq: Square | None = None) -> set[Square]:
    return {m.to_sq for m in moves if from_sq is None or m.from_sq == from_sq}


class TestStartingPosition:
    def test_twenty_moves(self) -> None:
        moves = generate_moves(Board.initial())
        assert len(moves) == 20

    def test_breakdown(self) -> None:
        board = Board.initial()
        moves = generate_moves(board)
        pawn_moves = [m for m in moves if board.white[m.from_sq] == PieceType.PAWN]
        knight_moves = [m for m in moves if board.white[m.from_sq] == PieceType.KNIGHT]
        assert len(pawn_moves) == 16
        assert len(knight_moves) == 4
        assert all(not m.is_capture and not m.is_promotion for m in moves)

    def test_black_reply_count(self) -> None:
        board = Board.initial()
        board.make_move(Movement(E2, E4))
        assert len(generate_moves(board)) == 20

    def test_class_and_function_agree(self) -> None:
        board = Board.initial()
        assert MoveGenerator(board).generate_pseudo_legal_moves() == generate_moves(board)

    def test_generation_does_not_mutate(self) -> None:
        board = Board.initial()
        before = board.copy()
        generate_moves(board)
        assert board == before

    def test_sorted_order_is_deterministic(self) -> None:
        board = Board.initial()
        first = sorted(generate_moves(board), key=Movement.sort_key)
        second = sorted(generate_moves(board.copy()), key=Movement.sort_key)
        assert first == second
        assert first[0].from_sq == B1  # knights on rank 1 come first


class TestEmptyBoard:
    def test_no_pieces_no_moves(self) -> None:
        assert generate_moves(Board()) == []

    def test_rook_on_d4(self) -> None:
        board = Board(white={D4: PieceType.ROOK})
        moves = generate_moves(board)
        dests = destinations(moves)
        assert len(moves) == 14
        assert all(sq.rank == 4 or sq.file == 4 for sq in dests)
        assert D4 not in dests

    def test_knight_in_centre(self) -> None:
        board = Board(white={E4: PieceType.KNIGHT})
        moves = generate_moves(board)
        assert len(moves) == 8
        offsets = {(m.to_sq.rank - E4.rank, m.to_sq.file - E4.file) for m in moves}
        assert offsets == set(KNIGHT_OFFSETS)

    def test_knight_in_corner(self) -> None:
        board = Board(white={A1: PieceType.KNIGHT})
        assert destinations(generate_moves(board)) == {Square(2, 3), Square(3, 2)}

    def test_bishop_on_d4(self) -> None:
        board = Board(white={D4: PieceType.BISHOP})
        assert len(generate_moves(board)) == 13

    def test_queen_on_d4(self) -> None:
        board = Board(white={D4: PieceType.QUEEN})
        assert len(generate_moves(board)) == 27

    def test_king_in_centre_and_corner(self) -> None:
        assert len(generate_moves(Board(white={E4: PieceType.KING}))) == 8
        assert len(generate_moves(Board(white={H1: PieceType.KING}))) == 3


class TestSlidingCollisions:
    def test_stops_before_own_piece(self) -> None:
        board = Board(white={D4: PieceType.ROOK, D7: PieceType.PAWN})
        rook_dests = destinations(generate_moves(board), D4)
        assert Square(6, 4) in rook_dests
        assert D7 not in rook_dests
        assert D8 not in rook_dests

    def test_captures_enemy_then_stops(self) -> None:
        board = Board(white={D4: PieceType.BISHOP}, black={F6: PieceType.KNIGHT})
        moves = generate_moves(board)
        capture = next(m for m in moves if m.to_sq == F6)
        assert capture.captured == PieceType.KNIGHT
        assert Square(7, 7) not in destinations(moves)

    def test_knight_jumps_over_pieces(self) -> None:
        board = Board.initial()
        dests = destinations(generate_moves(board), G1)
        assert dests == {Square(3, 6), Square(3, 8)}

    def test_knight_capture_and_own_block(self) -> None:
        board = Board(
            white={E4: PieceType.KNIGHT, F6: PieceType.PAWN},
            black={Square(6, 4): PieceType.ROOK},
        )
        moves = generate_moves(board)
        knight_moves = {m.to_sq: m for m in moves if m.from_sq == E4}
        assert F6 not in knight_moves
        assert knight_moves[Square(6, 4)].captured == PieceType.ROOK
        assert len(knight_moves) == 7


class TestPawnMoves:
    def test_single_and_double_push(self) -> None:
        board = Board(white={E2: PieceType.PAWN})
        assert destinations(generate_moves(board)) == {E3, E4}

    def test_blocked_adjacent_suppresses_double(self) -> None:
        board = Board(white={E2: PieceType.PAWN}, black={E3: PieceType.KNIGHT})
        assert generate_moves(board) == []

    def test_blocked_two_ahead_keeps_single(self) -> None:
        board = Board(white={E2: PieceType.PAWN}, black={E4: PieceType.KNIGHT})
        assert destinations(generate_moves(board)) == {E3}

    def test_no_double_push_off_start_rank(self) -> None:
        board = Board(white={E3: PieceType.PAWN})
        assert destinations(generate_moves(board)) == {E4}

    def test_black_pawn_moves_down(self) -> None:
        board = Board(black={E7: PieceType.PAWN}, side_to_move=Color.BLACK)
        assert destinations(generate_moves(board)) == {E6, E5}

    def test_diagonal_captures(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(
            """
            ........
            ........
            ........
            ...p.n..
            ....P...
            ........
            ........
            ........
            """
        )
        moves = generate_moves(board)
        captures = {m.to_sq: m.captured for m in moves if m.is_capture}
        assert captures == {D5: PieceType.PAWN, F5: PieceType.KNIGHT}
        assert E5 in destinations(moves)

    def test_no_capture_of_own_piece(self) -> None:
        board = Board(white={E4: PieceType.PAWN, D5: PieceType.PAWN})
        pawn_e4 = destinations(generate_moves(board), E4)
        assert D5 not in pawn_e4

    def test_promotion_push(self) -> None:
        board = Board(white={E7: PieceType.PAWN})
        moves = generate_moves(board)
        assert len(moves) == 4
        assert all(m.to_sq == E8 and m.captured is None for m in moves)
        assert tuple(m.promotion for m in moves) == PROMOTION_TYPES

    def test_promotion_capture(self) -> None:
        board = Board(white={E7: PieceType.PAWN}, black={E8: PieceType.KING, D8: PieceType.ROOK})
        moves = generate_moves(board)
        assert len(moves) == 4
        assert all(m.to_sq == D8 and m.captured == PieceType.ROOK for m in moves)
        assert {m.promotion for m in moves} == set(PROMOTION_TYPES)

    def test_black_promotion(self) -> None:
        board = Board(black={A2: PieceType.PAWN}, side_to_move=Color.BLACK)
        moves = generate_moves(board)
        assert {m.promotion for m in moves} == set(PROMOTION_TYPES)
        assert destinations(moves) == {A1}


class TestEnPassant:
    def test_capture_onto_empty_target(self) -> None:
        board = Board(
            white={E5: PieceType.PAWN},
            black={D5: PieceType.PAWN},
            en_passant=Square(6, 4),
        )
        moves = generate_moves(board)
        ep = [m for m in moves if m.to_sq == Square(6, 4)]
        assert ep == [Movement(E5, Square(6, 4), PieceType.PAWN)]

    def test_target_must_be_diagonal(self) -> None:
        board = Board(
            white={E5: PieceType.PAWN},
            black={C6: PieceType.PAWN, Square(5, 2): PieceType.PAWN},
            en_passant=Square(6, 2),
        )
        moves = generate_moves(board)
        assert all(not m.is_capture for m in moves)

    def test_needs_enemy_pawn_beside(self) -> None:
        board = Board(white={E5: PieceType.PAWN}, black={D5: PieceType.KNIGHT})
        # Setting the target directly skips the constructor's checks.
        board.en_passant = D6
        moves = generate_moves(board)
        assert D6 not in destinations(moves)
        for move in moves:
            record = board.make_move(move)
            board.unmake_move(move, record)

    def test_every_generated_move_applies(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(
            """
            ....k...
            ..p.....
            ........
            ...pP...
            ........
            ........
            ....P...
            ....K...
            """,
            en_passant=D6,
        )
        moves = generate_moves(board)
        assert Movement(E5, D6, PieceType.PAWN) in moves
        for move in moves:
            record = board.make_move(move)
            board.validate()
            board.unmake_move(move, record)

    def test_black_en_passant(self) -> None:
        board = Board(
            white={E4: PieceType.PAWN},
            black={D4: PieceType.PAWN},
            side_to_move=Color.BLACK,
            en_passant=E3,
        )
        moves = generate_moves(board)
        assert Movement(D4, E3, PieceType.PAWN) in moves


class TestCastling:
    CASTLE_DIAGRAM = """
        r...k..r
        pppppppp
        ........
        ........
        ........
        ........
        PPPPPPPP
        R...K..R
    """

    def test_both_sides(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(self.CASTLE_DIAGRAM, castling=CastlingRights.ALL)
        king_moves = destinations(generate_moves(board), E1)
        assert G1 in king_moves
        assert C1 in king_moves

    def test_black_both_sides(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(
            self.CASTLE_DIAGRAM, castling=CastlingRights.ALL, side_to_move=Color.BLACK
        )
        king_moves = destinations(generate_moves(board), E8)
        assert G8 in king_moves
        assert Square(8, 3) in king_moves

    def test_castle_move_shape(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(self.CASTLE_DIAGRAM, castling=CastlingRights.ALL)
        castle = next(m for m in generate_moves(board) if m.to_sq == G1)
        assert castle == Movement(E1, G1)
        assert castle.file_distance == 2

    def test_rights_required(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(
            self.CASTLE_DIAGRAM, castling=CastlingRights.WHITE_QUEENSIDE
        )
        king_moves = destinations(generate_moves(board), E1)
        assert G1 not in king_moves
        assert C1 in king_moves

    def test_blocked_path(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(
            """
            r...k..r
            pppppppp
            ........
            ........
            ........
            ........
            PPPPPPPP
            RN..K.NR
            """,
            castling=CastlingRights.ALL,
        )
        king_moves = destinations(generate_moves(board), E1)
        assert G1 not in king_moves
        assert C1 not in king_moves
        assert F1 in king_moves

    def test_queenside_b_file_must_be_empty(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(
            """
            ....k...
            ........
            ........
            ........
            ........
            ........
            ........
            Rn..K...
            """,
            castling=CastlingRights.WHITE_QUEENSIDE,
        )
        assert C1 not in destinations(generate_moves(board), E1)

    def test_rook_must_be_in_corner(self) -> None:
        board = Board(white={E1: PieceType.KING}, castling=CastlingRights.WHITE_BOTH)
        assert destinations(generate_moves(board), E1) == {
            Square(1, 4), Square(1, 6), Square(2, 4), Square(2, 5), Square(2, 6)
        }

    def test_king_must_be_on_home_square(self) -> None:
        board = Board(
            white={E2: PieceType.KING, H1: PieceType.ROOK},
            castling=CastlingRights.WHITE_KINGSIDE,
        )
        assert all(m.file_distance <= 1 for m in generate_moves(board) if m.from_sq == E2)

    def test_transit_attacks_not_checked(self, board_from_diagram: Diagram) -> None:
        board = board_from_diagram(
            """
            ....k...
            ........
            ........
            ........
            ........
            ........
            .....r..
            ....K..R
            """,
            castling=CastlingRights.WHITE_KINGSIDE,
        )
        assert G1 in destinations(generate_moves(board), E1)
