"""Perft: exhaustive move-tree walk used to validate the move generator.

Counts are over *pseudo-legal* moves, so they match published (legal) perft
tables only while no side can be left in check; from the starting position
that holds through depth 3.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from cheso.core.board import Board
from cheso.core.enums import PieceType
from cheso.core.move import Movement
from cheso.core.move_generator import generate_moves

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PerftLimits:
    """Options for a single :func:`run_perft` call."""

    depth: int = 3
    check_invariants: bool = False


@dataclass(slots=True)
class PerftResult:
    """Leaf count of a perft walk plus a breakdown of the leaf moves."""

    depth: int
    nodes: int = 0
    captures: int = 0
    en_passants: int = 0
    castles: int = 0
    promotions: int = 0
    elapsed_s: float = 0.0

    @property
    def nodes_per_second(self) -> float:
        if self.elapsed_s <= 0.0:
            return 0.0
        return self.nodes / self.elapsed_s


def _check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"Perft depth must be >= 0, got {depth}")


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth* using make/unmake.

    *board* is restored to its original state before returning.
    """
    _check_depth(depth)
    return _count(board, depth)


def _count(board: Board, depth: int) -> int:
    if depth == 0:
        return 1
    moves = generate_moves(board)
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        record = board.make_move(move)
        nodes += _count(board, depth - 1)
        board.unmake_move(move, record)
    return nodes


def divide(board: Board, depth: int) -> dict[Movement, int]:
    """Leaf counts below each root move (depth >= 1)."""
    if depth < 1:
        raise ValueError(f"Divide depth must be >= 1, got {depth}")

    counts: dict[Movement, int] = {}
    for move in generate_moves(board):
        record = board.make_move(move)
        counts[move] = _count(board, depth - 1)
        board.unmake_move(move, record)
        _LOGGER.debug("%s%s: %d", move.from_sq, move.to_sq, counts[move])
    return counts


def run_perft(board: Board, limits: PerftLimits) -> PerftResult:
    """Walk the tree to ``limits.depth`` and classify every leaf move."""
    _check_depth(limits.depth)

    result = PerftResult(depth=limits.depth)
    started = perf_counter()
    if limits.depth == 0:
        if limits.check_invariants:
            board.validate()
        result.nodes = 1
    else:
        _walk(board, limits.depth, result, limits.check_invariants)
    result.elapsed_s = perf_counter() - started

    _LOGGER.info(
        "perft(%d) = %d nodes in %.3fs (%d captures, %d e.p., %d castles, %d promotions)",
        result.depth,
        result.nodes,
        result.elapsed_s,
        result.captures,
        result.en_passants,
        result.castles,
        result.promotions,
    )
    return result


def _walk(board: Board, depth: int, result: PerftResult, check_invariants: bool) -> None:
    if check_invariants:
        board.validate()

    for move in generate_moves(board):
        if depth == 1:
            _tally(board, move, result)
            if not check_invariants:
                continue
        record = board.make_move(move)
        if depth > 1:
            _walk(board, depth - 1, result, check_invariants)
        else:
            board.validate()
        board.unmake_move(move, record)


def _tally(board: Board, move: Movement, result: PerftResult) -> None:
    """Record a leaf move; classification must run before it is made."""
    result.nodes += 1
    piece = board.pieces_of_side_to_move()[move.from_sq]
    if move.captured is not None:
        result.captures += 1
        if (
            piece == PieceType.PAWN
            and move.to_sq == board.en_passant
            and board.is_empty(move.to_sq)
        ):
            result.en_passants += 1
    if piece == PieceType.KING and move.file_distance > 1:
        result.castles += 1
    if move.promotion is not None:
        result.promotions += 1
