"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from cheso.core.board import Board
from cheso.core.enums import PieceType
from cheso.core.square import Square

_LETTERS: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}


def _board_from_diagram(diagram: str, **state: Any) -> Board:
    """Build a board from eight rows of letters, rank 8 first.

    Uppercase is White, lowercase is Black, ``.`` is an empty square.  Extra
    keyword arguments go straight to :class:`Board`.
    """
    rows = [line.strip() for line in diagram.strip().splitlines() if line.strip()]
    assert len(rows) == 8, f"need 8 ranks, got {len(rows)}"

    white: dict[Square, PieceType] = {}
    black: dict[Square, PieceType] = {}
    for rank, row in zip(range(8, 0, -1), rows):
        assert len(row) == 8, f"rank {rank} must have 8 squares: {row!r}"
        for file, ch in enumerate(row, start=1):
            if ch == ".":
                continue
            target = white if ch.isupper() else black
            target[Square(rank, file)] = _LETTERS[ch.lower()]
    return Board(white, black, **state)


@pytest.fixture
def board_from_diagram() -> Callable[..., Board]:
    """Provide the diagram-to-board builder."""
    return _board_from_diagram


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()
