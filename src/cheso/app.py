"""Application entry point: perft from the starting position."""

from __future__ import annotations

import argparse
import logging
import sys

from cheso import __version__
from cheso.core.board import Board
from cheso.core.enums import PieceType
from cheso.core.move import Movement
from cheso.engine.perft import PerftLimits, divide, run_perft

_LOGGER = logging.getLogger(__name__)

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cheso",
        description="Count pseudo-legal move-tree leaves from the starting position.",
    )
    parser.add_argument("--depth", type=int, default=3, help="perft depth (default: 3)")
    parser.add_argument(
        "--divide",
        action="store_true",
        help="print the leaf count below each root move",
    )
    parser.add_argument(
        "--check-invariants",
        action="store_true",
        help="validate every visited board",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="logging threshold (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the ``cheso`` command and return its exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.depth < 0:
        parser.error("--depth must be >= 0")
    if args.divide and args.depth < 1:
        parser.error("--divide needs --depth >= 1")

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    board = Board.initial()
    print(repr(board))
    print()

    if args.divide:
        counts = divide(board, args.depth)
        for move in sorted(counts, key=Movement.sort_key):
            suffix = "" if move.promotion is None else _PROMO_CHARS[move.promotion]
            print(f"{move.from_sq}{move.to_sq}{suffix}: {counts[move]}")
        print()

    result = run_perft(
        board, PerftLimits(depth=args.depth, check_invariants=args.check_invariants)
    )
    print(f"depth      {result.depth}")
    print(f"nodes      {result.nodes}")
    print(f"captures   {result.captures}")
    print(f"e.p.       {result.en_passants}")
    print(f"castles    {result.castles}")
    print(f"promotions {result.promotions}")
    _LOGGER.debug("%.0f nodes/s", result.nodes_per_second)
    return 0


if __name__ == "__main__":
    sys.exit(main())
