"""Consumers of the core that walk the move tree."""

from cheso.engine.perft import PerftLimits, PerftResult, divide, perft, run_perft

__all__ = [
    "PerftLimits",
    "PerftResult",
    "divide",
    "perft",
    "run_perft",
]
