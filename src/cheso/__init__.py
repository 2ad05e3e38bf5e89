"""cheso: chess board model and pseudo-legal move generation."""

__version__ = "0.1.0"
