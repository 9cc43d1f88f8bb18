"""A chess rules engine: legality, special moves and game endings."""

__version__ = "0.1.0"
