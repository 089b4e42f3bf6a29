"""Best-of-three rock-paper-scissors engine with swappable game history storage."""

__version__ = "0.1.0"
