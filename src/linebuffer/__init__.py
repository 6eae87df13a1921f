"""In-memory, grapheme-aware line buffer for terminal text editors."""

__all__ = [
    "buffer",
    "runtime",
]

__version__ = "0.1.0"
