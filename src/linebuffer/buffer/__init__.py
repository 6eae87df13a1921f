"""Line and buffer data structures with grapheme-aware editing."""

from .buffer import Buffer, Transaction
from .errors import BufferEncodingError, BufferFileError, BufferIOError
from .highlighting import RESET_MARKER, HighlightClass
from .line import TAB_WIDTH, Line
from .state import Position, SearchDirection

__all__ = [
    "Buffer",
    "Transaction",
    "Line",
    "HighlightClass",
    "RESET_MARKER",
    "Position",
    "SearchDirection",
    "TAB_WIDTH",
    "BufferFileError",
    "BufferIOError",
    "BufferEncodingError",
]
