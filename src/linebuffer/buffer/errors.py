"""Failures surfaced by buffer load/save."""

from __future__ import annotations

from typing import Optional


class BufferFileError(RuntimeError):
    """Base class for errors tied to a buffer's backing file."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class BufferIOError(BufferFileError):
    """The backing file could not be read, created or written."""


class BufferEncodingError(BufferFileError):
    """The backing file does not hold valid UTF-8."""


__all__ = ["BufferFileError", "BufferIOError", "BufferEncodingError"]
