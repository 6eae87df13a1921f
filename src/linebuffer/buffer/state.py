"""Position and search-direction value types shared by lines and buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True, slots=True)
class Position:
    """Document coordinate: ``y`` is a line index, ``x`` a grapheme index.

    ``y == len(buffer)`` addresses the virtual line after the last one and
    ``x == len(line)`` addresses the end of a line.
    """

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Position coordinates must be >= 0, got ({self.x}, {self.y})")
