"""Single line of text addressed by grapheme cluster.

Every position a caller passes to a :class:`Line` counts user-perceived
characters (extended grapheme clusters), never code points or bytes. The
grapheme count is cached and refreshed after each text mutation so that
length queries stay O(1).
"""

from __future__ import annotations

from itertools import islice
from typing import List, Optional, Sequence

import grapheme

from .highlighting import RESET_MARKER, HighlightClass
from .state import SearchDirection

TAB_WIDTH = 4


def _is_ascii_digit(cluster: str) -> bool:
    return len(cluster) == 1 and "0" <= cluster <= "9"


class Line:
    """Owns the text of one row plus its per-grapheme highlight classes."""

    __slots__ = ("_text", "_len", "_highlighting")

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._len = 0
        self._highlighting: List[HighlightClass] = []
        self._update_len()

    @classmethod
    def from_text(cls, text: str) -> "Line":
        return cls(text)

    def __len__(self) -> int:
        return self._len

    def __repr__(self) -> str:
        return f"Line({self._text!r})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def grapheme_length(self) -> int:
        return self._len

    @property
    def highlighting(self) -> Sequence[HighlightClass]:
        return tuple(self._highlighting)

    def is_empty(self) -> bool:
        return not self._text

    def as_bytes(self) -> bytes:
        return self._text.encode("utf-8")

    def _update_len(self) -> None:
        self._len = grapheme.length(self._text)

    def _clusters(self) -> List[str]:
        return list(grapheme.graphemes(self._text))

    def render(self, start: int, end: int) -> str:
        """Return graphemes ``[start, end)`` with color markers embedded.

        ``end`` is clamped to the byte length of the text and ``start`` to
        ``end``. A marker is emitted each time the highlight class changes
        (starting from ``NONE``) and a single reset marker always closes the
        result, even when the range is empty. Tabs are shown as spaces.
        """

        end = min(end, len(self.as_bytes()))
        start = min(start, end)
        current = HighlightClass.NONE
        parts: List[str] = []

        clusters = islice(grapheme.graphemes(self._text), start, end)
        for index, cluster in enumerate(clusters, start):
            kind = (
                self._highlighting[index]
                if index < len(self._highlighting)
                else HighlightClass.NONE
            )
            if kind is not current:
                current = kind
                parts.append(kind.marker())
            parts.append(" " * TAB_WIDTH if cluster == "\t" else cluster)

        parts.append(RESET_MARKER)
        return "".join(parts)

    def insert(self, at: int, char: str) -> None:
        if at >= self._len:
            self._text += char
        else:
            clusters = self._clusters()
            self._text = "".join(clusters[:at]) + char + "".join(clusters[at:])
        self._update_len()

    def delete(self, at: int) -> None:
        if at >= self._len:
            return
        clusters = self._clusters()
        self._text = "".join(clusters[:at]) + "".join(clusters[at + 1 :])
        self._update_len()

    def append(self, other: "Line") -> None:
        """Concatenate ``other`` onto this line; call ``highlight`` afterwards."""

        self._text = self._text + other._text
        self._update_len()

    def split(self, at: int) -> "Line":
        """Keep the first ``at`` graphemes and return the rest as a new line."""

        clusters = self._clusters()
        self._text = "".join(clusters[:at])
        self._update_len()
        return Line("".join(clusters[at:]))

    def highlight(self, word: Optional[str] = None) -> None:
        """Recompute the highlight class of every grapheme.

        Non-overlapping, leftmost-first occurrences of ``word`` are marked
        ``SEARCH``; remaining ASCII digits are ``NUMBER``.
        """

        word_len = grapheme.length(word) if word else 0
        starts: set[int] = set()
        if word:
            index = 0
            while True:
                match = self.find(word, index, SearchDirection.FORWARD)
                if match is None:
                    break
                starts.add(match)
                index = match + word_len

        highlighting: List[HighlightClass] = []
        pending = 0
        for index, cluster in enumerate(grapheme.graphemes(self._text)):
            if pending:
                pending -= 1
                highlighting.append(HighlightClass.SEARCH)
            elif index in starts:
                pending = word_len - 1
                highlighting.append(HighlightClass.SEARCH)
            elif _is_ascii_digit(cluster):
                highlighting.append(HighlightClass.NUMBER)
            else:
                highlighting.append(HighlightClass.NONE)
        self._highlighting = highlighting

    def find(
        self,
        query: str,
        at: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Grapheme index of the nearest ``query`` occurrence, or ``None``.

        Forward searches graphemes ``[at, len)`` for the leftmost hit, backward
        searches ``[0, at)`` for the rightmost one. Hits that start inside a
        grapheme cluster are skipped.
        """

        if not query or at > self._len:
            return None

        if direction is SearchDirection.FORWARD:
            start, end = at, self._len
        else:
            start, end = 0, at

        window = self._clusters()[start:end]
        boundaries = {}
        offset = 0
        for index, cluster in enumerate(window):
            boundaries[offset] = index
            offset += len(cluster)
        haystack = "".join(window)

        if direction is SearchDirection.FORWARD:
            hit = haystack.find(query)
            while hit != -1 and hit not in boundaries:
                hit = haystack.find(query, hit + 1)
        else:
            hit = haystack.rfind(query)
            while hit != -1 and hit not in boundaries:
                hit = haystack.rfind(query, 0, hit + len(query) - 1)

        if hit == -1:
            return None
        return start + boundaries[hit]


__all__ = ["Line", "TAB_WIDTH"]
