"""Document-level buffer: an ordered list of lines plus file identity."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional, Sequence, Union

from linebuffer.runtime import telemetry

from .errors import BufferEncodingError, BufferIOError
from .line import TAB_WIDTH, Line
from .state import Position, SearchDirection

PathLike = Union[str, "os.PathLike[str]"]


class Buffer:
    """Owns every :class:`Line` of a document and composes their edits.

    Positions are grapheme based (see :class:`Position`). Out-of-range
    positions never raise: they are clamped or ignored. Only ``load`` and
    ``save`` can fail, with :class:`BufferIOError` or
    :class:`BufferEncodingError`.
    """

    def __init__(
        self,
        lines: Optional[Iterable[Line]] = None,
        *,
        path: Optional[PathLike] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self._lines: List[Line] = list(lines or ())
        self.path: Optional[str] = os.fspath(path) if path is not None else None
        self.modified = False
        self.logger_name = logger_name

    @classmethod
    def from_text(cls, text: str, *, path: Optional[PathLike] = None) -> "Buffer":
        lines = [Line.from_text(row) for row in _split_lines(text)]
        for line in lines:
            line.highlight(None)
        return cls(lines, path=path)

    @classmethod
    def load(cls, path: PathLike, *, logger_name: Optional[str] = None) -> "Buffer":
        """Read ``path`` as UTF-8 and build one highlighted line per row."""

        location = os.fspath(path)
        with telemetry.span(
            "buffer::load",
            logger_name=logger_name,
            component="buffer",
            metadata={"path": location},
        ) as handle:
            try:
                with open(location, "rb") as stream:
                    raw = stream.read()
            except OSError as exc:
                raise BufferIOError(
                    f"Cannot read '{location}': {exc.strerror or exc}", path=location
                ) from exc

            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise BufferEncodingError(
                    f"'{location}' is not valid UTF-8 (byte {exc.start})",
                    path=location,
                ) from exc

            buffer = cls.from_text(text, path=location)
            buffer.logger_name = logger_name
            handle.add_metadata("line_count", len(buffer))

        telemetry.record_event(
            "buffer.load",
            data={"path": location, "line_count": len(buffer)},
            logger_name=logger_name,
        )
        return buffer

    def save(self, path: Optional[PathLike] = None) -> None:
        """Write every line followed by ``\\n`` to the backing path.

        ``path`` replaces the backing path once the write succeeds. Without any
        backing path nothing is written and the buffer is simply marked clean;
        prompting for a file name is the caller's job.

        The file is truncated before writing. An ``OSError`` halfway through
        leaves it truncated or partially written on disk; the in-memory lines
        and the ``modified`` flag stay untouched and :class:`BufferIOError` is
        raised.
        """

        target = os.fspath(path) if path is not None else self.path
        if target is None:
            self.modified = False
            return

        with telemetry.span(
            "buffer::save",
            logger_name=self.logger_name,
            component="buffer",
            metadata={"path": target, "line_count": len(self._lines)},
        ):
            try:
                with open(target, "wb") as stream:
                    for line in self._lines:
                        stream.write(line.as_bytes())
                        stream.write(b"\n")
            except OSError as exc:
                raise BufferIOError(
                    f"Cannot write '{target}': {exc.strerror or exc}", path=target
                ) from exc

        self.path = target
        self.modified = False
        telemetry.record_event(
            "buffer.save",
            data={"path": target, "line_count": len(self._lines)},
            logger_name=self.logger_name,
        )

    def __len__(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def is_dirty(self) -> bool:
        return self.modified

    @property
    def lines(self) -> Sequence[Line]:
        return tuple(self._lines)

    def row(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def snapshot(self) -> tuple[str, ...]:
        """Return the text of every line without exposing the lines."""

        return tuple(line.text for line in self._lines)

    def highlight(self, word: Optional[str] = None) -> None:
        """Re-highlight every line, marking occurrences of ``word``."""

        for line in self._lines:
            line.highlight(word)

    def insert_newline(self, at: Position) -> None:
        if at.y > len(self._lines):
            return
        with Transaction(self, "insert_newline", at):
            self.modified = True
            if at.y == len(self._lines):
                self._lines.append(Line())
                return

            current = self._lines[at.y]
            remainder = current.split(at.x)
            current.highlight(None)
            remainder.highlight(None)
            self._lines.insert(at.y + 1, remainder)

    def insert(self, at: Position, char: str) -> None:
        self.modified = True
        if char == "\n":
            self.insert_newline(at)
            return
        if char == "\t":
            for _ in range(TAB_WIDTH):
                self.insert(at, " ")
            return

        with Transaction(self, "insert", at):
            if at.y == len(self._lines):
                line = Line()
                line.insert(0, char)
                line.highlight(None)
                self._lines.append(line)
            elif at.y < len(self._lines):
                line = self._lines[at.y]
                line.insert(at.x, char)
                line.highlight(None)

    def delete(self, at: Position) -> None:
        self.modified = True
        if at.y >= len(self._lines):
            return

        with Transaction(self, "delete", at):
            line = self._lines[at.y]
            if at.x == len(line) and at.y + 1 < len(self._lines):
                following = self._lines.pop(at.y + 1)
                line.append(following)
            else:
                line.delete(at.x)
            line.highlight(None)

    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """Locate ``query`` starting at ``at``, crossing line boundaries.

        Forward walks down to the last line, restarting each new line at
        column 0. Backward walks up to the first line, restarting each at its
        end. Returns the grapheme position of the match start.
        """

        if at.y >= len(self._lines):
            return None

        forward = direction is SearchDirection.FORWARD
        y, x = at.y, at.x
        steps = len(self._lines) - at.y if forward else at.y + 1
        for _ in range(steps):
            found = self._lines[y].find(query, x, direction)
            if found is not None:
                return Position(x=found, y=y)
            if forward:
                y, x = y + 1, 0
            else:
                y = max(y - 1, 0)
                x = len(self._lines[y])
        return None


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one buffer mutation in a telemetry span."""

    def __init__(
        self, buffer: Buffer, label: str, position: Optional[Position] = None
    ) -> None:
        self.buffer = buffer
        self.label = label
        self.position = position
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None

    def __enter__(self) -> "Transaction":
        metadata: dict[str, object] = {"path": self.buffer.path or "<unnamed>"}
        if self.position is not None:
            metadata["x"] = self.position.x
            metadata["y"] = self.position.y
        self._span_cm = telemetry.span(
            f"buffer::{self.label}",
            logger_name=self.buffer.logger_name,
            component="buffer",
            metadata=metadata,
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _split_lines(text: str) -> List[str]:
    """Split on ``\\n``; a final newline does not produce an empty last row."""

    if not text:
        return []
    rows = text.split("\n")
    if rows[-1] == "":
        rows.pop()
    return [row[:-1] if row.endswith("\r") else row for row in rows]


__all__ = ["Buffer", "Transaction"]
