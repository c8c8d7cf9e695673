"""The line collection behind an open file."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Iterator, List, Optional, Tuple, Union

from notepad_engine.highlighting import FileType, select_file_type
from notepad_engine.runtime import telemetry

from .line import Line
from .search import find_in_lines
from .state import Position, SearchDirection
from .sync import FileAccessError
from .validation import can_delete_at, can_insert_at

PathLike = Union[str, "os.PathLike[str]"]


def split_lines(text: str) -> List[str]:
    """Split file contents on ``\\n``; a final terminator adds no extra line."""

    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


class Document:
    """Ordered lines plus file identity, dirty state and highlight bookkeeping.

    Editing commands take a cursor ``Position``. Positions outside the
    document are ignored rather than reported; see ``validation``.
    """

    def __init__(
        self,
        lines: Optional[Iterable[Line]] = None,
        *,
        filename: Optional[str] = None,
    ) -> None:
        self._lines: List[Line] = list(lines or [])
        self._filename = filename
        self._file_type = select_file_type(filename)
        self._dirty = False

    @classmethod
    def from_text(cls, text: str, *, filename: Optional[str] = None) -> "Document":
        return cls((Line(part) for part in split_lines(text)), filename=filename)

    @classmethod
    def open(cls, path: PathLike) -> "Document":
        """Read ``path`` into a new document.

        Raises ``FileAccessError`` when the file cannot be read or decoded.
        Classification is deferred to the first ``highlight`` call.
        """

        filename = os.fspath(path)
        with telemetry.span(
            "document::open", component="document", metadata={"path": filename}
        ) as handle:
            try:
                with open(filename, encoding="utf-8", newline="") as stream:
                    contents = stream.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise FileAccessError(
                    f"Could not open {filename}: {exc}", path=filename, reason=str(exc)
                ) from exc
            document = cls.from_text(contents, filename=filename)
            handle.add_metadata("lines", document.line_count)
        return document

    # -- accessors ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> Line:
        return self._lines[index]

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    def set_filename(self, filename: Optional[str]) -> None:
        self._filename = filename

    @property
    def file_type(self) -> FileType:
        return self._file_type

    @property
    def file_type_name(self) -> str:
        return self._file_type.name

    def row(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def row_length(self, index: int) -> int:
        line = self.row(index)
        return line.length if line is not None else 0

    # -- persistence -------------------------------------------------------

    def save(self) -> None:
        """Write every line followed by ``\\n`` to ``filename``.

        ``dirty`` is cleared only when the whole file was written. A failed
        write may leave the file truncated; it is reported, not rolled back.
        """

        filename = self._filename
        if not filename:
            raise FileAccessError("Document has no filename", reason="no filename")

        self._apply_file_type(select_file_type(filename))
        with telemetry.span(
            "document::save",
            component="document",
            metadata={"path": filename, "lines": len(self._lines)},
        ):
            try:
                with open(filename, "w", encoding="utf-8", newline="") as stream:
                    for line in self._lines:
                        stream.write(line.text)
                        stream.write("\n")
            except (OSError, UnicodeError) as exc:
                raise FileAccessError(
                    f"Could not save {filename}: {exc}", path=filename, reason=str(exc)
                ) from exc
        self._dirty = False

    def save_as(self, path: PathLike) -> None:
        self.set_filename(os.fspath(path))
        self.save()

    def _apply_file_type(self, file_type: FileType) -> None:
        if file_type == self._file_type:
            return
        self._file_type = file_type
        self._reset_highlight_from(0)

    # -- editing -----------------------------------------------------------

    def insert(self, position: Position, character: str) -> None:
        if not character or not can_insert_at(position, len(self._lines)):
            self._ignored("insert", position)
            return

        with EditTransaction(self, "insert") as tx:
            if position.row == len(self._lines):
                line = Line()
                line.insert(0, character)
                self._lines.append(line)
            else:
                self._lines[position.row].insert(position.column, character)
            tx.commit(position.row)

    def new_line(self, position: Position) -> None:
        if not can_insert_at(position, len(self._lines)):
            self._ignored("new_line", position)
            return

        with EditTransaction(self, "new_line") as tx:
            if position.row == len(self._lines):
                self._lines.append(Line())
            else:
                suffix = self._lines[position.row].split(position.column)
                self._lines.insert(position.row + 1, suffix)
            tx.commit(position.row)

    def delete(self, position: Position) -> None:
        """Delete the grapheme under the cursor, joining lines at end of line."""

        if not can_delete_at(position, len(self._lines)):
            self._ignored("delete", position)
            return

        line = self._lines[position.row]
        joins = position.column >= line.length and position.row + 1 < len(self._lines)
        if not joins and position.column >= line.length:
            return

        with EditTransaction(self, "delete") as tx:
            if joins:
                line.append(self._lines.pop(position.row + 1))
            else:
                line.delete(position.column)
            tx.commit(position.row)

    def _ignored(self, command: str, position: Position) -> None:
        telemetry.record_event(
            "document.position_ignored",
            level="debug",
            data={
                "command": command,
                "row": position.row,
                "column": position.column,
                "line_count": len(self._lines),
            },
        )

    def _reset_highlight_from(self, row: int) -> None:
        for line in self._lines[max(row, 0) :]:
            line.reset_highlight()

    def mark_dirty(self, row: int) -> None:
        """Record a mutation at ``row``.

        Highlighting is reset from the line above onwards, because the edit may
        change whether a block comment carries into the following lines.
        """

        self._dirty = True
        self._reset_highlight_from(row - 1)

    # -- search and highlighting ------------------------------------------

    def find(
        self,
        query: str,
        position: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        return find_in_lines(self._lines, query, position, direction)

    def highlight(self, word: Optional[str] = None, until_row: Optional[int] = None) -> None:
        """Classify stale lines from the top down to ``until_row`` plus one.

        Lines below the bound keep whatever classification they had until a
        later call reaches them.
        """

        if until_row is None:
            bound = len(self._lines)
        else:
            bound = min(max(until_row + 1, 0), len(self._lines))

        options = self._file_type.options
        carried = False
        rescanned = 0
        for line in self._lines[:bound]:
            if not line.highlighted:
                rescanned += 1
            carried = line.highlight(options, word, carried)
            line.reset_modified()

        if rescanned:
            telemetry.record_event(
                "document.highlight",
                level="debug",
                data={"rescanned": rescanned, "bound": bound, "word": word or ""},
            )


class EditTransaction(AbstractContextManager["EditTransaction"]):
    """Wraps one editing command in a telemetry span and records its effect."""

    def __init__(self, document: Document, label: str) -> None:
        self.document = document
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "EditTransaction":
        self._span_cm = telemetry.span(
            name=f"document::{self.label}",
            component="document",
            metadata={"file": self.document.filename or "<untitled>"},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, row: int) -> None:
        self.document.mark_dirty(row)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Document", "EditTransaction", "split_lines"]
