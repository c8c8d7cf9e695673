"""Key handling, cursor and viewport logic that sits between a host UI and the document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from rich.text import Text

from notepad_engine.buffer import (
    Document,
    FileAccessError,
    Position,
    SearchDirection,
    graphemes,
)
from notepad_engine.runtime import telemetry
from notepad_engine.runtime.config import EngineConfig

from .styles import FILLER_STYLE, to_rich_text

HELP_MESSAGE = "HELP: Ctrl-F = find | Ctrl-S = save | Ctrl-Q = quit"
SEARCH_LABEL = "Search (ESC to cancel, Arrows to navigate): "

MOVEMENT_KEYS = frozenset(
    {"up", "down", "left", "right", "home", "end", "pageup", "pagedown"}
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorHooks:
    """Callbacks invoked by the controller to update host widgets."""

    update_rows: Callable[[List[Text]], None]
    update_status: Callable[[str], None] = _noop
    update_message: Callable[[str], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class PromptState:
    label: str
    on_done: Callable[[Optional[str]], None]
    on_change: Optional[Callable[[str, str], None]] = None
    text: str = ""


@dataclass(slots=True)
class SearchSession:
    saved_cursor: Position
    saved_offset: Position
    direction: SearchDirection = SearchDirection.FORWARD
    query: str = ""


@dataclass(slots=True)
class Viewport:
    width: int = 80
    height: int = 24
    offset: Position = field(default_factory=Position)


def load_document(path: Optional[str]) -> tuple[Document, str]:
    """Open ``path`` or fall back to an empty untitled document."""

    if not path:
        return Document(), HELP_MESSAGE
    try:
        return Document.open(path), HELP_MESSAGE
    except FileAccessError as exc:
        telemetry.record_event(
            "editor.open_failed",
            level="info",
            data={"path": path, "reason": exc.reason},
        )
        return Document(), f"ERR: Could not open file: {path}"


class EditorController:
    """Turns key names into document commands and pushes rendered rows to the host."""

    def __init__(
        self,
        document: Document,
        hooks: EditorHooks,
        *,
        config: Optional[EngineConfig] = None,
        message: str = HELP_MESSAGE,
    ) -> None:
        self.document = document
        self.hooks = hooks
        self.config = config or EngineConfig()
        self.cursor = Position()
        self.viewport = Viewport()
        self.message = message
        self.should_quit = False
        self._quit_remaining = self.config.quit_times
        self._prompt: Optional[PromptState] = None
        self._search: Optional[SearchSession] = None

    # -- host entry points -------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        self.viewport.width = max(width, 1)
        self.viewport.height = max(height, 1)
        self.refresh()

    def handle_key(self, key: str, *, character: Optional[str] = None) -> None:
        self._log_state("key ->", key=key, character=character)
        if self._prompt is not None:
            self._handle_prompt_key(key, character)
        else:
            self._handle_editor_key(key, character)
        self.refresh()

    def refresh(self) -> None:
        self._scroll()
        word = self._search.query if self._search else None
        offset = self.viewport.offset
        self.document.highlight(word, until_row=offset.row + self.viewport.height)
        self.hooks.update_rows(self.render_rows())
        self.hooks.update_status(self.status_line())
        self.hooks.update_message(self.message_line())

    # -- rendering ---------------------------------------------------------

    def render_rows(self) -> List[Text]:
        rows: List[Text] = []
        offset = self.viewport.offset
        start = offset.column
        end = offset.column + self.viewport.width
        for screen_row in range(self.viewport.height):
            line = self.document.row(offset.row + screen_row)
            if line is not None:
                runs = line.render(start, end, tab_width=self.config.tab_width)
                rows.append(to_rich_text(runs))
            elif self.document.is_empty and screen_row == self.viewport.height // 3:
                rows.append(self._welcome_row())
            else:
                rows.append(Text("~", style=FILLER_STYLE))
        return rows

    def _welcome_row(self) -> Text:
        message = f"notepad-engine -- version {self.config.version}"
        padding = max(self.viewport.width - len(message), 0) // 2
        line = f"~{' ' * max(padding - 1, 0)}{message}"
        return Text(line[: self.viewport.width], style=FILLER_STYLE)

    def status_line(self) -> str:
        name = self.document.filename or "[No Name]"
        modified = " (modified)" if self.document.is_dirty else ""
        left = f"{name[:20]} - {self.document.line_count} lines{modified}"
        right = (
            f"{self.document.file_type_name} | "
            f"{self.cursor.row + 1}/{self.document.line_count}"
        )
        gap = max(self.viewport.width - len(left) - len(right), 1)
        return f"{left}{' ' * gap}{right}"

    def message_line(self) -> str:
        if self._prompt is not None:
            return f"{self._prompt.label}{self._prompt.text}"
        return self.message

    # -- editor keys -------------------------------------------------------

    def _handle_editor_key(self, key: str, character: Optional[str]) -> None:
        if key == "ctrl+q":
            self._quit()
            return
        self._quit_remaining = self.config.quit_times

        if key == "ctrl+s":
            self._save()
        elif key == "ctrl+f":
            self._start_search()
        elif key == "enter":
            self.document.new_line(self.cursor)
            self.cursor = Position(column=0, row=self.cursor.row + 1)
        elif key == "delete":
            self.document.delete(self.cursor)
        elif key == "backspace":
            if self.cursor.column > 0 or self.cursor.row > 0:
                self._move_cursor("left")
                self.document.delete(self.cursor)
        elif key == "tab":
            self._insert("\t")
        elif key in MOVEMENT_KEYS:
            self._move_cursor(key)
        elif character:
            self._insert(character)

    def _insert(self, character: str) -> None:
        self.document.insert(self.cursor, character)
        self._move_cursor("right")

    def _quit(self) -> None:
        if self.document.is_dirty and self._quit_remaining > 0:
            self.message = (
                "WARNING! File has unsaved changes. "
                f"Press Ctrl-Q {self._quit_remaining} more times to quit."
            )
            self._quit_remaining -= 1
            return
        self.should_quit = True
        self.hooks.request_quit()

    def _save(self) -> None:
        if self.document.filename:
            self._write(None)
            return
        self._prompt = PromptState(label="Save as: ", on_done=self._finish_save_as)

    def _finish_save_as(self, name: Optional[str]) -> None:
        if not name:
            self.message = "Save aborted."
            return
        self._write(name)

    def _write(self, name: Optional[str]) -> None:
        try:
            if name is None:
                self.document.save()
            else:
                self.document.save_as(name)
        except FileAccessError as exc:
            self.message = f"Error writing file! {exc.reason}"
            return
        self.message = "File saved successfully."

    # -- cursor ------------------------------------------------------------

    def _move_cursor(self, key: str) -> None:
        row, column = self.cursor.row, self.cursor.column
        height = self.document.line_count
        width = self.document.row_length(row)

        if key == "up":
            row = max(row - 1, 0)
        elif key == "down":
            row = min(row + 1, height)
        elif key == "left":
            if column > 0:
                column -= 1
            elif row > 0:
                row -= 1
                column = self.document.row_length(row)
        elif key == "right":
            if column < width:
                column += 1
            elif row < height:
                row += 1
                column = 0
        elif key == "pageup":
            row = max(row - self.viewport.height, 0)
        elif key == "pagedown":
            row = min(row + self.viewport.height, height)
        elif key == "home":
            column = 0
        elif key == "end":
            column = width

        column = min(column, self.document.row_length(row))
        self.cursor = Position(column=column, row=row)

    def _scroll(self) -> None:
        offset = self.viewport.offset
        row, column = offset.row, offset.column
        if self.cursor.row < row:
            row = self.cursor.row
        elif self.cursor.row >= row + self.viewport.height:
            row = self.cursor.row - self.viewport.height + 1
        if self.cursor.column < column:
            column = self.cursor.column
        elif self.cursor.column >= column + self.viewport.width:
            column = self.cursor.column - self.viewport.width + 1
        self.viewport.offset = Position(column=column, row=row)

    # -- prompt and search -------------------------------------------------

    def _handle_prompt_key(self, key: str, character: Optional[str]) -> None:
        prompt = self._prompt
        if prompt is None:
            return
        if key == "enter":
            self._prompt = None
            prompt.on_done(prompt.text or None)
            return
        if key == "escape":
            self._prompt = None
            prompt.on_done(None)
            return
        if key == "backspace":
            prompt.text = "".join(graphemes(prompt.text)[:-1])
        elif character and key not in MOVEMENT_KEYS:
            prompt.text += character
        if prompt.on_change is not None:
            prompt.on_change(key, prompt.text)

    def _start_search(self) -> None:
        self._search = SearchSession(
            saved_cursor=self.cursor, saved_offset=self.viewport.offset
        )
        self._prompt = PromptState(
            label=SEARCH_LABEL,
            on_done=self._finish_search,
            on_change=self._update_search,
        )

    def _update_search(self, key: str, query: str) -> None:
        session = self._search
        if session is None:
            return
        session.query = query
        moved = False
        if key in {"right", "down"}:
            session.direction = SearchDirection.FORWARD
            self._move_cursor("right")
            moved = True
        elif key in {"left", "up"}:
            session.direction = SearchDirection.BACKWARD
        else:
            session.direction = SearchDirection.FORWARD

        found = self.document.find(query, self.cursor, session.direction)
        if found is not None:
            self.cursor = found
        elif moved:
            self._move_cursor("left")

    def _finish_search(self, query: Optional[str]) -> None:
        session = self._search
        self._search = None
        if session is not None and query is None:
            self.cursor = session.saved_cursor
            self.viewport.offset = session.saved_offset

    # -- diagnostics -------------------------------------------------------

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "cursor": (self.cursor.row, self.cursor.column),
            "lines": self.document.line_count,
            "dirty": self.document.is_dirty,
            "prompt": self._prompt.label if self._prompt else None,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = [
    "EditorController",
    "EditorHooks",
    "PromptState",
    "SearchSession",
    "Viewport",
    "load_document",
    "HELP_MESSAGE",
]
