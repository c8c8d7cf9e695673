"""Executable Textual app that hosts the editor controller."""

from __future__ import annotations

import argparse
import os
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use notepad_engine.adapters.textual.app"
    ) from exc

from rich.text import Text

from notepad_engine.runtime import telemetry
from notepad_engine.runtime.config import EngineConfig

from .controller import EditorController, EditorHooks, load_document
from .styles import STATUS_STYLE


class NotepadApp(App[None]):
    """Full-screen editor: document view, status bar and message bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
	}

	#status-line {
		height: 1;
	}

	#message-line {
		height: 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+q", "editor_quit", "Quit", priority=True),
    ]

    def __init__(self, path: Optional[str] = None, *, config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self._path = path
        self._config = config or EngineConfig()
        self.controller: EditorController | None = None
        self._editor_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None
        self._logger = telemetry.get_logger("notepad_engine.app")

    def compose(self) -> ComposeResult:
        self._editor_widget = Static("", id="editor-view")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._editor_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        document, message = load_document(self._path)
        hooks = EditorHooks(
            update_rows=self._update_rows,
            update_status=self._update_status,
            update_message=self._update_message,
            request_quit=self.exit,
            log=self._log_line,
        )
        self.controller = EditorController(
            document, hooks, config=self._config, message=message
        )
        self._resize_controller(self.size.width, self.size.height)

    def on_resize(self, event: events.Resize) -> None:
        self._resize_controller(event.size.width, event.size.height)

    def _resize_controller(self, width: int, height: int) -> None:
        if self.controller:
            # Two rows are taken by the status and message bars.
            self.controller.resize(width, max(height - 2, 1))

    def on_key(self, event: events.Key) -> None:
        if not self.controller:
            return
        character = event.character if event.is_printable else None
        self.controller.handle_key(event.key, character=character)
        event.stop()
        event.prevent_default()

    def action_editor_quit(self) -> None:
        if self.controller:
            self.controller.handle_key("ctrl+q")

    def _update_rows(self, rows: List[Text]) -> None:
        if self._editor_widget:
            self._editor_widget.update(Text("\n").join(rows))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(Text(status, style=STATUS_STYLE))

    def _update_message(self, message: str) -> None:
        if self._message_widget:
            self._message_widget.update(message)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file in the terminal.")
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument(
        "--tab-width",
        type=int,
        default=None,
        help="Spaces drawn for a tab character (default: 1)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to activate before the editor starts",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = EngineConfig.from_env().with_overrides(
        tab_width=args.tab_width, log_preset=args.log_preset
    )
    if config.log_preset:
        telemetry.configure(preset=config.log_preset)
    else:
        # The terminal belongs to the editor while it runs.
        os.environ.setdefault(f"{telemetry.ENV_PREFIX}DISABLE_CONSOLE", "1")
        telemetry.configure()
    app = NotepadApp(args.file, config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
