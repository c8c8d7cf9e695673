from __future__ import annotations

from pathlib import Path
from typing import List

from rich.text import Text

from notepad_engine.adapters.textual import (
    EditorController,
    EditorHooks,
    TAG_STYLES,
    load_document,
    to_rich_text,
)
from notepad_engine.buffer import Document, Position, StyledRun
from notepad_engine.highlighting import HighlightTag
from notepad_engine.runtime.config import EngineConfig


class Recorder:
    def __init__(self) -> None:
        self.rows: List[List[Text]] = []
        self.statuses: List[str] = []
        self.messages: List[str] = []
        self.logs: List[str] = []
        self.quit_requests = 0

    def hooks(self) -> EditorHooks:
        return EditorHooks(
            update_rows=self.rows.append,
            update_status=self.statuses.append,
            update_message=self.messages.append,
            request_quit=self._quit,
            log=self.logs.append,
        )

    def _quit(self) -> None:
        self.quit_requests += 1

    @property
    def plain_rows(self) -> List[str]:
        return [row.plain for row in self.rows[-1]]


def make_controller(
    *lines: str,
    filename: str | None = None,
    config: EngineConfig | None = None,
) -> tuple[EditorController, Recorder]:
    recorder = Recorder()
    document = Document.from_text("\n".join(lines), filename=filename)
    controller = EditorController(document, recorder.hooks(), config=config)
    controller.resize(40, 5)
    return controller, recorder


def type_text(controller: EditorController, text: str) -> None:
    for character in text:
        controller.handle_key(character, character=character)


def test_typing_into_empty_document() -> None:
    controller, recorder = make_controller()

    type_text(controller, "hi")

    assert [line.text for line in controller.document] == ["hi"]
    assert controller.cursor == Position(column=2, row=0)
    assert recorder.plain_rows[0] == "hi"
    assert "(modified)" in recorder.statuses[-1]


def test_enter_splits_and_backspace_joins() -> None:
    controller, _ = make_controller("abcd")

    controller.handle_key("right")
    controller.handle_key("right")
    controller.handle_key("enter")
    assert [line.text for line in controller.document] == ["ab", "cd"]
    assert controller.cursor == Position(column=0, row=1)

    controller.handle_key("backspace")
    assert [line.text for line in controller.document] == ["abcd"]
    assert controller.cursor == Position(column=2, row=0)


def test_cursor_wraps_between_lines() -> None:
    controller, _ = make_controller("ab", "c")

    controller.handle_key("end")
    controller.handle_key("right")
    assert controller.cursor == Position(column=0, row=1)

    controller.handle_key("left")
    assert controller.cursor == Position(column=2, row=0)

    controller.handle_key("down")
    assert controller.cursor == Position(column=1, row=1)


def test_rows_beyond_document_are_fillers() -> None:
    controller, recorder = make_controller("let x = 1;", filename="main.rs")

    assert recorder.plain_rows[0] == "let x = 1;"
    assert recorder.plain_rows[1:] == ["~"] * 4
    assert controller.document[0].highlighted


def test_rendered_row_carries_keyword_style() -> None:
    _, recorder = make_controller("let x", filename="main.rs")

    first = recorder.rows[-1][0]
    styles = [span.style for span in first.spans]
    assert TAG_STYLES[HighlightTag.PRIMARY_KEYWORD] in styles


def test_welcome_message_mentions_version() -> None:
    _, recorder = make_controller(config=EngineConfig(version="9.9.9"))

    assert any("version 9.9.9" in row for row in recorder.plain_rows)


def test_tab_width_comes_from_config() -> None:
    _, recorder = make_controller("\tx", config=EngineConfig(tab_width=4))

    assert recorder.plain_rows[0] == "    x"


def test_dirty_quit_needs_confirmation() -> None:
    controller, recorder = make_controller("a", config=EngineConfig(quit_times=2))
    type_text(controller, "b")

    controller.handle_key("ctrl+q")
    controller.handle_key("ctrl+q")
    assert controller.should_quit is False
    assert recorder.messages[-1].startswith("WARNING!")

    controller.handle_key("ctrl+q")
    assert controller.should_quit is True
    assert recorder.quit_requests == 1


def test_other_keys_reset_quit_confirmation() -> None:
    controller, _ = make_controller("a", config=EngineConfig(quit_times=1))
    type_text(controller, "b")

    controller.handle_key("ctrl+q")
    controller.handle_key("left")
    controller.handle_key("ctrl+q")

    assert controller.should_quit is False


def test_clean_document_quits_immediately() -> None:
    controller, recorder = make_controller("a")

    controller.handle_key("ctrl+q")

    assert controller.should_quit is True
    assert recorder.quit_requests == 1


def test_save_untitled_prompts_for_name(tmp_path: Path) -> None:
    controller, recorder = make_controller()
    type_text(controller, "hello")
    path = tmp_path / "hello.txt"

    controller.handle_key("ctrl+s")
    assert recorder.messages[-1] == "Save as: "
    type_text(controller, str(path))
    controller.handle_key("enter")

    assert path.read_text(encoding="utf-8") == "hello\n"
    assert controller.document.filename == str(path)
    assert controller.document.is_dirty is False
    assert recorder.messages[-1] == "File saved successfully."


def test_escape_aborts_save_prompt() -> None:
    controller, recorder = make_controller("x")

    controller.handle_key("ctrl+s")
    controller.handle_key("escape")

    assert recorder.messages[-1] == "Save aborted."
    assert controller.document.filename is None


def test_save_error_is_reported(tmp_path: Path) -> None:
    controller, recorder = make_controller("x", filename=str(tmp_path))
    type_text(controller, "y")

    controller.handle_key("ctrl+s")

    assert recorder.messages[-1].startswith("Error writing file!")
    assert controller.document.is_dirty is True


def test_incremental_search_moves_cursor_and_marks_matches() -> None:
    controller, recorder = make_controller("one", "two one")

    controller.handle_key("ctrl+f")
    type_text(controller, "one")
    assert controller.cursor == Position(column=0, row=0)

    controller.handle_key("down")
    assert controller.cursor == Position(column=4, row=1)
    assert controller.document[1].highlight_spans[4:] == (HighlightTag.MATCH,) * 3
    assert recorder.messages[-1].endswith("one")

    controller.handle_key("up")
    assert controller.cursor == Position(column=0, row=0)


def test_escape_restores_cursor_and_clears_matches() -> None:
    controller, _ = make_controller("one", "two one")

    controller.handle_key("ctrl+f")
    type_text(controller, "two")
    assert controller.cursor == Position(column=0, row=1)

    controller.handle_key("escape")

    assert controller.cursor == Position(column=0, row=0)
    assert all(
        HighlightTag.MATCH not in line.highlight_spans for line in controller.document
    )


def test_load_document_falls_back_on_error(tmp_path: Path) -> None:
    missing = tmp_path / "missing.rs"

    document, message = load_document(str(missing))

    assert document.is_empty
    assert document.filename is None
    assert message == f"ERR: Could not open file: {missing}"


def test_load_document_opens_file(tmp_path: Path) -> None:
    path = tmp_path / "lib.rs"
    path.write_text("fn x() {}\n", encoding="utf-8")

    document, message = load_document(str(path))

    assert document.line_count == 1
    assert message.startswith("HELP:")


def test_to_rich_text_appends_runs() -> None:
    text = to_rich_text(
        [StyledRun("let", HighlightTag.PRIMARY_KEYWORD), StyledRun(" x")]
    )

    assert text.plain == "let x"


def test_key_events_are_logged() -> None:
    controller, recorder = make_controller("a")

    controller.handle_key("right")

    assert any(line.startswith("key ->") for line in recorder.logs)


def test_prompt_callbacks_without_active_prompt_do_nothing() -> None:
    controller, _ = make_controller("abc", "abc")

    controller._handle_prompt_key("a", "a")
    controller._update_search("down", "abc")

    assert controller.cursor == Position(0, 0)
    assert controller.message_line().startswith("HELP:")
