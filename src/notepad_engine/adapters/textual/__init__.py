"""Textual host: controller, tag styles and the runnable app."""

from .controller import EditorController, EditorHooks, load_document
from .styles import TAG_STYLES, to_rich_text

__all__ = [
    "EditorController",
    "EditorHooks",
    "TAG_STYLES",
    "load_document",
    "to_rich_text",
]
