"""Text buffer and lexical highlighting engine for a terminal line editor."""

__all__ = [
    "adapters",
    "buffer",
    "highlighting",
    "runtime",
]

__version__ = "0.1.0"
