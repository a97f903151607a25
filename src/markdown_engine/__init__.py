"""UI-agnostic Markdown editing engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "formatting",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
