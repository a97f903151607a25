"""Buffer abstractions and undo/redo data structures."""

from .buffer import Buffer, BufferDelta, BufferStats, Transaction, transaction
from .document import Document
from .history import HistoryEntry, HistoryStack
from .state import Selection
from .sync import BufferMirror, BufferSync
from .validation import clamp_offset, clamp_selection

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferStats",
    "Transaction",
    "transaction",
    "Document",
    "HistoryEntry",
    "HistoryStack",
    "Selection",
    "BufferMirror",
    "BufferSync",
    "clamp_offset",
    "clamp_selection",
]
