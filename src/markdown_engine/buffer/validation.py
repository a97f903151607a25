"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import Document
from .state import Selection


def clamp_offset(document: Document, offset: int) -> int:
    return max(0, min(offset, document.length))


def clamp_selection(document: Document, start: int, end: int) -> Selection:
    """Clamp both offsets into ``[0, len(document)]`` and order them."""

    return Selection(clamp_offset(document, start), clamp_offset(document, end))
