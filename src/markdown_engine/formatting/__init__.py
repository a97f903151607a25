"""Markdown format detection and insertion."""

from .applicator import apply
from .defaults import (
    DEFAULT_FORMAT_ACTIONS,
    FORMAT_ACTIONS,
    build_action_table,
    get_format_action,
)
from .detector import detect, is_within_markers
from .models import FormatAction, FormatState, UnknownFormatError

__all__ = [
    "apply",
    "detect",
    "is_within_markers",
    "FormatAction",
    "FormatState",
    "UnknownFormatError",
    "DEFAULT_FORMAT_ACTIONS",
    "FORMAT_ACTIONS",
    "build_action_table",
    "get_format_action",
]
