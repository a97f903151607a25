"""Built-in toolbar actions and their Markdown marker pairs."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from .models import FormatAction, UnknownFormatError

DEFAULT_FORMAT_ACTIONS: tuple[FormatAction, ...] = (
    FormatAction("heading1", "# ", "\n", "line_prefix", "Heading 1"),
    FormatAction("heading2", "## ", "\n", "line_prefix", "Heading 2"),
    FormatAction("heading3", "### ", "\n", "line_prefix", "Heading 3"),
    FormatAction("bold", "**", "**", "wrap", "Bold"),
    FormatAction("italic", "*", "*", "wrap", "Italic"),
    FormatAction("strikethrough", "~~", "~~", "wrap", "Strikethrough"),
    FormatAction("bullet_list", "- ", "\n", "line_prefix", "Bullet List"),
    FormatAction("numbered_list", "1. ", "\n", "line_prefix", "Numbered List"),
    FormatAction("quote", "> ", "\n", "line_prefix", "Quote"),
    FormatAction("code", "`", "`", "wrap", "Inline Code"),
    FormatAction("link", "[", "](url)", "wrap", "Link"),
    FormatAction("image", "![alt](", ")", "wrap", "Image"),
)


def build_action_table(
    actions: Iterable[FormatAction] = DEFAULT_FORMAT_ACTIONS,
) -> Mapping[str, FormatAction]:
    table: dict[str, FormatAction] = {}
    for action in actions:
        if action.name in table:
            raise ValueError(f"Format action '{action.name}' defined twice")
        table[action.name] = action
    return MappingProxyType(table)


FORMAT_ACTIONS = build_action_table()


def get_format_action(
    name: str, table: Mapping[str, FormatAction] = FORMAT_ACTIONS
) -> FormatAction:
    try:
        return table[name]
    except KeyError:
        raise UnknownFormatError(name) from None


__all__ = [
    "DEFAULT_FORMAT_ACTIONS",
    "FORMAT_ACTIONS",
    "build_action_table",
    "get_format_action",
]
