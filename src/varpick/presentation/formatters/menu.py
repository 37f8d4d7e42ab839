"""
Formatting helpers for picker menu entries and the trigger label.
"""

from __future__ import annotations

from rich.text import Text

from varpick.domain.types import AddressableItem


def format_trigger_text(icon: str, placeholder: str, expanded: bool = False) -> Text:
    """Return the trigger label: icon, placeholder and an open/closed caret."""
    text = Text()
    if icon:
        text.append(icon, style="bold cyan")
        text.append(" ")
    text.append(placeholder, style="bold")
    text.append(" ▴" if expanded else " ▾", style="dim")
    return text


def format_item_text(item: AddressableItem, token: str) -> Text:
    """
    Render a menu entry as title (and description) on the left and the token
    preview on the right.
    """
    text = Text(no_wrap=True, overflow="ellipsis")
    text.append(item.title, style="bold")
    text.append("  ")
    text.append(token, style="cyan")
    if item.description:
        text.append("\n")
        text.append(item.description, style="dim")
    return text


def format_section_title(title: str) -> Text:
    return Text(title, style="bold magenta")


def item_tooltip(item: AddressableItem) -> str:
    """Tooltip shown on hover: the description, or the title when there is none."""
    return item.description or item.title
