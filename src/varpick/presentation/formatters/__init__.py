"""
Reusable formatter utilities for the Textual presentation layer.
"""

from .menu import format_item_text, format_section_title, format_trigger_text, item_tooltip

__all__ = [
    "format_item_text",
    "format_section_title",
    "format_trigger_text",
    "item_tooltip",
]
