"""
TextAreaBuffer - ``TextBuffer`` adapter over a Textual ``TextArea``.

The picker core addresses the buffer with linear character indices, the
TextArea with ``(row, column)`` locations; this module converts between the
two using the document's own line splitting and newline sequence.
"""

from __future__ import annotations

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from varpick.domain.types import SelectionContext
from varpick.logger import get_logger

logger = get_logger("text_area_buffer")

Location = tuple[int, int]


class TextAreaBuffer:
    """Expose a ``TextArea`` through the picker's ``TextBuffer`` protocol."""

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area

    # ------------------------------------------------------------------
    # Index / location conversion
    # ------------------------------------------------------------------

    def location_to_index(self, location: Location) -> int:
        row, column = location
        document = self.text_area.document
        lines = document.lines
        newline_length = len(document.newline)
        row = max(0, min(row, len(lines) - 1))
        index = sum(len(line) + newline_length for line in lines[:row])
        return index + max(0, min(column, len(lines[row])))

    def index_to_location(self, index: int) -> Location:
        document = self.text_area.document
        lines = document.lines
        newline_length = len(document.newline)
        remaining = max(0, index)
        for row, line in enumerate(lines):
            if remaining <= len(line):
                return (row, remaining)
            remaining -= len(line) + newline_length
            if remaining < 0:
                # Index points inside a multi-character newline sequence
                return (row, len(line))
        last_row = len(lines) - 1
        return (last_row, len(lines[last_row]))

    # ------------------------------------------------------------------
    # TextBuffer protocol
    # ------------------------------------------------------------------

    def get_selection(self) -> SelectionContext | None:
        if not self.text_area.is_mounted:
            logger.debug("TextArea is not mounted; no selection available")
            return None
        start, end = sorted(self.text_area.selection)
        start_index = self.location_to_index(start)
        end_index = self.location_to_index(end)
        return SelectionContext(index=start_index, length=end_index - start_index)

    def get_text(self, index: int, length: int) -> str:
        if index < 0 or length <= 0:
            return ""
        return self.text_area.text[index : index + length]

    def delete_text(self, index: int, length: int) -> None:
        if length <= 0:
            return
        self.text_area.delete(self.index_to_location(index), self.index_to_location(index + length))

    def insert_text(self, index: int, text: str) -> None:
        self.text_area.insert(text, self.index_to_location(index))

    def set_selection(self, index: int, length: int = 0) -> None:
        start = self.index_to_location(index)
        end = self.index_to_location(index + length)
        self.text_area.selection = Selection(start, end)

    def focus(self) -> None:
        if not self.text_area.is_mounted:
            logger.debug("TextArea is not mounted; cannot focus it")
            return
        self.text_area.focus()
