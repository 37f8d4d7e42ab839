"""
Insertion planning: compute the final text and caret for a token and write it
into the host buffer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from varpick.domain.protocols import TextBuffer
from varpick.domain.types import SelectionContext
from varpick.logger import get_logger

logger = get_logger("planner")

# ASCII word characters, matching the class used by browser-side editors
_LEADING_SPACE_TRIGGER = re.compile(r"\w|\}", re.ASCII)
_TRAILING_SPACE_TRIGGER = re.compile(r"\w|\{", re.ASCII)


@dataclass(frozen=True, slots=True)
class InsertionPlan:
    """Result of planning an insertion."""

    text: str
    cursor: int


def needs_leading_space(preceding_char: str) -> bool:
    return bool(preceding_char) and _LEADING_SPACE_TRIGGER.search(preceding_char) is not None


def needs_trailing_space(following_char: str) -> bool:
    return bool(following_char) and _TRAILING_SPACE_TRIGGER.search(following_char) is not None


def plan_insertion(index: int, token_text: str, preceding_char: str, following_char: str) -> InsertionPlan:
    """
    Add smart spacing around ``token_text`` so it does not glue to its neighbours.

    A space is prepended after a word character or ``}`` and appended before a
    word character or ``{``.

    Args:
        index: Buffer index the text will be inserted at
        token_text: Formatted token
        preceding_char: Character before ``index`` ("" at the start of the buffer)
        following_char: Character at ``index`` after the selection was removed

    Returns:
        InsertionPlan with the final text and the caret index after it
    """
    text = token_text
    if needs_leading_space(preceding_char):
        text = " " + text
    if needs_trailing_space(following_char):
        text = text + " "
    return InsertionPlan(text=text, cursor=index + len(text))


class InsertionPlanner:
    """Applies insertion plans to a ``TextBuffer``."""

    def __init__(self, buffer: TextBuffer) -> None:
        self._buffer = buffer

    def current_selection(self) -> SelectionContext | None:
        """Return the buffer selection, focusing the buffer once if none is active."""
        selection = self._buffer.get_selection()
        if selection is not None:
            return selection

        logger.debug("No active selection; focusing buffer and retrying once")
        self._buffer.focus()
        return self._buffer.get_selection()

    def insert(self, token_text: str) -> InsertionPlan | None:
        """
        Replace the current selection with ``token_text`` (plus smart spacing).

        Returns:
            The applied plan, or None when the buffer has no selection even after
            focusing it; nothing is mutated in that case.
        """
        selection = self.current_selection()
        if selection is None:
            logger.warning(f"Skipping insertion of {token_text!r}: buffer has no active selection")
            return None

        index = selection.index
        if selection.length:
            self._buffer.delete_text(index, selection.length)

        preceding = self._buffer.get_text(index - 1, 1) if index > 0 else ""
        following = self._buffer.get_text(index, 1)
        plan = plan_insertion(index, token_text, preceding, following)

        self._buffer.insert_text(index, plan.text)
        self._buffer.set_selection(plan.cursor, 0)
        logger.debug(f"Inserted {plan.text!r} at {index}; cursor -> {plan.cursor}")
        return plan
