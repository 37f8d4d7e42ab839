"""Protocols for the collaborators the picker consumes but does not implement.

Using protocols keeps the core independent of any particular editor widget:
tests drive it with plain in-memory fakes, the Textual layer adapts a
``TextArea``.
"""

from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from varpick.domain.types import MenuSection, SelectionContext

__all__ = ["TextBuffer", "MenuView", "PointerSource", "Subscription", "PointerCallback"]

PointerCallback = Callable[[object], None]


@runtime_checkable
class TextBuffer(Protocol):
    """Host text-editing surface.

    All mutations are committed immediately; there is no transaction or
    rollback.
    """

    def get_selection(self) -> Optional[SelectionContext]:
        """Return the current caret/selection, or None if the buffer has no active selection."""
        ...

    def get_text(self, index: int, length: int) -> str:
        """Return ``length`` characters starting at ``index`` (shorter at the end of the buffer)."""
        ...

    def delete_text(self, index: int, length: int) -> None: ...

    def insert_text(self, index: int, text: str) -> None: ...

    def set_selection(self, index: int, length: int = 0) -> None: ...

    def focus(self) -> None:
        """Request input focus on the buffer."""
        ...


class MenuView(Protocol):
    """Presentation side of the menu controller.

    The controller owns state; the view only mirrors it.
    """

    def render_sections(self, sections: Sequence[MenuSection]) -> None:
        """Rebuild the menu contents from scratch."""
        ...

    def set_expanded(self, expanded: bool) -> None: ...

    def focus_item(self, index: int) -> None:
        """Give focus to the item at ``index`` in menu order."""
        ...

    def focus_trigger(self) -> None: ...


class Subscription(Protocol):
    """Handle returned by a pointer source; cancelling twice is allowed."""

    def cancel(self) -> None: ...


class PointerSource(Protocol):
    """Global pointer-activation observer exposed by the host environment."""

    def subscribe(self, callback: PointerCallback) -> Subscription:
        """Call ``callback(target)`` for every pointer activation until cancelled."""
        ...
