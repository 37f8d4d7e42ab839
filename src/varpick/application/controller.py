"""
MenuController - open/closed state machine with keyboard focus for the picker menu.

States:
    CLOSED (initial) and OPEN. There is no terminal state; ``destroy()`` only
    releases the view and makes every later input a no-op.

All methods run to completion synchronously. Input that does not apply to the
current state (a menu key while closed, a commit on a stale index, ...) is
ignored rather than raised.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from varpick.application.flattener import menu_order
from varpick.domain.protocols import MenuView
from varpick.domain.types import AddressableItem, CloseReason, MenuKey, MenuSection, MenuState
from varpick.logger import get_logger

logger = get_logger("menu_controller")

CommitCallback = Callable[[str], None]
StateCallback = Callable[[MenuState, Optional[CloseReason]], None]

_TRIGGER_OPEN_KEYS = frozenset({MenuKey.ENTER.value, MenuKey.SPACE.value, MenuKey.DOWN.value})
_ACTIVATE_KEYS = frozenset({MenuKey.ENTER.value, MenuKey.SPACE.value})


class MenuController:
    """Keyboard/pointer state machine over the items of the current catalog.

    Args:
        sections: Menu sections for the initial catalog
        on_commit: Called with the address of a committed item, before the menu closes
        view: Optional view mirroring state and focus
        on_state_change: Optional observer called after every transition
    """

    def __init__(
        self,
        sections: Sequence[MenuSection],
        on_commit: CommitCallback,
        view: MenuView | None = None,
        on_state_change: StateCallback | None = None,
    ) -> None:
        self._on_commit = on_commit
        self._on_state_change = on_state_change
        self._view: MenuView | None = view
        self._sections: list[MenuSection] = list(sections)
        self._items: list[AddressableItem] = menu_order(self._sections)
        self._state = MenuState.CLOSED
        self._focus_index: int | None = None
        self._destroyed = False

        if self._view is not None:
            self._view.render_sections(self._sections)
            self._view.set_expanded(False)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is MenuState.OPEN

    @property
    def focus_index(self) -> int | None:
        """Index of the focused item in menu order, or None."""
        return self._focus_index

    @property
    def focused_item(self) -> AddressableItem | None:
        if self._focus_index is None:
            return None
        return self._items[self._focus_index]

    @property
    def items(self) -> list[AddressableItem]:
        """Items in menu (navigation) order."""
        return list(self._items)

    @property
    def sections(self) -> list[MenuSection]:
        return list(self._sections)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def attach_view(self, view: MenuView) -> None:
        """Attach a view after construction and bring it up to date."""
        if self._destroyed:
            return
        self._view = view
        view.render_sections(self._sections)
        view.set_expanded(self.is_open)
        if self._focus_index is not None:
            view.focus_item(self._focus_index)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open(self) -> None:
        """CLOSED -> OPEN; focus moves to the first item if there is one."""
        if self._destroyed or self.is_open:
            return
        self._state = MenuState.OPEN
        self._focus_index = None
        if self._view is not None:
            self._view.set_expanded(True)
        logger.debug(f"Menu opened with {len(self._items)} item(s)")
        if self._items:
            self._move_focus(0)
        self._notify(None)

    def close(self, reason: CloseReason = CloseReason.ESCAPE) -> None:
        """OPEN -> CLOSED; focus returns to the trigger. No-op when already closed."""
        if self._destroyed or not self.is_open:
            return
        self._state = MenuState.CLOSED
        self._focus_index = None
        if self._view is not None:
            self._view.set_expanded(False)
            self._view.focus_trigger()
        logger.debug(f"Menu closed ({reason.value})")
        self._notify(reason)

    def activate_trigger(self) -> None:
        """Pointer activation of the trigger toggles the menu."""
        if self.is_open:
            self.close(CloseReason.TRIGGER)
        else:
            self.open()

    def handle_trigger_key(self, key: str) -> bool:
        """
        Handle a key pressed while the trigger has focus.

        Returns:
            True if the key was consumed (the caller should stop the event)
        """
        if self._destroyed or key not in _TRIGGER_OPEN_KEYS:
            return False
        self.open()
        return True

    def handle_menu_key(self, key: str) -> bool:
        """
        Handle a key pressed while focus is inside the open menu.

        Returns:
            True if the key was consumed (the caller should stop the event)
        """
        if self._destroyed or not self.is_open:
            return False

        if key == MenuKey.ESCAPE:
            self.close(CloseReason.ESCAPE)
            return True
        if key in _ACTIVATE_KEYS:
            self.commit()
            return True

        count = len(self._items)
        current = self._focus_index

        if key == MenuKey.DOWN:
            if count:
                self._move_focus(0 if current is None else (current + 1) % count)
            return True
        if key == MenuKey.UP:
            if count:
                self._move_focus(count - 1 if current is None else (current - 1) % count)
            return True
        if key == MenuKey.HOME:
            if count:
                self._move_focus(0)
            return True
        if key == MenuKey.END:
            if count:
                self._move_focus(count - 1)
            return True
        return False

    def handle_outside_pointer(self) -> None:
        """Pointer activation outside both the trigger and the menu surface."""
        self.close(CloseReason.OUTSIDE_POINTER)

    def focus(self, index: int) -> None:
        """Focus an item directly (e.g. on hover). Out-of-range indices are ignored."""
        if self._destroyed or not self.is_open or not 0 <= index < len(self._items):
            return
        self._move_focus(index)

    def commit(self, index: int | None = None) -> None:
        """
        Commit the focused item (or the item at ``index``) and close the menu.

        The commit callback runs before the close, so the trigger regains
        focus after the buffer has been updated.
        """
        if self._destroyed or not self.is_open:
            return
        target = self._focus_index if index is None else index
        if target is None or not 0 <= target < len(self._items):
            logger.debug(f"Ignoring commit on stale index {target}")
            return

        address = self._items[target].address
        logger.info(f"Committing {address}")
        self._on_commit(address)
        self.close(CloseReason.COMMIT)

    def replace_items(self, sections: Sequence[MenuSection]) -> None:
        """
        Install the sections of a replaced catalog.

        Focus indices refer to the old list, so an open menu is forced closed
        before the view is rebuilt.
        """
        if self._destroyed:
            return
        self.close(CloseReason.CATALOG_REPLACED)
        self._sections = list(sections)
        self._items = menu_order(self._sections)
        self._focus_index = None
        if self._view is not None:
            self._view.render_sections(self._sections)
        logger.debug(f"Menu items replaced ({len(self._items)} item(s))")

    def destroy(self) -> None:
        """Release the view. Safe to call more than once."""
        if self._destroyed:
            return
        if self.is_open:
            self._state = MenuState.CLOSED
            self._focus_index = None
            self._notify(CloseReason.DESTROYED)
        self._destroyed = True
        self._view = None
        self._on_state_change = None
        logger.debug("Menu controller destroyed")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _move_focus(self, index: int) -> None:
        self._focus_index = index
        if self._view is not None:
            self._view.focus_item(index)

    def _notify(self, reason: CloseReason | None) -> None:
        if self._on_state_change is not None:
            self._on_state_change(self._state, reason)
