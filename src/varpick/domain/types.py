"""Value types shared by the flattener, planner and menu controller."""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ADDRESS_SEPARATOR",
    "ItemGroup",
    "AddressableItem",
    "MenuSection",
    "SelectionContext",
    "MenuState",
    "MenuKey",
    "CloseReason",
]

ADDRESS_SEPARATOR = "."


@dataclass(frozen=True, slots=True)
class ItemGroup:
    """Nearest enclosing internal node of an item, used for menu layout."""

    address: str
    title: str


@dataclass(frozen=True, slots=True)
class AddressableItem:
    """A selectable catalog entry produced by the flattener.

    Attributes:
        address: Dot-joined key path (e.g. ``"user.first_name"``)
        title: Display title (falls back to the node key when empty)
        description: Optional longer description
        group: Enclosing internal node, or None for top-level entries
    """

    address: str
    title: str
    description: str | None = None
    group: ItemGroup | None = None


@dataclass(frozen=True, slots=True)
class MenuSection:
    """A run of items rendered under one heading."""

    title: str | None
    items: tuple[AddressableItem, ...]
    group: ItemGroup | None = None


@dataclass(frozen=True, slots=True)
class SelectionContext:
    """Caret or selection range in the host buffer."""

    index: int
    length: int = 0


class MenuState(Enum):
    """Open/closed state of the picker menu."""

    CLOSED = "closed"
    OPEN = "open"


class MenuKey(str, Enum):
    """Textual key identifiers the menu controller reacts to."""

    DOWN = "down"
    UP = "up"
    HOME = "home"
    END = "end"
    ESCAPE = "escape"
    ENTER = "enter"
    SPACE = "space"


class CloseReason(str, Enum):
    """Why the menu left the OPEN state."""

    ESCAPE = "escape"
    OUTSIDE_POINTER = "outside_pointer"
    TRIGGER = "trigger"
    COMMIT = "commit"
    CATALOG_REPLACED = "catalog_replaced"
    DESTROYED = "destroyed"
