"""Event system for the variable picker."""

from .bus import EventBus, EventHandler
from .types import CatalogReplaced, Event, MenuClosed, MenuOpened, VariableInserted

__all__ = [
    "EventBus",
    "EventHandler",
    "Event",
    "MenuOpened",
    "MenuClosed",
    "VariableInserted",
    "CatalogReplaced",
]
