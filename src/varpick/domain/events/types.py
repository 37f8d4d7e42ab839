"""Event types published by the variable picker.

Subscribers (UI layers, tests, host applications) learn about menu
transitions and insertions without holding a reference to the controller.
"""

import time
from dataclasses import dataclass, field

from varpick.domain.types import CloseReason


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class MenuOpened(Event):
    """Published when the menu goes from CLOSED to OPEN."""

    item_count: int
    """Number of selectable items at the time of opening."""


@dataclass
class MenuClosed(Event):
    """Published when the menu goes from OPEN to CLOSED."""

    reason: CloseReason
    """What caused the transition."""


@dataclass
class VariableInserted(Event):
    """Published after a token has been written into the buffer.

    Attributes:
        address: Address that was committed
        text: Final inserted text, including smart spacing
        cursor: Caret index after insertion
    """

    address: str
    text: str
    cursor: int


@dataclass
class CatalogReplaced(Event):
    """Published after ``update_catalog`` swapped the catalog wholesale."""

    item_count: int
    """Number of items produced by the new catalog."""
