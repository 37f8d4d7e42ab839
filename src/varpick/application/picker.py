"""
VariablePicker - ties the flattener, formatter, planner and menu controller
together behind the public operations a host application uses.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from varpick.application.config import PickerConfig
from varpick.application.controller import MenuController
from varpick.application.flattener import build_sections, flatten
from varpick.application.formatter import format_token
from varpick.application.planner import InsertionPlan, InsertionPlanner
from varpick.domain.catalog import parse_catalog
from varpick.domain.events import CatalogReplaced, EventBus, MenuClosed, MenuOpened, VariableInserted
from varpick.domain.exceptions import ConfigurationError
from varpick.domain.protocols import MenuView, PointerSource, Subscription, TextBuffer
from varpick.domain.types import AddressableItem, CloseReason, MenuSection, MenuState
from varpick.logger import get_logger

logger = get_logger("picker")


class VariablePicker:
    """
    Variable picker bound to one text buffer and one catalog snapshot.

    Construction validates every collaborator before any state is built, so a
    failing constructor never leaves listeners registered behind.

    Args:
        buffer: Host text surface the tokens are written to (required)
        config: Picker options; the catalog inside it is the initial snapshot
        pointer_source: Optional global pointer observer used for
            click-outside detection
        view: Optional menu view (the Textual widget passes itself)
        event_bus: Optional EventBus; a private one is created otherwise
        contains: Predicate telling whether a pointer target belongs to the
            trigger or the menu surface. Without it every observed pointer
            activation counts as outside.

    Raises:
        ConfigurationError: If the buffer is missing or incomplete, or the
            token option is invalid
    """

    def __init__(
        self,
        buffer: TextBuffer,
        config: PickerConfig | None = None,
        pointer_source: PointerSource | None = None,
        view: MenuView | None = None,
        event_bus: EventBus | None = None,
        contains: Optional[Callable[[object], bool]] = None,
    ) -> None:
        if buffer is None:
            raise ConfigurationError("VariablePicker requires a text buffer to insert into.")
        if not isinstance(buffer, TextBuffer):
            raise ConfigurationError(
                f"VariablePicker buffer {type(buffer).__name__} does not implement the TextBuffer protocol."
            )

        self.config = config or PickerConfig()
        self._token_policy = self.config.token_policy()
        self._buffer = buffer
        self._planner = InsertionPlanner(buffer)
        self.event_bus = event_bus or EventBus()
        self._contains = contains

        self._items: list[AddressableItem] = flatten(self.config.catalog, self.config.include_parent_nodes)
        self._sections = build_sections(self._items, self.config.ungrouped_title)
        self.controller = MenuController(
            self._sections,
            on_commit=self._commit_from_menu,
            view=view,
            on_state_change=self._publish_state_change,
        )

        self._pointer_subscription: Subscription | None = None
        if pointer_source is not None:
            self._pointer_subscription = pointer_source.subscribe(self._on_pointer)

        self._destroyed = False
        logger.info(f"VariablePicker ready with {len(self._items)} item(s)")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[AddressableItem]:
        """Items in flatten order."""
        return list(self._items)

    @property
    def sections(self) -> list[MenuSection]:
        return list(self._sections)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def token_for(self, address: str) -> str:
        """Format ``address`` with the configured token policy."""
        return format_token(address, self._token_policy)

    def insert(self, address: str) -> InsertionPlan | None:
        """
        Insert the token for ``address`` at the buffer selection.

        The address is not checked against the catalog, so hosts can insert
        programmatically. Returns None (and changes nothing) when the buffer
        has no selection even after being focused.
        """
        plan = self._planner.insert(self.token_for(address))
        if plan is None:
            return None
        logger.info(f"Inserted variable {address} -> {plan.text!r}")
        self.event_bus.publish(VariableInserted(address=address, text=plan.text, cursor=plan.cursor))
        return plan

    def get_available_addresses(self) -> list[str]:
        """Addresses of the selectable items, in flatten order."""
        return [item.address for item in self._items]

    def update_catalog(self, catalog: Any) -> None:
        """
        Replace the catalog wholesale.

        Any open menu is closed first, since its focus refers to the old items.

        Raises:
            CatalogError: If ``catalog`` is raw data that cannot be validated;
                the previous catalog stays active in that case
        """
        parsed = parse_catalog(catalog)
        self.config = self.config.with_catalog(parsed)
        self._items = flatten(parsed, self.config.include_parent_nodes)
        self._sections = build_sections(self._items, self.config.ungrouped_title)
        self.controller.replace_items(self._sections)
        logger.info(f"Catalog replaced ({len(self._items)} item(s))")
        self.event_bus.publish(CatalogReplaced(item_count=len(self._items)))

    def destroy(self) -> None:
        """Release the pointer subscription and the view. Safe to call twice."""
        if self._pointer_subscription is not None:
            self._pointer_subscription.cancel()
            self._pointer_subscription = None
        self.controller.destroy()
        if not self._destroyed:
            logger.info("VariablePicker destroyed")
        self._destroyed = True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit_from_menu(self, address: str) -> None:
        self.insert(address)

    def _on_pointer(self, target: object) -> None:
        if not self.controller.is_open:
            return
        if self._contains is not None and self._contains(target):
            return
        self.controller.handle_outside_pointer()

    def _publish_state_change(self, state: MenuState, reason: CloseReason | None) -> None:
        if state is MenuState.OPEN:
            self.event_bus.publish(MenuOpened(item_count=len(self.controller.items)))
        else:
            self.event_bus.publish(MenuClosed(reason=reason or CloseReason.ESCAPE))
