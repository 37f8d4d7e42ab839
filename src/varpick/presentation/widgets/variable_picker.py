"""
VariablePickerWidget - toolbar-style trigger plus a dropdown menu that inserts
variable tokens into a Textual ``TextArea``.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.geometry import Region
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static, TextArea

from varpick.application.config import PickerConfig
from varpick.application.picker import VariablePicker
from varpick.domain.events import EventBus, VariableInserted
from varpick.domain.exceptions import ConfigurationError
from varpick.domain.types import AddressableItem, MenuSection
from varpick.infrastructure.pointer import PointerEvents
from varpick.infrastructure.text_area import TextAreaBuffer
from varpick.logger import get_logger
from varpick.presentation.formatters import (
    format_item_text,
    format_section_title,
    format_trigger_text,
    item_tooltip,
)

logger = get_logger("variable_picker_widget")


class PickerTrigger(Static):
    """Focusable label that opens the menu."""

    can_focus = True

    DEFAULT_CSS = """
    PickerTrigger {
        width: auto;
        height: 1;
        padding: 0 1;
        background: $panel;
    }

    PickerTrigger:focus {
        background: $accent;
    }
    """

    def __init__(self, picker_widget: "VariablePickerWidget", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._picker_widget = picker_widget

    def on_click(self, event: events.Click) -> None:
        self._picker_widget.picker.controller.activate_trigger()

    def on_key(self, event: events.Key) -> None:
        if self._picker_widget.picker.controller.handle_trigger_key(event.key):
            event.stop()
            event.prevent_default()


class MenuList(Widget):
    """Renders every section of the menu and highlights the focused entry.

    Keeps a line -> item index map so pointer activation can be resolved to
    an item without one widget per entry.
    """

    can_focus = True

    DEFAULT_CSS = """
    MenuList {
        height: auto;
        width: 100%;
    }
    """

    highlighted: reactive[int | None] = reactive(None)

    def __init__(self, picker_widget: "VariablePickerWidget", token_for: Callable[[str], str], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._picker_widget = picker_widget
        self._token_for = token_for
        self._sections: list[MenuSection] = []
        self._line_items: list[int | None] = []
        self._item_spans: list[tuple[int, int]] = []

    def set_sections(self, sections: Sequence[MenuSection]) -> None:
        self._sections = list(sections)
        self._line_items, self._item_spans = self._layout(self._sections)
        self.highlighted = None
        self.refresh(layout=True)

    @staticmethod
    def _layout(sections: Sequence[MenuSection]) -> tuple[list[int | None], list[tuple[int, int]]]:
        """Map rendered lines to item indices and items to (first line, height)."""
        line_items: list[int | None] = []
        item_spans: list[tuple[int, int]] = []
        index = 0
        for position, section in enumerate(sections):
            if position:
                line_items.append(None)  # divider
            if section.title:
                line_items.append(None)
            for item in section.items:
                height = 2 if item.description else 1
                item_spans.append((len(line_items), height))
                line_items.extend([index] * height)
                index += 1
        return line_items, item_spans

    def item_at_line(self, line: int) -> int | None:
        if 0 <= line < len(self._line_items):
            return self._line_items[line]
        return None

    def get_content_height(self, container, viewport, width: int) -> int:
        return max(1, len(self._line_items))

    def render(self) -> Text:
        if not self._sections:
            return Text("No variables available", style="dim italic")

        width = max(1, self.size.width)
        lines: list[Text] = []
        index = 0
        for position, section in enumerate(self._sections):
            if position:
                lines.append(Text("─" * width, style="dim"))
            if section.title:
                lines.append(format_section_title(section.title))
            for item in section.items:
                entry = format_item_text(item, self._token_for(item.address))
                if index == self.highlighted:
                    entry.stylize("reverse")
                lines.append(entry)
                index += 1
        return Text("\n", no_wrap=True, overflow="ellipsis").join(lines)

    def watch_highlighted(self, highlighted: int | None) -> None:
        if highlighted is None or highlighted >= len(self._item_spans):
            return
        start, height = self._item_spans[highlighted]
        if isinstance(self.parent, VerticalScroll):
            self.parent.scroll_to_region(Region(0, start, 1, height), animate=False)

    def on_key(self, event: events.Key) -> None:
        if self._picker_widget.picker.controller.handle_menu_key(event.key):
            event.stop()
            event.prevent_default()

    def on_click(self, event: events.Click) -> None:
        index = self.item_at_line(event.y)
        if index is None:
            return
        self._picker_widget.picker.controller.commit(index)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        index = self.item_at_line(event.y)
        if index is None:
            self.tooltip = None
            return
        self.tooltip = item_tooltip(self._picker_widget.picker.controller.items[index])
        if index != self.highlighted:
            self._picker_widget.picker.controller.focus(index)


class VariablePickerWidget(Vertical):
    """Variable picker bound to a ``TextArea``.

    Args:
        text_area: The editor tokens are inserted into (required)
        config: Picker options
        pointer_events: Application-wide pointer observer; when given, clicks
            outside the picker close the menu
        event_bus: Optional EventBus shared with the host
        refocus_editor_on_commit: Return focus to the editor instead of the
            trigger after an item is committed

    Raises:
        ConfigurationError: If ``text_area`` is missing
    """

    class Inserted(Message):
        """Posted after a variable token has been inserted."""

        def __init__(self, address: str, text: str, cursor: int) -> None:
            super().__init__()
            self.address = address
            self.text = text
            self.cursor = cursor

    DEFAULT_CSS = """
    VariablePickerWidget {
        width: auto;
        height: auto;
    }

    VariablePickerWidget #variable-picker-menu {
        width: 48;
        height: auto;
        max-height: 14;
        border: round $primary;
        background: $surface;
    }
    """

    def __init__(
        self,
        text_area: TextArea,
        config: PickerConfig | None = None,
        pointer_events: PointerEvents | None = None,
        event_bus: EventBus | None = None,
        refocus_editor_on_commit: bool = False,
        **kwargs: Any,
    ) -> None:
        if text_area is None:
            raise ConfigurationError("VariablePickerWidget requires a TextArea to insert into.")
        super().__init__(**kwargs)
        self.text_area = text_area
        self.refocus_editor_on_commit = refocus_editor_on_commit
        self._refocus_editor = False
        self._torn_down = False

        self.picker = VariablePicker(
            TextAreaBuffer(text_area),
            config,
            pointer_source=pointer_events,
            event_bus=event_bus,
            contains=self.owns_target,
        )
        self.picker.event_bus.subscribe(VariableInserted, self._on_variable_inserted)

        self._trigger = PickerTrigger(self, id="variable-picker-trigger")
        self._menu_list = MenuList(self, self.picker.token_for, id="variable-picker-list")
        self._menu = VerticalScroll(self._menu_list, id="variable-picker-menu")
        self._menu.display = False

    def compose(self) -> ComposeResult:
        yield self._trigger
        yield self._menu

    def on_mount(self) -> None:
        self._trigger.update(format_trigger_text(self.picker.config.icon, self.picker.config.placeholder))
        self._trigger.tooltip = self.picker.config.placeholder
        self.picker.controller.attach_view(self)
        logger.debug("VariablePickerWidget mounted")

    def on_unmount(self) -> None:
        self.picker.destroy()

    # ------------------------------------------------------------------
    # Public API (delegates to the core picker)
    # ------------------------------------------------------------------

    def insert(self, address: str):
        return self.picker.insert(address)

    def get_available_addresses(self) -> list[str]:
        return self.picker.get_available_addresses()

    def update_catalog(self, catalog: Any) -> None:
        self.picker.update_catalog(catalog)

    def destroy(self) -> None:
        """Release listeners and remove the widget. Safe to call twice."""
        self.picker.destroy()
        if self._torn_down:
            return
        self._torn_down = True
        if self.is_mounted:
            self.remove()

    @property
    def menu_list(self) -> MenuList:
        return self._menu_list

    @property
    def trigger(self) -> PickerTrigger:
        return self._trigger

    def owns_target(self, target: object) -> bool:
        """True when ``target`` is this widget or one of its descendants."""
        node = target
        while node is not None:
            if node is self:
                return True
            node = getattr(node, "parent", None)
        return False

    # ------------------------------------------------------------------
    # MenuView protocol
    # ------------------------------------------------------------------

    def render_sections(self, sections: Sequence[MenuSection]) -> None:
        self._menu_list.set_sections(sections)

    def set_expanded(self, expanded: bool) -> None:
        self._menu.display = expanded
        if self.is_mounted:
            self._trigger.update(
                format_trigger_text(self.picker.config.icon, self.picker.config.placeholder, expanded)
            )

    def focus_item(self, index: int) -> None:
        self._menu_list.highlighted = index
        self._menu_list.focus()

    def focus_trigger(self) -> None:
        self._menu_list.highlighted = None
        if self._refocus_editor:
            self._refocus_editor = False
            self.text_area.focus()
            return
        self._trigger.focus()

    def _on_variable_inserted(self, event: VariableInserted) -> None:
        # Only menu commits hand focus back to the editor; the menu closes right after
        self._refocus_editor = self.refocus_editor_on_commit and self.picker.controller.is_open
        self.post_message(self.Inserted(event.address, event.text, event.cursor))

    @property
    def focused_item(self) -> AddressableItem | None:
        return self.picker.controller.focused_item
