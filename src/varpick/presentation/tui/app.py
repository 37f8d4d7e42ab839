"""
VariablePickerApp - demo Textual application hosting a TextArea and a picker.
"""

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.errors import NoWidget
from textual.widgets import Footer, Header, Static, TextArea

from varpick.application.config import PickerConfig
from varpick.domain.events import EventBus
from varpick.infrastructure.pointer import PointerEvents
from varpick.logger import get_logger
from varpick.presentation.widgets import VariablePickerWidget

logger = get_logger("varpick_tui")


class VariablePickerApp(App):
    """
    Editor with a variable picker toolbar.

    Layout:
    ┌──────────────────────────────┐
    │            Header            │
    ├──────────────────────────────┤
    │ [{ } Variables ▾]            │
    │  (dropdown menu)             │
    ├──────────────────────────────┤
    │          TextArea            │
    ├──────────────────────────────┤
    │ Status line                  │
    │            Footer            │
    └──────────────────────────────┘
    """

    TITLE = "varpick"
    SUB_TITLE = "Insert template variables"

    CSS = """
    #toolbar {
        height: auto;
    }

    #editor {
        height: 1fr;
    }

    #status {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+t", "focus_picker", "Variables", show=True),
        Binding("ctrl+e", "focus_editor", "Editor", show=True),
    ]

    def __init__(
        self,
        config: PickerConfig,
        text: str = "",
        event_bus: EventBus | None = None,
        refocus_editor_on_commit: bool = False,
    ) -> None:
        super().__init__()
        self.config = config
        self.pointer_events = PointerEvents()
        self.event_bus = event_bus or EventBus()
        self.text_area = TextArea(text, id="editor")
        self.picker_widget = VariablePickerWidget(
            self.text_area,
            config,
            pointer_events=self.pointer_events,
            event_bus=self.event_bus,
            refocus_editor_on_commit=refocus_editor_on_commit,
            id="picker",
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="toolbar"):
            yield self.picker_widget
        yield self.text_area
        yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.text_area.focus()
        logger.info(f"Demo app mounted with {len(self.picker_widget.get_available_addresses())} variable(s)")

    async def on_event(self, event: events.Event) -> None:
        # Observe presses before the screen dispatches them; widgets may stop the Click
        if isinstance(event, events.MouseDown) and not event.is_forwarded:
            self.pointer_events.notify(self._widget_at(event.screen_x, event.screen_y))
        await super().on_event(event)

    def _widget_at(self, x: int, y: int) -> object:
        try:
            widget, _ = self.screen.get_widget_at(x, y)
        except NoWidget:
            return self.screen
        return widget

    def on_variable_picker_widget_inserted(self, message: VariablePickerWidget.Inserted) -> None:
        self.query_one("#status", Static).update(f"Inserted {message.address} at {message.cursor}")

    def action_focus_picker(self) -> None:
        self.picker_widget.trigger.focus()

    def action_focus_editor(self) -> None:
        self.text_area.focus()
