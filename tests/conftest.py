"""Shared fixtures and fakes for varpick tests."""

from typing import Any, Optional, Sequence

import pytest

from varpick.domain.catalog import parse_catalog
from varpick.domain.types import MenuSection, SelectionContext


class FakeBuffer:
    """In-memory TextBuffer that records every call."""

    def __init__(
        self,
        text: str = "",
        selection: Optional[SelectionContext] = None,
        selection_after_focus: Optional[SelectionContext] = None,
    ):
        self.text = text
        self.selection = selection
        self.selection_after_focus = selection_after_focus
        self.calls: list[tuple[Any, ...]] = []
        self.focus_count = 0

    def get_selection(self) -> Optional[SelectionContext]:
        self.calls.append(("get_selection",))
        return self.selection

    def get_text(self, index: int, length: int) -> str:
        self.calls.append(("get_text", index, length))
        return self.text[index : index + length]

    def delete_text(self, index: int, length: int) -> None:
        self.calls.append(("delete_text", index, length))
        self.text = self.text[:index] + self.text[index + length :]

    def insert_text(self, index: int, text: str) -> None:
        self.calls.append(("insert_text", index, text))
        self.text = self.text[:index] + text + self.text[index:]

    def set_selection(self, index: int, length: int = 0) -> None:
        self.calls.append(("set_selection", index, length))
        self.selection = SelectionContext(index, length)

    def focus(self) -> None:
        self.calls.append(("focus",))
        self.focus_count += 1
        if self.selection is None and self.selection_after_focus is not None:
            self.selection = self.selection_after_focus

    def mutations(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] in ("delete_text", "insert_text", "set_selection")]


class RecordingView:
    """MenuView that records what the controller asked it to show."""

    def __init__(self):
        self.rendered: list[list[MenuSection]] = []
        self.expanded = False
        self.focused_item: Optional[int] = None
        self.trigger_focused = False
        self.events: list[tuple[Any, ...]] = []

    def render_sections(self, sections: Sequence[MenuSection]) -> None:
        self.rendered.append(list(sections))
        self.events.append(("render", len(sections)))

    def set_expanded(self, expanded: bool) -> None:
        self.expanded = expanded
        self.events.append(("expanded", expanded))

    def focus_item(self, index: int) -> None:
        self.focused_item = index
        self.trigger_focused = False
        self.events.append(("focus_item", index))

    def focus_trigger(self) -> None:
        self.focused_item = None
        self.trigger_focused = True
        self.events.append(("focus_trigger",))


class FakePointerSource:
    """PointerSource double that counts live subscriptions."""

    def __init__(self):
        self.callbacks: list = []

    def subscribe(self, callback):
        self.callbacks.append(callback)
        source = self

        class _Subscription:
            cancelled = 0

            def cancel(self_inner):
                self_inner.cancelled += 1
                if callback in source.callbacks:
                    source.callbacks.remove(callback)

        return _Subscription()

    def click(self, target: object) -> None:
        for callback in list(self.callbacks):
            callback(target)


USER_CATALOG = {
    "user": {"title": "User", "children": {"first_name": {"title": "First Name"}}},
}

MIXED_CATALOG = {
    "company": {
        "title": "Company",
        "children": {
            "name": {"title": "Company Name"},
            "address": {
                "title": "Address",
                "children": {
                    "street": {"title": "Street"},
                    "city": {"title": "City", "description": "Town or city"},
                },
            },
            "phone": {"title": "Phone"},
        },
    },
    "today": {"title": "Today", "description": "Current date"},
    "user": {
        "title": "User",
        "children": {
            "first_name": {"title": "First Name"},
            "last_name": {"title": "Last Name"},
        },
    },
}


@pytest.fixture
def user_catalog():
    return parse_catalog(USER_CATALOG)


@pytest.fixture
def mixed_catalog():
    return parse_catalog(MIXED_CATALOG)


@pytest.fixture
def recording_view():
    return RecordingView()


@pytest.fixture
def pointer_source():
    return FakePointerSource()


@pytest.fixture
def make_buffer():
    """Factory for in-memory text buffers."""
    return FakeBuffer


@pytest.fixture
def user_catalog_data():
    return USER_CATALOG


@pytest.fixture
def mixed_catalog_data():
    return MIXED_CATALOG
