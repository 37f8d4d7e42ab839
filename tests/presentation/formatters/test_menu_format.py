from varpick.domain.types import AddressableItem, ItemGroup
from varpick.presentation.formatters import format_item_text, format_section_title, format_trigger_text, item_tooltip


def test_trigger_text_shows_caret_state():
    closed = format_trigger_text("{ }", "Variables")
    opened = format_trigger_text("{ }", "Variables", expanded=True)

    assert closed.plain == "{ } Variables ▾"
    assert opened.plain == "{ } Variables ▴"


def test_trigger_text_without_icon():
    assert format_trigger_text("", "Insert").plain == "Insert ▾"


def test_item_text_includes_title_and_token():
    item = AddressableItem("user.first_name", "First Name", group=ItemGroup("user", "User"))

    text = format_item_text(item, "{{user.first_name}}")

    assert text.plain == "First Name  {{user.first_name}}"
    assert text.no_wrap


def test_item_text_puts_description_on_second_line():
    item = AddressableItem("today", "Today", description="Current date")

    text = format_item_text(item, "{{today}}")

    assert text.plain.split("\n") == ["Today  {{today}}", "Current date"]


def test_section_title_and_tooltip():
    assert format_section_title("User").plain == "User"
    assert item_tooltip(AddressableItem("today", "Today")) == "Today"
    assert item_tooltip(AddressableItem("today", "Today", "Current date")) == "Current date"
