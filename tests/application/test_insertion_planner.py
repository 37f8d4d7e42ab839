import pytest

from varpick.application.planner import (
    InsertionPlan,
    InsertionPlanner,
    needs_leading_space,
    needs_trailing_space,
    plan_insertion,
)
from varpick.domain.types import SelectionContext


def test_no_spacing_after_space_and_before_comma(make_buffer):
    buffer = make_buffer("Dear ,", SelectionContext(5))

    plan = InsertionPlanner(buffer).insert("{{user.first_name}}")

    assert buffer.text == "Dear {{user.first_name}},"
    assert plan == InsertionPlan(text="{{user.first_name}}", cursor=5 + len("{{user.first_name}}"))
    assert buffer.selection == SelectionContext(plan.cursor, 0)


def test_leading_space_after_word_character(make_buffer):
    buffer = make_buffer("Hello", SelectionContext(5))

    plan = InsertionPlanner(buffer).insert("{{today}}")

    assert buffer.text == "Hello {{today}}"
    assert plan.cursor == 15


def test_trailing_space_before_word_character(make_buffer):
    buffer = make_buffer("Hi there", SelectionContext(0))

    plan = InsertionPlanner(buffer).insert("{{user.first_name}}")

    assert buffer.text == "{{user.first_name}} Hi there"
    assert plan.cursor == len("{{user.first_name}} ")


def test_adjacent_tokens_are_separated(make_buffer):
    buffer = make_buffer("{{a}}{{b}}", SelectionContext(5))

    InsertionPlanner(buffer).insert("{{c}}")

    assert buffer.text == "{{a}} {{c}} {{b}}"


def test_selection_is_replaced_and_spacing_uses_remaining_neighbours(make_buffer):
    buffer = make_buffer("Hello NAME!", SelectionContext(6, 4))

    plan = InsertionPlanner(buffer).insert("{{user.first_name}}")

    assert buffer.text == "Hello {{user.first_name}}!"
    assert plan.cursor == len("Hello {{user.first_name}}")
    assert buffer.mutations()[0] == ("delete_text", 6, 4)


def test_collapsed_selection_does_not_delete(make_buffer):
    buffer = make_buffer("abc", SelectionContext(3))

    InsertionPlanner(buffer).insert("X")

    assert not any(call[0] == "delete_text" for call in buffer.calls)


def test_start_of_buffer_does_not_read_before_index(make_buffer):
    buffer = make_buffer("", SelectionContext(0))

    plan = InsertionPlanner(buffer).insert("{{today}}")

    assert buffer.text == "{{today}}"
    assert plan.cursor == 9
    assert ("get_text", -1, 1) not in buffer.calls


def test_focus_retry_recovers_selection(make_buffer):
    buffer = make_buffer("Hi ", None, selection_after_focus=SelectionContext(3))

    plan = InsertionPlanner(buffer).insert("{{today}}")

    assert buffer.focus_count == 1
    assert buffer.text == "Hi {{today}}"
    assert plan is not None


def test_no_selection_after_retry_is_a_no_op(make_buffer):
    buffer = make_buffer("untouched")

    plan = InsertionPlanner(buffer).insert("{{today}}")

    assert plan is None
    assert buffer.text == "untouched"
    assert buffer.mutations() == []
    assert buffer.focus_count == 1


@pytest.mark.parametrize("char, expected", [("a", True), ("Z", True), ("7", True), ("_", True), ("}", True), (" ", False), ("", False), (",", False), ("{", False), ("é", False)])
def test_leading_space_triggers(char, expected):
    assert needs_leading_space(char) is expected


@pytest.mark.parametrize("char, expected", [("a", True), ("_", True), ("{", True), ("}", False), ("\n", False), ("", False), (".", False)])
def test_trailing_space_triggers(char, expected):
    assert needs_trailing_space(char) is expected


def test_plan_cursor_is_index_plus_text_length():
    plan = plan_insertion(10, "${x}", "a", "b")

    assert plan.text == " ${x} "
    assert plan.cursor == 10 + len(" ${x} ")
