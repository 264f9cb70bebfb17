"""Tests for the premade widgets."""

import pytest

from teaterm.core.input import Key, KeyPress
from teaterm.model import Event, Exit, FocusCommand
from teaterm.widgets import Button, Selector, Spinner, TextField, Toggle, ToggleStyle


def press(model, *keys):
    """Feed keys through update(), returning the final model and last command."""
    command = None
    for key in keys:
        if isinstance(key, str):
            key = KeyPress.of(key) if key != " " else KeyPress(Key.SPACE)
        model, command = model.update(key)
    return model, command


class TestButton:
    """Tests for Button."""

    @pytest.mark.parametrize("key", [Key.RETURN, Key.SPACE])
    def test_press_returns_command(self, key: Key) -> None:
        button = Button("OK", Exit())
        new, command = button.update(KeyPress(key))
        assert command == Exit()
        assert new is button

    def test_other_keys_do_nothing(self) -> None:
        assert Button("OK", Exit()).update(KeyPress.of("a"))[1] is None

    def test_focused_body_is_inverted(self) -> None:
        assert Button("OK").body() == "[OK]"
        assert Button("OK", is_focused=True).body() == "\x1b[7m[OK]\x1b[0m"


class TestToggle:
    """Tests for Toggle."""

    def test_flips_without_mutating(self) -> None:
        toggle = Toggle()
        new, command = toggle.update(KeyPress(Key.SPACE))
        assert new.checked is True
        assert toggle.checked is False
        assert command is None

    def test_checkbox_body(self) -> None:
        assert Toggle(checked=True).body() == "[■]"
        assert Toggle().body() == "[ ]"

    def test_switch_body_colors(self) -> None:
        assert "\x1b[32m•" in Toggle(style=ToggleStyle.SWITCH, checked=True).body()
        assert "\x1b[31m•" in Toggle(style=ToggleStyle.SWITCH).body()


class TestTextField:
    """Tests for TextField."""

    def test_typing(self) -> None:
        field, _ = press(TextField("Name"), "h", "i", " ", "!")
        assert field.value == "hi !"

    def test_max_chars(self) -> None:
        field, _ = press(TextField("Code", max_chars=3), "a", "b", "c", "d", " ")
        assert field.value == "abc"

    def test_delete(self, capsys) -> None:
        field, _ = press(TextField("Name", value="ab"), KeyPress(Key.DELETE))
        assert field.value == "a"
        field, _ = press(TextField("Name"), KeyPress(Key.DELETE))
        assert field.value == ""
        assert capsys.readouterr().out == "\x07"

    def test_return_requests_next_focus(self) -> None:
        _, command = press(TextField("Name"), KeyPress(Key.RETURN))
        assert command is FocusCommand.NEXT

    def test_placeholder_when_empty(self) -> None:
        assert TextField("Name", placeholder="you").body() == "Name: \x1b[90myou\x1b[0m"


class TestSpinner:
    """Tests for Spinner."""

    def test_steps_and_clamps(self) -> None:
        spinner, _ = press(Spinner(value=9, step=2, maximum=10), KeyPress(Key.RIGHT))
        assert spinner.value == 10
        spinner, _ = press(Spinner(value=1, step=5), KeyPress(Key.LEFT))
        assert spinner.value == 0

    def test_initial_value_is_clamped(self) -> None:
        assert Spinner(value=500, maximum=100).value == 100

    def test_typed_digits_replace_then_append(self) -> None:
        spinner, _ = press(Spinner(value=42), "7", "5")
        assert spinner.value == 75
        spinner, _ = press(spinner, KeyPress(Key.UP), "3")
        assert spinner.value == 3

    def test_typed_value_is_clamped(self) -> None:
        spinner, _ = press(Spinner(maximum=50), "9", "9")
        assert spinner.value == 50

    def test_delete_resets_to_initial(self) -> None:
        spinner, _ = press(Spinner(value=12), KeyPress(Key.RIGHT), KeyPress(Key.RIGHT),
                           KeyPress(Key.DELETE))
        assert spinner.value == 12

    def test_focus_change_stops_typing(self) -> None:
        spinner, _ = press(Spinner(), "4")
        spinner.set_focus(True)
        spinner, _ = press(spinner, "2")
        assert spinner.value == 2

    def test_other_events_stop_typing(self) -> None:
        spinner, _ = press(Spinner(), "4", Event(), "2")
        assert spinner.value == 2
        assert spinner.typing

    def test_invalid_range(self) -> None:
        with pytest.raises(ValueError):
            Spinner(minimum=5, maximum=1)


class TestSelector:
    """Tests for Selector."""

    def test_moves_within_bounds(self, capsys) -> None:
        selector = Selector(["a", "b", "c"])
        selector, _ = press(selector, KeyPress(Key.RIGHT), KeyPress(Key.RIGHT),
                            KeyPress(Key.RIGHT))
        assert selector.selected == "c"
        assert capsys.readouterr().out == "\x07"
        selector, _ = press(selector, KeyPress(Key.DELETE))
        assert selector.selected == "a"

    def test_body_counter(self) -> None:
        assert Selector(["a", "b"], selection_index=1).body() == "⯇ b ⯈ [2/2]"

    def test_needs_options(self) -> None:
        with pytest.raises(ValueError):
            Selector([])
