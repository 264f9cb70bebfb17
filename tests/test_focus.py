"""Tests for focus delegation."""

from dataclasses import dataclass, field, replace
from typing import ClassVar, Optional

import pytest

from teaterm.config import MetamorphosisPolicy, Settings, set_settings
from teaterm.core.input import Key, KeyPress
from teaterm.errors import IllegalMemberError, MetamorphosisViolation
from teaterm.focus import FocusableModel, FocusManager
from teaterm.model import Command, Event, Exit, FocusCommand, Model


@dataclass
class Leaf(FocusableModel):
    """Counts the events it receives; 'x' asks to exit, 'n' asks for next."""
    name: str = ""
    hits: int = 0

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        new = replace(self, hits=self.hits + 1)
        if event == KeyPress.of("x"):
            return new, Exit()
        if event == KeyPress.of("n"):
            return new, FocusCommand.NEXT
        return new, None

    def body(self) -> str:
        return f"{self.name}{'*' if self.is_focused else ''}"


@dataclass
class Plain(Model):
    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        return self, None

    def body(self) -> str:
        return "plain"


@dataclass
class Shapeshifter(FocusableModel):
    """Turns into a Plain model on every update."""

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        return Plain(), Exit()

    def body(self) -> str:
        return "shapeshifter"


@dataclass
class Trio(FocusManager):
    managed_models: ClassVar[tuple[str, ...]] = ("a", "b", "c")

    a: Leaf = field(default_factory=lambda: Leaf("a"))
    b: Leaf = field(default_factory=lambda: Leaf("b"))
    c: Leaf = field(default_factory=lambda: Leaf("c"))

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        new = replace(self)
        return new, new.update_focused(event)

    def body(self) -> str:
        return " ".join(child.body() for child in self.children())

    def children(self) -> list[FocusableModel]:
        return [self.a, self.b, self.c]


@dataclass
class Outer(FocusManager):
    managed_models: ClassVar[tuple[str, ...]] = ("inner", "tail")

    inner: Trio = field(default_factory=Trio)
    tail: Leaf = field(default_factory=lambda: Leaf("tail"))

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        new = replace(self)
        return new, new.update_focused(event)

    def body(self) -> str:
        return f"{self.inner.body()} | {self.tail.body()}"


@dataclass
class Empty(FocusManager):
    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        return self, self.update_focused(event)

    def body(self) -> str:
        return ""


@dataclass
class Morphing(FocusManager):
    managed_models: ClassVar[tuple[str, ...]] = ("child",)

    child: FocusableModel = field(default_factory=Shapeshifter)

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        new = replace(self)
        return new, new.update_focused(event)

    def body(self) -> str:
        return self.child.body()


def focused_names(manager: Trio) -> list[str]:
    return [child.name for child in manager.children() if child.is_focused]


class TestRegistration:
    """Construction-time validation of managed fields."""

    def test_non_focusable_member_is_rejected(self) -> None:
        @dataclass
        class Broken(FocusManager):
            managed_models: ClassVar[tuple[str, ...]] = ("label",)
            label: str = "not a model"

            def update(self, event):
                return self, None

            def body(self):
                return self.label

        with pytest.raises(IllegalMemberError, match="Broken.label"):
            Broken()

    def test_missing_member_is_rejected(self) -> None:
        @dataclass
        class Typo(FocusManager):
            managed_models: ClassVar[tuple[str, ...]] = ("nope",)

            def update(self, event):
                return self, None

            def body(self):
                return ""

        with pytest.raises(IllegalMemberError):
            Typo()

    def test_focused_manager_focuses_indexed_child(self) -> None:
        trio = Trio(is_focused=True, focus_index=1)
        assert focused_names(trio) == ["b"]

    def test_focus_index_is_wrapped_into_range(self) -> None:
        assert Trio(focus_index=4).focus_index == 1


class TestFocusMovement:
    """focus_next / focus_prev."""

    def test_full_cycle_returns_to_start(self) -> None:
        trio = Trio(is_focused=True)
        start = trio.focus_index
        for _ in range(3):
            trio.focus_next()
            assert len(focused_names(trio)) == 1
        assert trio.focus_index == start
        assert focused_names(trio) == ["a"]

    def test_next_moves_focus(self) -> None:
        trio = Trio(is_focused=True)
        trio.focus_next()
        assert trio.focus_index == 1
        assert focused_names(trio) == ["b"]

    def test_prev_wraps_to_last(self) -> None:
        trio = Trio(is_focused=True)
        trio.focus_prev()
        assert trio.focus_index == 2
        assert focused_names(trio) == ["c"]

    def test_empty_manager_is_a_no_op(self) -> None:
        empty = Empty(is_focused=True)
        empty.focus_next()
        empty.focus_prev()
        assert empty.focus_index == 0
        assert empty.focused_model is None
        assert empty.update_focused(KeyPress.of("a")) is None

    def test_copy_does_not_share_focus_changes(self) -> None:
        original = Trio(is_focused=True)
        copy = replace(original)
        copy.focus_next()
        assert focused_names(original) == ["a"]
        assert focused_names(copy) == ["b"]


class TestSetFocus:
    """Cascading focus through nested managers."""

    def test_gaining_focus_cascades(self) -> None:
        outer = Outer()
        assert not outer.inner.a.is_focused
        outer.set_focus(True)
        assert outer.inner.is_focused
        assert outer.inner.a.is_focused
        assert not outer.tail.is_focused

    def test_losing_focus_cascades(self) -> None:
        outer = Outer(is_focused=True)
        outer.set_focus(False)
        assert not outer.inner.is_focused
        assert not outer.inner.a.is_focused

    def test_moving_between_nested_managers(self) -> None:
        outer = Outer(is_focused=True)
        outer.focus_next()
        assert not outer.inner.is_focused
        assert focused_names(outer.inner) == []
        assert outer.tail.is_focused


class TestUpdateFocused:
    """Event routing to the focused child."""

    def test_routes_to_focused_child_only(self) -> None:
        trio = Trio(is_focused=True)
        trio.focus_next()
        new, command = trio.update(KeyPress.of("a"))
        assert command is None
        assert (new.a.hits, new.b.hits, new.c.hits) == (0, 1, 0)
        assert trio.b.hits == 0

    def test_returns_child_command(self) -> None:
        _, command = Trio(is_focused=True).update(KeyPress.of("x"))
        assert command == Exit()

    def test_nested_routing(self) -> None:
        outer = Outer(is_focused=True)
        new, _ = outer.update(KeyPress(Key.SPACE))
        assert new.inner.a.hits == 1
        assert outer.inner.a.hits == 0

    def test_focus_command_from_child(self) -> None:
        trio = Trio(is_focused=True)
        command = trio.update_focused(KeyPress.of("n"))
        assert trio.handle_focus_command(command)
        assert focused_names(trio) == ["b"]

    def test_blur_and_unknown_commands(self) -> None:
        trio = Trio(is_focused=True)
        assert trio.handle_focus_command(FocusCommand.BLUR_ME)
        assert focused_names(trio) == []
        assert not trio.handle_focus_command(Exit())
        assert not trio.handle_focus_command(None)


class TestMetamorphosis:
    """A managed child changing class."""

    def test_strict_profile_raises_every_time(self) -> None:
        set_settings(Settings(metamorphosis=MetamorphosisPolicy.STRICT))
        model = Morphing(is_focused=True)
        for _ in range(2):
            with pytest.raises(MetamorphosisViolation, match="Shapeshifter"):
                model.update(KeyPress.of("a"))
        assert isinstance(model.child, Shapeshifter)

    def test_relaxed_profile_keeps_previous_child(self, caplog) -> None:
        set_settings(Settings(metamorphosis=MetamorphosisPolicy.RELAXED))
        model = Morphing(is_focused=True)
        for _ in range(2):
            new, command = model.update(KeyPress.of("a"))
            assert command is None
            assert isinstance(new.child, Shapeshifter)
            assert new.child.is_focused
        assert "Dropped update" in caplog.text
