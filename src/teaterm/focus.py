"""
Focus delegation for composite models.

A FocusManager owns several focusable children stored in its own fields and
routes input to whichever one currently holds focus:

    @dataclass
    class LoginForm(FocusManager):
        managed_models: ClassVar[tuple[str, ...]] = ("user", "password", "ok")

        user: TextField = field(default_factory=lambda: TextField("User"))
        password: TextField = field(default_factory=lambda: TextField("Password"))
        ok: Button = field(default_factory=lambda: Button("OK", Exit()))

        def update(self, event):
            new = replace(self)
            command = new.update_focused(event)
            ...
            return new, command
"""

from __future__ import annotations

import copy
import logging
from abc import ABC
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from teaterm.config import MetamorphosisPolicy, get_settings
from teaterm.errors import IllegalMemberError, MetamorphosisViolation
from teaterm.model import Command, Event, FocusCommand, Model

logger = logging.getLogger(__name__)


@dataclass
class FocusableModel(Model, ABC):
    """A model that can hold input focus."""
    is_focused: bool = field(default=False, kw_only=True)

    def set_focus(self, focused: bool) -> None:
        """Set the focus flag. Managers extend this to cascade to children."""
        self.is_focused = focused


class FieldAccessor:
    """
    Typed get/set/update access to one managed field of a FocusManager.

    Children are copied before their focus flag changes and the copy is
    written back, so managers copied with dataclasses.replace() never share
    a mutated child with the model they were copied from.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"FieldAccessor({self.name!r})"

    def get(self, root: Any) -> FocusableModel:
        return getattr(root, self.name)

    def set(self, root: Any, value: FocusableModel) -> None:
        setattr(root, self.name, value)

    def validate(self, root: Any) -> None:
        """Registration check: the field must hold a FocusableModel."""
        value = getattr(root, self.name, None)
        if not isinstance(value, FocusableModel):
            raise IllegalMemberError(type(root).__name__, self.name, type(value))

    def set_focus(self, root: Any, focused: bool) -> None:
        child = copy.copy(self.get(root))
        child.set_focus(focused)
        self.set(root, child)

    def update(
        self, root: Any, event: Event, policy: MetamorphosisPolicy
    ) -> Optional[Command]:
        """
        Forward an event to the child and write back its replacement.

        The replacement must be the same class as the child it replaces.
        """
        child = self.get(root)
        updated, command = child.update(event)
        if type(updated) is not type(child):
            if policy is MetamorphosisPolicy.STRICT:
                raise MetamorphosisViolation(self.name, type(child), type(updated))
            logger.warning(
                "Dropped update of %s.%s: %s tried to become %s",
                type(root).__name__, self.name,
                type(child).__name__, type(updated).__name__,
            )
            return None
        self.set(root, updated)
        return command


@dataclass
class FocusManager(FocusableModel, ABC):
    """
    A focusable model that routes focus and input to managed children.

    Subclasses list the names of their focusable fields in `managed_models`,
    in focus order. Nested managers are allowed, since a FocusManager is
    itself a FocusableModel.
    """
    managed_models: ClassVar[tuple[str, ...]] = ()
    _accessors: ClassVar[tuple[FieldAccessor, ...]] = ()

    focus_index: int = field(default=0, kw_only=True)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._accessors = tuple(FieldAccessor(name) for name in cls.managed_models)

    def __post_init__(self) -> None:
        for accessor in self._accessors:
            accessor.validate(self)
        if self._accessors:
            self.focus_index %= len(self._accessors)
        else:
            self.focus_index = 0
        if self.is_focused:
            self.change_focus(self.focus_index, True)

    @property
    def focused_model(self) -> Optional[FocusableModel]:
        """The child at focus_index, or None if nothing is managed."""
        if not self._accessors:
            return None
        return self._accessors[self.focus_index].get(self)

    def change_focus(self, index: int, focused: bool) -> None:
        """Set the focus flag of the managed child at index."""
        if not self._accessors:
            return
        self._accessors[index % len(self._accessors)].set_focus(self, focused)

    def focus_next(self) -> None:
        """Give focus to the next managed child, wrapping around."""
        self._move_focus(1)

    def focus_prev(self) -> None:
        """Give focus to the previous managed child, wrapping around."""
        self._move_focus(-1)

    def _move_focus(self, step: int) -> None:
        count = len(self._accessors)
        if not count:
            return
        self.change_focus(self.focus_index, False)
        self.focus_index = (self.focus_index + step) % count
        self.change_focus(self.focus_index, True)

    def set_focus(self, focused: bool) -> None:
        """Set own flag, then focus or blur the currently indexed child."""
        self.is_focused = focused
        self.change_focus(self.focus_index, focused)

    def update_focused(self, event: Event) -> Optional[Command]:
        """
        Send an event to the focused child and return its command.

        A child that returns a model of a different class is a metamorphosis;
        the process-wide policy decides whether that raises
        MetamorphosisViolation or silently keeps the previous child.
        """
        if not self._accessors:
            return None
        accessor = self._accessors[self.focus_index]
        return accessor.update(self, event, get_settings().metamorphosis)

    def handle_focus_command(self, command: Optional[Command]) -> bool:
        """Apply a FocusCommand returned by a child. Returns True if consumed."""
        if command is FocusCommand.NEXT:
            self.focus_next()
        elif command is FocusCommand.PREVIOUS:
            self.focus_prev()
        elif command is FocusCommand.BLUR_ME:
            self.change_focus(self.focus_index, False)
        else:
            return False
        return True
