"""Premade focusable widgets and the box-drawing container."""

from teaterm.widgets.button import Button
from teaterm.widgets.container import Container, Line, Section
from teaterm.widgets.selector import Selector
from teaterm.widgets.spinner import Spinner
from teaterm.widgets.text_field import TextField
from teaterm.widgets.toggle import Toggle, ToggleStyle

__all__ = [
    "Button",
    "Container",
    "Line",
    "Section",
    "Selector",
    "Spinner",
    "TextField",
    "Toggle",
    "ToggleStyle",
]
