"""Box-drawing helper for laying text out in a framed panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from teaterm.core.ansi_text import pad_to_width, visible_len


@dataclass(frozen=True)
class Line:
    """A row of text inside the box."""
    text: str = ""


@dataclass(frozen=True)
class Section:
    """A horizontal divider, optionally labelled."""
    label: Optional[str] = None


ContainerItem = Union[Line, Section, list]


@dataclass(frozen=True)
class Container:
    """
    Renders items inside a box `width` columns wide.

    Escape sequences in the text do not count towards the width, but they
    must be closed by the caller; the container does not reset styles.
    Nested lists of items are flattened in order.
    """
    width: int
    contents: list[ContainerItem] = field(default_factory=list)
    title: Optional[str] = None
    footer: Optional[str] = None

    def __post_init__(self) -> None:
        if self.width < 2:
            raise ValueError(f"Container width must be at least 2, got {self.width}")

    def _labelled(self, left: str, label: str, right: str) -> str:
        # ┌─┤ label ├──────┐
        head = f"{left}─┤ {label} ├"
        return pad_to_width(head, self.width - 1, '─') + right

    def _plain(self, left: str, right: str) -> str:
        return left + '─' * (self.width - 2) + right

    def _resolve(self, items: list[ContainerItem], into: list[str]) -> None:
        for item in items:
            if isinstance(item, Line):
                into.append("│ " + pad_to_width(item.text, self.width - 3) + "│")
            elif isinstance(item, Section):
                if item.label is not None:
                    into.append(self._labelled("├", item.label, "┤"))
                else:
                    into.append(self._plain("├", "┤"))
            elif isinstance(item, list):
                self._resolve(item, into)
            else:
                raise TypeError(f"Unsupported container item: {item!r}")

    def lines(self) -> list[str]:
        """Rendered rows, top border to bottom border."""
        rows: list[str] = []
        if self.title is not None:
            rows.append(self._labelled("┌", self.title, "┐"))
        else:
            rows.append(self._plain("┌", "┐"))
        self._resolve(self.contents, rows)
        if self.footer is not None:
            rows.append(self._labelled("└", self.footer, "┘"))
        else:
            rows.append(self._plain("└", "┘"))
        return rows

    def __str__(self) -> str:
        return "\n".join(self.lines())

    def visible_width(self) -> int:
        """Widest rendered row, ignoring escape sequences."""
        return max(visible_len(row) for row in self.lines())
