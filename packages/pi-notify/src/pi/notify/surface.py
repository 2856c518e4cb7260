"""Drawable surfaces and the windows that display them.

A ``Surface`` holds the lines and highlights a notification paints; a
``Window`` is the visible rectangle a surface is attached to while the
notification is open.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable

_surface_ids = itertools.count(1)
_window_ids = itertools.count(1000)

# Variable set on surfaces owned by a view, holding the view's tag
TAG_VAR = "pi_notify"


@dataclass(frozen=True)
class Highlight:
    row: int
    col_start: int
    col_end: int  # -1 means to end of line
    group: str


class Surface:
    """Line buffer with highlights and free-form variables."""

    def __init__(self, lines: list[str] | None = None) -> None:
        self.id: int = next(_surface_ids)
        self._lines: list[str] = list(lines) if lines else []
        self.highlights: list[Highlight] = []
        self.vars: dict[str, Any] = {}
        self.window: Window | None = None

    def set_lines(self, lines: list[str]) -> None:
        """Replace every line. Highlights refer to old rows, so they go too."""
        self._lines = list(lines)
        self.highlights.clear()

    def get_lines(self) -> list[str]:
        return list(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def add_highlight(
        self, row: int, group: str, col_start: int = 0, col_end: int = -1
    ) -> None:
        self.highlights.append(Highlight(row, col_start, col_end, group))

    def tag(self, name: str) -> None:
        self.vars[TAG_VAR] = name

    def get_tag(self) -> str | None:
        return self.vars.get(TAG_VAR)


class Window:
    """A visible, sizeable view onto a ``Surface``."""

    def __init__(self, surface: Surface, width: int = 0, height: int = 0) -> None:
        self.id: int = next(_window_ids)
        self.surface = surface
        self.width = width
        self.height = height
        self.options: dict[str, Any] = {}
        self.on_closed: Callable[[Window], None] | None = None
        self._valid = True
        surface.window = self

    def is_valid(self) -> bool:
        return self._valid

    def apply_config(self, width: int | None = None, height: int | None = None) -> None:
        if not self._valid:
            return
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height

    def set_option(self, name: str, value: Any) -> None:
        self.options[name] = value

    def close(self) -> None:
        if not self._valid:
            return
        self._valid = False
        if self.surface.window is self:
            self.surface.window = None
        if self.on_closed is not None:
            self.on_closed(self)
