"""Built-in notification renderers, keyed by name in ``RENDERERS``.

Every renderer has the signature ``(surface, record, highlights, config)``
and replaces the surface content with the decorated notification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pi.notify.utils import visible_width

if TYPE_CHECKING:
    from pi.notify.config import HostConfig, RenderFn
    from pi.notify.host import NotificationRecord
    from pi.notify.surface import Surface


@dataclass(frozen=True)
class LevelHighlights:
    """Highlight group names used to paint one severity level."""

    title: str
    icon: str
    border: str
    body: str


def highlights_for(level: str | None) -> LevelHighlights:
    name = (level or "info").upper()
    return LevelHighlights(
        title=f"Notify{name}Title",
        icon=f"Notify{name}Icon",
        border=f"Notify{name}Border",
        body=f"Notify{name}Body",
    )


def _icon(record: NotificationRecord, config: HostConfig) -> str:
    return config.icons.get(record.level or "info", "")


def render_default(
    surface: Surface,
    record: NotificationRecord,
    highlights: LevelHighlights,
    config: HostConfig,
) -> None:
    header = f"{_icon(record, config)} {record.title}".strip()
    body = list(record.message)
    rule = "─" * max([visible_width(header), *(visible_width(line) for line in body)])
    surface.set_lines([header, rule, *body])
    surface.add_highlight(0, highlights.title)
    surface.add_highlight(1, highlights.border)
    for row in range(2, 2 + len(body)):
        surface.add_highlight(row, highlights.body)


def render_minimal(
    surface: Surface,
    record: NotificationRecord,
    highlights: LevelHighlights,
    config: HostConfig,
) -> None:
    surface.set_lines(list(record.message))
    for row in range(len(record.message)):
        surface.add_highlight(row, highlights.body)


def render_simple(
    surface: Surface,
    record: NotificationRecord,
    highlights: LevelHighlights,
    config: HostConfig,
) -> None:
    surface.set_lines([record.title, *record.message])
    surface.add_highlight(0, highlights.title)


def render_compact(
    surface: Surface,
    record: NotificationRecord,
    highlights: LevelHighlights,
    config: HostConfig,
) -> None:
    prefix = f"{_icon(record, config)} | {record.title} | "
    first, *rest = record.message or [""]
    surface.set_lines([prefix + first, *rest])
    surface.add_highlight(0, highlights.icon, 0, len(prefix))


RENDERERS: dict[str, RenderFn] = {
    "default": render_default,
    "minimal": render_minimal,
    "simple": render_simple,
    "compact": render_compact,
}
