"""Render callback handed to the host for each notification.

The host calls it whenever it paints a notification. It runs the chosen
renderer, finds where the message text landed among the decoration,
highlights the messages from there on, and fits the window to the result.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence, TypeVar

from pi.notify.config import (
    CustomRenderer,
    HostConfig,
    NamedRenderer,
    Plain,
    RenderFn,
    RenderSpec,
    render_spec,
)
from pi.notify.errors import NotifyError
from pi.notify.layout import compute_size, locate_content

if TYPE_CHECKING:
    from pi.notify.host import NotificationRecord
    from pi.notify.message import Message
    from pi.notify.surface import Surface
    from pi.notify.view import View

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Tag stored on surfaces painted through this module
VIEW_TAG = "notify"


def protect(fn: F) -> F:
    """Wrap *fn* so that exceptions are logged and the call returns ``None``."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except Exception:
            logger.exception("Notification render failed")
            return None

    return wrapper  # type: ignore[return-value]


def render_plain(
    surface: Surface, record: NotificationRecord, highlights: Any, config: HostConfig
) -> None:
    surface.set_lines(list(record.message))


def resolve_renderer(
    spec: RenderSpec | None,
    config: HostConfig,
    registry: Mapping[str, RenderFn],
) -> RenderFn:
    """Pick the render function: explicit *spec*, else the host's default."""
    if spec is None:
        spec = render_spec(config.render)
    if isinstance(spec, CustomRenderer):
        return spec.fn
    if isinstance(spec, Plain):
        return render_plain
    if isinstance(spec, NamedRenderer):
        try:
            return registry[spec.name]
        except KeyError:
            raise NotifyError(f"Unknown renderer: {spec.name}") from None
    return render_plain


class RenderPipeline:
    """Render callback bound to the messages of one notification."""

    def __init__(
        self,
        view: View,
        messages: Sequence[Message],
        render: RenderSpec | None,
        content: str | None,
        registry: Mapping[str, RenderFn],
    ) -> None:
        self.view = view
        self.messages = list(messages)
        self.render = render
        self.content = content
        self.registry = registry

    def __call__(
        self,
        surface: Surface,
        record: NotificationRecord,
        highlights: Any,
        config: HostConfig,
    ) -> None:
        resolve_renderer(self.render, config, self.registry)(
            surface, record, highlights, config
        )
        surface.tag(VIEW_TAG)

        lines = surface.get_lines()
        offset = locate_content(lines, self.content)
        if offset is not None:
            self.view.render(surface, offset=offset, messages=self.messages)

        window = surface.window
        if window is not None and window.is_valid():
            width, height = compute_size(
                lines, config.minimum_width, config.max_width, config.max_height
            )
            window.apply_config(width=width, height=height)


def make_render(
    view: View,
    messages: Sequence[Message],
    render: RenderSpec | None,
    content: str | None,
    registry: Mapping[str, RenderFn],
) -> RenderFn:
    """Build the protected render callback for one notification."""
    return protect(RenderPipeline(view, messages, render, content, registry))
