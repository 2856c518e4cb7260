"""Options for the notification view and the notification host.

Precedence when building the options for one notification, lowest first:

1. ``NotifyOptions`` (view defaults, set once at construction)
2. the request (message title and level)
3. per-message overrides (``MessageOpts``)

The view-level ``level`` is the one exception: when set it wins over the
request's own level.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Mapping, Union

from pi.notify.errors import NotifyConfigError, validate
from pi.notify.message import Level

if TYPE_CHECKING:
    from pi.notify.host import NotificationRecord
    from pi.notify.surface import Surface

# (surface, record, highlights, host config)
RenderFn = Callable[["Surface", "NotificationRecord", Any, "HostConfig"], None]
WindowCallback = Callable[[int, "NotificationRecord | None"], None]


# ---------------------------------------------------------------------------
# Render selection
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NamedRenderer:
    """A renderer looked up by name in the host's registry."""

    name: str


@dataclass(frozen=True)
class CustomRenderer:
    fn: RenderFn


@dataclass(frozen=True)
class Plain:
    """Write each message's lines verbatim, without decoration."""


RenderSpec = Union[NamedRenderer, CustomRenderer, Plain]


def render_spec(value: RenderSpec | str | RenderFn | None) -> RenderSpec | None:
    """Coerce a user-supplied render option into a ``RenderSpec``.

    ``"plain"`` maps to :class:`Plain`, other strings to
    :class:`NamedRenderer`, callables to :class:`CustomRenderer`.
    """
    if value is None or isinstance(value, (NamedRenderer, CustomRenderer, Plain)):
        return value
    if isinstance(value, str):
        return Plain() if value == "plain" else NamedRenderer(value)
    if callable(value):
        return CustomRenderer(value)
    raise NotifyConfigError(f"render: expected name or callable, got {type(value).__name__}")


# ---------------------------------------------------------------------------
# View options
# ---------------------------------------------------------------------------

_CAMEL_KEYS = {
    "onOpen": "on_open",
    "onClose": "on_close",
    "winOptions": "win_options",
}


@dataclass
class NotifyOptions:
    """Options of a ``NotifyView``.

    ``merge`` combines all pending messages into one notification;
    ``replace`` makes each new notification replace the current one.
    """

    title: str = "Notification"
    merge: bool = False
    level: Level | None = None
    replace: bool = False
    on_open: WindowCallback | None = None
    on_close: WindowCallback | None = None
    render: RenderSpec | None = None
    timeout: float | None = None
    win_options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.render = render_spec(self.render)
        for name in ("on_open", "on_close"):
            value = getattr(self, name)
            if value is not None:
                validate(**{name: (value, "callable")})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> NotifyOptions:
        """Build options from a plain mapping (snake_case or camelCase keys)."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                raise NotifyConfigError(f"Unknown notify option: {key}")
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def merged(self, overrides: Mapping[str, Any] | None) -> NotifyOptions:
        """Return a copy with the non-None values of *overrides* applied."""
        patch = NotifyOptions.from_dict(overrides)
        changed = [_CAMEL_KEYS.get(k, k) for k, v in (overrides or {}).items() if v is not None]
        return replace(self, **{name: getattr(patch, name) for name in changed})


# ---------------------------------------------------------------------------
# Host configuration and per-notification options
# ---------------------------------------------------------------------------


def _default_icons() -> dict[str, str]:
    return {
        "trace": "✎",
        "debug": "⚙",
        "info": "ℹ",
        "warn": "⚠",
        "error": "✖",
    }


@dataclass
class HostConfig:
    """Notification host settings.

    ``max_width``/``max_height`` of ``None`` leave that dimension unbounded.
    """

    minimum_width: int = 50
    max_width: int | None = None
    max_height: int | None = None
    render: str = "default"
    timeout: float | None = 5.0
    max_visible: int | None = None
    icons: dict[str, str] = field(default_factory=_default_icons)


@dataclass
class HostOptions:
    """Resolved options for a single notification, as the host consumes them.

    ``replace`` names the live notification (by id) to update in place.
    ``on_drop`` gets the record id when a queued notification is discarded
    before it ever opened; ``on_close`` only fires for opened ones.
    """

    title: str = ""
    timeout: float | None = None
    replace: int | None = None
    animate: bool = True
    keep: Callable[[], bool] | None = None
    on_open: Callable[[int], None] | None = None
    on_close: Callable[[int], None] | None = None
    on_drop: Callable[[int], None] | None = None
    render: RenderFn | None = None
