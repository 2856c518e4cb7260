"""pi-notify: notification view that shows messages as pop-up notifications."""

# Options
from pi.notify.config import (
    CustomRenderer,
    HostConfig,
    HostOptions,
    NamedRenderer,
    NotifyOptions,
    Plain,
    RenderSpec,
    render_spec,
)

# Errors
from pi.notify.errors import NotifyConfigError, NotifyError

# Notification host
from pi.notify.host import NotificationHost, NotificationRecord, get_host, set_host

# Layout helpers
from pi.notify.layout import compute_size, locate_content

# Messages
from pi.notify.message import Level, Message, MessageOpts, MessageStore

# Planning
from pi.notify.planner import NotificationRequest, plan

# Rendering
from pi.notify.render import RenderPipeline, protect
from pi.notify.renderers import RENDERERS, LevelHighlights

# Surfaces
from pi.notify.surface import Highlight, Surface, Window

# Utilities
from pi.notify.utils import visible_width

# Views
from pi.notify.view import NotifyView, View

__all__ = [
    # Options
    "CustomRenderer",
    "HostConfig",
    "HostOptions",
    "NamedRenderer",
    "NotifyOptions",
    "Plain",
    "RenderSpec",
    "render_spec",
    # Errors
    "NotifyConfigError",
    "NotifyError",
    # Host
    "NotificationHost",
    "NotificationRecord",
    "get_host",
    "set_host",
    # Layout
    "compute_size",
    "locate_content",
    # Messages
    "Level",
    "Message",
    "MessageOpts",
    "MessageStore",
    # Planning
    "NotificationRequest",
    "plan",
    # Rendering
    "RENDERERS",
    "LevelHighlights",
    "RenderPipeline",
    "protect",
    # Surfaces
    "Highlight",
    "Surface",
    "Window",
    # Utilities
    "visible_width",
    # Views
    "NotifyView",
    "View",
]
