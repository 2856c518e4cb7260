"""Views that display messages, and the notification view built on the host.

``NotifyView`` plans notifications for its pending messages, hands them to
the notification host, and keeps each message's ``notify_id`` pointing at
the notification that shows it until that notification closes.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol

from pi.notify.config import NotifyOptions
from pi.notify.errors import validate
from pi.notify.message import Message
from pi.notify.planner import NotificationRequest, merged_content, plan, resolve_host_options
from pi.notify.render import make_render
from pi.notify.renderers import highlights_for

if TYPE_CHECKING:
    from pi.notify.host import NotificationHost, NotificationRecord
    from pi.notify.surface import Surface, Window

logger = logging.getLogger(__name__)

# Seconds between a host open/close event and the user callback
CALLBACK_DELAY = 0.1


class MessageLookup(Protocol):
    def get_by_id(self, message_id: int) -> Message | None: ...


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------


class View:
    """Base view: holds pending messages and paints them onto surfaces."""

    def __init__(self, opts: Any = None) -> None:
        self._opts = opts
        self._messages: list[Message] = []
        self.update_options()

    def update_options(self) -> None:
        """Normalise ``self._opts``; subclasses apply their defaults here."""

    def push(self, message: Message) -> None:
        self._messages.append(message)

    def set(self, messages: list[Message]) -> None:
        self._messages = list(messages)

    def clear(self) -> None:
        self._messages = []

    def content(self) -> str:
        return merged_content(self._messages)

    def render(
        self,
        surface: Surface,
        offset: int = 0,
        messages: list[Message] | None = None,
    ) -> None:
        """Highlight *messages*, whose text starts at line *offset* of *surface*.

        The text itself is left alone; rows past the end are skipped.
        """
        messages = self._messages if messages is None else messages
        row = offset
        total = surface.line_count()
        for m in messages:
            group = m.hl_group or highlights_for(m.level).body
            for line_row in range(row, min(row + len(m.lines()), total)):
                surface.add_highlight(line_row, group)
            row += len(m.lines())

    def set_win_options(self, window: Window) -> None:
        pass


# ---------------------------------------------------------------------------
# NotifyView
# ---------------------------------------------------------------------------


class NotifyView(View):
    """Shows messages as notifications through the notification host.

    ``win`` is the window of the current merged notification and ``notif``
    the most recent notification, both ``None`` while nothing is open.
    """

    HOST_MODULE = "pi.notify.host"

    _opts: NotifyOptions

    def __init__(
        self,
        opts: NotifyOptions | Mapping[str, Any] | None = None,
        *,
        host: NotificationHost | None = None,
        messages: MessageLookup | None = None,
        is_blocking: Callable[[], bool] | None = None,
        callback_delay: float = CALLBACK_DELAY,
    ) -> None:
        self.win: int | None = None
        self.notif: NotificationRecord | None = None
        self.callback_delay = callback_delay
        self._host = host
        self._lookup = messages
        self._is_blocking = is_blocking or (lambda: False)
        # notification id -> messages stamped with it
        self._claims: dict[int, list[Message]] = {}
        # inline callbacks held back while show() dispatches
        self._held: list[Callable[[], None]] | None = None
        super().__init__(opts)

    def update_options(self) -> None:
        if self._opts is None or isinstance(self._opts, Mapping):
            self._opts = NotifyOptions.from_dict(self._opts)

    @property
    def opts(self) -> NotifyOptions:
        return self._opts

    def reconfigure(self, overrides: Mapping[str, Any]) -> None:
        self._opts = self._opts.merged(overrides)

    @property
    def host(self) -> NotificationHost:
        if self._host is None:
            self._host = importlib.import_module(self.HOST_MODULE).get_host()
        return self._host

    @classmethod
    def is_available(cls) -> bool:
        """Whether ``HOST_MODULE`` can be imported.

        The bundled host always can, so this only returns ``False`` for
        subclasses pointing ``HOST_MODULE`` at a host that is not installed.
        """
        try:
            importlib.import_module(cls.HOST_MODULE)
        except ImportError:
            return False
        return True

    @classmethod
    def dismiss(cls) -> None:
        importlib.import_module(cls.HOST_MODULE).dismiss(pending=True, silent=True)

    def set_win_options(self, window: Window) -> None:
        for name, value in self._opts.win_options.items():
            window.set_option(name, value)

    # ------------------------------------------------------------------
    # show / hide
    # ------------------------------------------------------------------

    def show(self) -> None:
        todo = plan(self._messages, self._opts)
        self.clear()
        self._held = []
        try:
            for request in todo:
                self._notify(request)
        finally:
            held = self._held or []
            self._held = None
        for fn in held:
            fn()

    def hide(self) -> None:
        if self.win is None:
            return
        window = self.host.window(self.win)
        if window is not None and window.is_valid():
            window.close()
            self.win = None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _live_notif(self) -> NotificationRecord | None:
        if self.notif is not None and not self.notif.closed:
            return self.notif
        return None

    def _replace_target(self, request: NotificationRequest) -> int | None:
        per = request.opts
        if per is not None and per.replace_message_id is not None:
            m = (
                self._lookup.get_by_id(per.replace_message_id)
                if self._lookup is not None
                else None
            )
            return m.opts.notify_id if m is not None else None
        if (per is not None and per.replace_current) or self._opts.merge or self._opts.replace:
            current = self._live_notif()
            return current.id if current is not None else None
        return None

    def _notify(self, request: NotificationRequest) -> None:
        opts = self._opts
        record: NotificationRecord | None = None

        def on_open(win: int) -> None:
            window = self.host.window(win)
            if window is not None:
                self.set_win_options(window)
            if opts.merge:
                self.win = win
            self._defer(lambda: self._fire_on_open(win))

        def on_close(win: int) -> None:
            if record is not None:
                if self.notif is record:
                    self.notif = None
                self._release(record.id)
            if self.win == win:
                self.win = None
            self._defer(lambda: self._fire_on_close(win))

        def on_drop(record_id: int) -> None:
            if self.notif is not None and self.notif.id == record_id:
                self.notif = None
            self._release(record_id)

        level, options = resolve_host_options(
            opts,
            request,
            replace=self._replace_target(request),
            animate=not self._is_blocking(),
            keep=self._is_blocking,
            on_open=on_open,
            on_close=on_close,
            on_drop=on_drop,
            render=make_render(
                self, request.messages, opts.render, request.content, self.host.renderers
            ),
        )

        content: str | None = request.content
        if request.opts is not None and request.opts.is_nil:
            content = None

        record = self.host.notify(content, level, options)
        self.notif = record
        self._claims.setdefault(record.id, []).extend(request.messages)
        for m in request.messages:
            m.opts.notify_id = record.id
        logger.debug(
            "Notification %d shows %d message(s)", record.id, len(request.messages)
        )

    def _release(self, notify_id: int) -> None:
        for m in self._claims.pop(notify_id, []):
            # a later notification may have claimed it since
            if m.opts.notify_id == notify_id:
                m.opts.notify_id = None

    # ------------------------------------------------------------------
    # Deferred user callbacks
    # ------------------------------------------------------------------

    def _defer(self, fn: Callable[[], None]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._held is not None:
                self._held.append(fn)
            else:
                fn()
            return
        loop.call_later(self.callback_delay, fn)

    def _fire_on_open(self, win: int) -> None:
        callback = self._opts.on_open
        if callback is None:
            return
        validate(on_open_fn=(callback, "callable"), on_open_win=(win, int))
        # the notification may have closed or moved on since it opened
        callback(win, self.host.record_for_window(win))

    def _fire_on_close(self, win: int) -> None:
        callback = self._opts.on_close
        if callback is None:
            return
        validate(on_close_fn=(callback, "callable"), on_close_win=(win, int))
        callback(win, None)
