"""In-process notification host.

Owns the live notifications: allocates a window and surface per
notification, paints it with a renderer, closes it after its timeout, and
queues notifications beyond ``HostConfig.max_visible`` until a slot frees.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections import deque
from dataclasses import dataclass, field

from pi.notify.config import HostConfig, HostOptions, RenderFn
from pi.notify.message import Level
from pi.notify.layout import compute_size
from pi.notify.renderers import RENDERERS, highlights_for
from pi.notify.surface import Surface, Window
from pi.notify.utils import split_lines

logger = logging.getLogger(__name__)


@dataclass
class NotificationRecord:
    """Handle for one notification, returned by :meth:`NotificationHost.notify`."""

    id: int
    level: Level | None
    title: str
    message: list[str]
    options: HostOptions = field(default_factory=HostOptions)
    window: Window | None = None
    closed: bool = False
    _timer: asyncio.TimerHandle | None = field(default=None, repr=False)

    @property
    def surface(self) -> Surface | None:
        return self.window.surface if self.window is not None else None


class NotificationHost:
    """Creates, replaces, times out and dismisses notifications."""

    def __init__(
        self,
        config: HostConfig | None = None,
        renderers: dict[str, RenderFn] | None = None,
    ) -> None:
        self.config = config or HostConfig()
        self.renderers: dict[str, RenderFn] = {**RENDERERS, **(renderers or {})}
        self._records: dict[int, NotificationRecord] = {}
        self._pending: deque[NotificationRecord] = deque()
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, record_id: int) -> NotificationRecord | None:
        return self._records.get(record_id)

    def open_records(self) -> list[NotificationRecord]:
        return [r for r in self._records.values() if r.window is not None]

    def pending_records(self) -> list[NotificationRecord]:
        return list(self._pending)

    def record_for_window(self, window_id: int) -> NotificationRecord | None:
        """Return the open notification shown in window *window_id*, if any."""
        for record in self.open_records():
            if record.window is not None and record.window.id == window_id:
                return record
        return None

    def window(self, window_id: int) -> Window | None:
        record = self.record_for_window(window_id)
        return record.window if record is not None else None

    # ------------------------------------------------------------------
    # Notify / replace
    # ------------------------------------------------------------------

    def notify(
        self,
        content: str | None,
        level: Level | None = None,
        options: HostOptions | None = None,
    ) -> NotificationRecord:
        """Show *content*, or update the notification named by ``options.replace``.

        A ``None`` content on replace keeps the existing body.
        """
        options = options or HostOptions()
        if options.replace is not None:
            existing = self._records.get(options.replace)
            if existing is not None and not existing.closed:
                return self._replace(existing, content, level, options)

        record = NotificationRecord(
            id=next(self._ids),
            level=level or "info",
            title=options.title,
            message=split_lines(content),
            options=options,
        )
        self._records[record.id] = record

        limit = self.config.max_visible
        if limit is not None and len(self.open_records()) >= limit:
            logger.debug("Queueing notification %d", record.id)
            self._pending.append(record)
        else:
            self._open(record)
        return record

    def _replace(
        self,
        record: NotificationRecord,
        content: str | None,
        level: Level | None,
        options: HostOptions,
    ) -> NotificationRecord:
        if content is not None:
            record.message = split_lines(content)
        if level is not None:
            record.level = level
        record.title = options.title or record.title
        record.options = options
        if record.window is not None:
            self._paint(record)
            self._arm_timeout(record)
        return record

    def _open(self, record: NotificationRecord) -> None:
        window = Window(Surface())
        window.on_closed = lambda _w: self._finish(record)
        record.window = window
        if record.options.on_open is not None:
            record.options.on_open(window.id)
        # on_open may have closed it already
        if record.closed:
            return
        self._paint(record)
        self._arm_timeout(record)

    def _paint(self, record: NotificationRecord) -> None:
        window = record.window
        assert window is not None
        size = (window.width, window.height)
        render = record.options.render or self.renderers[self.config.render]
        render(window.surface, record, highlights_for(record.level), self.config)
        # size it ourselves unless the renderer did
        if window.is_valid() and (window.width, window.height) == size:
            lines = window.surface.get_lines()
            width, height = compute_size(
                lines,
                self.config.minimum_width,
                self.config.max_width,
                self.config.max_height,
            )
            window.apply_config(width=width, height=height)

    # ------------------------------------------------------------------
    # Timeouts
    # ------------------------------------------------------------------

    def _arm_timeout(self, record: NotificationRecord) -> None:
        if record._timer is not None:
            record._timer.cancel()
            record._timer = None

        timeout = record.options.timeout
        if timeout is None:
            timeout = self.config.timeout
        if not timeout:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Without a loop notifications stay until closed
            return
        record._timer = loop.call_later(timeout, self._expire, record)

    def _expire(self, record: NotificationRecord) -> None:
        record._timer = None
        if record.closed:
            return
        keep = record.options.keep
        if keep is not None and keep():
            self._arm_timeout(record)
            return
        self.close(record)

    # ------------------------------------------------------------------
    # Close / dismiss
    # ------------------------------------------------------------------

    def close(self, record: NotificationRecord | int) -> None:
        """Close a notification. Unknown or already closed ones are ignored."""
        if isinstance(record, int):
            found = self._records.get(record)
            if found is None:
                return
            record = found
        if record.closed:
            return
        if record.window is not None:
            # Window.close() calls back into _finish
            record.window.close()
            return
        # never opened
        record.closed = True
        self._records.pop(record.id, None)
        try:
            self._pending.remove(record)
        except ValueError:
            pass
        logger.debug("Dropped queued notification %d", record.id)
        if record.options.on_drop is not None:
            record.options.on_drop(record.id)

    def _finish(self, record: NotificationRecord) -> None:
        if record.closed:
            return
        record.closed = True
        if record._timer is not None:
            record._timer.cancel()
            record._timer = None
        self._records.pop(record.id, None)

        window = record.window
        assert window is not None
        logger.debug("Closed notification %d (window %d)", record.id, window.id)
        if record.options.on_close is not None:
            record.options.on_close(window.id)
        self._promote_pending()

    def _promote_pending(self) -> None:
        limit = self.config.max_visible
        while self._pending and (limit is None or len(self.open_records()) < limit):
            self._open(self._pending.popleft())

    def dismiss(self, pending: bool = False, silent: bool = False) -> None:
        """Close every open notification; with *pending*, drop queued ones too."""
        dropped = 0
        if pending:
            dropped = len(self._pending)
            for record in list(self._pending):
                self.close(record)
        records = self.open_records()
        if not records and not dropped and not silent:
            logger.info("No notifications to dismiss")
        for record in records:
            self.close(record)


# ---------------------------------------------------------------------------
# Module-level host
# ---------------------------------------------------------------------------

_host: NotificationHost | None = None


def get_host() -> NotificationHost:
    global _host
    if _host is None:
        _host = NotificationHost()
    return _host


def set_host(host: NotificationHost | None) -> None:
    """Install *host* as the module-level host (``None`` resets it)."""
    global _host
    _host = host


def notify(
    content: str | None,
    level: Level | None = None,
    options: HostOptions | None = None,
) -> NotificationRecord:
    return get_host().notify(content, level, options)


def dismiss(pending: bool = False, silent: bool = False) -> None:
    get_host().dismiss(pending=pending, silent=silent)
