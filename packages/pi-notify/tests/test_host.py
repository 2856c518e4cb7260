"""Tests for pi.notify.host -- the in-process notification host."""

from __future__ import annotations

import asyncio
import logging

import pytest

from pi.notify.config import HostConfig, HostOptions
from pi.notify.host import NotificationHost


class Events:
    """Collects host open, close and drop events."""

    def __init__(self) -> None:
        self.opened: list[int] = []
        self.closed: list[int] = []
        self.dropped: list[int] = []

    def options(self, **kwargs) -> HostOptions:
        return HostOptions(
            on_open=self.opened.append,
            on_close=self.closed.append,
            on_drop=self.dropped.append,
            **kwargs,
        )


def make_host(**config) -> NotificationHost:
    config.setdefault("timeout", None)
    return NotificationHost(HostConfig(**config))


# ---------------------------------------------------------------------------
# Opening
# ---------------------------------------------------------------------------


class TestNotify:
    def test_opens_window(self) -> None:
        host = make_host()
        events = Events()
        record = host.notify("hello", "warn", events.options(title="T"))
        assert record.window is not None and record.window.is_valid()
        assert events.opened == [record.window.id]
        assert host.open_records() == [record]

    def test_paints_with_default_renderer(self) -> None:
        host = make_host()
        record = host.notify("hello", "warn", HostOptions(title="T"))
        assert record.surface is not None
        assert record.surface.get_lines() == ["⚠ T", "─────", "hello"]

    def test_sizes_window(self) -> None:
        record = make_host().notify("hello")
        assert record.window is not None
        assert (record.window.width, record.window.height) == (50, 3)

    def test_default_level(self) -> None:
        assert make_host().notify("x").level == "info"

    def test_custom_renderer_registry(self) -> None:
        def shout(surface, record, highlights, config) -> None:
            surface.set_lines([line.upper() for line in record.message])

        host = NotificationHost(HostConfig(timeout=None, render="shout"), {"shout": shout})
        record = host.notify("quiet")
        assert record.surface is not None
        assert record.surface.get_lines() == ["QUIET"]

    def test_lookup_by_window(self) -> None:
        host = make_host()
        record = host.notify("x")
        assert record.window is not None
        assert host.record_for_window(record.window.id) is record
        assert host.window(record.window.id) is record.window
        assert host.window(-1) is None


# ---------------------------------------------------------------------------
# Replacing
# ---------------------------------------------------------------------------


class TestReplace:
    def test_updates_in_place(self) -> None:
        host = make_host()
        events = Events()
        first = host.notify("one", options=events.options())
        second = host.notify("two", options=events.options(replace=first.id))
        assert second is first
        assert first.message == ["two"]
        assert len(events.opened) == 1

    def test_none_content_keeps_body(self) -> None:
        host = make_host()
        first = host.notify("one")
        host.notify(None, options=HostOptions(replace=first.id, title="New"))
        assert first.message == ["one"]
        assert first.title == "New"

    def test_closed_target_creates_new(self) -> None:
        host = make_host()
        first = host.notify("one")
        host.close(first)
        second = host.notify("two", options=HostOptions(replace=first.id))
        assert second is not first
        assert second.id != first.id


# ---------------------------------------------------------------------------
# Closing
# ---------------------------------------------------------------------------


class TestClose:
    def test_close_fires_on_close(self) -> None:
        host = make_host()
        events = Events()
        record = host.notify("x", options=events.options())
        window = record.window
        assert window is not None
        host.close(record)
        assert record.closed
        assert not window.is_valid()
        assert events.closed == [window.id]
        assert host.open_records() == []

    def test_close_is_idempotent(self) -> None:
        host = make_host()
        events = Events()
        record = host.notify("x", options=events.options())
        host.close(record)
        host.close(record)
        host.close(record.id)
        host.close(9999)
        assert len(events.closed) == 1

    def test_closing_window_closes_notification(self) -> None:
        host = make_host()
        events = Events()
        record = host.notify("x", options=events.options())
        assert record.window is not None
        record.window.close()
        assert record.closed
        assert len(events.closed) == 1


class TestPending:
    def test_queued_beyond_max_visible(self) -> None:
        host = make_host(max_visible=1)
        events = Events()
        first = host.notify("one", options=events.options())
        second = host.notify("two", options=events.options())
        assert second.window is None
        assert host.pending_records() == [second]
        assert len(events.opened) == 1

        host.close(first)
        assert second.window is not None
        assert host.pending_records() == []
        assert events.opened[-1] == second.window.id

    def test_close_pending_record(self) -> None:
        host = make_host(max_visible=1)
        host.notify("one")
        second = host.notify("two")
        host.close(second)
        assert second.closed
        assert host.pending_records() == []

    def test_close_pending_record_fires_on_drop(self) -> None:
        host = make_host(max_visible=1)
        events = Events()
        host.notify("one", options=events.options())
        second = host.notify("two", options=events.options())
        host.close(second.id)
        assert events.dropped == [second.id]
        assert events.closed == []


class TestDismiss:
    def test_closes_everything(self) -> None:
        host = make_host()
        records = [host.notify("a"), host.notify("b")]
        host.dismiss()
        assert all(r.closed for r in records)

    def test_pending_dropped(self) -> None:
        host = make_host(max_visible=1)
        events = Events()
        host.notify("a", options=events.options())
        queued = host.notify("b", options=events.options())
        host.dismiss(pending=True)
        assert queued.closed
        assert queued.window is None
        assert len(events.opened) == 1
        assert host.open_records() == []
        assert events.dropped == [queued.id]
        assert len(events.closed) == 1

    def test_nothing_to_dismiss_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="pi.notify.host"):
            make_host().dismiss()
        assert "No notifications to dismiss" in caplog.text

    def test_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="pi.notify.host"):
            make_host().dismiss(silent=True)
        assert "No notifications to dismiss" not in caplog.text


# ---------------------------------------------------------------------------
# Timeouts
# ---------------------------------------------------------------------------


class TestTimeout:
    @pytest.mark.asyncio
    async def test_closes_after_timeout(self) -> None:
        host = make_host()
        record = host.notify("x", options=HostOptions(timeout=0.01))
        await asyncio.sleep(0.05)
        assert record.closed

    @pytest.mark.asyncio
    async def test_config_timeout(self) -> None:
        host = make_host(timeout=0.01)
        record = host.notify("x")
        await asyncio.sleep(0.05)
        assert record.closed

    @pytest.mark.asyncio
    async def test_keep_rearms(self) -> None:
        host = make_host()
        blocking = [True]
        record = host.notify(
            "x", options=HostOptions(timeout=0.01, keep=lambda: blocking[0])
        )
        await asyncio.sleep(0.05)
        assert not record.closed
        blocking[0] = False
        await asyncio.sleep(0.05)
        assert record.closed

    def test_no_loop_means_no_timeout(self) -> None:
        record = make_host().notify("x", options=HostOptions(timeout=0.01))
        assert not record.closed
