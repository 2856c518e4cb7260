"""Tests for pi.notify.planner."""

from __future__ import annotations

from pi.notify.config import NotifyOptions
from pi.notify.message import Message, MessageOpts
from pi.notify.planner import NotificationRequest, merged_content, plan, resolve_host_options


def make_messages() -> list[Message]:
    return [
        Message("one", level="info", opts=MessageOpts(title="First")),
        Message("two", level="warn"),
        Message("three\nlines", level="error"),
    ]


class TestSplit:
    def test_one_request_per_message(self) -> None:
        messages = make_messages()
        requests = plan(messages, NotifyOptions())
        assert [r.messages for r in requests] == [[m] for m in messages]

    def test_requests_carry_message_fields(self) -> None:
        messages = make_messages()
        first = plan(messages, NotifyOptions())[0]
        assert first.content == "one"
        assert first.title == "First"
        assert first.level == "info"
        assert first.opts is messages[0].opts

    def test_multiline_content(self) -> None:
        requests = plan(make_messages(), NotifyOptions())
        assert requests[2].content == "three\nlines"


class TestMerge:
    def test_single_request_covers_batch(self) -> None:
        messages = make_messages()
        requests = plan(messages, NotifyOptions(merge=True))
        assert len(requests) == 1
        assert requests[0].messages == messages
        assert requests[0].content == "one\ntwo\nthree\nlines"

    def test_title_and_level_left_to_view(self) -> None:
        request = plan(make_messages(), NotifyOptions(merge=True))[0]
        assert request.title is None
        assert request.level is None
        assert request.opts is None

    def test_merged_content(self) -> None:
        assert merged_content([Message("a"), Message("b")]) == "a\nb"


class TestResolveHostOptions:
    def test_view_defaults(self) -> None:
        request = NotificationRequest(content="a")
        level, options = resolve_host_options(NotifyOptions(timeout=2.0), request)
        assert level is None
        assert options.title == "Notification"
        assert options.timeout == 2.0

    def test_request_title_and_level(self) -> None:
        request = NotificationRequest(content="a", title="Req", level="warn")
        level, options = resolve_host_options(NotifyOptions(title="View"), request)
        assert level == "warn"
        assert options.title == "Req"

    def test_message_overrides_win(self) -> None:
        per = MessageOpts(title="Own", timeout=0.5)
        request = NotificationRequest(content="a", title="Req", opts=per)
        _, options = resolve_host_options(NotifyOptions(timeout=2.0), request)
        assert options.title == "Own"
        assert options.timeout == 0.5

    def test_view_level_wins(self) -> None:
        request = NotificationRequest(content="a", level="info")
        level, _ = resolve_host_options(NotifyOptions(level="error"), request)
        assert level == "error"

    def test_extra_fields_passed_through(self) -> None:
        request = NotificationRequest(content="a")
        _, options = resolve_host_options(NotifyOptions(), request, replace=7, animate=False)
        assert options.replace == 7
        assert options.animate is False


def test_empty_batch() -> None:
    assert plan([], NotifyOptions()) == []
    assert plan([], NotifyOptions(merge=True)) == []
