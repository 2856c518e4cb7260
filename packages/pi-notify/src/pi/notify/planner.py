"""Turn a batch of messages into the notifications that will show them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from pi.notify.config import HostOptions, NotifyOptions
from pi.notify.message import Level, Message, MessageOpts


@dataclass
class NotificationRequest:
    """One notification to create, covering one or more messages."""

    content: str
    messages: list[Message] = field(default_factory=list)
    title: str | None = None
    level: Level | None = None
    opts: MessageOpts | None = None


def merged_content(messages: Sequence[Message]) -> str:
    return "\n".join(m.content() for m in messages)


def plan(messages: Sequence[Message], opts: NotifyOptions) -> list[NotificationRequest]:
    """Plan the notifications for *messages*.

    In merge mode the whole batch becomes a single request; otherwise each
    message gets its own request, in order, carrying its title, level and
    options. An empty batch plans nothing.
    """
    if not messages:
        return []
    if opts.merge:
        return [NotificationRequest(content=merged_content(messages), messages=list(messages))]
    return [
        NotificationRequest(
            content=m.content(),
            messages=[m],
            title=m.opts.title,
            level=m.level,
            opts=m.opts,
        )
        for m in messages
    ]


def resolve_host_options(
    opts: NotifyOptions, request: NotificationRequest, **extra: Any
) -> tuple[Level | None, HostOptions]:
    """Return the level and host options to show *request* with.

    Title and timeout come from the message's own options, then the request,
    then the view. A view-level ``level`` wins over the request's. *extra*
    fills in the remaining ``HostOptions`` fields.
    """
    per = request.opts
    title = (per.title if per is not None else None) or request.title or opts.title
    timeout = per.timeout if per is not None and per.timeout is not None else opts.timeout
    return opts.level or request.level, HostOptions(title=title, timeout=timeout, **extra)
