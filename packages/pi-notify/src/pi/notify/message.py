"""Messages handed to notification views, and the store that looks them up."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Literal

Level = Literal["trace", "debug", "info", "warn", "error"]

_ids = itertools.count(1)


@dataclass
class MessageOpts:
    """Per-message options.

    ``notify_id`` is written by the notification view: it holds the id of
    the live notification showing this message and is cleared when that
    notification closes.
    """

    title: str | None = None
    timeout: float | None = None
    replace_current: bool = False
    replace_message_id: int | None = None
    notify_id: int | None = None
    is_nil: bool = False


@dataclass
class Message:
    text: str = ""
    level: Level | None = None
    opts: MessageOpts = field(default_factory=MessageOpts)
    hl_group: str | None = None
    id: int = field(default_factory=lambda: next(_ids))

    def content(self) -> str:
        return self.text

    def lines(self) -> list[str]:
        return self.text.split("\n")


class MessageStore:
    """In-memory message registry keyed by message id."""

    def __init__(self) -> None:
        self._messages: dict[int, Message] = {}

    def add(self, message: Message) -> Message:
        self._messages[message.id] = message
        return message

    def get_by_id(self, message_id: int) -> Message | None:
        return self._messages.get(message_id)

    def remove(self, message_id: int) -> None:
        self._messages.pop(message_id, None)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)
