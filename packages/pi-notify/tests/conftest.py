import pytest

from pi.notify.config import HostConfig, HostOptions
from pi.notify.host import NotificationHost, NotificationRecord, set_host
from pi.notify.message import MessageStore


class RecordingHost(NotificationHost):
    """Host that remembers every ``notify`` call."""

    def __init__(self, config: HostConfig | None = None) -> None:
        super().__init__(config or HostConfig(timeout=None))
        self.calls: list[tuple[str | None, str | None, HostOptions]] = []

    def notify(self, content, level=None, options=None) -> NotificationRecord:
        self.calls.append((content, level, options))
        return super().notify(content, level, options)


@pytest.fixture
def host():
    """Host without auto-close timeouts."""
    return RecordingHost()


@pytest.fixture
def store():
    return MessageStore()


@pytest.fixture
def module_host():
    """Install a fresh module-level host for the duration of a test."""
    installed = RecordingHost()
    set_host(installed)
    yield installed
    set_host(None)
