from collections.abc import Callable

import pytest

from cluster_toolbox.cluster import Cluster, ClusterShaper
from cluster_toolbox.logging import BaseLogHandler, Logger, LoggerConfig, LogLevel


def pytest_configure(config: pytest.Config) -> None:
    """Register shared markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


class RecordingLogHandler(BaseLogHandler):
    """Keeps every pushed message in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []
        self.pushes = 0
        self.closed = False

    def push(self, buffer: list[str]) -> None:
        self.pushes += 1
        self.messages.extend(buffer)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def log_handler() -> RecordingLogHandler:
    return RecordingLogHandler()


@pytest.fixture
def debug_logger(log_handler: RecordingLogHandler) -> Logger:
    """A logger that records every message at DEBUG and above."""
    config = LoggerConfig(base_level=LogLevel.DEBUG, do_stout=False, buffer_size=1)
    return Logger(name="test", config=config, handlers=[log_handler])


@pytest.fixture
def shaper() -> ClusterShaper:
    return ClusterShaper(period=60, resolution=0.1)


@pytest.fixture
def recorder() -> Callable[[ClusterShaper], dict[str, list[Cluster]]]:
    """Return a helper that attaches list-backed observers to a shaper."""

    def _attach(target: ClusterShaper) -> dict[str, list[Cluster]]:
        events: dict[str, list[Cluster]] = {"closed": [], "unformed": []}
        target.on_close_bar(events["closed"].append)
        target.on_unformed_bar(events["unformed"].append)
        return events

    return _attach
