from abc import ABC, abstractmethod

from cluster_toolbox.logging.config import LoggerConfig


class BaseLogHandler(ABC):
    """
    Abstract base class for log handlers, defining how log messages
    should be pushed to their respective destinations.
    """

    def __init__(self) -> None:
        self._primary_config = None

    @property
    def primary_config(self) -> LoggerConfig | None:
        """Get the primary config."""
        return self._primary_config

    def add_primary_config(self, config: LoggerConfig) -> None:
        """
        Add the primary configuration to the handler.
        """
        self._primary_config = config

    def close(self) -> None:
        """Release any resources held by the handler."""

    @abstractmethod
    def push(self, buffer: list[str]) -> None:
        """
        Flushes the given buffer of log entries in some way.

        Args:
            buffer (list[str]): The list of log messages to push.
        """
        pass
