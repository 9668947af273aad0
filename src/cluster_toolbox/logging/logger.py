"""Buffered single-process logger."""

import sys
import traceback

from cluster_toolbox.errors import ConfigurationError
from cluster_toolbox.logging.config import LoggerConfig, LogLevel
from cluster_toolbox.logging.handlers import BaseLogHandler
from cluster_toolbox.time.time import time_iso8601, time_s


class Logger:
    """A simple synchronous logger that buffers messages and pushes them to
    configured handlers at an appropriate time or based on severity.

    Flushing happens on the calling thread, on the first log call after the
    buffer fills up or the flush interval elapses, and immediately for errors.
    """

    def __init__(
        self,
        name: str = "",
        config: LoggerConfig | None = None,
        handlers: list[BaseLogHandler] | None = None,
    ):
        """Initializes a Logger with specified configuration and handlers.

        Args:
            name (str): Name of the logger. Defaults to an empty string.
            config (LoggerConfig): Configuration settings for the logger (base level, stdout, buffer size, etc.).
            handlers (list[BaseLogHandler], optional): A list of handler objects that inherit from BaseLogHandler.
                Defaults to an empty list if not provided.

        Raises:
            ConfigurationError: If one of the provided handlers does not inherit from BaseLogHandler.

        """
        self._name = name

        self._config = config
        if self._config is None:
            self._config = LoggerConfig()

        self._handlers = handlers
        if self._handlers is None:
            self._handlers = []

        for handler in self._handlers:
            if not isinstance(handler, BaseLogHandler):
                raise ConfigurationError(
                    f"Invalid handler; expected BaseLogHandler but got {type(handler).__name__}"
                )
            handler.add_primary_config(self._config)

        self._buffer: list[str] = []
        self._buffer_start_time_s = time_s()
        self._is_running = True

    def _flush_buffer(self) -> None:
        """Flushes the log message buffer to stdout and all handlers."""
        if not self._buffer:
            return

        buffer, self._buffer = self._buffer, []
        self._buffer_start_time_s = time_s()

        if self._config.do_stout:
            print("\n".join(buffer), file=sys.stdout)

        for handler in self._handlers:
            handler.push(buffer)

    def _process_log(self, level: LogLevel, msg: str) -> None:
        """Formats a message, buffers it and flushes when due.

        Args:
            level (LogLevel): The severity level of the message.
            msg (str): The actual log message.

        """
        try:
            log_msg = self._config.str_format % {
                "asctime": time_iso8601(),
                "name": self._name,
                "levelname": level.name,
                "message": msg,
            }
        except (KeyError, TypeError, ValueError):
            traceback.print_exc(file=sys.stderr)
            return

        self._buffer.append(log_msg)

        if (
            level >= LogLevel.ERROR
            or len(self._buffer) >= self._config.buffer_size
            or (time_s() - self._buffer_start_time_s) >= self._config.flush_interval_s
        ):
            self._flush_buffer()

    def _is_enabled(self, level: LogLevel) -> bool:
        return self._is_running and self._config.base_level <= level

    def set_log_level(self, level: LogLevel) -> None:
        """Modify the logger's base log level at runtime.

        Args:
            level (LogLevel): The new base log level.

        """
        self.debug(f"Changing base log level from {self._config.base_level.name} to {level.name}")
        self._config.base_level = level
        for handler in self._handlers:
            handler.add_primary_config(self._config)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check whether a message at ``level`` would be recorded."""
        return self._is_enabled(level)

    def trace(self, msg: str) -> None:
        """Send a trace-level log message."""
        if self._is_enabled(LogLevel.TRACE):
            self._process_log(LogLevel.TRACE, msg)

    def debug(self, msg: str) -> None:
        """Send a debug-level log message."""
        if self._is_enabled(LogLevel.DEBUG):
            self._process_log(LogLevel.DEBUG, msg)

    def info(self, msg: str) -> None:
        """Send an info-level log message."""
        if self._is_enabled(LogLevel.INFO):
            self._process_log(LogLevel.INFO, msg)

    def warning(self, msg: str) -> None:
        """Send a warning-level log message."""
        if self._is_enabled(LogLevel.WARNING):
            self._process_log(LogLevel.WARNING, msg)

    def error(self, msg: str) -> None:
        """Send an error-level log message. Errors flush immediately."""
        if self._is_enabled(LogLevel.ERROR):
            self._process_log(LogLevel.ERROR, msg)

    def flush(self) -> None:
        """Push every buffered message to stdout and the handlers now."""
        self._flush_buffer()

    def shutdown(self) -> None:
        """Flush remaining messages, close handlers and stop accepting logs."""
        if not self._is_running:
            return
        self._flush_buffer()
        self._is_running = False
        for handler in self._handlers:
            handler.close()

    def is_running(self) -> bool:
        """Check if the logger is running."""
        return self._is_running

    def get_name(self) -> str:
        """Get the name of the logger."""
        return self._name

    def get_config(self) -> LoggerConfig:
        """Get the configuration of the logger."""
        return self._config
