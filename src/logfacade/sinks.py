"""Sink implementations for the logging facade.

A sink is any callable accepting the formatted message, its severity and the
name of the function that emitted it. Sinks are responsible for serializing
writes to their underlying medium; the facade calls them from whatever thread
emitted the message.
"""

import logging
import sys
import threading
from datetime import datetime
from typing import Protocol, TextIO

import structlog
from structlog.types import Processor

from .config import ConsoleSinkConfig
from .severity import Severity

# Default processor configurations
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_TIMESTAMP_UTC = False
DEFAULT_LOGGER_NAME = "logfacade"

VERBOSE_LEVEL = 5
logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")

STDLIB_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARN: logging.WARNING,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
    Severity.VERBOSE: VERBOSE_LEVEL,
}


class Sink(Protocol):
    """Destination consuming formatted log entries."""

    def __call__(self, message: str, severity: Severity, function: str) -> None:
        ...


class NullSink:
    """Sink that discards every entry."""

    def __call__(self, message: str, severity: Severity, function: str) -> None:
        return None

    def __repr__(self) -> str:
        return "NullSink()"


class StreamSink:
    """Plain text sink writing one line per entry.

    Attributes:
        _stream:    Target stream, or None to use ``sys.stderr`` at write time
        _lock:      Lock serializing writes from concurrent emitters
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def __call__(self, message: str, severity: Severity, function: str) -> None:
        timestamp = datetime.now().strftime(DEFAULT_TIMESTAMP_FORMAT)
        line = f"{timestamp} [{severity.name}] {function}: {message}\n"
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            stream.write(line)
            stream.flush()


class StructlogSink:
    """Sink rendering entries through structlog's console renderer.

    Entries are forwarded to a private standard library logger whose only
    handler formats records with ``structlog.stdlib.ProcessorFormatter``. The
    logger is not registered with ``logging.getLogger``, so every sink owns
    its handler even when several share a logger name. It does not propagate
    and accepts every level, since the facade has already applied its
    threshold.

    Attributes:
        context:    Context tag attached to every entry
        logger:     Standard library logger the entries are sent to
    """

    def __init__(
            self,
            config: ConsoleSinkConfig | None = None,
            *,
            logger_name: str = DEFAULT_LOGGER_NAME,
            stream: TextIO | None = None
    ) -> None:
        config = config if config is not None else ConsoleSinkConfig(enabled=True)
        self.context = config.context
        self.logger = _create_logger(
            logger_name,
            create_console_handler(config, create_shared_processors(), stream)
        )

    def __call__(self, message: str, severity: Severity, function: str) -> None:
        self.logger.log(
            STDLIB_LEVELS[severity],
            message,
            extra={"function": function, "context": self.context},
        )

    def close(self) -> None:
        """Detach and close the sink's handler."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        self.logger.disabled = True


class StdoutHandler(logging.StreamHandler):
    """StreamHandler writing to whatever ``sys.stdout`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stdout)

    @property
    def stream(self) -> TextIO:
        return sys.stdout

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


def create_shared_processors() -> list[Processor]:
    """Create the list of structlog processors applied to every record.

    Returns:
        List of structlog processors enriching standard library records
    """
    return [
        # Standard library integration
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),

        # Timestamp handling
        structlog.processors.TimeStamper(
            fmt=DEFAULT_TIMESTAMP_FORMAT,
            utc=DEFAULT_TIMESTAMP_UTC
        ),
    ]


def create_console_handler(
        config: ConsoleSinkConfig,
        shared_processors: list[Processor],
        stream: TextIO | None = None
) -> logging.Handler:
    """Create and configure a console logging handler.

    Creates a StreamHandler with structlog formatting. Without an explicit
    stream it writes to the current ``sys.stdout``, resolved on every record.

    Args:
        config:             Console sink configuration settings
        shared_processors:  List of shared structlog processors to use
        stream:             Optional target stream (default: stdout)

    Returns:
        Configured StreamHandler instance
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=config.colors),
        ],
    )
    handler = logging.StreamHandler(stream) if stream is not None else StdoutHandler()
    handler.setFormatter(formatter)
    return handler


def _create_logger(name: str, handler: logging.Handler) -> logging.Logger:
    logger = logging.Logger(name, VERBOSE_LEVEL)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
