"""Leveled logging facade and its startup builder.

This module provides the ``LogFacade``, which tests an active threshold before
formatting a message and forwarding it to a sink, and the fluent builder used
to wire one up at process start.

There is no global facade. The application builds one at startup and passes it
to the code that logs, which keeps the facade replaceable in tests.
"""

import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final

from .config import FacadeConfig
from .severity import Severity
from .sinks import NullSink, Sink, StructlogSink

# Frames between the caller and _emit: caller -> info() -> _emit()
_CALLER_DEPTH: Final = 2


class LogFacade:
    """Leveled logging front end.

    Every emission method compares its fixed severity against the current
    threshold. Suppressed calls do no formatting work. Logging calls never
    raise: formatting errors are replaced by a fallback string and sink
    errors are swallowed and counted.

    Attributes:
        _threshold:     Most verbose severity still emitted
        _sink:          Destination for formatted entries
        _lock:          Lock serializing reconfiguration and counter updates
        _failures:      Number of sink invocations that raised
        _format_errors: Number of messages that needed the fallback format
    """

    def __init__(self, threshold: Severity | str = Severity.OFF, sink: Sink | None = None) -> None:
        self._threshold = Severity.parse(threshold)
        self._sink: Sink = sink if sink is not None else NullSink()
        self._lock: Final = threading.Lock()
        self._failures = 0
        self._format_errors = 0

    def __repr__(self) -> str:
        return f"LogFacade(threshold={self._threshold.label}, sink={self._sink!r})"

    @property
    def threshold(self) -> Severity:
        return self._threshold

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def failures(self) -> int:
        """Number of entries lost because the sink raised."""
        return self._failures

    @property
    def format_errors(self) -> int:
        """Number of messages emitted with the fallback format."""
        return self._format_errors

    def set_threshold(self, level: Severity | str) -> None:
        """Set the most verbose severity that is still emitted.

        Args:
            level: Severity member or name; ``Off`` suppresses everything

        Raises:
            ValueError: If the name is not a valid severity
        """
        threshold = Severity.parse(level)
        with self._lock:
            self._threshold = threshold

    def set_sink(self, sink: Sink | None) -> None:
        """Route subsequent entries to a new sink.

        Entries already delivered to the previous sink are not replayed.

        Args:
            sink: New sink, or None to discard entries
        """
        with self._lock:
            self._sink = sink if sink is not None else NullSink()

    def is_enabled(self, severity: Severity) -> bool:
        """Check whether a message of the given severity would be emitted.

        Args:
            severity: Severity to check

        Returns:
            True if the severity passes the current threshold, False otherwise
        """
        return Severity.OFF < severity <= self._threshold

    def error(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.ERROR, fmt, args)

    def warn(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.WARN, fmt, args)

    def info(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.INFO, fmt, args)

    def debug(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.DEBUG, fmt, args)

    def verbose(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.VERBOSE, fmt, args)

    def _emit(self, severity: Severity, fmt: str, args: tuple[Any, ...]) -> None:
        if not self.is_enabled(severity):
            return

        message = self._format(fmt, args)
        function = _caller_name(_CALLER_DEPTH)
        sink = self._sink
        try:
            sink(message, severity, function)
        except Exception:
            with self._lock:
                self._failures += 1

    def _format(self, fmt: str, args: tuple[Any, ...]) -> str:
        """Apply printf-style substitution, falling back on failure.

        A lone non-empty mapping argument is used for ``%(name)s`` keys.
        Without arguments the format string is returned unchanged.
        """
        if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
            values: Any = args[0]
        else:
            values = args

        try:
            return str(fmt) % values if args else str(fmt)
        except Exception as e:
            with self._lock:
                self._format_errors += 1
            return (
                f"{_safe_repr(fmt)} % {_safe_repr(args)} "
                f"(formatting failed: {type(e).__name__}: {_safe_str(e)})"
            )


def _caller_name(depth: int) -> str:
    try:
        return sys._getframe(depth + 1).f_code.co_qualname
    except ValueError:
        return "<unknown>"


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return _safe_repr(value)


@dataclass
class FacadeBuilder:
    """Builder for a configured LogFacade.

    Provides a fluent interface to adjust a loaded configuration before
    creating the facade. Each ``build()`` call returns a new, independent
    facade.

    Attributes:
        _config:    Configuration from TOML, defaults, and ``LOG_LEVEL``
        _threshold: Optional explicit threshold overriding the configuration
        _sink:      Optional explicit sink overriding the console setting
        _stream:    Optional stream for the console sink
    """

    _config: FacadeConfig
    _threshold: Severity | None = None
    _sink: Sink | None = None
    _stream: Any = None

    def with_threshold(self, level: Severity | str) -> "FacadeBuilder":
        """Set the threshold, overriding both the file and ``LOG_LEVEL``.

        Args:
            level: Threshold severity or severity name

        Returns:
            Self for method chaining
        """
        self._threshold = Severity.parse(level)
        return self

    def with_sink(self, sink: Sink) -> "FacadeBuilder":
        """Send entries to a custom sink instead of the console.

        Args:
            sink: Callable accepting message, severity and function name

        Returns:
            Self for method chaining
        """
        self._sink = sink
        return self

    def with_console(self, stream: Any = None, *, colors: bool | None = None) -> "FacadeBuilder":
        """Enable console output rendered through structlog.

        Args:
            stream: Optional target stream (default: stdout)
            colors: Optional override of the configured color setting

        Returns:
            Self for method chaining
        """
        console = self._config.console.enable()
        if colors is not None:
            console = replace(console, colors=colors)

        self._config = replace(self._config, console=console)
        self._stream = stream
        return self

    def build(self) -> LogFacade:
        """Create the facade from the accumulated configuration.

        Returns:
            Configured LogFacade instance
        """
        threshold = self._threshold if self._threshold is not None else self._config.threshold
        return LogFacade(threshold=threshold, sink=self._create_sink())

    def _create_sink(self) -> Sink:
        if self._sink is not None:
            return self._sink

        if self._config.console.enabled:
            return StructlogSink(self._config.console, stream=self._stream)

        return NullSink()


def configure_facade(
        config_path: str | Path | None = None,
        *,
        environ: Mapping[str, str] | None = None
) -> FacadeBuilder:
    """Start configuring a facade at process start.

    Loads the configuration from a TOML file when a path is given, otherwise
    uses the defaults (threshold Off, no console output). The ``LOG_LEVEL``
    environment variable is then applied on top.

    Args:
        config_path:    Optional path to a TOML config file
        environ:        Environment mapping to read (defaults to ``os.environ``)

    Returns:
        FacadeBuilder instance for method chaining

    Raises:
        ValueError: If the file or ``LOG_LEVEL`` holds an invalid value
    """
    config = (
        FacadeConfig.from_toml(Path(config_path))
        if config_path is not None
        else FacadeConfig()
    )

    return FacadeBuilder(config.with_env(environ))
