"""Leveled logging facade with pluggable sinks.

This package provides a small logging front end with five leveled emission
functions (error, warn, info, debug, verbose). Each call checks the active
threshold before formatting its message and forwarding it to a sink, so
suppressed calls cost a single comparison.

Key Features:
    - Ordered severities: Off < Error < Warn < Info < Debug < Verbose
    - Safe defaults: threshold Off and a no-op sink until configured
    - printf-style formatting with a fallback string on formatting errors
    - Logging calls never raise; sink failures are counted, not propagated
    - Caller function name passed to the sink with every entry
    - Console sink rendered through structlog's ConsoleRenderer
    - TOML configuration and the LOG_LEVEL environment variable

Basic Usage:
    ```python
    from logfacade import configure_facade

    # Threshold from LOG_LEVEL, console output through structlog
    log = configure_facade().with_console().build()
    log.info("Connected to %s:%d", host, port)
    log.debug("Not shown unless LOG_LEVEL is Debug or Verbose")

    # From a configuration file, with an explicit threshold
    log = configure_facade("config/logging.toml").with_threshold("Warn").build()

    # Custom sink
    def sink(message, severity, function):
        print(severity.label, function, message)

    log = configure_facade().with_threshold("Verbose").with_sink(sink).build()
    ```

Configuration:
    ```toml
    [logging]
    level = "Info"   # (Off, Error, Warn, Info, Debug, Verbose)
    context = 58205  # Context tag attached by the console sink

    [logging.console]
    enabled = true
    colors = true
    ```

    All keys are optional. LOG_LEVEL overrides the file's level, and
    ``with_threshold()`` overrides both.

Implementation Notes:
    - There is no global facade; build one at startup and pass it around
    - Reconfiguration (set_threshold, set_sink) is rare and not replayed
    - Sinks serialize writes to their own medium
"""

from .config import ConsoleSinkConfig, FacadeConfig
from .facade import FacadeBuilder, LogFacade, configure_facade
from .severity import Severity
from .sinks import NullSink, Sink, StreamSink, StructlogSink

__all__ = [
    "ConsoleSinkConfig",
    "FacadeBuilder",
    "FacadeConfig",
    "LogFacade",
    "NullSink",
    "Severity",
    "Sink",
    "StreamSink",
    "StructlogSink",
    "configure_facade",
]
