"""Configuration handling for the logging facade.

This module provides the configuration classes and TOML parsing for the facade.
It defines the configuration schema, the validation rules, and how the
``LOG_LEVEL`` environment variable is applied on top of a loaded configuration.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

import tomllib

from .severity import Severity

LOG_LEVEL_ENV = "LOG_LEVEL"

# Context tag attached to every entry rendered by the structlog sink
DEFAULT_LOG_CONTEXT = 58205


@dataclass(frozen=True, slots=True)
class ConsoleSinkConfig:
    """Configuration for console output rendered through structlog.

    Attributes:
        enabled:    Route entries to the console (default: False)
        colors:     Enable colored output (requires 'colorama' on Windows)
        context:    Context tag attached to every rendered entry
    """

    enabled: bool = False
    colors: bool = True
    context: int = DEFAULT_LOG_CONTEXT

    def enable(self) -> "ConsoleSinkConfig":
        """Create a new instance with console output enabled.

        Returns:
            New ConsoleSinkConfig instance with console output enabled
        """
        return replace(self, enabled=True)


@dataclass(frozen=True, slots=True)
class FacadeConfig:
    """Complete facade configuration settings.

    Attributes:
        threshold:  Most verbose severity that is still emitted
        console:    ConsoleSinkConfig instance for console output settings
    """

    threshold: Severity = Severity.OFF
    console: ConsoleSinkConfig = field(default_factory=ConsoleSinkConfig)

    def __post_init__(self) -> None:
        """Normalize the threshold after initialization.

        Raises:
            ValueError: If the threshold is not a valid severity
        """
        object.__setattr__(self, "threshold", Severity.parse(self.threshold))

    def with_threshold(self, level: Severity | str) -> "FacadeConfig":
        """Create a new instance with an updated threshold.

        Args:
            level: New threshold severity or severity name

        Returns:
            New FacadeConfig instance with the updated threshold
        """
        return replace(self, threshold=Severity.parse(level))

    def with_env(self, environ: Mapping[str, str] | None = None) -> "FacadeConfig":
        """Apply the ``LOG_LEVEL`` environment variable, if set.

        Args:
            environ: Environment mapping to read (defaults to ``os.environ``)

        Returns:
            New FacadeConfig instance, or self when ``LOG_LEVEL`` is unset or empty

        Raises:
            ValueError: If ``LOG_LEVEL`` does not name a valid severity
        """
        environ = os.environ if environ is None else environ
        value = environ.get(LOG_LEVEL_ENV, "").strip()
        if not value:
            return self

        try:
            return self.with_threshold(value)
        except ValueError as e:
            msg = f"Invalid {LOG_LEVEL_ENV} environment variable: {e!s}"
            raise ValueError(msg) from e

    @classmethod
    def from_toml(cls, config_path: Path) -> "FacadeConfig":
        """Create FacadeConfig instance from a TOML configuration file.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Configured FacadeConfig instance

        Raises:
            ValueError: If required configuration keys are missing or if values are invalid
        """
        config_data = cls._load_toml(config_path)
        try:
            return cls._parse_config(config_data)

        except KeyError as e:
            msg = f"Missing required configuration key: {e.args[0]}"
            raise ValueError(msg) from e

        except (TypeError, ValueError) as e:
            msg = f"Invalid value in configuration file: {e!s}"
            raise ValueError(msg) from e

    @classmethod
    def _load_toml(cls, config_path: Path) -> dict:
        """Load and parse the TOML configuration file.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError:  If the configuration file doesn't exist
            TOMLDecodeError:    If the TOML file is malformed
        """
        try:
            with config_path.open("rb") as f:
                return tomllib.load(f)

        except FileNotFoundError as e:
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg) from e

        except tomllib.TOMLDecodeError as e:
            msg = f"Failed to parse TOML file {config_path}: {e!s}"
            raise tomllib.TOMLDecodeError(msg) from e

    @classmethod
    def _parse_config(cls, config_data: dict) -> "FacadeConfig":
        logging_config = config_data["logging"]
        if not isinstance(logging_config, dict):
            msg = "[logging] must be a table"
            raise TypeError(msg)

        console_config = logging_config.get("console", {})
        if not isinstance(console_config, dict):
            msg = "[logging.console] must be a table"
            raise TypeError(msg)

        return cls(
            threshold=cls._parse_level(logging_config.get("level", Severity.OFF)),
            console=cls._create_console_config(
                console_config,
                context=logging_config.get("context", DEFAULT_LOG_CONTEXT),
            ),
        )

    @staticmethod
    def _parse_level(level: object) -> Severity:
        if not isinstance(level, str | Severity):
            msg = f"level must be a string, got {level!r}"
            raise TypeError(msg)

        try:
            return Severity.parse(level)
        except ValueError as e:
            msg = f"level: {e!s}"
            raise ValueError(msg) from e

    @staticmethod
    def _create_console_config(console_config: dict, context: int) -> ConsoleSinkConfig:
        """Create a ConsoleSinkConfig from the configuration dictionary.

        A ``[logging.console]`` table enables console output unless it sets
        ``enabled = false`` explicitly.

        Args:
            console_config: Dictionary containing console sink configuration
            context:        Context tag from the ``[logging]`` table

        Returns:
            Configured ConsoleSinkConfig instance

        Raises:
            TypeError: If a value has the wrong TOML type
        """
        if isinstance(context, bool) or not isinstance(context, int):
            msg = f"context must be an integer, got {context!r}"
            raise TypeError(msg)

        enabled = console_config.get("enabled", bool(console_config))
        colors = console_config.get("colors", True)
        for key, value in (("enabled", enabled), ("colors", colors)):
            if not isinstance(value, bool):
                msg = f"{key} must be a boolean, got {value!r}"
                raise TypeError(msg)

        return ConsoleSinkConfig(enabled=enabled, colors=colors, context=context)
