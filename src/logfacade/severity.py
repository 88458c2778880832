"""Severity definitions and name parsing."""

from enum import IntEnum


class Severity(IntEnum):
    """Log severities ordered by increasing verbosity.

    A message is emitted when its severity is at or below the active
    threshold. ``OFF`` is only meaningful as a threshold.
    """

    OFF = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    VERBOSE = 5

    @classmethod
    def parse(cls, value: "Severity | str") -> "Severity":
        """Resolve a severity from a member or a case-insensitive name.

        Args:
            value: Severity member or name such as ``"info"`` or ``"Verbose"``

        Returns:
            Matching Severity member

        Raises:
            ValueError: If the name is not a known severity
        """
        if isinstance(value, cls):
            return value

        name = str(value).strip().upper()
        name = _ALIASES.get(name, name)
        if name in cls.__members__:
            return cls[name]

        msg = (
            f"Invalid severity: {value!r}. "
            f"Must be one of: {', '.join(VALID_SEVERITY_NAMES)}"
        )
        raise ValueError(msg)

    @property
    def label(self) -> str:
        return self.name.capitalize()


_ALIASES = {"WARNING": "WARN"}

VALID_SEVERITY_NAMES = tuple(severity.label for severity in Severity)
EMITTING_SEVERITIES = tuple(severity for severity in Severity if severity is not Severity.OFF)
