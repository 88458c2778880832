"""Shared fixtures for facade tests."""

from dataclasses import dataclass, field

import pytest

from logfacade import LogFacade, Severity


@dataclass
class RecordingSink:
    """Sink that keeps every entry it receives."""

    entries: list[tuple[str, Severity, str]] = field(default_factory=list)

    def __call__(self, message: str, severity: Severity, function: str) -> None:
        self.entries.append((message, severity, function))

    @property
    def messages(self) -> list[str]:
        return [message for message, _, _ in self.entries]

    @property
    def severities(self) -> list[Severity]:
        return [severity for _, severity, _ in self.entries]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def facade(sink: RecordingSink) -> LogFacade:
    return LogFacade(threshold=Severity.VERBOSE, sink=sink)


@pytest.fixture
def other_sink() -> RecordingSink:
    return RecordingSink()
