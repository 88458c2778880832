import pytest

from logfacade import Severity
from logfacade.severity import EMITTING_SEVERITIES, VALID_SEVERITY_NAMES


def test_severities_are_ordered_by_verbosity() -> None:
    assert (
        Severity.OFF
        < Severity.ERROR
        < Severity.WARN
        < Severity.INFO
        < Severity.DEBUG
        < Severity.VERBOSE
    )


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Off", Severity.OFF),
        ("error", Severity.ERROR),
        ("WARN", Severity.WARN),
        ("warning", Severity.WARN),
        (" Info ", Severity.INFO),
        ("Debug", Severity.DEBUG),
        ("verbose", Severity.VERBOSE),
    ],
)
def test_parse_accepts_names_in_any_case(name: str, expected: Severity) -> None:
    assert Severity.parse(name) is expected


def test_parse_passes_members_through() -> None:
    assert Severity.parse(Severity.DEBUG) is Severity.DEBUG


def test_parse_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Must be one of: Off, Error, Warn, Info, Debug, Verbose"):
        Severity.parse("trace")


def test_off_is_not_an_emitting_severity() -> None:
    assert Severity.OFF not in EMITTING_SEVERITIES
    assert len(EMITTING_SEVERITIES) == 5
    assert VALID_SEVERITY_NAMES[0] == "Off"
