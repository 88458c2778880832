import io

import pytest

from logfacade import ConsoleSinkConfig, NullSink, Severity, StreamSink, StructlogSink


def test_null_sink_discards() -> None:
    assert NullSink()("ignored", Severity.ERROR, "caller") is None


def test_stream_sink_writes_one_line_per_entry() -> None:
    stream = io.StringIO()
    sink = StreamSink(stream)

    sink("first", Severity.WARN, "Client.connect")
    sink("second", Severity.VERBOSE, "<module>")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("[WARN] Client.connect: first")
    assert lines[1].endswith("[VERBOSE] <module>: second")


def test_stream_sink_defaults_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    StreamSink()("to stderr", Severity.INFO, "main")
    assert "[INFO] main: to stderr" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("severity", "level_name"),
    [
        (Severity.ERROR, "error"),
        (Severity.WARN, "warning"),
        (Severity.INFO, "info"),
        (Severity.DEBUG, "debug"),
        (Severity.VERBOSE, "verbose"),
    ],
)
def test_structlog_sink_renders_every_severity(severity: Severity, level_name: str) -> None:
    stream = io.StringIO()
    sink = StructlogSink(
        ConsoleSinkConfig(enabled=True, colors=False, context=42),
        logger_name="logfacade.test.levels",
        stream=stream,
    )

    sink("rendered message", severity, "Client.connect")

    output = stream.getvalue()
    assert "rendered message" in output
    assert f"[{level_name}" in output
    assert "function=Client.connect" in output
    assert "context=42" in output


def test_structlog_sink_does_not_propagate() -> None:
    stream = io.StringIO()
    sink = StructlogSink(
        ConsoleSinkConfig(enabled=True, colors=False),
        logger_name="logfacade.test.isolated",
        stream=stream,
    )

    assert sink.logger.propagate is False
    assert len(sink.logger.handlers) == 1


def test_structlog_sink_keeps_percent_signs() -> None:
    stream = io.StringIO()
    sink = StructlogSink(
        ConsoleSinkConfig(enabled=True, colors=False),
        logger_name="logfacade.test.percent",
        stream=stream,
    )

    sink("load at 100%", Severity.INFO, "monitor")

    assert "load at 100%" in stream.getvalue()


def test_structlog_sinks_sharing_a_name_keep_their_own_output() -> None:
    first_stream, second_stream = io.StringIO(), io.StringIO()
    config = ConsoleSinkConfig(enabled=True, colors=False)
    first = StructlogSink(config, logger_name="logfacade.test.shared", stream=first_stream)
    second = StructlogSink(config, logger_name="logfacade.test.shared", stream=second_stream)

    first("from first", Severity.INFO, "a")
    second("from second", Severity.INFO, "b")

    assert "from first" in first_stream.getvalue()
    assert "from second" not in first_stream.getvalue()
    assert "from second" in second_stream.getvalue()
    assert "from first" not in second_stream.getvalue()


def test_structlog_sink_resolves_stdout_when_writing(capsys: pytest.CaptureFixture[str]) -> None:
    sink = StructlogSink(ConsoleSinkConfig(enabled=True, colors=False), logger_name="logfacade.test.stdout")

    sink("to stdout", Severity.INFO, "main")

    assert "to stdout" in capsys.readouterr().out


def test_structlog_sink_close_detaches_handler() -> None:
    stream = io.StringIO()
    sink = StructlogSink(
        ConsoleSinkConfig(enabled=True, colors=False),
        logger_name="logfacade.test.closed",
        stream=stream,
    )

    sink.close()
    sink("after close", Severity.ERROR, "main")

    assert sink.logger.handlers == []
    assert stream.getvalue() == ""
