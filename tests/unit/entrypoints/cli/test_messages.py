"""Unit tests for the verdict lines printed by ``zigj run``."""

import io

import click
import pytest

from zigj.entrypoints.cli.helpers import stalled, summary

SET_YELLOW = "\x1b[33m"
SET_GREEN = "\x1b[32m"
SET_RED = "\x1b[31m"


class Terminal(io.StringIO):
    """A stderr stand-in that claims to be a TTY with a given encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        """Declared character encoding."""
        return self._encoding

    def isatty(self) -> bool:
        """Keep Click from stripping ANSI styles."""
        return True


@pytest.fixture
def stderr(monkeypatch):
    """Route Click's stderr to a UTF-8 `Terminal`; return a factory for others."""

    def _use(encoding: str = "utf-8") -> Terminal:
        stream = Terminal(encoding)
        monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
        monkeypatch.setattr("sys.stderr", stream)
        return stream

    monkeypatch.delenv("NO_COLOR", raising=False)
    return _use


@pytest.mark.parametrize(
    ("failed", "marker", "color"),
    [(False, "✅", SET_GREEN), (True, "❌", SET_RED)],
    ids=["passed", "failed"],
)
def test_summary_colors_by_verdict(stderr, failed, marker, color):
    """The tally is green when the run passed and red otherwise."""
    stream = stderr()

    summary("3 passed, 1 failed, 0 errors", failed=failed)

    out = stream.getvalue()
    assert f"{marker}  3 passed, 1 failed, 0 errors" in out
    assert color in out


def test_stall_line_names_test_queue_and_timeout(stderr):
    """The stall warning says which test hung, for how long, and what was skipped."""
    stream = stderr()

    stalled("fetch", 2, 0.5)

    out = stream.getvalue()
    assert (
        "Test 'fetch' did not signal completion within 0.5s; "
        "2 queued tests did not run."
    ) in out
    assert "⚠️" in out
    assert SET_YELLOW in out


@pytest.mark.parametrize(
    ("emit", "marker"),
    [
        (lambda: summary("1 passed, 0 failed, 0 errors", failed=False), "[OK]"),
        (lambda: summary("0 passed, 1 failed, 0 errors", failed=True), "[X]"),
        (lambda: stalled("fetch", 0, 5), "[!]"),
    ],
    ids=["passed", "failed", "stalled"],
)
def test_ascii_terminal_gets_ascii_markers(stderr, emit, marker):
    """Markers fall back to ASCII when stderr cannot encode emoji."""
    stream = stderr("ascii")

    emit()

    assert click.unstyle(stream.getvalue()).startswith(f"{marker}  ")


def test_verdict_never_touches_stdout(capsys):
    """stdout is reserved for result lines."""
    summary("1 passed, 0 failed, 0 errors", failed=False)

    captured = capsys.readouterr()
    assert "1 passed" in captured.err
    assert captured.out == ""
