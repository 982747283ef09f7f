"""Terminal reporter.

Writes one colorized line per event, ``<glyph> <test>: <message>``:
passes in green with a check mark, failures and exceptions in red with a
cross. Glyphs fall back to ASCII when the target stream cannot encode them.
"""

from __future__ import annotations

import sys
from collections import Counter
from typing import TextIO

import click

from zigj import glyphs
from zigj.interfaces.reporter import AbstractReporter, Event, EventKind

PASS_GLYPHS = ("✔", "[OK]")  # pragma: no mutate
FAIL_GLYPHS = ("✘", "[X]")  # pragma: no mutate


class TerminalReporter(AbstractReporter):
    """Reporter printing colorized result lines.

    Args:
        stream: Text stream to write to; defaults to ``sys.stdout`` at write time.
        color: Force color on/off; ``None`` lets Click decide from the stream.
    """

    def __init__(self, stream: TextIO | None = None, color: bool | None = None) -> None:
        self._stream = stream
        self.color = color
        self.counts: Counter[EventKind] = Counter()

    @property
    def stream(self) -> TextIO:
        """The stream lines are written to."""
        return self._stream if self._stream is not None else sys.stdout

    @property
    def failed(self) -> bool:
        """Whether any failure or exception has been reported."""
        return bool(self.counts[EventKind.FAIL] or self.counts[EventKind.EXCEPTION])

    def glyph(self, kind: EventKind) -> str:
        """Return the marker for *kind*, with an ASCII fallback."""
        emoji, fallback = PASS_GLYPHS if kind is EventKind.PASS else FAIL_GLYPHS
        return glyphs.pick(emoji, fallback, self.stream)

    def _receive(self, event: Event) -> None:
        self.counts[event.kind] += 1
        fg = "green" if event.kind is EventKind.PASS else "red"
        line = f"{self.glyph(event.kind)} {event.test_name}: {event.message}"
        click.secho(line, fg=fg, file=self.stream, color=self.color)

    def summary(self) -> str:
        """One-line tally of the events received so far."""
        return (
            f"{self.counts[EventKind.PASS]} passed, "
            f"{self.counts[EventKind.FAIL]} failed, "
            f"{self.counts[EventKind.EXCEPTION]} errors"
        )
