"""Closing lines printed by ``zigj run``.

Result lines go to stdout through the reporter; the run's verdict goes to
stderr so that piping stdout yields nothing but results. Every verdict line is
a marker followed by the tally, e.g. ``✅  4 passed, 0 failed, 0 errors``.
"""

import click

from zigj import glyphs

PASSED = ("✅", "[OK]")  # pragma: no mutate
FAILED = ("❌", "[X]")  # pragma: no mutate
STALLED = ("⚠️", "[!]")  # pragma: no mutate


def _emit(marker: tuple[str, str], text: str, fg: str) -> None:
    # Click resolves stderr on every call, so a swapped stream is honoured.
    marker_text = glyphs.pick(*marker, click.get_text_stream("stderr"))
    click.secho(f"{marker_text}  {text}", fg=fg, bold=True, err=True)


def summary(tally: str, *, failed: bool) -> None:
    """Print the run's tally in green, or in red when anything failed."""
    if failed:
        _emit(FAILED, tally, "red")
    else:
        _emit(PASSED, tally, "green")


def stalled(test: str, queued: int, timeout: float) -> None:
    """Warn that *test* never called its continuation within *timeout* seconds."""
    _emit(
        STALLED,
        f"Test '{test}' did not signal completion within {timeout:g}s; "
        f"{queued} queued tests did not run.",
        "yellow",
    )
