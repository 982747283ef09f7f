"""Logging for the ``zigj`` command.

Two handlers hang off the root logger while the CLI runs:

- A Rich console handler on stderr, at the verbosity picked with ``-v``/``-q``.
- A *run log*: a `RunRecorder` that keeps the most recent DEBUG records of
  the run in memory and writes them to a file when the run does not pass (or
  on exit, when asked to always keep it).

Both stamp each record with the test that was in flight when it was logged,
so dispatch, spy and user records can be traced back to a test. Deferred
tests complete on other threads; the run log records the thread name too.

Library modules only call `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

RUN_LOG_FORMAT = "%(asctime)s %(threadName)s %(levelname)s %(name)s: %(test)s%(message)s"


class CurrentTestFilter(logging.Filter):
    """Set ``record.test`` to ``"[<name>] "`` for the test in flight.

    Records logged outside any test get an empty string.

    Args:
        current: Returns the name of the test in flight, or ``toplevel`` when
            there is none.
        toplevel: Name reported outside of tests.
    """

    def __init__(self, current: Callable[[], str], toplevel: str) -> None:
        super().__init__()
        self._current = current
        self._toplevel = toplevel

    def filter(self, record: logging.LogRecord) -> bool:
        name = self._current()
        record.test = "" if name == self._toplevel else f"[{name}] "
        return True


class RunRecorder(MemoryHandler):
    """Keep the last *capacity* records; write them out on ERROR or `flush`.

    Unlike a plain `MemoryHandler`, a full buffer drops its oldest record
    instead of flushing, so a long passing run leaves no file behind.
    """

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        if len(self.buffer) > self.capacity:
            del self.buffer[0]
        return record.levelno >= self.flushLevel


def console_handler(
    level: int, current_test: CurrentTestFilter, color: bool = True
) -> RichHandler:
    """Build the stderr handler for *level*.

    At DEBUG the source location and logger name are shown as well, since
    that is the level used to follow the scheduler.
    """
    verbose = level <= logging.DEBUG
    color_system: Literal["auto"] | None = "auto" if color else None
    handler = RichHandler(
        level=level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=verbose,
        enable_link_path=verbose,
    )
    fmt = "%(name)s: %(test)s%(message)s" if verbose else "%(test)s%(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(current_test)
    return handler


def run_recorder(
    path: Path,
    current_test: CurrentTestFilter,
    *,
    always: bool = False,
    capacity: int = 5000,
) -> RunRecorder:
    """Build the run log writing to *path*.

    Args:
        path: File the records are written to; created on first write.
        current_test: Filter stamping records with the test in flight.
        always: Also write the buffer when the handler is closed, i.e. when
            the command exits after a passing run.
        capacity: Number of most recent records kept.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    target.setFormatter(logging.Formatter(RUN_LOG_FORMAT))
    recorder = RunRecorder(
        capacity=capacity,
        flushLevel=logging.ERROR,
        target=target,
        flushOnClose=always,
    )
    recorder.addFilter(current_test)
    return recorder


def flush_run_log() -> bool:
    """Write the run log now. Returns False when no run log is configured."""
    recorders = [h for h in logging.getLogger().handlers if isinstance(h, RunRecorder)]
    for recorder in recorders:
        recorder.flush()
    return bool(recorders)


def _installed(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:  # pragma: no cover
        return "?"


def log_header(logger: logging.Logger, app_version: str, run_log: Path | None) -> None:
    """Log which zigj is running, and where the run log goes."""
    logger.info(
        "zigj %s on Python %s (%s)",
        app_version,
        platform.python_version(),
        platform.system(),
    )
    logger.debug(
        "click %s, click-extra %s, rich %s",
        _installed("click"),
        _installed("click-extra"),
        _installed("rich"),
    )
    logger.debug("Run log: %s", run_log if run_log is not None else "disabled")
