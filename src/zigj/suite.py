"""Assertion and test-registration API.

A `ZiGj` suite ties together a `TestScheduler` and a reporter:

- `test(name, is_async, body)` registers a test body on the scheduler queue.
- `ok(cond, msg)` evaluates a predicate once and reports Pass or Fail.
- `run()` drains the queue.

Synchronous bodies take no arguments; the suite signals completion for them
when they return. Asynchronous bodies receive a continuation, conventionally
named ``done``, and must call it exactly once when finished.

Example:
    ```py
    suite = ZiGj()

    @suite.test("A doublethink test")
    def _():
        suite.ok(lambda: 2 + 2 == 5, "two plus two equals five")

    @suite.test("Deferred", is_async=True)
    def _(done):
        loop.call_later(0.1, lambda: (suite.ok(lambda: True), done()))

    suite.run()
    ```

Module-level `test`, `ok` and `run` delegate to a process-wide default suite.
To customize reporting, pass a reporter or subclass `ZiGj` and override
`handler`.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from zigj.adapters.reporters import TerminalReporter
from zigj.errors import FrameworkInvariantError, InvalidTestError
from zigj.interfaces.reporter import AbstractReporter, Event, EventKind
from zigj.scheduler import Continuation, SchedulerState, TestScheduler

logger = logging.getLogger(__name__)

TOPLEVEL = "<toplevel>"


def _caller_line(stacklevel: int) -> str:
    """Describe the source line *stacklevel* frames above the caller."""
    frame = inspect.currentframe()
    try:
        for _ in range(stacklevel + 1):
            frame = frame.f_back if frame is not None else None
        return f"line {frame.f_lineno}" if frame is not None else "line ?"
    finally:
        del frame


class ZiGj:
    """A test suite: registered tests, a scheduler to run them, a reporter.

    Args:
        reporter: Event sink; defaults to a `TerminalReporter` on stdout.
        scheduler: Queue driver; defaults to a fresh `TestScheduler`.
    """

    def __init__(
        self,
        reporter: AbstractReporter | None = None,
        scheduler: TestScheduler | None = None,
    ) -> None:
        self.reporter = reporter if reporter is not None else TerminalReporter()
        self.scheduler = scheduler if scheduler is not None else TestScheduler()
        self._current: str | None = None

    @property
    def current_test(self) -> str:
        """Name of the test in flight, or ``<toplevel>`` outside any test."""
        return self._current if self._current is not None else TOPLEVEL

    def handler(self, kind: EventKind, test: str, msg: str) -> None:
        """Hand one event to the reporter."""
        self.reporter.receive(Event(kind=kind, test_name=test, message=msg))

    def test(
        self,
        name: str,
        is_async: bool = False,
        body: Callable[..., Any] | None = None,
    ) -> Any:
        """Register a test; usable directly or as a decorator.

        Args:
            name: Test name shown in every event the test emits.
            is_async: When True, *body* receives the continuation and must call
                it; otherwise *body* takes no arguments. If an async body
                raises before calling it, the test is completed on its behalf
                and a later call of that continuation is ignored.
            body: The test body. Omit to use `test(...)` as a decorator.

        Returns:
            The body (or a decorator returning it).

        Raises:
            InvalidTestError: If *name* is empty or *body* is not callable.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidTestError("Test name must be a non-empty string.")

        if body is None:

            def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
                self._register(name, is_async, fn)
                return fn

            return decorator

        self._register(name, is_async, body)
        return body

    def ok(self, cond: Any, msg: str | None = None, *, stacklevel: int = 1) -> None:
        """Report whether *cond* holds.

        Args:
            cond: Zero-argument predicate, evaluated exactly once, or an
                already-evaluated value.
            msg: Message for the event; defaults to the caller's line number.
            stacklevel: Frames above this call used for the default message.
        """
        message = msg if msg else _caller_line(stacklevel)
        test = self.current_test
        try:
            passed = bool(cond()) if callable(cond) else bool(cond)
        except FrameworkInvariantError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.debug("Predicate for %r in %s raised %r", message, test, exc)
            self.handler(EventKind.EXCEPTION, test, f"{message}: {_describe(exc)}")
            return
        self.handler(EventKind.PASS if passed else EventKind.FAIL, test, message)

    def run(self) -> SchedulerState:
        """Start draining registered tests.

        Returns:
            SchedulerState: `IDLE` when every test completed, `RUNNING` when a
            test is still waiting to invoke its continuation.
        """
        logger.debug("Running suite with %d pending tests", self.scheduler.pending)
        self.scheduler.run_next()
        return self.scheduler.state

    def _register(self, name: str, is_async: bool, body: Callable[..., Any]) -> None:
        if not callable(body):
            raise InvalidTestError(f"Body of test '{name}' is not callable.")

        def pending(done: Continuation) -> None:
            self._current = name
            abandoned = False

            def finish() -> None:
                if abandoned:
                    logger.debug("Ignoring late completion of %s, which raised", name)
                    return
                self._current = None
                done()

            try:
                if is_async:
                    body(finish)
                else:
                    body()
            except FrameworkInvariantError:
                raise
            except Exception as exc:  # pylint: disable=broad-except
                logger.debug("Test %s raised %r", name, exc, exc_info=True)
                self.handler(EventKind.EXCEPTION, name, _describe(exc))
                if not done.invoked:
                    abandoned = True
                    self._current = None
                    done()
                return

            if not is_async:
                finish()

        self.scheduler.enqueue(pending, label=name)
        logger.debug("Registered %s test %s", "async" if is_async else "sync", name)


def _describe(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}"


# --- Default suite ---

_default_suite: ZiGj | None = None


def default_suite() -> ZiGj:
    """Return the process-wide suite used by the module-level helpers."""
    global _default_suite  # pylint: disable=global-statement
    if _default_suite is None:
        _default_suite = ZiGj()
    return _default_suite


def reset_default_suite(reporter: AbstractReporter | None = None) -> ZiGj:
    """Replace the default suite with a fresh one and return it."""
    global _default_suite  # pylint: disable=global-statement
    _default_suite = ZiGj(reporter=reporter)
    return _default_suite


def test(name: str, is_async: bool = False, body: Callable[..., Any] | None = None) -> Any:
    """Register a test on the default suite (see `ZiGj.test`)."""
    return default_suite().test(name, is_async, body)


test.__test__ = False  # type: ignore[attr-defined]  # not a pytest test


def current_test() -> str:
    """Name of the default suite's test in flight, or ``<toplevel>``."""
    return TOPLEVEL if _default_suite is None else _default_suite.current_test


def ok(cond: Any, msg: str | None = None) -> None:
    """Assert on the default suite (see `ZiGj.ok`)."""
    default_suite().ok(cond, msg, stacklevel=2)


def run() -> SchedulerState:
    """Run the default suite (see `ZiGj.run`)."""
    return default_suite().run()
