"""Sequential, continuation-driven test scheduler.

The scheduler owns a FIFO queue of pending tests. Each pending test is a
callable taking one argument, a zero-argument continuation, which the test
invokes when it is finished. Invoking the continuation is what starts the
next test, so tests complete in exactly the order they were enqueued and at
most one is ever in flight.

Draining is a trampoline: `run_next` loops while each dispatched test
completes synchronously. A continuation invoked from inside that loop only
marks the current test as done; the loop then dispatches the next one. A
continuation invoked later (a deferred, genuinely asynchronous completion)
re-enters `run_next` and resumes draining. Stack depth therefore does not grow
with the number of synchronous tests.

A deferred continuation may be invoked from another thread (a timer, an IO
callback); draining then continues on that thread. `wait` blocks until the
queue is idle, which lets a driver such as ``zigj run`` give deferred tests
time to finish.

A test that never invokes its continuation stalls the queue indefinitely;
the scheduler itself has no timeout or cancellation.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from enum import Enum
from typing import TypeAlias

from zigj.errors import ContinuationReusedError

logger = logging.getLogger(__name__)

PendingTest: TypeAlias = Callable[[Callable[[], None]], None]


class SchedulerState(Enum):
    """Whether a test is currently in flight."""

    IDLE = "idle"
    RUNNING = "running"


class Continuation:
    """One-shot completion callback handed to a dispatched test.

    Args:
        scheduler: The scheduler that dispatched the test.
        label: Name used in logs and in misuse errors.
    """

    def __init__(self, scheduler: TestScheduler, label: str) -> None:
        self._scheduler = scheduler
        self.label = label
        self.invoked = False

    def __call__(self) -> None:
        if self.invoked:
            logger.error("Continuation for %s invoked more than once", self.label)
            raise ContinuationReusedError(self.label)
        self.invoked = True
        self._scheduler._complete(self)  # pylint: disable=protected-access

    def __repr__(self) -> str:
        return f"<Continuation {self.label} invoked={self.invoked}>"


class TestScheduler:
    """FIFO queue of pending tests drained one at a time."""

    __test__ = False  # not a pytest test class

    def __init__(self) -> None:
        self._queue: deque[tuple[str, PendingTest]] = deque()
        self._in_flight: Continuation | None = None
        self._draining = False
        self._dispatched = 0
        self._lock = threading.Lock()
        self._idle = threading.Event()
        self._idle.set()

    @property
    def state(self) -> SchedulerState:
        """`RUNNING` while a dispatched test has not invoked its continuation."""
        return SchedulerState.IDLE if self._in_flight is None else SchedulerState.RUNNING

    @property
    def pending(self) -> int:
        """Number of tests waiting in the queue."""
        return len(self._queue)

    @property
    def dispatched(self) -> int:
        """Number of tests dispatched so far."""
        return self._dispatched

    @property
    def in_flight(self) -> str | None:
        """Label of the test currently in flight, if any."""
        return None if self._in_flight is None else self._in_flight.label

    def enqueue(self, test: PendingTest, label: str | None = None) -> None:
        """Append a pending test to the queue.

        Enqueueing never starts a drain; call `run_next` for that.

        Args:
            test: Callable receiving the continuation.
            label: Optional name for logs; defaults to the callable's name.
        """
        label = label or getattr(test, "__name__", None) or repr(test)
        self._queue.append((label, test))
        logger.debug("Enqueued %s (%d pending)", label, len(self._queue))

    def run_next(self) -> None:
        """Dispatch queued tests until the queue is empty or one is left in flight.

        A no-op when the queue is empty, when a test is already in flight, or
        when called from within an active drain.
        """
        while True:
            with self._lock:
                if self._draining or self._in_flight is not None:
                    return
                self._draining = True
            try:
                while self._in_flight is None and self._queue:
                    label, test = self._queue.popleft()
                    continuation = Continuation(self, label)
                    self._in_flight = continuation
                    self._idle.clear()
                    self._dispatched += 1
                    logger.debug("Dispatching %s (#%d)", label, self._dispatched)
                    test(continuation)
            finally:
                with self._lock:
                    self._draining = False
            # A completion from another thread may have landed while this drain
            # was finishing; it saw `_draining` set and left the queue to us.
            if self._in_flight is not None or not self._queue:
                break

        in_flight = self._in_flight
        if in_flight is None:
            logger.debug("Queue drained; scheduler idle")
            self._idle.set()
        else:
            logger.debug("Waiting for %s to complete", in_flight.label)

    def wait(self, timeout: float | None = None) -> SchedulerState:
        """Block until no test is in flight, or for at most *timeout* seconds.

        Returns:
            SchedulerState: The state when the wait ended.
        """
        self._idle.wait(timeout)
        return self.state

    def _complete(self, continuation: Continuation) -> None:
        logger.debug("Completed %s", continuation.label)
        self._in_flight = None
        self.run_next()
