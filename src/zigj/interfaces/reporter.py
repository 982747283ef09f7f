"""Reporter port.

The core hands every assertion outcome to a reporter as an `Event`. Reporters
are pure sinks: whatever `receive` returns is ignored, and events are not
retained by the core.

Contract overview
-----------------
- `receive(event)` is called once per event, in emission order.
- `event.kind` is one of `EventKind.PASS`, `EventKind.FAIL`,
  `EventKind.EXCEPTION`. Anything else is internal misuse: implementations
  must raise `UnknownEventKindError` (fatal) rather than ignore it.
"""

import abc
from dataclasses import dataclass
from enum import Enum

from zigj.errors import UnknownEventKindError

# pylint: disable=too-few-public-methods


class EventKind(Enum):
    """Kind of a reported event."""

    PASS = "pass"
    FAIL = "fail"
    EXCEPTION = "except"


@dataclass(frozen=True, slots=True)
class Event:
    """A single pass/fail/exception notification."""

    kind: EventKind
    test_name: str
    message: str


class AbstractReporter(abc.ABC):
    """Sink for test events."""

    def receive(self, event: Event) -> None:
        """Validate the event kind and forward the event to `_receive`.

        Raises:
            UnknownEventKindError: If `event.kind` is not an `EventKind`.
        """
        if not isinstance(event.kind, EventKind):
            raise UnknownEventKindError(event.kind)
        self._receive(event)

    @abc.abstractmethod
    def _receive(self, event: Event) -> None:
        """Handle a validated event."""
