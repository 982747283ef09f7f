"""In-memory reporter.

Keeps every received event in order. Intended for tests and for embedding the
framework where the caller wants to inspect results programmatically.
"""

from zigj.interfaces.reporter import AbstractReporter, Event, EventKind


class MemoryReporter(AbstractReporter):
    """Reporter that records events in a list."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def _receive(self, event: Event) -> None:
        self.events.append(event)

    def kinds(self) -> list[EventKind]:
        """Kinds of the recorded events, in order."""
        return [event.kind for event in self.events]

    def messages(self) -> list[str]:
        """Messages of the recorded events, in order."""
        return [event.message for event in self.events]

    def clear(self) -> None:
        """Drop all recorded events."""
        self.events.clear()
