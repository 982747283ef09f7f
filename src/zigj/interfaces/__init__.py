"""Ports used by the ZIGJ core.

Layering & dependency rules:
- Lives under `zigj.interfaces`. Do NOT import from adapters or entrypoints.
"""

from .reporter import AbstractReporter, Event, EventKind

__all__ = ["AbstractReporter", "Event", "EventKind"]
