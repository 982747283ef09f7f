"""Reporter adapters."""

from .memory import MemoryReporter
from .terminal import TerminalReporter

__all__ = ["MemoryReporter", "TerminalReporter"]
