"""Global pytest fixtures for ZIGJ."""

from __future__ import annotations

import pytest

from zigj import suite as suite_module
from zigj.adapters.reporters import MemoryReporter
from zigj.suite import ZiGj

# pylint: disable=redefined-outer-name


@pytest.fixture
def reporter() -> MemoryReporter:
    """A fresh in-memory reporter."""
    return MemoryReporter()


@pytest.fixture
def suite(reporter: MemoryReporter) -> ZiGj:
    """A suite reporting into the `reporter` fixture."""
    return ZiGj(reporter=reporter)


@pytest.fixture(autouse=True)
def _isolate_default_suite(monkeypatch):
    """Give every test its own process-wide default suite."""
    monkeypatch.setattr(suite_module, "_default_suite", None)
