"""Fixtures for end-to-end CLI tests.

Provides a CliRunner and a helper fixture that writes small test modules to a
temporary directory for `zigj run` to load.
"""

import logging
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

# pylint: disable=redefined-outer-name


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def write_tests(tmp_path) -> Callable[[str, str], Path]:
    """Return a function writing a dedented test module under `tmp_path`."""

    def _write(filename: str, source: str) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo the root/per-logger configuration the CLI applies on each invocation."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    spy_level = logging.getLogger("zigj.spy").level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("zigj.spy").setLevel(spy_level)
