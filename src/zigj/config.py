"""Configuration utilities for ZIGJ.

This module centralizes small helpers and constants related to configuration
read from the environment.
"""

import os

from zigj.errors import InvalidConfigError

TEST_PATTERN_ENV = "ZIGJ_TEST_PATTERN"  # pragma: no mutate
DEFAULT_TEST_PATTERN = "test_*.py"  # pragma: no mutate

# Seconds `zigj run` waits for a deferred test to call its continuation.
TIMEOUT_ENV = "ZIGJ_TIMEOUT"  # pragma: no mutate
DEFAULT_TIMEOUT = 5.0  # pragma: no mutate


def get_test_pattern() -> str:
    """Get the glob used to discover test modules inside directories.

    Returns:
        The value of `ZIGJ_TEST_PATTERN`, or ``test_*.py`` when unset or empty.

    Raises:
        InvalidConfigError: If the pattern does not select Python files.
    """
    if not (pattern := os.environ.get(TEST_PATTERN_ENV, "").strip()):
        return DEFAULT_TEST_PATTERN
    if not pattern.endswith(".py"):
        raise InvalidConfigError(TEST_PATTERN_ENV, pattern, "a glob ending in '.py'")
    return pattern
