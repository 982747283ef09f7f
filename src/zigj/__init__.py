"""ZIGJ

A minimal unit-test micro-framework: structural deep equality, call-recording
spies, and a sequential scheduler for synchronous and continuation-driven
("async") test bodies.
"""

from .equality import deep_equals, deepeq
from .spy import NO_VALUE, UNIT, Ok, Spy, Threw, wrap
from .suite import ZiGj, default_suite, ok, reset_default_suite, run, test

__all__ = [
    "__version__",
    "NO_VALUE",
    "UNIT",
    "Ok",
    "Spy",
    "Threw",
    "ZiGj",
    "deep_equals",
    "deepeq",
    "default_suite",
    "ok",
    "reset_default_suite",
    "run",
    "test",
    "wrap",
]
__version__ = "0.1.0"
