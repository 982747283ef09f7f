"""Call-recording function wrappers ("spies").

A spy wraps a callable and remembers every invocation: the arguments it was
called with and what happened, either a returned value (`Ok`) or a raised
exception (`Threw`). Exceptions raised by the wrapped callable are shielded:
the spy records them and returns `NO_VALUE` instead of propagating, so a test
can assert that an exception occurred without the run being interrupted.

Invariants:
- `len(spy.calls) == len(spy.outcomes)` at all times.
- Entries are appended in invocation order and never reordered.
- No invocation is lost, whether the wrapped callable returns or raises.

Example:
    ```py
    double = wrap(lambda x: x * 2)
    double(3)            # -> 6
    double.calls         # -> ([3],)
    double.outcomes      # -> (Ok(6),)
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class _NoValue:
    """Type of the `NO_VALUE` sentinel."""

    _instance: _NoValue | None = None

    def __new__(cls) -> _NoValue:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_VALUE"


class Unit:
    """Type of the `UNIT` marker returned by a spy with no wrapped callable."""

    _instance: Unit | None = None

    def __new__(cls) -> Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNIT"


NO_VALUE = _NoValue()
UNIT = Unit()


# --- Outcomes ---


@dataclass(frozen=True, slots=True)
class Ok:
    """The wrapped callable returned normally."""

    value: Any


@dataclass(frozen=True, slots=True, eq=False)
class Threw:
    """The wrapped callable raised.

    Two `Threw` outcomes are equal when their exceptions have the same type and
    the same `args`; exception instances themselves only compare by identity.
    """

    error: BaseException

    @property
    def message(self) -> str:
        """The exception rendered as text."""
        return str(self.error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Threw):
            return NotImplemented
        return type(self.error) is type(other.error) and self.error.args == other.error.args

    def __hash__(self) -> int:
        return hash((type(self.error), self.error.args))


Outcome: TypeAlias = Ok | Threw


# --- Spy ---


class Spy:
    """Wrap a callable and record its calls and outcomes.

    Args:
        fn: The callable to wrap. When omitted the spy accepts any arguments,
            records them, and returns `UNIT`; useful as a bare call counter.
    """

    def __init__(self, fn: Callable[..., Any] | None = None) -> None:
        self._fn = fn
        self._calls: list[list[Any]] = []
        self._call_kwargs: list[dict[str, Any]] = []
        self._outcomes: list[Outcome] = []

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self._calls.append(list(args))
        self._call_kwargs.append(dict(kwargs))
        index = len(self._calls) - 1

        if self._fn is None:
            self._outcomes.append(Ok(UNIT))
            logger.debug("Bare spy call #%d with args=%r kwargs=%r", index, args, kwargs)
            return UNIT

        name = self.name
        logger.debug("Spy %s call #%d with args=%r kwargs=%r", name, index, args, kwargs)
        try:
            result = self._fn(*args, **kwargs)
        except Exception as exc:  # pylint: disable=broad-except
            self._outcomes.append(Threw(exc))
            logger.debug("Spy %s call #%d raised %r", name, index, exc)
            return NO_VALUE
        except BaseException as exc:
            # Recorded to keep calls and outcomes aligned; never shielded.
            self._outcomes.append(Threw(exc))
            raise
        self._outcomes.append(Ok(result))
        return result

    def __repr__(self) -> str:
        return f"<Spy {self.name} calls={self.call_count}>"

    @property
    def name(self) -> str:
        """Best-effort name of the wrapped callable."""
        if self._fn is None:
            return "<bare>"
        if hasattr(self._fn, "__name__"):
            return self._fn.__name__
        if hasattr(self._fn, "func") and hasattr(self._fn.func, "__name__"):
            return self._fn.func.__name__
        return repr(self._fn)

    @property
    def calls(self) -> tuple[list[Any], ...]:
        """Positional arguments of each call, in call order (snapshot)."""
        return tuple(list(args) for args in self._calls)

    @property
    def call_kwargs(self) -> tuple[dict[str, Any], ...]:
        """Keyword arguments of each call, index-aligned with `calls` (snapshot)."""
        return tuple(dict(kwargs) for kwargs in self._call_kwargs)

    @property
    def outcomes(self) -> tuple[Outcome, ...]:
        """Outcome of each call, index-aligned with `calls` (snapshot)."""
        return tuple(self._outcomes)

    @property
    def call_count(self) -> int:
        """Number of recorded invocations."""
        return len(self._calls)

    @property
    def called(self) -> bool:
        """Whether the spy has been invoked at least once."""
        return bool(self._calls)

    @property
    def last_call(self) -> list[Any] | None:
        """Positional arguments of the most recent call, or None."""
        return list(self._calls[-1]) if self._calls else None

    @property
    def last_outcome(self) -> Outcome | None:
        """Outcome of the most recent call, or None."""
        return self._outcomes[-1] if self._outcomes else None

    def reset(self) -> None:
        """Forget all recorded calls and outcomes."""
        self._calls.clear()
        self._call_kwargs.clear()
        self._outcomes.clear()


def wrap(fn: Callable[..., Any] | None = None) -> Spy:
    """Return a new `Spy` around *fn* (or a bare spy when *fn* is None)."""
    return Spy(fn)
