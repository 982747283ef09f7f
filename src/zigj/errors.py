"""Framework error definitions."""

# ============================================================================
#                           General errors
# ============================================================================


class ZigjError(Exception):
    """Base class for ZIGJ errors."""


class InvalidTestError(ZigjError):
    """Raised when a test is registered with a missing name or a non-callable body."""


class TestLoadError(ZigjError):
    """Raised when a test module cannot be imported."""

    __test__ = False  # not a pytest test class

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not load test module '{path}': {reason}")
        self.path = path
        self.reason = reason


class InvalidConfigError(ZigjError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, variable: str, value: str, expected: str) -> None:
        super().__init__(f"{variable}={value!r} is invalid; expected {expected}.")
        self.variable = variable
        self.value = value


# ============================================================================
#                   Framework invariants (fatal)
# ============================================================================


class FrameworkInvariantError(ZigjError):
    """Raised when the framework itself is misused.

    These signal programming bugs, not test failures. They are never turned
    into reporter events and are never retried.
    """


class ContinuationReusedError(FrameworkInvariantError):
    """Raised when a test's continuation is invoked more than once."""

    def __init__(self, test_name: str) -> None:
        super().__init__(f"Continuation for test '{test_name}' was invoked twice.")
        self.test_name = test_name


class UnknownEventKindError(FrameworkInvariantError):
    """Raised when a reporter receives an event of an unrecognized kind."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown event kind `{kind!r}`. Please report a bug.")
        self.kind = kind
