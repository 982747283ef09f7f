"""End-to-end tests for `zigj run`.

Each test writes real test modules to disk and invokes the CLI on them,
checking result lines, the summary and the exit code.
"""

import re

import pytest

from zigj.entrypoints.cli.main import zigj

pytestmark = [pytest.mark.e2e]

BASE_ARGS = ["--run-log", "never", "run"]

PASSING = """
    import zigj

    @zigj.test("math")
    def _():
        zigj.ok(lambda: 1 + 1 == 2, "adds")
        zigj.ok(lambda: zigj.deep_equals({"a": [1, 2]}, {"a": [1, 2]}), "deep")
"""

FAILING = """
    import zigj

    @zigj.test("doublethink")
    def _():
        zigj.ok(lambda: 2 + 2 == 5, "two plus two equals five")
"""

ASYNC_ORDER = """
    import zigj

    order = []

    @zigj.test("first", is_async=True)
    def _(done):
        order.append("first")
        done()

    @zigj.test("second")
    def _():
        order.append("second")
        zigj.ok(lambda: order == ["first", "second"], "ran in order")
"""

STALLED = """
    import zigj

    @zigj.test("forgetful", is_async=True)
    def _(done):
        zigj.ok(lambda: True, "started")

    @zigj.test("never")
    def _():
        zigj.ok(lambda: True, "never runs")
"""

DEFERRED = """
    import threading

    import zigj

    @zigj.test("deferred", is_async=True)
    def _(done):
        def later():
            zigj.ok(lambda: True, "fired")
            done()

        threading.Timer(0.05, later).start()

    @zigj.test("after")
    def _():
        zigj.ok(lambda: True, "after ran")
"""

RAISING = """
    import zigj

    @zigj.test("broken")
    def _():
        raise RuntimeError("kaput")
"""


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is found in the output string."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def test_passing_suite_exits_zero(runner, write_tests):
    """All assertions pass: result lines, a summary, exit code 0."""
    path = write_tests("test_math.py", PASSING)

    result = runner.invoke(zigj, BASE_ARGS + [str(path)])

    assert result.exit_code == 0, result.output
    assert_in_output(r"(✔|\[OK\]) math: adds", result.output)
    assert_in_output(r"(✔|\[OK\]) math: deep", result.output)
    assert_in_output(r"2 passed, 0 failed, 0 errors", result.output)


def test_failing_assertion_exits_one(runner, write_tests):
    """A Fail event makes the command exit with status 1."""
    path = write_tests("test_fail.py", FAILING)

    result = runner.invoke(zigj, BASE_ARGS + [str(path)])

    assert result.exit_code == 1
    assert_in_output(r"(✘|\[X\]) doublethink: two plus two equals five", result.output)
    assert_in_output(r"0 passed, 1 failed, 0 errors", result.output)


def test_raising_test_is_reported_as_error(runner, write_tests):
    """A test body exception is reported and counted as an error."""
    path = write_tests("test_raise.py", RAISING)

    result = runner.invoke(zigj, BASE_ARGS + [str(path)])

    assert result.exit_code == 1
    assert_in_output(r"broken: RuntimeError: kaput", result.output)
    assert_in_output(r"0 passed, 0 failed, 1 errors", result.output)


def test_directory_discovery_and_order(runner, write_tests, tmp_path):
    """Directories are searched with the pattern; tests run in FIFO order."""
    write_tests("suite/test_async.py", ASYNC_ORDER)
    write_tests("suite/helper.py", "raise RuntimeError('must not be imported')\n")

    result = runner.invoke(zigj, BASE_ARGS + [str(tmp_path / "suite")])

    assert result.exit_code == 0, result.output
    assert_in_output(r"second: ran in order", result.output)


def test_pattern_option(runner, write_tests, tmp_path):
    """--pattern selects which files are loaded from directories."""
    write_tests("specs/math_spec.py", PASSING)
    write_tests("specs/test_fail.py", FAILING)

    result = runner.invoke(
        zigj, BASE_ARGS + ["--pattern", "*_spec.py", str(tmp_path / "specs")]
    )

    assert result.exit_code == 0, result.output
    assert "doublethink" not in result.output


def test_pattern_from_environment(runner, write_tests, tmp_path):
    """ZIGJ_TEST_PATTERN is used when --pattern is not given."""
    write_tests("specs/math_spec.py", PASSING)

    result = runner.invoke(
        zigj,
        BASE_ARGS + [str(tmp_path / "specs")],
        env={"ZIGJ_TEST_PATTERN": "*_spec.py"},
    )

    assert result.exit_code == 0, result.output
    assert_in_output(r"math: adds", result.output)


def test_invalid_pattern_environment_is_a_usage_error(runner, write_tests, tmp_path):
    """A bad ZIGJ_TEST_PATTERN is reported as a CLI error."""
    write_tests("specs/math_spec.py", PASSING)

    result = runner.invoke(
        zigj,
        BASE_ARGS + [str(tmp_path / "specs")],
        env={"ZIGJ_TEST_PATTERN": "*.txt"},
    )

    assert result.exit_code == 1
    assert_in_output(r"ZIGJ_TEST_PATTERN='\*\.txt' is invalid", result.output)


def test_stalled_queue_exits_two(runner, write_tests):
    """A test that never calls done within the timeout exits 2, the rest unrun."""
    path = write_tests("test_stall.py", STALLED)

    result = runner.invoke(zigj, BASE_ARGS + ["--timeout", "0.1", str(path)])

    assert result.exit_code == 2
    assert_in_output(r"forgetful: started", result.output)
    assert "never runs" not in result.output
    assert_in_output(
        r"Test 'forgetful' did not signal completion within 0.1s; 1 queued",
        result.output,
    )


def test_import_error_is_a_cli_error(runner, write_tests):
    """A module that fails to import aborts with a readable error."""
    path = write_tests("test_broken.py", "import not_a_real_module_zigj\n")

    result = runner.invoke(zigj, BASE_ARGS + [str(path)])

    assert result.exit_code == 1
    assert_in_output(r"Could not load test module", result.output)
    assert_in_output(r"ModuleNotFoundError", result.output)


def test_missing_path_is_a_usage_error(runner, tmp_path):
    """Click rejects paths that do not exist."""
    result = runner.invoke(zigj, BASE_ARGS + [str(tmp_path / "nope.py")])

    assert result.exit_code == 2
    assert_in_output(r"does not exist", result.output)


def test_deferred_completion_is_waited_for(runner, write_tests):
    """A test finishing on a timer thread completes before the tally."""
    path = write_tests("test_deferred.py", DEFERRED)

    result = runner.invoke(zigj, BASE_ARGS + [str(path)])

    assert result.exit_code == 0, result.output
    fired = result.output.index("deferred: fired")
    after = result.output.index("after: after ran")
    tally = result.output.index("2 passed, 0 failed, 0 errors")
    assert fired < after < tally


def test_timeout_from_environment(runner, write_tests):
    """ZIGJ_TIMEOUT bounds the wait when --timeout is not given."""
    path = write_tests("test_stall.py", STALLED)

    result = runner.invoke(zigj, BASE_ARGS + [str(path)], env={"ZIGJ_TIMEOUT": "0"})

    assert result.exit_code == 2
    assert_in_output(r"did not signal completion within 0s", result.output)


def test_negative_timeout_is_a_usage_error(runner, write_tests):
    """--timeout takes a non-negative number of seconds."""
    path = write_tests("test_math.py", PASSING)

    result = runner.invoke(zigj, BASE_ARGS + ["--timeout", "-1", str(path)])

    assert result.exit_code == 2
    assert "passed" not in result.output
