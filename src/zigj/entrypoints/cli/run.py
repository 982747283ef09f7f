"""``zigj run``: load test modules and drain the default suite.

Tests whose continuation is deferred (a timer, an IO callback on another
thread) are waited for: each test in flight gets ``--timeout`` seconds to
signal completion, and the wait ends as soon as the queue is idle.

Exit codes
- 0: every assertion passed.
- 1: at least one failure or exception event was reported.
- 2: a test did not invoke its continuation within the timeout, so the
  queue stalled.

Framework invariant violations (e.g. a continuation invoked twice) are logged
with a traceback and abort the command. The run log is written whenever the
run does not pass.
"""

import logging
from pathlib import Path

import click

from zigj import config
from zigj.adapters.reporters import TerminalReporter
from zigj.errors import FrameworkInvariantError, InvalidConfigError, TestLoadError
from zigj.loader import load_paths
from zigj.logging import flush_run_log
from zigj.scheduler import SchedulerState
from zigj.suite import ZiGj, reset_default_suite

from .helpers import stalled, summary

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_STALLED = 2


def drain(suite: ZiGj, timeout: float) -> SchedulerState:
    """Run *suite* and wait while its tests keep completing.

    Returns as soon as the queue is idle, or once the test in flight has gone
    *timeout* seconds without any other test being dispatched.
    """
    state = suite.run()
    while state is SchedulerState.RUNNING:
        dispatched = suite.scheduler.dispatched
        logger.debug("Waiting up to %gs for %s", timeout, suite.scheduler.in_flight)
        state = suite.scheduler.wait(timeout)
        if state is SchedulerState.RUNNING and suite.scheduler.dispatched == dispatched:
            break
    return state


@click.command("run")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--pattern",
    default=None,
    help=(
        "Glob used to find test modules inside directories "
        f"(default: ${config.TEST_PATTERN_ENV} or '{config.DEFAULT_TEST_PATTERN}')."
    ),
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=config.DEFAULT_TIMEOUT,
    envvar=config.TIMEOUT_ENV,
    show_default=True,
    show_envvar=True,
    help="Seconds a deferred test may take to call its continuation.",
)
@click.pass_context
def run(
    ctx: click.Context, paths: tuple[Path, ...], pattern: str | None, timeout: float
) -> None:
    """Run the tests registered by the modules at PATHS, in order."""
    try:
        pattern = pattern or config.get_test_pattern()
    except InvalidConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    reporter = TerminalReporter(color=ctx.color)
    suite = reset_default_suite(reporter)

    try:
        load_paths(paths, pattern)
    except TestLoadError as exc:
        logger.error("%s", exc)
        raise click.ClickException(str(exc)) from exc

    logger.info("Running %d tests", suite.scheduler.pending)
    try:
        state = drain(suite, timeout)
    except FrameworkInvariantError:
        logger.exception("Internal framework error; aborting run")
        raise

    if state is SchedulerState.RUNNING:
        logger.warning("Stalled on %s", suite.scheduler.in_flight)
        flush_run_log()
        stalled(suite.scheduler.in_flight or "?", suite.scheduler.pending, timeout)
        summary(reporter.summary(), failed=True)
        ctx.exit(EXIT_STALLED)

    if reporter.failed:
        flush_run_log()
        summary(reporter.summary(), failed=True)
        ctx.exit(EXIT_FAILED)

    summary(reporter.summary(), failed=False)
