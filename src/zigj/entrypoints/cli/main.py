"""The ``zigj`` command.

The group sets up logging for the run and hands over to its subcommands:

- ``zigj run PATH...``: import test modules and run their tests in order.

Result lines go to stdout, everything else (logging, the verdict) to stderr.
The DEBUG log of a run that does not pass is kept in a *run log* file, by
default under the platform's user log directory.

Examples
    $ zigj run tests/
    $ zigj -v run --timeout 30 tests/test_fetch.py
    $ zigj -vv -L zigj.spy=DEBUG run tests/
    $ zigj --run-log always --log-file run.log run tests/
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from zigj import __version__
from zigj.logging import CurrentTestFilter, console_handler, log_header, run_recorder
from zigj.suite import TOPLEVEL, current_test

from .helpers import parse_logger_levels
from .run import run

logger = logging.getLogger(__name__)

RUN_LOG_MODES = ("on-failure", "always", "never")
DEFAULT_LOG_FILE = (
    Path(user_log_dir("zigj", appauthor=False, ensure_exists=True)) / "last-run.log"
)

HELP = """Run ZIGJ tests.

    Test modules register tests with `zigj.test(...)` when imported. The
    runner imports them and runs the registered tests strictly one after
    another, printing one line per assertion and a tally at the end.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log more of what the runner does: -v for progress, -vv for every dispatch.",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Log errors only. Result lines and the tally are printed regardless.",
)
@click.option(
    "--run-log",
    type=click.Choice(RUN_LOG_MODES),
    default="on-failure",
    envvar="ZIGJ_RUN_LOG",
    show_default=True,
    show_envvar=True,
    help="When to write the run's DEBUG log to --log-file.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_FILE,
    envvar="ZIGJ_LOG_FILE",
    show_default=True,
    show_envvar=True,
    help="Where the run log is written.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_logger_levels,
    envvar="ZIGJ_LOGGER_LEVELS",
    show_envvar=True,
    help=(
        "Minimum level for one logger, as NAME=LEVEL; repeatable. "
        "Spy calls are logged at DEBUG by zigj.spy, which stays at INFO "
        "unless set here."
    ),
)
@clickx.pass_context
def zigj(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose: int,
    quiet: bool,
    run_log: str,
    log_file: Path,
    logger_levels: dict[str, int],
) -> None:
    """Configure logging for the run."""
    level = logging.ERROR if quiet else max(logging.DEBUG, logging.WARNING - 10 * verbose)
    stamp = CurrentTestFilter(current_test, TOPLEVEL)

    handlers: list[logging.Handler] = [
        console_handler(level, stamp, color=ctx.color is not False)
    ]
    if run_log != "never":
        handlers.append(run_recorder(log_file, stamp, always=run_log == "always"))

    # Handlers filter by level; the root lets everything through to them.
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_header(logger, __version__, log_file if run_log != "never" else None)
    ctx.call_on_close(logging.shutdown)


zigj.add_command(run)
