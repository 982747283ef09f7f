"""The ``-L/--logger-level`` option.

Each value names a logger and the minimum level it lets through, e.g.
``-L zigj.scheduler=DEBUG``. ``ZIGJ_LOGGER_LEVELS`` takes the same pairs
separated by commas. Levels are standard level names (any case) or numbers.
"""

import logging

import click

# Per-call spy records drown everything else at -vv; opt back in with
# ``-L zigj.spy=DEBUG``.
QUIET_BY_DEFAULT = {"zigj.spy": logging.INFO}


def _level(text: str) -> int:
    text = text.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise click.BadParameter(f"{text!r} is not a log level.")
    return level


def parse_logger_levels(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | tuple[str, ...],
) -> dict[str, int]:
    """Turn ``NAME=LEVEL`` values into a logger-name to level mapping.

    Later values win over earlier ones, and both win over `QUIET_BY_DEFAULT`.
    """
    values = (value,) if isinstance(value, str) else value
    levels = dict(QUIET_BY_DEFAULT)
    for pair in (p.strip() for v in values for p in v.split(",")):
        if not pair:
            continue
        name, sep, level = pair.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {pair!r}.")
        levels[name.strip()] = _level(level)
    return levels
