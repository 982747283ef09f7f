"""CLI helpers for ZIGJ: verdict lines and the ``-L`` option parser."""

from .logger_levels import parse_logger_levels
from .messages import stalled, summary

__all__ = ["parse_logger_levels", "stalled", "summary"]
