"""Command-line entry points for ZIGJ."""

from .main import zigj

__all__ = ["zigj"]
