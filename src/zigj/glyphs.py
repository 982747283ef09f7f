"""Unicode markers with ASCII stand-ins.

Result lines and CLI notices decorate their text with a marker. When the
target stream cannot encode the marker (a Windows console on a legacy code
page, output piped with ``PYTHONIOENCODING=ascii``), the ASCII stand-in is
used instead.
"""

from __future__ import annotations

from typing import TextIO


def supports(character: str, stream: TextIO) -> bool:
    """Return True if *character* can be encoded on *stream*.

    A stream that declares no ``encoding`` (e.g. a plain ``io.StringIO``) is
    assumed to accept any text.
    """
    encoding = getattr(stream, "encoding", None)
    if not encoding:
        return True
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def pick(emoji: str, fallback: str, stream: TextIO) -> str:
    """Return *emoji* when *stream* can encode it, otherwise *fallback*."""
    return emoji if supports(emoji, stream) else fallback
