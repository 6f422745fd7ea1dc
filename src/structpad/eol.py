"""End-of-line policy helpers for the save path.

The text surface always holds CRLF line breaks.  A document remembers the
line-ending convention it should be written with; the file I/O collaborator
calls ``apply_eol`` right before encoding the text to bytes.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

__all__ = ["EolMode", "apply_eol", "detect_eol", "normalize_newlines"]

# Any single line break: CRLF first so it is not read as CR followed by LF.
_BREAK = re.compile(r"\r\n|\r|\n")


class EolMode(StrEnum):
    """Line-ending convention a document is saved with.

    - CRLF -> "crlf" : Windows
    - LF   -> "lf"   : Unix
    - CR   -> "cr"   : classic Mac
    """

    CRLF = auto()
    LF = auto()
    CR = auto()

    @property
    def sequence(self) -> str:
        """The literal line-break characters for this mode."""
        return _SEQUENCES[self]


_SEQUENCES: dict[EolMode, str] = {
    EolMode.CRLF: "\r\n",
    EolMode.LF: "\n",
    EolMode.CR: "\r",
}


def normalize_newlines(text: str, newline: str = "\r\n") -> str:
    """Rewrite every line break in ``text`` (CRLF, lone CR, lone LF) to ``newline``."""
    return _BREAK.sub(newline, text)


def apply_eol(text: str, mode: EolMode) -> str:
    """Rewrite every line break in ``text`` to the sequence of ``mode``."""
    return normalize_newlines(text, mode.sequence)


def detect_eol(text: str) -> EolMode | None:
    """Return the convention of the first line break in ``text``.

    Returns None when the text contains no line break at all, leaving the
    choice to the caller's default.
    """
    match = _BREAK.search(text)
    if match is None:
        return None
    for mode, sequence in _SEQUENCES.items():
        if match.group() == sequence:
            return mode
    return None
