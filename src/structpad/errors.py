"""Exception taxonomy for structpad.

Only ``ExplicitFormatError`` is meant to reach a user.  Every other error is
raised and recovered inside the library: live projection fails soft (text is
downgraded to plain text, edits degrade to string assignment or no-op).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from structpad.syntax.nodes import Format

__all__ = [
    "AddressResolutionError",
    "EditReconciliationFailure",
    "ExplicitFormatError",
    "InvalidPointerError",
    "KeyResolutionFailure",
    "StrictFormatParseError",
    "StructpadError",
    "StructuralParseError",
]


class StructpadError(Exception):
    """Base class for every error raised by structpad."""


class StructuralParseError(StructpadError):
    """Text does not parse under the superset (YAML) grammar.

    Attributes:
        message: Parser diagnostic.
        line:    1-based line of the problem, or None when unknown.
        column:  1-based column of the problem, or None when unknown.
    """

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(_with_position(message, line, column))


class StrictFormatParseError(StructpadError):
    """Text parsed as YAML but is not strict JSON."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(_with_position(message, line, column))


class ExplicitFormatError(StructpadError):
    """A user-invoked "Format as JSON/YAML" command failed.

    The message is a human-readable diagnostic shown verbatim to the user.
    """

    def __init__(self, format: Format, message: str) -> None:
        self.format = format
        self.message = message
        super().__init__(message)


class EditReconciliationFailure(StructpadError):
    """A replacement value typed into a tree label is not a valid literal."""


class KeyResolutionFailure(StructpadError):
    """A rename target is missing or its parent is not a mapping."""


class AddressResolutionError(StructpadError, LookupError):
    """An address does not resolve to a value inside a model."""


class InvalidPointerError(StructpadError, ValueError):
    """A pointer string is not a well-formed address."""


def _with_position(message: str, line: int | None, column: int | None) -> str:
    if line is None:
        return message
    if column is None:
        return f"{message} (line {line})"
    return f"{message} (line {line}, column {column})"
