"""Classifier: decides whether a text is JSON, YAML or plain text.

Detection policy, in order:

1. The structural (YAML superset) parse fails -> TEXT.
2. The first non-whitespace character is "{" or "[" -> try the strict JSON
   grammar on the same text: success -> JSON, failure -> YAML.
3. Anything else -> YAML, without a strictness check.

The policy is asymmetric on purpose: a bare scalar such as ``42`` or a quoted
string is valid JSON, but it does not start with a bracket, so it is reported
as YAML.  Both attempts are expressed as ``Ok``/``Err`` results; nothing raised
by a parser escapes ``classify``.
"""

from __future__ import annotations

import logging
from typing import Any

from structpad.errors import StrictFormatParseError, StructuralParseError
from structpad.result import Classification, Err, Ok, Outcome
from structpad.syntax.nodes import Format, SyntaxNode
from structpad.syntax.parser import StructuralParser, parse_strict_json

__all__ = ["Classifier", "classify", "first_significant_char"]

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\n\r"
_JSON_OPENERS = ("{", "[")


def first_significant_char(text: str) -> str | None:
    """Return the first character of ``text`` that is not space/tab/CR/LF."""
    stripped = text.lstrip(_WHITESPACE)
    return stripped[0] if stripped else None


class Classifier:
    """Runs the structural parse and the JSON strictness check on a text.

    Args:
        parser: Structural parser to use.  Defaults to ``StructuralParser()``.
    """

    def __init__(self, parser: StructuralParser | None = None) -> None:
        self._parser = parser if parser is not None else StructuralParser()

    def classify(self, text: str) -> Classification:
        """Classify ``text`` and return its format with its syntax trees.

        Never raises for bad input: an unparsable text is TEXT with no trees.
        """
        structural = self.attempt_structural(text)
        if isinstance(structural, Err):
            logger.debug("Structural parse failed, treating as text: %s", structural.error)
            return Classification(format=Format.TEXT)

        if first_significant_char(text) in _JSON_OPENERS:
            strict = self.attempt_strict_json(text)
            detected = Format.JSON if strict.is_ok else Format.YAML
        else:
            detected = Format.YAML
        return Classification(format=detected, trees=structural.value)

    def attempt_structural(self, text: str) -> Outcome[tuple[SyntaxNode, ...]]:
        """Structural parse as a result value instead of an exception."""
        try:
            return Ok(self._parser.parse(text))
        except StructuralParseError as exc:
            return Err(exc)

    def attempt_strict_json(self, text: str) -> Outcome[Any]:
        """Strict JSON parse as a result value instead of an exception."""
        try:
            return Ok(parse_strict_json(text))
        except StrictFormatParseError as exc:
            return Err(exc)


def classify(text: str) -> Classification:
    """Classify ``text`` with a fresh Classifier."""
    return Classifier().classify(text)
