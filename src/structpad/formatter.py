"""Formatter: value model -> canonical text, and explicit "Format as X".

Serialization rules:
- JSON (and TEXT, which has no syntax of its own): ``json.dumps`` with the
  configured indent (4 by default), standard escaping, non-ASCII kept.
- YAML: the configured ``YamlEmitter`` with the configured indent (2 by
  default).  A value holding several documents is written as a stream.

Text shown in the editor always uses one line-break convention (CRLF by
default).  ``normalize_newlines`` rewrites CRLF, lone CR and lone LF to it.
The per-document save convention is applied later, by the I/O collaborator
(see ``structpad.eol``).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from structpad.config import EditorConfig
from structpad.emitters import BlockYamlEmitter
from structpad.eol import normalize_newlines
from structpad.errors import (
    ExplicitFormatError,
    StrictFormatParseError,
    StructuralParseError,
)
from structpad.model import tree_to_value
from structpad.protocols import YamlEmitter
from structpad.syntax.nodes import Format, SyntaxNode
from structpad.syntax.parser import StructuralParser, parse_strict_json

__all__ = ["Formatter", "normalize_newlines"]

logger = logging.getLogger(__name__)


class Formatter:
    """Serializes value models and reformats texts.

    Args:
        config:  Indents and display newline.  Defaults to ``EditorConfig()``.
        emitter: YAML emitter.  Defaults to ``BlockYamlEmitter()``.
        parser:  Structural parser used by YAML reformatting.
    """

    def __init__(
        self,
        config: EditorConfig | None = None,
        emitter: YamlEmitter | None = None,
        parser: StructuralParser | None = None,
    ) -> None:
        self._config = config or EditorConfig()
        self._emitter: YamlEmitter = emitter if emitter is not None else BlockYamlEmitter()
        self._parser = parser if parser is not None else StructuralParser()

    @property
    def config(self) -> EditorConfig:
        return self._config

    def serialize(self, value: Any, format: Format, documents: int = 1) -> str:
        """Serialize a value model.

        Args:
            value:     The value model.
            format:    Target format.  TEXT is written as JSON.
            documents: Number of top-level documents ``value`` stands for.
                When > 1, ``value`` is the list of documents and YAML output
                is a multi-document stream.

        Returns:
            The text, with the emitter's own ``\\n`` line breaks.
        """
        if format is Format.YAML:
            if documents > 1 and isinstance(value, list):
                return self._emitter.emit_all(value, self._config.yaml_indent)
            return self._emitter.emit(value, self._config.yaml_indent)
        return json.dumps(
            value, indent=self._config.json_indent, ensure_ascii=False, allow_nan=False
        )

    def to_display(self, value: Any, format: Format, documents: int = 1) -> str:
        """Serialize and normalize line breaks for the text surface."""
        return normalize_newlines(
            self.serialize(value, format, documents), self._config.display_newline
        )

    def reformat(self, text: str, format: Format) -> str:
        """Reformat ``text`` as JSON or YAML on an explicit user request.

        Args:
            text:   Current editor text.
            format: JSON or YAML.

        Returns:
            The reformatted text, normalized for display.  An empty text is
            returned unchanged.

        Raises:
            ExplicitFormatError: If ``text`` is not valid in the grammar of
                ``format``.  The message is meant for the user.
            ValueError: If ``format`` is TEXT.
        """
        if format is Format.TEXT:
            msg = "Cannot reformat as plain text"
            raise ValueError(msg)
        if not text:
            return text
        if format is Format.JSON:
            return self.to_display(self._load_json(text), Format.JSON)

        trees = self._load_yaml(text)
        values = [tree_to_value(tree) for tree in trees]
        if len(values) == 1:
            return self.to_display(values[0], Format.YAML)
        return self.to_display(values, Format.YAML, documents=len(values))

    def _load_json(self, text: str) -> Any:
        try:
            return parse_strict_json(text)
        except StrictFormatParseError as exc:
            logger.debug("Explicit JSON format rejected: %s", exc)
            raise ExplicitFormatError(Format.JSON, f"JSON parse error: {exc}") from exc

    def _load_yaml(self, text: str) -> tuple[SyntaxNode, ...]:
        try:
            return self._parser.parse(text)
        except StructuralParseError as exc:
            logger.debug("Explicit YAML format rejected: %s", exc)
            raise ExplicitFormatError(Format.YAML, f"YAML parse error: {exc}") from exc
