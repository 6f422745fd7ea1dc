"""Syntax tree types produced by the structural parser.

SyntaxNode is the parser's immutable view of one composed YAML node: its kind,
its 0-based source line, and its raw content.  Scalars keep their text exactly
as written (minus quoting); typing the text into bool/int/float/None happens
later in ``structpad.model``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["Format", "SyntaxKind", "SyntaxNode"]


class Format(StrEnum):
    """Detected dialect of a document's text.

    - TEXT -> "text" : did not parse; no model, no tree
    - JSON -> "json" : parses under the strict JSON grammar
    - YAML -> "yaml" : parses only under the YAML (superset) grammar
    """

    TEXT = auto()
    JSON = auto()
    YAML = auto()


class SyntaxKind(StrEnum):
    """Structural kind of a syntax node."""

    SCALAR = auto()
    SEQUENCE = auto()
    MAPPING = auto()


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """One node of a parsed document.

    Attributes:
        kind:  SCALAR, SEQUENCE or MAPPING.
        line:  0-based source line of the node's first token.
        value: Scalar text as written, without quotes.  Empty for containers.
        style: PyYAML scalar style: None for plain, one of ``'"|>`` otherwise.
        items: Children of a SEQUENCE, in order.
        pairs: (key, value) children of a MAPPING, in source order.  Duplicate
               keys are kept here; collapsing them is the model's job.
    """

    kind: SyntaxKind
    line: int
    value: str = ""
    style: str | None = None
    items: tuple[SyntaxNode, ...] = ()
    pairs: tuple[tuple[SyntaxNode, SyntaxNode], ...] = ()

    @property
    def is_plain(self) -> bool:
        """True for an unquoted, non-block scalar."""
        return self.kind is SyntaxKind.SCALAR and not self.style
