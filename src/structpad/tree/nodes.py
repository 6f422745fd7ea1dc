"""DocumentNode dataclass and NodeKind StrEnum for the tree projection.

A DocumentNode is one row of the tree widget.  It carries its display label
and the address of the value it shows; the address is the only link back to
the model.  Nodes hold no reference to model objects, so they cannot dangle
when the model is rebuilt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from structpad.tree.pointer import Address, encode

__all__ = ["DocumentNode", "NodeKind"]


class NodeKind(StrEnum):
    """Structural kind of the value a node shows.

    - SCALAR   -> "scalar"   : string, number, bool or null
    - SEQUENCE -> "sequence" : ordered list
    - MAPPING  -> "mapping"  : ordered key/value map
    """

    SCALAR = auto()
    SEQUENCE = auto()
    MAPPING = auto()


_KIND_SUFFIX = {NodeKind.SEQUENCE: " (Sequence)", NodeKind.MAPPING: " (Map)"}


@dataclass(frozen=True, slots=True)
class DocumentNode:
    """One node of the tree projection.

    Attributes:
        key:     Mapping key, "[i]" for sequence elements, or the root label.
        kind:    What the node's value is.
        address: Segments from the model root to this node's value.
        is_sequence_element: True when the node is an element of a sequence.
                 Such nodes can only be value-edited, never key-renamed.
        line:    0-based source line of the value, or None for root nodes.
        preview: Scalar text as written in the source; None for containers.
        depth:   Nesting depth, 0 for a root.
    """

    key: str
    kind: NodeKind
    address: Address
    is_sequence_element: bool = False
    line: int | None = None
    preview: str | None = None
    depth: int = 0

    @property
    def pointer(self) -> str:
        """The address encoded as a pointer string."""
        return encode(self.address)

    @property
    def label(self) -> str:
        """Display text: ``key (Ln n): preview`` or ``key (Ln n) (Map)``."""
        text = self.key
        if self.line is not None:
            text += f" (Ln {self.line})"
        if self.kind is NodeKind.SCALAR:
            return f"{text}: {self.preview}"
        return text + _KIND_SUFFIX[self.kind]
