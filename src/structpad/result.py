"""Result types shared across structpad.

``Ok``/``Err`` are the discriminated result of an ordered attempt (try the
superset grammar, then the strict grammar, ...), so control flow over parse
outcomes is written as plain conditionals.  The remaining dataclasses are the
rich results handed to callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from structpad.syntax.nodes import Format, SyntaxNode
    from structpad.tree.nodes import DocumentNode

__all__ = [
    "Classification",
    "EditOutcome",
    "Err",
    "Ok",
    "Outcome",
    "Projection",
    "ReconcileResult",
]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful attempt carrying its value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """Failed attempt carrying the error that ended it."""

    error: Exception

    @property
    def is_ok(self) -> bool:
        return False


Outcome = Ok[T] | Err


class EditOutcome(StrEnum):
    """What a committed label edit did to the model.

    - VALUE_REPLACED           -> parsed literal stored at the address
    - VALUE_REPLACED_AS_STRING -> literal did not parse; raw text stored
    - KEY_RENAMED              -> mapping entry moved to a new key
    - NO_OP                    -> model left unchanged
    """

    VALUE_REPLACED = auto()
    VALUE_REPLACED_AS_STRING = auto()
    KEY_RENAMED = auto()
    NO_OP = auto()

    @property
    def changed(self) -> bool:
        """True when the model was mutated."""
        return self is not EditOutcome.NO_OP


@dataclass(frozen=True, slots=True)
class Classification:
    """Detected format of a text plus the syntax trees it parsed into.

    Attributes:
        format: TEXT, JSON or YAML.
        trees:  One syntax tree per document in the text; empty for TEXT.
    """

    format: Format
    trees: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True, slots=True)
class Projection:
    """Everything the tree widget needs after a (re)parse.

    Attributes:
        model:     Typed value model.  None when the text is plain text.
        format:    Detected format.
        nodes:     Depth-first pre-order node list, one per value.
        documents: Number of top-level documents in the text.
    """

    model: Any
    format: Format
    nodes: tuple[DocumentNode, ...]
    documents: int


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of applying a single label edit.

    Attributes:
        outcome: Which reconciliation rule fired.
        model:   The model after the edit.  A root value replacement returns a
                 new object; every other edit mutates the given model in place.
    """

    outcome: EditOutcome
    model: Any
