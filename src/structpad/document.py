"""Document: one open text with its parsed model, format and tree projection.

A Document owns the text buffer of one tab and keeps the value model and the
node list in step with it.  The text is the source of truth: every change,
including a tree edit, ends with the whole text being classified and projected
again, so the model and the nodes always describe the current text.

States (``DocumentState``)::

    new/open --> EMPTY or PARSED
    set_text / successful tree edit --> EDITED   (dirty)
    refresh / reformat --> PARSED                (format re-detected)
    mark_saved --> SAVED                         (clean)

The dirty flag is separate from the state: refreshing an edited document
re-enters PARSED but keeps it dirty.
"""

from __future__ import annotations

import logging
from enum import StrEnum, auto
from pathlib import Path
from typing import Any

from structpad.cache import ProjectionCache
from structpad.config import EditorConfig
from structpad.eol import EolMode, apply_eol, detect_eol, normalize_newlines
from structpad.errors import InvalidPointerError
from structpad.formatter import Formatter
from structpad.model import documents_to_value
from structpad.reconciler import EditReconciler
from structpad.result import Projection
from structpad.syntax.classifier import Classifier
from structpad.syntax.nodes import Format
from structpad.tree.builder import NodeBuilder
from structpad.tree.nodes import DocumentNode
from structpad.tree.pointer import Address, decode

__all__ = ["UNTITLED", "Document", "DocumentState"]

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


class DocumentState(StrEnum):
    """Lifecycle state of a Document.

    - EMPTY  -> "empty"  : no text
    - PARSED -> "parsed" : text (re)classified, nothing changed since
    - EDITED -> "edited" : text or model changed since the last save
    - SAVED  -> "saved"  : written by the I/O collaborator
    """

    EMPTY = auto()
    PARSED = auto()
    EDITED = auto()
    SAVED = auto()


class Document:
    """The synchronized text, model and tree projection of one tab.

    Args:
        text:       Initial text.  Line breaks are normalized for display.
        path:       Source file, or None for an untitled document.
        eol:        Save-time line-ending convention.  Defaults to
                    ``config.default_eol``.
        config:     Shared settings.  Defaults to ``EditorConfig()``.
        classifier: Classifier or ProjectionCache used for every reparse.
        formatter:  Serializer for tree edits and explicit reformatting.
        reconciler: Applies tree-label edits.
    """

    def __init__(
        self,
        text: str = "",
        path: Path | None = None,
        *,
        eol: EolMode | None = None,
        config: EditorConfig | None = None,
        classifier: Classifier | ProjectionCache | None = None,
        formatter: Formatter | None = None,
        reconciler: EditReconciler | None = None,
    ) -> None:
        self._config = config or EditorConfig()
        self._classifier = (
            classifier if classifier is not None else ProjectionCache(max_size=self._config.cache_size)
        )
        self._formatter = formatter if formatter is not None else Formatter(config=self._config)
        self._reconciler = reconciler if reconciler is not None else EditReconciler(config=self._config)
        self._builder = NodeBuilder(config=self._config)

        self.path = path
        self.eol = eol if eol is not None else self._config.default_eol
        self._text = normalize_newlines(text, self._config.display_newline)
        self._dirty = False
        self._model: Any = None
        self._format = Format.TEXT
        self._nodes: tuple[DocumentNode, ...] = ()
        self._documents = 0
        self._state = DocumentState.EMPTY
        self.refresh()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, **kwargs: Any) -> Document:
        """Create an empty, untitled document."""
        return cls("", None, **kwargs)

    @classmethod
    def open(cls, text: str, path: Path | None = None, **kwargs: Any) -> Document:
        """Create a document for text read by the I/O collaborator.

        The save convention is taken from the first line break of ``text``
        unless ``eol`` is given explicitly.
        """
        if kwargs.get("eol") is None:
            kwargs["eol"] = detect_eol(text)
        return cls(text, path, **kwargs)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def model(self) -> Any:
        """Value model of the current text; None for plain text."""
        return self._model

    @property
    def format(self) -> Format:
        return self._format

    @property
    def nodes(self) -> tuple[DocumentNode, ...]:
        """Tree projection of the current text, depth-first pre-order."""
        return self._nodes

    @property
    def documents(self) -> int:
        """Number of top-level documents in the text."""
        return self._documents

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def state(self) -> DocumentState:
        return self._state

    @property
    def display_name(self) -> str:
        """File name for the tab strip, or ``Untitled``."""
        return self.path.name if self.path is not None else UNTITLED

    @property
    def title(self) -> str:
        """Display name with a ``*`` marker while there are unsaved changes."""
        return f"{self.display_name}*" if self._dirty else self.display_name

    def projection(self) -> Projection:
        """Snapshot of the current model, format and nodes."""
        return Projection(
            model=self._model,
            format=self._format,
            nodes=self._nodes,
            documents=self._documents,
        )

    def node_at(self, address: Address | str) -> DocumentNode | None:
        """Return the node projected at ``address``, if any.

        A malformed pointer string matches no node.
        """
        if isinstance(address, str):
            try:
                address = decode(address)
            except InvalidPointerError as exc:
                logger.debug("No node at malformed pointer: %s", exc)
                return None
        wanted = tuple(str(segment) for segment in address)
        for node in self._nodes:
            if tuple(str(segment) for segment in node.address) == wanted:
                return node
        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def refresh(self) -> Projection:
        """Classify and project the current text again."""
        classification = self._classifier.classify(self._text)
        self._format = classification.format
        self._documents = len(classification.trees)
        self._model = documents_to_value(classification.trees)
        self._nodes = self._builder.build(classification.trees)
        self._state = DocumentState.PARSED if self._text else DocumentState.EMPTY
        logger.debug(
            "Projected %s document(s) as %s with %d node(s)",
            self._documents,
            self._format,
            len(self._nodes),
        )
        return self.projection()

    def set_text(self, text: str) -> Projection:
        """Replace the text after an edit in the text widget."""
        text = normalize_newlines(text, self._config.display_newline)
        if text == self._text:
            return self.projection()
        self._text = text
        projection = self.refresh()
        self._mark_edited()
        return projection

    def commit_node_edit(
        self, address: Address | str, is_sequence_element: bool, new_text: str
    ) -> str:
        """Apply a committed tree-label edit and return the resulting text.

        The model is re-serialized in the document's format, the text is
        replaced wholesale, and the projection is rebuilt from that text.
        Committing a label unchanged, or an edit the reconciler rejects,
        returns the current text and changes nothing.
        """
        if self._format is Format.TEXT:
            return self._text
        node = self.node_at(address)
        if node is not None and node.label == new_text:
            return self._text

        result = self._reconciler.apply(self._model, address, is_sequence_element, new_text)
        if not result.outcome.changed:
            return self._text

        logger.debug("Tree edit %s at %r", result.outcome, address)
        self._text = self._formatter.to_display(result.model, self._format, self._documents)
        self.refresh()
        self._mark_edited()
        return self._text

    def reformat(self, format: Format) -> str:
        """Reformat the text as JSON or YAML on an explicit user request.

        Raises:
            ExplicitFormatError: The text is not valid in that grammar.  The
                document is left untouched.
        """
        text = self._formatter.reformat(self._text, format)
        changed = text != self._text
        self._text = text
        self.refresh()
        if changed:
            self._dirty = True
        return self._text

    def mark_saved(self, path: Path | None = None) -> None:
        """Record a successful save, optionally under a new path."""
        if path is not None:
            self.path = path
        self._dirty = False
        self._state = DocumentState.SAVED

    def text_for_save(self) -> str:
        """The text converted to the document's line-ending convention."""
        return apply_eol(self._text, self.eol)

    def _mark_edited(self) -> None:
        self._dirty = True
        self._state = DocumentState.EDITED
