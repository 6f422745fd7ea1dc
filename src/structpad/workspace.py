"""Workspace: the ordered set of open documents and the active one.

Only the active document is projected into the tree widget.  Activating a
document rebuilds its projection from its text; nodes of the previously
active document must be dropped by the caller, because their addresses
refer to another model.
"""

from __future__ import annotations

import logging
from pathlib import Path

from structpad.cache import ProjectionCache
from structpad.config import EditorConfig
from structpad.document import Document
from structpad.formatter import Formatter
from structpad.reconciler import EditReconciler
from structpad.result import Projection
from structpad.tree.nodes import DocumentNode

__all__ = ["Workspace"]

logger = logging.getLogger(__name__)


class Workspace:
    """Open documents in tab order, with at most one active document.

    All documents share one ProjectionCache, Formatter and EditReconciler
    built from ``config``.
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config = config or EditorConfig()
        self._cache = ProjectionCache(max_size=self._config.cache_size)
        self._formatter = Formatter(config=self._config)
        self._reconciler = EditReconciler(config=self._config)
        self._documents: list[Document] = []
        self._active: int | None = None

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, index: int) -> Document:
        return self._documents[index]

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    @property
    def active_index(self) -> int | None:
        return self._active

    @property
    def active(self) -> Document | None:
        """The document shown in the tree widget, if any tab is open."""
        return None if self._active is None else self._documents[self._active]

    @property
    def nodes(self) -> tuple[DocumentNode, ...]:
        """Tree projection of the active document; empty with no open tab."""
        active = self.active
        return () if active is None else active.nodes

    def new_document(self) -> Document:
        """Open an empty untitled tab and activate it."""
        return self._add(Document.new(**self._collaborators()))

    def open_document(self, text: str, path: Path | None = None) -> Document:
        """Open text read from ``path`` in a new tab and activate it.

        A path that is already open activates the existing tab instead.
        """
        if path is not None:
            for index, document in enumerate(self._documents):
                if document.path == path:
                    logger.debug("%s is already open in tab %d", path, index)
                    self.activate(index)
                    return document
        return self._add(Document.open(text, path, **self._collaborators()))

    def activate(self, index: int) -> Projection:
        """Make tab ``index`` active and rebuild its projection.

        Raises:
            IndexError: If no tab has that index.
        """
        self._check_index(index)
        self._active = index
        return self._documents[index].refresh()

    def close(self, index: int) -> Document:
        """Close tab ``index`` and return its document.

        Closing the active tab activates the tab that moves into its position,
        or the new last tab when the rightmost tab was closed.  Closing the
        only tab leaves no active document.

        Raises:
            IndexError: If no tab has that index.
        """
        self._check_index(index)
        document = self._documents.pop(index)
        if not self._documents:
            self._active = None
        elif self._active is not None and index < self._active:
            self._active -= 1
        elif index == self._active:
            self.activate(min(index, len(self._documents) - 1))
        return document

    def _add(self, document: Document) -> Document:
        self._documents.append(document)
        self.activate(len(self._documents) - 1)
        return document

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._documents):
            msg = f"No document at tab index {index}"
            raise IndexError(msg)

    def _collaborators(self) -> dict[str, object]:
        return {
            "config": self._config,
            "classifier": self._cache,
            "formatter": self._formatter,
            "reconciler": self._reconciler,
        }
