"""Public API functions for structpad.

This module provides the five entry points the editor shell calls:
load_document, refresh_projection, commit_node_edit, reformat_as_json and
reformat_as_yaml.  Each call builds fresh collaborators to guarantee zero
global state between calls; long-lived callers that want parse caching use
``Document`` or ``Workspace`` instead.
"""

from __future__ import annotations

from structpad.config import EditorConfig
from structpad.document import Document
from structpad.formatter import Formatter
from structpad.result import Projection
from structpad.syntax.classifier import Classifier
from structpad.syntax.nodes import Format
from structpad.tree.pointer import Address

__all__ = [
    "commit_node_edit",
    "load_document",
    "reformat_as_json",
    "reformat_as_yaml",
    "refresh_projection",
]


def _document(text: str, config: EditorConfig | None) -> Document:
    return Document(text, config=config, classifier=Classifier())


def load_document(text: str, config: EditorConfig | None = None) -> Projection:
    """Classify and project the text of a newly opened tab.

    Args:
        text:   Decoded file content.
        config: Settings.  Defaults to ``EditorConfig()`` when None.

    Returns:
        A ``Projection`` with the value model (None for plain text), the
        detected format, the tree nodes and the number of documents.
    """
    return _document(text, config).projection()


def refresh_projection(text: str, config: EditorConfig | None = None) -> Projection:
    """Classify and project ``text`` again after edits in the text widget.

    Args:
        text:   Current editor text.
        config: Settings.  Defaults to ``EditorConfig()`` when None.

    Returns:
        A fresh ``Projection``; nodes of earlier projections are obsolete.
    """
    return _document(text, config).projection()


def commit_node_edit(
    text: str,
    address: Address | str,
    is_sequence_element: bool,
    new_label: str,
    config: EditorConfig | None = None,
) -> str:
    """Apply a committed tree-label edit to ``text``.

    Args:
        text:     Current editor text the tree was projected from.
        address:  Address of the edited node, as segments or pointer string.
        is_sequence_element: The node's sequence-element flag.
        new_label: Full label text the user committed.
        config:   Settings.  Defaults to ``EditorConfig()`` when None.

    Returns:
        The re-serialized text (display line breaks), or ``text`` unchanged
        when the edit was a no-op.
    """
    document = _document(text, config)
    result = document.commit_node_edit(address, is_sequence_element, new_label)
    return result if document.dirty else text


def reformat_as_json(text: str, config: EditorConfig | None = None) -> str:
    """Reformat ``text`` as indented JSON.

    Raises:
        ExplicitFormatError: If ``text`` is not valid JSON.  The message is
            a diagnostic for the user; the caller keeps its text unchanged.
    """
    return Formatter(config=config).reformat(text, Format.JSON)


def reformat_as_yaml(text: str, config: EditorConfig | None = None) -> str:
    """Reformat ``text`` as block-style YAML.

    Raises:
        ExplicitFormatError: If ``text`` is not valid YAML.  The message is
            a diagnostic for the user; the caller keeps its text unchanged.
    """
    return Formatter(config=config).reformat(text, Format.YAML)
