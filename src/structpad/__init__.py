"""structpad - synchronized text, value model and tree views of JSON/YAML documents."""

from __future__ import annotations

from structpad.api import (
    commit_node_edit,
    load_document,
    reformat_as_json,
    reformat_as_yaml,
    refresh_projection,
)
from structpad.config import EditorConfig
from structpad.document import Document, DocumentState
from structpad.eol import EolMode
from structpad.errors import ExplicitFormatError, StructpadError
from structpad.result import EditOutcome, Projection
from structpad.syntax.nodes import Format
from structpad.tree.nodes import DocumentNode, NodeKind
from structpad.workspace import Workspace

__version__: str = "0.1.0"
__all__: list[str] = [
    "Document",
    "DocumentNode",
    "DocumentState",
    "EditOutcome",
    "EditorConfig",
    "EolMode",
    "ExplicitFormatError",
    "Format",
    "NodeKind",
    "Projection",
    "StructpadError",
    "Workspace",
    "commit_node_edit",
    "load_document",
    "reformat_as_json",
    "reformat_as_yaml",
    "refresh_projection",
]
