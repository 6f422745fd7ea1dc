"""Syntax subpackage: structural parsing and format classification.

Re-exports the public API for the syntax module:
- SyntaxNode / SyntaxKind: immutable parse tree with 0-based source lines
- Format: TEXT, JSON or YAML
- StructuralParser: YAML-superset parser producing SyntaxNode trees
- Classifier / classify: the JSON-vs-YAML-vs-text detection policy
"""

from structpad.syntax.classifier import Classifier, classify
from structpad.syntax.nodes import Format, SyntaxKind, SyntaxNode
from structpad.syntax.parser import StructuralParser, parse_strict_json

__all__ = [
    "Classifier",
    "Format",
    "StructuralParser",
    "SyntaxKind",
    "SyntaxNode",
    "classify",
    "parse_strict_json",
]
