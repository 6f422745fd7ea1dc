"""JsonFallbackEmitter: YAML output approximated by JSON text.

For practical documents JSON is a subset of YAML, so dumping the model as
JSON yields text every YAML reader accepts.  This is a simplification, not
YAML fidelity: the output is flow style throughout, and comments, anchors,
aliases and block scalars are never produced.  Because the output starts with
"{" or "[" and is strict JSON, the classifier will report such a document as
JSON after the next reparse.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

__all__ = ["JsonFallbackEmitter"]


class JsonFallbackEmitter:
    """Emits value models as indented JSON for use where YAML is expected.

    This emitter satisfies the ``YamlEmitter`` Protocol structurally.
    """

    def emit(self, value: Any, indent: int) -> str:
        """Return ``value`` as indented JSON text."""
        text = json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
        return text + "\n"

    def emit_all(self, documents: Sequence[Any], indent: int) -> str:
        """Return one ``---`` separated JSON document per entry."""
        return "".join(f"---\n{self.emit(doc, indent)}" for doc in documents)
