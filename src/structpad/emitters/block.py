"""BlockYamlEmitter: canonical block-style YAML through PyYAML.

Output is block style with the configured indent, mapping order preserved and
non-ASCII text kept as is.  Only the value model is emitted: comments,
anchors/aliases, flow style and block scalar styles of the source text are not
preserved.

PyYAML decides whether a string must be quoted by asking its own resolver.
That resolver only knows YAML 1.1 numbers, so a string such as ``1e5`` would
be written plain and then read back by structpad as the float 100000.0.  The
dumper below registers structpad's number forms as implicit resolvers, which
makes PyYAML quote every string structpad would otherwise re-type.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

import yaml

__all__ = ["BlockYamlEmitter"]


class _BlockDumper(yaml.SafeDumper):
    """SafeDumper that quotes strings structpad would read as numbers."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        # Indent sequences nested in mappings ("key:\n  - a") like the key.
        super().increase_indent(flow, False)


_BlockDumper.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(r"^[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)[eE][-+]?[0-9]+$"),
    list("-+0123456789."),
)
_BlockDumper.add_implicit_resolver(
    "tag:yaml.org,2002:int",
    re.compile(r"^[-+]?[0-9]+$"),
    list("-+0123456789"),
)


class BlockYamlEmitter:
    """Emits value models as block-style YAML.

    This emitter satisfies the ``YamlEmitter`` Protocol structurally.
    """

    def emit(self, value: Any, indent: int) -> str:
        """Return ``value`` as a single YAML document."""
        return yaml.dump(value, Dumper=_BlockDumper, **_options(indent))

    def emit_all(self, documents: Sequence[Any], indent: int) -> str:
        """Return ``documents`` as a ``---`` separated YAML stream."""
        return yaml.dump_all(
            list(documents), Dumper=_BlockDumper, explicit_start=True, **_options(indent)
        )


def _options(indent: int) -> dict[str, Any]:
    return {
        "indent": indent,
        "default_flow_style": False,
        "sort_keys": False,
        "allow_unicode": True,
        "width": float("inf"),
    }
