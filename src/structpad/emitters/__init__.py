"""Emitters subpackage: pluggable YAML writers for the formatter.

- ``BlockYamlEmitter`` (default): block-style YAML through PyYAML.
- ``JsonFallbackEmitter``: JSON text standing in for YAML, for callers that
  want output any JSON tool can also read.

Neither emitter preserves comments, anchors/aliases or the flow/block style
of the source text; only the value model is written.  All emitters satisfy
the ``YamlEmitter`` Protocol structurally.
"""

from structpad.emitters.block import BlockYamlEmitter
from structpad.emitters.json_fallback import JsonFallbackEmitter

__all__ = ["BlockYamlEmitter", "JsonFallbackEmitter"]
