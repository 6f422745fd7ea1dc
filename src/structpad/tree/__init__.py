"""Tree subpackage for the tree-widget projection.

Re-exports the public API for the tree module:
- DocumentNode: one tree row (label, address, sequence-element flag)
- NodeKind: StrEnum of the three value kinds (SCALAR, SEQUENCE, MAPPING)
- NodeBuilder / build_nodes: syntax trees -> ordered DocumentNode list
- encode / decode / escape_key / unescape_key: the address codec
"""

from structpad.tree.builder import NodeBuilder, build_nodes
from structpad.tree.nodes import DocumentNode, NodeKind
from structpad.tree.pointer import Address, decode, encode, escape_key, unescape_key

__all__ = [
    "Address",
    "DocumentNode",
    "NodeBuilder",
    "NodeKind",
    "build_nodes",
    "decode",
    "encode",
    "escape_key",
    "unescape_key",
]
