"""NodeBuilder: projects syntax trees into an ordered list of DocumentNodes.

Traversal is depth-first pre-order and emits one node per value, containers
included.  Addresses are built during traversal:
- Root is () (empty address)
- Each level appends the mapping key or the sequence index

Mapping entries go through ``structpad.model.mapping_entries``, the same
duplicate-key collapse the value model uses, so every address resolves to
exactly one value of ``documents_to_value(trees)``.

A stream with several documents is modelled as a list of documents.  Its root
nodes are labelled ``ROOT [i]`` and addressed ``(i,)``, and they count as
sequence elements so they cannot be renamed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from structpad.config import EditorConfig
from structpad.model import mapping_entries
from structpad.syntax.nodes import SyntaxKind, SyntaxNode
from structpad.tree.nodes import DocumentNode, NodeKind
from structpad.tree.pointer import Address

__all__ = ["NodeBuilder", "build_nodes"]

_KINDS = {
    SyntaxKind.SCALAR: NodeKind.SCALAR,
    SyntaxKind.SEQUENCE: NodeKind.SEQUENCE,
    SyntaxKind.MAPPING: NodeKind.MAPPING,
}


@dataclass
class NodeBuilder:
    """Builds the tree projection of a parsed document stream.

    Example::

        builder = NodeBuilder()
        nodes = builder.build(StructuralParser().parse("a: 1"))
        [n.label for n in nodes]   # ["ROOT (Map)", "a (Ln 0): 1"]
        nodes[1].address           # ("a",)
    """

    config: EditorConfig = field(default_factory=EditorConfig)

    def build(self, trees: tuple[SyntaxNode, ...]) -> tuple[DocumentNode, ...]:
        """Project every document of a stream.

        Args:
            trees: Syntax trees in stream order.  Empty for plain text.

        Returns:
            A fresh tuple of fresh nodes, depth-first pre-order.
        """
        out: list[DocumentNode] = []
        root_label = self.config.root_label
        if len(trees) == 1:
            self._visit(trees[0], root_label, (), False, None, 0, out)
        else:
            for index, tree in enumerate(trees):
                self._visit(tree, f"{root_label} [{index}]", (index,), True, None, 0, out)
        return tuple(out)

    def _visit(
        self,
        node: SyntaxNode,
        key: str,
        address: Address,
        is_sequence_element: bool,
        line: int | None,
        depth: int,
        out: list[DocumentNode],
    ) -> None:
        out.append(
            DocumentNode(
                key=key,
                kind=_KINDS[node.kind],
                address=address,
                is_sequence_element=is_sequence_element,
                line=line,
                preview=node.value if node.kind is SyntaxKind.SCALAR else None,
                depth=depth,
            )
        )

        if node.kind is SyntaxKind.MAPPING:
            for child_key, child in mapping_entries(node):
                self._visit(
                    child, child_key, (*address, child_key), False, child.line, depth + 1, out
                )
        elif node.kind is SyntaxKind.SEQUENCE:
            for index, child in enumerate(node.items):
                self._visit(
                    child, f"[{index}]", (*address, index), True, child.line, depth + 1, out
                )


def build_nodes(
    trees: tuple[SyntaxNode, ...], config: EditorConfig | None = None
) -> tuple[DocumentNode, ...]:
    """Project ``trees`` with a fresh NodeBuilder."""
    return NodeBuilder(config=config or EditorConfig()).build(trees)
