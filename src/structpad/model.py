"""Value model: typed Python data built from syntax trees, plus address lookups.

The value model is plain JSON-shaped Python data (dict, list, str, int, float,
bool, None).  Dict insertion order is mapping order.

Scalar typing rules for plain (unquoted) scalars, applied in order:

- ``true`` / ``false``           -> bool
- ``null`` / ``~`` / empty       -> None
- contains ".", "e" or "E" and matches the float lexical form -> float
  (a token too large for a float, such as ``1e400``, stays a str)
- matches the integer lexical form -> int
- anything else                  -> str

Quoted and block scalars are always strings, so ``"42"`` stays ``"42"``.
Only the lowercase literals are special: ``True`` or ``NULL`` are strings.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from structpad.errors import AddressResolutionError
from structpad.syntax.nodes import SyntaxKind, SyntaxNode

if TYPE_CHECKING:
    from structpad.tree.pointer import Address, Segment

__all__ = [
    "PLACEHOLDER_KEY",
    "JsonValue",
    "documents_to_value",
    "get_at",
    "key_text",
    "mapping_entries",
    "resolve_segment",
    "set_at",
    "tree_to_value",
    "type_scalar",
]

# Type alias for model values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

# Substituted for mapping keys that are not scalars (e.g. "? [a, b]: c")
PLACEHOLDER_KEY = "???"

_FLOAT = re.compile(r"[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
_INT = re.compile(r"[-+]?[0-9]+")
_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None, "~": None, "": None}


def type_scalar(text: str) -> JsonValue:
    """Type the text of a plain scalar token."""
    if text in _LITERALS:
        return _LITERALS[text]
    if any(ch in text for ch in ".eE") and _FLOAT.fullmatch(text):
        number = float(text)
        return number if math.isfinite(number) else text
    if _INT.fullmatch(text):
        return int(text)
    return text


def key_text(node: SyntaxNode) -> str:
    """Return the mapping key a key node stands for."""
    if node.kind is SyntaxKind.SCALAR:
        return node.value
    return PLACEHOLDER_KEY


def mapping_entries(node: SyntaxNode) -> Iterator[tuple[str, SyntaxNode]]:
    """Yield (key, value node) for a MAPPING with duplicate keys collapsed.

    Collapsing follows dict assignment: the first occurrence keeps its
    position and the last occurrence supplies the value.  The model and the
    tree projection both use this, so they always agree on the entries.
    """
    entries: dict[str, SyntaxNode] = {}
    for key_node, value_node in node.pairs:
        entries[key_text(key_node)] = value_node
    yield from entries.items()


def tree_to_value(node: SyntaxNode) -> JsonValue:
    """Convert one syntax tree into a value model."""
    if node.kind is SyntaxKind.SCALAR:
        if node.is_plain:
            return type_scalar(node.value)
        return node.value
    if node.kind is SyntaxKind.SEQUENCE:
        return [tree_to_value(item) for item in node.items]
    return {key: tree_to_value(value) for key, value in mapping_entries(node)}


def documents_to_value(trees: tuple[SyntaxNode, ...]) -> JsonValue:
    """Convert a document stream into a single value model.

    One document yields its own value; several documents yield a list with one
    entry per document; no document yields None.
    """
    if not trees:
        return None
    if len(trees) == 1:
        return tree_to_value(trees[0])
    return [tree_to_value(tree) for tree in trees]


def resolve_segment(container: Any, segment: Segment) -> Segment:
    """Turn an address segment into the key/index ``container`` is indexed by.

    Decoded pointers carry indexes as strings ("3"); lists need an ``int``.
    Keys of dicts are always strings, so an ``int`` segment is stringified.

    Raises:
        AddressResolutionError: If the container is a scalar or the segment is
            not a valid index for a list.
    """
    if isinstance(container, dict):
        return str(segment)
    if isinstance(container, list):
        if isinstance(segment, str) and segment.isascii() and segment.isdigit():
            return int(segment)
        # bool is an int subclass; True is not an index
        if isinstance(segment, int) and not isinstance(segment, bool) and segment >= 0:
            return segment
        msg = f"Invalid sequence index {segment!r}"
        raise AddressResolutionError(msg)
    msg = f"Cannot descend into {type(container).__name__} with {segment!r}"
    raise AddressResolutionError(msg)


def _child(container: Any, segment: Segment) -> Any:
    key = resolve_segment(container, segment)
    try:
        return container[key]
    except (KeyError, IndexError) as exc:
        msg = f"No value at segment {segment!r}"
        raise AddressResolutionError(msg) from exc


def get_at(model: Any, address: Address) -> Any:
    """Return the value at ``address``.

    Raises:
        AddressResolutionError: If any segment does not resolve.
    """
    value = model
    for segment in address:
        value = _child(value, segment)
    return value


def set_at(model: Any, address: Address, value: Any) -> Any:
    """Replace the value at an existing ``address`` and return the model.

    The empty address replaces the whole model, so the return value must be
    used.  Every other address mutates ``model`` in place.  Unlike JSON
    Pointer "add", nothing is ever created: the target must already exist.

    Raises:
        AddressResolutionError: If the address does not resolve.
    """
    if not address:
        return value
    parent = get_at(model, address[:-1])
    key = resolve_segment(parent, address[-1])
    if isinstance(parent, dict):
        if key not in parent:
            msg = f"No value at segment {address[-1]!r}"
            raise AddressResolutionError(msg)
    elif not 0 <= key < len(parent):  # type: ignore[operator]
        msg = f"No value at segment {address[-1]!r}"
        raise AddressResolutionError(msg)
    parent[key] = value
    return model
