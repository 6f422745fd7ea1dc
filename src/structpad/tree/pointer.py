"""Address codec: reversible pointer strings for tree node addresses.

An address is the sequence of segments leading from the document root to a
node: mapping keys (``str``) and sequence indexes (``int``).  Its encoded form
follows JSON Pointer (RFC 6901):

- Root is "" (empty string)
- Each level appends "/{segment}"
- Inside a key, "~" is written "~0" and "/" is written "~1"

Escaping replaces "~" first and "/" second; unescaping runs in the reverse
order.  Any other order corrupts keys that already contain "~0" or "~1".

The codec is pure string transformation.  It knows nothing about models, so
``decode`` returns every segment as a string; turning "3" back into a sequence
index is the job of whoever holds the model (see ``structpad.model``).
"""

from __future__ import annotations

from collections.abc import Iterable

from structpad.errors import InvalidPointerError

__all__ = ["Address", "Segment", "decode", "encode", "escape_key", "unescape_key"]

Segment = str | int
Address = tuple[Segment, ...]


def escape_key(key: str) -> str:
    """Escape one mapping key for use as a pointer segment."""
    return key.replace("~", "~0").replace("/", "~1")


def unescape_key(segment: str) -> str:
    """Undo ``escape_key`` on one pointer segment."""
    return segment.replace("~1", "/").replace("~0", "~")


def encode(segments: Iterable[Segment]) -> str:
    """Encode an address as a pointer string.

    Args:
        segments: Keys and indexes from the root down.  An empty iterable is
            the root.

    Returns:
        "" for the root, otherwise "/seg/seg/...".

    Raises:
        InvalidPointerError: If an index is negative or a segment is neither
            ``str`` nor ``int``.
    """
    parts: list[str] = []
    for segment in segments:
        # bool is an int subclass; True is not an index
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            msg = f"Address segments must be str or int, got {type(segment).__name__}"
            raise InvalidPointerError(msg)
        if isinstance(segment, int):
            if segment < 0:
                msg = f"Sequence index must be >= 0, got {segment}"
                raise InvalidPointerError(msg)
            parts.append(str(segment))
        else:
            parts.append(escape_key(segment))
    return "".join(f"/{part}" for part in parts)


def decode(pointer: str) -> tuple[str, ...]:
    """Decode a pointer string into its (unescaped) segments.

    Args:
        pointer: "" for the root, otherwise a string starting with "/".

    Returns:
        The segments as strings, root first.

    Raises:
        InvalidPointerError: If a non-empty pointer does not start with "/".
    """
    if pointer == "":
        return ()
    if not pointer.startswith("/"):
        msg = f"Pointer must be empty or start with '/', got {pointer!r}"
        raise InvalidPointerError(msg)
    return tuple(unescape_key(part) for part in pointer[1:].split("/"))
