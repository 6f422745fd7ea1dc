"""EditReconciler: turns one committed tree-label edit into a model mutation.

The tree widget only reports the address of the edited node, whether that
node is a sequence element, and the raw text the user typed.  Rules, first
match wins:

1. The text contains ": ".  Everything after the first occurrence replaces the
   value at the address: parsed as a JSON literal when possible (``5``,
   ``true``, ``null``, ``[1, 2]``, ``"quoted"``), otherwise stored verbatim as
   a string.
2. The node is a mapping entry (not a sequence element, not the root) and the
   text is non-empty and not the root label.  The text becomes the entry's
   new key.  The entry is erased and re-inserted, so a renamed key moves to
   the end of its mapping; renaming onto an existing sibling key overwrites
   that sibling in place.
3. Anything else leaves the model unchanged.

Malformed input never raises out of ``apply``: a bad literal becomes a string,
an unresolvable address or rename target becomes a no-op.
"""

from __future__ import annotations

import logging
from typing import Any

from structpad.config import EditorConfig
from structpad.errors import (
    AddressResolutionError,
    EditReconciliationFailure,
    InvalidPointerError,
    KeyResolutionFailure,
    StrictFormatParseError,
)
from structpad.model import get_at, set_at
from structpad.result import EditOutcome, ReconcileResult
from structpad.syntax.parser import parse_strict_json
from structpad.tree.pointer import Address, decode

__all__ = ["VALUE_SEPARATOR", "EditReconciler", "parse_literal"]

logger = logging.getLogger(__name__)

# Separates key from value in a rendered scalar label: "count (Ln 3): 5"
VALUE_SEPARATOR = ": "


def parse_literal(text: str) -> Any:
    """Parse a replacement value typed into a label.

    Raises:
        EditReconciliationFailure: If ``text`` is not a JSON literal.
    """
    try:
        return parse_strict_json(text)
    except StrictFormatParseError as exc:
        raise EditReconciliationFailure(str(exc)) from exc


class EditReconciler:
    """Applies single label edits to a value model.

    Args:
        config: Supplies the root label, which is never accepted as a key.
            Defaults to ``EditorConfig()``.

    Example::

        model = {"old": 1, "b": 2}
        result = EditReconciler().apply(model, ("old",), False, "newName")
        result.outcome   # EditOutcome.KEY_RENAMED
        result.model     # {"b": 2, "newName": 1}
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config = config or EditorConfig()

    def apply(
        self,
        model: Any,
        address: Address | str,
        is_sequence_element: bool,
        new_text: str,
    ) -> ReconcileResult:
        """Apply one edit.

        Args:
            model:    The value model.  Mutated in place, except when the root
                value itself is replaced.
            address:  Address of the edited node, as segments or as an encoded
                pointer string.
            is_sequence_element: Whether the edited node is a sequence element.
            new_text: The full label text the user committed.

        Returns:
            The outcome and the (possibly new) model root.
        """
        if isinstance(address, str):
            try:
                address = decode(address)
            except InvalidPointerError as exc:
                logger.debug("Ignoring edit at malformed pointer: %s", exc)
                return ReconcileResult(EditOutcome.NO_OP, model)

        _, separator, replacement = new_text.partition(VALUE_SEPARATOR)
        if separator:
            return self._replace_value(model, address, replacement)

        if (
            not is_sequence_element
            and address
            and new_text
            and new_text != self._config.root_label
        ):
            try:
                return self._rename_key(model, address, new_text)
            except KeyResolutionFailure as exc:
                logger.debug("Ignoring rename to %r: %s", new_text, exc)

        return ReconcileResult(EditOutcome.NO_OP, model)

    def _replace_value(self, model: Any, address: Address, raw: str) -> ReconcileResult:
        try:
            value = parse_literal(raw)
            outcome = EditOutcome.VALUE_REPLACED
        except EditReconciliationFailure as exc:
            logger.debug("Storing %r as a string: %s", raw, exc)
            value = raw
            outcome = EditOutcome.VALUE_REPLACED_AS_STRING

        try:
            model = set_at(model, address, value)
        except AddressResolutionError as exc:
            logger.debug("Ignoring value edit: %s", exc)
            return ReconcileResult(EditOutcome.NO_OP, model)
        return ReconcileResult(outcome, model)

    def _rename_key(self, model: Any, address: Address, new_key: str) -> ReconcileResult:
        """Erase the entry at ``address`` and re-insert it under ``new_key``.

        Raises:
            KeyResolutionFailure: If the parent is missing or not a mapping,
                or the old key is not in it.
        """
        old_key = address[-1]
        try:
            parent = get_at(model, address[:-1])
        except AddressResolutionError as exc:
            raise KeyResolutionFailure(str(exc)) from exc
        if not isinstance(parent, dict):
            msg = f"parent of {old_key!r} is not a mapping"
            raise KeyResolutionFailure(msg)
        if not isinstance(old_key, str) or old_key not in parent:
            msg = f"key {old_key!r} not found"
            raise KeyResolutionFailure(msg)

        if old_key == new_key:
            return ReconcileResult(EditOutcome.NO_OP, model)
        parent[new_key] = parent.pop(old_key)
        return ReconcileResult(EditOutcome.KEY_RENAMED, model)
