"""Tests for EditReconciler.

Covers the three label-edit rules (value replacement, key rename, no-op),
the JSON literal / string fallback, rename ordering, sequence elements,
the root, pointer-string addresses, and unresolvable addresses.
"""

from __future__ import annotations

from typing import Any

import pytest

from structpad.config import EditorConfig
from structpad.errors import EditReconciliationFailure
from structpad.model import PLACEHOLDER_KEY
from structpad.reconciler import EditReconciler, parse_literal
from structpad.result import EditOutcome


@pytest.fixture
def reconciler() -> EditReconciler:
    """A fresh EditReconciler instance for each test."""
    return EditReconciler()


# ---------------------------------------------------------------------------
# Literal parsing
# ---------------------------------------------------------------------------


class TestParseLiteral:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("5", 5),
            ("2.5", 2.5),
            ("true", True),
            ("null", None),
            ('"quoted"', "quoted"),
            ("[1, 2]", [1, 2]),
            ('{"k": "v"}', {"k": "v"}),
        ],
    )
    def test_json_literals(self, text: str, expected: Any) -> None:
        assert parse_literal(text) == expected

    @pytest.mark.parametrize("text", ["hello", "", "'single'", "NaN", "[1,]"])
    def test_invalid_literal(self, text: str) -> None:
        with pytest.raises(EditReconciliationFailure):
            parse_literal(text)


# ---------------------------------------------------------------------------
# Value replacement
# ---------------------------------------------------------------------------


class TestValueReplacement:
    def test_int_literal(self, reconciler: EditReconciler) -> None:
        model = {"a": 1}
        result = reconciler.apply(model, ("a",), False, "a: 5")
        assert result.outcome is EditOutcome.VALUE_REPLACED
        assert result.model == {"a": 5}

    def test_full_label_with_line(self, reconciler: EditReconciler) -> None:
        model = {"count": 1}
        result = reconciler.apply(model, ("count",), False, "count (Ln 3): 7")
        assert result.model == {"count": 7}

    def test_string_fallback(self, reconciler: EditReconciler) -> None:
        model = {"a": 1}
        result = reconciler.apply(model, ("a",), False, "a: hello")
        assert result.outcome is EditOutcome.VALUE_REPLACED_AS_STRING
        assert result.model == {"a": "hello"}

    def test_quoted_literal_is_string(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply({"a": 1}, ("a",), False, 'a: "5"')
        assert result.model == {"a": "5"}
        assert result.outcome is EditOutcome.VALUE_REPLACED

    def test_container_literal(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply({"a": 1}, ("a",), False, "a: [1, 2]")
        assert result.model == {"a": [1, 2]}

    def test_split_on_first_separator(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply({"a": 1}, ("a",), False, "a: b: c")
        assert result.model == {"a": "b: c"}

    def test_empty_value_is_empty_string(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply({"a": 1}, ("a",), False, "a: ")
        assert result.model == {"a": ""}

    def test_mutates_in_place(self, reconciler: EditReconciler) -> None:
        model = {"a": {"b": 1}}
        result = reconciler.apply(model, ("a", "b"), False, "b: 2")
        assert result.model is model
        assert model == {"a": {"b": 2}}

    def test_sequence_element(self, reconciler: EditReconciler) -> None:
        model = {"l": [1, 2]}
        result = reconciler.apply(model, ("l", 0), True, "[0]: 9")
        assert result.model == {"l": [9, 2]}

    def test_root_value(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply({"a": 1}, (), False, "ROOT: 5")
        assert result.outcome is EditOutcome.VALUE_REPLACED
        assert result.model == 5

    def test_unresolvable_address_is_no_op(self, reconciler: EditReconciler) -> None:
        model = {"a": 1}
        result = reconciler.apply(model, ("missing",), False, "missing: 5")
        assert result.outcome is EditOutcome.NO_OP
        assert model == {"a": 1}

    def test_placeholder_key_is_an_ordinary_entry(self, reconciler: EditReconciler) -> None:
        model = {PLACEHOLDER_KEY: "c"}
        result = reconciler.apply(model, (PLACEHOLDER_KEY,), False, "???: 5")
        assert result.outcome is EditOutcome.VALUE_REPLACED
        assert result.model == {PLACEHOLDER_KEY: 5}

    def test_float_overflow_stored_as_token(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply({"a": 1}, ("a",), False, "a: 1e400")
        assert result.model == {"a": "1e400"}


# ---------------------------------------------------------------------------
# Key rename
# ---------------------------------------------------------------------------


class TestKeyRename:
    def test_rename_moves_key_to_end(self, reconciler: EditReconciler) -> None:
        model = {"old": 1, "b": 2}
        result = reconciler.apply(model, ("old",), False, "newName")
        assert result.outcome is EditOutcome.KEY_RENAMED
        assert result.model == {"b": 2, "newName": 1}
        assert list(result.model) == ["b", "newName"]

    def test_nested_rename(self, reconciler: EditReconciler) -> None:
        model = {"a": {"x": 1, "y": 2}}
        reconciler.apply(model, ("a", "x"), False, "z")
        assert list(model["a"].items()) == [("y", 2), ("z", 1)]

    def test_rename_onto_sibling_overwrites(self, reconciler: EditReconciler) -> None:
        model = {"a": 1, "b": 2}
        reconciler.apply(model, ("a",), False, "b")
        assert model == {"b": 1}

    def test_same_key_is_no_op(self, reconciler: EditReconciler) -> None:
        model = {"a": 1, "b": 2}
        result = reconciler.apply(model, ("a",), False, "a")
        assert result.outcome is EditOutcome.NO_OP
        assert list(model) == ["a", "b"]

    def test_sequence_element_not_renamed(self, reconciler: EditReconciler) -> None:
        model = [1, 2]
        result = reconciler.apply(model, (0,), True, "x")
        assert result.outcome is EditOutcome.NO_OP
        assert model == [1, 2]

    def test_root_not_renamed(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply({"a": 1}, (), False, "other")
        assert result.outcome is EditOutcome.NO_OP

    def test_root_label_not_a_key(self, reconciler: EditReconciler) -> None:
        model = {"a": 1}
        result = reconciler.apply(model, ("a",), False, "ROOT")
        assert result.outcome is EditOutcome.NO_OP
        assert model == {"a": 1}

    def test_custom_root_label(self) -> None:
        reconciler = EditReconciler(config=EditorConfig(root_label="DOC"))
        assert reconciler.apply({"a": 1}, ("a",), False, "DOC").outcome is EditOutcome.NO_OP
        assert reconciler.apply({"a": 1}, ("a",), False, "ROOT").outcome is EditOutcome.KEY_RENAMED

    def test_empty_text_is_no_op(self, reconciler: EditReconciler) -> None:
        assert reconciler.apply({"a": 1}, ("a",), False, "").outcome is EditOutcome.NO_OP

    def test_missing_key_is_no_op(self, reconciler: EditReconciler) -> None:
        model = {"a": 1}
        result = reconciler.apply(model, ("gone",), False, "b")
        assert result.outcome is EditOutcome.NO_OP
        assert model == {"a": 1}

    def test_parent_not_mapping_is_no_op(self, reconciler: EditReconciler) -> None:
        # Flag says mapping entry, but the parent is a list
        model = {"l": [1]}
        result = reconciler.apply(model, ("l", 0), False, "x")
        assert result.outcome is EditOutcome.NO_OP
        assert model == {"l": [1]}


# ---------------------------------------------------------------------------
# Pointer-string addresses
# ---------------------------------------------------------------------------


class TestPointerAddresses:
    def test_value_by_pointer(self, reconciler: EditReconciler) -> None:
        model = {"items": [1, 2]}
        reconciler.apply(model, "/items/1", True, "[1]: 3")
        assert model == {"items": [1, 3]}

    def test_escaped_pointer(self, reconciler: EditReconciler) -> None:
        model = {"a/b": {"c~d": 1}}
        reconciler.apply(model, "/a~1b/c~0d", False, "c~d: 2")
        assert model == {"a/b": {"c~d": 2}}

    def test_rename_by_pointer(self, reconciler: EditReconciler) -> None:
        model = {"old": 1, "b": 2}
        reconciler.apply(model, "/old", False, "newName")
        assert list(model) == ["b", "newName"]

    def test_malformed_pointer_is_no_op(self, reconciler: EditReconciler) -> None:
        model = {"a": 1}
        result = reconciler.apply(model, "a", False, "a: 2")
        assert result.outcome is EditOutcome.NO_OP
        assert model == {"a": 1}

    def test_root_pointer(self, reconciler: EditReconciler) -> None:
        result = reconciler.apply([1], "", False, "ROOT: {}")
        assert result.model == {}
