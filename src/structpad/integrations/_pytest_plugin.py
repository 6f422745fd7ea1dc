"""pytest plugin for structpad.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from structpad import EditorConfig, Format
from structpad.formatter import Formatter
from structpad.model import documents_to_value
from structpad.result import Classification
from structpad.syntax.classifier import Classifier


@pytest.fixture(scope="session")
def assert_round_trip() -> Any:
    """Fixture that returns a callable serialization round-trip asserter.

    The fixture is session-scoped because the returned callable is stateless
    (it builds a fresh Classifier and Formatter per call).

    Usage in tests::

        def test_config_file(assert_round_trip):
            assert_round_trip("name: demo\\nports:\\n  - 80\\n")

        def test_plain_text(assert_round_trip):
            with pytest.raises(AssertionError, match=r"format="):
                assert_round_trip("not: [valid: at: all: -")

    Returns:
        A callable ``_assert(text, expected_format=None, config=None) -> str``
        that returns the canonical text and raises ``AssertionError`` when the
        text does not settle.
    """

    def _assert(
        text: str,
        expected_format: Format | None = None,
        config: EditorConfig | None = None,
    ) -> str:
        """Assert that ``text`` re-serializes to a fixed point.

        The text is classified, serialized in its detected format, classified
        again and serialized again.  Both classifications must agree on the
        format and on the value model, and the two serialized texts must be
        identical.

        Args:
            text:            Source text of a JSON or YAML document.
            expected_format: Format the text must be detected as.  When None,
                             JSON or YAML is accepted.
            config:          Optional EditorConfig for indents and newlines.

        Raises:
            AssertionError: When the text is plain text, the format differs
                from ``expected_format`` or drifts, or the serialization is
                not a fixed point.

        Returns:
            The canonical text.
        """
        classifier = Classifier()
        formatter = Formatter(config=config)

        first = classifier.classify(text)
        if first.format is Format.TEXT:
            raise AssertionError(
                f"Text is not structured: format={first.format}\n  text: {text!r}"
            )
        if expected_format is not None and first.format is not expected_format:
            raise AssertionError(
                f"Unexpected format: format={first.format} expected={expected_format}"
            )

        canonical = _serialize(formatter, first)
        second = classifier.classify(canonical)
        again = _serialize(formatter, second)
        same_model = documents_to_value(first.trees) == documents_to_value(second.trees)
        if second.format is not first.format or not same_model or again != canonical:
            raise AssertionError(
                f"Serialization is not a fixed point: "
                f"format={first.format} -> {second.format}\n"
                f"  first:  {canonical!r}\n"
                f"  second: {again!r}"
            )
        return canonical

    return _assert


def _serialize(formatter: Formatter, classification: Classification) -> str:
    return formatter.to_display(
        documents_to_value(classification.trees),
        classification.format,
        len(classification.trees),
    )
