"""StructuralParser: raw text -> syntax trees with source lines.

The structural parse uses PyYAML's composer, which accepts both YAML and
(practically all) JSON, and records the source mark of every node.  Composed
nodes are converted into immutable ``SyntaxNode`` trees so nothing downstream
holds on to PyYAML objects.

The strict JSON grammar used to tell JSON from YAML lives here as well
(``parse_strict_json``): it is the standard library parser with the
non-standard ``NaN``/``Infinity`` constants switched off.  Numbers too
large for a float decode to their token text, matching the value model.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

import yaml

from structpad.errors import StrictFormatParseError, StructuralParseError
from structpad.syntax.nodes import SyntaxKind, SyntaxNode

__all__ = ["StructuralParser", "parse_strict_json"]

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not a valid JSON value"
    raise ValueError(msg)


def _finite_float(token: str) -> float | str:
    number = float(token)
    return number if math.isfinite(number) else token


def parse_strict_json(text: str) -> Any:
    """Parse ``text`` under the strict JSON grammar.

    Args:
        text: Complete JSON text.  Surrounding whitespace is allowed.

    Returns:
        The decoded Python value.

    Raises:
        StrictFormatParseError: If the text is not a single valid JSON value.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as exc:
        raise StrictFormatParseError(exc.msg, exc.lineno, exc.colno) from exc
    except (ValueError, RecursionError) as exc:
        raise StrictFormatParseError(str(exc)) from exc


class StructuralParser:
    """Parses text under the YAML (superset) grammar into SyntaxNode trees.

    Example::

        parser = StructuralParser()
        (tree,) = parser.parse("a: 1")
        tree.kind            # SyntaxKind.MAPPING
        tree.pairs[0][1].line  # 0
    """

    def parse(self, text: str) -> tuple[SyntaxNode, ...]:
        """Parse every document in ``text``.

        Args:
            text: Decoded source text, any line-break convention.

        Returns:
            One SyntaxNode per document, in stream order.  Never empty.

        Raises:
            StructuralParseError: If the text does not parse, contains no
                document, or contains an alias that refers to itself.
        """
        try:
            composed = self._compose(text)
        except yaml.YAMLError as exc:
            composed = self._compose_tab_indented_json(text, exc)

        if not composed:
            msg = "no document found"
            raise StructuralParseError(msg)
        return tuple(_convert(node, frozenset()) for node in composed)

    def _compose(self, text: str) -> list[yaml.Node]:
        try:
            return list(yaml.compose_all(text, Loader=yaml.SafeLoader))
        except RecursionError as exc:
            msg = "document nesting is too deep"
            raise StructuralParseError(msg) from exc

    def _compose_tab_indented_json(
        self, text: str, original: yaml.YAMLError
    ) -> list[yaml.Node]:
        """Retry JSON that PyYAML rejected only because of tab whitespace.

        Strict JSON never holds a raw tab inside a string, so for valid JSON
        every tab is insignificant whitespace and can become a space without
        moving any token to another line.
        """
        if "\t" not in text or not _is_strict_json(text):
            raise _structural_error(original) from original
        logger.debug("Retrying tab-indented JSON with tabs expanded")
        try:
            return self._compose(text.replace("\t", " "))
        except yaml.YAMLError:
            raise _structural_error(original) from original


def _is_strict_json(text: str) -> bool:
    try:
        parse_strict_json(text)
    except StrictFormatParseError:
        return False
    return True


def _structural_error(exc: yaml.YAMLError) -> StructuralParseError:
    if isinstance(exc, yaml.MarkedYAMLError) and exc.problem_mark is not None:
        mark = exc.problem_mark
        return StructuralParseError(
            exc.problem or str(exc), mark.line + 1, mark.column + 1
        )
    return StructuralParseError(str(exc))


def _convert(node: yaml.Node, ancestors: frozenset[int]) -> SyntaxNode:
    """Convert a composed PyYAML node, rejecting alias cycles.

    Args:
        node:      Composed node.
        ancestors: ``id()`` of every container on the path from the root.
    """
    line = node.start_mark.line

    if isinstance(node, yaml.ScalarNode):
        return SyntaxNode(
            kind=SyntaxKind.SCALAR, line=line, value=node.value, style=node.style
        )

    if id(node) in ancestors:
        msg = "recursive alias"
        raise StructuralParseError(msg, line + 1, node.start_mark.column + 1)
    inner = ancestors | {id(node)}

    if isinstance(node, yaml.SequenceNode):
        items = tuple(_convert(child, inner) for child in node.value)
        return SyntaxNode(kind=SyntaxKind.SEQUENCE, line=line, items=items)

    pairs = tuple(
        (_convert(key, inner), _convert(value, inner)) for key, value in node.value
    )
    return SyntaxNode(kind=SyntaxKind.MAPPING, line=line, pairs=pairs)
