"""EditorConfig: immutable settings shared by every structpad component.

EditorConfig is a frozen (immutable) dataclass validated on construction.
Components take ``config: EditorConfig | None`` and fall back to
``EditorConfig()`` so callers only spell out what they change.
"""

from __future__ import annotations

from dataclasses import dataclass

from structpad.eol import EolMode

__all__ = ["EditorConfig"]

_DISPLAY_NEWLINES = ("\r\n", "\n", "\r")


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for parsing, projection and serialization.

    Attributes:
        json_indent: Spaces per nesting level for JSON output (>= 0).
        yaml_indent: Spaces per nesting level for YAML output, in [2, 9]
            (the range PyYAML's emitter accepts).
        root_label: Display name of the root tree node.  Never a real key, and
            committing it as a label is a no-op.
        display_newline: Line break used by the text surface.  Serialized and
            reformatted text is normalized to it.
        default_eol: Save-time line-ending convention of new documents.
        cache_size: Number of classified texts kept by a ProjectionCache.
            0 disables caching.
    """

    json_indent: int = 4
    yaml_indent: int = 2
    root_label: str = "ROOT"
    display_newline: str = "\r\n"
    default_eol: EolMode = EolMode.CRLF
    cache_size: int = 32

    def __post_init__(self) -> None:
        if self.json_indent < 0:
            msg = f"json_indent must be >= 0, got {self.json_indent}"
            raise ValueError(msg)
        if not 2 <= self.yaml_indent <= 9:
            msg = f"yaml_indent must be in [2, 9], got {self.yaml_indent}"
            raise ValueError(msg)
        if not self.root_label:
            msg = "root_label must be a non-empty string"
            raise ValueError(msg)
        if self.display_newline not in _DISPLAY_NEWLINES:
            msg = f"display_newline must be one of CRLF, LF or CR, got {self.display_newline!r}"
            raise ValueError(msg)
        if self.cache_size < 0:
            msg = f"cache_size must be >= 0, got {self.cache_size}"
            raise ValueError(msg)
