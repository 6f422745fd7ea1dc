"""YamlEmitter Protocol for structpad's YAML output extension point.

Defines the structural interface every YAML emitter must satisfy.  Users can
plug in their own emitter without inheriting from any base class: any class
with conformant ``emit`` and ``emit_all`` methods passes ``isinstance``
checks.

Example::

    from structpad.protocols import YamlEmitter

    class MyEmitter:
        def emit(self, value, indent):
            return my_yaml_library.dump(value, indent=indent)

        def emit_all(self, documents, indent):
            return "---\\n".join(self.emit(doc, indent) for doc in documents)

    assert isinstance(MyEmitter(), YamlEmitter)  # True: structural conformance
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class YamlEmitter(Protocol):
    """Structural protocol for YAML emitters.

    ``emit`` must return text that the structural parser reads back into the
    same value model.  ``emit_all`` does the same for a multi-document stream,
    one document per entry of ``documents``.
    """

    def emit(self, value: Any, indent: int) -> str: ...

    def emit_all(self, documents: Sequence[Any], indent: int) -> str: ...
