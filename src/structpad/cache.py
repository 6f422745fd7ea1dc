"""ProjectionCache: LRU-backed caching proxy around a Classifier.

Live tree refresh classifies the whole text after every keystroke, menu
command and tab switch.  Texts that were already classified (switching back
to a tab, undoing a change in the text widget) are served from memory
instead of being parsed again.  LRU eviction occurs silently when
``max_size`` is exceeded; no error is raised.

Only immutable ``Classification`` values are cached.  Value models are rebuilt
from the cached syntax trees on every use, so a caller mutating its model can
never corrupt the cache.

Each ``ProjectionCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.

Example::

    cache = ProjectionCache(max_size=16)
    first = cache.classify("a: 1")    # parsed
    second = cache.classify("a: 1")   # served from memory
    assert first is second
"""

from __future__ import annotations

from cachetools import LRUCache

from structpad.result import Classification
from structpad.syntax.classifier import Classifier

__all__ = ["ProjectionCache"]


class ProjectionCache:
    """LRU cache of classification results keyed by source text.

    Args:
        classifier: Classifier to consult on a miss.  Defaults to
            ``Classifier()``.
        max_size: Maximum number of texts to hold.  0 turns the cache into a
            pass-through.
    """

    def __init__(self, classifier: Classifier | None = None, max_size: int = 32) -> None:
        self._classifier = classifier if classifier is not None else Classifier()
        self._max_size = max_size
        self._cache: LRUCache[str, Classification] | None = (
            LRUCache(maxsize=max_size) if max_size > 0 else None
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return self._max_size

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return 0 if self._cache is None else int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Classifier surface
    # ------------------------------------------------------------------

    def classify(self, text: str) -> Classification:
        """Return the classification of ``text``, parsing only on a miss."""
        if self._cache is None:
            return self._classifier.classify(text)
        cached = self._cache.get(text)
        if cached is None:
            cached = self._classifier.classify(text)
            self._cache[text] = cached
        return cached

    def clear(self) -> None:
        """Drop every cached entry."""
        if self._cache is not None:
            self._cache.clear()
