"""Original/corrected content toggle for one open file."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .cache import ResultCache
from .keys import rewrite_key

logger = logging.getLogger(__name__)

MODE_ORIGINAL = "original"
MODE_CORRECTED = "corrected"


@dataclass(frozen=True)
class ViewState:
    """Which content the file view shows; ``corrected_key`` points into the rewrite cache."""

    mode: str = MODE_ORIGINAL
    corrected_key: str | None = None

    @property
    def is_corrected(self) -> bool:
        return self.mode == MODE_CORRECTED


class ViewStateController:
    """Two-state machine driven by rewrite results.

    Toggling back to the original never discards the rewrite: the cache keeps
    the ready entry, so requesting the same rewrite again is served without
    another remote call.
    """

    def __init__(self, rewrite_cache: ResultCache[str]) -> None:
        self._rewrite_cache = rewrite_cache
        self.state = ViewState()

    def request_rewrite(
        self,
        path: str,
        content: str,
        findings: Sequence[str],
        rewrite: Callable[[str, str, Sequence[str]], str],
    ) -> ViewState:
        """Switch to the corrected view, or back to the original when already there.

        A failing ``rewrite`` propagates and leaves the view on the original.
        """
        if self.state.is_corrected:
            return self.toggle()

        key = rewrite_key(path, content, findings)
        findings_snapshot = tuple(findings)
        self._rewrite_cache.get_or_compute(key, lambda: rewrite(path, content, findings_snapshot))
        self.state = ViewState(MODE_CORRECTED, key)
        logger.debug("showing corrected content for %s", path)
        return self.state

    def toggle(self) -> ViewState:
        """Return to the original view; no-op when already original."""
        if self.state.is_corrected:
            self.state = ViewState()
        return self.state

    def effective_content(self, original: str) -> str:
        """Return the content the file view should display."""
        if not self.state.is_corrected or self.state.corrected_key is None:
            return original
        corrected = self._rewrite_cache.get(self.state.corrected_key)
        if corrected is None:
            logger.debug("corrected entry %s is gone; showing original", self.state.corrected_key)
            self.state = ViewState()
            return original
        return corrected


__all__ = [
    "MODE_ORIGINAL",
    "MODE_CORRECTED",
    "ViewState",
    "ViewStateController",
]
