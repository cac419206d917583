"""Result caching for remote analysis/rewrite calls and the per-file view toggle."""

from __future__ import annotations

from .cache import CACHE_PENDING, CACHE_READY, CacheEntry, ResultCache
from .keys import analysis_key, rewrite_key
from .view_state import MODE_CORRECTED, MODE_ORIGINAL, ViewState, ViewStateController

__all__ = [
    "CACHE_PENDING",
    "CACHE_READY",
    "CacheEntry",
    "ResultCache",
    "analysis_key",
    "rewrite_key",
    "MODE_ORIGINAL",
    "MODE_CORRECTED",
    "ViewState",
    "ViewStateController",
]
