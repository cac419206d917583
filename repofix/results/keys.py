"""Fingerprints keying analysis and rewrite results."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

ANALYSIS_NAMESPACE = "analysis"
REWRITE_NAMESPACE = "rewrite"


def _digest(namespace: str, fields: Sequence[str]) -> str:
    """Hash length-prefixed UTF-8 fields so no two field splits collide."""
    hasher = hashlib.sha256()
    hasher.update(namespace.encode("utf-8"))
    for value in fields:
        raw = value.encode("utf-8")
        hasher.update(f"\x00{len(raw)}:".encode("ascii"))
        hasher.update(raw)
    return f"{namespace}:{hasher.hexdigest()}"


def analysis_key(path: str, content: str) -> str:
    """Return the cache key for findings of ``content`` at ``path``."""
    return _digest(ANALYSIS_NAMESPACE, (path, content))


def rewrite_key(path: str, content: str, findings: Sequence[str]) -> str:
    """Return the cache key for a rewrite driven by ``findings``.

    Findings are taken in order; the same set in another order is another key.
    """
    return _digest(REWRITE_NAMESPACE, (path, content, str(len(findings)), *findings))


__all__ = [
    "analysis_key",
    "rewrite_key",
]
