"""Public package surface for repofix.

Exports ``main`` for programmatic CLI invocation.
The tree model lives in ``repofix.file_tree_model`` and the result caches in
``repofix.results``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
