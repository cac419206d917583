"""Domain model for repository file/directory trees.

This package contains non-UI tree primitives:
- listing-entry and tree-node datatypes
- order-independent tree reconstruction from flat listings
- expansion-aware flattening into display rows
"""

from __future__ import annotations

from .types import KIND_DIRECTORY, KIND_FILE, RepositoryEntry, TreeNode, TreeRow
from .build import build_tree, find_node, iter_nodes, sort_tree
from .rows import all_directory_paths, format_tree_row, toggle_expanded, visible_rows

__all__ = [
    "KIND_FILE",
    "KIND_DIRECTORY",
    "RepositoryEntry",
    "TreeNode",
    "TreeRow",
    "build_tree",
    "sort_tree",
    "iter_nodes",
    "find_node",
    "visible_rows",
    "toggle_expanded",
    "all_directory_paths",
    "format_tree_row",
]
