"""Flattening of the tree into visible rows honoring folder expansion."""

from __future__ import annotations

from collections.abc import Iterable

from .types import TreeNode, TreeRow


def visible_rows(forest: Iterable[TreeNode], expanded: set[str]) -> list[TreeRow]:
    """Return rows for every node reachable through expanded directories.

    Roots are always visible at depth 0. Expansion is tracked by path, so it
    survives a rebuild of the tree from the same listing.
    """
    rows: list[TreeRow] = []

    def walk(nodes: Iterable[TreeNode], depth: int) -> None:
        """Depth-first traversal adding children of expanded directories."""
        for node in nodes:
            rows.append(TreeRow(node, depth))
            if node.is_dir and node.path in expanded:
                walk(node.children, depth + 1)

    walk(forest, 0)
    return rows


def toggle_expanded(expanded: set[str], path: str) -> set[str]:
    """Return a copy of ``expanded`` with ``path`` flipped."""
    updated = set(expanded)
    if path in updated:
        updated.discard(path)
    else:
        updated.add(path)
    return updated


def all_directory_paths(forest: Iterable[TreeNode]) -> set[str]:
    """Return the path of every directory, for an expand-all view."""
    out: set[str] = set()
    for node in forest:
        if node.is_dir:
            out.add(node.path)
            out.update(all_directory_paths(node.children))
    return out


def format_tree_row(row: TreeRow, expanded: set[str]) -> str:
    """Render one plain-text tree row."""
    indent = "  " * row.depth
    node = row.node
    if node.is_dir:
        marker = "▾ " if node.path in expanded else "▸ "
        return f"{indent}{marker}{node.name}/"
    # Align file names under the parent directory arrow column.
    return f"{indent}  {node.name}"


__all__ = [
    "visible_rows",
    "toggle_expanded",
    "all_directory_paths",
    "format_tree_row",
]
