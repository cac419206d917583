"""Tree reconstruction from flat, unordered repository listings."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .types import KIND_DIRECTORY, KIND_FILE, RepositoryEntry, TreeNode

logger = logging.getLogger(__name__)


def _node_sort_key(node: TreeNode) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name, then exact name."""
    return (not node.is_dir, node.name.lower(), node.name)


def sort_tree(nodes: list[TreeNode]) -> None:
    """Sort ``nodes`` and every nested children list in place."""
    nodes.sort(key=_node_sort_key)
    for node in nodes:
        if node.children:
            sort_tree(node.children)


def build_tree(entries: Iterable[RepositoryEntry]) -> list[TreeNode]:
    """Build the ordered forest of root nodes for a flat entry list.

    Ancestor directories are synthesized when the listing omits them. A file
    entry always wins over a directory node at the same path: the node is
    converted in place and anything already placed below it is discarded.
    A file node is never turned back into a directory, so entries below an
    existing file are dropped. The result does not depend on input order.
    """
    nodes: dict[str, TreeNode] = {}
    roots: list[TreeNode] = []

    def attach(node: TreeNode, parent: TreeNode | None) -> None:
        """Register ``node`` and link it under ``parent`` (or the forest) once."""
        nodes[node.path] = node
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)

    def forget_descendants(path: str) -> None:
        """Drop map entries below ``path`` after it became a file."""
        prefix = path + "/"
        for stale in [key for key in nodes if key.startswith(prefix)]:
            del nodes[stale]

    for entry in entries:
        segments = entry.path.split("/")
        parent: TreeNode | None = None
        prefix = ""
        blocked = False
        for segment in segments[:-1]:
            prefix = f"{prefix}/{segment}" if prefix else segment
            existing = nodes.get(prefix)
            if existing is None:
                existing = TreeNode(name=segment, path=prefix, kind=KIND_DIRECTORY)
                attach(existing, parent)
            elif not existing.is_dir:
                blocked = True
                break
            parent = existing
        if blocked:
            logger.debug("dropping %s: ancestor %s is a file", entry.path, prefix)
            continue

        name = segments[-1]
        existing = nodes.get(entry.path)
        if existing is None:
            node = TreeNode(
                name=name,
                path=entry.path,
                kind=entry.kind,
                content_id=entry.content_id if entry.kind == KIND_FILE else None,
            )
            attach(node, parent)
            continue

        if entry.kind != KIND_FILE:
            # Declared directory over an existing node: nothing to change.
            continue
        if existing.is_dir:
            logger.debug("converting synthesized directory %s into a file", entry.path)
            existing.children.clear()
            forget_descendants(entry.path)
        existing.kind = KIND_FILE
        existing.content_id = entry.content_id

    sort_tree(roots)
    return roots


def iter_nodes(forest: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node depth-first in display order."""
    for node in forest:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def find_node(forest: Iterable[TreeNode], path: str) -> TreeNode | None:
    """Return the node at ``path`` by walking segments from the roots."""
    if not path:
        return None
    level = list(forest)
    prefix = ""
    found: TreeNode | None = None
    for segment in path.split("/"):
        prefix = f"{prefix}/{segment}" if prefix else segment
        found = next((node for node in level if node.path == prefix), None)
        if found is None:
            return None
        level = found.children
    return found


__all__ = [
    "build_tree",
    "sort_tree",
    "iter_nodes",
    "find_node",
]
