"""Domain datatypes for repository listings and the reconstructed tree."""

from __future__ import annotations

from dataclasses import dataclass, field

KIND_FILE = "file"
KIND_DIRECTORY = "directory"


@dataclass(frozen=True)
class RepositoryEntry:
    """One record of a flat repository listing.

    ``path`` is slash-delimited and relative. ``content_id`` identifies the
    file blob and is set only for files.
    """

    path: str
    kind: str
    content_id: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_DIRECTORY


@dataclass(eq=False)
class TreeNode:
    """Node of the reconstructed tree; directories carry ordered children."""

    name: str
    path: str
    kind: str
    children: list["TreeNode"] = field(default_factory=list)
    content_id: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_DIRECTORY

    def shape(self) -> tuple:
        """Return a nested, comparable ``(path, kind, content_id, children)`` tuple."""
        return (self.path, self.kind, self.content_id, tuple(child.shape() for child in self.children))


@dataclass(frozen=True)
class TreeRow:
    """One visible row of the flattened tree."""

    node: TreeNode
    depth: int


__all__ = [
    "KIND_FILE",
    "KIND_DIRECTORY",
    "RepositoryEntry",
    "TreeNode",
    "TreeRow",
]
