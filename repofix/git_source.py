"""Repository listing and blob fetching backed by a local git clone.

Implements the two inbound source collaborators of the session: a flat,
unordered entry listing for one branch and content lookup by blob id.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .errors import RemoteFailure
from .file_tree_model import KIND_DIRECTORY, KIND_FILE, RepositoryEntry

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 60.0

_OBJECT_KINDS = {
    "blob": KIND_FILE,
    "tree": KIND_DIRECTORY,
}


class GitSourceError(RemoteFailure):
    """A git listing or blob read failed."""


def _run_git(repo_root: Path, args: Sequence[str]) -> bytes:
    """Run git in ``repo_root`` and return raw stdout, raising on failure."""
    if shutil.which("git") is None:
        raise GitSourceError("git CLI not found (install git and ensure it's on PATH).")
    command = ["git", "-C", str(repo_root), *args]
    try:
        completed = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except subprocess.TimeoutExpired as exc:
        raise GitSourceError(f"git {' '.join(args)} timed out after {GIT_TIMEOUT_SECONDS:.0f}s.") from exc
    except OSError as exc:
        raise GitSourceError(f"git {' '.join(args)} could not start: {exc}") from exc

    if completed.returncode != 0:
        details = completed.stderr.decode("utf-8", errors="replace").strip() or "<no output>"
        raise GitSourceError(f"git {' '.join(args)} failed (exit={completed.returncode}): {details}")
    return completed.stdout


def parse_ls_tree(output: bytes) -> list[RepositoryEntry]:
    """Parse ``git ls-tree -z`` records into repository entries.

    Records look like ``<mode> <type> <object>\\t<path>``. Types other than
    ``blob`` and ``tree`` (submodule ``commit`` links) are skipped.
    """
    entries: list[RepositoryEntry] = []
    for raw in output.split(b"\x00"):
        if not raw:
            continue
        meta, sep, raw_path = raw.partition(b"\t")
        if not sep:
            raise GitSourceError(f"Unexpected ls-tree record: {raw!r}")
        fields = meta.decode("ascii", errors="replace").split()
        if len(fields) != 3:
            raise GitSourceError(f"Unexpected ls-tree record: {raw!r}")
        _mode, object_type, object_id = fields
        kind = _OBJECT_KINDS.get(object_type)
        if kind is None:
            continue
        entries.append(
            RepositoryEntry(
                path=raw_path.decode("utf-8", errors="replace"),
                kind=kind,
                content_id=object_id if kind == KIND_FILE else None,
            )
        )
    return entries


def list_repository_entries(repo_root: Path | str, branch: str) -> list[RepositoryEntry]:
    """List every file and directory reachable from ``branch``."""
    root = Path(repo_root)
    if not branch.strip():
        raise GitSourceError("Branch name is required")
    output = _run_git(root, ["ls-tree", "-r", "-t", "-z", "--full-tree", branch])
    entries = parse_ls_tree(output)
    logger.info("listed %d entries from %s@%s", len(entries), root, branch)
    return entries


def fetch_file_content(repo_root: Path | str, content_id: str) -> str:
    """Return the UTF-8 text of blob ``content_id``; empty blobs are a failure."""
    if not content_id:
        raise GitSourceError("Content id is required")
    data = _run_git(Path(repo_root), ["cat-file", "blob", content_id])
    if not data:
        raise GitSourceError("File is empty")
    return data.decode("utf-8", errors="replace")


__all__ = [
    "GitSourceError",
    "parse_ls_tree",
    "list_repository_entries",
    "fetch_file_content",
]
