"""Command-line front door for repofix.

Loads a branch of a local git repository into a session, then prints the
reconstructed file tree or one file with its language label.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import config
from .file_tree_model import all_directory_paths, format_tree_row
from .git_source import fetch_file_content, list_repository_entries
from .notifications import LEVEL_ERROR, Notice
from .session import RepositorySession, SessionServices


def build_git_session(repo_root: Path, notify=None, max_cache_entries: int | None = None) -> RepositorySession:
    """Create a session whose source collaborators read ``repo_root`` with git."""
    services = SessionServices(
        list_entries=lambda repo, branch: list_repository_entries(repo, branch),
        fetch_content=lambda content_id: fetch_file_content(repo_root, content_id),
    )
    return RepositorySession(services, notify, max_cache_entries=max_cache_entries)


def render_tree(session: RepositorySession) -> str:
    """Render visible tree rows, one per line."""
    return "".join(format_tree_row(row, session.expanded) + "\n" for row in session.rows())


def main(argv: Sequence[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and print a repository tree or file.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = argparse.ArgumentParser(
        description="Browse a git repository branch as a reconstructed file tree."
    )
    parser.add_argument("repo", nargs="?", default=None, help="Path to a git repository. Defaults to current directory.")
    parser.add_argument("--branch", default=None, help="Branch or tree-ish to list (default: configured branch or 'main').")
    parser.add_argument("--expand-all", action="store_true", help="Expand every directory in the tree output.")
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="DIR",
        help="Expand one directory path (repeatable).",
    )
    parser.add_argument("--show", metavar="PATH", help="Print the file at PATH instead of the tree.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if default_path is None:
        default_path = Path.cwd()
    repo_root = Path(args.repo or default_path)
    if not repo_root.is_dir():
        raise SystemExit(f"Path not found: {repo_root}")
    branch = args.branch or config.load_default_branch()

    errors: list[Notice] = []

    def collect(notice: Notice) -> None:
        if notice.level == LEVEL_ERROR:
            errors.append(notice)

    session = build_git_session(repo_root, collect, config.load_result_cache_max_entries())
    if not session.load(str(repo_root), branch):
        raise SystemExit(errors[-1].message if errors else "Repository load failed")

    if args.show is not None:
        opened = session.open_file(args.show.strip("/"))
        if opened is None:
            raise SystemExit(errors[-1].message if errors else f"Cannot open {args.show}")
        sys.stdout.write(f"{opened.path}  [{opened.language}]\n")
        content = session.effective_content() or ""
        sys.stdout.write(content if content.endswith("\n") else content + "\n")
        return

    if args.expand_all:
        session.expanded = all_directory_paths(session.tree)
    else:
        for directory in args.expand:
            session.toggle_folder(directory.strip("/"))
    sys.stdout.write(render_tree(session))


if __name__ == "__main__":
    main()
