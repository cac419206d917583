"""Repository browsing session: tree, open file, and cached AI results.

The session owns its two result caches (analysis and rewrite) instead of
sharing module-level state, so separate sessions and tests never see each
other's results. Every external call failure becomes an error notice; the
previously published tree/file state is left untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from . import notifications
from .errors import RemoteFailure
from .file_tree_model import RepositoryEntry, TreeNode, TreeRow, build_tree, find_node, toggle_expanded, visible_rows
from .findings import Finding, findings_from_records
from .language import language_for_path
from .notifications import Notice
from .results import ResultCache, ViewState, ViewStateController, analysis_key

logger = logging.getLogger(__name__)

_NOTICE_LOG_LEVELS = {
    notifications.LEVEL_INFO: logging.INFO,
    notifications.LEVEL_SUCCESS: logging.INFO,
    notifications.LEVEL_WARNING: logging.WARNING,
    notifications.LEVEL_ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class SessionServices:
    """External collaborators used by :class:`RepositorySession`.

    ``list_entries(repo, branch)`` and ``fetch_content(content_id)`` talk to
    source control. ``analyze(path, content)`` returns finding records and
    ``rewrite(path, content, finding_descriptions)`` returns corrected code;
    either may be ``None`` when no AI backend is configured.
    """

    list_entries: Callable[[str, str], Sequence[RepositoryEntry]]
    fetch_content: Callable[[str], str]
    analyze: Callable[[str, str], Sequence[object]] | None = None
    rewrite: Callable[[str, str, Sequence[str]], str] | None = None


@dataclass
class OpenFile:
    """The file currently shown, with its findings and view toggle once analyzed."""

    path: str
    content_id: str
    content: str
    language: str
    findings: tuple[Finding, ...] | None = None
    view: ViewStateController | None = None


def _call_remote(description: str, func: Callable[..., object], *args: object) -> object:
    """Invoke an external collaborator, normalizing failures to ``RemoteFailure``."""
    try:
        return func(*args)
    except RemoteFailure:
        raise
    except Exception as exc:
        raise RemoteFailure(f"{description} failed: {exc}") from exc


class RepositorySession:
    """One user's view of one repository at a time."""

    def __init__(
        self,
        services: SessionServices,
        notify: Callable[[Notice], None] | None = None,
        *,
        max_cache_entries: int | None = None,
    ) -> None:
        self.services = services
        self._notify = notify
        self.analysis_cache: ResultCache[tuple[Finding, ...]] = ResultCache(max_cache_entries, name="analysis")
        self.rewrite_cache: ResultCache[str] = ResultCache(max_cache_entries, name="rewrite")
        self.repo: str | None = None
        self.branch: str | None = None
        self.tree: list[TreeNode] = []
        self.expanded: set[str] = set()
        self.current: OpenFile | None = None

    def _emit(self, notice: Notice) -> None:
        level = _NOTICE_LOG_LEVELS.get(notice.level, logging.INFO)
        logger.log(level, "%s: %s", notice.title, notice.message)
        if self._notify is not None:
            self._notify(notice)

    def load(self, repo: str, branch: str) -> bool:
        """Replace the tree with a fresh build of ``repo`` at ``branch``."""
        try:
            raw_entries = _call_remote("Repository listing", self.services.list_entries, repo, branch)
        except RemoteFailure as exc:
            self._emit(notifications.repo_load_failed(str(exc)))
            return False

        entries = list(raw_entries)  # type: ignore[call-overload]
        self.tree = build_tree(entries)
        self.repo = repo
        self.branch = branch
        self.expanded = set()
        self.current = None
        self._emit(notifications.repo_loaded(repo, branch, len(entries)))
        return True

    def rows(self) -> list[TreeRow]:
        return visible_rows(self.tree, self.expanded)

    def toggle_folder(self, path: str) -> bool:
        """Expand or collapse the directory at ``path``; return whether it is now open."""
        node = find_node(self.tree, path)
        if node is None or not node.is_dir:
            return False
        self.expanded = toggle_expanded(self.expanded, path)
        return path in self.expanded

    def open_file(self, path: str) -> OpenFile | None:
        """Fetch and select the file at ``path``; the previous view state is dropped."""
        node = find_node(self.tree, path)
        if node is None or node.is_dir or not node.content_id:
            self._emit(notifications.file_load_failed(path, "not a file in the loaded tree"))
            return None
        try:
            content = _call_remote("File fetch", self.services.fetch_content, node.content_id)
        except RemoteFailure as exc:
            self._emit(notifications.file_load_failed(path, str(exc)))
            return None
        if not isinstance(content, str):
            self._emit(notifications.file_load_failed(path, "content is not text"))
            return None

        self.current = OpenFile(
            path=node.path,
            content_id=node.content_id,
            content=content,
            language=language_for_path(node.path, content),
        )
        return self.current

    def close_file(self) -> None:
        self.current = None

    def _produce_findings(self, path: str, content: str) -> tuple[Finding, ...]:
        assert self.services.analyze is not None
        records = _call_remote("Analysis", self.services.analyze, path, content)
        if records is None:
            raise RemoteFailure("Analysis returned no result")
        return findings_from_records(records)  # type: ignore[arg-type]

    def analyze(self) -> tuple[Finding, ...] | None:
        """Return findings for the open file, calling the service at most once per content."""
        current = self.current
        if current is None:
            return None
        if self.services.analyze is None:
            self._emit(notifications.scan_failed("No analysis service configured"))
            return None

        key = analysis_key(current.path, current.content)
        try:
            findings = self.analysis_cache.get_or_compute(
                key,
                lambda: self._produce_findings(current.path, current.content),
            )
        except RemoteFailure as exc:
            self._emit(notifications.scan_failed(str(exc)))
            return None

        current.findings = findings
        if current.view is None:
            current.view = ViewStateController(self.rewrite_cache)
        self._emit(notifications.scan_complete(len(findings)))
        return findings

    def _produce_rewrite(self, path: str, content: str, findings: Sequence[str]) -> str:
        assert self.services.rewrite is not None
        fixed = _call_remote("Rewrite", self.services.rewrite, path, content, findings)
        if not isinstance(fixed, str) or not fixed.strip():
            raise RemoteFailure("Rewrite returned no code")
        return fixed.strip()

    def request_rewrite(self) -> ViewState | None:
        """Toggle the open file between original and corrected content."""
        current = self.current
        if current is None:
            return None
        if not current.findings or current.view is None:
            self._emit(notifications.analyze_first())
            return None

        view = current.view
        if view.state.is_corrected:
            state = view.toggle()
            self._emit(notifications.code_reverted())
            return state

        if self.services.rewrite is None:
            self._emit(notifications.code_fix_failed("No rewrite service configured"))
            return None
        descriptions = [finding.describe() for finding in current.findings]
        try:
            state = view.request_rewrite(current.path, current.content, descriptions, self._produce_rewrite)
        except RemoteFailure as exc:
            self._emit(notifications.code_fix_failed(str(exc)))
            return None
        self._emit(notifications.code_fix_succeeded(len(current.findings)))
        return state

    def effective_content(self) -> str | None:
        """Return the content the file view shows right now."""
        current = self.current
        if current is None:
            return None
        if current.view is None:
            return current.content
        return current.view.effective_content(current.content)


__all__ = [
    "SessionServices",
    "OpenFile",
    "RepositorySession",
]
