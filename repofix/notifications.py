"""User-facing notices emitted by the session."""

from __future__ import annotations

from dataclasses import dataclass

LEVEL_INFO = "info"
LEVEL_SUCCESS = "success"
LEVEL_WARNING = "warning"
LEVEL_ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A non-fatal message for the user."""

    level: str
    title: str
    message: str = ""


def repo_loaded(repo: str, branch: str, entry_count: int) -> Notice:
    return Notice(LEVEL_SUCCESS, "Repository Loaded", f"{repo}@{branch} loaded ({entry_count} entries)")


def repo_load_failed(message: str) -> Notice:
    return Notice(LEVEL_ERROR, "Repository Load Failed", message)


def file_load_failed(path: str, message: str) -> Notice:
    return Notice(LEVEL_ERROR, "File Load Failed", f"Failed to load {path}: {message}")


def scan_complete(finding_count: int) -> Notice:
    if finding_count == 0:
        return Notice(LEVEL_SUCCESS, "Scan Complete", "No vulnerabilities found")
    return Notice(LEVEL_WARNING, "Vulnerabilities Found", f"Found {finding_count} potential issues")


def scan_failed(message: str) -> Notice:
    return Notice(LEVEL_ERROR, "Scan Failed", message)


def code_fix_succeeded(finding_count: int) -> Notice:
    plural = "" if finding_count == 1 else "s"
    return Notice(LEVEL_SUCCESS, "Code Fixed Successfully!", f"Fixed {finding_count} issue{plural} using AI")


def code_fix_failed(message: str | None = None) -> Notice:
    return Notice(LEVEL_ERROR, "Code Fix Failed", message or "Failed to generate code fixes")


def code_reverted() -> Notice:
    return Notice(LEVEL_INFO, "Reverted to Original", "Showing original code")


def analyze_first() -> Notice:
    return Notice(LEVEL_WARNING, "No Findings", "Analyze the code first")


__all__ = [
    "LEVEL_INFO",
    "LEVEL_SUCCESS",
    "LEVEL_WARNING",
    "LEVEL_ERROR",
    "Notice",
    "repo_loaded",
    "repo_load_failed",
    "file_load_failed",
    "scan_complete",
    "scan_failed",
    "code_fix_succeeded",
    "code_fix_failed",
    "code_reverted",
    "analyze_first",
]
