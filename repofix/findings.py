"""Security finding records returned by the analysis service.

Raw records are sanitized defensively: malformed items are dropped instead of
failing the whole analysis.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

SEVERITIES = ("critical", "high", "medium", "low")
UNKNOWN_SEVERITY = "unknown"


@dataclass(frozen=True)
class Finding:
    """One reported security issue for a file."""

    title: str
    severity: str = UNKNOWN_SEVERITY
    cwe_id: str | None = None
    cwe_name: str | None = None
    suggestion: str | None = None
    line: int | None = None
    code_snippet: str | None = None
    category: str | None = None

    def describe(self) -> str:
        """One-line description fed to the rewrite service."""
        parts = [f"[{self.severity}]"]
        if self.cwe_id:
            parts.append(self.cwe_id)
        parts.append(self.title)
        text = " ".join(parts)
        if self.line is not None:
            text += f" (line {self.line})"
        if self.suggestion:
            text += f": {self.suggestion}"
        return text


def _optional_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def normalize_severity(value: object) -> str:
    """Lower-case known severities; anything else is ``"unknown"``."""
    if isinstance(value, str) and value.strip().lower() in SEVERITIES:
        return value.strip().lower()
    return UNKNOWN_SEVERITY


def _coerce_line(value: object) -> int | None:
    """Accept positive integers only; booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def finding_from_dict(raw: object) -> Finding | None:
    """Build a ``Finding`` from a decoded JSON object, or ``None`` when unusable.

    Accepts both ``code_snippet`` and the camel-case ``codeSnippet``. The
    title falls back to the CWE name, then to ``"Vulnerability"``.
    """
    if not isinstance(raw, dict):
        return None
    cwe_name = _optional_text(raw.get("cwe_name"))
    title = _optional_text(raw.get("title")) or cwe_name
    cwe_id = _optional_text(raw.get("cwe_id"))
    if title is None and cwe_id is None:
        return None
    snippet = raw.get("code_snippet", raw.get("codeSnippet"))
    return Finding(
        title=title or "Vulnerability",
        severity=normalize_severity(raw.get("severity")),
        cwe_id=cwe_id,
        cwe_name=cwe_name,
        suggestion=_optional_text(raw.get("suggestion")),
        line=_coerce_line(raw.get("line")),
        code_snippet=snippet if isinstance(snippet, str) and snippet else None,
        category=_optional_text(raw.get("category")),
    )


def findings_from_records(records: Iterable[object]) -> tuple[Finding, ...]:
    """Parse every usable record, preserving order."""
    out: list[Finding] = []
    for raw in records:
        finding = raw if isinstance(raw, Finding) else finding_from_dict(raw)
        if finding is not None:
            out.append(finding)
    return tuple(out)


def count_by_severity(findings: Iterable[Finding]) -> dict[str, int]:
    """Count findings per severity, including zero counts for known levels."""
    counts = {severity: 0 for severity in (*SEVERITIES, UNKNOWN_SEVERITY)}
    for finding in findings:
        counts[finding.severity] = counts.get(finding.severity, 0) + 1
    return counts


__all__ = [
    "SEVERITIES",
    "UNKNOWN_SEVERITY",
    "Finding",
    "normalize_severity",
    "finding_from_dict",
    "findings_from_records",
    "count_by_severity",
]
