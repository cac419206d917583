"""Tests for finding record parsing and language labels."""

from __future__ import annotations

import unittest

from repofix.findings import Finding, count_by_severity, finding_from_dict, findings_from_records
from repofix.language import PLAIN_TEXT_LANGUAGE, language_for_path


class FindingParsingTests(unittest.TestCase):
    def test_full_record_is_normalized(self) -> None:
        finding = finding_from_dict(
            {
                "title": " SQL injection ",
                "severity": "Critical",
                "cwe_id": "CWE-89",
                "cwe_name": "Improper Neutralization of SQL",
                "suggestion": "Use parameterized queries",
                "line": 12,
                "codeSnippet": "cursor.execute(q + uid)",
                "category": "Injection",
            }
        )

        self.assertEqual(
            finding,
            Finding(
                title="SQL injection",
                severity="critical",
                cwe_id="CWE-89",
                cwe_name="Improper Neutralization of SQL",
                suggestion="Use parameterized queries",
                line=12,
                code_snippet="cursor.execute(q + uid)",
                category="Injection",
            ),
        )
        self.assertEqual(
            finding.describe(),
            "[critical] CWE-89 SQL injection (line 12): Use parameterized queries",
        )

    def test_title_falls_back_to_cwe_name_then_default(self) -> None:
        self.assertEqual(finding_from_dict({"cwe_name": "Path traversal"}).title, "Path traversal")
        self.assertEqual(finding_from_dict({"cwe_id": "CWE-22"}).title, "Vulnerability")

    def test_unusable_records_are_dropped(self) -> None:
        self.assertIsNone(finding_from_dict("text"))
        self.assertIsNone(finding_from_dict({"severity": "high"}))

    def test_bad_fields_are_coerced(self) -> None:
        finding = finding_from_dict({"title": "x", "severity": "severe", "line": True})
        self.assertEqual(finding.severity, "unknown")
        self.assertIsNone(finding.line)
        self.assertIsNone(finding_from_dict({"title": "x", "line": -4}).line)

    def test_records_keep_order_and_accept_findings(self) -> None:
        existing = Finding(title="kept")
        parsed = findings_from_records([{"title": "first"}, None, existing])
        self.assertEqual([finding.title for finding in parsed], ["first", "kept"])

    def test_count_by_severity(self) -> None:
        counts = count_by_severity([Finding("a", "high"), Finding("b", "high"), Finding("c")])
        self.assertEqual(counts, {"critical": 0, "high": 2, "medium": 0, "low": 0, "unknown": 1})


class LanguageForPathTests(unittest.TestCase):
    def test_known_extensions_use_lexer_names(self) -> None:
        self.assertEqual(language_for_path("src/app.py", "print('x')\n"), "Python")
        self.assertEqual(language_for_path("data/config.json"), "JSON")

    def test_unknown_extension_is_plain_text(self) -> None:
        self.assertEqual(language_for_path("notes.unknownext"), PLAIN_TEXT_LANGUAGE)
        self.assertEqual(language_for_path("dir/"), PLAIN_TEXT_LANGUAGE)


if __name__ == "__main__":
    unittest.main()
