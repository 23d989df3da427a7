"""Tests for changelog table extraction."""

from skillcorpus.core.changelog import (
    iter_tables,
    latest_version,
    parse_changelog,
    version_key,
)
from skillcorpus.core.skill_def import ChangelogEntry


class TestParseChangelog:
    def test_parses_version_table(self):
        body = (
            "# Skill\n\n"
            "| Version | Date | Changes | Author |\n"
            "|:-------:|------|---------|--------|\n"
            "| v1.1.0 | 2024-02-01 | Added checks | alice |\n"
            "| `1.0.0` | 2024-01-01 | Initial | |\n"
        )

        entries = parse_changelog(body)

        assert entries == [
            ChangelogEntry(
                version="1.1.0", date="2024-02-01", changes="Added checks", author="alice"
            ),
            ChangelogEntry(version="1.0.0", date="2024-01-01", changes="Initial"),
        ]

    def test_skips_tables_without_version_column(self):
        body = (
            "| Tool | Purpose |\n|---|---|\n| slither | static analysis |\n\n"
            "| Version | Notes |\n|---|---|\n| 2.0.0 | Rewrite |\n"
        )

        entries = parse_changelog(body)

        assert [e.version for e in entries] == ["2.0.0"]
        assert entries[0].changes == "Rewrite"

    def test_ignores_tables_inside_code_fences(self):
        body = "```markdown\n| Version |\n|---|\n| 9.9.9 |\n```\n"
        assert parse_changelog(body) == []

    def test_longer_fence_hides_shorter_fence_lines(self):
        body = (
            "````markdown\n"
            "```\n"
            "| Version |\n|---|\n| 9.9.9 |\n"
            "````\n\n"
            "| Version | Changes |\n|---|---|\n| 1.0.0 | Initial |\n"
        )

        assert [e.version for e in parse_changelog(body)] == ["1.0.0"]

    def test_no_table(self):
        assert parse_changelog("Just prose.") == []


class TestTables:
    def test_iter_tables_without_outer_pipes(self):
        tables = iter_tables("a | b\n--- | ---\n1 | 2\n")
        assert tables == [[["a", "b"], ["1", "2"]]]


class TestLatestVersion:
    def test_picks_highest_not_first(self):
        entries = [
            ChangelogEntry(version="1.0.0"),
            ChangelogEntry(version="1.10.0"),
            ChangelogEntry(version="1.9.3"),
        ]
        assert latest_version(entries) == "1.10.0"

    def test_empty(self):
        assert latest_version([]) is None

    def test_release_outranks_its_prerelease(self):
        entries = [
            ChangelogEntry(version="1.0.0-beta"),
            ChangelogEntry(version="1.0.0"),
            ChangelogEntry(version="1.0.0-alpha"),
        ]
        assert latest_version(entries) == "1.0.0"

    def test_version_key_orders_prereleases(self):
        assert version_key("2.1.0-rc1") < version_key("2.1.0")
        assert version_key("2.1.0-alpha") < version_key("2.1.0-beta")
        assert version_key("2.1.0-rc1") > version_key("2.0.9")
        assert version_key("2.1.0+build.7") == version_key("2.1.0")
