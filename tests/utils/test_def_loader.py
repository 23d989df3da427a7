"""Tests for definition loader utilities."""

import pytest
import yaml

from skillcorpus.utils.def_loader import (
    DefNotFoundError,
    InvalidDefError,
    discover_definitions,
    iter_definition_dirs,
    parse_definition,
    parse_frontmatter,
    split_frontmatter,
    write_definition,
)


class TestSplitFrontmatter:
    def test_split_reports_body_start_line(self):
        """Body line number accounts for both delimiters."""
        content = "---\nname: Test\nversion: 1.0.0\n---\nBody"
        frontmatter_text, body, body_start = split_frontmatter(content)

        assert frontmatter_text == "name: Test\nversion: 1.0.0"
        assert body == "Body"
        assert body_start == 5

    def test_split_without_closing_delimiter(self):
        """An unterminated block means no front-matter at all."""
        content = "---\nname: Test\nBody"
        frontmatter_text, body, body_start = split_frontmatter(content)

        assert frontmatter_text is None
        assert body == content
        assert body_start == 1

    def test_split_normalizes_crlf(self):
        """Windows line endings are handled."""
        content = "---\r\nname: Test\r\n---\r\nBody"
        frontmatter_text, body, _ = split_frontmatter(content)

        assert frontmatter_text == "name: Test"
        assert body == "Body"


class TestParseDefinition:
    def test_parse_basic_frontmatter(self):
        """Parse simple YAML frontmatter and body."""
        content = "---\nname: Test\n---\nBody content here."
        frontmatter, body = parse_definition(
            content, "test-id", lambda def_id, fm, body: (fm, body)
        )

        assert frontmatter == {"name": "Test"}
        assert body == "Body content here."

    def test_parse_with_multiple_fields(self):
        """Parse frontmatter with multiple YAML fields."""
        content = "---\nname: Test\nversion: 1.0\nenabled: true\n---\nBody"
        frontmatter, body = parse_definition(
            content, "test-id", lambda def_id, fm, body: (fm, body)
        )

        assert frontmatter == {"name": "Test", "version": 1.0, "enabled": True}
        assert body == "Body"

    def test_parse_preserves_delimiter_in_body(self):
        """Preserve --- delimiters that appear in body."""
        content = "---\nname: Test\n---\nHere is --- a separator\n---\nmore content"
        frontmatter, body = parse_definition(
            content, "test-id", lambda def_id, fm, body: (fm, body)
        )

        assert frontmatter == {"name": "Test"}
        assert body == "Here is --- a separator\n---\nmore content"

    def test_parse_empty_frontmatter(self):
        """Handle empty frontmatter with proper delimiters."""
        content = "---\n\n---\nBody content"
        frontmatter, body = parse_definition(
            content, "test-id", lambda def_id, fm, body: (fm, body)
        )

        assert frontmatter == {}
        assert body == "Body content"

    def test_parse_no_frontmatter_returns_empty_dict(self):
        """Return empty dict and full content when no frontmatter."""
        content = "Just body content\nno frontmatter"
        frontmatter, body = parse_definition(
            content, "test-id", lambda def_id, fm, body: (fm, body)
        )

        assert frontmatter == {}
        assert body == "Just body content\nno frontmatter"

    def test_def_id_passed_to_callback(self):
        """Verify def_id is passed to callback."""
        content = "---\nname: Test\n---\nBody"
        received_id = None

        def capture_id(def_id, fm, body):
            nonlocal received_id
            received_id = def_id
            return (fm, body)

        parse_definition(content, "my-custom-id", capture_id)
        assert received_id == "my-custom-id"


class TestParseFrontmatter:
    def test_list_frontmatter_is_rejected(self):
        """Front-matter must be a mapping."""
        with pytest.raises(ValueError, match="mapping"):
            parse_frontmatter("---\n- a\n- b\n---\nBody")

    def test_invalid_yaml_raises(self):
        """YAML errors propagate to the caller."""
        with pytest.raises(yaml.YAMLError):
            parse_frontmatter("---\nname: [unclosed\n---\nBody")


class TestDiscoverDefinitions:
    def test_discover_nested_definitions(self, tmp_path):
        """Folders without the definition file are descended into."""
        (tmp_path / "group" / "docker-compose").mkdir(parents=True)
        (tmp_path / "group" / "docker-compose" / "docker-compose-skill.md").write_text(
            "---\nname: docker-compose\n---\nBody"
        )
        (tmp_path / "rust-async").mkdir()
        (tmp_path / "rust-async" / "rust-async-skill.md").write_text(
            "---\nname: rust-async\n---\nBody"
        )

        results = discover_definitions(
            tmp_path,
            lambda d: f"{d.name}-skill.md",
            lambda def_id, fm, body: def_id,
        )

        assert results == ["docker-compose", "rust-async"]

    def test_discover_skips_unparseable(self, tmp_path):
        """A broken file is logged and skipped, not raised."""
        (tmp_path / "bad-skill").mkdir()
        (tmp_path / "bad-skill" / "bad-skill-skill.md").write_text(
            "---\nname: [oops\n---\nBody"
        )

        results = discover_definitions(
            tmp_path, lambda d: f"{d.name}-skill.md", lambda def_id, fm, body: def_id
        )

        assert results == []

    def test_discover_missing_directory(self, tmp_path):
        """A missing root yields no definitions."""
        results = discover_definitions(
            tmp_path / "nope", lambda d: "x.md", lambda def_id, fm, body: def_id
        )

        assert results == []

    def test_iter_definition_dirs_skips_hidden(self, tmp_path):
        """Dot-folders are never walked."""
        (tmp_path / ".git" / "a-b").mkdir(parents=True)
        (tmp_path / "c-d").mkdir()

        found = list(iter_definition_dirs(tmp_path, lambda d: "-" in d.name))

        assert [d.name for d in found] == ["c-d"]


class TestWriteDefinition:
    def test_write_then_parse(self, tmp_path):
        """Written file has front-matter the parser reads back."""
        path = write_definition(
            "solidity-audit",
            {"name": "solidity-audit", "version": "1.0.0"},
            "\n# Title\n",
            tmp_path,
            "solidity-audit-skill.md",
        )

        assert path == tmp_path / "solidity-audit" / "solidity-audit-skill.md"
        frontmatter, body = parse_frontmatter(path.read_text())
        assert frontmatter == {"name": "solidity-audit", "version": "1.0.0"}
        assert body.strip() == "# Title"


class TestErrors:
    def test_not_found_message(self):
        err = DefNotFoundError("skill", "docker-compose")
        assert str(err) == "Skill not found: docker-compose"
        assert err.def_id == "docker-compose"

    def test_invalid_message(self):
        err = InvalidDefError("skill", "docker-compose", "no valid frontmatter")
        assert str(err) == "Invalid skill 'docker-compose': no valid frontmatter"
        assert err.reason == "no valid frontmatter"
