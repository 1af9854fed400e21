#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_frontmatter.py
"""Integration tests for YAML, TOML and JSON front matter."""

import pytest

from markast import MarkdownCompiler, MarkdownParserOptions
from markast.ast import Heading, Paragraph, Text
from markast.constants import DIAGNOSTIC_INVALID_FRONTMATTER


@pytest.fixture
def frontmatter_compiler():
    """Provide a compiler with front matter extraction enabled."""
    return MarkdownCompiler(MarkdownParserOptions(parse_frontmatter=True))


@pytest.mark.integration
class TestFrontmatter:
    """Tests for front matter extraction."""

    def test_yaml(self, frontmatter_compiler):
        """Test YAML front matter followed by a heading."""
        result = frontmatter_compiler.compile("---\ntitle: Hello\ntags: [a, b]\n---\n# Body")

        assert result.document.metadata == {"title": "Hello", "tags": ["a", "b"]}
        assert result.document.children == [Heading(level=1, content=[Text(content="Body")])]
        assert result.diagnostics == []

    def test_toml(self, frontmatter_compiler):
        """Test TOML front matter."""
        result = frontmatter_compiler.compile('+++\ntitle = "Hello"\ncount = 3\n+++\ntext')

        assert result.document.metadata == {"title": "Hello", "count": 3}
        assert result.document.children == [Text(content="text")]

    def test_json(self, frontmatter_compiler):
        """Test a leading JSON object."""
        result = frontmatter_compiler.compile('{"title": "Hello", "draft": false}\n\nBody text')

        assert result.document.metadata == {"title": "Hello", "draft": False}
        assert result.document.children == [Text(content="Body text")]

    def test_empty_yaml_block(self, frontmatter_compiler):
        """Test that an empty block gives empty metadata without complaint."""
        result = frontmatter_compiler.compile("---\n---\ntext")

        assert result.document.metadata == {}
        assert result.document.children == [Text(content="text")]
        assert result.diagnostics == []

    def test_invalid_yaml(self, frontmatter_compiler):
        """Test that malformed YAML is dropped with a diagnostic."""
        result = frontmatter_compiler.compile("---\ntitle: [unclosed\n---\ntext")

        assert result.document.metadata == {}
        assert result.document.children == [Text(content="text")]
        assert [d.code for d in result.diagnostics] == [DIAGNOSTIC_INVALID_FRONTMATTER]

    def test_yaml_not_a_mapping(self, frontmatter_compiler):
        """Test that a YAML list is rejected as metadata."""
        result = frontmatter_compiler.compile("---\n- a\n- b\n---\ntext")

        assert result.document.metadata == {}
        assert [d.code for d in result.diagnostics] == [DIAGNOSTIC_INVALID_FRONTMATTER]

    def test_invalid_toml(self, frontmatter_compiler):
        """Test that malformed TOML is dropped with a diagnostic."""
        result = frontmatter_compiler.compile("+++\ntitle = \n+++\ntext")

        assert result.document.metadata == {}
        assert [d.code for d in result.diagnostics] == [DIAGNOSTIC_INVALID_FRONTMATTER]

    def test_invalid_json_left_in_content(self, frontmatter_compiler):
        """Test that braces that are not JSON stay in the document."""
        result = frontmatter_compiler.compile("{not json}\n\ntext")

        assert result.document.metadata == {}
        assert result.document.children[0] == Paragraph(content=[Text(content="{not json}")])
        assert [d.code for d in result.diagnostics] == [DIAGNOSTIC_INVALID_FRONTMATTER]

    def test_unclosed_block_ignored(self, frontmatter_compiler):
        """Test that a block without closing delimiter is not front matter."""
        result = frontmatter_compiler.compile("---\ntitle: x\nmore")

        assert result.document.metadata == {}
        assert result.diagnostics == []

    def test_disabled_by_default(self):
        """Test that front matter is only extracted when enabled."""
        result = MarkdownCompiler().compile("---\ntitle: x\n---\ntext")
        assert result.document.metadata == {}
