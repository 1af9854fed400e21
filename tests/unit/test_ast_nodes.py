#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_nodes.py
"""Unit tests for AST node classes.

Tests cover:
- Node creation and defaults
- Visitor pattern acceptance
- Validation of node constraints
- Deferred resolution of reference nodes
- Child access and depth-first traversal

"""

import pytest

from markast.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Footnotes,
    Heading,
    HTMLElement,
    HTMLSelfClosing,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    ReferenceImage,
    ReferenceLink,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    TaskListItem,
    Text,
    ThematicBreak,
    get_node_children,
    iter_nodes,
)
from markast.references import ReferenceTable


class RecordingVisitor:
    """Duck-typed visitor that records which visit method was called."""

    def __getattr__(self, name):
        if name.startswith("visit_"):
            return lambda node: name
        raise AttributeError(name)


@pytest.mark.unit
class TestNodeCreation:
    """Tests for constructing nodes."""

    def test_document_defaults(self):
        """Test that a Document starts empty."""
        doc = Document()
        assert doc.children == []
        assert doc.metadata == {}

    def test_document_defaults_are_not_shared(self):
        """Test that default lists are distinct per instance."""
        first = Document()
        second = Document()
        first.children.append(Text(content="x"))
        assert second.children == []

    def test_heading_levels(self):
        """Test that every level from 1 to 6 is accepted."""
        for level in range(1, 7):
            assert Heading(level=level).level == level

    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_heading_invalid_level(self, level):
        """Test that out-of-range heading levels are rejected."""
        with pytest.raises(ValueError, match="Heading level must be 1-6"):
            Heading(level=level)

    def test_code_block_language_optional(self):
        """Test that a code block has no language by default."""
        block = CodeBlock(content="x = 1")
        assert block.language is None

    def test_list_defaults(self):
        """Test the default shape of a list."""
        lst = List(ordered=False)
        assert lst.items == []
        assert lst.start is None
        assert lst.tight is True

    def test_list_item_defaults(self):
        """Test the default shape of a list item."""
        item = ListItem()
        assert item.loose is False
        assert item.task_status is None

    def test_table_structure(self):
        """Test building a table with header and body rows."""
        header = TableRow(cells=[TableCell(content=[Text(content="A")])], is_header=True)
        row = TableRow(cells=[TableCell(content=[Text(content="1")], alignment="right")])
        table = Table(header=header, rows=[row], alignments=["right"])

        assert table.header.is_header
        assert table.rows[0].cells[0].alignment == "right"
        assert table.alignments == ["right"]

    def test_html_element_defaults(self):
        """Test the default shape of an HTML element."""
        element = HTMLElement(tag="div")
        assert element.attrs == {}
        assert element.children == []

    def test_footnote_reference_url(self):
        """Test that a footnote reference points at an in-document anchor."""
        assert FootnoteReference(identifier="note").url == "#note"


@pytest.mark.unit
class TestReferenceNodes:
    """Tests for ReferenceLink and ReferenceImage resolution."""

    def test_unbound_reference_is_unresolved(self):
        """Test that a reference without a table resolves to nothing."""
        link = ReferenceLink(ref="x")
        assert link.is_resolved is False
        assert link.url is None
        assert link.title is None

    def test_resolves_after_definition(self):
        """Test that a definition added after node creation is seen."""
        table = ReferenceTable()
        link = ReferenceLink(ref="x", content=[Text(content="x")], references=table)
        assert link.url is None

        table.define("x", "http://x.com", "Title")
        assert link.is_resolved
        assert link.url == "http://x.com"
        assert link.title == "Title"

    def test_reference_lookup_is_case_insensitive(self):
        """Test that reference ids match regardless of case."""
        table = ReferenceTable()
        table.define("Foo", "http://foo.com")
        assert ReferenceImage(ref="FOO", references=table).url == "http://foo.com"

    def test_unsafe_definition_resolves_to_none(self):
        """Test that an unsafe definition is resolved but yields no URL."""
        table = ReferenceTable()
        table.define("bad", "javascript:alert(1)")
        link = ReferenceLink(ref="bad", references=table)
        assert link.is_resolved
        assert link.url is None

    def test_references_excluded_from_equality(self):
        """Test that the backing table does not affect node equality."""
        table = ReferenceTable()
        assert ReferenceLink(ref="x", references=table) == ReferenceLink(ref="x")


@pytest.mark.unit
class TestVisitorAcceptance:
    """Tests that every node dispatches to its own visit method."""

    @pytest.mark.parametrize(
        "node, method",
        [
            (Document(), "visit_document"),
            (Heading(level=1), "visit_heading"),
            (Paragraph(), "visit_paragraph"),
            (CodeBlock(content=""), "visit_code_block"),
            (BlockQuote(), "visit_block_quote"),
            (List(ordered=True), "visit_list"),
            (ListItem(), "visit_list_item"),
            (TaskListItem(checked=True), "visit_task_list_item"),
            (Table(header=TableRow()), "visit_table"),
            (TableRow(), "visit_table_row"),
            (TableCell(), "visit_table_cell"),
            (ThematicBreak(), "visit_thematic_break"),
            (HTMLElement(tag="div"), "visit_html_element"),
            (HTMLSelfClosing(tag="br"), "visit_html_self_closing"),
            (Footnotes(), "visit_footnotes"),
            (FootnoteDefinition(identifier="1"), "visit_footnote_definition"),
            (FootnoteReference(identifier="1"), "visit_footnote_reference"),
            (Text(content=""), "visit_text"),
            (Emphasis(), "visit_emphasis"),
            (Strong(), "visit_strong"),
            (Strikethrough(), "visit_strikethrough"),
            (Code(content=""), "visit_code"),
            (Link(url="http://x.com"), "visit_link"),
            (Image(url="x.png"), "visit_image"),
            (ReferenceLink(ref="x"), "visit_reference_link"),
            (ReferenceImage(ref="x"), "visit_reference_image"),
            (LineBreak(), "visit_line_break"),
        ],
    )
    def test_accept(self, node, method):
        """Test accept() calls the matching visit method."""
        assert node.accept(RecordingVisitor()) == method


@pytest.mark.unit
class TestTraversal:
    """Tests for get_node_children and iter_nodes."""

    def test_leaf_has_no_children(self):
        """Test that leaves report no children."""
        assert get_node_children(Text(content="x")) == []
        assert get_node_children(CodeBlock(content="x")) == []

    def test_table_children(self):
        """Test that a table's children are its header followed by its rows."""
        header = TableRow(is_header=True)
        row = TableRow()
        assert get_node_children(Table(header=header, rows=[row])) == [header, row]

    def test_self_closing_attribute_nodes(self):
        """Test that markup compiled inside an attribute value is a child."""
        icon = Text(content="x")
        node = HTMLSelfClosing(tag="img", attrs={"icon": [icon], "class": "y", "hidden": True})
        assert get_node_children(node) == [icon]

    def test_element_attribute_nodes_come_first(self):
        """Test that attribute nodes precede the element body."""
        label = Text(content="label")
        body = Text(content="body")
        node = HTMLElement(tag="span", attrs={"title": [label]}, children=[body])
        assert get_node_children(node) == [label, body]

    def test_iter_nodes_reaches_attribute_markup(self):
        """Test that iteration descends into attribute values."""
        link = ReferenceLink(ref="r", content=[Text(content="a")])
        span = HTMLElement(tag="span", children=[link])
        doc = Document(children=[HTMLSelfClosing(tag="img", attrs={"alt": [span]})])
        assert link in list(iter_nodes(doc))

    def test_iter_nodes_document_order(self):
        """Test that iteration is depth-first in document order."""
        doc = Document(
            children=[
                Heading(level=1, content=[Text(content="a")]),
                Paragraph(content=[Strong(content=[Text(content="b")]), Text(content="c")]),
            ]
        )
        contents = [node.content for node in iter_nodes(doc) if isinstance(node, Text)]
        assert contents == ["a", "b", "c"]

    def test_iter_nodes_includes_root(self):
        """Test that the root node is yielded first."""
        doc = Document()
        assert list(iter_nodes(doc)) == [doc]

    def test_iter_nodes_reaches_footnotes(self):
        """Test that footnote definitions are reachable from the document."""
        definition = FootnoteDefinition(identifier="1", content=[Text(content="note")])
        doc = Document(children=[Footnotes(definitions=[definition])])
        assert definition in list(iter_nodes(doc))
