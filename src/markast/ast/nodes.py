#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/ast/nodes.py
"""AST node classes for compiled Markdown documents.

This module defines the closed set of node variants produced by the
Markdown compiler. Each node represents a structural or inline element of
the document and supports the visitor pattern for rendering.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLElement, Footnotes, FootnoteDefinition

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Strikethrough, Code
    - Link, Image, ReferenceLink, ReferenceImage, LineBreak
    - HTMLSelfClosing, FootnoteReference, TaskListItem

Only nodes whose grammar rule recurses hold child nodes. Text, Code,
CodeBlock, the break nodes and TaskListItem are always leaves.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from markast.constants import Alignment, TaskStatus
from markast.utils.security import sanitize_url

if TYPE_CHECKING:
    from markast.references import LinkDefinition, ReferenceTable

# Value of a parsed HTML attribute: quoted text, a boolean flag, a decomposed
# style declaration, or nodes compiled from an embedded element.
AttributeValue = Union[str, bool, dict[str, str], list["Node"]]


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node

    """

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    For block-mode compiles the children are block nodes; for inline-mode
    compiles they are inline nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata (front matter values, etc.)

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_document method

        Returns
        -------
        Any
            Result from visitor.visit_document(self)

        """
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Produced by both ATX (``# Title``) and setext (``Title`` over ``===``)
    headings.

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    metadata : dict, default = empty dict
        Heading metadata

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_heading method

        Returns
        -------
        Any
            Result from visitor.visit_heading(self)

        """
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Code block node with optional language tag.

    Represents a fenced or indented code block. Neither the language tag nor
    the content is interpreted.

    Parameters
    ----------
    content : str
        Literal code content (not parsed as markdown)
    language : str or None, default = None
        Language tag from the opening fence, if any
    metadata : dict, default = empty dict
        Code block metadata

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_code_block method

        Returns
        -------
        Any
            Result from visitor.visit_code_block(self)

        """
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote
    metadata : dict, default = empty dict
        Block quote metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for bulleted lists
    items : list of ListItem, default = empty list
        List items
    start : int or None, default = None
        Numeral of the first item for ordered lists, None for bulleted lists
    tight : bool, default = True
        True when no item is loose
    metadata : dict, default = empty dict
        List metadata

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: Optional[int] = None
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_list method

        Returns
        -------
        Any
            Result from visitor.visit_list(self)

        """
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node.

    Loose items were parsed in block mode, so their children are block nodes
    (typically paragraphs). Tight items were parsed in inline mode and hold
    inline nodes, possibly followed by a nested List.

    Parameters
    ----------
    children : list of Node, default = empty list
        Nodes in the list item
    loose : bool, default = False
        Whether the item was parsed as block content
    task_status : {'checked', 'unchecked'} or None, default = None
        Status of a leading task checkbox, if the item has one
    metadata : dict, default = empty dict
        List item metadata

    """

    children: list[Node] = field(default_factory=list)
    loose: bool = False
    task_status: Optional[TaskStatus] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node with header, body rows and column alignment.

    Parameters
    ----------
    header : TableRow
        Header row
    rows : list of TableRow, default = empty list
        Body rows; rows may have more or fewer cells than the header
    alignments : list of {'left', 'center', 'right', None}, default = empty list
        Alignment per column as declared by the separator row
    metadata : dict, default = empty dict
        Table metadata

    """

    header: TableRow
    rows: list[TableRow] = field(default_factory=list)
    alignments: list[Optional[Alignment]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_table method

        Returns
        -------
        Any
            Result from visitor.visit_table(self)

        """
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    is_header : bool, default = False
        Whether this is the header row
    metadata : dict, default = empty dict
        Row metadata

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes in the cell
    alignment : {'left', 'center', 'right'} or None, default = None
        Column alignment hint copied from the table
    metadata : dict, default = empty dict
        Cell metadata

    """

    content: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break node (``---``, ``***``, ``___``)."""

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLElement(Node):
    """Raw HTML element with a matching closing tag.

    The body is compiled like any other Markdown: in block mode when it
    starts with another complete element, in inline mode otherwise.

    Parameters
    ----------
    tag : str
        Tag name as written
    attrs : dict, default = empty dict
        Parsed attributes (see ``markast.parsing.rules.html.extract_attributes``)
    children : list of Node, default = empty list
        Nodes compiled from the element body
    metadata : dict, default = empty dict
        Element metadata

    """

    tag: str
    attrs: dict[str, AttributeValue] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML element.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_html_element method

        Returns
        -------
        Any
            Result from visitor.visit_html_element(self)

        """
        return visitor.visit_html_element(self)


@dataclass
class FootnoteDefinition(Node):
    """Resolved footnote definition.

    Parameters
    ----------
    identifier : str
        Footnote identifier as written after ``[^``
    content : list of Node, default = empty list
        Inline nodes compiled from the definition body
    metadata : dict, default = empty dict
        Definition metadata

    """

    identifier: str
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote definition."""
        return visitor.visit_footnote_definition(self)


@dataclass
class Footnotes(Node):
    """Trailing container of all footnote definitions in definition order.

    Appended as the last child of the Document when the source defines at
    least one footnote.

    Parameters
    ----------
    definitions : list of FootnoteDefinition, default = empty list
        Resolved footnote definitions
    metadata : dict, default = empty dict
        Container metadata

    """

    definitions: list[FootnoteDefinition] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing the footnote container."""
        return visitor.visit_footnotes(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Literal text
    metadata : dict, default = empty dict
        Text metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_text method

        Returns
        -------
        Any
            Result from visitor.visit_text(self)

        """
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node.

    Parameters
    ----------
    content : list of Node, default = empty list
        Emphasized inline nodes
    metadata : dict, default = empty dict
        Emphasis metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) node.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes with strong emphasis
    metadata : dict, default = empty dict
        Strong metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong emphasis."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough node (``~~text~~``)."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Inline code node.

    Parameters
    ----------
    content : str
        Code content with surrounding padding removed
    metadata : dict, default = empty dict
        Code metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Link node with an eagerly resolved target.

    Produced by inline links and by the autolink forms (angle brackets,
    mailto addresses and bare URLs).

    Parameters
    ----------
    url : str or None
        Sanitized destination; None when the target was rejected as unsafe
    content : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Optional link title
    metadata : dict, default = empty dict
        Link metadata

    """

    url: Optional[str]
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_link method

        Returns
        -------
        Any
            Result from visitor.visit_link(self)

        """
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node with an eagerly resolved source.

    Parameters
    ----------
    url : str or None
        Sanitized image source; None when rejected as unsafe
    alt : str, default = ""
        Alternative text
    title : str or None, default = None
        Optional image title
    metadata : dict, default = empty dict
        Image metadata

    """

    url: Optional[str]
    alt: str = ""
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


class _DeferredReference:
    """Lazy lookup shared by ReferenceLink and ReferenceImage."""

    ref: str
    references: Optional[ReferenceTable]

    def _definition(self) -> Optional[LinkDefinition]:
        if self.references is None:
            return None
        return self.references.lookup(self.ref)

    @property
    def is_resolved(self) -> bool:
        """Whether the cited reference id has a definition."""
        return self._definition() is not None

    @property
    def url(self) -> Optional[str]:
        """Sanitized target of the definition, or None when undefined or unsafe."""
        definition = self._definition()
        return sanitize_url(definition.url) if definition is not None else None

    @property
    def title(self) -> Optional[str]:
        """Title of the definition, or None."""
        definition = self._definition()
        return definition.title if definition is not None else None


@dataclass
class ReferenceLink(_DeferredReference, Node):
    """Link whose target is a reference id resolved when read.

    The definition may appear anywhere in the document, including after the
    link itself, so ``url`` and ``title`` are looked up on access.

    Parameters
    ----------
    ref : str
        Cited reference id
    content : list of Node, default = empty list
        Inline nodes representing link text
    references : ReferenceTable or None, default = None
        Table of the compile that produced this node
    metadata : dict, default = empty dict
        Link metadata

    """

    ref: str
    content: list[Node] = field(default_factory=list)
    references: Optional[ReferenceTable] = field(default=None, repr=False, compare=False)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this reference link."""
        return visitor.visit_reference_link(self)


@dataclass
class ReferenceImage(_DeferredReference, Node):
    """Image whose source is a reference id resolved when read.

    Parameters
    ----------
    ref : str
        Cited reference id
    alt : str or None, default = None
        Alternative text
    references : ReferenceTable or None, default = None
        Table of the compile that produced this node
    metadata : dict, default = empty dict
        Image metadata

    """

    ref: str
    alt: Optional[str] = None
    references: Optional[ReferenceTable] = field(default=None, repr=False, compare=False)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this reference image."""
        return visitor.visit_reference_image(self)


@dataclass
class LineBreak(Node):
    """Hard line break (two or more spaces before a newline)."""

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class HTMLSelfClosing(Node):
    """Raw HTML tag without a matching closing tag (``<br />``, ``<img ...>``).

    Parameters
    ----------
    tag : str
        Tag name as written
    attrs : dict, default = empty dict
        Parsed attributes
    metadata : dict, default = empty dict
        Element metadata

    """

    tag: str
    attrs: dict[str, AttributeValue] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this self-closing HTML tag."""
        return visitor.visit_html_self_closing(self)


@dataclass
class FootnoteReference(Node):
    """Footnote citation (``[^id]``).

    Parameters
    ----------
    identifier : str
        Cited footnote identifier
    metadata : dict, default = empty dict
        Reference metadata

    """

    identifier: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def url(self) -> Optional[str]:
        """Sanitized in-document anchor of the cited footnote."""
        return sanitize_url(f"#{self.identifier}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


@dataclass
class TaskListItem(Node):
    """Task checkbox marker (``[ ]`` or ``[x]``).

    Parameters
    ----------
    checked : bool
        Whether the box is ticked
    metadata : dict, default = empty dict
        Marker metadata

    """

    checked: bool
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this task checkbox."""
        return visitor.visit_task_list_item(self)


def _attribute_nodes(attrs: dict[str, AttributeValue]) -> list[Node]:
    nodes: list[Node] = []
    for value in attrs.values():
        if isinstance(value, list):
            nodes.extend(value)
    return nodes


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Nodes compiled from markup inside HTML attribute values count as
    children of their tag and come before the element body.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(node, HTMLElement):
        return [*_attribute_nodes(node.attrs), *node.children]

    if isinstance(node, HTMLSelfClosing):
        return _attribute_nodes(node.attrs)

    if isinstance(
        node,
        (Heading, Paragraph, Emphasis, Strong, Strikethrough, Link, ReferenceLink, TableCell, FootnoteDefinition),
    ):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        return [node.header, *node.rows]

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, Footnotes):
        return list(node.definitions)

    # Leaf nodes
    return []


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants depth-first, in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))
