#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Renderers consume the compiled tree by implementing :class:`NodeVisitor`: one
``visit_*`` method per node variant. The compiler never renders anything
itself; it only produces nodes that call back into a visitor through
``Node.accept``.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from markast.ast.nodes import (
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
    Node,
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
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a visit_* method for every node variant. Sibling
    nodes carry no position of their own; a renderer that needs a stable key
    per sibling (for keyed UI frameworks, say) walks them with
    :meth:`visit_sequence` and reads :attr:`sequence_key` inside its visit
    methods.

    Examples
    --------
    Collecting plain text from a tree:

        >>> class TextCollector(NodeVisitor):
        ...     def visit_text(self, node):
        ...         return node.content
        ...
        ...     def generic_visit(self, node):
        ...         return "".join(self.visit_sequence(get_node_children(node)))
        ...
        ...     visit_document = visit_paragraph = visit_strong = generic_visit
        ...     # ... remaining visit_* methods

    """

    #: Index of the node currently visited within its enclosing sequence,
    #: or None outside :meth:`visit_sequence`.
    sequence_key: Optional[int] = None

    def visit_sequence(self, nodes: Iterable[Node]) -> list[Any]:
        """Visit sibling nodes in order, numbering them from zero.

        Parameters
        ----------
        nodes : iterable of Node
            Sibling nodes to visit

        Returns
        -------
        list
            Result of each node's visit, in order

        """
        enclosing_key = self.sequence_key
        results: list[Any] = []
        try:
            for index, node in enumerate(nodes):
                self.sequence_key = index
                results.append(node.accept(self))
        finally:
            self.sequence_key = enclosing_key
        return results

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node.

        Parameters
        ----------
        node : List
            The list node to visit; ``node.tight`` tells whether item
            children are inline nodes or block nodes

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_task_list_item(self, node: TaskListItem) -> Any:
        """Visit a TaskListItem checkbox marker."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_html_element(self, node: HTMLElement) -> Any:
        """Visit an HTMLElement node."""
        pass

    @abstractmethod
    def visit_html_self_closing(self, node: HTMLSelfClosing) -> Any:
        """Visit an HTMLSelfClosing node."""
        pass

    @abstractmethod
    def visit_footnotes(self, node: Footnotes) -> Any:
        """Visit the trailing Footnotes container."""
        pass

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a FootnoteDefinition node."""
        pass

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node.

        Parameters
        ----------
        node : Text
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit an inline Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_reference_link(self, node: ReferenceLink) -> Any:
        """Visit a ReferenceLink node.

        The target is resolved on access, so ``node.url`` reflects every
        definition in the compiled document, including later ones.

        """
        pass

    @abstractmethod
    def visit_reference_image(self, node: ReferenceImage) -> Any:
        """Visit a ReferenceImage node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        The default implementation does nothing but can be overridden.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None
