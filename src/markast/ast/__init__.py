#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/ast/__init__.py
"""Abstract Syntax Tree (AST) module for compiled Markdown.

The module consists of three components:

- nodes: AST node classes representing document structure
- visitors: Visitor interface that renderers implement
- serialization: Dictionary and JSON export of AST structures

Examples
--------
    >>> from markast import compile_markdown
    >>> from markast.ast import Heading
    >>> result = compile_markdown("# Title\\n")
    >>> isinstance(result.document.children[0], Heading)
    True

"""

from __future__ import annotations

from markast.ast.nodes import (
    AttributeValue,
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
    get_node_children,
    iter_nodes,
)
from markast.ast.serialization import ast_to_dict, ast_to_json
from markast.ast.visitors import NodeVisitor

__all__ = [
    # Nodes
    "AttributeValue",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "Footnotes",
    "Heading",
    "HTMLElement",
    "HTMLSelfClosing",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "ReferenceImage",
    "ReferenceLink",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "TaskListItem",
    "Text",
    "ThematicBreak",
    # Helpers
    "get_node_children",
    "iter_nodes",
    # Visitors
    "NodeVisitor",
    # Serialization
    "ast_to_dict",
    "ast_to_json",
]
