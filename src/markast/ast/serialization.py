#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/ast/serialization.py
"""Dictionary and JSON export for AST nodes.

The exported form is a plain nested dictionary with a ``node_type`` key on
every node, suitable for comparing trees in tests and for handing a compiled
document to non-Python consumers.

Reference nodes are exported with their resolved ``url`` and ``title`` so the
output does not depend on the reference table that produced them.

Examples
--------
    >>> from markast.ast import Document, Paragraph, Text
    >>> doc = Document(children=[Paragraph(content=[Text(content="Hello")])])
    >>> ast_to_dict(doc)["children"][0]["node_type"]
    'Paragraph'

"""

from __future__ import annotations

import json
from typing import Any, Callable

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
)

SCHEMA_VERSION = 1


def _with_metadata(result: dict[str, Any], node: Node) -> dict[str, Any]:
    if node.metadata:
        result["metadata"] = node.metadata
    return result


def _serialize_nodes(nodes: list[Node]) -> list[dict[str, Any]]:
    return [ast_to_dict(child) for child in nodes]


def _serialize_children_node(node: Node, node_type: str) -> dict[str, Any]:
    """Serialize nodes with a 'children' attribute.

    Parameters
    ----------
    node : Node
        Node with children attribute
    node_type : str
        Type name for the node

    Returns
    -------
    dict
        Serialized node

    """
    result: dict[str, Any] = {"node_type": node_type, "children": _serialize_nodes(node.children)}  # type: ignore
    return _with_metadata(result, node)


def _serialize_inline_content_node(node: Node, node_type: str) -> dict[str, Any]:
    """Serialize nodes with a 'content' attribute containing child nodes."""
    result: dict[str, Any] = {"node_type": node_type, "content": _serialize_nodes(node.content)}  # type: ignore
    return _with_metadata(result, node)


def _serialize_text_content_node(node: Node, node_type: str) -> dict[str, Any]:
    """Serialize nodes with a 'content' attribute containing text."""
    result: dict[str, Any] = {"node_type": node_type, "content": node.content}  # type: ignore
    return _with_metadata(result, node)


def _serialize_leaf(node: Node, node_type: str) -> dict[str, Any]:
    return _with_metadata({"node_type": node_type}, node)


def _serialize_attribute_value(value: AttributeValue) -> Any:
    if isinstance(value, list):
        return _serialize_nodes(value)
    return value


def _serialize_attrs(attrs: dict[str, AttributeValue]) -> dict[str, Any]:
    return {name: _serialize_attribute_value(value) for name, value in attrs.items()}


def _serialize_heading(node: Heading) -> dict[str, Any]:
    """Serialize a Heading node."""
    result: dict[str, Any] = {
        "node_type": "Heading",
        "level": node.level,
        "content": _serialize_nodes(node.content),
    }
    return _with_metadata(result, node)


def _serialize_code_block(node: CodeBlock) -> dict[str, Any]:
    """Serialize a CodeBlock node."""
    result: dict[str, Any] = {"node_type": "CodeBlock", "content": node.content, "language": node.language}
    return _with_metadata(result, node)


def _serialize_list(node: List) -> dict[str, Any]:
    """Serialize a List node."""
    result: dict[str, Any] = {
        "node_type": "List",
        "ordered": node.ordered,
        "start": node.start,
        "tight": node.tight,
        "items": _serialize_nodes(node.items),  # type: ignore[arg-type]
    }
    return _with_metadata(result, node)


def _serialize_list_item(node: ListItem) -> dict[str, Any]:
    """Serialize a ListItem node."""
    result: dict[str, Any] = {
        "node_type": "ListItem",
        "loose": node.loose,
        "task_status": node.task_status,
        "children": _serialize_nodes(node.children),
    }
    return _with_metadata(result, node)


def _serialize_table(node: Table) -> dict[str, Any]:
    """Serialize a Table node."""
    result: dict[str, Any] = {
        "node_type": "Table",
        "alignments": list(node.alignments),
        "header": ast_to_dict(node.header),
        "rows": _serialize_nodes(node.rows),  # type: ignore[arg-type]
    }
    return _with_metadata(result, node)


def _serialize_table_row(node: TableRow) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "TableRow",
        "is_header": node.is_header,
        "cells": _serialize_nodes(node.cells),  # type: ignore[arg-type]
    }
    return _with_metadata(result, node)


def _serialize_table_cell(node: TableCell) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "TableCell",
        "alignment": node.alignment,
        "content": _serialize_nodes(node.content),
    }
    return _with_metadata(result, node)


def _serialize_link(node: Link) -> dict[str, Any]:
    """Serialize a Link node."""
    result: dict[str, Any] = {
        "node_type": "Link",
        "url": node.url,
        "title": node.title,
        "content": _serialize_nodes(node.content),
    }
    return _with_metadata(result, node)


def _serialize_image(node: Image) -> dict[str, Any]:
    """Serialize an Image node."""
    result: dict[str, Any] = {"node_type": "Image", "url": node.url, "alt": node.alt, "title": node.title}
    return _with_metadata(result, node)


def _serialize_reference_link(node: ReferenceLink) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "ReferenceLink",
        "ref": node.ref,
        "url": node.url,
        "title": node.title,
        "content": _serialize_nodes(node.content),
    }
    return _with_metadata(result, node)


def _serialize_reference_image(node: ReferenceImage) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "ReferenceImage",
        "ref": node.ref,
        "url": node.url,
        "title": node.title,
        "alt": node.alt,
    }
    return _with_metadata(result, node)


def _serialize_html_element(node: HTMLElement) -> dict[str, Any]:
    """Serialize an HTMLElement node, including node-valued attributes."""
    result: dict[str, Any] = {
        "node_type": "HTMLElement",
        "tag": node.tag,
        "attrs": _serialize_attrs(node.attrs),
        "children": _serialize_nodes(node.children),
    }
    return _with_metadata(result, node)


def _serialize_html_self_closing(node: HTMLSelfClosing) -> dict[str, Any]:
    result: dict[str, Any] = {"node_type": "HTMLSelfClosing", "tag": node.tag, "attrs": _serialize_attrs(node.attrs)}
    return _with_metadata(result, node)


def _serialize_footnote_reference(node: FootnoteReference) -> dict[str, Any]:
    """Serialize a FootnoteReference node."""
    result: dict[str, Any] = {"node_type": "FootnoteReference", "identifier": node.identifier, "url": node.url}
    return _with_metadata(result, node)


def _serialize_footnote_definition(node: FootnoteDefinition) -> dict[str, Any]:
    """Serialize a FootnoteDefinition node."""
    result: dict[str, Any] = {
        "node_type": "FootnoteDefinition",
        "identifier": node.identifier,
        "content": _serialize_nodes(node.content),
    }
    return _with_metadata(result, node)


def _serialize_footnotes(node: Footnotes) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "Footnotes",
        "definitions": _serialize_nodes(node.definitions),  # type: ignore[arg-type]
    }
    return _with_metadata(result, node)


def _serialize_task_list_item(node: TaskListItem) -> dict[str, Any]:
    return _with_metadata({"node_type": "TaskListItem", "checked": node.checked}, node)


# Dispatch table mapping node types to their serialization functions
_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Document: lambda n: _serialize_children_node(n, "Document"),
    BlockQuote: lambda n: _serialize_children_node(n, "BlockQuote"),
    Heading: _serialize_heading,
    Paragraph: lambda n: _serialize_inline_content_node(n, "Paragraph"),
    CodeBlock: _serialize_code_block,
    List: _serialize_list,
    ListItem: _serialize_list_item,
    TaskListItem: _serialize_task_list_item,
    Table: _serialize_table,
    TableRow: _serialize_table_row,
    TableCell: _serialize_table_cell,
    ThematicBreak: lambda n: _serialize_leaf(n, "ThematicBreak"),
    HTMLElement: _serialize_html_element,
    HTMLSelfClosing: _serialize_html_self_closing,
    Footnotes: _serialize_footnotes,
    FootnoteDefinition: _serialize_footnote_definition,
    FootnoteReference: _serialize_footnote_reference,
    Text: lambda n: _serialize_text_content_node(n, "Text"),
    Emphasis: lambda n: _serialize_inline_content_node(n, "Emphasis"),
    Strong: lambda n: _serialize_inline_content_node(n, "Strong"),
    Strikethrough: lambda n: _serialize_inline_content_node(n, "Strikethrough"),
    Code: lambda n: _serialize_text_content_node(n, "Code"),
    Link: _serialize_link,
    Image: _serialize_image,
    ReferenceLink: _serialize_reference_link,
    ReferenceImage: _serialize_reference_image,
    LineBreak: lambda n: _serialize_leaf(n, "LineBreak"),
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a dictionary representation.

    Parameters
    ----------
    node : Node
        The AST node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the node type has no registered serializer

    Examples
    --------
    >>> from markast.ast import Text
    >>> ast_to_dict(Text(content="Hello"))
    {'node_type': 'Text', 'content': 'Hello'}

    """
    node_class = type(node)
    serializer = _SERIALIZATION_DISPATCH.get(node_class)
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {node_class.__name__}")


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string.

    The root object carries a ``schema_version`` field. Unicode characters are
    preserved without escape sequences.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string representation

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)
