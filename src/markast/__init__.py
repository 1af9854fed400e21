"""markast - compile Markdown into a typed abstract syntax tree.

markast parses Markdown with a hand-written grammar of ordered pattern-matching
rules and produces a tree of dataclass nodes that renderers walk through the
visitor interface. Rendering itself is left to the caller.

Key Features
------------
- Priority-ordered rule dispatch with recursive block and inline scopes
- Nested and loose/tight lists, pipe tables with column alignment
- Link references and footnotes that may be defined after their first use
- Raw HTML elements with parsed attributes, including embedded markup
- URL sanitization of every link and image target
- Optional YAML/TOML/JSON front matter
- Recoverable document problems reported as diagnostics, never raised

Requirements
------------
- Python 3.10+

Examples
--------
Compiling a document:

    >>> from markast import compile_markdown
    >>> result = compile_markdown("# Hi\\n\\nSome **bold** text.")
    >>> heading, paragraph = result.document.children
    >>> heading.level
    1

Exporting the tree:

    >>> from markast.ast import ast_to_json
    >>> json_text = ast_to_json(result.document, indent=2)

See Also
--------
markast.ast : AST node definitions, visitor interface and serialization
markast.parsing : Rule registry, dispatcher and grammar rules

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "markast requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from markast.ast import Document, Node, NodeVisitor, ast_to_dict, ast_to_json
from markast.exceptions import (
    EngineInvariantError,
    InvalidOptionsError,
    MarkastError,
    ParsingError,
    ValidationError,
)
from markast.options import MarkdownParserOptions
from markast.parsers.markdown import CompileResult, MarkdownCompiler, compile_markdown, markdown_to_ast
from markast.parsing.state import Diagnostic
from markast.utils.security import sanitize_url

__all__ = [
    "__version__",
    # Compilation
    "CompileResult",
    "Diagnostic",
    "MarkdownCompiler",
    "MarkdownParserOptions",
    "compile_markdown",
    "markdown_to_ast",
    # AST
    "Document",
    "Node",
    "NodeVisitor",
    "ast_to_dict",
    "ast_to_json",
    # Security
    "sanitize_url",
    # Exceptions
    "EngineInvariantError",
    "InvalidOptionsError",
    "MarkastError",
    "ParsingError",
    "ValidationError",
]
