#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsers/markdown.py
"""Markdown to AST compiler.

This module is the entry point of the package. :class:`MarkdownCompiler`
validates its options once, builds the rule dispatcher, and turns Markdown
strings into :class:`~markast.ast.nodes.Document` trees together with the
diagnostics collected along the way.

Compilation steps
-----------------
1. Normalize line endings, tabs and form feeds.
2. Optionally strip YAML, TOML or JSON front matter into document metadata.
3. Decide between inline and block scope: ``force_inline`` wins over
   ``force_block``, which wins over a heuristic that looks for block syntax.
4. Run the dispatcher over the whole input.
5. Append a trailing :class:`~markast.ast.nodes.Footnotes` node when the
   document defines footnotes, each body compiled in inline scope.
6. Report citations of undefined references and footnotes.

"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Mapping, NamedTuple, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from markast.ast.nodes import Document, FootnoteDefinition, Footnotes, ReferenceImage, ReferenceLink, iter_nodes
from markast.constants import (
    DIAGNOSTIC_INVALID_FRONTMATTER,
    DIAGNOSTIC_UNDEFINED_FOOTNOTE,
    DIAGNOSTIC_UNDEFINED_LINK_REFERENCE,
    DIAGNOSTIC_UNSAFE_URL,
)
from markast.exceptions import InvalidOptionsError, ValidationError
from markast.options.markdown import MarkdownParserOptions
from markast.parsing.dispatch import Dispatcher
from markast.parsing.normalize import is_inline_source, normalize_whitespace, prepare_block_source
from markast.parsing.rules import build_rules
from markast.parsing.state import CompileContext, Diagnostic, ParseState

logger = logging.getLogger(__name__)

OptionsLike = Union[MarkdownParserOptions, Mapping[str, Any], None]


class CompileResult(NamedTuple):
    """Outcome of a compile call.

    Attributes
    ----------
    document : Document
        Root of the compiled tree
    diagnostics : list of Diagnostic
        Recoverable problems found in the document, in discovery order

    """

    document: Document
    diagnostics: list[Diagnostic]


def _coerce_options(options: OptionsLike) -> MarkdownParserOptions:
    if options is None:
        return MarkdownParserOptions()
    if isinstance(options, MarkdownParserOptions):
        return options
    if isinstance(options, Mapping):
        return MarkdownParserOptions.from_mapping(options)
    raise InvalidOptionsError(
        component_name="markdown",
        expected_type=MarkdownParserOptions,
        received_type=type(options),
    )


class MarkdownCompiler:
    r"""Compile Markdown into an AST.

    A compiler is reusable: every :meth:`compile` call gets fresh reference
    and footnote tables, so documents never see each other's definitions.

    Parameters
    ----------
    options : MarkdownParserOptions, mapping or None, default = None
        Compiler configuration. A mapping is converted with
        :meth:`MarkdownParserOptions.from_mapping`.

    Raises
    ------
    InvalidOptionsError
        If ``options`` is neither an options object, a mapping nor None
    ValidationError
        If a mapping contains unknown keys or invalid values

    Examples
    --------
    Basic compilation:

        >>> compiler = MarkdownCompiler()
        >>> result = compiler.compile("# Hello\n\nThis is **bold**.")
        >>> [type(node).__name__ for node in result.document.children]
        ['Heading', 'Paragraph']

    Forcing inline scope:

        >>> compiler = MarkdownCompiler({"force_inline": True})
        >>> compiler.compile("# not a heading").document.children[0].content
        '# not a heading'

    """

    def __init__(self, options: OptionsLike = None) -> None:
        self.options: MarkdownParserOptions = _coerce_options(options)
        self.dispatcher = Dispatcher(build_rules(self.options))

    def compile(self, markdown: str) -> CompileResult:
        """Compile a Markdown string.

        Parameters
        ----------
        markdown : str
            Markdown source

        Returns
        -------
        CompileResult
            The document and the diagnostics collected while compiling it

        Raises
        ------
        ValidationError
            If ``markdown`` is not a string

        """
        if not isinstance(markdown, str):
            raise ValidationError(
                f"Markdown input must be a string, got {type(markdown).__name__}",
                parameter_name="markdown",
                parameter_value=type(markdown).__name__,
            )

        context = CompileContext(self.dispatcher, self.options)
        content = normalize_whitespace(markdown)

        metadata: dict[str, Any] = {}
        if self.options.parse_frontmatter:
            content, metadata = self._extract_frontmatter(content, context)

        inline = self._is_inline(content)
        source = content if inline else prepare_block_source(content)
        logger.debug(f"Compiling {len(content)} characters in {'inline' if inline else 'block'} scope")

        children = context.parse(source, ParseState(inline=inline))

        if context.footnotes:
            children.append(self._build_footnotes(context))

        document = Document(children=children, metadata=metadata)
        self._report_references(document, context)
        return CompileResult(document=document, diagnostics=list(context.diagnostics))

    def _is_inline(self, content: str) -> bool:
        if self.options.force_inline:
            return True
        if self.options.force_block:
            return False
        return is_inline_source(content)

    def _build_footnotes(self, context: CompileContext) -> Footnotes:
        """Compile each collected footnote body in inline scope, in definition order."""
        definitions = [
            FootnoteDefinition(
                identifier=entry.identifier,
                content=context.parse(entry.body, ParseState(inline=True)),
            )
            for entry in context.footnotes.entries
        ]
        return Footnotes(definitions=definitions)

    def _report_references(self, document: Document, context: CompileContext) -> None:
        for ref in context.references.undefined():
            context.report(
                DIAGNOSTIC_UNDEFINED_LINK_REFERENCE,
                f"Link reference {ref!r} is cited but never defined",
                identifier=ref,
            )

        for identifier in context.footnotes.undefined():
            context.report(
                DIAGNOSTIC_UNDEFINED_FOOTNOTE,
                f"Footnote {identifier!r} is cited but never defined",
                identifier=identifier,
            )

        reported: set[str] = set()
        for node in iter_nodes(document):
            if not isinstance(node, (ReferenceLink, ReferenceImage)) or not node.is_resolved:
                continue
            definition = context.references.lookup(node.ref)
            if definition is None or node.url is not None or definition.url in reported:
                continue
            reported.add(definition.url)
            context.report(
                DIAGNOSTIC_UNSAFE_URL,
                f"Rejected unsafe URL {definition.url[:100]!r} for reference {node.ref!r}",
                identifier=definition.url,
            )

    # ------------------------------------------------------------------
    # Front matter
    # ------------------------------------------------------------------

    def _split_delimited(self, content: str, delimiter: str) -> Optional[tuple[str, str]]:
        """Split a ``delimiter``-fenced block off the start of ``content``.

        Returns
        -------
        tuple[str, str] or None
            (block body, remaining content), or None when the block is absent
            or never closed

        """
        if not content.startswith(f"{delimiter}\n"):
            return None

        lines = content.splitlines(keepends=True)
        for i in range(1, len(lines)):
            if lines[i].strip() == delimiter:
                return "".join(lines[1:i]), "".join(lines[i + 1 :])
        return None

    def _try_extract_yaml_frontmatter(self, content: str, context: CompileContext) -> Optional[tuple[str, dict]]:
        """Try to extract YAML front matter (``---`` ... ``---``)."""
        block = self._split_delimited(content, "---")
        if block is None:
            return None

        body, remaining = block
        try:
            data = yaml.safe_load(body)
        except yaml.YAMLError as e:
            context.report(DIAGNOSTIC_INVALID_FRONTMATTER, f"Invalid YAML front matter: {e}")
            return remaining, {}

        if data is None:
            return remaining, {}
        if not isinstance(data, dict):
            context.report(DIAGNOSTIC_INVALID_FRONTMATTER, "YAML front matter is not a mapping")
            return remaining, {}
        return remaining, data

    def _try_extract_toml_frontmatter(self, content: str, context: CompileContext) -> Optional[tuple[str, dict]]:
        """Try to extract TOML front matter (``+++`` ... ``+++``)."""
        block = self._split_delimited(content, "+++")
        if block is None:
            return None

        body, remaining = block
        try:
            return remaining, tomllib.loads(body)
        except tomllib.TOMLDecodeError as e:
            context.report(DIAGNOSTIC_INVALID_FRONTMATTER, f"Invalid TOML front matter: {e}")
            return remaining, {}

    def _try_extract_json_frontmatter(self, content: str, context: CompileContext) -> Optional[tuple[str, dict]]:
        """Try to extract JSON front matter (a leading ``{ ... }`` object).

        Content whose leading braces do not form a valid JSON object is left
        in place, since it may simply be text that starts with a brace.
        """
        if not content.startswith("{"):
            return None

        # Find the end of the JSON object
        brace_count = 0
        end_pos = 0
        for i, char in enumerate(content):
            if char == "{":
                brace_count += 1
            elif char == "}":
                brace_count -= 1
                if brace_count == 0:
                    end_pos = i + 1
                    break

        if end_pos == 0:
            return None

        try:
            data = json.loads(content[:end_pos])
        except json.JSONDecodeError as e:
            context.report(DIAGNOSTIC_INVALID_FRONTMATTER, f"Invalid JSON front matter: {e.msg}")
            return None

        if not isinstance(data, dict):
            return None
        return content[end_pos:].lstrip("\n"), data

    def _extract_frontmatter(self, content: str, context: CompileContext) -> tuple[str, dict[str, Any]]:
        """Extract and parse front matter from markdown content.

        Supports YAML (``---``), TOML (``+++``) and JSON front matter.

        Parameters
        ----------
        content : str
            Normalized markdown content that may start with front matter
        context : CompileContext
            Context collecting ``invalid-frontmatter`` diagnostics

        Returns
        -------
        tuple[str, dict]
            Content with front matter removed and the parsed metadata

        """
        for extractor in (
            self._try_extract_yaml_frontmatter,
            self._try_extract_toml_frontmatter,
            self._try_extract_json_frontmatter,
        ):
            result = extractor(content, context)
            if result is not None:
                return result
        return content, {}


def compile_markdown(markdown: str, options: OptionsLike = None) -> CompileResult:
    """Compile ``markdown`` with a one-off :class:`MarkdownCompiler`.

    Parameters
    ----------
    markdown : str
        Markdown source
    options : MarkdownParserOptions, mapping or None, default = None
        Compiler configuration

    Returns
    -------
    CompileResult
        The document and its diagnostics

    Examples
    --------
        >>> result = compile_markdown("[a][1]\\n\\n[1]: http://x.com")
        >>> result.document.children[0].content[0].url
        'http://x.com'

    """
    return MarkdownCompiler(options).compile(markdown)


def markdown_to_ast(markdown: str, options: OptionsLike = None) -> Document:
    """Compile ``markdown`` and return only the document.

    Diagnostics are logged as warnings instead of being returned.

    Parameters
    ----------
    markdown : str
        Markdown source
    options : MarkdownParserOptions, mapping or None, default = None
        Compiler configuration

    Returns
    -------
    Document
        Root of the compiled tree

    """
    result = compile_markdown(markdown, options)
    for diagnostic in result.diagnostics:
        logger.warning(f"{diagnostic.code}: {diagnostic.message}")
    return result.document
