#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown compiler entry points."""

from markast.parsers.markdown import CompileResult, MarkdownCompiler, compile_markdown, markdown_to_ast

__all__ = ["CompileResult", "MarkdownCompiler", "compile_markdown", "markdown_to_ast"]
