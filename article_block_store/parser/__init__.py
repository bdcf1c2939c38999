"""Parsing and ingestion helpers."""

from .foreign_tree import (
    ForeignImportError,
    ForeignSource,
    build_foreign_import,
    extract_metadata,
    extract_page_id,
    fetch_block_tree,
    normalize_blocks,
)
from .markdown_parser import (
    MarkdownAst,
    ast_to_blocks,
    load_markdown_path,
    markdown_to_blocks,
    parse_markdown,
)

__all__ = [
    "ForeignImportError",
    "ForeignSource",
    "MarkdownAst",
    "ast_to_blocks",
    "build_foreign_import",
    "extract_metadata",
    "extract_page_id",
    "fetch_block_tree",
    "load_markdown_path",
    "markdown_to_blocks",
    "normalize_blocks",
    "parse_markdown",
]
