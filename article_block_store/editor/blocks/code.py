"""Code block editor."""

from __future__ import annotations

from article_block_store.models.blocks import Block

from .base import BlockEditor

LANGUAGES = (
    "javascript",
    "typescript",
    "python",
    "java",
    "cpp",
    "csharp",
    "go",
    "rust",
    "ruby",
    "php",
    "sql",
    "html",
    "css",
    "json",
    "yaml",
    "markdown",
    "bash",
    "shell",
    "diagram",
)


class CodeEditor(BlockEditor):
    """Code text commits on blur; a language switch commits immediately."""

    def set_language(self, language: str) -> Block | None:
        self.buffer["language"] = language
        return self._commit()


__all__ = ["CodeEditor", "LANGUAGES"]
