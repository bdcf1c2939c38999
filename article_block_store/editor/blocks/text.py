"""Editors for text-like blocks: paragraphs, list items, headings and quotes."""

from __future__ import annotations

from typing import Any

from article_block_store.models.blocks import BlockType
from article_block_store.slugs import generate_anchor

from .base import BlockEditor

SLASH = "/"


class TextEditor(BlockEditor):
    """Single text field with Enter/Backspace block navigation."""

    def change(self, **fields: Any) -> None:
        super().change(**fields)
        text = fields.get("text")
        if isinstance(text, str) and text.endswith(SLASH):
            self.host.open_palette(self.block.position + 1)

    def key_down(self, key: str, *, shift: bool = False) -> bool:
        if key == "Enter" and not shift:
            self.blur()
            self.host.add_block(BlockType.PARAGRAPH, self.block.position + 1)
            return True
        if key == "Backspace" and self.buffer.get("text", "") == "" and self.block.position > 0:
            self.host.delete_block(self.block.id)
            return True
        return False


class AnchoredTextEditor(TextEditor):
    """Recomputes the anchor from the committed text."""

    def _payload(self) -> dict[str, Any]:
        payload = dict(self.buffer)
        payload["anchor"] = generate_anchor(payload.get("text", ""))
        return payload


class HeadingEditor(AnchoredTextEditor):
    @property
    def level(self) -> int:
        return getattr(self.block, "level", 1)


class QuoteEditor(AnchoredTextEditor):
    pass


__all__ = ["AnchoredTextEditor", "HeadingEditor", "QuoteEditor", "TextEditor"]
