"""Callout block editor."""

from __future__ import annotations

from article_block_store.models.blocks import Block

from .base import BlockEditor

# color -> (label, icon)
CALLOUT_VARIANTS: dict[str, tuple[str, str]] = {
    "blue": ("Info", "ℹ️"),
    "yellow": ("Warning", "⚠️"),
    "red": ("Error", "❌"),
    "green": ("Success", "✅"),
}


class CalloutEditor(BlockEditor):
    """Text commits on blur; picking a variant commits color and icon immediately."""

    def set_variant(self, color: str) -> Block | None:
        if color not in CALLOUT_VARIANTS:
            raise ValueError(f"Unknown callout variant {color!r}")
        _, icon = CALLOUT_VARIANTS[color]
        self.buffer.update(color=color, icon=icon)
        return self._commit()


__all__ = ["CALLOUT_VARIANTS", "CalloutEditor"]
