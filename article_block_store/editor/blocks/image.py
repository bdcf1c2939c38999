"""Image block editor."""

from __future__ import annotations

from typing import Any

from .base import BlockEditor


class ImageEditor(BlockEditor):
    def change(self, **fields: Any) -> None:
        for dimension in ("width", "height"):
            value = fields.get(dimension)
            if value is not None and int(value) <= 0:
                raise ValueError(f"Image {dimension} must be positive.")
        super().change(**fields)


__all__ = ["ImageEditor"]
