"""Renderer for the foreign hierarchical block tree."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from html import escape
from typing import Any, Mapping

from article_block_store.models.foreign import ForeignBlock
from article_block_store.renderers.base import RenderOptions

from .components import DEFAULT_COMPONENTS, ForeignComponent, UnsupportedComponent, render_table

logger = logging.getLogger(__name__)

EMPTY_MARKUP = '<p class="empty">No content</p>'

_LIST_TAGS = {"bulleted_list_item": "ul", "numbered_list_item": "ol"}


@dataclass(slots=True)
class ForeignRenderer:
    """Render a list of foreign blocks.

    Tables absorb their rows, consecutive list items share one list element,
    and a block that fails to render is replaced by its placeholder so the
    siblings still come out.
    """

    _components: dict[str, ForeignComponent] = field(default_factory=dict)
    _fallback_component: ForeignComponent | None = None

    def __post_init__(self) -> None:
        if not self._components:
            self._components = dict(DEFAULT_COMPONENTS)
        if self._fallback_component is None:
            self._fallback_component = UnsupportedComponent()

    def register(self, block_type: str, component: ForeignComponent) -> None:
        self._components[block_type] = component

    def render(
        self,
        blocks: Sequence[ForeignBlock],
        *,
        options: RenderOptions | None = None,
        **kwargs: Any,
    ) -> str:
        if not blocks:
            return EMPTY_MARKUP
        return self.render_sequence(blocks, options=options or RenderOptions(), extra=kwargs)

    def render_sequence(
        self,
        blocks: Sequence[ForeignBlock],
        *,
        options: RenderOptions,
        extra: Mapping[str, Any],
    ) -> str:
        parts: list[str] = []
        for kind, unit in group_units(blocks):
            if kind == "table":
                parts.append(self._render_table(unit[0], unit[1:]))
            elif kind in _LIST_TAGS.values():
                items = "".join(self.render_block(block, options=options, extra=extra) for block in unit)
                parts.append(f"<{kind}>{items}</{kind}>")
            else:
                parts.append(self.render_block(unit[0], options=options, extra=extra))
        return "".join(part for part in parts if part)

    def render_block(
        self,
        block: ForeignBlock,
        *,
        options: RenderOptions | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> str:
        options = options or RenderOptions()
        extra = extra or {}
        component = self._components.get(block.type)
        if component is None:
            logger.warning("No renderer for foreign block type '%s' (id=%s).", block.type, block.id)
            return self._fallback_component.render(block, engine=self, options=options, extra=extra)
        try:
            return component.render(block, engine=self, options=options, extra=extra)
        except Exception:
            logger.warning("Failed to render foreign block '%s' (id=%s).", block.type, block.id, exc_info=True)
            return self._fallback_component.render(block, engine=self, options=options, extra=extra)

    def _render_table(self, table: ForeignBlock, following_rows: Sequence[ForeignBlock]) -> str:
        rows = [child for child in table.children if child.type == "table_row"]
        rows.extend(following_rows)
        try:
            return render_table(table, rows)
        except Exception:
            logger.warning("Failed to render table (id=%s).", table.id, exc_info=True)
            return f'<div class="unsupported-block" data-type="table">Unable to render table {escape(table.id)}</div>'


def group_units(blocks: Sequence[ForeignBlock]) -> Iterator[tuple[str, list[ForeignBlock]]]:
    """Yield ``(kind, unit)`` render units over sibling blocks.

    ``kind`` is ``"table"`` for a table followed by its consecutive row
    siblings, ``"ul"``/``"ol"`` for a run of list items and ``"block"`` for
    everything else. Rows not preceded by a table are dropped.
    """
    index = 0
    total = len(blocks)
    while index < total:
        block = blocks[index]
        if block.type == "table":
            end = index + 1
            while end < total and blocks[end].type == "table_row":
                end += 1
            yield "table", list(blocks[index:end])
            index = end
            continue
        if block.type == "table_row":
            logger.debug("Skipping table row %s outside a table.", block.id)
            index += 1
            continue
        tag = _LIST_TAGS.get(block.type)
        if tag is not None:
            end = index + 1
            while end < total and blocks[end].type == block.type:
                end += 1
            yield tag, list(blocks[index:end])
            index = end
            continue
        yield "block", [block]
        index += 1


__all__ = ["EMPTY_MARKUP", "ForeignRenderer", "group_units"]
