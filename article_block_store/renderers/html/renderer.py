"""Renderer entry-point wiring HTML components for native blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from article_block_store.models.blocks import Block, BlockType, UnsupportedBlock
from article_block_store.renderers.base import BlockTree, RenderOptions, Renderer, RendererComponent

from .components import DEFAULT_COMPONENTS, RenderContext, UnsupportedComponent


def _default_components() -> dict[BlockType, RendererComponent]:
    return dict(DEFAULT_COMPONENTS)


@dataclass(slots=True)
class HtmlRenderer(Renderer):
    _components: dict[BlockType, RendererComponent] = field(default_factory=dict)
    _fallback_component: RendererComponent | None = None

    def __post_init__(self) -> None:
        if not self._components:
            self._components = _default_components()
        if self._fallback_component is None:
            self._fallback_component = UnsupportedComponent()

    def register(self, block_type: BlockType, component: RendererComponent) -> None:
        self._components[block_type] = component

    def render(
        self,
        blocks: Sequence[Block],
        *,
        options: RenderOptions | None = None,
        **kwargs: Any,
    ) -> str:
        """Render an article's flat block list; children nest under their parent."""
        opts = options or RenderOptions()
        tree = BlockTree.build(blocks)
        extra = {**kwargs, "tree": tree}
        ctx = RenderContext(engine=self, options=opts, tree=tree, extra=extra)
        return ctx.render_sequence(tree.roots)

    def render_block(
        self,
        block: Block,
        *,
        tree: BlockTree,
        options: RenderOptions,
        extra: Mapping[str, Any],
    ) -> str:
        if isinstance(block, UnsupportedBlock):
            component = self._fallback_component
        else:
            component = self._components.get(block.type, self._fallback_component)
        assert component is not None, "Fallback component must be configured"
        return component.render(block, engine=self, options=options, extra={**extra, "tree": tree})


__all__ = ["HtmlRenderer"]
