"""Renderer interfaces and shared helpers."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol
from uuid import UUID

from article_block_store.models.blocks import Block, BlockType

LIST_TYPES = frozenset({BlockType.BULLET_LIST, BlockType.NUMBERED_LIST})


@dataclass(slots=True)
class RenderOptions:
    recursive: bool = True
    placeholders: bool = True


class Renderer(Protocol):
    def render(
        self,
        blocks: Sequence[Block],
        *,
        options: RenderOptions | None = None,
        **kwargs: Any,
    ) -> str:
        ...


class RendererComponent(Protocol):
    def render(
        self,
        block: Block,
        *,
        engine: Any,
        options: RenderOptions,
        extra: Mapping[str, Any],
    ) -> str:
        ...


@dataclass(slots=True)
class BlockTree:
    """Parent/child view over an article's flat block list.

    Blocks whose ``parent_id`` names another block of the same article render
    inside that parent; every other block is a root. Siblings keep position
    order.
    """

    roots: list[Block] = field(default_factory=list)
    _children: dict[UUID, list[Block]] = field(default_factory=dict)

    @classmethod
    def build(cls, blocks: Sequence[Block]) -> BlockTree:
        ordered = sorted(blocks, key=lambda block: block.position)
        known = {block.id for block in ordered}
        roots: list[Block] = []
        children: dict[UUID, list[Block]] = defaultdict(list)
        for block in ordered:
            if block.parent_id is not None and block.parent_id in known and block.parent_id != block.id:
                children[block.parent_id].append(block)
            else:
                roots.append(block)
        return cls(roots=roots, _children=dict(children))

    def children(self, block: Block) -> list[Block]:
        return list(self._children.get(block.id, ()))


def list_runs(blocks: Sequence[Block]) -> Iterator[tuple[BlockType | None, list[Block]]]:
    """Yield ``(list_type, run)`` for consecutive list items of one kind.

    Non-list blocks come out alone with ``list_type`` ``None``.
    """
    run: list[Block] = []
    run_type: BlockType | None = None
    for block in blocks:
        block_type = block.type if isinstance(block.type, BlockType) and block.type in LIST_TYPES else None
        if run and block_type is not None and block_type == run_type:
            run.append(block)
            continue
        if run:
            yield run_type, run
        run, run_type = [block], block_type
    if run:
        yield run_type, run


__all__ = ["BlockTree", "LIST_TYPES", "RenderOptions", "Renderer", "RendererComponent", "list_runs"]
