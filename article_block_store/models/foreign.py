"""Models for content imported from an external document tool.

The external tool hands us a hierarchical block tree. It is stored as one
opaque blob on the article (``notion_content``) instead of flat block rows, and
only the foreign renderer reads it. Every node exposes its children through a
single ``children`` edge regardless of node type; the type-specific bag lives
in ``payload``.

Node validation never fails: a node that does not fit becomes an
``unsupported`` block carrying the raw value under ``payload["raw"]``, so one
bad node cannot take its siblings or the whole article down with it.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

UNSUPPORTED_TYPE = "unsupported"


class Annotations(BaseModel):
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"

    model_config = ConfigDict(extra="ignore", frozen=True)


class InlineEquation(BaseModel):
    expression: str = ""

    model_config = ConfigDict(extra="ignore", frozen=True)


class RichTextRun(BaseModel):
    """One styled run of text inside a foreign block."""

    plain_text: str = ""
    annotations: Annotations = Field(default_factory=Annotations)
    href: str | None = None
    type: str = "text"
    equation: InlineEquation | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class ForeignBlock(BaseModel):
    id: str = ""
    type: str
    has_children: bool = False
    payload: dict[str, Any] = Field(default_factory=dict)
    children: tuple[ForeignBlock, ...] = ()

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_source_shape(cls, data: Any) -> Any:
        # Source nodes keep their bag under ``node[type]`` and attach children
        # either inside that bag or on the node itself.
        if not isinstance(data, dict) or "payload" in data:
            return data
        node_type = data.get("type") or UNSUPPORTED_TYPE
        if not isinstance(node_type, str):
            return data
        bag = data.get(node_type)
        payload = dict(bag) if isinstance(bag, dict) else {}
        children = payload.pop("children", None) or data.get("children") or ()
        return {
            "id": data.get("id") or "",
            "type": node_type,
            "has_children": bool(data.get("has_children")) or bool(children),
            "payload": payload,
            "children": children,
        }

    @field_validator("children", mode="before")
    @classmethod
    def _coerce_children(cls, value: Any) -> Any:
        return coerce_nodes(value)

    @classmethod
    def unsupported(cls, raw: Any) -> ForeignBlock:
        """Wrap a node that failed validation."""
        node_id = raw.get("id") if isinstance(raw, dict) else None
        return cls(
            id=node_id if isinstance(node_id, str) else "",
            type=UNSUPPORTED_TYPE,
            payload={"raw": raw},
        )

    def rich_text(self, key: str = "rich_text") -> list[RichTextRun]:
        runs = self.payload.get(key) or []
        return [RichTextRun.model_validate(run) for run in runs]

    def plain_text(self, key: str = "rich_text") -> str:
        return "".join(run.plain_text for run in self.rich_text(key))


def coerce_node(node: Any) -> ForeignBlock:
    if isinstance(node, ForeignBlock):
        return node
    try:
        return ForeignBlock.model_validate(node)
    except ValidationError:
        logger.warning("Replacing malformed foreign node with a placeholder: %r", node)
        return ForeignBlock.unsupported(node)


def coerce_nodes(nodes: Any) -> tuple[ForeignBlock, ...]:
    """Validate a node sequence one node at a time."""
    if nodes is None:
        return ()
    if not isinstance(nodes, (list, tuple)):
        logger.warning("Ignoring foreign children that are not a list: %r", nodes)
        return ()
    return tuple(coerce_node(node) for node in nodes)


class ForeignContent(BaseModel):
    """The stored blob: the source page record plus its block tree."""

    page: dict[str, Any] = Field(default_factory=dict)
    blocks: tuple[ForeignBlock, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_stored(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"blocks": data}
        if not isinstance(data, dict):
            logger.warning("Ignoring stored foreign content of type %s.", type(data).__name__)
            return {}
        return data

    @field_validator("page", mode="before")
    @classmethod
    def _coerce_page(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @field_validator("blocks", mode="before")
    @classmethod
    def _coerce_blocks(cls, value: Any) -> Any:
        return coerce_nodes(value)


__all__ = [
    "Annotations",
    "ForeignBlock",
    "ForeignContent",
    "InlineEquation",
    "RichTextRun",
    "UNSUPPORTED_TYPE",
    "coerce_node",
    "coerce_nodes",
]
