"""Import a page from the external document tool as a foreign block tree.

No HTTP client ships here: callers hand in any object implementing
``ForeignSource`` (an SDK client wrapper, a fixture, a cache).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol
from uuid import uuid4

from article_block_store.models.article import Article
from article_block_store.models.foreign import ForeignBlock, ForeignContent, coerce_nodes
from article_block_store.slugs import slugify

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

_PAGE_ID = re.compile(
    r"([a-f0-9]{32}|[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})",
    re.IGNORECASE,
)


class ForeignImportError(ValueError):
    """Raised when a page reference cannot be imported."""


class ForeignSource(Protocol):
    def retrieve_page(self, page_id: str) -> Mapping[str, Any]:
        ...

    def list_children(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int = PAGE_SIZE,
    ) -> Mapping[str, Any]:
        """Return ``{"results": [...], "has_more": bool, "next_cursor": str | None}``."""
        ...


def extract_page_id(url: str) -> str:
    """Return the dashed page id from a page URL.

    Database views (``?v=``) are rejected; the id must be in the last path
    segment, either dashed or as 32 hex characters.
    """
    if "?v=" in url:
        raise ForeignImportError(
            "Database URLs are not supported; open an individual page and copy that URL instead."
        )
    last_part = url.split("?")[0].split("#")[0].rstrip("/").split("/")[-1]
    match = _PAGE_ID.search(last_part)
    if match is None:
        raise ForeignImportError(f"Could not extract a page id from {url!r}.")
    raw = match.group(1).replace("-", "").lower()
    return f"{raw[:8]}-{raw[8:12]}-{raw[12:16]}-{raw[16:20]}-{raw[20:]}"


def extract_metadata(page: Mapping[str, Any]) -> dict[str, Any]:
    """Pull title, cover, excerpt, tags and publish state from a page record."""
    properties = page.get("properties") or {}
    metadata: dict[str, Any] = {
        "title": "",
        "excerpt": "",
        "cover_image": None,
        "tags": [],
        "published": False,
    }

    for key in ("title", "Name"):
        title = _first_plain_text((properties.get(key) or {}).get("title"))
        if title:
            metadata["title"] = title
            break

    cover = page.get("cover") or {}
    for key in ("external", "file"):
        url = (cover.get(key) or {}).get("url")
        if url:
            metadata["cover_image"] = url
            break

    metadata["excerpt"] = _first_plain_text((properties.get("Excerpt") or {}).get("rich_text"))

    tags = (properties.get("Tags") or {}).get("multi_select")
    if tags:
        metadata["tags"] = [tag["name"] for tag in tags if tag.get("name")]

    status = properties.get("Status") or {}
    name = (status.get("select") or {}).get("name") or (status.get("status") or {}).get("name")
    if name:
        metadata["published"] = name.lower() == "published"

    return metadata


def fetch_block_tree(source: ForeignSource, block_id: str) -> list[dict[str, Any]]:
    """Fetch every child of ``block_id`` recursively.

    Pages are read ``PAGE_SIZE`` at a time until ``has_more`` is false. Nodes
    flagged ``has_children`` get their subtree under ``children``; table rows
    therefore end up as children of their table.
    """
    nodes: list[dict[str, Any]] = []
    cursor: str | None = None
    while True:
        response = source.list_children(block_id, start_cursor=cursor, page_size=PAGE_SIZE)
        nodes.extend(dict(node) for node in response.get("results") or ())
        cursor = response.get("next_cursor")
        if not response.get("has_more") or not cursor:
            break

    for node in nodes:
        if node.get("has_children"):
            node["children"] = fetch_block_tree(source, node["id"])
    return nodes


def normalize_blocks(nodes: Iterable[Mapping[str, Any] | ForeignBlock]) -> tuple[ForeignBlock, ...]:
    """Validate raw source nodes into ``ForeignBlock`` trees."""
    return coerce_nodes(list(nodes))


def build_foreign_import(url: str, source: ForeignSource, *, now: datetime | None = None) -> Article:
    """Fetch a page and its block tree and return the article to upsert."""
    page_id = extract_page_id(url)
    logger.info("Fetching page %s", page_id)
    page = dict(source.retrieve_page(page_id))
    metadata = extract_metadata(page)
    blocks = normalize_blocks(fetch_block_tree(source, page_id))
    logger.info("Fetched %d top-level blocks for page %s", len(blocks), page_id)

    now = now or datetime.now(timezone.utc)
    title = metadata["title"]
    return Article(
        id=uuid4(),
        title=title or "Untitled",
        slug=slugify(title or "untitled") or "untitled",
        excerpt=metadata["excerpt"],
        cover_image=metadata["cover_image"],
        published=metadata["published"],
        tags=tuple(metadata["tags"]),
        notion_page_id=page_id,
        notion_content=ForeignContent(page=page, blocks=blocks),
        created_at=now,
        updated_at=now,
        last_synced_at=now,
    )


def _first_plain_text(runs: Any) -> str:
    if not runs:
        return ""
    return runs[0].get("plain_text") or ""


__all__ = [
    "ForeignImportError",
    "ForeignSource",
    "PAGE_SIZE",
    "build_foreign_import",
    "extract_metadata",
    "extract_page_id",
    "fetch_block_tree",
    "normalize_blocks",
]
