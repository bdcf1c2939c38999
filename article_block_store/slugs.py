"""Slug and anchor helpers shared by blocks and articles."""

from __future__ import annotations

import re

_ANCHOR_INVALID = re.compile(r"[^a-z0-9]+")
_SLUG_INVALID = re.compile(r"[^\w\s-]")
_SLUG_SEPARATORS = re.compile(r"[\s_-]+")


def generate_anchor(text: str) -> str:
    """Return the URL fragment for a heading, e.g. ``Hello World!`` -> ``hello-world``."""
    return _ANCHOR_INVALID.sub("-", text.lower()).strip("-")


def slugify(text: str) -> str:
    """Return an article slug for ``text``."""
    slug = _SLUG_INVALID.sub("", text.lower().strip())
    slug = _SLUG_SEPARATORS.sub("-", slug)
    return slug.strip("-")


__all__ = ["generate_anchor", "slugify"]
