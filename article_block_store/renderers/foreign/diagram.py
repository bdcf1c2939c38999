"""Diagram delegate for code blocks whose language names a diagram syntax."""

from __future__ import annotations

from html import escape

DIAGRAM_LANGUAGES = frozenset({"diagram", "mermaid"})


def is_diagram(language: str | None) -> bool:
    return (language or "").lower() in DIAGRAM_LANGUAGES


def render_diagram(source: str) -> str:
    """Emit the diagram source for client-side rendering."""
    return f'<div class="mermaid-diagram"><pre class="mermaid">{escape(source)}</pre></div>'


__all__ = ["DIAGRAM_LANGUAGES", "is_diagram", "render_diagram"]
