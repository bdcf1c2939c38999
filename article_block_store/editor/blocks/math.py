"""Equation block editor."""

from __future__ import annotations

from .base import BlockEditor

COMMON_SYMBOLS: tuple[tuple[str, str], ...] = (
    ("α", r"\alpha"),
    ("β", r"\beta"),
    ("γ", r"\gamma"),
    ("Δ", r"\Delta"),
    ("∑", r"\sum"),
    ("∫", r"\int"),
    ("∞", r"\infty"),
    ("≈", r"\approx"),
    ("≠", r"\neq"),
    ("≤", r"\leq"),
    ("≥", r"\geq"),
    ("√", r"\sqrt{}"),
    ("x²", "x^2"),
    ("xₙ", "x_n"),
    ("∂", r"\partial"),
    ("∇", r"\nabla"),
)


class MathEditor(BlockEditor):
    def insert_symbol(self, latex: str) -> None:
        self.buffer["latex"] = self.buffer.get("latex", "") + latex


__all__ = ["COMMON_SYMBOLS", "MathEditor"]
