"""Register NiceGUI pages by importing submodules."""

from . import admin, articles, contact, editor  # noqa: F401

__all__ = ["admin", "articles", "contact", "editor"]
