"""Editing surface: insertion palette, per-type editors and the editing session."""

from .blocks import BlockEditor, EditorHost, editor_for
from .commands import Command, CommandPalette, DEFAULT_COMMANDS
from .session import EditingSession, format_last_saved, open_editing_session

__all__ = [
    "BlockEditor",
    "Command",
    "CommandPalette",
    "DEFAULT_COMMANDS",
    "EditingSession",
    "EditorHost",
    "editor_for",
    "format_last_saved",
    "open_editing_session",
]
