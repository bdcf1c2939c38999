"""Keyboard-driven palette for inserting a new block at a position."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from article_block_store.models.blocks import BlockType

OnSelect = Callable[[BlockType, int], object]


@dataclass(frozen=True, slots=True)
class Command:
    block_type: BlockType
    label: str
    icon: str
    keywords: tuple[str, ...]

    def matches(self, query: str) -> bool:
        needle = query.lower()
        return any(needle in keyword for keyword in self.keywords) or needle in self.label.lower()


DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command(BlockType.PARAGRAPH, "Text", "📝", ("text", "paragraph", "p")),
    Command(BlockType.HEADING1, "Heading 1", "H1", ("h1", "heading1", "title")),
    Command(BlockType.HEADING2, "Heading 2", "H2", ("h2", "heading2")),
    Command(BlockType.HEADING3, "Heading 3", "H3", ("h3", "heading3")),
    Command(BlockType.HEADING4, "Heading 4", "H4", ("h4", "heading4")),
    Command(BlockType.BULLET_LIST, "Bulleted List", "•", ("bullet", "list", "ul", "unordered")),
    Command(BlockType.NUMBERED_LIST, "Numbered List", "1.", ("numbered", "list", "ol", "ordered")),
    Command(BlockType.TOGGLE, "Toggle", "▸", ("toggle", "collapse", "details")),
    Command(BlockType.QUOTE, "Quote", '"', ("quote", "blockquote")),
    Command(BlockType.CALLOUT, "Callout", "💡", ("callout", "note", "info")),
    Command(BlockType.DIVIDER, "Divider", "—", ("divider", "separator", "line")),
    Command(BlockType.CODE, "Code Block", "💻", ("code", "snippet", "programming")),
    Command(BlockType.MATH, "Equation", "∑", ("math", "latex", "formula", "equation")),
    Command(BlockType.IMAGE, "Image", "🖼", ("image", "picture", "photo", "img")),
    Command(BlockType.TABLE, "Table", "▦", ("table", "grid")),
    Command(BlockType.MINDMAP, "Mind Map", "🧠", ("mindmap", "mind", "map", "diagram")),
)

_missing = set(BlockType) - {command.block_type for command in DEFAULT_COMMANDS}
if _missing:  # pragma: no cover - guards new enum members
    raise RuntimeError(f"Block types without an insert command: {sorted(t.value for t in _missing)}")


class CommandPalette:
    """Filterable command list with a highlighted entry.

    ``on_select(block_type, position)`` is called when the highlighted command
    is confirmed; the palette then closes itself.
    """

    def __init__(self, on_select: OnSelect, commands: Sequence[Command] = DEFAULT_COMMANDS):
        self._on_select = on_select
        self._commands = tuple(commands)
        self.is_open = False
        self.position = 0
        self.query = ""
        self.selected_index = 0

    @property
    def filtered(self) -> list[Command]:
        return [command for command in self._commands if command.matches(self.query)]

    @property
    def selected(self) -> Command | None:
        filtered = self.filtered
        if not filtered:
            return None
        return filtered[self.selected_index % len(filtered)]

    def open(self, position: int) -> None:
        self.is_open = True
        self.position = position
        self.query = ""
        self.selected_index = 0

    def set_query(self, query: str) -> None:
        self.query = query
        self.selected_index = 0

    def move_down(self) -> None:
        count = len(self.filtered)
        if count:
            self.selected_index = (self.selected_index + 1) % count

    def move_up(self) -> None:
        count = len(self.filtered)
        if count:
            self.selected_index = (self.selected_index - 1 + count) % count

    def confirm(self) -> BlockType | None:
        """Invoke ``on_select`` for the highlighted command; no-op on an empty list."""
        command = self.selected
        if not self.is_open or command is None:
            return None
        position = self.position
        self.close()
        self._on_select(command.block_type, position)
        return command.block_type

    def select(self, block_type: BlockType) -> None:
        """Pointer selection of a specific command."""
        if not self.is_open:
            return
        position = self.position
        self.close()
        self._on_select(block_type, position)

    def close(self) -> None:
        self.is_open = False
        self.query = ""
        self.selected_index = 0

    def handle_key(self, key: str) -> bool:
        """Route a key press; returns True when the palette consumed it."""
        if not self.is_open:
            return False
        if key == "ArrowDown":
            self.move_down()
        elif key == "ArrowUp":
            self.move_up()
        elif key == "Enter":
            self.confirm()
        elif key == "Escape":
            self.close()
        else:
            return False
        return True


__all__ = ["Command", "CommandPalette", "DEFAULT_COMMANDS", "OnSelect"]
