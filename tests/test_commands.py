from __future__ import annotations

from article_block_store.editor.commands import DEFAULT_COMMANDS, Command, CommandPalette
from article_block_store.models.blocks import BlockType


def _palette():
    calls: list[tuple[BlockType, int]] = []
    palette = CommandPalette(lambda block_type, position: calls.append((block_type, position)))
    return palette, calls


def test_commands_cover_every_block_type() -> None:
    assert {command.block_type for command in DEFAULT_COMMANDS} == set(BlockType)


def test_filter_matches_keywords_and_labels_case_insensitively() -> None:
    palette, _ = _palette()
    palette.open(0)

    palette.set_query("LaTeX")
    assert [command.block_type for command in palette.filtered] == [BlockType.MATH]

    palette.set_query("heading 2")
    assert [command.block_type for command in palette.filtered] == [BlockType.HEADING2]


def test_arrow_keys_wrap_around() -> None:
    palette, _ = _palette()
    palette.open(0)
    palette.set_query("h")
    count = len(palette.filtered)
    assert count > 1

    palette.handle_key("ArrowUp")
    assert palette.selected_index == count - 1
    palette.handle_key("ArrowDown")
    assert palette.selected_index == 0


def test_set_query_resets_highlight() -> None:
    palette, _ = _palette()
    palette.open(0)
    palette.move_down()
    palette.move_down()

    palette.set_query("code")

    assert palette.selected_index == 0


def test_enter_inserts_highlighted_command_at_open_position() -> None:
    palette, calls = _palette()
    palette.open(3)
    palette.set_query("divider")

    assert palette.handle_key("Enter") is True

    assert calls == [(BlockType.DIVIDER, 3)]
    assert palette.is_open is False


def test_empty_filter_makes_navigation_and_confirm_noops() -> None:
    palette, calls = _palette()
    palette.open(1)
    palette.set_query("no-such-block")

    palette.move_down()
    palette.move_up()
    assert palette.confirm() is None

    assert calls == []
    assert palette.is_open is True
    assert palette.selected is None


def test_escape_closes_without_inserting() -> None:
    palette, calls = _palette()
    palette.open(2)
    palette.set_query("quote")

    assert palette.handle_key("Escape") is True

    assert palette.is_open is False
    assert palette.query == ""
    assert calls == []


def test_closed_palette_ignores_keys() -> None:
    palette, calls = _palette()

    assert palette.handle_key("Enter") is False
    assert palette.handle_key("ArrowDown") is False
    assert calls == []


def test_unhandled_key_is_not_consumed() -> None:
    palette, _ = _palette()
    palette.open(0)

    assert palette.handle_key("a") is False


def test_pointer_select_uses_open_position() -> None:
    palette, calls = _palette()
    palette.open(5)

    palette.select(BlockType.IMAGE)

    assert calls == [(BlockType.IMAGE, 5)]
    assert palette.is_open is False


def test_custom_command_list() -> None:
    calls: list[tuple[BlockType, int]] = []
    commands = [Command(BlockType.PARAGRAPH, "Text", "T", ("text",))]
    palette = CommandPalette(lambda block_type, position: calls.append((block_type, position)), commands)
    palette.open(0)

    palette.confirm()

    assert calls == [(BlockType.PARAGRAPH, 0)]
