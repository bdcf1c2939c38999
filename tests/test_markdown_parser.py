from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from article_block_store.models.blocks import BlockType
from article_block_store.parser import load_markdown_path, markdown_to_blocks, parse_markdown

SAMPLE_PATH = Path(__file__).resolve().parents[1] / "data" / "welcome.md"


def test_parse_markdown_returns_ast():
    ast = parse_markdown("# Title\n\nHello")

    assert [token["type"] for token in ast if token["type"] != "blank_line"] == ["heading", "paragraph"]


def test_markdown_to_blocks_assigns_dense_positions():
    timestamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    blocks = markdown_to_blocks("# Title\n\nFirst\n\nSecond\n", timestamp=timestamp)

    assert [block.type for block in blocks] == [BlockType.HEADING1, BlockType.PARAGRAPH, BlockType.PARAGRAPH]
    assert [block.position for block in blocks] == [0, 1, 2]
    assert {block.created_at for block in blocks} == {timestamp}
    assert blocks[0].content.anchor == "title"


def test_heading_levels_above_four_collapse():
    blocks = markdown_to_blocks("## Two\n\n#### Four\n\n###### Six\n")

    assert [block.type for block in blocks] == [BlockType.HEADING2, BlockType.HEADING4, BlockType.HEADING4]


def test_inline_markers_survive_in_text():
    blocks = markdown_to_blocks("Some **bold**, *em*, `code` and [link](https://example.com).\n")

    assert blocks[0].content.text == "Some **bold**, *em*, `code` and [link](https://example.com)."


def test_nested_list_items_point_at_parent():
    source = "- parent\n    - child\n- sibling\n\n1. first\n2. second\n"

    blocks = markdown_to_blocks(source)

    assert [(block.type, block.content.text) for block in blocks] == [
        (BlockType.BULLET_LIST, "parent"),
        (BlockType.BULLET_LIST, "child"),
        (BlockType.BULLET_LIST, "sibling"),
        (BlockType.NUMBERED_LIST, "first"),
        (BlockType.NUMBERED_LIST, "second"),
    ]
    parent, child, sibling = blocks[:3]
    assert child.parent_id == parent.id
    assert parent.parent_id is None and sibling.parent_id is None


def test_code_math_and_divider():
    source = "```python title\nprint(1)\n```\n\n$$\nx^2\n$$\n\n---\n"

    code, math, divider = markdown_to_blocks(source)

    assert code.type is BlockType.CODE
    assert (code.content.language, code.content.code) == ("python", "print(1)")
    assert math.type is BlockType.MATH
    assert (math.content.latex, math.content.display) == ("x^2", "block")
    assert divider.type is BlockType.DIVIDER


def test_code_without_language():
    (code,) = markdown_to_blocks("```\nplain\n```\n")

    assert code.content.language == ""
    assert code.content.code == "plain"


def test_standalone_image_and_inline_math_paragraphs():
    source = '![Alt text](https://example.com/a.png "A caption")\n\n$e=mc^2$\n'

    image, math = markdown_to_blocks(source)

    assert image.type is BlockType.IMAGE
    assert image.content.url == "https://example.com/a.png"
    assert image.content.alt == "Alt text"
    assert image.content.caption == "A caption"
    assert math.type is BlockType.MATH
    assert (math.content.latex, math.content.display) == ("e=mc^2", "inline")


def test_image_alt_is_the_bracket_text_only():
    styled, bare = markdown_to_blocks("![A *styled* alt](a.png)\n\n![](b.png)\n")

    assert styled.content.alt == "A *styled* alt"
    assert styled.content.url == "a.png"
    assert bare.content.alt == ""
    assert bare.content.url == "b.png"


def test_quote_extracts_trailing_author():
    (quote,) = markdown_to_blocks("> First line\n>\n> Second para\n>\n> -- Ada Lovelace\n")

    assert quote.type is BlockType.QUOTE
    assert quote.content.text == "First line\n\nSecond para"
    assert quote.content.author == "Ada Lovelace"


def test_table_headers_and_rows():
    source = "| A | B |\n| --- | --- |\n| 1 | 2 |\n| 3 | 4 |\n"

    (table,) = markdown_to_blocks(source)

    assert table.type is BlockType.TABLE
    assert table.content.headers == ["A", "B"]
    assert table.content.rows == [["1", "2"], ["3", "4"]]


def test_empty_source_yields_no_blocks():
    assert markdown_to_blocks("") == []
    assert markdown_to_blocks("\n\n   \n") == []


def test_load_markdown_path_reads_sample_article():
    blocks = load_markdown_path(SAMPLE_PATH)

    types = [block.type for block in blocks]
    assert types[0] is BlockType.HEADING1
    for expected in (
        BlockType.HEADING2,
        BlockType.BULLET_LIST,
        BlockType.NUMBERED_LIST,
        BlockType.QUOTE,
        BlockType.CODE,
        BlockType.MATH,
        BlockType.TABLE,
        BlockType.DIVIDER,
    ):
        assert expected in types
    assert [block.position for block in blocks] == list(range(len(blocks)))
    quote = next(block for block in blocks if block.type is BlockType.QUOTE)
    assert quote.content.author == "Edsger W. Dijkstra"
