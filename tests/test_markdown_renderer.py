from __future__ import annotations

from uuid import uuid4

from article_block_store.models.blocks import BlockType, UnsupportedBlock, UnsupportedContent
from article_block_store.models.factory import create_block
from article_block_store.renderers import MarkdownRenderer, RenderOptions


def test_markdown_renderer_renders_article(block_factory):
    bullet = create_block(BlockType.BULLET_LIST, {"text": "a"}, 2)
    blocks = [
        block_factory(BlockType.HEADING1, 0, text="Title"),
        block_factory(BlockType.PARAGRAPH, 1, text="Intro"),
        bullet,
        create_block(BlockType.BULLET_LIST, {"text": "a1"}, 3, parent_id=bullet.id),
        block_factory(BlockType.BULLET_LIST, 4, text="b"),
        block_factory(BlockType.NUMBERED_LIST, 5, text="one"),
        block_factory(BlockType.NUMBERED_LIST, 6, text="two"),
        block_factory(BlockType.QUOTE, 7, text="Q", author="A"),
        block_factory(BlockType.CODE, 8, language="python", code="x = 1"),
        block_factory(BlockType.MATH, 9, latex="y"),
        block_factory(BlockType.DIVIDER, 10),
    ]

    output = MarkdownRenderer().render(blocks)

    assert output == (
        "# Title\n\n"
        "Intro\n\n"
        "- a\n    - a1\n- b\n\n"
        "1. one\n2. two\n\n"
        "> Q\n>\n> -- A\n\n"
        "```python\nx = 1\n```\n\n"
        "$$\ny\n$$\n\n"
        "---"
    )


def test_markdown_renderer_restarts_numbering_per_run(block_factory):
    blocks = [
        block_factory(BlockType.NUMBERED_LIST, 0, text="a"),
        block_factory(BlockType.PARAGRAPH, 1, text="mid"),
        block_factory(BlockType.NUMBERED_LIST, 2, text="b"),
    ]

    assert MarkdownRenderer().render(blocks) == "1. a\n\nmid\n\n1. b"


def test_markdown_renderer_table_and_image(block_factory):
    blocks = [
        block_factory(BlockType.TABLE, 0, headers=["Name", "Qty"], rows=[["Apple", "3"], ["Pear"]]),
        block_factory(BlockType.IMAGE, 1, url="https://example.com/a.png", alt="A", caption="Cap"),
        block_factory(BlockType.IMAGE, 2),
    ]

    output = MarkdownRenderer().render(blocks)

    assert output == (
        "| Name | Qty |\n| --- | --- |\n| Apple | 3 |\n| Pear |  |\n\n"
        '![A](https://example.com/a.png "Cap")'
    )


def test_markdown_renderer_inline_math_callout_and_toggle(block_factory):
    toggle = create_block(BlockType.TOGGLE, {"summary": "More"}, 2)
    blocks = [
        block_factory(BlockType.MATH, 0, latex="x^2", display="inline"),
        block_factory(BlockType.CALLOUT, 1, icon="⚠️", text="Careful"),
        toggle,
        create_block(BlockType.PARAGRAPH, {"text": "hidden"}, 3, parent_id=toggle.id),
    ]

    output = MarkdownRenderer().render(blocks)

    assert output == "$x^2$\n\n> ⚠️ Careful\n\n<details>\n<summary>More</summary>\n\nhidden\n\n</details>"


def test_markdown_renderer_skips_empty_blocks_and_placeholders(block_factory):
    unsupported = UnsupportedBlock(id=uuid4(), type="kanban", position=2, content=UnsupportedContent())
    blocks = [
        block_factory(BlockType.HEADING2, 0),
        block_factory(BlockType.PARAGRAPH, 1, text="Body"),
        unsupported,
    ]
    renderer = MarkdownRenderer()

    assert renderer.render(blocks) == "Body\n\n[unsupported content]"
    assert renderer.render(blocks, options=RenderOptions(placeholders=False)) == "Body"


def test_markdown_renderer_non_recursive_omits_children():
    parent = create_block(BlockType.BULLET_LIST, {"text": "top"}, 0)
    child = create_block(BlockType.BULLET_LIST, {"text": "nested"}, 1, parent_id=parent.id)

    output = MarkdownRenderer().render([parent, child], options=RenderOptions(recursive=False))

    assert output == "- top"
