from __future__ import annotations

from uuid import uuid4

from article_block_store.models.blocks import BlockType, UnsupportedBlock, UnsupportedContent
from article_block_store.models.factory import create_block
from article_block_store.renderers import HtmlRenderer, RenderOptions
from article_block_store.renderers.html.components import BaseComponent


def test_html_renderer_escapes_text_and_anchors_headings(block_factory):
    heading = block_factory(BlockType.HEADING2, 0, text="Hello World")
    paragraph = block_factory(BlockType.PARAGRAPH, 1, text="a <b> & c\nnext")

    output = HtmlRenderer().render([paragraph, heading])

    assert output == (
        '<h2 id="hello-world">Hello World</h2>'
        "<p>a &lt;b&gt; &amp; c<br />next</p>"
    )


def test_html_renderer_groups_consecutive_list_items(block_factory):
    blocks = [
        block_factory(BlockType.BULLET_LIST, 0, text="a"),
        block_factory(BlockType.BULLET_LIST, 1, text="b"),
        block_factory(BlockType.NUMBERED_LIST, 2, text="c"),
        block_factory(BlockType.PARAGRAPH, 3, text="end"),
        block_factory(BlockType.BULLET_LIST, 4, text="d"),
    ]

    output = HtmlRenderer().render(blocks)

    assert output == (
        "<ul><li>a</li><li>b</li></ul>"
        "<ol><li>c</li></ol>"
        "<p>end</p>"
        "<ul><li>d</li></ul>"
    )


def test_html_renderer_nests_children_under_parent():
    item = create_block(BlockType.BULLET_LIST, {"text": "parent"}, 0)
    child = create_block(BlockType.NUMBERED_LIST, {"text": "child"}, 1, parent_id=item.id)

    renderer = HtmlRenderer()

    assert renderer.render([item, child]) == "<ul><li>parent<ol><li>child</li></ol></li></ul>"
    assert renderer.render([item, child], options=RenderOptions(recursive=False)) == "<ul><li>parent</li></ul>"


def test_html_renderer_treats_unknown_parent_as_root_and_skips_cycles():
    orphan = create_block(BlockType.PARAGRAPH, {"text": "orphan"}, 0, parent_id=uuid4())
    first_id, second_id = uuid4(), uuid4()
    first = create_block(BlockType.PARAGRAPH, {"text": "x"}, 1, parent_id=second_id, block_id=first_id)
    second = create_block(BlockType.PARAGRAPH, {"text": "y"}, 2, parent_id=first_id, block_id=second_id)

    assert HtmlRenderer().render([orphan, first, second]) == "<p>orphan</p>"


def test_html_renderer_code_block_attributes(block_factory):
    code = block_factory(
        BlockType.CODE,
        0,
        language="python",
        code="print('<hi>')",
        filename="demo.py",
        highlight_lines=[1, 3],
        show_line_numbers=False,
    )

    output = HtmlRenderer().render([code])

    assert 'data-language="python"' in output
    assert 'data-line-numbers="false"' in output
    assert 'data-filename="demo.py"' in output
    assert 'data-highlight-lines="1,3"' in output
    assert "<figcaption>demo.py</figcaption>" in output
    assert "<code class=\"language-python\">print(&#x27;&lt;hi&gt;&#x27;)</code>" in output


def test_html_renderer_math_image_quote_and_toggle(block_factory):
    blocks = [
        block_factory(BlockType.MATH, 0, latex="E=mc^2", description="Energy"),
        block_factory(BlockType.MATH, 1, latex="x", display="inline"),
        block_factory(BlockType.IMAGE, 2, url="https://example.com/a.png", alt="A", caption="Cap", width=320),
        block_factory(BlockType.QUOTE, 3, text="Stay hungry", author="Someone"),
        block_factory(BlockType.TOGGLE, 4, summary="More", is_open=True),
        block_factory(BlockType.DIVIDER, 5),
    ]

    output = HtmlRenderer().render(blocks)

    assert '<div class="math math-display">\\[E=mc^2\\]</div><p class="math-description">Energy</p>' in output
    assert '<span class="math math-inline">\\(x\\)</span>' in output
    assert '<img src="https://example.com/a.png" alt="A" width="320" />' in output
    assert "<figcaption>Cap</figcaption>" in output
    assert '<blockquote id="stay-hungry"><p>Stay hungry</p><footer>Someone</footer></blockquote>' in output
    assert '<details class="toggle" open><summary>More</summary></details>' in output
    assert output.endswith("<hr />")


def test_html_renderer_table_with_headers(block_factory):
    table = block_factory(BlockType.TABLE, 0, headers=["Name", "Qty"], rows=[["Apple", "3"]])

    output = HtmlRenderer().render([table])

    assert output == (
        "<table><thead><tr><th>Name</th><th>Qty</th></tr></thead>"
        "<tbody><tr><td>Apple</td><td>3</td></tr></tbody></table>"
    )


def test_html_renderer_unsupported_placeholder_toggle():
    block = UnsupportedBlock(id=uuid4(), type="kanban", position=0, content=UnsupportedContent())
    renderer = HtmlRenderer()

    assert "Unsupported block type: kanban" in renderer.render([block])
    assert renderer.render([block], options=RenderOptions(placeholders=False)) == ""


def test_html_renderer_custom_component(block_factory):
    class ShoutComponent(BaseComponent):
        def render_block(self, block, ctx):
            return f"<p>{block.content.text.upper()}</p>"

    renderer = HtmlRenderer()
    renderer.register(BlockType.PARAGRAPH, ShoutComponent())

    assert renderer.render([block_factory(BlockType.PARAGRAPH, 0, text="hey")]) == "<p>HEY</p>"
    assert HtmlRenderer().render([block_factory(BlockType.PARAGRAPH, 0, text="hey")]) == "<p>hey</p>"
