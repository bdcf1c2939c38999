from __future__ import annotations

import logging

from article_block_store.models.foreign import ForeignBlock, RichTextRun
from article_block_store.renderers import ForeignRenderer, RenderOptions
from article_block_store.renderers.foreign import EMPTY_MARKUP
from article_block_store.renderers.foreign.components import ForeignComponent
from article_block_store.renderers.foreign.renderer import group_units
from article_block_store.renderers.foreign.rich_text import render_run, run_style


def _run(text: str, **extra) -> dict:
    annotations = extra.pop("annotations", {})
    return {"plain_text": text, "annotations": annotations, **extra}


def _node(node_type: str, node_id: str = "", children=(), **bag) -> ForeignBlock:
    data = {"id": node_id or f"{node_type}-id", "type": node_type, node_type: bag}
    if children:
        data["children"] = list(children)
    return ForeignBlock.model_validate(data)


def _row(*cells: str) -> ForeignBlock:
    return _node("table_row", cells=[[_run(cell)] for cell in cells])


def test_empty_input_renders_no_content_marker():
    assert ForeignRenderer().render([]) == EMPTY_MARKUP


def test_source_shape_is_normalised():
    block = ForeignBlock.model_validate(
        {
            "id": "b1",
            "type": "toggle",
            "has_children": True,
            "toggle": {"rich_text": [_run("Hi")], "children": [{"id": "c1", "type": "paragraph", "paragraph": {}}]},
        }
    )

    assert block.payload == {"rich_text": [_run("Hi")]}
    assert [child.id for child in block.children] == ["c1"]
    assert block.plain_text() == "Hi"


def test_paragraph_and_empty_paragraph():
    output = ForeignRenderer().render([_node("paragraph", rich_text=[_run("Hello")]), _node("paragraph", "p2")])

    assert output == "<p><span>Hello</span></p><p>&nbsp;</p>"


def test_rich_text_priority_code_then_link_then_equation():
    code_link = RichTextRun.model_validate(_run("x", href="https://a.example", annotations={"code": True}))
    link = RichTextRun.model_validate(_run("docs", href="https://a.example", annotations={"bold": True}))
    equation = RichTextRun.model_validate({"plain_text": "E", "type": "equation", "equation": {"expression": "E=mc^2"}})

    assert render_run(code_link) == '<code class="inline-code">x</code>'
    assert render_run(link) == (
        '<a href="https://a.example" target="_blank" rel="noopener noreferrer" '
        'class="notion-link" style="font-weight: 600">docs</a>'
    )
    assert render_run(equation) == '<span class="math math-inline">\\(E=mc^2\\)</span>'


def test_run_styles_are_additive():
    run = RichTextRun.model_validate(
        _run(
            "x",
            annotations={"bold": True, "italic": True, "strikethrough": True, "underline": True, "color": "red"},
        )
    )
    background = RichTextRun.model_validate(_run("y", annotations={"color": "yellow_background"}))

    assert run_style(run) == (
        "font-weight: 600; font-style: italic; text-decoration: line-through underline; color: #E03E3E"
    )
    assert run_style(background).startswith("background-color: rgba(251, 243, 219, 0.6)")
    assert run_style(RichTextRun.model_validate(_run("z", annotations={"color": "default"}))) == ""


def test_table_absorbs_child_rows_and_following_rows():
    table = _node("table", "t1", children=[_row("H1", "H2")], has_column_header=True)
    blocks = [table, _row("a", "b"), _node("paragraph", rich_text=[_run("after")])]

    output = ForeignRenderer().render(blocks)

    assert output == (
        '<div class="table-wrapper"><table><tbody>'
        "<tr><th><span>H1</span></th><th><span>H2</span></th></tr>"
        "<tr><td><span>a</span></td><td><span>b</span></td></tr>"
        "</tbody></table></div>"
        "<p><span>after</span></p>"
    )


def test_table_then_three_rows_then_paragraph_is_one_table_unit():
    table = _node("table", "t1")
    rows = [_row("r1"), _row("r2"), _row("r3")]
    paragraph = _node("paragraph", "p1", rich_text=[_run("after")])
    blocks = [table, *rows, paragraph]

    units = list(group_units(blocks))

    assert [kind for kind, _ in units] == ["table", "block"]
    assert units[0][1] == [table, *rows]
    assert units[1][1] == [paragraph]

    output = ForeignRenderer().render(blocks)

    assert output.count("<table>") == 1
    assert output.count("<tr>") == 3
    assert output.endswith("<p><span>after</span></p>")


def test_stray_rows_are_skipped():
    units = list(group_units([_row("x"), _node("divider")]))

    assert [kind for kind, _ in units] == ["block"]
    assert ForeignRenderer().render([_row("x"), _node("divider")]) == "<hr />"


def test_consecutive_list_items_share_one_list():
    blocks = [
        _node("bulleted_list_item", "a", rich_text=[_run("a")]),
        _node("bulleted_list_item", "b", rich_text=[_run("b")]),
        _node("numbered_list_item", "c", rich_text=[_run("c")]),
    ]

    assert ForeignRenderer().render(blocks) == (
        "<ul><li><span>a</span></li><li><span>b</span></li></ul><ol><li><span>c</span></li></ol>"
    )


def test_children_render_recursively():
    nested = _node("bulleted_list_item", "child", rich_text=[_run("child")])
    toggle = _node("toggle", "t", children=[nested], rich_text=[_run("More")])

    renderer = ForeignRenderer()

    assert renderer.render([toggle]) == (
        '<details class="toggle"><summary><span>More</span></summary>'
        '<div class="toggle-children"><ul><li><span>child</span></li></ul></div></details>'
    )
    assert renderer.render([toggle], options=RenderOptions(recursive=False)) == (
        '<details class="toggle"><summary><span>More</span></summary></details>'
    )


def test_code_diagram_and_language_default():
    blocks = [
        _node("code", "c1", rich_text=[_run("graph TD; A-->B")], language="mermaid"),
        _node("code", "c2", rich_text=[_run("<x>")]),
    ]

    output = ForeignRenderer().render(blocks)

    assert '<pre class="mermaid">graph TD; A--&gt;B</pre>' in output
    assert '<code class="language-text">&lt;x&gt;</code>' in output


def test_todo_callout_and_media():
    blocks = [
        _node("to_do", "t", rich_text=[_run("done")], checked=True),
        _node("callout", "c", rich_text=[_run("Note")], color="blue"),
        _node("image", "i", external={"url": "https://img.example/a.png"}, caption=[_run("Cap")]),
        _node("equation", "e", expression="a^2"),
    ]

    output = ForeignRenderer().render(blocks)

    assert '<div class="todo todo-checked"><input type="checkbox" disabled checked />' in output
    assert 'data-color="gray_background"' in output
    assert '<span class="callout-icon">💡</span>' in output
    assert '<img src="https://img.example/a.png" alt="Cap" loading="lazy" /><figcaption>Cap</figcaption>' in output
    assert '<div class="math math-display">\\[a^2\\]</div>' in output


def test_unknown_type_renders_placeholder_between_siblings(caplog):
    blocks = [
        _node("paragraph", "p1", rich_text=[_run("before")]),
        _node("synced_block", "s1"),
        _node("paragraph", "p2", rich_text=[_run("after")]),
    ]

    with caplog.at_level(logging.WARNING):
        output = ForeignRenderer().render(blocks)

    assert output.startswith("<p><span>before</span></p>")
    assert "Unsupported block type: <code>synced_block</code>" in output
    assert output.endswith("<p><span>after</span></p>")
    assert "synced_block" in caplog.text
    hidden = ForeignRenderer().render(blocks, options=RenderOptions(placeholders=False))
    assert hidden == "<p><span>before</span></p><p><span>after</span></p>"


def test_failing_component_is_contained(caplog):
    class Exploding(ForeignComponent):
        def render_block(self, block, ctx):
            raise KeyError("boom")

    renderer = ForeignRenderer()
    renderer.register("quote", Exploding())
    blocks = [_node("quote", "q1"), _node("divider", "d1")]

    with caplog.at_level(logging.WARNING):
        output = renderer.render(blocks)

    assert "Unsupported block type: <code>quote</code>" in output
    assert output.endswith("<hr />")
    assert "Failed to render foreign block 'quote'" in caplog.text
