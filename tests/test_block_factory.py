from __future__ import annotations

from uuid import uuid4

import pytest

from article_block_store import models
from article_block_store.models import blocks as block_models
from article_block_store.models.blocks import (
    BLOCK_CLASS_MAP,
    BlockType,
    CodeBlock,
    HeadingBlock,
    UnsupportedBlock,
    UnsupportedContent,
)
from article_block_store.models.factory import BlockValidationError, coerce_content, create_block, validate_block
from article_block_store.slugs import generate_anchor, slugify


def test_every_block_type_has_a_block_class() -> None:
    assert set(BLOCK_CLASS_MAP) == set(BlockType)


@pytest.mark.parametrize("block_type", list(BlockType))
def test_create_block_fills_defaults_for_every_type(block_type: BlockType) -> None:
    block = create_block(block_type, position=3)

    assert block.type is block_type
    assert block.position == 3
    assert block.parent_id is None
    assert block.created_at is not None and block.created_at == block.updated_at
    assert validate_block(block)


def test_create_block_heading_derives_anchor() -> None:
    block = create_block(BlockType.HEADING2, {"text": "Hello World!"})

    assert isinstance(block, HeadingBlock)
    assert block.level == 2
    assert block.content.anchor == "hello-world"


def test_create_block_keeps_explicit_anchor() -> None:
    block = create_block(BlockType.HEADING1, {"text": "Intro", "anchor": "start"})

    assert block.content.anchor == "start"


def test_create_block_quote_derives_anchor() -> None:
    block = create_block("quote", {"text": "Less is more"})

    assert block.content.anchor == "less-is-more"
    assert block.content.author == ""


def test_create_block_treats_none_as_absent() -> None:
    block = create_block(BlockType.CODE, {"language": None, "code": "print(1)"})

    assert isinstance(block, CodeBlock)
    assert block.content.language == "javascript"
    assert block.content.code == "print(1)"
    assert block.content.show_line_numbers is True


def test_create_block_accepts_storage_aliases() -> None:
    block = create_block(BlockType.TOGGLE, {"isOpen": True, "summary": "More"})

    assert block.content.is_open is True
    assert block.content.model_dump(by_alias=True) == {"summary": "More", "isOpen": True}


def test_create_block_rejects_unknown_type() -> None:
    with pytest.raises(BlockValidationError):
        create_block("kanban")


def test_create_block_rejects_foreign_content_keys() -> None:
    with pytest.raises(BlockValidationError):
        create_block(BlockType.PARAGRAPH, {"latex": "x^2"})


def test_create_block_rejects_negative_position() -> None:
    with pytest.raises(BlockValidationError):
        create_block(BlockType.PARAGRAPH, position=-1)


def test_coerce_content_validates_against_type() -> None:
    content = coerce_content(BlockType.MATH, {"latex": "a^2", "display": "inline"})
    assert content.display == "inline"

    with pytest.raises(BlockValidationError):
        coerce_content(BlockType.MATH, {"display": "sideways"})


def test_validate_block_checks_structure_only() -> None:
    assert validate_block({"id": str(uuid4()), "type": "paragraph", "content": {"whatever": 1}})
    assert not validate_block({"id": str(uuid4()), "type": "kanban", "content": {}})
    assert not validate_block({"id": str(uuid4()), "type": "paragraph"})
    assert not validate_block({"type": "paragraph", "content": {}})


def test_validate_block_rejects_unsupported_blocks() -> None:
    block = UnsupportedBlock(id=uuid4(), type="kanban", content=UnsupportedContent())

    assert not validate_block(block)


def test_generate_anchor_and_slugify() -> None:
    assert generate_anchor("Hello World!") == "hello-world"
    assert generate_anchor("  --Already--Hyphenated--  ") == "already-hyphenated"
    assert slugify("  My First_Post: Part 2 ") == "my-first-post-part-2"
    assert slugify("Ça va?") == "ça-va"


@pytest.mark.parametrize("module", [models, block_models])
def test_public_exports_resolve(module) -> None:
    missing = [name for name in module.__all__ if not hasattr(module, name)]

    assert missing == []
