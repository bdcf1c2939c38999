"""Domain models: typed blocks, articles, contacts and imported foreign trees."""

from .article import Article, ArticleMetadata, Contact, ContentSource, DRAFT_TITLE, UserIdentity
from .blocks import (
    Block,
    BlockContent,
    BlockType,
    HEADING_LEVELS,
    UnsupportedBlock,
    UnsupportedContent,
    block_class_for,
    content_model_for,
)
from .factory import (
    BlockValidationError,
    coerce_content,
    create_block,
    normalise_block_type,
    validate_block,
)
from .foreign import Annotations, ForeignBlock, ForeignContent, InlineEquation, RichTextRun

__all__ = [
    "Annotations",
    "Article",
    "ArticleMetadata",
    "Block",
    "BlockContent",
    "BlockType",
    "BlockValidationError",
    "Contact",
    "ContentSource",
    "DRAFT_TITLE",
    "ForeignBlock",
    "ForeignContent",
    "HEADING_LEVELS",
    "InlineEquation",
    "RichTextRun",
    "UnsupportedBlock",
    "UnsupportedContent",
    "UserIdentity",
    "block_class_for",
    "coerce_content",
    "content_model_for",
    "create_block",
    "normalise_block_type",
    "validate_block",
]
