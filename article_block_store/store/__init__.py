"""Article and block store orchestration helpers."""

from .article_store import ArticleStore, ArticleStoreError, ArticleValidationError, AuthorizationError
from .autosave import Autosave
from .block_store import BlockStore, BlockStoreError, LoadError, SaveError, StoreEvent, StoreState
from .factory import create_article_store, create_block_store

__all__ = [
    "ArticleStore",
    "ArticleStoreError",
    "ArticleValidationError",
    "AuthorizationError",
    "Autosave",
    "BlockStore",
    "BlockStoreError",
    "LoadError",
    "SaveError",
    "StoreEvent",
    "StoreState",
    "create_article_store",
    "create_block_store",
]
