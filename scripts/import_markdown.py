"""Import a Markdown file as a draft article and print its blocks."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from article_block_store import bootstrap
from article_block_store.config import Settings
from article_block_store.models.article import UserIdentity
from article_block_store.renderers import HtmlRenderer

logger = logging.getLogger("import_markdown")


def main() -> None:
    parser = argparse.ArgumentParser(description="Import Markdown into the article block store.")
    parser.add_argument("path", type=Path, help="Path to a Markdown document.")
    parser.add_argument("--title", help="Article title (defaults to the first '# ' heading).")
    parser.add_argument("--author", default="cli", help="User id recorded as the article author.")
    parser.add_argument("--database-url", help="SQLAlchemy URL; overrides DATABASE_URL.")
    parser.add_argument("--html", action="store_true", help="Print the rendered HTML instead of the block list.")
    args = parser.parse_args()

    settings = Settings.from_env()
    if args.database_url:
        settings = replace(settings, database_url=args.database_url)
    context = bootstrap(settings)

    source = args.path.read_text(encoding="utf-8")
    article = context.articles.import_markdown(UserIdentity(user_id=args.author), source, title=args.title)
    blocks = context.articles.list_article_blocks(article.id)
    logger.info("Persisted article %s (%s) with %d blocks", article.id, article.slug, len(blocks))

    if args.html:
        print(HtmlRenderer().render(blocks))
        return
    for block in blocks:
        prefix = "    " if block.parent_id is not None else ""
        label = getattr(block.content, "text", "") or getattr(block.content, "code", "")
        first_line = label.splitlines()[0][:60] if label else ""
        print(f"{prefix}{block.position:>3} {block.type_name}: {first_line}")


if __name__ == "__main__":
    main()
