"""
Example: list the items under a docs directory, or parse one item and print
its table of contents and content tree.

Usage:
    python3 control_demo.py --docs ./docs
    python3 control_demo.py --docs ./docs --slug guide/intro
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from doc_browser.control import Control, DirProvider


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )


async def run(docs: Path, slug: str | None, show_body: bool) -> int:
    control = Control(DirProvider(docs))

    if not slug:
        items = await control.list_items()
        for ref in items:
            print(f"{'/'.join(ref.slug):40} {ref.location}")
        print(f"{len(items)} items")
        return 0

    item = await control.select_item(slug.split("/"))
    if item is None:
        print(f"Item not found: {slug}")
        return 1

    print(f"{'/'.join(item.slug)} ({item.content.content_type}, {len(item.content.buffer)} bytes)")
    for entry in item.content.content.table_content:
        print(f"  {entry.id:30} {entry.title}")
    if show_body:
        print(json.dumps(item.content.content.body.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--docs", default=Path("./docs"), type=Path, help="Docs directory to browse")
    parser.add_argument("--slug", default=None, help="Slash-separated slug of the item to parse")
    parser.add_argument("--body", action="store_true", help="Also print the content tree as JSON")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args()

    setup_logging(args.log_level.upper())
    raise SystemExit(asyncio.run(run(args.docs, args.slug, args.body)))


if __name__ == "__main__":
    main()
