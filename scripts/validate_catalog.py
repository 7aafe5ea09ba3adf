#!/usr/bin/env python3
"""
validate_catalog.py - Check a books YAML file before shipping it.

Loads the catalog with the same validation the app uses and prints a short
summary per book. Exits with status 1 if the catalog is invalid.

Usage:
  python scripts/validate_catalog.py
  python scripts/validate_catalog.py --catalog path/to/books.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tobira.classroom import load_catalog, unlock_level_for_book
from tobira.config import DEFAULT_CATALOG_PATH
from tobira.errors import CatalogError
from tobira.schemas import SEED_BOOKS

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Validate a Tobira books catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=DEFAULT_CATALOG_PATH,
        help=f"Catalog YAML file (default: {DEFAULT_CATALOG_PATH})",
    )
    args = parser.parse_args()

    try:
        catalog = load_catalog(args.catalog)
    except CatalogError as e:
        logger.error(str(e))
        sys.exit(1)

    for book in catalog.books:
        questions = sum(chapter.question_count for chapter in book.chapters)
        level = unlock_level_for_book(book.id)
        if book.id in SEED_BOOKS:
            access = "seed"
        elif level is not None:
            access = f"level {level}"
        else:
            access = "never unlocked"
        logger.info(
            f"  {book.id}: {len(book.chapters)} chapters, {questions} questions ({access})"
        )
        for chapter in book.chapters:
            if not chapter.questions:
                logger.warning(f"    chapter {chapter.id} has no quiz questions")

    missing = sorted(SEED_BOOKS - set(catalog.book_ids()))
    if missing:
        logger.warning(f"Seed books missing from catalog: {missing}")

    logger.info(f"Catalog OK: {len(catalog.books)} books")


if __name__ == "__main__":
    main()
