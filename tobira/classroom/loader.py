"""
Catalog loader - Load the reading catalog from a YAML file.

The catalog is static: a list of books, each with ordered chapters and
comprehension questions. It is validated once on load and never modified.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from tobira.config import DEFAULT_CATALOG_PATH
from tobira.errors import CatalogError
from tobira.schemas import Catalog


logger = logging.getLogger(__name__)


def load_catalog(path: Optional[str | Path] = None) -> Catalog:
    """
    Load and validate a catalog file.

    Args:
        path: Path to a books YAML file (default: bundled tobira/data/books.yaml)

    Returns:
        Validated Catalog

    Raises:
        CatalogError: If the file is missing, not valid YAML, or fails validation
    """
    file_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH

    if not file_path.exists():
        raise CatalogError(f"Catalog not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {file_path}: {e}") from e

    catalog = parse_catalog(data, source=str(file_path))
    chapters = sum(len(book.chapters) for book in catalog.books)
    logger.info(f"Loaded catalog from {file_path}: {len(catalog.books)} books, {chapters} chapters")
    return catalog


def parse_catalog(data, source: str = "<data>") -> Catalog:
    """
    Validate already-decoded catalog data.

    Accepts either {"books": [...]} or a bare list of books.

    Raises:
        CatalogError: If the data does not describe a valid catalog
    """
    if isinstance(data, list):
        data = {"books": data}
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog in {source} must be a mapping with a 'books' list")
    try:
        return Catalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog in {source}: {e}") from e
