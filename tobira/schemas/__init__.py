"""
Tobira Schemas - Pydantic models for the reading application.

This module exports all schema classes for:
- Catalog: books, chapters, quiz questions
- Progress: the persisted user progress record
"""

# Catalog schemas
from .catalog import (
    Question,
    Chapter,
    Book,
    Catalog,
)

# Progress schemas
from .progress import (
    UserProgress,
    EXPERIENCE_PER_LEVEL,
    SEED_BOOKS,
    chapter_key,
)

__all__ = [
    # Catalog
    'Question',
    'Chapter',
    'Book',
    'Catalog',
    # Progress
    'UserProgress',
    'EXPERIENCE_PER_LEVEL',
    'SEED_BOOKS',
    'chapter_key',
]
