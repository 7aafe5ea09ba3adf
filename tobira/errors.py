"""
Error types for Tobira.

Validation errors are raised at the boundary where bad input enters
(progression engine, catalog lookups, persisted state parsing).
"""


class TobiraError(Exception):
    """Base class for all Tobira errors."""


class InvalidScore(TobiraError, ValueError):
    """Quiz score outside [0, question_count]."""

    def __init__(self, score: int, question_count: int):
        self.score = score
        self.question_count = question_count
        super().__init__(
            f"Invalid score {score}: must be between 0 and {question_count}"
        )


class MalformedPersistedState(TobiraError, ValueError):
    """Persisted progress record could not be parsed or failed validation."""


class UnknownChapterReference(TobiraError, LookupError):
    """A book/chapter id pair that does not exist in the catalog."""

    def __init__(self, book_id: str, chapter_id: int | None = None):
        self.book_id = book_id
        self.chapter_id = chapter_id
        if chapter_id is None:
            message = f"Unknown book: {book_id}"
        else:
            message = f"Unknown chapter: {book_id}/{chapter_id}"
        super().__init__(message)


class BookLocked(TobiraError):
    """Tried to open a quiz for a book that has not been unlocked yet."""

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"Book is locked: {book_id}")


class CatalogError(TobiraError, ValueError):
    """Content catalog file is missing or invalid."""
