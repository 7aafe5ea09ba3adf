"""
Content catalog schemas for Tobira.

Defines Pydantic models for the static reading content:
- Questions (multiple choice, answer must be one of the options)
- Chapters with original and simplified text
- Books with difficulty and chapter list
- Catalog with lookup helpers
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional

from tobira.errors import UnknownChapterReference


# -----------------------------------------------------------------------------
# Questions and chapters
# -----------------------------------------------------------------------------

class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=2)
    answer: str

    @model_validator(mode="after")
    def answer_in_options(self):
        if self.answer not in self.options:
            raise ValueError(f"Answer {self.answer!r} is not one of the options")
        return self

    def is_correct(self, option: str) -> bool:
        return option == self.answer


class Chapter(BaseModel):
    """
    A chapter of a book.

    original_text is the author's text, simple_text the yasashii nihongo
    rewrite shown by default.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0)
    title: str
    original_text: str
    simple_text: str
    questions: list[Question] = []

    @property
    def question_count(self) -> int:
        return len(self.questions)


# -----------------------------------------------------------------------------
# Books
# -----------------------------------------------------------------------------

class Book(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r'^[a-z0-9]+(-[a-z0-9]+)*$')
    title: str
    author: str
    description: str = ""
    difficulty: int = Field(..., ge=1, le=4)
    cover_color: str = "bg-blue-500"   # presentation token, opaque to the core
    chapters: list[Chapter] = Field(..., min_length=1)

    @field_validator('chapters')
    @classmethod
    def chapter_ids_unique(cls, v):
        ids = [chapter.id for chapter in v]
        duplicates = sorted({cid for cid in ids if ids.count(cid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate chapter ids: {duplicates}")
        return v

    def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                return chapter
        return None

    def chapter_ids(self) -> list[int]:
        return [chapter.id for chapter in self.chapters]


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------

class Catalog(BaseModel):
    """Ordered, read-only collection of books."""
    model_config = ConfigDict(frozen=True)

    books: list[Book] = Field(..., min_length=1)

    @field_validator('books')
    @classmethod
    def book_ids_unique(cls, v):
        ids = [book.id for book in v]
        duplicates = sorted({bid for bid in ids if ids.count(bid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate book ids: {duplicates}")
        return v

    def get_book(self, book_id: str) -> Optional[Book]:
        for book in self.books:
            if book.id == book_id:
                return book
        return None

    def get_chapter(self, book_id: str, chapter_id: int) -> Optional[Chapter]:
        book = self.get_book(book_id)
        if book is None:
            return None
        return book.get_chapter(chapter_id)

    def has_chapter(self, book_id: str, chapter_id: int) -> bool:
        return self.get_chapter(book_id, chapter_id) is not None

    def require_book(self, book_id: str) -> Book:
        """Get a book or raise UnknownChapterReference."""
        book = self.get_book(book_id)
        if book is None:
            raise UnknownChapterReference(book_id)
        return book

    def require_chapter(self, book_id: str, chapter_id: int) -> Chapter:
        """Get a chapter or raise UnknownChapterReference."""
        chapter = self.get_chapter(book_id, chapter_id)
        if chapter is None:
            raise UnknownChapterReference(book_id, chapter_id)
        return chapter

    def book_ids(self) -> list[str]:
        return [book.id for book in self.books]
