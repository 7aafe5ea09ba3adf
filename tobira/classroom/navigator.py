"""
Navigator - Book access, chapter navigation and quiz bookkeeping.

Combines the Catalog (content) with the ProgressStore (user state). This is
the application context handed to the UI: it starts quiz sessions and
records their results through the progression engine.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from tobira.config import DEFAULT_REVEAL_SECONDS
from tobira.errors import BookLocked
from tobira.schemas import Book, Catalog, UserProgress

from . import engine
from .progress import ProgressStore
from .quiz import QuizSession, Scheduler


logger = logging.getLogger(__name__)


@dataclass
class BookProgress:
    """Chapter completion for one book."""
    book_id: str
    completed: int
    total: int

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)

    @property
    def is_completed(self) -> bool:
        return self.total > 0 and self.completed == self.total


@dataclass
class QuizOutcome:
    """What happened when a quiz result was recorded."""
    book_id: str
    chapter_id: int
    score: int
    question_count: int
    experience_gained: int
    previous: UserProgress
    progress: UserProgress
    saved: bool
    unlocked_books: list[str] = field(default_factory=list)

    @property
    def leveled_up(self) -> bool:
        return self.progress.level > self.previous.level


class Navigator:
    """
    Navigate books and chapters, and apply quiz results.

    All progress changes go through record_quiz_result, which validates the
    chapter reference, runs the progression engine and commits the result.
    """

    def __init__(self, catalog: Catalog, store: ProgressStore):
        """
        Initialize navigator.

        Args:
            catalog: Catalog with all books
            store: ProgressStore owning the user's progress
        """
        self.catalog = catalog
        self.store = store

    @property
    def progress(self) -> UserProgress:
        return self.store.current

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------

    def is_book_unlocked(self, book_id: str) -> bool:
        return self.progress.is_book_unlocked(book_id)

    def get_unlocked_books(self) -> list[Book]:
        """Unlocked books in catalog order."""
        return [book for book in self.catalog.books if self.is_book_unlocked(book.id)]

    def get_locked_books(self) -> list[Book]:
        return [book for book in self.catalog.books if not self.is_book_unlocked(book.id)]

    def get_book_progress(self, book_id: str) -> BookProgress:
        """
        Count completed chapters of a book.

        Raises:
            UnknownChapterReference: If the book is not in the catalog
        """
        book = self.catalog.require_book(book_id)
        progress = self.progress
        completed = sum(
            1 for chapter in book.chapters
            if progress.is_chapter_completed(book.id, chapter.id)
        )
        return BookProgress(book_id=book.id, completed=completed, total=len(book.chapters))

    # -------------------------------------------------------------------------
    # Chapters
    # -------------------------------------------------------------------------

    def is_chapter_completed(self, book_id: str, chapter_id: int) -> bool:
        return self.progress.is_chapter_completed(book_id, chapter_id)

    def _chapter_index(self, book_id: str, chapter_id: int) -> tuple[list[int], int]:
        self.catalog.require_chapter(book_id, chapter_id)
        ids = self.catalog.require_book(book_id).chapter_ids()
        return ids, ids.index(chapter_id)

    def get_next_chapter_id(self, book_id: str, chapter_id: int) -> Optional[int]:
        ids, idx = self._chapter_index(book_id, chapter_id)
        return ids[idx + 1] if idx + 1 < len(ids) else None

    def get_previous_chapter_id(self, book_id: str, chapter_id: int) -> Optional[int]:
        ids, idx = self._chapter_index(book_id, chapter_id)
        return ids[idx - 1] if idx > 0 else None

    def get_chapter_position(self, book_id: str, chapter_id: int) -> tuple[int, int]:
        """Chapter position as (current, total), 1-based."""
        ids, idx = self._chapter_index(book_id, chapter_id)
        return idx + 1, len(ids)

    # -------------------------------------------------------------------------
    # Quizzes
    # -------------------------------------------------------------------------

    def start_quiz(
        self,
        book_id: str,
        chapter_id: int,
        scheduler: Optional[Scheduler] = None,
        reveal_seconds: float = DEFAULT_REVEAL_SECONDS,
        on_outcome: Optional[Callable[[QuizOutcome], None]] = None,
    ) -> QuizSession:
        """
        Create a new quiz session for a chapter.

        The session records its result here when it completes; on_outcome,
        if given, receives the resulting QuizOutcome.

        Raises:
            UnknownChapterReference: If the chapter is not in the catalog
            BookLocked: If the book has not been unlocked
            ValueError: If the chapter has no questions
        """
        chapter = self.catalog.require_chapter(book_id, chapter_id)
        if not self.is_book_unlocked(book_id):
            raise BookLocked(book_id)

        def complete(score: int):
            outcome = self.record_quiz_result(book_id, chapter_id, score)
            if on_outcome is not None:
                on_outcome(outcome)

        return QuizSession(
            chapter,
            on_complete=complete,
            scheduler=scheduler,
            reveal_seconds=reveal_seconds,
        )

    def record_quiz_result(self, book_id: str, chapter_id: int, score: int) -> QuizOutcome:
        """
        Apply a finished quiz to the user's progress and save it.

        Raises:
            UnknownChapterReference: If the chapter is not in the catalog
            InvalidScore: If score is outside [0, question count]
        """
        chapter = self.catalog.require_chapter(book_id, chapter_id)
        question_count = chapter.question_count
        previous = None

        def apply(current: UserProgress) -> UserProgress:
            nonlocal previous
            previous = current
            return engine.apply_quiz_result(current, book_id, chapter_id, score, question_count)

        progress, saved = self.store.update(apply)
        unlocked = engine.newly_unlocked_books(previous, progress)

        logger.info(
            f"Recorded quiz {book_id}/{chapter_id}: {score}/{question_count} correct, "
            f"+{engine.experience_for_score(score)} EXP"
        )
        for book_id_unlocked in unlocked:
            logger.info(f"Unlocked book: {book_id_unlocked}")

        return QuizOutcome(
            book_id=book_id,
            chapter_id=chapter_id,
            score=score,
            question_count=question_count,
            experience_gained=engine.experience_for_score(score),
            previous=previous,
            progress=progress,
            saved=saved,
            unlocked_books=unlocked,
        )

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def get_progress_summary(self) -> dict:
        """Get progress summary for display."""
        progress = self.progress
        return {
            "level": progress.level,
            "experience": progress.experience,
            "experience_to_next_level": engine.experience_to_next_level(progress),
            "level_progress_percent": engine.level_progress_percent(progress),
            "completed_chapters": len(progress.completed_chapters),
            "unlocked_books": len(progress.unlocked_books),
            "total_books": len(self.catalog.books),
            "reward_message": engine.level_reward_message(progress.level),
        }
