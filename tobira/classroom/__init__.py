"""
Tobira Classroom - Runtime components for reading, quizzes and progress.

This module provides:
- load_catalog: Load the book catalog from YAML
- ProgressStore: Persist user progress
- engine: Experience, levels and unlock rules
- QuizSession: Per-chapter quiz state machine
- Navigator: Book/chapter navigation and quiz bookkeeping
"""

from .loader import (
    load_catalog,
    parse_catalog,
)

from .progress import (
    ProgressStore,
    parse_progress,
)

from .engine import (
    apply_quiz_result,
    level_for_experience,
    experience_for_score,
    experience_to_next_level,
    level_progress_percent,
    level_reward_message,
    books_unlocked_at,
    unlock_level_for_book,
    newly_unlocked_books,
    EXPERIENCE_PER_CORRECT_ANSWER,
    UNLOCK_RULES,
)

from .quiz import (
    QuizSession,
    QuizPhase,
    Scheduler,
    DeferredScheduler,
)

from .navigator import (
    Navigator,
    BookProgress,
    QuizOutcome,
)

__all__ = [
    # Loader
    "load_catalog",
    "parse_catalog",
    # Progress
    "ProgressStore",
    "parse_progress",
    # Engine
    "apply_quiz_result",
    "level_for_experience",
    "experience_for_score",
    "experience_to_next_level",
    "level_progress_percent",
    "level_reward_message",
    "books_unlocked_at",
    "unlock_level_for_book",
    "newly_unlocked_books",
    "EXPERIENCE_PER_CORRECT_ANSWER",
    "UNLOCK_RULES",
    # Quiz
    "QuizSession",
    "QuizPhase",
    "Scheduler",
    "DeferredScheduler",
    # Navigator
    "Navigator",
    "BookProgress",
    "QuizOutcome",
]
