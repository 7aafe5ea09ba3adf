"""
Progression engine - Experience, levels, chapter completion and book unlocks.

Pure functions over UserProgress. Nothing here touches storage; callers
commit the returned record through ProgressStore.

Rules:
- Each correct answer is worth EXPERIENCE_PER_CORRECT_ANSWER points
- Level is recomputed from total experience (100 points per level)
- Completing a chapter records its key once, however often it is replayed
- Reaching a level unlocks every book whose threshold is at or below it
"""

import logging
from typing import Optional

from tobira.errors import InvalidScore
from tobira.schemas import UserProgress, EXPERIENCE_PER_LEVEL, chapter_key


logger = logging.getLogger(__name__)

EXPERIENCE_PER_CORRECT_ANSWER = 5

# (minimum level, book id), checked independently against the new level
UNLOCK_RULES: tuple[tuple[int, str], ...] = (
    (2, "kokoro-complete"),
    (3, "hashire-melos-advanced"),
    (4, "kokoro-advanced"),
)

LEVEL_REWARD_MESSAGES = {
    2: "新しい本が解放されました！",
    3: "上級者向けの本が解放されました！",
    4: "全ての本が読めるようになりました！",
}


# -----------------------------------------------------------------------------
# Levels
# -----------------------------------------------------------------------------

def level_for_experience(experience: int) -> int:
    """Level for a total experience value: experience // 100 + 1."""
    if experience < 0:
        raise ValueError(f"Experience must not be negative: {experience}")
    return experience // EXPERIENCE_PER_LEVEL + 1


def experience_to_next_level(progress: UserProgress) -> int:
    """Experience still needed to reach the next level."""
    return progress.level * EXPERIENCE_PER_LEVEL - progress.experience


def level_progress_percent(progress: UserProgress) -> int:
    """Progress through the current level, 0-99."""
    return progress.experience % EXPERIENCE_PER_LEVEL * 100 // EXPERIENCE_PER_LEVEL


def level_reward_message(level: int) -> str:
    """Announcement for levels that unlock books, empty string otherwise."""
    return LEVEL_REWARD_MESSAGES.get(level, "")


# -----------------------------------------------------------------------------
# Unlocks
# -----------------------------------------------------------------------------

def books_unlocked_at(level: int) -> frozenset[str]:
    """Book ids whose unlock threshold is at or below the given level."""
    return frozenset(book_id for min_level, book_id in UNLOCK_RULES if level >= min_level)


def unlock_level_for_book(book_id: str) -> Optional[int]:
    """Level that unlocks a book, or None for seed/unknown books."""
    for min_level, rule_book_id in UNLOCK_RULES:
        if rule_book_id == book_id:
            return min_level
    return None


def newly_unlocked_books(before: UserProgress, after: UserProgress) -> list[str]:
    """Books unlocked between two snapshots, in unlock rule order."""
    gained = after.unlocked_books - before.unlocked_books
    ordered = [book_id for _, book_id in UNLOCK_RULES if book_id in gained]
    return ordered + sorted(gained.difference(ordered))


# -----------------------------------------------------------------------------
# Quiz results
# -----------------------------------------------------------------------------

def experience_for_score(score: int) -> int:
    return score * EXPERIENCE_PER_CORRECT_ANSWER


def apply_quiz_result(
    progress: UserProgress,
    book_id: str,
    chapter_id: int,
    score: int,
    question_count: int,
) -> UserProgress:
    """
    Compute the progress record after finishing a chapter quiz.

    Args:
        progress: Current progress (not modified)
        book_id: Book the chapter belongs to
        chapter_id: Chapter whose quiz was finished
        score: Number of correctly answered questions
        question_count: Number of questions in the quiz

    Returns:
        New UserProgress with experience, level, completion and unlocks updated

    Raises:
        InvalidScore: If score is outside [0, question_count]
    """
    if question_count < 0 or score < 0 or score > question_count:
        raise InvalidScore(score, question_count)

    experience = progress.experience + experience_for_score(score)
    level = level_for_experience(experience)

    completed = progress.completed_chapters | {chapter_key(book_id, chapter_id)}
    unlocked = progress.unlocked_books | books_unlocked_at(level)

    if level > progress.level:
        logger.info(f"Level up: {progress.level} -> {level} ({experience} EXP)")

    return UserProgress(
        level=level,
        experience=experience,
        completed_chapters=completed,
        unlocked_books=unlocked,
    )
