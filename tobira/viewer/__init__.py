"""
Tobira Viewer - Rendering components for the reading application.

This module provides:
- Book cards and chapter text rendering
- Quiz display helpers
- Progress panel rendering
"""

from .reading import (
    get_reading_css,
    difficulty_label,
    cover_color,
    render_difficulty_badge,
    render_book_card,
    render_chapter_text,
    format_chapter_button_label,
    DIFFICULTY_LABELS,
)

from .quiz import (
    get_quiz_css,
    OptionState,
    option_state,
    format_option_label,
    render_quiz_header,
    render_quiz_progress,
    render_answer_feedback,
    calculate_quiz_score,
    render_quiz_result,
)

from .progress import (
    get_progress_css,
    render_progress_panel,
)

__all__ = [
    # Reading
    "get_reading_css",
    "difficulty_label",
    "cover_color",
    "render_difficulty_badge",
    "render_book_card",
    "render_chapter_text",
    "format_chapter_button_label",
    "DIFFICULTY_LABELS",
    # Quiz
    "get_quiz_css",
    "OptionState",
    "option_state",
    "format_option_label",
    "render_quiz_header",
    "render_quiz_progress",
    "render_answer_feedback",
    "calculate_quiz_score",
    "render_quiz_result",
    # Progress
    "get_progress_css",
    "render_progress_panel",
]
