"""
Reading renderer - Book cards and chapter text display.

Provides:
- Book card rendering with difficulty badge and chapter progress
- Chapter text in simplified or original form
- Chapter list with completion marks
"""

import html

from tobira.schemas import Book, Chapter


DIFFICULTY_LABELS = {
    1: "やさしい",
    2: "ふつう",
    3: "むずかしい",
    4: "とてもむずかしい",
}

DIFFICULTY_COLORS = {
    1: ("#E8F5E9", "#2E7D32"),
    2: ("#FFFDE7", "#F9A825"),
    3: ("#FFF3E0", "#EF6C00"),
    4: ("#FFEBEE", "#C62828"),
}

# Tailwind-style cover tokens from the catalog mapped to CSS colours
COVER_COLORS = {
    "bg-blue-500": "#3B82F6",
    "bg-blue-600": "#2563EB",
    "bg-red-500": "#EF4444",
    "bg-red-600": "#DC2626",
    "bg-green-500": "#22C55E",
    "bg-green-600": "#16A34A",
    "bg-orange-500": "#F97316",
    "bg-purple-500": "#A855F7",
    "bg-purple-600": "#9333EA",
    "bg-gray-600": "#4B5563",
}
DEFAULT_COVER_COLOR = "#3B82F6"


def get_reading_css() -> str:
    """Get CSS styles for book cards and chapter text."""
    return """
    <style>
    .book-card {
        background: white;
        border-radius: 12px;
        overflow: hidden;
        box-shadow: 0 2px 6px rgba(0,0,0,0.08);
        margin-bottom: 1em;
    }
    .book-cover {
        height: 5em;
        display: flex;
        align-items: center;
        justify-content: center;
        color: white;
        font-size: 2em;
    }
    .book-body {
        padding: 1em 1.2em;
    }
    .book-title {
        font-size: 1.3em;
        font-weight: 700;
        color: #222;
    }
    .book-author {
        color: #666;
        margin: 0.2em 0 0.6em 0;
    }
    .difficulty-badge {
        display: inline-block;
        padding: 0.15em 0.6em;
        border-radius: 999px;
        font-size: 0.8em;
        font-weight: 600;
    }
    .book-description {
        color: #555;
        font-size: 0.95em;
        margin: 0.6em 0;
    }
    .book-progress-bar {
        background: #e0e0e0;
        border-radius: 999px;
        height: 0.5em;
    }
    .book-progress-fill {
        background: #2563EB;
        border-radius: 999px;
        height: 0.5em;
    }
    .chapter-text {
        background: #fafafa;
        border-radius: 8px;
        padding: 1.2em 1.5em;
        font-size: 1.15em;
        line-height: 2;
        color: #333;
    }
    .chapter-text-label {
        font-size: 0.85em;
        color: #888;
        margin-bottom: 0.4em;
    }
    </style>
    """


def difficulty_label(difficulty: int) -> str:
    return DIFFICULTY_LABELS.get(difficulty, "unknown")


def cover_color(book: Book) -> str:
    """CSS colour for a book's cover token."""
    return COVER_COLORS.get(book.cover_color, DEFAULT_COVER_COLOR)


def render_difficulty_badge(difficulty: int) -> str:
    background, color = DIFFICULTY_COLORS.get(difficulty, ("#F5F5F5", "#424242"))
    return (
        f'<span class="difficulty-badge" style="background: {background}; color: {color};">'
        f'{html.escape(difficulty_label(difficulty))}</span>'
    )


def render_book_card(book: Book, completed: int = 0) -> str:
    """
    Render a book card.

    Args:
        book: Book to display
        completed: Number of completed chapters

    Returns:
        HTML string for the card
    """
    total = len(book.chapters)
    percent = round(completed / total * 100) if total else 0
    mark = " ✓" if total and completed == total else ""

    parts = ['<div class="book-card">']
    parts.append(f'<div class="book-cover" style="background: {cover_color(book)};">📖</div>')
    parts.append('<div class="book-body">')
    parts.append(f'<div class="book-title">{html.escape(book.title)}{mark}</div>')
    parts.append(f'<div class="book-author">作者: {html.escape(book.author)}</div>')
    parts.append(f'{render_difficulty_badge(book.difficulty)} <span>{total}章</span>')
    if book.description:
        parts.append(f'<div class="book-description">{html.escape(book.description)}</div>')
    parts.append(f'<div>進捗 {completed}/{total}</div>')
    parts.append('<div class="book-progress-bar">')
    parts.append(f'<div class="book-progress-fill" style="width: {percent}%;"></div>')
    parts.append('</div>')
    parts.append('</div></div>')
    return ''.join(parts)


def render_chapter_text(chapter: Chapter, show_original: bool = False) -> str:
    """
    Render a chapter's text.

    Paragraphs are separated by blank lines in the catalog.

    Args:
        chapter: Chapter to display
        show_original: Show the author's original text instead of the simplified one

    Returns:
        HTML string for the chapter text
    """
    text = chapter.original_text if show_original else chapter.simple_text
    label = "原文" if show_original else "やさしい日本語"

    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    body = ''.join(
        f'<p>{html.escape(p).replace(chr(10), "<br>")}</p>' for p in paragraphs
    )
    return (
        f'<div class="chapter-text-label">{label}</div>'
        f'<div class="chapter-text">{body}</div>'
    )


def format_chapter_button_label(chapter: Chapter, completed: bool) -> str:
    """Label for a chapter selection button."""
    return f"{chapter.title} ✓" if completed else chapter.title
