"""
Progress renderer - Level, experience and unlock summary panel.
"""

import html


def get_progress_css() -> str:
    """Get CSS styles for the progress panel."""
    return """
    <style>
    .progress-panel {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 1em;
        margin: 1em 0;
    }
    .progress-tile {
        border-radius: 10px;
        padding: 1em 1.2em;
    }
    .progress-tile.exp { background: #EFF6FF; color: #1E3A8A; }
    .progress-tile.chapters { background: #F0FDF4; color: #14532D; }
    .progress-tile.books { background: #FFF7ED; color: #7C2D12; }
    .progress-tile-title {
        font-weight: 600;
        margin-bottom: 0.4em;
    }
    .progress-tile-value {
        font-size: 1.8em;
        font-weight: 700;
    }
    .progress-tile-note {
        font-size: 0.85em;
    }
    .level-bar {
        background: #BFDBFE;
        border-radius: 999px;
        height: 0.6em;
        margin-top: 0.4em;
    }
    .level-bar-fill {
        background: #2563EB;
        border-radius: 999px;
        height: 0.6em;
    }
    .reward-banner {
        background: #FEFCE8;
        border: 1px solid #FDE68A;
        border-radius: 8px;
        padding: 0.8em 1em;
        color: #854D0E;
        font-weight: 600;
    }
    </style>
    """


def render_progress_panel(summary: dict) -> str:
    """
    Render the progress panel.

    Args:
        summary: Dict from Navigator.get_progress_summary()

    Returns:
        HTML string with experience, chapter and book tiles
    """
    parts = ['<div class="progress-panel">']

    parts.append('<div class="progress-tile exp">')
    parts.append('<div class="progress-tile-title">経験値</div>')
    parts.append(f'<div class="progress-tile-value">{summary["experience"]} EXP</div>')
    parts.append(
        f'<div class="progress-tile-note">次のレベルまで: {summary["experience_to_next_level"]}</div>'
    )
    parts.append('<div class="level-bar">')
    parts.append(f'<div class="level-bar-fill" style="width: {summary["level_progress_percent"]}%;"></div>')
    parts.append('</div></div>')

    parts.append('<div class="progress-tile chapters">')
    parts.append('<div class="progress-tile-title">読了章数</div>')
    parts.append(f'<div class="progress-tile-value">{summary["completed_chapters"]}</div>')
    parts.append('<div class="progress-tile-note">章を読み終えました</div>')
    parts.append('</div>')

    parts.append('<div class="progress-tile books">')
    parts.append('<div class="progress-tile-title">解放された本</div>')
    parts.append(f'<div class="progress-tile-value">{summary["unlocked_books"]}</div>')
    parts.append('<div class="progress-tile-note">冊の本が読めます</div>')
    parts.append('</div>')

    parts.append('</div>')

    if summary.get("reward_message"):
        parts.append(f'<div class="reward-banner">🎉 {html.escape(summary["reward_message"])}</div>')

    return ''.join(parts)
