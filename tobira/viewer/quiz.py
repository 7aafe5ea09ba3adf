"""
Quiz renderer - Comprehension check display.

Provides:
- Question progress header
- Option styling while answering and while a result is shown
- Answer feedback and final score
"""

import html
from enum import Enum

from tobira.classroom import QuizSession, QuizPhase, EXPERIENCE_PER_CORRECT_ANSWER


class OptionState(str, Enum):
    """How an option button is shown."""
    IDLE = "idle"
    SELECTED = "selected"
    CORRECT = "correct"
    WRONG = "wrong"
    DIMMED = "dimmed"


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-header {
        background: #2563EB;
        color: white;
        border-radius: 12px 12px 0 0;
        padding: 1em 1.5em;
    }
    .quiz-header-title {
        font-size: 1.4em;
        font-weight: 700;
    }
    .quiz-progress {
        display: flex;
        justify-content: space-between;
        color: #555;
        font-size: 0.9em;
        margin: 0.8em 0 0.3em 0;
    }
    .quiz-progress-bar {
        background: #e0e0e0;
        border-radius: 999px;
        height: 0.5em;
    }
    .quiz-progress-fill {
        background: #2563EB;
        border-radius: 999px;
        height: 0.5em;
    }
    .quiz-feedback {
        border-radius: 8px;
        padding: 0.8em 1em;
        margin-top: 1em;
        font-weight: 600;
    }
    .quiz-feedback.correct {
        background: #E8F5E9;
        color: #2E7D32;
    }
    .quiz-feedback.wrong {
        background: #FFEBEE;
        color: #C62828;
    }
    .quiz-feedback-note {
        font-weight: normal;
        font-size: 0.9em;
        margin-top: 0.3em;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def option_state(session: QuizSession, option: str) -> OptionState:
    """Display state of an option for the current question."""
    if session.phase == QuizPhase.SHOWING_RESULT:
        question = session.current_question
        if option == question.answer:
            return OptionState.CORRECT
        if option == session.selected_answer:
            return OptionState.WRONG
        return OptionState.DIMMED
    if option == session.selected_answer:
        return OptionState.SELECTED
    return OptionState.IDLE


def format_option_label(option: str, state: OptionState) -> str:
    """Button label for an option, marked while a result is shown."""
    if state == OptionState.CORRECT:
        return f"✅ {option}"
    if state == OptionState.WRONG:
        return f"❌ {option}"
    if state == OptionState.SELECTED:
        return f"▶ {option}"
    return option


def render_quiz_header(chapter_title: str) -> str:
    return (
        '<div class="quiz-header">'
        '<div class="quiz-header-title">理解度チェック</div>'
        f'<div>{html.escape(chapter_title)}</div>'
        '</div>'
    )


def render_quiz_progress(session: QuizSession) -> str:
    """Question counter, running score and progress bar."""
    shown = session.answered_count
    percent = round(session.question_number / session.question_count * 100)
    return (
        '<div class="quiz-progress">'
        f'<span>質問 {session.question_number} / {session.question_count}</span>'
        f'<span>正解: {session.score} / {shown}</span>'
        '</div>'
        '<div class="quiz-progress-bar">'
        f'<div class="quiz-progress-fill" style="width: {percent}%;"></div>'
        '</div>'
    )


def render_answer_feedback(correct: bool) -> str:
    """Feedback shown during the reveal delay."""
    if correct:
        return (
            '<div class="quiz-feedback correct">正解です！'
            f'<div class="quiz-feedback-note">+{EXPERIENCE_PER_CORRECT_ANSWER} EXP を獲得しました！</div>'
            '</div>'
        )
    return '<div class="quiz-feedback wrong">間違いです。</div>'


def calculate_quiz_score(correct_count: int, total: int) -> dict:
    """
    Calculate quiz score.

    Args:
        correct_count: Number answered correctly
        total: Total questions

    Returns:
        Dict with score info
    """
    if total == 0:
        return {"score": 1.0, "percent": 100, "correct": 0, "total": 0,
                "experience": 0}

    score = correct_count / total
    return {
        "score": round(score, 2),
        "percent": round(score * 100),
        "correct": correct_count,
        "total": total,
        "experience": correct_count * EXPERIENCE_PER_CORRECT_ANSWER,
    }


def render_quiz_result(score_info: dict) -> str:
    """Render final quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score_info['percent']}%</div>
        <div class="quiz-score-label">{score_info['correct']} of {score_info['total']} correct · +{score_info['experience']} EXP</div>
    </div>
    """
