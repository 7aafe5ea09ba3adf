"""
Viewer tests: HTML helpers for reading, quiz and progress display.
"""

from tobira.classroom import QuizSession
from tobira.schemas import Chapter
from tobira.viewer import (
    OptionState,
    calculate_quiz_score,
    difficulty_label,
    format_chapter_button_label,
    format_option_label,
    option_state,
    render_answer_feedback,
    render_book_card,
    render_chapter_text,
    render_progress_panel,
    render_quiz_progress,
)


class TestReading:

    def test_simple_text_by_default(self, chapter):
        rendered = render_chapter_text(chapter)
        assert "やさしい日本語" in rendered
        assert "メロスはとても怒りました。" in rendered
        assert "激怒" not in rendered

    def test_original_text(self, chapter):
        rendered = render_chapter_text(chapter, show_original=True)
        assert "原文" in rendered
        assert "メロスは激怒した。" in rendered

    def test_text_is_escaped(self):
        chapter = Chapter(id=1, title="t", original_text="o", simple_text="<script>x</script>\n\n次")
        rendered = render_chapter_text(chapter)
        assert "<script>" not in rendered
        assert "&lt;script&gt;" in rendered
        assert rendered.count("<p>") == 2

    def test_difficulty_label(self):
        assert difficulty_label(1) == "やさしい"
        assert difficulty_label(4) == "とてもむずかしい"
        assert difficulty_label(9) == "unknown"

    def test_book_card(self, catalog):
        book = catalog.get_book("kokoro-intro")
        card = render_book_card(book, completed=1)
        assert "1/2" in card
        assert "width: 50%" in card
        assert "夏目漱石" in card
        assert "✓" not in card
        assert "✓" in render_book_card(book, completed=2)

    def test_chapter_button_label(self, chapter):
        assert format_chapter_button_label(chapter, False) == "メロスの怒り"
        assert format_chapter_button_label(chapter, True) == "メロスの怒り ✓"


class TestQuizView:

    def test_option_states(self, chapter, scheduler):
        session = QuizSession(chapter, scheduler=scheduler)
        assert option_state(session, "a") == OptionState.IDLE
        session.select("b")
        assert option_state(session, "b") == OptionState.SELECTED

        session.submit()
        assert option_state(session, "a") == OptionState.CORRECT
        assert option_state(session, "b") == OptionState.WRONG
        assert option_state(session, "c") == OptionState.DIMMED

    def test_option_labels(self):
        assert format_option_label("a", OptionState.IDLE) == "a"
        assert format_option_label("a", OptionState.CORRECT).startswith("✅")
        assert format_option_label("a", OptionState.WRONG).startswith("❌")

    def test_progress(self, chapter, scheduler):
        session = QuizSession(chapter, scheduler=scheduler)
        rendered = render_quiz_progress(session)
        assert "質問 1 / 3" in rendered
        assert "正解: 0 / 0" in rendered

    def test_feedback(self):
        assert "+5 EXP" in render_answer_feedback(True)
        assert "間違い" in render_answer_feedback(False)

    def test_score(self):
        info = calculate_quiz_score(2, 3)
        assert info["percent"] == 67
        assert info["experience"] == 10
        assert calculate_quiz_score(0, 0)["total"] == 0


class TestProgressPanel:

    def test_panel(self, navigator):
        navigator.record_quiz_result("melos", 1, 3)
        rendered = render_progress_panel(navigator.get_progress_summary())
        assert "15 EXP" in rendered
        assert "次のレベルまで: 85" in rendered
        assert "reward-banner" not in rendered

    def test_reward_banner(self):
        summary = {
            "experience": 120,
            "experience_to_next_level": 80,
            "level_progress_percent": 20,
            "completed_chapters": 8,
            "unlocked_books": 3,
            "reward_message": "新しい本が解放されました！",
        }
        assert "新しい本が解放されました！" in render_progress_panel(summary)
