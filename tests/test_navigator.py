"""
Navigator tests: book access, chapter navigation and recording quiz results.
"""

import pytest

from tobira.classroom import Navigator, ProgressStore, QuizPhase
from tobira.errors import BookLocked, InvalidScore, UnknownChapterReference
from tobira.schemas import SEED_BOOKS, UserProgress


def complete_quiz(session, scheduler, clock, options):
    for option in options:
        session.select(option)
        session.submit()
        clock.advance(session.reveal_seconds)
        scheduler.run_due()


class TestBooks:

    def test_seed_books_unlocked(self, navigator):
        assert [book.id for book in navigator.get_unlocked_books()] == ["kokoro-intro", "melos"]
        assert {book.id for book in navigator.get_locked_books()} == {
            "kokoro-complete", "hashire-melos-advanced", "kokoro-advanced",
        }

    def test_book_progress(self, navigator):
        navigator.record_quiz_result("kokoro-intro", 1, 3)
        book_progress = navigator.get_book_progress("kokoro-intro")
        assert book_progress.completed == 1
        assert book_progress.total == 2
        assert book_progress.percent == 50
        assert not book_progress.is_completed

        navigator.record_quiz_result("kokoro-intro", 2, 0)
        assert navigator.get_book_progress("kokoro-intro").is_completed

    def test_book_progress_uses_exact_keys(self, navigator):
        # "kokoro-intro-1" must not count toward a book called "kokoro"
        navigator.record_quiz_result("kokoro-intro", 1, 3)
        assert navigator.get_book_progress("kokoro-complete").completed == 0

    def test_unknown_book(self, navigator):
        with pytest.raises(UnknownChapterReference):
            navigator.get_book_progress("botchan")


class TestChapters:

    def test_chapter_navigation(self, navigator):
        assert navigator.get_next_chapter_id("kokoro-intro", 1) == 2
        assert navigator.get_next_chapter_id("kokoro-intro", 2) is None
        assert navigator.get_previous_chapter_id("kokoro-intro", 1) is None
        assert navigator.get_previous_chapter_id("kokoro-intro", 2) == 1
        assert navigator.get_chapter_position("kokoro-intro", 2) == (2, 2)

    def test_unknown_chapter(self, navigator):
        with pytest.raises(UnknownChapterReference):
            navigator.get_next_chapter_id("kokoro-intro", 42)


class TestRecordQuizResult:

    def test_records_and_saves(self, navigator, store):
        outcome = navigator.record_quiz_result("melos", 1, 2)
        assert outcome.saved
        assert outcome.experience_gained == 10
        assert outcome.question_count == 3
        assert not outcome.leveled_up
        assert navigator.is_chapter_completed("melos", 1)

        reloaded = ProgressStore(store.path)
        assert reloaded.current == outcome.progress

    def test_level_up_unlocks_book(self, navigator, store):
        store.commit(UserProgress(level=1, experience=95))
        outcome = navigator.record_quiz_result("melos", 1, 3)
        assert outcome.progress.experience == 110
        assert outcome.leveled_up
        assert outcome.unlocked_books == ["kokoro-complete"]
        assert navigator.is_book_unlocked("kokoro-complete")

    def test_unknown_chapter_rejected(self, navigator, store):
        with pytest.raises(UnknownChapterReference):
            navigator.record_quiz_result("melos", 99, 1)
        with pytest.raises(UnknownChapterReference):
            navigator.record_quiz_result("botchan", 1, 1)
        assert store.current == UserProgress()

    def test_score_checked_against_chapter(self, navigator, store):
        with pytest.raises(InvalidScore):
            navigator.record_quiz_result("melos", 2, 3)  # chapter 2 has two questions
        assert store.current == UserProgress()

    def test_summary(self, navigator):
        navigator.record_quiz_result("melos", 1, 3)
        summary = navigator.get_progress_summary()
        assert summary["level"] == 1
        assert summary["experience"] == 15
        assert summary["experience_to_next_level"] == 85
        assert summary["level_progress_percent"] == 15
        assert summary["completed_chapters"] == 1
        assert summary["unlocked_books"] == len(SEED_BOOKS)
        assert summary["total_books"] == 5
        assert summary["reward_message"] == ""


class TestStartQuiz:

    def test_full_quiz_flow(self, navigator, scheduler, clock):
        outcomes = []
        session = navigator.start_quiz(
            "melos", 1, scheduler=scheduler, reveal_seconds=2.0, on_outcome=outcomes.append,
        )
        questions = session.chapter.questions
        # correct, wrong, correct
        wrong = next(o for o in questions[1].options if o != questions[1].answer)
        complete_quiz(session, scheduler, clock, [questions[0].answer, wrong, questions[2].answer])

        assert session.phase == QuizPhase.COMPLETED
        assert len(outcomes) == 1
        assert outcomes[0].score == 2
        assert navigator.progress.experience == 10
        assert navigator.is_chapter_completed("melos", 1)

    def test_abandoned_quiz_records_nothing(self, navigator, scheduler, clock):
        session = navigator.start_quiz("melos", 1, scheduler=scheduler)
        complete_quiz(session, scheduler, clock, [session.current_question.answer])
        session.abandon()
        clock.advance(10)
        scheduler.run_due()
        assert navigator.progress == UserProgress()

    def test_locked_book(self, navigator):
        with pytest.raises(BookLocked):
            navigator.start_quiz("kokoro-advanced", 1)

    def test_unknown_chapter(self, navigator):
        with pytest.raises(UnknownChapterReference):
            navigator.start_quiz("melos", 7)

    def test_each_start_is_a_new_session(self, navigator, scheduler):
        first = navigator.start_quiz("melos", 1, scheduler=scheduler)
        first.select(first.current_question.answer)
        second = navigator.start_quiz("melos", 1, scheduler=scheduler)
        assert second is not first
        assert second.index == 0
        assert second.selected_answer is None


class TestNavigatorWithCustomCatalog:

    def test_separate_stores_are_independent(self, catalog, tmp_path):
        a = Navigator(catalog, ProgressStore(tmp_path / "a.json"))
        b = Navigator(catalog, ProgressStore(tmp_path / "b.json"))
        a.record_quiz_result("melos", 1, 3)
        assert b.progress == UserProgress()

    def test_shared_store_keeps_every_result(self, catalog, tmp_path):
        store = ProgressStore(tmp_path / "progress.json")
        first = Navigator(catalog, store)
        second = Navigator(catalog, store)

        first.record_quiz_result("melos", 1, 3)
        second.record_quiz_result("kokoro-intro", 1, 1)

        assert first.progress == second.progress
        reloaded = ProgressStore(store.path).current
        assert reloaded.experience == 20
        assert reloaded.completed_chapters == {"melos-1", "kokoro-intro-1"}
