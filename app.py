"""
Tobira (文学の扉) - Read Japanese literature in simplified Japanese

Streamlit application for reading classic Japanese novels in original and
simplified form, with a comprehension quiz per chapter. Quiz results earn
experience; levels unlock more books.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st

from tobira.classroom import (
    DeferredScheduler,
    Navigator,
    ProgressStore,
    QuizPhase,
    load_catalog,
    unlock_level_for_book,
)
from tobira.config import get_settings
from tobira.errors import BookLocked, CatalogError, UnknownChapterReference
from tobira.viewer import (
    calculate_quiz_score,
    format_chapter_button_label,
    format_option_label,
    get_progress_css,
    get_quiz_css,
    get_reading_css,
    option_state,
    render_answer_feedback,
    render_book_card,
    render_chapter_text,
    render_progress_panel,
    render_quiz_header,
    render_quiz_progress,
    render_quiz_result,
)


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="文学の扉",
    page_icon="📖",
    layout="wide",
    initial_sidebar_state="expanded",
)

VIEW_LABELS = {"home": "ホーム", "reading": "読書", "quiz": "クイズ"}


@st.cache_resource
def get_catalog(path: str):
    return load_catalog(path)


@st.cache_resource
def get_store(path: str):
    """One store per progress file, shared by every browser session."""
    return ProgressStore(path)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        st.session_state.settings = get_settings()
    settings = st.session_state.settings

    if "navigator" not in st.session_state:
        try:
            catalog = get_catalog(str(settings.catalog_path))
        except CatalogError as e:
            logger.error(f"Failed to load catalog: {e}")
            st.session_state.navigator = None
            st.session_state.catalog_error = str(e)
        else:
            store = get_store(str(settings.progress_path))
            st.session_state.navigator = Navigator(catalog, store)

    defaults = {
        "view_mode": "home",
        "selected_book_id": None,
        "current_chapter_id": None,
        "show_original": False,
        "quiz_session": None,
        "scheduler": DeferredScheduler(),
        "last_outcome": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def set_view(view_mode: str):
    """Switch views, discarding any running quiz when leaving it."""
    if view_mode != "quiz" and st.session_state.quiz_session is not None:
        st.session_state.quiz_session.discard()
        st.session_state.quiz_session = None
    st.session_state.view_mode = view_mode


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with level, experience and view selection."""
    st.sidebar.title("📖 文学の扉")
    st.sidebar.caption("やさしい日本語で読む名作")

    nav = st.session_state.navigator
    if not nav:
        st.sidebar.error("Catalog could not be loaded.")
        return

    progress = nav.progress
    col1, col2 = st.sidebar.columns(2)
    col1.metric("レベル", progress.level)
    col2.metric("EXP", progress.experience)

    st.sidebar.divider()

    views = ["home", "reading"]
    if st.session_state.view_mode == "quiz":
        views.append("quiz")
    selected = st.sidebar.radio(
        "View",
        views,
        index=views.index(st.session_state.view_mode),
        format_func=lambda v: VIEW_LABELS[v],
        label_visibility="collapsed",
    )
    if selected != st.session_state.view_mode:
        if selected == "reading" and not st.session_state.selected_book_id:
            st.sidebar.info("本を選んでください。")
        else:
            set_view(selected)
            st.rerun()

    st.sidebar.divider()
    with st.sidebar.expander("Settings"):
        if st.button("Reset progress", use_container_width=True):
            if not nav.store.reset():
                st.warning("進捗を保存できませんでした。")
            st.session_state.last_outcome = None
            set_view("home")
            st.rerun()


# -----------------------------------------------------------------------------
# Home View
# -----------------------------------------------------------------------------

def render_home_view():
    """Render progress panel and book selection."""
    nav = st.session_state.navigator

    st.header("あなたの進捗")
    st.markdown(get_progress_css(), unsafe_allow_html=True)
    st.markdown(render_progress_panel(nav.get_progress_summary()), unsafe_allow_html=True)

    st.header("本を選んでください")
    st.caption("あなたのレベルに合った本を読んで、経験値を集めましょう")
    st.markdown(get_reading_css(), unsafe_allow_html=True)

    books = nav.get_unlocked_books()
    columns = st.columns(3)
    for idx, book in enumerate(books):
        book_progress = nav.get_book_progress(book.id)
        with columns[idx % 3]:
            st.markdown(render_book_card(book, book_progress.completed), unsafe_allow_html=True)
            label = "再読する" if book_progress.is_completed else "読み始める"
            if st.button(label, key=f"book_{book.id}", use_container_width=True):
                select_book(book.id)

    locked = nav.get_locked_books()
    if locked:
        st.subheader("🔒 まだ読めない本")
        for book in locked:
            level = unlock_level_for_book(book.id)
            note = f"レベル {level} で解放" if level else "解放条件なし"
            st.markdown(f"- **{book.title}** ({book.author}): {note}")


def select_book(book_id: str):
    """Open a book at its first chapter."""
    book = st.session_state.navigator.catalog.require_book(book_id)
    st.session_state.selected_book_id = book.id
    st.session_state.current_chapter_id = book.chapters[0].id
    st.session_state.show_original = False
    st.session_state.last_outcome = None
    set_view("reading")
    st.rerun()


def select_chapter(chapter_id: int):
    st.session_state.current_chapter_id = chapter_id
    st.session_state.last_outcome = None
    st.rerun()


# -----------------------------------------------------------------------------
# Reading View
# -----------------------------------------------------------------------------

def render_reading_view():
    """Render chapter list, chapter text and quiz entry."""
    nav = st.session_state.navigator
    book_id = st.session_state.selected_book_id
    if not book_id:
        st.info("ホームから本を選んでください。")
        return

    book = nav.catalog.get_book(book_id)
    chapter = nav.catalog.get_chapter(book_id, st.session_state.current_chapter_id)
    if not book or not chapter:
        st.error(f"Chapter not found: {book_id}/{st.session_state.current_chapter_id}")
        return

    render_outcome_banner()

    st.title(book.title)
    st.caption(f"作者: {book.author}")

    st.subheader("章を選択")
    columns = st.columns(min(len(book.chapters), 4))
    for idx, chap in enumerate(book.chapters):
        completed = nav.is_chapter_completed(book.id, chap.id)
        with columns[idx % len(columns)]:
            if st.button(
                format_chapter_button_label(chap, completed),
                key=f"chapter_{book.id}_{chap.id}",
                type="primary" if chap.id == chapter.id else "secondary",
                use_container_width=True,
            ):
                select_chapter(chap.id)

    st.divider()

    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader(chapter.title)
    with col2:
        st.session_state.show_original = st.toggle("原文", value=st.session_state.show_original)

    st.markdown(get_reading_css(), unsafe_allow_html=True)
    st.markdown(render_chapter_text(chapter, st.session_state.show_original), unsafe_allow_html=True)

    render_chapter_navigation(book.id, chapter.id)

    if chapter.questions:
        st.divider()
        if st.button("理解度チェックを始める", type="primary", use_container_width=True):
            start_quiz(book.id, chapter.id)


def render_chapter_navigation(book_id: str, chapter_id: int):
    """Render previous/next chapter buttons."""
    nav = st.session_state.navigator
    pos, total = nav.get_chapter_position(book_id, chapter_id)
    prev_id = nav.get_previous_chapter_id(book_id, chapter_id)
    next_id = nav.get_next_chapter_id(book_id, chapter_id)

    col1, col2, col3 = st.columns([1, 2, 1])
    with col1:
        if prev_id is not None and st.button("← 前の章", use_container_width=True):
            select_chapter(prev_id)
    with col2:
        st.markdown(f"<center>{pos} / {total}</center>", unsafe_allow_html=True)
    with col3:
        if next_id is not None and st.button("次の章 →", use_container_width=True):
            select_chapter(next_id)


def render_outcome_banner():
    """Show the result of the quiz that was just completed."""
    outcome = st.session_state.last_outcome
    if outcome is None:
        return

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    score_info = calculate_quiz_score(outcome.score, outcome.question_count)
    st.markdown(render_quiz_result(score_info), unsafe_allow_html=True)

    if outcome.leveled_up:
        st.success(f"レベル {outcome.progress.level} になりました！")
    nav = st.session_state.navigator
    for book_id in outcome.unlocked_books:
        book = nav.catalog.get_book(book_id)
        st.success(f"新しい本が解放されました: {book.title if book else book_id}")
    if outcome.unlocked_books:
        st.balloons()
    if not outcome.saved:
        st.warning("進捗を保存できませんでした。このセッションの記録は失われる可能性があります。")


# -----------------------------------------------------------------------------
# Quiz View
# -----------------------------------------------------------------------------

def start_quiz(book_id: str, chapter_id: int):
    """Create a fresh quiz session for the chapter."""
    nav = st.session_state.navigator
    settings = st.session_state.settings

    def on_outcome(outcome):
        st.session_state.last_outcome = outcome
        st.session_state.quiz_session = None
        st.session_state.view_mode = "reading"

    try:
        session = nav.start_quiz(
            book_id,
            chapter_id,
            scheduler=st.session_state.scheduler,
            reveal_seconds=settings.reveal_seconds,
            on_outcome=on_outcome,
        )
    except (BookLocked, UnknownChapterReference) as e:
        st.error(str(e))
        return

    st.session_state.quiz_session = session
    st.session_state.last_outcome = None
    set_view("quiz")
    st.rerun()


def render_quiz_view():
    """Render the current question of the running quiz."""
    scheduler = st.session_state.scheduler
    scheduler.run_due()

    session = st.session_state.quiz_session
    if session is None or session.is_finished:
        set_view("reading")
        st.rerun()
        return

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.markdown(render_quiz_header(session.chapter.title), unsafe_allow_html=True)
    st.markdown(render_quiz_progress(session), unsafe_allow_html=True)

    question = session.current_question
    st.subheader(question.question)

    answering = session.phase == QuizPhase.ANSWERING
    for idx, option in enumerate(question.options):
        state = option_state(session, option)
        if st.button(
            format_option_label(option, state),
            key=f"option_{session.index}_{idx}",
            disabled=not answering,
            use_container_width=True,
        ):
            session.select(option)
            st.rerun()

    if session.phase == QuizPhase.SHOWING_RESULT:
        st.markdown(render_answer_feedback(session.last_answer_correct), unsafe_allow_html=True)
        wait = scheduler.time_until_next()
        if wait:
            time.sleep(wait)
        st.rerun()
        return

    label = "完了" if session.is_last_question else "次の質問"
    col1, col2 = st.columns([3, 1])
    with col1:
        if st.button(label, type="primary", disabled=session.selected_answer is None, use_container_width=True):
            session.submit()
            st.rerun()
    with col2:
        if st.button("← 戻る", use_container_width=True):
            session.abandon()
            set_view("reading")
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if not st.session_state.navigator:
        st.error(f"Catalog could not be loaded: {st.session_state.get('catalog_error')}")
        return

    # Main content based on view mode
    if st.session_state.view_mode == "home":
        render_home_view()
    elif st.session_state.view_mode == "reading":
        render_reading_view()
    elif st.session_state.view_mode == "quiz":
        render_quiz_view()


if __name__ == "__main__":
    main()
