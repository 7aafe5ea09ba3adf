"""
QuizSession - Per-chapter comprehension quiz state machine.

A session walks through a chapter's questions in order:

    answering(i) --submit--> showing_result(i) --reveal timer--> answering(i+1)
                                                              +-> completed

The reveal timer is scheduled on a Scheduler. DeferredScheduler runs due
callbacks when asked (run_due), which fits Streamlit's rerun loop and makes
tests deterministic with a fake clock.

A session that has been abandoned or discarded ignores timer callbacks that
fire late.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Protocol

from tobira.config import DEFAULT_REVEAL_SECONDS
from tobira.schemas import Chapter, Question

from .engine import experience_for_score


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Scheduling
# -----------------------------------------------------------------------------

class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


@dataclass
class ScheduledCall:
    """A callback waiting in a DeferredScheduler."""
    deadline: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class DeferredScheduler:
    """
    Cooperative scheduler driven by an explicit clock.

    Nothing fires on its own: the owner calls run_due() (e.g. on every
    Streamlit rerun) and every call whose deadline has passed runs then.
    """
    clock: Callable[[], float] = time.monotonic
    _calls: list[ScheduledCall] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(deadline=self.clock() + max(delay, 0.0), callback=callback)
        self._calls.append(call)
        return call

    @property
    def pending_count(self) -> int:
        return sum(1 for call in self._calls if not call.cancelled)

    def time_until_next(self) -> Optional[float]:
        """Seconds until the earliest pending call (0 if overdue), None if idle."""
        pending = [call.deadline for call in self._calls if not call.cancelled]
        if not pending:
            return None
        return max(min(pending) - self.clock(), 0.0)

    def run_due(self) -> int:
        """Run every pending call whose deadline has passed. Returns the count run."""
        now = self.clock()
        due = sorted(
            (call for call in self._calls if not call.cancelled and call.deadline <= now),
            key=lambda call: call.deadline,
        )
        self._calls = [
            call for call in self._calls
            if not call.cancelled and call.deadline > now
        ]
        for call in due:
            call.callback()
        return len(due)


# -----------------------------------------------------------------------------
# Session
# -----------------------------------------------------------------------------

class QuizPhase(str, Enum):
    ANSWERING = "answering"
    SHOWING_RESULT = "showing_result"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class QuizSession:
    """
    Run one attempt at a chapter quiz.

    The final score is handed to on_complete exactly once, after the reveal
    delay of the last question. Abandoned sessions never call it.
    """

    def __init__(
        self,
        chapter: Chapter,
        on_complete: Optional[Callable[[int], None]] = None,
        scheduler: Optional[Scheduler] = None,
        reveal_seconds: float = DEFAULT_REVEAL_SECONDS,
    ):
        """
        Initialize a quiz session at the first question.

        Args:
            chapter: Chapter whose questions are asked
            on_complete: Called with the number of correct answers on completion
            scheduler: Scheduler for the reveal timer (default: own DeferredScheduler)
            reveal_seconds: How long each answer's result is shown

        Raises:
            ValueError: If the chapter has no questions
        """
        if not chapter.questions:
            raise ValueError(f"Chapter {chapter.id} has no questions")
        self.chapter = chapter
        self.on_complete = on_complete
        self.scheduler = scheduler if scheduler is not None else DeferredScheduler()
        self.reveal_seconds = reveal_seconds

        self._phase = QuizPhase.ANSWERING
        self._index = 0
        self._pending: Optional[str] = None
        self._correct = 0
        self._answers: list[str] = []
        self._last_correct: Optional[bool] = None
        self._timer: Optional[TimerHandle] = None
        self._generation = 0

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> QuizPhase:
        return self._phase

    @property
    def index(self) -> int:
        return self._index

    @property
    def question_count(self) -> int:
        return len(self.chapter.questions)

    @property
    def question_number(self) -> int:
        """1-based position of the current question."""
        return self._index + 1

    @property
    def current_question(self) -> Question:
        return self.chapter.questions[self._index]

    @property
    def is_last_question(self) -> bool:
        return self._index == self.question_count - 1

    @property
    def selected_answer(self) -> Optional[str]:
        return self._pending

    @property
    def score(self) -> int:
        return self._correct

    @property
    def answers(self) -> tuple[str, ...]:
        return tuple(self._answers)

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    @property
    def last_answer_correct(self) -> Optional[bool]:
        return self._last_correct

    @property
    def experience_preview(self) -> int:
        """Experience the current score is worth."""
        return experience_for_score(self._correct)

    @property
    def is_finished(self) -> bool:
        return self._phase in (QuizPhase.COMPLETED, QuizPhase.ABANDONED)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def select(self, option: str) -> bool:
        """
        Choose an option for the current question, replacing any earlier choice.

        Returns False when not answering (e.g. while a result is shown).

        Raises:
            ValueError: If option is not one of the current question's options
        """
        if self._phase != QuizPhase.ANSWERING:
            return False
        if option not in self.current_question.options:
            raise ValueError(f"Not an option for question {self.question_number}: {option!r}")
        self._pending = option
        return True

    def submit(self) -> bool:
        """
        Submit the selected answer and start the reveal timer.

        Returns False (and does nothing) if no answer is selected or the
        session is not answering.
        """
        if self._phase != QuizPhase.ANSWERING or self._pending is None:
            return False

        correct = self.current_question.is_correct(self._pending)
        if correct:
            self._correct += 1
        self._answers.append(self._pending)
        self._last_correct = correct
        self._phase = QuizPhase.SHOWING_RESULT

        self._generation += 1
        token = self._generation
        self._timer = self.scheduler.call_later(
            self.reveal_seconds, lambda: self._reveal_elapsed(token)
        )
        return True

    def _reveal_elapsed(self, token: int):
        # stale timers (discarded session, superseded reveal) are ignored
        if self._phase != QuizPhase.SHOWING_RESULT or token != self._generation:
            logger.debug(f"Ignoring stale reveal timer for chapter {self.chapter.id}")
            return

        self._timer = None
        self._pending = None

        if not self.is_last_question:
            self._index += 1
            self._last_correct = None
            self._phase = QuizPhase.ANSWERING
            return

        self._phase = QuizPhase.COMPLETED
        logger.info(
            f"Quiz completed for chapter {self.chapter.id}: "
            f"{self._correct}/{self.question_count} correct"
        )
        if self.on_complete is not None:
            self.on_complete(self._correct)

    def abandon(self) -> bool:
        """
        Leave the quiz without credit. Only possible while answering.

        Returns True if the session was abandoned.
        """
        if self._phase != QuizPhase.ANSWERING:
            return False
        self._teardown()
        return True

    def discard(self):
        """Tear the session down from any phase. A pending reveal never fires."""
        if self._phase != QuizPhase.COMPLETED:
            self._teardown()

    def _teardown(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending = None
        self._phase = QuizPhase.ABANDONED
