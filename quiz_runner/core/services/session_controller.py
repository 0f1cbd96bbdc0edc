"""Lifecycle of a single quiz attempt: load, start, answer, time up, finish."""

from __future__ import annotations

from datetime import datetime
import logging
import math
import time
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from quiz_runner.core.answer_evaluator import evaluate
from quiz_runner.core.errors import EmptyQuizError, NotSignedInError, QuizNotFoundError
from quiz_runner.core.models import (
    AttemptState,
    AttemptSummary,
    CompletedAttempt,
    Phase,
    Question,
    Quiz,
    UserSession,
    Verdict,
)
from quiz_runner.core.services.auth_context import AuthContext
from quiz_runner.core.services.countdown_timer import CountdownTimer
from quiz_runner.core.services.quiz_repository import QuizRepository

logger = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


def post_to_event_loop(callback: Callable[[], None]) -> None:
    """Run ``callback`` on a later pass of the Qt event loop."""
    QTimer.singleShot(0, callback)


class SessionController(QObject):
    """Drives one user's attempt at one quiz.

    Every mutating operation is gated on the current phase, so events that
    arrive after the attempt has finished (a late click, a second time-up)
    are ignored instead of double-counting. The finished attempt is handed
    to the repository on a later event-loop pass; a failed submission is
    reported but never rolls back the result on screen.
    """

    phase_changed = Signal(object)
    question_changed = Signal(int)
    score_changed = Signal(int, int)
    remaining_changed = Signal(int)
    answered = Signal(object)
    finished = Signal(object)
    attempt_submitted = Signal(object)
    submission_failed = Signal(str)

    def __init__(
        self,
        repository: QuizRepository,
        auth: AuthContext,
        timer: CountdownTimer | None = None,
        clock: Callable[[], float] = time.time,
        dispatch: Dispatcher = post_to_event_loop,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._repository = repository
        self._auth = auth
        self._clock = clock
        self._dispatch = dispatch

        self._quiz: Quiz | None = None
        self._questions: tuple[Question, ...] = ()
        self._state = AttemptState(quiz_id="", user_id=None, total_questions=0)
        self._user: UserSession | None = None
        self._summary: AttemptSummary | None = None
        self._completed_attempt: CompletedAttempt | None = None
        self._submission_error: str | None = None
        self._submitted: bool = False
        self._disposed: bool = False

        self._timer = timer if timer is not None else CountdownTimer(self)
        self._timer.time_up.connect(self.time_up)
        self._timer.remaining_changed.connect(self.remaining_changed)
        self._unsubscribe_auth = auth.subscribe(self._handle_auth_changed)

    # --- Operations ---

    def load(self, quiz_id: str) -> Quiz:
        """Fetch the quiz and its questions; raises ``QuizNotFoundError``."""
        if self._state.phase is not Phase.NOT_STARTED:
            raise RuntimeError("An attempt that has started cannot load another quiz.")

        self._quiz = None
        self._questions = ()
        self._state = AttemptState(quiz_id=quiz_id, user_id=None, total_questions=0)

        quiz = self._repository.get_quiz(quiz_id)
        if quiz is None:
            logger.warning("Quiz %s not found", quiz_id)
            raise QuizNotFoundError(quiz_id)

        self._quiz = quiz
        self._questions = tuple(self._repository.get_questions(quiz_id))
        self._state.total_questions = len(self._questions)
        self._timer.start(quiz.time_limit_seconds)
        logger.info("Loaded quiz %s with %d questions", quiz_id, len(self._questions))
        return quiz

    def start(self) -> None:
        """Begin the attempt; raises ``EmptyQuizError`` when there is nothing to answer."""
        if self._disposed or self._state.phase is not Phase.NOT_STARTED:
            return
        if self._quiz is None or not self._questions:
            logger.info("Refusing to start empty quiz %s", self._state.quiz_id)
            raise EmptyQuizError(self._state.quiz_id or None)
        user = self._auth.current_user
        if user is None:
            raise NotSignedInError("Sign in before starting a quiz.")

        self._user = user
        self._state.user_id = user.user_id
        self._state.current_index = 0
        self._state.score = 0
        self._state.correct_count = 0
        self._state.elapsed_seconds = 0
        self._state.started_at_epoch = self._clock()
        self._state.phase = Phase.ACTIVE

        self._timer.start(self._quiz.time_limit_seconds)
        self._timer.set_active(True)
        logger.info("User %s started quiz %s", user.display_name, self._quiz.id)

        self.phase_changed.emit(Phase.ACTIVE)
        self.question_changed.emit(0)
        self.score_changed.emit(0, 0)

    def answer(self, selected_option_id: str | None) -> Verdict | None:
        """Score the current question and advance; ignored unless the attempt is active."""
        if self._disposed or self._state.phase is not Phase.ACTIVE:
            return None

        question = self._questions[self._state.current_index]
        verdict = evaluate(question.correct_option_id, selected_option_id)
        self._state.score += verdict.score_delta
        if verdict.is_correct:
            self._state.correct_count += 1

        self.answered.emit(verdict)
        self.score_changed.emit(self._state.score, self._state.correct_count)

        if self._state.current_index >= len(self._questions) - 1:
            self._finish(timed_out=False)
        else:
            self._state.current_index += 1
            self.question_changed.emit(self._state.current_index)
        return verdict

    def time_up(self) -> None:
        """Force the attempt to finish, keeping everything earned so far."""
        if self._disposed or self._state.phase is not Phase.ACTIVE:
            return
        logger.info(
            "Time is up on quiz %s after %d answers",
            self._state.quiz_id,
            self._state.current_index,
        )
        self._finish(timed_out=True)

    def dispose(self) -> None:
        """Abandon the session: no more ticks, mutations or new submissions."""
        if self._disposed:
            return
        if self._state.phase is Phase.ACTIVE:
            logger.info("Attempt at quiz %s abandoned before finishing", self._state.quiz_id)
        self._disposed = True
        self._timer.dispose()
        self._unsubscribe_auth()

    # --- State for the presentation layer ---

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def quiz(self) -> Quiz | None:
        return self._quiz

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def current_question(self) -> Question | None:
        if self._state.phase is not Phase.ACTIVE:
            return None
        return self._questions[self._state.current_index]

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def correct_count(self) -> int:
        return self._state.correct_count

    @property
    def percentage(self) -> int:
        return self._state.percentage

    @property
    def elapsed_seconds(self) -> int:
        if self._state.phase is Phase.ACTIVE:
            return self._seconds_since_start()
        return self._state.elapsed_seconds

    @property
    def remaining_seconds(self) -> int:
        return self._timer.remaining_seconds()

    @property
    def summary(self) -> AttemptSummary | None:
        return self._summary

    @property
    def completed_attempt(self) -> CompletedAttempt | None:
        return self._completed_attempt

    @property
    def submission_error(self) -> str | None:
        return self._submission_error

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    # --- Internals ---

    def _finish(self, timed_out: bool) -> None:
        self._state.phase = Phase.FINISHED
        self._state.elapsed_seconds = self._seconds_since_start()
        self._timer.set_active(False)

        self._summary = AttemptSummary(
            score=self._state.score,
            correct_count=self._state.correct_count,
            total_questions=self._state.total_questions,
            percentage=self._state.percentage,
            elapsed_seconds=self._state.elapsed_seconds,
            timed_out=timed_out,
        )
        self._completed_attempt = CompletedAttempt(
            quiz_id=self._state.quiz_id,
            user_id=self._user.user_id,
            score=self._state.score,
            total_questions=self._state.total_questions,
            correct_count=self._state.correct_count,
            time_taken_seconds=self._state.elapsed_seconds,
            completed_at=datetime.now(),
            display_name=self._user.display_name,
        )
        logger.info(
            "Quiz %s finished: score=%d correct=%d/%d time=%ds",
            self._state.quiz_id,
            self._state.score,
            self._state.correct_count,
            self._state.total_questions,
            self._state.elapsed_seconds,
        )

        self.phase_changed.emit(Phase.FINISHED)
        self.finished.emit(self._summary)
        self._dispatch(self._submit_completed_attempt)

    def _submit_completed_attempt(self) -> None:
        if self._submitted or self._completed_attempt is None:
            return
        self._submitted = True
        try:
            self._repository.submit_attempt(self._completed_attempt)
        except Exception as exc:
            logger.exception("Submitting attempt for quiz %s failed", self._state.quiz_id)
            self._submission_error = str(exc) or exc.__class__.__name__
            self.submission_failed.emit(self._submission_error)
            return
        logger.info("Attempt for quiz %s submitted", self._state.quiz_id)
        self.attempt_submitted.emit(self._completed_attempt)

    def _seconds_since_start(self) -> int:
        if self._state.started_at_epoch is None:
            return 0
        return max(0, math.floor(self._clock() - self._state.started_at_epoch))

    def _handle_auth_changed(self, user: UserSession | None) -> None:
        if user is None and self._state.phase is Phase.ACTIVE:
            logger.info("Session ended while quiz %s was in progress", self._state.quiz_id)
            self.dispose()
