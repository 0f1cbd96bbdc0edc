"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import math

from quiz_runner.constants.quiz_constants import (
    CORRECT_ANSWER_POINTS,
    DEFAULT_DIFFICULTY,
    MIN_OPTIONS_PER_QUESTION,
)


class Phase(Enum):
    """Lifecycle of a single quiz attempt."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class Option:
    """One selectable answer, identified by a short token such as ``"a"``."""

    id: str
    text: str


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question whose correct option is one of its own options."""

    id: str
    question_text: str
    options: tuple[Option, ...]
    correct_option_id: str

    def __post_init__(self) -> None:
        if len(self.options) < MIN_OPTIONS_PER_QUESTION:
            raise ValueError("A question needs at least two options.")
        option_ids = [option.id for option in self.options]
        if len(set(option_ids)) != len(option_ids):
            raise ValueError("Option ids must be unique within a question.")
        if self.correct_option_id not in option_ids:
            raise ValueError(
                f"Correct option '{self.correct_option_id}' is not one of the question's options."
            )

    def option_by_id(self, option_id: str) -> Option | None:
        return next((option for option in self.options if option.id == option_id), None)


@dataclass(frozen=True, slots=True)
class Quiz:
    """A titled, timed, ordered sequence of questions."""

    id: str
    title: str
    time_limit_seconds: int
    questions: tuple[Question, ...] = ()
    description: str | None = None
    difficulty: str = DEFAULT_DIFFICULTY
    published: bool = True

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def max_points(self) -> int:
        return len(self.questions) * CORRECT_ANSWER_POINTS


@dataclass(frozen=True, slots=True)
class Verdict:
    """Result of evaluating one answer."""

    is_correct: bool
    score_delta: int


def percentage_of(correct_count: int, total_questions: int) -> int:
    """Accuracy as a whole percentage, 0 for an empty quiz."""
    if total_questions <= 0:
        return 0
    ratio = max(0.0, min(1.0, correct_count / total_questions))
    # Half-up, matching the accuracy shown on the results screen.
    return int(math.floor(ratio * 100 + 0.5))


@dataclass(slots=True)
class AttemptState:
    """Mutable progress of one user's run through one quiz."""

    quiz_id: str
    user_id: str | None
    total_questions: int
    phase: Phase = Phase.NOT_STARTED
    current_index: int = 0
    score: int = 0
    correct_count: int = 0
    elapsed_seconds: int = 0
    started_at_epoch: float | None = None

    @property
    def percentage(self) -> int:
        return percentage_of(self.correct_count, self.total_questions)


@dataclass(frozen=True, slots=True)
class CompletedAttempt:
    """Record persisted once per finished attempt."""

    quiz_id: str
    user_id: str
    score: int
    total_questions: int
    correct_count: int
    time_taken_seconds: int
    completed_at: datetime
    display_name: str | None = None

    @property
    def percentage(self) -> int:
        return percentage_of(self.correct_count, self.total_questions)


@dataclass(frozen=True, slots=True)
class AttemptSummary:
    """Final figures shown on the results screen."""

    score: int
    correct_count: int
    total_questions: int
    percentage: int
    elapsed_seconds: int
    timed_out: bool = False


@dataclass(frozen=True, slots=True)
class UserSession:
    """The signed-in user as seen by the application."""

    user_id: str
    display_name: str
    email: str | None = None
    is_admin: bool = False
    signed_in_at: datetime = field(default_factory=datetime.now)


@dataclass(slots=True)
class LeaderboardRow:
    """Immutable snapshot returned to consumers."""

    rank: int
    display_name: str
    score: int
    time_taken_seconds: int
    quiz_title: str | None = None


@dataclass(slots=True)
class UserStats:
    """Aggregate figures for the dashboard."""

    quizzes_completed: int = 0
    average_percentage: int = 0
    total_time_seconds: int = 0
    best_score: int = 0


@dataclass(slots=True)
class HistoryEntry:
    """One past attempt as listed on the user's history."""

    quiz_id: str
    quiz_title: str | None
    difficulty: str | None
    score: int
    correct_count: int
    total_questions: int
    percentage: int
    time_taken_seconds: int
    completed_at: datetime
