"""Component for taking a quiz: intro, questions under a countdown, results."""

from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quiz_runner.constants.quiz_constants import PASSING_PERCENTAGE
from quiz_runner.constants.ui_constants import (
    BACK_TO_DASHBOARD_BUTTON,
    EMPTY_QUIZ_MESSAGE,
    EXIT_QUIZ_BUTTON,
    RESULTS_FAILED_MESSAGE,
    RESULTS_FAILED_TITLE,
    RESULTS_PASSED_MESSAGE,
    RESULTS_PASSED_TITLE,
    SHOW_LEADERBOARD_BUTTON,
    SIGN_IN_REQUIRED_MESSAGE,
    START_QUIZ_BUTTON,
    SUBMISSION_FAILED_MESSAGE,
    TIME_UP_MESSAGE,
)
from quiz_runner.core.errors import EmptyQuizError, NotSignedInError, QuizNotFoundError
from quiz_runner.core.models import AttemptSummary, Phase
from quiz_runner.core.services.auth_context import AuthContext
from quiz_runner.core.services.countdown_timer import format_clock
from quiz_runner.core.services.quiz_repository import QuizRepository
from quiz_runner.core.services.session_controller import SessionController
from quiz_runner.styling.color_palette import ColorPalette, Theme
from quiz_runner.styling.styles import Styles
from quiz_runner.ui.components.question_card import QuestionCard
from quiz_runner.ui.components.timer_widget import TimerWidget
from quiz_runner.ui.dialog_helpers import confirm_exit_quiz, show_error, show_warning

logger = logging.getLogger(__name__)

_INTRO_PAGE = 0
_ACTIVE_PAGE = 1
_RESULTS_PAGE = 2


def results_headline(summary: AttemptSummary) -> tuple[str, str]:
    """Title and message shown above the results of a finished attempt."""
    passing = summary.percentage >= PASSING_PERCENTAGE
    title = RESULTS_PASSED_TITLE if passing else RESULTS_FAILED_TITLE
    if summary.timed_out:
        return title, TIME_UP_MESSAGE
    return title, RESULTS_PASSED_MESSAGE if passing else RESULTS_FAILED_MESSAGE


class QuizPanel(QWidget):
    """Hosts one SessionController at a time and renders its state."""

    def __init__(
        self,
        repository: QuizRepository,
        auth: AuthContext,
        on_leave: Callable[[], None],
        on_show_leaderboard: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.repository = repository
        self.auth = auth
        self.on_leave = on_leave
        self.on_show_leaderboard = on_show_leaderboard
        self._controller: SessionController | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        self.page_stack = QStackedWidget(self)
        layout.addWidget(self.page_stack)

        self.page_stack.addWidget(self._build_intro_page())
        self.page_stack.addWidget(self._build_active_page())
        self.page_stack.addWidget(self._build_results_page())

    def _build_intro_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)

        back_button = QPushButton(BACK_TO_DASHBOARD_BUTTON, page)
        back_button.clicked.connect(self._handle_leave)
        layout.addWidget(back_button, alignment=Qt.AlignLeft)

        self.intro_title_label = QLabel("", page)
        self.intro_title_label.setAlignment(Qt.AlignCenter)
        self.intro_title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.intro_title_label)

        self.intro_description_label = QLabel("", page)
        self.intro_description_label.setAlignment(Qt.AlignCenter)
        self.intro_description_label.setWordWrap(True)
        layout.addWidget(self.intro_description_label)

        facts = QGridLayout()
        self.intro_question_count_label = self._add_stat(facts, 0, "Questions", ColorPalette.ACCENT_PRIMARY)
        self.intro_time_limit_label = self._add_stat(facts, 1, "Time Limit", ColorPalette.SUCCESS)
        self.intro_max_points_label = self._add_stat(facts, 2, "Max Points", ColorPalette.ACCENT_SECONDARY)
        layout.addLayout(facts)

        self.start_button = QPushButton(START_QUIZ_BUTTON, page)
        self.start_button.clicked.connect(self._handle_start)
        layout.addWidget(self.start_button)
        layout.addStretch()
        return page

    def _build_active_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)

        header = QHBoxLayout()
        exit_button = QPushButton(EXIT_QUIZ_BUTTON, page)
        exit_button.clicked.connect(self._handle_exit_request)
        header.addWidget(exit_button)
        header.addStretch()

        self.timer_widget = TimerWidget(page)
        header.addWidget(self.timer_widget)
        header.addStretch()

        self.score_label = QLabel("Score: 0", page)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        header.addWidget(self.score_label)
        layout.addLayout(header)

        self.question_card = QuestionCard(page)
        self.question_card.option_chosen.connect(self._handle_option_chosen)
        layout.addWidget(self.question_card, stretch=1)
        return page

    def _build_results_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)

        self.results_title_label = QLabel("", page)
        self.results_title_label.setAlignment(Qt.AlignCenter)
        self.results_title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.results_title_label)

        self.results_message_label = QLabel("", page)
        self.results_message_label.setAlignment(Qt.AlignCenter)
        self.results_message_label.setWordWrap(True)
        layout.addWidget(self.results_message_label)

        stats = QGridLayout()
        self.results_points_label = self._add_stat(stats, 0, "Points", ColorPalette.ACCENT_PRIMARY)
        self.results_accuracy_label = self._add_stat(stats, 1, "Accuracy", ColorPalette.SUCCESS)
        self.results_time_label = self._add_stat(stats, 2, "Time", ColorPalette.ACCENT_SECONDARY)
        layout.addLayout(stats)

        self.submission_label = QLabel("", page)
        self.submission_label.setAlignment(Qt.AlignCenter)
        self.submission_label.setWordWrap(True)
        self.submission_label.setVisible(False)
        layout.addWidget(self.submission_label)

        buttons = QHBoxLayout()
        leaderboard_button = QPushButton(SHOW_LEADERBOARD_BUTTON, page)
        leaderboard_button.clicked.connect(self._handle_show_leaderboard)
        buttons.addWidget(leaderboard_button)
        dashboard_button = QPushButton(BACK_TO_DASHBOARD_BUTTON, page)
        dashboard_button.clicked.connect(self._handle_leave)
        buttons.addWidget(dashboard_button)
        layout.addLayout(buttons)
        layout.addStretch()
        return page

    def _add_stat(self, grid: QGridLayout, column: int, caption: str, color) -> QLabel:
        value_label = QLabel("-", self)
        value_label.setAlignment(Qt.AlignCenter)
        value_label.setStyleSheet(Styles.get_stat_value_style(color.get(Theme.DARK)))
        caption_label = QLabel(caption, self)
        caption_label.setAlignment(Qt.AlignCenter)
        grid.addWidget(value_label, 0, column)
        grid.addWidget(caption_label, 1, column)
        return value_label

    # --- Session wiring ---

    def open_quiz(self, quiz_id: str) -> bool:
        """Create a fresh attempt for ``quiz_id``; returns False when it cannot be shown."""
        self.close_session()
        controller = SessionController(self.repository, self.auth, parent=self)
        try:
            quiz = controller.load(quiz_id)
        except QuizNotFoundError as exc:
            controller.dispose()
            controller.deleteLater()
            show_error(self, "Quiz not found", str(exc))
            return False

        controller.phase_changed.connect(self._handle_phase_changed)
        controller.question_changed.connect(self._handle_question_changed)
        controller.score_changed.connect(self._handle_score_changed)
        controller.remaining_changed.connect(self.timer_widget.set_remaining)
        controller.finished.connect(self._handle_finished)
        controller.submission_failed.connect(self._handle_submission_failed)
        self._controller = controller

        self.intro_title_label.setText(quiz.title)
        self.intro_description_label.setText(quiz.description or "")
        self.intro_question_count_label.setText(str(controller.total_questions))
        self.intro_time_limit_label.setText(format_clock(quiz.time_limit_seconds))
        self.intro_max_points_label.setText(str(quiz.max_points))
        self.timer_widget.set_total(quiz.time_limit_seconds)
        self.page_stack.setCurrentIndex(_INTRO_PAGE)
        return True

    def close_session(self) -> None:
        """Dispose the current attempt; an unfinished one is discarded."""
        if self._controller is None:
            return
        self.question_card.cancel_feedback()
        self._controller.dispose()
        self._controller.deleteLater()
        self._controller = None

    def has_active_attempt(self) -> bool:
        return self._controller is not None and self._controller.phase is Phase.ACTIVE

    def _handle_start(self) -> None:
        if self._controller is None:
            return
        try:
            self._controller.start()
        except EmptyQuizError:
            show_warning(self, "Cannot start", EMPTY_QUIZ_MESSAGE)
        except NotSignedInError:
            show_warning(self, "Sign in required", SIGN_IN_REQUIRED_MESSAGE)

    def _handle_phase_changed(self, phase: Phase) -> None:
        if phase is Phase.ACTIVE:
            self.page_stack.setCurrentIndex(_ACTIVE_PAGE)
        elif phase is Phase.FINISHED:
            self.question_card.cancel_feedback()
            self.page_stack.setCurrentIndex(_RESULTS_PAGE)

    def _handle_question_changed(self, index: int) -> None:
        if self._controller is None:
            return
        question = self._controller.current_question
        if question is not None:
            self.question_card.show_question(question, index + 1, self._controller.total_questions)

    def _handle_score_changed(self, score: int, _correct_count: int) -> None:
        self.score_label.setText(f"Score: {score}")

    def _handle_option_chosen(self, option_id: str) -> None:
        if self._controller is not None:
            self._controller.answer(option_id)

    def _handle_finished(self, summary: AttemptSummary) -> None:
        title, message = results_headline(summary)
        self.results_title_label.setText(title)
        self.results_message_label.setText(message)
        self.results_points_label.setText(str(summary.score))
        self.results_accuracy_label.setText(f"{summary.percentage}%")
        self.results_time_label.setText(format_clock(summary.elapsed_seconds))
        self.submission_label.setVisible(False)

    def _handle_submission_failed(self, reason: str) -> None:
        logger.warning("Result not saved: %s", reason)
        self.submission_label.setText(f"{SUBMISSION_FAILED_MESSAGE}\n({reason})")
        self.submission_label.setVisible(True)

    def _handle_exit_request(self) -> None:
        if self.has_active_attempt() and not confirm_exit_quiz(self):
            return
        self._handle_leave()

    def _handle_leave(self) -> None:
        self.close_session()
        self.on_leave()

    def _handle_show_leaderboard(self) -> None:
        self.close_session()
        self.on_show_leaderboard()
