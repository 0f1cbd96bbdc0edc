"""Component listing available quizzes, the user's statistics and quiz history."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHeaderView,
    QLabel,
    QPushButton,
    QScrollArea,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from quiz_runner.constants.ui_constants import (
    HISTORY_GROUP_TITLE,
    NO_HISTORY_MESSAGE,
    NO_QUIZZES_MESSAGE,
    START_QUIZ_BUTTON,
)
from quiz_runner.core.models import HistoryEntry, Quiz, UserStats
from quiz_runner.core.services.auth_context import AuthContext
from quiz_runner.core.services.countdown_timer import format_clock
from quiz_runner.core.services.leaderboard import Leaderboard
from quiz_runner.core.services.quiz_repository import InMemoryQuizRepository
from quiz_runner.styling.color_palette import ColorPalette, Theme
from quiz_runner.styling.styles import Styles

_HISTORY_COLUMNS = ("Quiz", "Difficulty", "Score", "Accuracy", "Time", "Date")

_DIFFICULTY_COLORS = {
    "easy": ColorPalette.SUCCESS,
    "medium": ColorPalette.WARNING,
    "hard": ColorPalette.ERROR,
}


class DashboardPanel(QWidget):
    """Shows quiz cards and a row of personal stats."""

    def __init__(
        self,
        repository: InMemoryQuizRepository,
        auth: AuthContext,
        on_start_quiz: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.repository = repository
        self.auth = auth
        self.on_start_quiz = on_start_quiz
        self._leaderboard = Leaderboard()

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.welcome_label = QLabel("", self)
        self.welcome_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.welcome_label)

        stats_grid = QGridLayout()
        self.stat_labels: dict[str, QLabel] = {}
        captions = (
            ("completed", "Quizzes Completed"),
            ("average", "Average Score"),
            ("time", "Total Time"),
            ("best", "Best Score"),
        )
        for column, (key, caption) in enumerate(captions):
            value_label = QLabel("-", self)
            value_label.setAlignment(Qt.AlignCenter)
            value_label.setStyleSheet(
                Styles.get_stat_value_style(ColorPalette.ACCENT_PRIMARY.get(Theme.DARK))
            )
            caption_label = QLabel(caption, self)
            caption_label.setAlignment(Qt.AlignCenter)
            stats_grid.addWidget(value_label, 0, column)
            stats_grid.addWidget(caption_label, 1, column)
            self.stat_labels[key] = value_label
        layout.addLayout(stats_grid)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        self.cards_container = QWidget(scroll)
        self.cards_layout = QGridLayout()
        self.cards_container.setLayout(self.cards_layout)
        scroll.setWidget(self.cards_container)
        layout.addWidget(scroll, stretch=2)

        history_group = QGroupBox(HISTORY_GROUP_TITLE, self)
        history_layout = QVBoxLayout()
        history_group.setLayout(history_layout)
        self.history_empty_label = QLabel(NO_HISTORY_MESSAGE, history_group)
        history_layout.addWidget(self.history_empty_label)
        self.history_table = QTableWidget(0, len(_HISTORY_COLUMNS), history_group)
        self.history_table.setHorizontalHeaderLabels(list(_HISTORY_COLUMNS))
        self.history_table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.history_table.verticalHeader().setVisible(False)
        self.history_table.setEditTriggers(QTableWidget.NoEditTriggers)
        history_layout.addWidget(self.history_table)
        layout.addWidget(history_group, stretch=1)

    def refresh(self) -> None:
        user = self.auth.current_user
        if user is None:
            self.welcome_label.setText("Welcome! Sign in to take a quiz.")
            self._show_stats(UserStats())
            self._show_history([])
        else:
            self.welcome_label.setText(f"Welcome back, {user.display_name}")
            attempts = self.repository.list_attempts()
            quizzes = {quiz.id: quiz for quiz in self.repository.list_quizzes()}
            self._show_stats(self._leaderboard.user_stats(attempts, user.user_id))
            self._show_history(self._leaderboard.user_history(attempts, user.user_id, quizzes))
        self._rebuild_cards(self.repository.list_quizzes(published_only=True))

    def _show_stats(self, stats: UserStats) -> None:
        self.stat_labels["completed"].setText(str(stats.quizzes_completed))
        self.stat_labels["average"].setText(f"{stats.average_percentage}%")
        self.stat_labels["time"].setText(format_clock(stats.total_time_seconds))
        self.stat_labels["best"].setText(str(stats.best_score))

    def _show_history(self, entries: list[HistoryEntry]) -> None:
        self.history_empty_label.setVisible(not entries)
        self.history_table.setVisible(bool(entries))
        self.history_table.setRowCount(len(entries))
        for row_index, entry in enumerate(entries):
            values = (
                entry.quiz_title or entry.quiz_id,
                (entry.difficulty or "-").capitalize(),
                str(entry.score),
                f"{entry.correct_count}/{entry.total_questions} ({entry.percentage}%)",
                format_clock(entry.time_taken_seconds),
                entry.completed_at.strftime("%Y-%m-%d %H:%M"),
            )
            for column, value in enumerate(values):
                self.history_table.setItem(row_index, column, QTableWidgetItem(value))

    def _rebuild_cards(self, quizzes: list[Quiz]) -> None:
        while self.cards_layout.count():
            item = self.cards_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        if not quizzes:
            self.cards_layout.addWidget(QLabel(NO_QUIZZES_MESSAGE, self.cards_container), 0, 0)
            return

        for position, quiz in enumerate(quizzes):
            row, column = divmod(position, 2)
            self.cards_layout.addWidget(self._build_card(quiz), row, column)

    def _build_card(self, quiz: Quiz) -> QGroupBox:
        card = QGroupBox(quiz.title, self.cards_container)
        layout = QVBoxLayout()
        card.setLayout(layout)

        description = QLabel(quiz.description or "", card)
        description.setWordWrap(True)
        layout.addWidget(description)

        participants = len(self.repository.list_attempts(quiz.id))
        details = QLabel(
            f"{quiz.question_count} questions · {format_clock(quiz.time_limit_seconds)} · "
            f"{participants} attempts",
            card,
        )
        layout.addWidget(details)

        color = _DIFFICULTY_COLORS.get(quiz.difficulty, ColorPalette.TEXT_SECONDARY)
        difficulty = QLabel(quiz.difficulty.capitalize(), card)
        difficulty.setStyleSheet(f"color: {color.get(Theme.DARK)}; font-weight: bold;")
        layout.addWidget(difficulty)

        start_button = QPushButton(START_QUIZ_BUTTON, card)
        start_button.clicked.connect(lambda _checked=False, quiz_id=quiz.id: self.on_start_quiz(quiz_id))
        layout.addWidget(start_button)
        return card
