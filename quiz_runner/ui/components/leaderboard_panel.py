"""Component showing ranked attempts with quiz filter and name search."""

from __future__ import annotations

from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from quiz_runner.constants.ui_constants import ALL_QUIZZES_LABEL, LEADERBOARD_SIZE
from quiz_runner.core.services.countdown_timer import format_clock
from quiz_runner.core.services.leaderboard import Leaderboard
from quiz_runner.core.services.quiz_repository import InMemoryQuizRepository
from quiz_runner.styling.color_palette import ColorPalette, Theme
from quiz_runner.styling.styles import Styles

_MEDAL_COLORS = {1: ColorPalette.GOLD, 2: ColorPalette.SILVER, 3: ColorPalette.BRONZE}
_COLUMNS = ("Rank", "Player", "Quiz", "Score", "Time")


class LeaderboardPanel(QWidget):
    """Table of the best attempts across all quizzes or a single quiz."""

    def __init__(self, repository: InMemoryQuizRepository, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.repository = repository
        self._leaderboard = Leaderboard()
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel("Global Leaderboard", self)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        filter_row = QHBoxLayout()
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText("Search players...")
        self.search_input.textChanged.connect(lambda _: self.refresh_rows())
        filter_row.addWidget(self.search_input, stretch=1)

        self.quiz_combo = QComboBox(self)
        self.quiz_combo.currentIndexChanged.connect(lambda _: self.refresh_rows())
        filter_row.addWidget(self.quiz_combo)
        layout.addLayout(filter_row)

        self.table = QTableWidget(0, len(_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(_COLUMNS))
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        layout.addWidget(self.table, stretch=1)

    def refresh(self) -> None:
        """Reload the quiz filter choices, keeping the current selection if possible."""
        selected = self.quiz_combo.currentData()
        self.quiz_combo.blockSignals(True)
        self.quiz_combo.clear()
        self.quiz_combo.addItem(ALL_QUIZZES_LABEL, userData=None)
        for quiz in self.repository.list_quizzes():
            self.quiz_combo.addItem(quiz.title, userData=quiz.id)
        index = self.quiz_combo.findData(selected) if selected is not None else 0
        self.quiz_combo.setCurrentIndex(max(0, index))
        self.quiz_combo.blockSignals(False)
        self.refresh_rows()

    def refresh_rows(self) -> None:
        titles = {quiz.id: quiz.title for quiz in self.repository.list_quizzes()}
        rows = self._leaderboard.rank(
            self.repository.list_attempts(),
            titles,
            quiz_id=self.quiz_combo.currentData(),
            search=self.search_input.text(),
            limit=LEADERBOARD_SIZE,
        )
        self.table.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            values = (
                str(row.rank),
                row.display_name,
                row.quiz_title or "-",
                str(row.score),
                format_clock(row.time_taken_seconds),
            )
            for column, value in enumerate(values):
                item = QTableWidgetItem(value)
                medal = _MEDAL_COLORS.get(row.rank)
                if medal is not None:
                    item.setForeground(QColor(medal.get(Theme.DARK)))
                self.table.setItem(row_index, column, item)
