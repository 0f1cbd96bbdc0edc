"""Card showing one question with its answer buttons."""

from __future__ import annotations

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_runner.constants.quiz_constants import ANSWER_FEEDBACK_DELAY_MS
from quiz_runner.core.markdown_renderer import renderer
from quiz_runner.core.models import Question
from quiz_runner.core.quiz_importer import OPTION_LETTERS
from quiz_runner.styling.styles import Styles


class QuestionCard(QWidget):
    """Lets the user pick one option, shows right/wrong, then reports the choice.

    ``option_chosen`` is emitted after the feedback delay with the selected option id.
    """

    option_chosen = Signal(str)

    def __init__(self, parent: QWidget | None = None, feedback_delay_ms: int = ANSWER_FEEDBACK_DELAY_MS) -> None:
        super().__init__(parent)
        self._question: Question | None = None
        self._selected_option_id: str | None = None
        self._has_answered: bool = False
        self._feedback_delay_ms = feedback_delay_ms
        self._option_buttons: list[tuple[str, QPushButton]] = []

        self._feedback_timer = QTimer(self)
        self._feedback_timer.setSingleShot(True)
        self._feedback_timer.timeout.connect(self._emit_choice)

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        progress_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        progress_row.addWidget(self.progress_label)
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedHeight(8)
        progress_row.addWidget(self.progress_bar, stretch=1)
        layout.addLayout(progress_row)

        self.question_label = QLabel(self)
        self.question_label.setTextFormat(Qt.RichText)
        self.question_label.setWordWrap(True)
        self.question_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.question_label)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)
        layout.addStretch()

    def show_question(self, question: Question, number: int, total: int) -> None:
        """Display ``question`` as question ``number`` (1-indexed) of ``total``."""
        self._feedback_timer.stop()
        self._question = question
        self._selected_option_id = None
        self._has_answered = False

        self.progress_label.setText(f"Question {number} of {total}")
        self.progress_bar.setRange(0, max(1, total))
        self.progress_bar.setValue(number)
        self.question_label.setText(renderer.render_fragment(question.question_text))
        self._rebuild_option_buttons(question)

    def cancel_feedback(self) -> None:
        """Drop a pending choice, e.g. when the attempt ends during the feedback delay."""
        self._feedback_timer.stop()
        self._set_buttons_enabled(False)

    def _rebuild_option_buttons(self, question: Question) -> None:
        for _, button in self._option_buttons:
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self._option_buttons = []

        for letter, option in zip(OPTION_LETTERS, question.options):
            button = QPushButton(f"{letter}.  {option.text}", self)
            button.setStyleSheet(Styles.get_option_style("idle"))
            button.clicked.connect(lambda _checked=False, option_id=option.id: self._handle_select(option_id))
            self.options_layout.addWidget(button)
            self._option_buttons.append((option.id, button))

    def _handle_select(self, option_id: str) -> None:
        if self._has_answered or self._question is None:
            return
        self._has_answered = True
        self._selected_option_id = option_id
        self._set_buttons_enabled(False)
        self._apply_feedback_styles()
        self._feedback_timer.start(self._feedback_delay_ms)

    def _apply_feedback_styles(self) -> None:
        if self._question is None:
            return
        correct_id = self._question.correct_option_id
        for option_id, button in self._option_buttons:
            if option_id == correct_id:
                state = "correct"
            elif option_id == self._selected_option_id:
                state = "wrong"
            else:
                state = "dimmed"
            button.setStyleSheet(Styles.get_option_style(state))

    def _set_buttons_enabled(self, enabled: bool) -> None:
        for _, button in self._option_buttons:
            button.setEnabled(enabled)

    def _emit_choice(self) -> None:
        if self._selected_option_id is not None:
            self.option_chosen.emit(self._selected_option_id)
