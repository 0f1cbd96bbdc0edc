"""Component for authoring quizzes and their questions."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from quiz_runner.constants.quiz_constants import (
    DEFAULT_DIFFICULTY,
    DEFAULT_TIME_LIMIT_SECONDS,
    DIFFICULTY_LEVELS,
    MAX_OPTIONS_PER_QUESTION,
)
from quiz_runner.constants.ui_constants import (
    ADMIN_DELETE_QUESTION_BUTTON,
    ADMIN_DELETE_QUIZ_BUTTON,
    ADMIN_EXPORT_BUTTON,
    ADMIN_IMPORT_BUTTON,
    ADMIN_INSERT_QUESTION_BUTTON,
    ADMIN_NEW_QUIZ_BUTTON,
    ADMIN_SAVE_QUESTION_BUTTON,
    ADMIN_SAVE_QUIZ_BUTTON,
    ADMIN_TOGGLE_STATUS_BUTTON,
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    PLACEHOLDER_QUESTION,
)
from quiz_runner.core.errors import QuizNotFoundError
from quiz_runner.core.markdown_renderer import renderer
from quiz_runner.core.models import Option, Question, Quiz
from quiz_runner.core.quiz_exporter import save_quiz_to_file
from quiz_runner.core.quiz_importer import OPTION_LETTERS, QuizImportError, load_quiz_from_file
from quiz_runner.core.services.quiz_repository import InMemoryQuizRepository
from quiz_runner.ui.dialog_helpers import (
    check_unsaved_changes,
    confirm_delete_question,
    confirm_delete_quiz,
    show_error,
    show_info,
    show_warning,
)


class AdminPanel(QWidget):
    """UI component for creating quizzes and editing their questions."""

    def __init__(self, repository: InMemoryQuizRepository, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.repository = repository
        self._current_quiz_id: str | None = None
        self._current_question_index: int = -1
        self._has_unsaved_changes: bool = False

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        # Quiz list
        list_column = QVBoxLayout()
        self.stats_label = QLabel("", self)
        list_column.addWidget(self.stats_label)
        self.quiz_list = QListWidget(self)
        self.quiz_list.currentItemChanged.connect(self._handle_quiz_selected)
        list_column.addWidget(self.quiz_list, stretch=1)

        for text, handler in (
            (ADMIN_NEW_QUIZ_BUTTON, self._handle_new_quiz),
            (ADMIN_DELETE_QUIZ_BUTTON, self._handle_delete_quiz),
            (ADMIN_TOGGLE_STATUS_BUTTON, self._handle_toggle_status),
            (ADMIN_IMPORT_BUTTON, self._handle_import_quiz),
            (ADMIN_EXPORT_BUTTON, self._handle_export_quiz),
        ):
            button = QPushButton(text, self)
            button.clicked.connect(handler)
            list_column.addWidget(button)
        layout.addLayout(list_column, stretch=1)

        editor_column = QVBoxLayout()
        editor_column.addWidget(self._build_quiz_details_group())
        editor_column.addWidget(self._build_question_group(), stretch=1)

        self.status_label = QLabel("Select or create a quiz.", self)
        editor_column.addWidget(self.status_label)
        layout.addLayout(editor_column, stretch=3)

    def _build_quiz_details_group(self) -> QGroupBox:
        group = QGroupBox("Quiz details", self)
        form = QFormLayout()
        group.setLayout(form)

        self.title_input = QLineEdit(group)
        form.addRow("Title", self.title_input)
        self.description_input = QLineEdit(group)
        form.addRow("Description", self.description_input)

        self.time_limit_spinbox = QSpinBox(group)
        self.time_limit_spinbox.setRange(1, 180)
        self.time_limit_spinbox.setSuffix(" min")
        self.time_limit_spinbox.setValue(DEFAULT_TIME_LIMIT_SECONDS // 60)
        form.addRow("Time limit", self.time_limit_spinbox)

        self.difficulty_combo = QComboBox(group)
        for level in DIFFICULTY_LEVELS:
            self.difficulty_combo.addItem(level.capitalize(), userData=level)
        self.difficulty_combo.setCurrentIndex(DIFFICULTY_LEVELS.index(DEFAULT_DIFFICULTY))
        form.addRow("Difficulty", self.difficulty_combo)

        save_button = QPushButton(ADMIN_SAVE_QUIZ_BUTTON, group)
        save_button.clicked.connect(self._handle_save_quiz)
        form.addRow(save_button)
        return group

    def _build_question_group(self) -> QGroupBox:
        group = QGroupBox("Questions", self)
        layout = QVBoxLayout()
        group.setLayout(layout)

        action_row = QHBoxLayout()
        for text, handler in (
            (ADMIN_INSERT_QUESTION_BUTTON, self._handle_insert_new_draft),
            (ADMIN_SAVE_QUESTION_BUTTON, self._handle_save_draft),
            (ADMIN_DELETE_QUESTION_BUTTON, self._handle_delete_draft),
        ):
            button = QPushButton(text, group)
            button.clicked.connect(handler)
            action_row.addWidget(button)
        prev_button = QPushButton("<", group)
        prev_button.clicked.connect(lambda: self._navigate_drafts(-1))
        action_row.addWidget(prev_button)
        next_button = QPushButton(">", group)
        next_button.clicked.connect(lambda: self._navigate_drafts(1))
        action_row.addWidget(next_button)
        layout.addLayout(action_row)

        self.question_input = QPlainTextEdit(group)
        self.question_input.setPlaceholderText(PLACEHOLDER_QUESTION)
        self.question_input.textChanged.connect(self._on_input_changed)
        layout.addWidget(self.question_input)

        self.option_inputs: list[QLineEdit] = []
        for letter in OPTION_LETTERS[:MAX_OPTIONS_PER_QUESTION]:
            option_input = QLineEdit(group)
            option_input.setPlaceholderText(f"Option {letter} (leave empty to omit)")
            option_input.textChanged.connect(self._on_input_changed)
            layout.addWidget(option_input)
            self.option_inputs.append(option_input)

        selector_row = QHBoxLayout()
        selector_row.addWidget(QLabel("Correct option:", group))
        self.correct_option_combo = QComboBox(group)
        self.correct_option_combo.addItem("Select…", userData=None)
        for letter in OPTION_LETTERS[:MAX_OPTIONS_PER_QUESTION]:
            self.correct_option_combo.addItem(letter, userData=letter.lower())
        self.correct_option_combo.currentIndexChanged.connect(self._on_input_changed)
        selector_row.addWidget(self.correct_option_combo)
        selector_row.addStretch()
        layout.addLayout(selector_row)

        self.preview_label = QLabel(group)
        self.preview_label.setTextFormat(Qt.RichText)
        self.preview_label.setWordWrap(True)
        layout.addWidget(self.preview_label, stretch=1)
        return group

    # --- Quiz list ---

    def refresh(self) -> None:
        quizzes = self.repository.list_quizzes()
        published = sum(1 for quiz in quizzes if quiz.published)
        total_questions = sum(quiz.question_count for quiz in quizzes)
        self.stats_label.setText(
            f"{len(quizzes)} quizzes · {published} published · {total_questions} questions"
        )

        self.quiz_list.blockSignals(True)
        self.quiz_list.clear()
        for quiz in quizzes:
            status = "published" if quiz.published else "draft"
            item = QListWidgetItem(f"{quiz.title} ({status}, {quiz.question_count} Q)")
            item.setData(Qt.UserRole, quiz.id)
            self.quiz_list.addItem(item)
            if quiz.id == self._current_quiz_id:
                self.quiz_list.setCurrentItem(item)
        self.quiz_list.blockSignals(False)

        if self._current_quiz_id is not None and self.repository.get_quiz(self._current_quiz_id) is None:
            self._select_quiz(None)

    def _handle_quiz_selected(self, current: QListWidgetItem | None, _previous=None) -> None:
        if not self.check_unsaved_changes():
            return
        self._select_quiz(current.data(Qt.UserRole) if current is not None else None)

    def _select_quiz(self, quiz_id: str | None) -> None:
        self._current_quiz_id = quiz_id
        quiz = self.repository.get_quiz(quiz_id) if quiz_id else None
        if quiz is None:
            self._current_quiz_id = None
            self.title_input.clear()
            self.description_input.clear()
            self._current_question_index = -1
            self.clear_fields()
            self.status_label.setText("Select or create a quiz.")
            return

        self.title_input.setText(quiz.title)
        self.description_input.setText(quiz.description or "")
        self.time_limit_spinbox.setValue(max(1, quiz.time_limit_seconds // 60))
        self.difficulty_combo.setCurrentIndex(DIFFICULTY_LEVELS.index(quiz.difficulty))
        if quiz.questions:
            self._current_question_index = 0
            self.populate_fields(quiz.questions[0])
            self.status_label.setText(f"Viewing question 1 of {quiz.question_count}.")
        else:
            self._current_question_index = -1
            self.clear_fields()
            self.status_label.setText("This quiz has no questions yet.")

    def _selected_quiz(self) -> Quiz | None:
        if self._current_quiz_id is None:
            return None
        return self.repository.get_quiz(self._current_quiz_id)

    def _handle_new_quiz(self) -> None:
        if not self.check_unsaved_changes():
            return
        try:
            quiz = self.repository.add_quiz(
                Quiz(
                    id="",
                    title="Untitled quiz",
                    time_limit_seconds=DEFAULT_TIME_LIMIT_SECONDS,
                    published=False,
                )
            )
        except (OSError, ValueError) as exc:
            show_error(self, "Create failed", str(exc))
            return
        self._current_quiz_id = quiz.id
        self.refresh()
        self._select_quiz(quiz.id)
        self.status_label.setText("Your new quiz has been created as a draft.")

    def _handle_save_quiz(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None:
            show_info(self, "No quiz", "Select or create a quiz first.")
            return
        try:
            self.repository.update_quiz(
                quiz.id,
                title=self.title_input.text(),
                description=self.description_input.text(),
                time_limit_seconds=int(self.time_limit_spinbox.value()) * 60,
                difficulty=self.difficulty_combo.currentData(),
            )
        except (OSError, ValueError) as exc:
            show_warning(self, "Invalid quiz", str(exc))
            return
        self.refresh()
        self.status_label.setText("Quiz details saved.")

    def _handle_delete_quiz(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None or not confirm_delete_quiz(self, quiz.title):
            return
        try:
            self.repository.delete_quiz(quiz.id)
        except (OSError, QuizNotFoundError) as exc:
            show_error(self, "Delete failed", str(exc))
            return
        self._has_unsaved_changes = False
        self._select_quiz(None)
        self.refresh()
        self.status_label.setText("The quiz has been permanently deleted.")

    def _handle_toggle_status(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None:
            return
        try:
            self.repository.set_published(quiz.id, not quiz.published)
        except (OSError, ValueError) as exc:
            show_error(self, "Update failed", str(exc))
            return
        self.refresh()

    def _handle_import_quiz(self) -> None:
        if not self.check_unsaved_changes():
            return
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return
        try:
            imported = load_quiz_from_file(Path(file_path))
            if self.repository.get_quiz(imported.id) is not None:
                imported = Quiz(
                    id="",
                    title=imported.title,
                    time_limit_seconds=imported.time_limit_seconds,
                    questions=imported.questions,
                    description=imported.description,
                    difficulty=imported.difficulty,
                    published=imported.published,
                )
            quiz = self.repository.add_quiz(imported)
        except (OSError, QuizImportError, ValueError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        self._current_quiz_id = quiz.id
        self.refresh()
        self._select_quiz(quiz.id)
        show_info(self, "Quiz imported", f"Imported '{quiz.title}' with {quiz.question_count} questions.")

    def _handle_export_quiz(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None:
            show_info(self, "No quiz", "Select a quiz to export.")
            return
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            EXPORT_DIALOG_TITLE,
            str(Path.cwd() / f"{quiz.id}.txt"),
            EXPORT_FILE_FILTER,
        )
        if not file_path:
            return
        try:
            save_quiz_to_file(Path(file_path), quiz)
        except (OSError, ValueError) as exc:
            show_error(self, "Export failed", str(exc))
            return
        show_info(self, "Quiz saved", f"Quiz exported to {file_path}.")

    # --- Question editing ---

    def _on_input_changed(self) -> None:
        self._has_unsaved_changes = True
        self._refresh_preview()

    def _handle_insert_new_draft(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None:
            show_info(self, "No quiz", "Select or create a quiz first.")
            return
        if not self.check_unsaved_changes():
            return
        self._current_question_index = quiz.question_count
        self.clear_fields()
        self.status_label.setText("Ready to insert a new question.")

    def _handle_save_draft(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None:
            show_info(self, "No quiz", "Select or create a quiz first.")
            return
        try:
            draft = self._build_draft_from_inputs()
        except ValueError as exc:
            show_warning(self, "Invalid question", str(exc))
            return

        try:
            if self._current_question_index == -1 or self._current_question_index >= quiz.question_count:
                self.repository.add_question(quiz.id, draft)
                self._current_question_index = quiz.question_count
            else:
                self.repository.update_question(quiz.id, self._current_question_index, draft)
        except (OSError, ValueError, IndexError) as exc:
            show_error(self, "Save failed", f"Could not save question: {exc}")
            return

        self._has_unsaved_changes = False
        count = self.repository.get_quiz(quiz.id).question_count
        self.refresh()
        self.status_label.setText(f"Saved question {self._current_question_index + 1} of {count}.")

    def _handle_delete_draft(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None or self._current_question_index == -1:
            show_info(self, "No selection", "Select a question before deleting.")
            return

        if self._current_question_index >= quiz.question_count:
            self.clear_fields()
            self._current_question_index = -1
            self.status_label.setText("Discarded unsaved question.")
            return

        if not confirm_delete_question(self, self._current_question_index + 1):
            return

        try:
            self.repository.delete_question(quiz.id, self._current_question_index)
        except (OSError, IndexError) as exc:
            show_error(self, "Delete failed", f"Could not delete question: {exc}")
            return

        self.refresh()
        quiz = self._selected_quiz()
        if quiz is None or quiz.question_count == 0:
            self._current_question_index = -1
            self.clear_fields()
            self.status_label.setText("All questions removed.")
            return

        self._current_question_index = min(self._current_question_index, quiz.question_count - 1)
        self.populate_fields(quiz.questions[self._current_question_index])
        self.status_label.setText(
            f"Deleted question. Now viewing {self._current_question_index + 1} of {quiz.question_count}."
        )

    def _navigate_drafts(self, step: int) -> None:
        quiz = self._selected_quiz()
        if quiz is None or not quiz.questions:
            return
        if not self.check_unsaved_changes():
            return
        target = self._current_question_index + step if self._current_question_index != -1 else 0
        target = max(0, min(quiz.question_count - 1, target))
        self._current_question_index = target
        self.populate_fields(quiz.questions[target])
        self.status_label.setText(f"Viewing question {target + 1} of {quiz.question_count}.")

    def check_unsaved_changes(self) -> bool:
        """Check if there are unsaved changes and prompt user. Returns True if ok to proceed."""
        if not self._has_unsaved_changes:
            return True

        result = check_unsaved_changes(self)

        if result is True:  # Save
            self._handle_save_draft()
            return not self._has_unsaved_changes
        elif result is False:  # Discard
            self._has_unsaved_changes = False
            return True
        else:  # Cancel (None)
            return False

    def clear_fields(self) -> None:
        self.question_input.clear()
        for input_field in self.option_inputs:
            input_field.clear()
        self.correct_option_combo.setCurrentIndex(0)
        self._has_unsaved_changes = False
        self._refresh_preview()

    def populate_fields(self, question: Question) -> None:
        self.question_input.setPlainText(question.question_text)
        for index, field in enumerate(self.option_inputs):
            field.setText(question.options[index].text if index < len(question.options) else "")
        correct_position = next(
            (i for i, option in enumerate(question.options) if option.id == question.correct_option_id),
            None,
        )
        self.correct_option_combo.setCurrentIndex(0 if correct_position is None else correct_position + 1)
        self._has_unsaved_changes = False
        self._refresh_preview()

    def _build_draft_from_inputs(self) -> Question:
        question_text = self.question_input.toPlainText().strip()
        texts = [field.text().strip() for field in self.option_inputs]
        while texts and not texts[-1]:
            texts.pop()
        if any(not text for text in texts):
            raise ValueError("Options must be filled in order without gaps.")
        correct_id = self.correct_option_combo.currentData()
        if correct_id is None:
            raise ValueError("Select the correct option before saving.")
        options = tuple(
            Option(id=letter.lower(), text=text) for letter, text in zip(OPTION_LETTERS, texts)
        )
        return Question(
            id="",
            question_text=question_text,
            options=options,
            correct_option_id=correct_id,
        )

    def _refresh_preview(self) -> None:
        lines = [self.question_input.toPlainText() or "(No question text)", ""]
        for letter, field in zip(OPTION_LETTERS, self.option_inputs):
            if field.text().strip():
                lines.append(f"**{letter}.** {field.text()}")
        self.preview_label.setText(renderer.render_fragment("\n\n".join(lines)))
