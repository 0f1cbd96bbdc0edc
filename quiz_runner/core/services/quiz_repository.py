"""Storage of quizzes, questions and completed attempts."""

from __future__ import annotations

from dataclasses import asdict, replace
from datetime import datetime
import json
import logging
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from quiz_runner.constants.quiz_constants import (
    DIFFICULTY_LEVELS,
    MAX_OPTIONS_PER_QUESTION,
    MIN_OPTIONS_PER_QUESTION,
)
from quiz_runner.core.errors import QuizNotFoundError, SubmissionFailedError
from quiz_runner.core.models import CompletedAttempt, Option, Question, Quiz
from quiz_runner.core.quiz_exporter import save_quiz_to_file
from quiz_runner.core.quiz_importer import QuizImportError, load_quiz_from_file

logger = logging.getLogger(__name__)

ATTEMPTS_FILE_NAME = "attempts.jsonl"


class QuizRepository(Protocol):
    """What a quiz session needs from storage."""

    def get_quiz(self, quiz_id: str) -> Quiz | None:
        ...

    def get_questions(self, quiz_id: str) -> list[Question]:
        ...

    def submit_attempt(self, attempt: CompletedAttempt) -> None:
        ...


class InMemoryQuizRepository:
    """Keeps quizzes and attempts in memory and validates authored content."""

    def __init__(self) -> None:
        self._quizzes: dict[str, Quiz] = {}
        self._attempts: list[CompletedAttempt] = []
        self._question_counter: int = 0

    # --- Reads ---

    def get_quiz(self, quiz_id: str) -> Quiz | None:
        return self._quizzes.get(quiz_id)

    def get_questions(self, quiz_id: str) -> list[Question]:
        quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            return []
        return list(quiz.questions)

    def list_quizzes(self, published_only: bool = False) -> list[Quiz]:
        quizzes = list(self._quizzes.values())
        if published_only:
            quizzes = [quiz for quiz in quizzes if quiz.published]
        return quizzes

    def list_attempts(self, quiz_id: str | None = None) -> list[CompletedAttempt]:
        if quiz_id is None:
            return list(self._attempts)
        return [attempt for attempt in self._attempts if attempt.quiz_id == quiz_id]

    # --- Attempts ---

    def submit_attempt(self, attempt: CompletedAttempt) -> None:
        self._attempts.append(attempt)

    # --- Quiz authoring ---

    def add_quiz(self, quiz: Quiz) -> Quiz:
        """Validate and store a new quiz, generating ids where missing."""
        quiz_id = quiz.id.strip() or uuid4().hex
        self._validate_quiz_id(quiz_id)
        if quiz_id in self._quizzes:
            raise ValueError(f"A quiz with id '{quiz_id}' already exists.")
        prepared = self._prepare_quiz(replace(quiz, id=quiz_id))
        prepared = replace(
            prepared,
            questions=tuple(self._prepare_question(question) for question in quiz.questions),
        )
        self._store_quiz(prepared)
        return prepared

    def update_quiz(self, quiz_id: str, **changes: object) -> Quiz:
        """Change quiz details (title, description, time limit, difficulty, published)."""
        if "id" in changes or "questions" in changes:
            raise ValueError("Use the question operations to change questions.")
        current = self._require_quiz(quiz_id)
        updated = self._prepare_quiz(replace(current, **changes))
        self._store_quiz(updated)
        return updated

    def set_published(self, quiz_id: str, published: bool) -> Quiz:
        return self.update_quiz(quiz_id, published=published)

    def delete_quiz(self, quiz_id: str) -> None:
        self._require_quiz(quiz_id)
        del self._quizzes[quiz_id]
        self._discard_quiz(quiz_id)

    def add_question(self, quiz_id: str, question: Question) -> Question:
        quiz = self._require_quiz(quiz_id)
        prepared = self._prepare_question(question)
        self._store_quiz(replace(quiz, questions=quiz.questions + (prepared,)))
        return prepared

    def update_question(self, quiz_id: str, index: int, question: Question) -> Question:
        quiz = self._require_quiz(quiz_id)
        if not 0 <= index < len(quiz.questions):
            raise IndexError(f"Question index {index} out of range")
        # Preserve the original ID
        prepared = replace(self._prepare_question(question), id=quiz.questions[index].id)
        questions = list(quiz.questions)
        questions[index] = prepared
        self._store_quiz(replace(quiz, questions=tuple(questions)))
        return prepared

    def delete_question(self, quiz_id: str, index: int) -> None:
        quiz = self._require_quiz(quiz_id)
        if not 0 <= index < len(quiz.questions):
            raise IndexError(f"Question index {index} out of range")
        questions = list(quiz.questions)
        questions.pop(index)
        self._store_quiz(replace(quiz, questions=tuple(questions)))

    # --- Storage hooks ---

    def _store_quiz(self, quiz: Quiz) -> None:
        self._quizzes[quiz.id] = quiz

    def _discard_quiz(self, quiz_id: str) -> None:
        """Called after a quiz has been removed from memory."""

    # --- Validation ---

    def _require_quiz(self, quiz_id: str) -> Quiz:
        quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(quiz_id)
        return quiz

    @staticmethod
    def _validate_quiz_id(quiz_id: str) -> None:
        # Ids double as file names, so they must be a single plain path component.
        if Path(quiz_id).name != quiz_id or quiz_id.startswith(".") or "\\" in quiz_id:
            raise ValueError(f"Quiz id '{quiz_id}' must be a plain name without path separators.")

    def _prepare_quiz(self, quiz: Quiz) -> Quiz:
        title = quiz.title.strip()
        if not title:
            raise ValueError("Quiz title is required.")
        if quiz.difficulty not in DIFFICULTY_LEVELS:
            raise ValueError(f"Difficulty must be one of: {', '.join(DIFFICULTY_LEVELS)}.")
        description = (quiz.description or "").strip() or None
        return replace(
            quiz,
            title=title,
            description=description,
            time_limit_seconds=self._normalize_time_limit(quiz.time_limit_seconds),
        )

    def _prepare_question(self, question: Question) -> Question:
        """Validate and normalize a question before storage."""
        cleaned_text = question.question_text.strip()
        if not cleaned_text:
            raise ValueError("Question text must not be empty.")
        options = self._validate_options(question.options)
        return Question(
            id=question.id.strip() or self._next_question_id(),
            question_text=cleaned_text,
            options=options,
            correct_option_id=question.correct_option_id,
        )

    def _next_question_id(self) -> str:
        self._question_counter += 1
        return f"q{self._question_counter}-{uuid4().hex[:8]}"

    @staticmethod
    def _validate_options(options: tuple[Option, ...]) -> tuple[Option, ...]:
        if not MIN_OPTIONS_PER_QUESTION <= len(options) <= MAX_OPTIONS_PER_QUESTION:
            raise ValueError(
                f"Each question must have between {MIN_OPTIONS_PER_QUESTION} "
                f"and {MAX_OPTIONS_PER_QUESTION} options."
            )
        cleaned = tuple(Option(id=option.id.strip(), text=option.text.strip()) for option in options)
        if any(not option.text for option in cleaned):
            raise ValueError("Option text cannot be empty.")
        if any(not option.id for option in cleaned):
            raise ValueError("Option id cannot be empty.")
        return cleaned

    @staticmethod
    def _normalize_time_limit(time_limit_seconds: int) -> int:
        if not isinstance(time_limit_seconds, int) or isinstance(time_limit_seconds, bool):
            raise ValueError("Time limit must be provided as an integer number of seconds.")
        if time_limit_seconds <= 0:
            raise ValueError("Time limit must be a positive integer.")
        return time_limit_seconds


class FileQuizRepository(InMemoryQuizRepository):
    """Repository backed by a directory of quiz text files and an attempt log."""

    def __init__(self, data_dir: Path) -> None:
        super().__init__()
        self._data_dir = data_dir.resolve()
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._attempts_path = self._data_dir / ATTEMPTS_FILE_NAME
        self._loading = False
        self._load_quizzes()
        self._load_attempts()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def submit_attempt(self, attempt: CompletedAttempt) -> None:
        record = asdict(attempt)
        record["completed_at"] = attempt.completed_at.isoformat()
        try:
            with self._attempts_path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(record) + "\n")
        except OSError as exc:
            raise SubmissionFailedError(f"Could not store attempt: {exc}") from exc
        super().submit_attempt(attempt)

    def quiz_path(self, quiz_id: str) -> Path:
        return self._data_dir / f"{quiz_id}.txt"

    def _store_quiz(self, quiz: Quiz) -> None:
        super()._store_quiz(quiz)
        if not self._loading:
            save_quiz_to_file(self.quiz_path(quiz.id), quiz)

    def _discard_quiz(self, quiz_id: str) -> None:
        self.quiz_path(quiz_id).unlink(missing_ok=True)

    def _load_quizzes(self) -> None:
        self._loading = True
        try:
            for path in sorted(self._data_dir.glob("*.txt")):
                try:
                    imported = load_quiz_from_file(path)
                    self.add_quiz(imported)
                except (OSError, QuizImportError, ValueError) as exc:
                    logger.warning("Skipping quiz file %s: %s", path.name, exc)
        finally:
            self._loading = False
        logger.info("Loaded %d quizzes from %s", len(self._quizzes), self._data_dir)

    def _load_attempts(self) -> None:
        if not self._attempts_path.exists():
            return
        for line_number, line in enumerate(
            self._attempts_path.read_text(encoding="utf-8").splitlines(), start=1
        ):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
                record["completed_at"] = datetime.fromisoformat(record["completed_at"])
                self._attempts.append(CompletedAttempt(**record))
            except (ValueError, KeyError, TypeError) as exc:
                logger.warning("Ignoring malformed attempt on line %d: %s", line_number, exc)
