"""Utilities for exporting quizzes to the plain-text format used for imports."""

from __future__ import annotations

from pathlib import Path

from quiz_runner.core.models import Question, Quiz
from quiz_runner.core.quiz_importer import CONTINUATION_PREFIX, OPTION_LETTERS


def save_quiz_to_file(file_path: Path, quiz: Quiz) -> None:
    """Persist the quiz to disk in the text import format."""
    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(serialize_quiz(quiz), encoding="utf-8")


def serialize_quiz(quiz: Quiz) -> str:
    header = [f"ID: {quiz.id}", f"TITLE: {quiz.title}"]
    if quiz.description:
        header.append(f"DESCRIPTION: {' '.join(quiz.description.split())}")
    header.append(f"TIMELIMIT: {quiz.time_limit_seconds}")
    header.append(f"DIFFICULTY: {quiz.difficulty}")
    header.append(f"STATUS: {'published' if quiz.published else 'draft'}")

    blocks = ["\n".join(header)]
    blocks.extend(_serialize_question(question) for question in quiz.questions)
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_question(question: Question) -> str:
    if len(question.options) > len(OPTION_LETTERS):
        raise ValueError(f"Cannot export more than {len(OPTION_LETTERS)} options per question.")

    lines = _serialize_text("Q", question.question_text)

    correct_letter = None
    # Letters follow option order, whatever the stored option ids are.
    for letter, option in zip(OPTION_LETTERS, question.options):
        lines.extend(_serialize_text(letter, option.text))
        if option.id == question.correct_option_id:
            correct_letter = letter

    lines.append(f"CORRECT: {correct_letter}")
    return "\n".join(lines)


def _serialize_text(marker: str, text: str) -> list[str]:
    """Write ``text`` after ``marker``; later lines are escaped so blanks and markers survive."""
    first, *rest = text.split("\n")
    lines = [f"{marker}: {first}"]
    lines.extend(f"{CONTINUATION_PREFIX} {line}" if line else CONTINUATION_PREFIX for line in rest)
    return lines
