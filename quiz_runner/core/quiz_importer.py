"""Utilities for importing quizzes from a human-friendly text file.

File format: a header block, then question blocks separated by blank lines or '---':

    TITLE: JavaScript Fundamentals
    DESCRIPTION: Test your knowledge of JavaScript basics   (optional)
    TIMELIMIT: 600                                          (seconds, optional)
    DIFFICULTY: easy|medium|hard                            (optional)
    STATUS: draft|published                                 (optional)

    Q: Question text (supports markdown). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text
    C: Third option text          (options C-F are optional)
    CORRECT: A|B|C|D|E|F

Option letters become the option ids ("a", "b", ...). A quiz may contain no
questions yet; it loads but cannot be started.

A continuation line starting with "::" is taken verbatim (after one optional
space), and a bare "::" is a blank line. The exporter writes every continuation
this way so that blank lines, "---" rules and lines such as "A: ..." inside
question text survive a save and reload.
"""

from __future__ import annotations

from pathlib import Path

from quiz_runner.constants.quiz_constants import (
    DEFAULT_DIFFICULTY,
    DEFAULT_TIME_LIMIT_SECONDS,
    DIFFICULTY_LEVELS,
    MIN_OPTIONS_PER_QUESTION,
)
from quiz_runner.core.models import Option, Question, Quiz


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


OPTION_LETTERS = ("A", "B", "C", "D", "E", "F")
CONTINUATION_PREFIX = "::"
_HEADER_KEYS = ("ID", "TITLE", "DESCRIPTION", "TIMELIMIT", "DIFFICULTY", "STATUS")


def load_quiz_from_file(file_path: Path) -> Quiz:
    """Parse a quiz file; the file stem is the quiz id unless an ID header is given."""
    text = file_path.read_text(encoding="utf-8")
    return parse_quiz_text(text, default_id=file_path.stem)


def parse_quiz_text(text: str, default_id: str = "") -> Quiz:
    header: dict[str, str] = {}
    questions: list[Question] = []
    for block in _split_blocks(text):
        first_line = block.splitlines()[0].strip().upper()
        if first_line.startswith("Q:"):
            questions.append(_parse_question_block(block))
        elif questions:
            raise QuizImportError("Quiz details must come before the first question.")
        else:
            header.update(_parse_header_block(block))

    title = header.get("TITLE", "").strip()
    if not title:
        raise QuizImportError("Quiz file must define a TITLE.")

    return Quiz(
        id=header.get("ID", "").strip() or default_id,
        title=title,
        description=header.get("DESCRIPTION") or None,
        time_limit_seconds=_parse_time_limit(header.get("TIMELIMIT")),
        questions=tuple(questions),
        difficulty=_parse_difficulty(header.get("DIFFICULTY")),
        published=_parse_status(header.get("STATUS")),
    )


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line encountered after content - finalize current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _parse_header_block(block: str) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw_line in block.splitlines():
        line = raw_line.strip()
        key, separator, value = line.partition(":")
        key = key.strip().upper()
        if not separator or key not in _HEADER_KEYS:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")
        values[key] = value.strip()
    return values


def _parse_question_block(block: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        escaped = raw_line.lstrip()
        if escaped.startswith(CONTINUATION_PREFIX):
            continued = escaped[len(CONTINUATION_PREFIX):]
            if continued.startswith(" "):
                continued = continued[1:]
            if current_section == "Q":
                question_lines.append(continued)
            elif current_section in OPTION_LETTERS:
                options[current_section] = options[current_section] + f"\n{continued}"
            else:
                raise QuizImportError(f"Continuation line without a question or option: '{escaped}'.")
            continue

        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in OPTION_LETTERS:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    letters = [letter for letter in OPTION_LETTERS if letter in options]
    if len(letters) < MIN_OPTIONS_PER_QUESTION:
        raise QuizImportError("Each question must define at least two options (A, B).")
    if letters != list(OPTION_LETTERS[: len(letters)]):
        raise QuizImportError("Option letters must be consecutive starting at A.")
    if any(not options[letter].strip() for letter in letters):
        raise QuizImportError("Option text cannot be empty.")

    if correct_letter is None:
        raise QuizImportError("Each question must define CORRECT.")
    if correct_letter not in letters:
        raise QuizImportError(f"CORRECT must be one of {', '.join(letters)}.")

    return Question(
        id="",  # assigned by the repository when the quiz is stored
        question_text=question_text,
        options=tuple(Option(id=letter.lower(), text=options[letter].strip()) for letter in letters),
        correct_option_id=correct_letter.lower(),
    )


def _parse_time_limit(raw_value: str | None) -> int:
    if raw_value is None:
        return DEFAULT_TIME_LIMIT_SECONDS
    if not raw_value:
        raise QuizImportError("TIMELIMIT must include an integer value.")
    try:
        parsed_value = int(raw_value)
    except ValueError as exc:
        raise QuizImportError("TIMELIMIT must be an integer number of seconds.") from exc
    if parsed_value <= 0:
        raise QuizImportError("TIMELIMIT must be a positive integer.")
    return parsed_value


def _parse_difficulty(raw_value: str | None) -> str:
    if not raw_value:
        return DEFAULT_DIFFICULTY
    difficulty = raw_value.lower()
    if difficulty not in DIFFICULTY_LEVELS:
        raise QuizImportError(f"DIFFICULTY must be one of: {', '.join(DIFFICULTY_LEVELS)}.")
    return difficulty


def _parse_status(raw_value: str | None) -> bool:
    if not raw_value:
        return True
    status = raw_value.lower()
    if status not in ("draft", "published"):
        raise QuizImportError("STATUS must be either draft or published.")
    return status == "published"
