import pytest

from quiz_runner.constants.sample_quiz import SAMPLE_QUIZ_TEXT
from quiz_runner.core.models import Option, Question, Quiz
from quiz_runner.core.quiz_exporter import save_quiz_to_file, serialize_quiz
from quiz_runner.core.quiz_importer import QuizImportError, load_quiz_from_file, parse_quiz_text


def test_parse_sample_quiz():
    quiz = parse_quiz_text(SAMPLE_QUIZ_TEXT)

    assert quiz.id == "javascript-fundamentals"
    assert quiz.title == "JavaScript Fundamentals"
    assert quiz.time_limit_seconds == 600
    assert quiz.difficulty == "easy"
    assert quiz.published is True
    assert quiz.question_count == 5
    first = quiz.questions[0]
    assert [option.id for option in first.options] == ["a", "b", "c", "d"]
    assert first.correct_option_id == "b"


def test_defaults_when_headers_missing():
    quiz = parse_quiz_text("TITLE: Minimal\n\nQ: Yes?\nA: Yes\nB: No\nCORRECT: A\n", default_id="minimal")

    assert quiz.id == "minimal"
    assert quiz.time_limit_seconds == 600
    assert quiz.difficulty == "medium"
    assert quiz.description is None


def test_quiz_without_questions_is_allowed():
    quiz = parse_quiz_text("TITLE: Draft\nSTATUS: draft\n")

    assert quiz.question_count == 0
    assert quiz.published is False


def test_multiline_question_and_dash_separators():
    text = "TITLE: T\n---\nQ: First line\nsecond line\nA: one\nB: two\nC: three\nCORRECT: c\n---\n"

    quiz = parse_quiz_text(text)

    assert quiz.questions[0].question_text == "First line\nsecond line"
    assert quiz.questions[0].correct_option_id == "c"


@pytest.mark.parametrize(
    "text",
    [
        "Q: Missing title?\nA: a\nB: b\nCORRECT: A",
        "TITLE: T\n\nQ: One option?\nA: only\nCORRECT: A",
        "TITLE: T\n\nQ: Gap?\nA: a\nC: c\nCORRECT: A",
        "TITLE: T\n\nQ: No answer?\nA: a\nB: b",
        "TITLE: T\n\nQ: Bad answer?\nA: a\nB: b\nCORRECT: D",
        "TITLE: T\nTIMELIMIT: soon",
        "TITLE: T\nTIMELIMIT: 0",
        "TITLE: T\nDIFFICULTY: brutal",
        "TITLE: T\nSTATUS: archived",
        "TITLE: T\nCOLOR: blue",
        "TITLE: T\n\nQ: Ok?\nA: a\nB: b\nCORRECT: A\n\nTIMELIMIT: 30",
    ],
)
def test_invalid_files_are_rejected(text):
    with pytest.raises(QuizImportError):
        parse_quiz_text(text)


def test_file_stem_is_default_id(tmp_path):
    path = tmp_path / "python-basics.txt"
    path.write_text("TITLE: Python Basics\n", encoding="utf-8")

    assert load_quiz_from_file(path).id == "python-basics"


def test_export_then_import_preserves_quiz(tmp_path):
    quiz = Quiz(
        id="history",
        title="History",
        time_limit_seconds=90,
        description="Dates\nand   places",
        difficulty="hard",
        published=False,
        questions=(
            Question(
                id="q1",
                question_text="When?\n\nThink **hard**.",
                options=(Option("x", "1066"), Option("y", "1492"), Option("z", "1815")),
                correct_option_id="y",
            ),
        ),
    )
    path = tmp_path / "nested" / "history.txt"

    save_quiz_to_file(path, quiz)
    loaded = load_quiz_from_file(path)

    assert loaded.id == "history"
    assert loaded.description == "Dates and places"
    assert loaded.difficulty == "hard"
    assert loaded.published is False
    assert loaded.time_limit_seconds == 90
    question = loaded.questions[0]
    assert question.question_text == "When?\n\nThink **hard**."
    assert [option.text for option in question.options] == ["1066", "1492", "1815"]
    assert question.correct_option_id == "b"


def test_serialize_writes_status_and_separators():
    quiz = parse_quiz_text(SAMPLE_QUIZ_TEXT)

    text = serialize_quiz(quiz)

    assert text.startswith("ID: javascript-fundamentals\nTITLE: JavaScript Fundamentals\n")
    assert "STATUS: published" in text
    assert text.count("\n---\n") == 5


def test_markers_and_blank_lines_in_text_survive_reload(tmp_path):
    text = "Intro\n---\n\nA: not an option\nCORRECT: not the answer\n    indented code\n\nWhat?"
    quiz = Quiz(
        id="tricky",
        title="Tricky",
        time_limit_seconds=60,
        questions=(
            Question(
                id="q1",
                question_text=text,
                options=(Option("a", "first\n\nsecond"), Option("b", "plain")),
                correct_option_id="a",
            ),
        ),
    )
    path = tmp_path / "tricky.txt"

    save_quiz_to_file(path, quiz)
    loaded = load_quiz_from_file(path)

    question = loaded.questions[0]
    assert question.question_text == text
    assert question.options[0].text == "first\n\nsecond"
    assert question.correct_option_id == "a"


def test_hand_written_continuation_markers():
    text = "TITLE: T\n\nQ: Look:\n::\n:: ---\n::A: still the question\nA: yes\nB: no\nCORRECT: A\n"

    quiz = parse_quiz_text(text)

    assert quiz.questions[0].question_text == "Look:\n\n---\nA: still the question"
    assert [option.text for option in quiz.questions[0].options] == ["yes", "no"]


def test_continuation_after_correct_is_rejected():
    with pytest.raises(QuizImportError):
        parse_quiz_text("TITLE: T\n\nQ: x\nA: a\nB: b\nCORRECT: A\n:: stray")
