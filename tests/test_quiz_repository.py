from dataclasses import replace
from datetime import datetime
import json

import pytest

from conftest import make_question, make_quiz
from quiz_runner.core.errors import QuizNotFoundError, SubmissionFailedError
from quiz_runner.core.models import CompletedAttempt, Option, Question, Quiz
from quiz_runner.core.services.quiz_repository import (
    ATTEMPTS_FILE_NAME,
    FileQuizRepository,
    InMemoryQuizRepository,
)


def _attempt(quiz_id="quiz-1", user_id="ada", score=200):
    return CompletedAttempt(
        quiz_id=quiz_id,
        user_id=user_id,
        score=score,
        total_questions=3,
        correct_count=score // 100,
        time_taken_seconds=75,
        completed_at=datetime(2024, 5, 1, 9, 30),
        display_name="Ada",
    )


def test_unknown_quiz_reads_as_missing():
    repository = InMemoryQuizRepository()

    assert repository.get_quiz("nope") is None
    assert repository.get_questions("nope") == []


def test_add_quiz_generates_ids():
    repository = InMemoryQuizRepository()
    quiz = repository.add_quiz(
        Quiz(
            id="",
            title="  Spaced title ",
            time_limit_seconds=60,
            questions=(replace(make_question(1), id=""),),
        )
    )

    assert quiz.id
    assert quiz.title == "Spaced title"
    assert quiz.questions[0].id.startswith("q1-")
    assert repository.get_questions(quiz.id) == list(quiz.questions)


def test_duplicate_quiz_id_rejected():
    repository = InMemoryQuizRepository()
    repository.add_quiz(make_quiz("same"))

    with pytest.raises(ValueError):
        repository.add_quiz(make_quiz("same"))


@pytest.mark.parametrize(
    "changes",
    [
        {"title": "   "},
        {"difficulty": "extreme"},
        {"time_limit_seconds": 0},
        {"time_limit_seconds": 12.5},
        {"time_limit_seconds": True},
    ],
)
def test_invalid_quiz_details_rejected(changes):
    repository = InMemoryQuizRepository()
    repository.add_quiz(make_quiz("quiz-1"))

    with pytest.raises(ValueError):
        repository.update_quiz("quiz-1", **changes)

    assert repository.get_quiz("quiz-1").title == "JavaScript Fundamentals"


def test_update_quiz_cannot_touch_questions():
    repository = InMemoryQuizRepository()
    repository.add_quiz(make_quiz("quiz-1"))

    with pytest.raises(ValueError):
        repository.update_quiz("quiz-1", questions=())


def test_publish_toggle_and_listing():
    repository = InMemoryQuizRepository()
    repository.add_quiz(make_quiz("quiz-1"))
    repository.add_quiz(make_quiz("quiz-2", published=False))

    assert [quiz.id for quiz in repository.list_quizzes(published_only=True)] == ["quiz-1"]

    repository.set_published("quiz-2", True)
    repository.set_published("quiz-1", False)

    assert [quiz.id for quiz in repository.list_quizzes(published_only=True)] == ["quiz-2"]
    assert len(repository.list_quizzes()) == 2


def test_missing_quiz_operations_raise_not_found():
    repository = InMemoryQuizRepository()

    with pytest.raises(QuizNotFoundError):
        repository.delete_quiz("ghost")
    with pytest.raises(QuizNotFoundError):
        repository.set_published("ghost", True)
    with pytest.raises(QuizNotFoundError):
        repository.add_question("ghost", make_question(1))


def test_question_editing_keeps_ids_and_order():
    repository = InMemoryQuizRepository()
    repository.add_quiz(make_quiz("quiz-1", question_count=2))

    added = repository.add_question("quiz-1", replace(make_question(3), id=""))
    updated = repository.update_question(
        "quiz-1", 0, replace(make_question(9, correct="a"), question_text="Rewritten?")
    )
    repository.delete_question("quiz-1", 1)

    questions = repository.get_questions("quiz-1")
    assert [question.id for question in questions] == ["q1", added.id]
    assert updated.id == "q1"
    assert questions[0].question_text == "Rewritten?"
    assert questions[0].correct_option_id == "a"


def test_question_index_out_of_range():
    repository = InMemoryQuizRepository()
    repository.add_quiz(make_quiz("quiz-1", question_count=1))

    with pytest.raises(IndexError):
        repository.update_question("quiz-1", 1, make_question(2))
    with pytest.raises(IndexError):
        repository.delete_question("quiz-1", -1)


@pytest.mark.parametrize(
    "question",
    [
        Question(id="", question_text="   ", options=(Option("a", "x"), Option("b", "y")), correct_option_id="a"),
        Question(id="", question_text="Blank option?", options=(Option("a", "x"), Option("b", "  ")), correct_option_id="a"),
        Question(
            id="",
            question_text="Too many?",
            options=tuple(Option(letter, letter) for letter in "abcdefg"),
            correct_option_id="a",
        ),
    ],
)
def test_invalid_questions_rejected(question):
    repository = InMemoryQuizRepository()
    repository.add_quiz(make_quiz("quiz-1", question_count=1))

    with pytest.raises(ValueError):
        repository.add_question("quiz-1", question)

    assert len(repository.get_questions("quiz-1")) == 1


def test_attempts_filtered_by_quiz():
    repository = InMemoryQuizRepository()
    repository.submit_attempt(_attempt("quiz-1"))
    repository.submit_attempt(_attempt("quiz-2"))

    assert len(repository.list_attempts()) == 2
    assert [attempt.quiz_id for attempt in repository.list_attempts("quiz-2")] == ["quiz-2"]


def test_file_repository_persists_quizzes(tmp_path):
    repository = FileQuizRepository(tmp_path)
    repository.add_quiz(make_quiz("quiz-1", question_count=2, description="Basics"))
    repository.set_published("quiz-1", False)

    assert repository.quiz_path("quiz-1").exists()

    reopened = FileQuizRepository(tmp_path)
    quiz = reopened.get_quiz("quiz-1")
    assert quiz.title == "JavaScript Fundamentals"
    assert quiz.description == "Basics"
    assert quiz.published is False
    assert quiz.question_count == 2


def test_file_repository_delete_removes_file(tmp_path):
    repository = FileQuizRepository(tmp_path)
    repository.add_quiz(make_quiz("quiz-1"))

    repository.delete_quiz("quiz-1")

    assert not repository.quiz_path("quiz-1").exists()
    assert FileQuizRepository(tmp_path).get_quiz("quiz-1") is None


def test_file_repository_skips_broken_quiz_files(tmp_path):
    (tmp_path / "broken.txt").write_text("Q: no title\nA: a\nB: b\nCORRECT: A\n", encoding="utf-8")
    (tmp_path / "good.txt").write_text("TITLE: Good\n", encoding="utf-8")

    repository = FileQuizRepository(tmp_path)

    assert [quiz.id for quiz in repository.list_quizzes()] == ["good"]


def test_file_repository_appends_attempts(tmp_path):
    repository = FileQuizRepository(tmp_path)
    repository.submit_attempt(_attempt(score=300))

    lines = (tmp_path / ATTEMPTS_FILE_NAME).read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["score"] == 300

    reopened = FileQuizRepository(tmp_path)
    assert reopened.list_attempts() == [_attempt(score=300)]


def test_file_repository_ignores_malformed_attempt_lines(tmp_path):
    (tmp_path / ATTEMPTS_FILE_NAME).write_text("not json\n\n{\"quiz_id\": \"x\"}\n", encoding="utf-8")
    repository = FileQuizRepository(tmp_path)
    repository.submit_attempt(_attempt())

    assert len(FileQuizRepository(tmp_path).list_attempts()) == 1


def test_file_repository_reports_write_failure(tmp_path):
    repository = FileQuizRepository(tmp_path)
    (tmp_path / ATTEMPTS_FILE_NAME).mkdir()

    with pytest.raises(SubmissionFailedError):
        repository.submit_attempt(_attempt())

    assert repository.list_attempts() == []


@pytest.mark.parametrize("quiz_id", ["../escaped", "nested/quiz", "..", ".hidden", "back\\slash", "/abs"])
def test_quiz_ids_must_be_plain_file_names(tmp_path, quiz_id):
    data_dir = tmp_path / "data"
    repository = FileQuizRepository(data_dir)

    with pytest.raises(ValueError):
        repository.add_quiz(make_quiz(quiz_id))

    assert sorted(path.name for path in tmp_path.rglob("*.txt")) == []
    assert repository.list_quizzes() == []


def test_quiz_file_with_unsafe_id_header_is_skipped(tmp_path):
    (tmp_path / "sneaky.txt").write_text("ID: ../outside\nTITLE: Sneaky\n", encoding="utf-8")

    repository = FileQuizRepository(tmp_path)

    assert repository.list_quizzes() == []
    assert not (tmp_path.parent / "outside.txt").exists()


def test_file_repository_reload_keeps_question_formatting(tmp_path):
    repository = FileQuizRepository(tmp_path)
    repository.add_quiz(make_quiz("quiz-1", question_count=0))
    repository.add_question("quiz-1", replace(make_question(1), id="", question_text="Intro\n---\nWhat?"))
    repository.add_question("quiz-1", replace(make_question(2), id="", question_text="Para one\n\nPara two"))

    reopened = FileQuizRepository(tmp_path).get_quiz("quiz-1")

    assert reopened is not None
    assert [question.question_text for question in reopened.questions] == [
        "Intro\n---\nWhat?",
        "Para one\n\nPara two",
    ]
