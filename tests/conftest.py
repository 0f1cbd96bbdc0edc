import pytest
from PySide6.QtCore import QCoreApplication, QEvent

from quiz_runner.core.errors import SubmissionFailedError
from quiz_runner.core.models import Option, Question, Quiz
from quiz_runner.core.services.auth_context import AuthContext
from quiz_runner.core.services.quiz_repository import InMemoryQuizRepository
from quiz_runner.core.services.session_controller import SessionController


@pytest.fixture(scope="session")
def qapp():
    """QTimer and signals need a Qt application object; no display is required."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def release_qobjects(*objects) -> None:
    """Dispose controllers or timers and delete them before the interpreter shuts down."""
    for obj in objects:
        obj.dispose()
        obj.deleteLater()
    QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete)


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingRepository(InMemoryQuizRepository):
    """Serves quizzes normally but refuses to store attempts."""

    def __init__(self) -> None:
        super().__init__()
        self.submit_calls = 0

    def submit_attempt(self, attempt) -> None:
        self.submit_calls += 1
        raise SubmissionFailedError("database unavailable")


def make_question(number: int, correct: str = "b", option_count: int = 4) -> Question:
    letters = "abcdef"[:option_count]
    return Question(
        id=f"q{number}",
        question_text=f"Question {number}?",
        options=tuple(Option(id=letter, text=f"Answer {letter.upper()}") for letter in letters),
        correct_option_id=correct,
    )


def make_quiz(quiz_id: str = "quiz-1", question_count: int = 5, time_limit: int = 600, **kwargs) -> Quiz:
    return Quiz(
        id=quiz_id,
        title=kwargs.pop("title", "JavaScript Fundamentals"),
        time_limit_seconds=time_limit,
        questions=tuple(make_question(n) for n in range(1, question_count + 1)),
        **kwargs,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository():
    repo = InMemoryQuizRepository()
    repo.add_quiz(make_quiz("quiz-5", question_count=5))
    repo.add_quiz(make_quiz("quiz-3", question_count=3, title="Short quiz"))
    repo.add_quiz(make_quiz("quiz-empty", question_count=0, title="Empty quiz"))
    return repo


@pytest.fixture
def auth():
    context = AuthContext()
    context.sign_in("Ada", user_id="user-ada")
    return context


@pytest.fixture
def make_controller(qapp, auth, clock):
    """Build controllers that submit synchronously and dispose them afterwards."""
    created: list[SessionController] = []

    def factory(repository, **kwargs) -> SessionController:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("dispatch", lambda callback: callback())
        controller = SessionController(repository, kwargs.pop("auth", auth), **kwargs)
        created.append(controller)
        return controller

    yield factory
    release_qobjects(*created)
