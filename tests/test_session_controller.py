import pytest

from conftest import FailingRepository, make_quiz
from quiz_runner.core.errors import EmptyQuizError, NotSignedInError, QuizNotFoundError
from quiz_runner.core.models import Phase
from quiz_runner.core.services.auth_context import AuthContext
from quiz_runner.core.services.session_controller import post_to_event_loop


def _drain_events(app) -> None:
    for _ in range(5):
        app.processEvents()


def _record(signal) -> list:
    received: list = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_load_populates_questions_and_configures_timer(make_controller, repository):
    controller = make_controller(repository)

    quiz = controller.load("quiz-5")

    assert quiz.id == "quiz-5"
    assert controller.phase is Phase.NOT_STARTED
    assert controller.total_questions == 5
    assert controller.remaining_seconds == 600
    assert controller.current_question is None
    assert not controller.timer.is_ticking()


def test_load_unknown_quiz_raises_not_found(make_controller, repository):
    controller = make_controller(repository)

    with pytest.raises(QuizNotFoundError) as excinfo:
        controller.load("missing")

    assert excinfo.value.quiz_id == "missing"
    assert controller.phase is Phase.NOT_STARTED
    assert controller.questions == ()


def test_scenario_three_right_two_wrong(make_controller, repository, clock):
    controller = make_controller(repository)
    controller.load("quiz-5")
    controller.start()

    for choice in ("b", "b", "b", "a", "c"):
        clock.advance(10)
        controller.answer(choice)

    assert controller.phase is Phase.FINISHED
    assert controller.score == 300
    assert controller.correct_count == 3
    assert controller.percentage == 60
    assert controller.summary.elapsed_seconds == 50
    assert controller.summary.timed_out is False
    assert len(repository.list_attempts("quiz-5")) == 1


def test_scenario_time_up_after_one_answer(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-3")
    controller.start()

    controller.answer("b")
    controller.time_up()

    assert controller.phase is Phase.FINISHED
    assert controller.score == 100
    assert controller.correct_count == 1
    assert controller.percentage == 33
    assert controller.summary.timed_out is True
    attempt = repository.list_attempts("quiz-3")[0]
    assert attempt.score == 100
    assert attempt.total_questions == 3


def test_scenario_empty_quiz_refuses_to_start(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-empty")

    with pytest.raises(EmptyQuizError):
        controller.start()

    assert controller.phase is Phase.NOT_STARTED
    assert not controller.timer.is_active()


def test_scenario_submission_failure_keeps_result(make_controller):
    repository = FailingRepository()
    repository.add_quiz(make_quiz("quiz-2", question_count=2))
    controller = make_controller(repository)
    failures = _record(controller.submission_failed)
    submitted = _record(controller.attempt_submitted)
    controller.load("quiz-2")
    controller.start()

    controller.answer("b")
    controller.answer("a")

    assert controller.phase is Phase.FINISHED
    assert controller.score == 100
    assert controller.percentage == 50
    assert controller.submission_error == "database unavailable"
    assert failures == [("database unavailable",)]
    assert submitted == []
    assert repository.submit_calls == 1


def test_start_requires_signed_in_user(make_controller, repository):
    controller = make_controller(repository, auth=AuthContext())
    controller.load("quiz-5")

    with pytest.raises(NotSignedInError):
        controller.start()

    assert controller.phase is Phase.NOT_STARTED


def test_start_activates_timer_and_emits_initial_state(make_controller, repository):
    controller = make_controller(repository)
    phases = _record(controller.phase_changed)
    questions = _record(controller.question_changed)
    scores = _record(controller.score_changed)
    controller.load("quiz-5")

    controller.start()

    assert controller.phase is Phase.ACTIVE
    assert controller.timer.is_active()
    assert controller.timer.is_ticking()
    assert controller.current_question.id == "q1"
    assert phases == [(Phase.ACTIVE,)]
    assert questions == [(0,)]
    assert scores == [(0, 0)]


@pytest.mark.parametrize("question_count", [1, 2, 5])
def test_attempt_finishes_only_after_last_answer(make_controller, repository, question_count):
    repository.add_quiz(make_quiz(f"quiz-n{question_count}", question_count=question_count))
    controller = make_controller(repository)
    controller.load(f"quiz-n{question_count}")
    controller.start()

    for position in range(question_count - 1):
        controller.answer("b")
        assert controller.phase is Phase.ACTIVE
        assert controller.current_index == position + 1

    controller.answer("b")

    assert controller.phase is Phase.FINISHED
    assert controller.current_index == question_count - 1
    assert controller.correct_count == question_count
    assert controller.summary.timed_out is False
    assert len(repository.list_attempts(f"quiz-n{question_count}")) == 1


def test_start_twice_is_ignored(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-5")
    controller.start()
    controller.answer("b")

    controller.start()

    assert controller.score == 100
    assert controller.current_index == 1


def test_answer_before_start_is_ignored(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-5")

    assert controller.answer("b") is None
    assert controller.score == 0


def test_answers_after_finish_do_not_double_count(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-3")
    controller.start()
    for _ in range(3):
        controller.answer("b")

    assert controller.answer("b") is None
    controller.time_up()

    assert controller.score == 300
    assert controller.summary.timed_out is False
    assert controller.current_index == 2
    assert len(repository.list_attempts()) == 1


def test_time_up_on_last_question_keeps_points(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-3")
    controller.start()
    controller.answer("b")
    controller.answer("b")

    controller.time_up()
    controller.answer("b")

    assert controller.score == 200
    assert controller.correct_count == 2
    assert controller.percentage == 67


def test_finish_stops_timer(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-3")
    controller.start()

    controller.time_up()

    assert not controller.timer.is_active()
    assert not controller.timer.is_ticking()


def test_timer_reaching_zero_finishes_attempt(make_controller, repository, qapp):
    repository.add_quiz(make_quiz("quiz-fast", question_count=2, time_limit=2))
    controller = make_controller(repository)
    controller.load("quiz-fast")
    controller.start()
    controller.answer("b")

    controller.timer._handle_tick()
    controller.timer._handle_tick()

    assert controller.phase is Phase.FINISHED
    assert controller.remaining_seconds == 0
    assert controller.summary.timed_out is True
    assert controller.score == 100


def test_remaining_changes_are_forwarded(make_controller, repository):
    controller = make_controller(repository)
    remaining = _record(controller.remaining_changed)
    controller.load("quiz-5")
    controller.start()

    controller.timer._handle_tick()

    assert remaining[-1] == (599,)


def test_completed_attempt_records_user_and_time(make_controller, repository, clock):
    controller = make_controller(repository)
    controller.load("quiz-3")
    controller.start()
    clock.advance(42.9)
    controller.time_up()

    attempt = controller.completed_attempt
    assert attempt.user_id == "user-ada"
    assert attempt.display_name == "Ada"
    assert attempt.time_taken_seconds == 42
    assert attempt.correct_count == 0


def test_elapsed_seconds_is_live_while_active(make_controller, repository, clock):
    controller = make_controller(repository)
    controller.load("quiz-5")
    assert controller.elapsed_seconds == 0
    controller.start()

    clock.advance(7.5)

    assert controller.elapsed_seconds == 7


def test_dispose_stops_everything(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-5")
    controller.start()

    controller.dispose()

    assert controller.is_disposed
    assert controller.timer.is_disposed()
    assert not controller.timer.is_ticking()
    assert controller.answer("b") is None
    controller.time_up()
    assert controller.phase is Phase.ACTIVE
    assert repository.list_attempts() == []


def test_sign_out_during_attempt_disposes_controller(make_controller, repository, auth):
    controller = make_controller(repository)
    controller.load("quiz-5")
    controller.start()

    auth.sign_out()

    assert controller.is_disposed
    assert controller.answer("b") is None


def test_sign_out_after_dispose_is_not_observed(make_controller, repository, auth):
    controller = make_controller(repository)
    controller.load("quiz-5")
    controller.dispose()

    auth.sign_out()

    assert controller.phase is Phase.NOT_STARTED


def test_load_after_start_is_rejected(make_controller, repository):
    controller = make_controller(repository)
    controller.load("quiz-5")
    controller.start()

    with pytest.raises(RuntimeError):
        controller.load("quiz-3")


def test_default_dispatch_submits_on_event_loop(qapp, make_controller, repository):
    controller = make_controller(repository, dispatch=post_to_event_loop)
    submitted = _record(controller.attempt_submitted)
    controller.load("quiz-3")
    controller.start()
    controller.time_up()

    assert repository.list_attempts() == []
    assert controller.phase is Phase.FINISHED

    _drain_events(qapp)

    assert len(repository.list_attempts()) == 1
    assert len(submitted) == 1


def test_dispose_after_finish_still_submits(qapp, make_controller, repository):
    controller = make_controller(repository, dispatch=post_to_event_loop)
    controller.load("quiz-3")
    controller.start()
    controller.time_up()

    controller.dispose()
    _drain_events(qapp)

    assert len(repository.list_attempts()) == 1
