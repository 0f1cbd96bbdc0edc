import pytest

from conftest import release_qobjects
from quiz_runner.core.services.countdown_timer import CountdownTimer, format_clock, urgency


@pytest.fixture
def timer(qapp):
    countdown = CountdownTimer()
    yield countdown
    release_qobjects(countdown)


def _record(signal) -> list:
    received: list = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_start_sets_remaining_without_ticking(timer):
    remaining = _record(timer.remaining_changed)

    timer.start(600)

    assert timer.remaining_seconds() == 600
    assert timer.total_seconds() == 600
    assert remaining == [(600,)]
    assert not timer.is_ticking()


def test_ticks_only_while_active(timer):
    timer.start(5)
    timer._handle_tick()
    assert timer.remaining_seconds() == 5

    timer.set_active(True)
    assert timer.is_ticking()
    timer._handle_tick()
    assert timer.remaining_seconds() == 4

    timer.set_active(False)
    assert not timer.is_ticking()
    timer._handle_tick()
    assert timer.remaining_seconds() == 4


def test_remaining_strictly_decreases_and_time_up_fires_once(timer):
    remaining = _record(timer.remaining_changed)
    fired = _record(timer.time_up)
    timer.start(3)
    timer.set_active(True)

    for _ in range(5):
        timer._handle_tick()

    assert [value for (value,) in remaining] == [3, 2, 1, 0]
    assert len(fired) == 1
    assert timer.remaining_seconds() == 0
    assert not timer.is_ticking()


def test_time_up_not_repeated_after_restart(timer):
    fired = _record(timer.time_up)
    timer.start(1)
    timer.set_active(True)
    timer._handle_tick()

    timer.start(1)
    timer._handle_tick()

    assert len(fired) == 1


def test_changing_total_restarts_countdown(timer):
    timer.start(60)
    timer.set_active(True)
    timer._handle_tick()
    timer._handle_tick()

    timer.set_total_seconds(120)

    assert timer.remaining_seconds() == 120
    assert timer.is_ticking()


def test_same_total_keeps_progress(timer):
    timer.start(60)
    timer.set_active(True)
    timer._handle_tick()

    timer.set_total_seconds(60)

    assert timer.remaining_seconds() == 59


def test_zero_total_never_ticks(timer):
    fired = _record(timer.time_up)
    timer.start(0)
    timer.set_active(True)

    assert not timer.is_ticking()
    assert fired == []


def test_dispose_cancels_ticking(timer):
    fired = _record(timer.time_up)
    timer.start(1)
    timer.set_active(True)

    timer.dispose()
    timer._handle_tick()
    timer.set_active(True)

    assert timer.is_disposed()
    assert not timer.is_ticking()
    assert timer.remaining_seconds() == 1
    assert fired == []


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (59, "00:59"), (600, "10:00"), (61, "01:01"), (-4, "00:00")],
)
def test_format_clock(seconds, expected):
    assert format_clock(seconds) == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(600, "normal"), (31, "normal"), (30, "low"), (11, "low"), (10, "critical"), (0, "critical")],
)
def test_urgency_levels(seconds, expected):
    assert urgency(seconds) == expected
