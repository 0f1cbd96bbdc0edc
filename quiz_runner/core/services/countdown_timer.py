"""Restartable one-second countdown bound to an external active flag."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from quiz_runner.constants.quiz_constants import (
    CRITICAL_TIME_THRESHOLD_SECONDS,
    LOW_TIME_THRESHOLD_SECONDS,
    TICK_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


class CountdownTimer(QObject):
    """Counts whole seconds down to zero while active and fires ``time_up`` once per instance.

    ``start`` only sets the remaining time; ticking is governed by ``set_active``
    so the owner can pause and resume without losing progress.
    """

    remaining_changed = Signal(int)
    time_up = Signal()

    def __init__(self, parent: QObject | None = None, tick_interval_ms: int = TICK_INTERVAL_MS) -> None:
        super().__init__(parent)
        self._total_seconds: int = 0
        self._remaining_seconds: int = 0
        self._active: bool = False
        self._time_up_fired: bool = False
        self._disposed: bool = False

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(tick_interval_ms)
        self._tick_timer.timeout.connect(self._handle_tick)

    def start(self, total_seconds: int) -> None:
        """Reset the remaining time to ``total_seconds``."""
        if self._disposed:
            return
        self._total_seconds = max(0, int(total_seconds))
        self._remaining_seconds = self._total_seconds
        self.remaining_changed.emit(self._remaining_seconds)
        self._sync_ticking()

    def set_total_seconds(self, total_seconds: int) -> None:
        """Reconfigure the total; a different value restarts the countdown from it."""
        if max(0, int(total_seconds)) == self._total_seconds:
            return
        logger.debug("Countdown total changed from %s to %s", self._total_seconds, total_seconds)
        self.start(total_seconds)

    def set_active(self, active: bool) -> None:
        """Resume or suspend ticking without touching the remaining time."""
        if self._disposed:
            return
        self._active = bool(active)
        self._sync_ticking()

    def dispose(self) -> None:
        """Cancel any pending tick for good."""
        self._disposed = True
        self._active = False
        self._tick_timer.stop()

    def total_seconds(self) -> int:
        return self._total_seconds

    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    def is_active(self) -> bool:
        return self._active

    def is_ticking(self) -> bool:
        return self._tick_timer.isActive()

    def is_disposed(self) -> bool:
        return self._disposed

    def _sync_ticking(self) -> None:
        should_tick = self._active and not self._disposed and self._remaining_seconds > 0
        if should_tick and not self._tick_timer.isActive():
            self._tick_timer.start()
        elif not should_tick and self._tick_timer.isActive():
            self._tick_timer.stop()

    def _handle_tick(self) -> None:
        if self._disposed or not self._active or self._remaining_seconds <= 0:
            self._tick_timer.stop()
            return

        self._remaining_seconds -= 1
        if self._remaining_seconds > 0:
            self.remaining_changed.emit(self._remaining_seconds)
            return

        self._remaining_seconds = 0
        self._tick_timer.stop()
        self.remaining_changed.emit(0)
        if not self._time_up_fired:
            self._time_up_fired = True
            self.time_up.emit()


def format_clock(seconds: int) -> str:
    """Format seconds as ``MM:SS``."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def urgency(remaining_seconds: int) -> str:
    """Classify the remaining time as ``normal``, ``low`` or ``critical``."""
    if remaining_seconds <= CRITICAL_TIME_THRESHOLD_SECONDS:
        return "critical"
    if remaining_seconds <= LOW_TIME_THRESHOLD_SECONDS:
        return "low"
    return "normal"
