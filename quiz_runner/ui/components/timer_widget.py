"""Countdown display shown above the current question."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QProgressBar, QVBoxLayout, QWidget

from quiz_runner.core.services.countdown_timer import format_clock, urgency
from quiz_runner.styling.styles import Styles


class TimerWidget(QWidget):
    """Shows the remaining time as MM:SS plus a draining bar."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._total_seconds: int = 0

        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(layout)

        self.clock_label = QLabel("00:00", self)
        self.clock_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.clock_label)

        self.progress = QProgressBar(self)
        self.progress.setRange(0, 1000)
        self.progress.setTextVisible(False)
        self.progress.setFixedHeight(6)
        layout.addWidget(self.progress)

        self.set_remaining(0)

    def set_total(self, total_seconds: int) -> None:
        self._total_seconds = max(0, total_seconds)
        self.set_remaining(total_seconds)

    def set_remaining(self, remaining_seconds: int) -> None:
        self.clock_label.setText(format_clock(remaining_seconds))
        self.clock_label.setStyleSheet(Styles.get_timer_style(urgency(remaining_seconds)))
        fraction = 0.0 if self._total_seconds <= 0 else remaining_seconds / self._total_seconds
        self.progress.setValue(int(max(0.0, min(1.0, fraction)) * 1000))
