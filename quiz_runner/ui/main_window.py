"""Qt main window switching between dashboard, quiz, leaderboard and admin views."""

from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quiz_runner.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from quiz_runner.constants.ui_constants import (
    NAV_BUTTON_ADMIN,
    NAV_BUTTON_DASHBOARD,
    NAV_BUTTON_LEADERBOARD,
    NAV_BUTTON_SIGN_IN,
    NAV_BUTTON_SIGN_OUT,
    WINDOW_TITLE,
)
from quiz_runner.core.models import UserSession
from quiz_runner.core.services.auth_context import AuthContext
from quiz_runner.core.services.quiz_repository import InMemoryQuizRepository
from quiz_runner.styling.styles import Styles
from quiz_runner.ui.components.admin_panel import AdminPanel
from quiz_runner.ui.components.dashboard_panel import DashboardPanel
from quiz_runner.ui.components.leaderboard_panel import LeaderboardPanel
from quiz_runner.ui.components.quiz_panel import QuizPanel
from quiz_runner.ui.dialog_helpers import confirm_exit_quiz, show_error, show_info, show_warning
from quiz_runner.ui.sign_in_dialog import SignInDialog

logger = logging.getLogger(__name__)


class View(Enum):
    """Top-level page shown in the main window."""

    DASHBOARD = auto()
    QUIZ = auto()
    LEADERBOARD = auto()
    ADMIN = auto()


class QuizMainWindow(QMainWindow):
    """Main Qt window hosting the navigation bar and the page stack."""

    def __init__(self, repository: InMemoryQuizRepository, auth: AuthContext) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1000, 720)

        self.repository = repository
        self.auth = auth
        self._view = View.DASHBOARD

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self._unsubscribe_auth = self.auth.subscribe(self._handle_auth_changed)
        self._handle_auth_changed(self.auth.current_user)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_nav_buttons(root_layout)

        self.view_stack = QStackedWidget(self)
        self.dashboard_panel = DashboardPanel(
            self.repository,
            self.auth,
            on_start_quiz=self._open_quiz,
            parent=self,
        )
        self.quiz_panel = QuizPanel(
            self.repository,
            self.auth,
            on_leave=lambda: self._set_view(View.DASHBOARD),
            on_show_leaderboard=lambda: self._set_view(View.LEADERBOARD),
            parent=self,
        )
        self.leaderboard_panel = LeaderboardPanel(self.repository, self)
        self.admin_panel = AdminPanel(self.repository, self)

        self._pages = {
            View.DASHBOARD: self.dashboard_panel,
            View.QUIZ: self.quiz_panel,
            View.LEADERBOARD: self.leaderboard_panel,
            View.ADMIN: self.admin_panel,
        }
        for page in self._pages.values():
            self.view_stack.addWidget(page)
        root_layout.addWidget(self.view_stack)

        self._set_view(View.DASHBOARD)

    def _build_nav_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.dashboard_button = QPushButton(NAV_BUTTON_DASHBOARD, self)
        self.dashboard_button.setCheckable(True)
        self.dashboard_button.clicked.connect(lambda: self._navigate(View.DASHBOARD))
        button_row.addWidget(self.dashboard_button)

        self.leaderboard_button = QPushButton(NAV_BUTTON_LEADERBOARD, self)
        self.leaderboard_button.setCheckable(True)
        self.leaderboard_button.clicked.connect(lambda: self._navigate(View.LEADERBOARD))
        button_row.addWidget(self.leaderboard_button)

        self.admin_button = QPushButton(NAV_BUTTON_ADMIN, self)
        self.admin_button.setCheckable(True)
        self.admin_button.clicked.connect(lambda: self._navigate(View.ADMIN))
        button_row.addWidget(self.admin_button)

        button_row.addStretch()

        self.user_label = QLabel("", self)
        button_row.addWidget(self.user_label)

        self.sign_in_button = QPushButton(NAV_BUTTON_SIGN_IN, self)
        self.sign_in_button.clicked.connect(self._handle_sign_in_button)
        button_row.addWidget(self.sign_in_button)

        help_button = QPushButton("Help", self)
        help_button.clicked.connect(self._handle_help)
        button_row.addWidget(help_button)

        about_button = QPushButton(f"About {APP_NAME}", self)
        about_button.clicked.connect(self._handle_about)
        button_row.addWidget(about_button)

        layout.addLayout(button_row)

    def _set_view(self, view: View) -> None:
        self._view = view
        page = self._pages[view]
        if view is View.DASHBOARD:
            self.dashboard_panel.refresh()
        elif view is View.LEADERBOARD:
            self.leaderboard_panel.refresh()
        elif view is View.ADMIN:
            self.admin_panel.refresh()
        self.view_stack.setCurrentWidget(page)

        self.dashboard_button.setChecked(view is View.DASHBOARD)
        self.leaderboard_button.setChecked(view is View.LEADERBOARD)
        self.admin_button.setChecked(view is View.ADMIN)

    def _navigate(self, view: View) -> None:
        """Switch views from the nav bar, leaving any quiz in progress first."""
        if not self._leave_current_view():
            self._set_view(self._view)
            return
        if view is View.ADMIN and not self.auth.is_admin():
            show_warning(self, "Admins only", "Sign in as an administrator to manage quizzes.")
            self._set_view(self._view if self._view is not View.QUIZ else View.DASHBOARD)
            return
        self._set_view(view)

    def _leave_current_view(self) -> bool:
        if self._view is View.QUIZ:
            if self.quiz_panel.has_active_attempt() and not confirm_exit_quiz(self):
                return False
            self.quiz_panel.close_session()
        elif self._view is View.ADMIN:
            return self.admin_panel.check_unsaved_changes()
        return True

    def _open_quiz(self, quiz_id: str) -> None:
        if self.quiz_panel.open_quiz(quiz_id):
            self._set_view(View.QUIZ)
        else:
            self.dashboard_panel.refresh()

    # --- Session handling ---

    def _handle_sign_in_button(self) -> None:
        if self.auth.is_signed_in():
            if not self._leave_current_view():
                return
            self.auth.sign_out()
            return

        dialog = SignInDialog(self)
        if not dialog.exec():
            return
        try:
            self.auth.sign_in(
                dialog.get_display_name(),
                email=dialog.get_email(),
                is_admin=dialog.get_is_admin(),
                user_id=dialog.get_user_id(),
            )
        except ValueError as exc:
            show_error(self, "Sign in failed", str(exc))

    def _handle_auth_changed(self, user: UserSession | None) -> None:
        if user is None:
            self.user_label.setText("Not signed in")
            self.sign_in_button.setText(NAV_BUTTON_SIGN_IN)
        else:
            role = " (admin)" if user.is_admin else ""
            self.user_label.setText(f"{user.display_name}{role}")
            self.sign_in_button.setText(NAV_BUTTON_SIGN_OUT)
        self.admin_button.setEnabled(user is not None and user.is_admin)

        if user is None and self._view in (View.QUIZ, View.ADMIN):
            self.quiz_panel.close_session()
            self._set_view(View.DASHBOARD)
        elif self._view is View.DASHBOARD:
            self.dashboard_panel.refresh()

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.quiz_panel.close_session()
        self._unsubscribe_auth()
        logger.info("Main window closed")
        super().closeEvent(event)
