"""Qt UI components for the quiz player."""

from .dialog_helpers import (
    check_unsaved_changes,
    confirm_delete_question,
    confirm_delete_quiz,
    confirm_exit_quiz,
    show_error,
    show_info,
    show_warning,
)
from .main_window import QuizMainWindow

__all__ = [
    "QuizMainWindow",
    "check_unsaved_changes",
    "confirm_delete_question",
    "confirm_delete_quiz",
    "confirm_exit_quiz",
    "show_error",
    "show_info",
    "show_warning",
]
