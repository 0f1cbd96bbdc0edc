"""Helper functions for common dialog patterns in the quiz UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def _confirm(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_delete_question(parent: QWidget, question_number: int) -> bool:
    """Show confirmation dialog for deleting a question.

    Args:
        parent: Parent widget for the dialog
        question_number: The question number to display (1-indexed)

    Returns:
        True if user confirmed, False otherwise
    """
    return _confirm(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete question {question_number}?",
    )


def confirm_delete_quiz(parent: QWidget, quiz_title: str) -> bool:
    """Show confirmation dialog for permanently deleting a quiz."""
    return _confirm(
        parent,
        "Delete Quiz",
        f"Delete '{quiz_title}' and all of its questions? This cannot be undone.",
    )


def confirm_exit_quiz(parent: QWidget) -> bool:
    """Ask before abandoning a quiz that is in progress.

    Returns:
        True if the user wants to leave; the attempt is then discarded.
    """
    return _confirm(
        parent,
        "Exit Quiz",
        "Your progress will be lost and no result will be recorded. Leave the quiz?",
    )


def check_unsaved_changes(parent: QWidget) -> bool | None:
    """Show dialog asking user about unsaved changes.

    Returns:
        True if user wants to save, False if discard, None if cancelled
    """
    reply = QMessageBox.question(
        parent,
        "Unsaved Changes",
        "Question is not saved. Do you want to save the question?",
        QMessageBox.Yes | QMessageBox.No | QMessageBox.Cancel,
        QMessageBox.Yes
    )

    if reply == QMessageBox.Yes:
        return True
    elif reply == QMessageBox.No:
        return False
    else:  # Cancel
        return None


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
