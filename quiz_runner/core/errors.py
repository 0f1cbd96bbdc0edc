"""Exceptions raised by the quiz core."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz session errors."""


class QuizNotFoundError(QuizError):
    """Raised when a quiz id does not resolve to a stored quiz."""

    def __init__(self, quiz_id: str) -> None:
        super().__init__(f"Quiz '{quiz_id}' was not found.")
        self.quiz_id = quiz_id


class EmptyQuizError(QuizError):
    """Raised when an attempt is started on a quiz without questions."""

    def __init__(self, quiz_id: str | None) -> None:
        super().__init__(f"Quiz '{quiz_id}' has no questions.")
        self.quiz_id = quiz_id


class NotSignedInError(QuizError):
    """Raised when an attempt is started without a signed-in user."""


class SubmissionFailedError(QuizError):
    """Raised by a repository when a completed attempt cannot be stored."""
