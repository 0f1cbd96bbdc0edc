"""Application entry point for QuizRunner."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from quiz_runner.constants.about import APP_NAME, APP_VERSION
from quiz_runner.constants.sample_quiz import SAMPLE_QUIZ_TEXT
from quiz_runner.core.quiz_importer import parse_quiz_text
from quiz_runner.core.services.auth_context import AuthContext
from quiz_runner.core.services.quiz_repository import FileQuizRepository
from quiz_runner.ui.main_window import QuizMainWindow
from quiz_runner.utils.logging_config import configure_logging

DATA_DIR_ENV_VAR = "QUIZ_RUNNER_DATA_DIR"
DEFAULT_DATA_DIR = "quiz_data"


def _resolve_data_dir() -> Path:
    return Path(os.environ.get(DATA_DIR_ENV_VAR) or DEFAULT_DATA_DIR)


def _seed_sample_quiz(repository: FileQuizRepository, logger: logging.Logger) -> None:
    """Give a fresh install something to play."""
    if repository.list_quizzes():
        return
    quiz = repository.add_quiz(parse_quiz_text(SAMPLE_QUIZ_TEXT))
    logger.info("Seeded sample quiz '%s' into %s", quiz.title, repository.data_dir)


def main() -> None:
    """Initialize logging, open the quiz store, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting %s v%s", APP_NAME, APP_VERSION)

    repository = FileQuizRepository(_resolve_data_dir())
    _seed_sample_quiz(repository, logger)
    auth = AuthContext()

    app = QApplication(sys.argv)
    window = QuizMainWindow(repository=repository, auth=auth)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
