"""Scoring of a single answer."""

from __future__ import annotations

from quiz_runner.constants.quiz_constants import CORRECT_ANSWER_POINTS
from quiz_runner.core.models import Verdict


def evaluate(correct_option_id: str, selected_option_id: str | None) -> Verdict:
    """Compare the selected option with the correct one.

    An id that matches no rendered option is simply incorrect.
    """
    is_correct = selected_option_id is not None and selected_option_id == correct_option_id
    return Verdict(
        is_correct=is_correct,
        score_delta=CORRECT_ANSWER_POINTS if is_correct else 0,
    )
