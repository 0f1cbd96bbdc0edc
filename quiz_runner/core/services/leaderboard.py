"""Service for ranking completed attempts and summarizing a user's history."""

from __future__ import annotations

from typing import Iterable, Mapping

from quiz_runner.core.models import (
    CompletedAttempt,
    HistoryEntry,
    LeaderboardRow,
    Quiz,
    UserStats,
    percentage_of,
)


class Leaderboard:
    """Sorts attempts by score, then by time taken."""

    def rank(
        self,
        attempts: Iterable[CompletedAttempt],
        quiz_titles: Mapping[str, str] | None = None,
        *,
        quiz_id: str | None = None,
        search: str = "",
        limit: int | None = None,
    ) -> list[LeaderboardRow]:
        """Return ranked rows, optionally filtered by quiz and by a name search."""
        titles = quiz_titles or {}
        needle = search.strip().lower()

        selected = [
            attempt
            for attempt in attempts
            if (quiz_id is None or attempt.quiz_id == quiz_id)
            and (not needle or needle in self._name_of(attempt).lower())
        ]
        sorted_attempts = sorted(
            selected,
            key=lambda a: (-a.score, a.time_taken_seconds, a.completed_at),
        )
        if limit is not None:
            sorted_attempts = sorted_attempts[:limit]

        return [
            LeaderboardRow(
                rank=position,
                display_name=self._name_of(attempt),
                score=attempt.score,
                time_taken_seconds=attempt.time_taken_seconds,
                quiz_title=titles.get(attempt.quiz_id),
            )
            for position, attempt in enumerate(sorted_attempts, start=1)
        ]

    def user_stats(self, attempts: Iterable[CompletedAttempt], user_id: str) -> UserStats:
        """Aggregate the dashboard figures for one user.

        Accuracy is pooled over every answered question, so long quizzes weigh more.
        """
        own = [attempt for attempt in attempts if attempt.user_id == user_id]
        if not own:
            return UserStats()
        return UserStats(
            quizzes_completed=len(own),
            average_percentage=percentage_of(
                sum(a.correct_count for a in own),
                sum(a.total_questions for a in own),
            ),
            total_time_seconds=sum(a.time_taken_seconds for a in own),
            best_score=max(a.score for a in own),
        )

    def user_history(
        self,
        attempts: Iterable[CompletedAttempt],
        user_id: str,
        quizzes: Mapping[str, Quiz] | None = None,
        limit: int | None = None,
    ) -> list[HistoryEntry]:
        """The user's attempts, newest first; title and difficulty are None for deleted quizzes."""
        known = quizzes or {}
        own = sorted(
            (attempt for attempt in attempts if attempt.user_id == user_id),
            key=lambda a: a.completed_at,
            reverse=True,
        )
        if limit is not None:
            own = own[:limit]

        entries: list[HistoryEntry] = []
        for attempt in own:
            quiz = known.get(attempt.quiz_id)
            entries.append(
                HistoryEntry(
                    quiz_id=attempt.quiz_id,
                    quiz_title=quiz.title if quiz is not None else None,
                    difficulty=quiz.difficulty if quiz is not None else None,
                    score=attempt.score,
                    correct_count=attempt.correct_count,
                    total_questions=attempt.total_questions,
                    percentage=attempt.percentage,
                    time_taken_seconds=attempt.time_taken_seconds,
                    completed_at=attempt.completed_at,
                )
            )
        return entries

    @staticmethod
    def _name_of(attempt: CompletedAttempt) -> str:
        return attempt.display_name or attempt.user_id
