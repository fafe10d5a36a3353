"""Statistics aggregation (F1).

Read-side projections over quiz attempts and progress records:
- per-user summary (attempt count, mean and best correct ratio)
- cohort ranking for the teacher dashboard
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from solar_explorer.core.models import Progress, QuizAttempt, User


@dataclass(frozen=True)
class UserStats:
    """Summary of one user's quiz history."""

    total_attempts: int = 0
    avg_correct_ratio: float = 0.0
    best_correct_ratio: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalAttempts": self.total_attempts,
            "avgCorrectRatio": self.avg_correct_ratio,
            "bestCorrectRatio": self.best_correct_ratio,
        }


@dataclass
class StudentStanding:
    """One row of the cohort ranking."""

    progress: Progress
    stats: UserStats = field(default_factory=UserStats)
    student: User | None = None

    @property
    def user_id(self) -> str:
        return self.progress.user_id

    def to_dict(self) -> dict[str, Any]:
        result = self.progress.to_dict()
        result["stats"] = self.stats.to_dict()
        if self.student is not None:
            result["student"] = {
                "id": self.student.id,
                "name": self.student.name,
                "email": self.student.email,
            }
        return result


def attempt_ratio(score: int, total: int) -> float:
    """Correct ratio of one attempt; 0 when the attempt had no questions."""
    return score / total if total > 0 else 0.0


def compute_user_stats(attempts: Sequence[QuizAttempt]) -> UserStats:
    """Summarize a user's attempts.

    Args:
        attempts: All attempts of one user

    Returns:
        UserStats; all zeros when there are no attempts
    """
    if not attempts:
        return UserStats()

    ratios = [attempt_ratio(a.score, a.total) for a in attempts]
    return UserStats(
        total_attempts=len(attempts),
        avg_correct_ratio=sum(ratios) / len(ratios),
        best_correct_ratio=max(ratios),
    )


def stats_by_user(attempts: Iterable[QuizAttempt]) -> dict[str, UserStats]:
    """Group attempts per user and summarize each group."""
    grouped: dict[str, list[QuizAttempt]] = {}
    for attempt in attempts:
        grouped.setdefault(attempt.user_id, []).append(attempt)
    return {user_id: compute_user_stats(items) for user_id, items in grouped.items()}


def rank_students(
    progress_records: Iterable[Progress],
    stats: Mapping[str, UserStats],
    students: Mapping[str, User] | None = None,
) -> list[StudentStanding]:
    """Order students for the teacher view.

    Ordering: points desc, then visited count desc, then most recent
    ``updated_at`` first (plain string comparison of ISO timestamps).
    """
    students = students or {}
    rows = [
        StudentStanding(
            progress=progress,
            stats=stats.get(progress.user_id, UserStats()),
            student=students.get(progress.user_id),
        )
        for progress in progress_records
    ]

    # Two stable passes: least significant key first.
    rows.sort(key=lambda r: r.progress.updated_at or "", reverse=True)
    rows.sort(key=lambda r: (r.progress.points, r.progress.visited_count), reverse=True)
    return rows
