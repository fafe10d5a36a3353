"""Core business logic.

Modules:
- grader: pure grading of multiple-choice submissions
- ledger: per-user progress (visits and points)
- stats: per-user statistics and cohort ranking
- quiz: submission flow (grade, persist, award)
- reports: read-side views for learners and teachers
- auth: password hashing and bearer tokens
- visibility: role-based field projections
"""

__all__ = [
    "auth",
    "errors",
    "grader",
    "ledger",
    "models",
    "quiz",
    "reports",
    "stats",
    "visibility",
]
