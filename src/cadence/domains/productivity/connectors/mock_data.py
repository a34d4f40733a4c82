"""Mock daily metrics for development and testing.

The pattern represents a steady developer week: coding most weekdays,
exercising on alternate days, one meeting-heavy day and a quiet weekend.
Scores derived from it land between 0 and 60.
"""

from __future__ import annotations

from datetime import date, timedelta

from cadence.domains.productivity.domain_logic.metrics_models import DailyMetrics

# Index 0 is the most recent day
_WEEK_PATTERN: list[dict] = [
    {
        "github_commits": 6, "github_prs": 1, "github_coding_minutes": 180,
        "exercise_minutes": 45, "workout_streak": 2, "exercised_today": True,
        "screen_time_minutes": 300, "productive_app_minutes": 200,
        "meetings_minutes": 60, "focus_time_minutes": 150, "deep_work_session": True,
        "sleep_hours": 7.5, "steps": 9000,
    },
    {
        "github_commits": 4, "github_prs": 0, "github_coding_minutes": 120,
        "exercise_minutes": 30, "workout_streak": 1, "exercised_today": True,
        "screen_time_minutes": 330, "productive_app_minutes": 180,
        "meetings_minutes": 90, "focus_time_minutes": 60, "deep_work_session": False,
        "sleep_hours": 6.5, "steps": 7000,
    },
    {
        "github_commits": 2, "github_prs": 1, "github_coding_minutes": 60,
        "exercise_minutes": 0, "workout_streak": 0, "exercised_today": False,
        "screen_time_minutes": 420, "productive_app_minutes": 150,
        "meetings_minutes": 240, "focus_time_minutes": 30, "deep_work_session": False,
        "sleep_hours": 6.0, "steps": 4000,
    },
    {
        "github_commits": 8, "github_prs": 2, "github_coding_minutes": 240,
        "exercise_minutes": 60, "workout_streak": 3, "exercised_today": True,
        "screen_time_minutes": 310, "productive_app_minutes": 240,
        "meetings_minutes": 30, "focus_time_minutes": 180, "deep_work_session": True,
        "sleep_hours": 8.0, "steps": 11000,
    },
    {
        "github_commits": 5, "github_prs": 0, "github_coding_minutes": 150,
        "exercise_minutes": 20, "workout_streak": 2, "exercised_today": True,
        "screen_time_minutes": 280, "productive_app_minutes": 160,
        "meetings_minutes": 120, "focus_time_minutes": 90, "deep_work_session": False,
        "sleep_hours": 7.0, "steps": 8000,
    },
    {
        "github_commits": 0, "github_prs": 0, "github_coding_minutes": 0,
        "exercise_minutes": 0, "workout_streak": 0, "exercised_today": False,
        "screen_time_minutes": 240, "productive_app_minutes": 30,
        "meetings_minutes": 0, "focus_time_minutes": 0, "deep_work_session": False,
        "sleep_hours": 9.0, "steps": 5000,
    },
    {
        "github_commits": 1, "github_prs": 0, "github_coding_minutes": 30,
        "exercise_minutes": 90, "workout_streak": 1, "exercised_today": True,
        "screen_time_minutes": 200, "productive_app_minutes": 40,
        "meetings_minutes": 0, "focus_time_minutes": 0, "deep_work_session": False,
        "sleep_hours": 8.5, "steps": 14000,
    },
]


def get_mock_week(end_date: str, days: int = 7) -> list[DailyMetrics]:
    """Return ``days`` records ending at ``end_date``, most recent first.

    The seven-day pattern repeats for longer windows.
    """
    end = date.fromisoformat(end_date)
    week = []
    for offset in range(days):
        fields = _WEEK_PATTERN[offset % len(_WEEK_PATTERN)]
        day = (end - timedelta(days=offset)).isoformat()
        week.append(DailyMetrics(date=day, **fields))
    return week
