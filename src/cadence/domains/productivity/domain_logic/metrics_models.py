"""Daily productivity metric models and scoring constants."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any


# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

NOT_AVAILABLE = "N/A"

TREND_IMPROVING = "improving"
TREND_DECLINING = "declining"
TREND_STABLE = "stable"

# Index 0 is Sunday, matching the weekday numbering used in insights
WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

# (minimum score, grade, description), evaluated top-down
GRADE_BANDS = [
    (90, "A+", "Exceptional productivity!"),
    (80, "A", "Great day! Keep it up!"),
    (70, "B", "Good progress"),
    (60, "C", "Decent day, room for improvement"),
    (50, "D", "Below average, consider adjustments"),
]
FALLBACK_GRADE = "F"
FALLBACK_DESCRIPTION = "Low productivity, analyze and adjust"

SCORE_MIN = 0
SCORE_MAX = 100

MAX_RECOMMENDATIONS = 5
MIN_DAYS_FOR_TREND = 4


# ---------------------------------------------------------------------------
# Scoring weights
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringWeights:
    """Point table for the daily productivity score.

    Category budgets (coding 30, exercise 25, focus 25, health 10) are soft:
    only the grand total is clamped to [0, 100].
    """

    # Coding
    points_per_commit: float = 1
    commit_cap: float = 10
    points_per_pr: float = 2
    pr_cap: float = 5
    coding_minutes_per_point: float = 30
    coding_points_cap: float = 10

    # Exercise
    exercise_minutes_per_point: float = 15
    exercise_points_cap: float = 15
    streak_points_cap: float = 5
    exercised_today_bonus: float = 5

    # Focus & meetings
    focus_minutes_per_point: float = 20
    focus_points_cap: float = 15
    deep_work_bonus: float = 5
    meeting_free_minutes: float = 120
    meeting_penalty_per_hour: float = 2

    # Health
    sleep_optimal_min_hours: float = 7
    sleep_optimal_max_hours: float = 8
    sleep_optimal_points: float = 5
    sleep_acceptable_min_hours: float = 6
    sleep_acceptable_max_hours: float = 9
    sleep_acceptable_points: float = 3
    sleep_any_points: float = 1
    steps_per_point: float = 2000
    steps_points_cap: float = 5

    # Penalties
    screen_time_limit_minutes: float = 360
    excessive_screen_time_penalty: float = 10

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


DEFAULT_WEIGHTS = ScoringWeights()


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass
class DailyMetrics:
    """One calendar day's signal bundle.

    Every field except ``date`` is optional; ``None`` means the source had
    no data and counts as zero (or False) when scoring.
    """

    date: str

    # Coding activity
    github_commits: int | None = None
    github_prs: int | None = None
    github_coding_minutes: float | None = None

    # Exercise
    exercise_minutes: float | None = None
    workout_streak: int | None = None
    exercised_today: bool | None = None

    # Screen time
    screen_time_minutes: float | None = None
    productive_app_minutes: float | None = None

    # Calendar
    meetings_minutes: float | None = None
    focus_time_minutes: float | None = None
    deep_work_session: bool | None = None

    # Health
    sleep_hours: float | None = None
    steps: int | None = None

    # Precomputed score; the analyzer always recomputes
    productivity_score: int | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the record with absent fields omitted."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ScoreResult:
    """Score for one day plus its grade, description and per-term points."""

    date: str
    score: int
    grade: str
    description: str
    breakdown: dict[str, float] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PatternAnalysis:
    """Week-level patterns derived from an ordered run of daily records."""

    avg_daily_score: int
    consistency: int               # 0-100, higher = steadier scores
    workout_correlation: float     # -1 to 1
    best_day: str
    worst_day: str
    trend: str                     # 'improving' | 'declining' | 'stable'
    insights: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> PatternAnalysis:
        return cls(
            avg_daily_score=0,
            consistency=0,
            workout_correlation=0.0,
            best_day=NOT_AVAILABLE,
            worst_day=NOT_AVAILABLE,
            trend=TREND_STABLE,
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class WeeklyAggregate:
    """Totals and counts over a reporting period."""

    total_coding_minutes: float
    total_exercise_minutes: float
    total_focus_minutes: float
    avg_score: int
    days_worked: int
    days_exercised: int

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
