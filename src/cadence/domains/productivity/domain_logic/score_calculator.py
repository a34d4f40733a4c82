"""Deterministic daily productivity scoring: DailyMetrics -> 0-100 score.

Each sub-term is capped, then rounded on its own before summation. The
category budgets are soft; only the grand total is clamped to [0, 100].
Negative inputs are clamped to zero before they reach any formula.

All computation is deterministic: no I/O, no clock, no randomness.
"""

from __future__ import annotations

import math

from cadence.domains.productivity.domain_logic.metrics_models import (
    DEFAULT_WEIGHTS,
    FALLBACK_DESCRIPTION,
    FALLBACK_GRADE,
    GRADE_BANDS,
    SCORE_MAX,
    SCORE_MIN,
    DailyMetrics,
    ScoreResult,
    ScoringWeights,
)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _clamp(value: float, lo: float = SCORE_MIN, hi: float = SCORE_MAX) -> float:
    return max(lo, min(hi, value))


def _amount(val) -> float:
    """Absent, non-numeric and negative inputs all count as zero."""
    if val is None or isinstance(val, bool):
        return 0.0
    try:
        number = float(val)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or number < 0:
        return 0.0
    return number


def _points(val: float) -> float:
    """Keep whole-number points as ints so breakdowns serialise cleanly."""
    return int(val) if float(val).is_integer() else val


def max_positive_points(weights: ScoringWeights) -> float:
    """Highest total the positive terms can reach under ``weights``."""
    return (
        weights.commit_cap * weights.points_per_commit
        + weights.pr_cap * weights.points_per_pr
        + weights.coding_points_cap
        + weights.exercise_points_cap
        + weights.streak_points_cap
        + weights.exercised_today_bonus
        + weights.focus_points_cap
        + weights.deep_work_bonus
        + max(weights.sleep_optimal_points, weights.sleep_acceptable_points, weights.sleep_any_points)
        + weights.steps_points_cap
    )


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------

def compute_coding_points(metrics: DailyMetrics, weights: ScoringWeights) -> dict[str, float]:
    """Commits, pull requests and coding time."""
    commits = min(_amount(metrics.github_commits), weights.commit_cap) * weights.points_per_commit
    prs = min(_amount(metrics.github_prs), weights.pr_cap) * weights.points_per_pr
    coding = round_half_away(
        min(_amount(metrics.github_coding_minutes) / weights.coding_minutes_per_point,
            weights.coding_points_cap)
    )
    return {"commits": _points(commits), "pull_requests": _points(prs), "coding_time": coding}


def compute_exercise_points(metrics: DailyMetrics, weights: ScoringWeights) -> dict[str, float]:
    """Exercise time, workout streak and the exercised-today bonus."""
    exercise = round_half_away(
        min(_amount(metrics.exercise_minutes) / weights.exercise_minutes_per_point,
            weights.exercise_points_cap)
    )
    streak = min(_amount(metrics.workout_streak), weights.streak_points_cap)
    bonus = weights.exercised_today_bonus if metrics.exercised_today else 0
    return {
        "exercise_time": exercise,
        "workout_streak": _points(streak),
        "exercised_today": _points(bonus),
    }


def compute_focus_points(metrics: DailyMetrics, weights: ScoringWeights) -> dict[str, float]:
    """Focus time and deep work, less the penalty for long meeting days."""
    focus = round_half_away(
        min(_amount(metrics.focus_time_minutes) / weights.focus_minutes_per_point,
            weights.focus_points_cap)
    )
    bonus = weights.deep_work_bonus if metrics.deep_work_session else 0
    overflow_hours = max(0.0, (_amount(metrics.meetings_minutes) - weights.meeting_free_minutes) / 60)
    penalty = 0
    if overflow_hours and weights.meeting_penalty_per_hour:
        # Any penalty past this ceiling already clamps the day to 0
        ceiling = SCORE_MAX + max_positive_points(weights)
        penalty = round_half_away(min(overflow_hours * weights.meeting_penalty_per_hour, ceiling))
    return {"focus_time": focus, "deep_work": _points(bonus), "meetings": -penalty}


def compute_sleep_points(sleep_hours: float, weights: ScoringWeights) -> float:
    """Sleep in the optimal band earns the most; any logged sleep earns something."""
    if weights.sleep_optimal_min_hours <= sleep_hours <= weights.sleep_optimal_max_hours:
        return weights.sleep_optimal_points
    if weights.sleep_acceptable_min_hours <= sleep_hours <= weights.sleep_acceptable_max_hours:
        return weights.sleep_acceptable_points
    if sleep_hours > 0:
        return weights.sleep_any_points
    return 0


def compute_health_points(metrics: DailyMetrics, weights: ScoringWeights) -> dict[str, float]:
    """Sleep and steps."""
    sleep = compute_sleep_points(_amount(metrics.sleep_hours), weights)
    steps = round_half_away(
        min(_amount(metrics.steps) / weights.steps_per_point, weights.steps_points_cap)
    )
    return {"sleep": _points(sleep), "steps": steps}


def compute_penalty_points(metrics: DailyMetrics, weights: ScoringWeights) -> dict[str, float]:
    """Excessive screen time."""
    penalty = 0.0
    if _amount(metrics.screen_time_minutes) > weights.screen_time_limit_minutes:
        penalty = weights.excessive_screen_time_penalty
    return {"screen_time": -_points(penalty)}


# ---------------------------------------------------------------------------
# Score, grade, description
# ---------------------------------------------------------------------------

def compute_score_breakdown(
    metrics: DailyMetrics, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> tuple[int, dict[str, float]]:
    """Score a day and return every term that went into it.

    Returns:
        (score in [0, 100], breakdown dict with each term and ``raw_total``)
    """
    breakdown: dict[str, float] = {}
    breakdown.update(compute_coding_points(metrics, weights))
    breakdown.update(compute_exercise_points(metrics, weights))
    breakdown.update(compute_focus_points(metrics, weights))
    breakdown.update(compute_health_points(metrics, weights))
    breakdown.update(compute_penalty_points(metrics, weights))

    raw_total = sum(breakdown.values())
    breakdown["raw_total"] = _points(raw_total)

    return round_half_away(_clamp(raw_total)), breakdown


def calculate_productivity_score(
    metrics: DailyMetrics, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> int:
    """Productivity score for a single day (0-100)."""
    score, _ = compute_score_breakdown(metrics, weights)
    return score


def get_score_grade(score: int) -> str:
    for threshold, grade, _ in GRADE_BANDS:
        if score >= threshold:
            return grade
    return FALLBACK_GRADE


def get_score_description(score: int) -> str:
    for threshold, _, description in GRADE_BANDS:
        if score >= threshold:
            return description
    return FALLBACK_DESCRIPTION


def score_day(metrics: DailyMetrics, weights: ScoringWeights = DEFAULT_WEIGHTS) -> ScoreResult:
    """Score, grade and describe one day."""
    score, breakdown = compute_score_breakdown(metrics, weights)
    return ScoreResult(
        date=metrics.date,
        score=score,
        grade=get_score_grade(score),
        description=get_score_description(score),
        breakdown=breakdown,
    )
