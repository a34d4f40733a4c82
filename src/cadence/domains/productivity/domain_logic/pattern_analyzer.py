"""Week-level pattern detection over an ordered run of daily metrics.

Computes average score, consistency, exercise correlation, best/worst day and
a half-split trend, then derives narrative insights and recommendations from
rule triggers. Scores are always recomputed from the raw fields so the
analyzer and the daily scorer can never disagree.
"""

from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from cadence.domains.productivity.domain_logic.metrics_models import (
    DEFAULT_WEIGHTS,
    MAX_RECOMMENDATIONS,
    MIN_DAYS_FOR_TREND,
    TREND_DECLINING,
    TREND_IMPROVING,
    TREND_STABLE,
    WEEKDAY_NAMES,
    DailyMetrics,
    PatternAnalysis,
    ScoringWeights,
)
from cadence.domains.productivity.domain_logic.score_calculator import (
    calculate_productivity_score,
    round_half_away,
)

logger = logging.getLogger(__name__)

# Rule thresholds
HIGH_CONSISTENCY = 80
LOW_CONSISTENCY = 50
POSITIVE_WORKOUT_CORRELATION = 0.3
NEGATIVE_WORKOUT_CORRELATION = -0.2
TREND_DELTA = 10
LOW_SCORE = 50
CORRELATION_SCALE = 50

BASELINE_RECOMMENDATIONS = [
    "Aim for 7-8 hours of sleep",
    "Schedule deep work sessions (>2 hours)",
    "Limit meetings to 2 hours per day",
]


@dataclass
class DayScore:
    """A day's recomputed score alongside the fields the rules look at."""

    date: str
    score: int
    exercised: bool


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _weekday_index(day: str) -> int | None:
    """Sunday=0 weekday of a YYYY-MM-DD identifier, read as a plain calendar date."""
    try:
        parsed = date.fromisoformat(str(day)[:10])
    except ValueError:
        return None
    return (parsed.weekday() + 1) % 7


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def compute_consistency(scores: Sequence[int]) -> float:
    """100 minus twice the population standard deviation, floored at 0."""
    if len(scores) < 2:
        return 100.0
    return max(0.0, 100 - 2 * statistics.pstdev(scores))


def compute_workout_correlation(day_scores: Sequence[DayScore]) -> float:
    """Scaled gap between exercised-day and rest-day averages, in [-1, 1].

    Zero when every day falls on the same side of the split.
    """
    exercised = [d.score for d in day_scores if d.exercised]
    rested = [d.score for d in day_scores if not d.exercised]
    if not exercised or not rested:
        return 0.0
    gap = (_mean(exercised) - _mean(rested)) / CORRELATION_SCALE
    return max(-1.0, min(1.0, gap))


def compute_trend(scores: Sequence[int]) -> str:
    """Compare the first floor(n/2) days with the remainder."""
    if len(scores) < MIN_DAYS_FOR_TREND:
        return TREND_STABLE

    midpoint = len(scores) // 2
    first_half = _mean(scores[:midpoint])
    second_half = _mean(scores[midpoint:])

    if second_half - first_half > TREND_DELTA:
        return TREND_IMPROVING
    if first_half - second_half > TREND_DELTA:
        return TREND_DECLINING
    return TREND_STABLE


def find_best_and_worst(day_scores: Sequence[DayScore]) -> tuple[str, str]:
    """Dates of the top and bottom scores after a stable descending sort."""
    ranked = sorted(day_scores, key=lambda d: d.score, reverse=True)
    return ranked[0].date, ranked[-1].date


def most_productive_weekday(day_scores: Sequence[DayScore]) -> str | None:
    """Weekday name with the highest summed score; lowest index wins ties."""
    totals: dict[int, int] = {}
    for d in day_scores:
        index = _weekday_index(d.date)
        if index is None:
            logger.debug("Skipping unparseable date %r for weekday grouping", d.date)
            continue
        totals[index] = totals.get(index, 0) + d.score

    if not totals:
        return None
    best = max(sorted(totals), key=lambda i: totals[i])
    return WEEKDAY_NAMES[best]


# ---------------------------------------------------------------------------
# Insights & recommendations
# ---------------------------------------------------------------------------

def generate_insights(
    day_scores: Sequence[DayScore],
    consistency: float,
    workout_correlation: float,
    trend: str,
) -> list[str]:
    insights: list[str] = []

    if consistency >= HIGH_CONSISTENCY:
        insights.append("Highly consistent - you maintain steady productivity")
    elif consistency < LOW_CONSISTENCY:
        insights.append("High variability - productivity fluctuates significantly")

    if workout_correlation > POSITIVE_WORKOUT_CORRELATION:
        insights.append("Exercise significantly boosts your productivity")
    elif workout_correlation < NEGATIVE_WORKOUT_CORRELATION:
        insights.append("Productivity seems lower on exercise days - check timing")

    if trend == TREND_IMPROVING:
        insights.append("Productivity is trending upward this week")
    elif trend == TREND_DECLINING:
        insights.append("Productivity declining - consider a reset")

    weekday = most_productive_weekday(day_scores)
    if weekday is not None:
        insights.append(f"Most productive on {weekday}s")

    return insights


def generate_recommendations(day_scores: Sequence[DayScore], insights: Sequence[str]) -> list[str]:
    """Rule-triggered advice keyed off the first (most recent) day.

    Generation order is kept; the list is cut at five without re-ranking.
    """
    recommendations: list[str] = []
    latest = day_scores[0] if day_scores else None

    if latest is not None and latest.score < LOW_SCORE:
        recommendations.append("Start tomorrow with exercise to boost productivity")
        recommendations.append("Block focus time early in the morning")

    if latest is None or not latest.exercised:
        recommendations.append("Add a 20-minute workout to improve focus")

    if any("fluctuates" in i for i in insights):
        recommendations.append("Create a more consistent daily routine")
        recommendations.append("Set fixed times for coding, exercise, and rest")

    if any("declining" in i for i in insights):
        recommendations.append("Take a rest day and plan for next week")
        recommendations.append("Review what changed in your routine")

    recommendations.extend(BASELINE_RECOMMENDATIONS)

    return recommendations[:MAX_RECOMMENDATIONS]


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class PatternAnalyzer:
    """Detects weekly productivity patterns.

    Usage::

        analyzer = PatternAnalyzer()
        analysis = analyzer.analyze(week)   # week: list[DailyMetrics]
    """

    def __init__(self, weights: ScoringWeights = DEFAULT_WEIGHTS) -> None:
        self._weights = weights

    def score_days(self, week: Sequence[DailyMetrics]) -> list[DayScore]:
        return [
            DayScore(
                date=m.date,
                score=calculate_productivity_score(m, self._weights),
                exercised=bool(m.exercised_today),
            )
            for m in week
        ]

    def analyze(self, week: Sequence[DailyMetrics]) -> PatternAnalysis:
        if not week:
            logger.debug("No daily metrics supplied; returning neutral analysis")
            return PatternAnalysis.empty()

        day_scores = self.score_days(week)
        scores = [d.score for d in day_scores]

        consistency = compute_consistency(scores)
        workout_correlation = compute_workout_correlation(day_scores)
        best_day, worst_day = find_best_and_worst(day_scores)
        trend = compute_trend(scores)

        insights = generate_insights(day_scores, consistency, workout_correlation, trend)
        recommendations = generate_recommendations(day_scores, insights)

        return PatternAnalysis(
            avg_daily_score=round_half_away(_mean(scores)),
            consistency=round_half_away(consistency),
            workout_correlation=round_half_away(workout_correlation * 100) / 100,
            best_day=best_day,
            worst_day=worst_day,
            trend=trend,
            insights=insights,
            recommendations=recommendations,
        )


def detect_patterns(
    week: Sequence[DailyMetrics], weights: ScoringWeights = DEFAULT_WEIGHTS
) -> PatternAnalysis:
    """Analyze an ordered week of daily metrics."""
    return PatternAnalyzer(weights).analyze(week)
