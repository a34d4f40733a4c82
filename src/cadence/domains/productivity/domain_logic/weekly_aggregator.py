"""Weekly totals and counts over daily metrics."""

from __future__ import annotations

from typing import Sequence

from cadence.domains.productivity.domain_logic.metrics_models import (
    DEFAULT_WEIGHTS,
    DailyMetrics,
    ScoringWeights,
    WeeklyAggregate,
)
from cadence.domains.productivity.domain_logic.score_calculator import (
    calculate_productivity_score,
    round_half_away,
)


def _total(values) -> float:
    total = sum(max(0, v) for v in values if v)
    return int(total) if float(total).is_integer() else total


def aggregate_weekly_metrics(
    week: Sequence[DailyMetrics], weights: ScoringWeights = DEFAULT_WEIGHTS
) -> WeeklyAggregate:
    """Sum coding/exercise/focus minutes and count worked and exercised days.

    The caller must supply at least one record. An empty period almost always
    means the upstream query went wrong, so it raises instead of returning
    zeros.

    Raises:
        ValueError: if ``week`` is empty.
    """
    if not week:
        raise ValueError("aggregate_weekly_metrics requires at least one daily record")

    scores = [calculate_productivity_score(m, weights) for m in week]

    return WeeklyAggregate(
        total_coding_minutes=_total(m.github_coding_minutes for m in week),
        total_exercise_minutes=_total(m.exercise_minutes for m in week),
        total_focus_minutes=_total(m.focus_time_minutes for m in week),
        avg_score=round_half_away(sum(scores) / len(scores)),
        days_worked=sum(1 for m in week if (m.github_commits or 0) > 0),
        days_exercised=sum(1 for m in week if m.exercised_today),
    )
