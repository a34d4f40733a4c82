"""Tests for weekly aggregation."""

from __future__ import annotations

import pytest

from cadence.domains.productivity.domain_logic.weekly_aggregator import (
    aggregate_weekly_metrics,
)


def test_empty_week_is_a_caller_error():
    with pytest.raises(ValueError, match="at least one daily record"):
        aggregate_weekly_metrics([])


def test_totals_and_counts(make_day):
    week = [
        make_day("2026-02-16", github_commits=3, github_coding_minutes=90,
                 exercise_minutes=30, exercised_today=True, focus_time_minutes=60),
        make_day("2026-02-17", github_commits=0, github_coding_minutes=20,
                 focus_time_minutes=120),
        make_day("2026-02-18", exercise_minutes=45, exercised_today=True),
    ]
    result = aggregate_weekly_metrics(week)
    assert result.total_coding_minutes == 110
    assert result.total_exercise_minutes == 75
    assert result.total_focus_minutes == 180
    assert result.days_worked == 1
    assert result.days_exercised == 2


def test_absent_fields_count_as_zero(make_day):
    result = aggregate_weekly_metrics([make_day("2026-02-16")])
    assert result.total_coding_minutes == 0
    assert result.total_exercise_minutes == 0
    assert result.total_focus_minutes == 0
    assert result.avg_score == 0
    assert result.days_worked == 0
    assert result.days_exercised == 0


def test_avg_score_matches_analyzer(mock_week):
    from cadence.domains.productivity.domain_logic.pattern_analyzer import detect_patterns

    assert aggregate_weekly_metrics(mock_week).avg_score == detect_patterns(mock_week).avg_daily_score


def test_mock_week_summary(mock_week):
    result = aggregate_weekly_metrics(mock_week)
    assert result.as_dict() == {
        "total_coding_minutes": 780,
        "total_exercise_minutes": 245,
        "total_focus_minutes": 510,
        "avg_score": 27,
        "days_worked": 6,
        "days_exercised": 5,
    }


def test_fractional_minutes_are_kept(make_day):
    week = [make_day("2026-02-16", exercise_minutes=12.5), make_day("2026-02-17", exercise_minutes=10)]
    assert aggregate_weekly_metrics(week).total_exercise_minutes == 22.5


def test_negative_minutes_count_as_zero(make_day):
    week = [
        make_day("2026-02-16", github_coding_minutes=-60, exercise_minutes=30, focus_time_minutes=-5),
        make_day("2026-02-17", github_coding_minutes=45, exercise_minutes=-30, focus_time_minutes=20),
    ]
    result = aggregate_weekly_metrics(week)
    assert result.total_coding_minutes == 45
    assert result.total_exercise_minutes == 30
    assert result.total_focus_minutes == 20


def test_unbounded_meetings_do_not_break_average(make_day):
    week = [
        make_day("2026-02-16", meetings_minutes=float("inf")),
        make_day("2026-02-17", github_commits=4),
    ]
    assert aggregate_weekly_metrics(week).avg_score == 2
