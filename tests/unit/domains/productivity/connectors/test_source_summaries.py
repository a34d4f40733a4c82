"""Tests for summarizing raw calendar, exercise and coding records."""

from __future__ import annotations

import pytest

from cadence.domains.productivity.connectors.source_summaries import (
    build_daily_metrics,
    classify_event,
    event_duration_minutes,
    exercise_minutes,
    exercised_on,
    had_deep_work_session,
    summarize_calendar_events,
    summarize_coding_activity,
    workout_streak,
)
from cadence.domains.productivity.domain_logic.score_calculator import (
    calculate_productivity_score,
)


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

class TestClassifyEvent:
    @pytest.mark.parametrize(
        "summary, expected",
        [
            ("Focus block", "focus"),
            ("Deep Work: parser rewrite", "focus"),
            ("Team standup", "meeting"),
            ("Weekly sync", "meeting"),
            ("Lunch", "personal"),
            ("Workout", "personal"),
            ("Project deadline", "work"),
            ("Dentist", "other"),
        ],
    )
    def test_keywords(self, summary, expected):
        assert classify_event(summary) == expected

    def test_description_is_considered(self):
        assert classify_event("Tuesday", "quarterly planning call") == "meeting"

    def test_focus_wins_over_meeting(self):
        assert classify_event("Focus sync") == "focus"

    def test_missing_text(self):
        assert classify_event(None) == "other"


class TestEventDuration:
    def test_explicit_duration(self):
        assert event_duration_minutes({"duration_minutes": 45}) == 45

    def test_from_timestamps(self):
        event = {"start": "2026-02-20T09:00:00Z", "end": "2026-02-20T10:30:00Z"}
        assert event_duration_minutes(event) == 90

    def test_reversed_times_count_as_zero(self):
        event = {"start": "2026-02-20T10:00:00", "end": "2026-02-20T09:00:00"}
        assert event_duration_minutes(event) == 0

    def test_unparseable_times(self):
        assert event_duration_minutes({"start": "soon", "end": "later"}) == 0

    def test_no_times(self):
        assert event_duration_minutes({"summary": "All hands"}) == 0


class TestCalendarSummary:
    EVENTS = [
        {"summary": "Team standup", "duration_minutes": 30},
        {"summary": "Focus: coding", "duration_minutes": 150},
        {"summary": "Lunch", "duration_minutes": 60},
        {"summary": "Design meeting", "duration_minutes": 60, "status": "cancelled"},
    ]

    def test_totals(self):
        summary = summarize_calendar_events(self.EVENTS)
        assert summary.total_events == 3
        assert summary.total_meeting_minutes == 30
        assert summary.total_focus_minutes == 150
        assert summary.events_by_type == {"meeting": 1, "focus": 1, "personal": 1}
        assert summary.busy_hours == pytest.approx(4.0)
        assert summary.free_hours == pytest.approx(4.0)

    def test_free_hours_never_negative(self):
        summary = summarize_calendar_events([{"summary": "Offsite", "duration_minutes": 600}])
        assert summary.free_hours == 0

    def test_explicit_event_type_wins(self):
        events = [{"summary": "Lunch", "event_type": "meeting", "duration_minutes": 60}]
        assert summarize_calendar_events(events).total_meeting_minutes == 60

    def test_empty(self):
        summary = summarize_calendar_events([])
        assert summary.total_events == 0
        assert summary.free_hours == 8

    def test_deep_work_needs_one_long_focus_block(self):
        assert had_deep_work_session(self.EVENTS)
        assert not had_deep_work_session([
            {"summary": "Focus", "duration_minutes": 90},
            {"summary": "Focus", "duration_minutes": 90},
        ])

    def test_cancelled_focus_is_not_deep_work(self):
        events = [{"summary": "Focus", "duration_minutes": 180, "status": "cancelled"}]
        assert not had_deep_work_session(events)


# ---------------------------------------------------------------------------
# Exercise
# ---------------------------------------------------------------------------

ACTIVITIES = [
    {"start_date": "2026-02-20T07:00:00Z", "moving_time": 1800, "type": "Run"},
    {"start_date": "2026-02-20T18:00:00Z", "moving_time": 900, "type": "Ride"},
    {"start_date": "2026-02-19T07:00:00Z", "moving_time": 2400, "type": "Run"},
    {"start_date": "2026-02-18T07:00:00Z", "moving_time": 1200, "type": "Walk"},
    {"start_date": "2026-02-16T07:00:00Z", "moving_time": 3600, "type": "Swim"},
]


class TestExercise:
    def test_minutes(self):
        assert exercise_minutes(ACTIVITIES[:2]) == 45

    def test_bad_moving_time_skipped(self):
        assert exercise_minutes([{"moving_time": "n/a"}, {"moving_time": 600}]) == 10

    def test_exercised_on(self):
        assert exercised_on(ACTIVITIES, "2026-02-19")
        assert not exercised_on(ACTIVITIES, "2026-02-17")

    def test_streak_counts_back_from_reference_day(self):
        assert workout_streak(ACTIVITIES, "2026-02-20") == 3
        assert workout_streak(ACTIVITIES, "2026-02-16") == 1

    def test_streak_broken_on_reference_day(self):
        assert workout_streak(ACTIVITIES, "2026-02-21") == 0

    def test_streak_without_activities(self):
        assert workout_streak([], "2026-02-20") == 0


# ---------------------------------------------------------------------------
# Coding
# ---------------------------------------------------------------------------

class TestCodingSummary:
    def test_counts(self):
        summary = summarize_coding_activity(
            [{"repo": "api"}, {"repo": "api"}, {"repo": "web"}],
            [{"repo": "api", "state": "open"}, {"repo": "docs", "state": "merged"}],
        )
        assert summary.commits == 3
        assert summary.pull_requests == 2
        assert summary.coding_minutes == 90
        assert summary.prs_opened == 1
        assert summary.prs_merged == 1
        assert summary.repos_worked == 3

    def test_empty(self):
        summary = summarize_coding_activity([], [])
        assert summary.commits == 0
        assert summary.coding_minutes == 0
        assert summary.repos_worked == 0


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

class TestBuildDailyMetrics:
    def test_all_sources(self):
        metrics = build_daily_metrics(
            "2026-02-20",
            commits=[{"repo": "api"}] * 3,
            activities=ACTIVITIES,
            calendar_events=[
                {"summary": "Focus: coding", "duration_minutes": 150},
                {"summary": "Standup", "duration_minutes": 15},
            ],
            sleep_hours=7.5,
            steps=8000,
        )
        assert metrics.date == "2026-02-20"
        assert metrics.github_commits == 3
        assert metrics.github_prs == 0
        assert metrics.github_coding_minutes == 90
        assert metrics.exercise_minutes == 45
        assert metrics.workout_streak == 3
        assert metrics.exercised_today is True
        assert metrics.focus_time_minutes == 150
        assert metrics.meetings_minutes == 15
        assert metrics.deep_work_session is True

        # commits 3 + coding 3 + exercise 3 + streak 3 + bonus 5
        # + focus 8 + deep work 5 + sleep 5 + steps 4
        assert calculate_productivity_score(metrics) == 39

    def test_missing_sources_stay_absent(self):
        metrics = build_daily_metrics("2026-02-20", sleep_hours=7)
        assert metrics.as_dict() == {"date": "2026-02-20", "sleep_hours": 7}

    def test_rest_day_with_activity_history(self):
        metrics = build_daily_metrics("2026-02-17", activities=ACTIVITIES)
        assert metrics.exercise_minutes == 0
        assert metrics.exercised_today is False
        assert metrics.workout_streak == 0

    def test_exercised_today_matches_exercised_on(self):
        for day in ("2026-02-16", "2026-02-17", "2026-02-20"):
            metrics = build_daily_metrics(day, activities=ACTIVITIES)
            assert metrics.exercised_today is exercised_on(ACTIVITIES, day)

    def test_timestamp_day_is_normalized(self):
        assert build_daily_metrics("2026-02-20T21:15:00Z").date == "2026-02-20"
