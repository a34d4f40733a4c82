"""Summarize already-fetched provider records into DailyMetrics fields.

Inputs are plain dicts as the collaborators deliver them:

* calendar events: ``summary``, ``description``, ``status`` and either
  ``duration_minutes`` or ISO ``start``/``end`` timestamps
* exercise activities: ``start_date`` (ISO), ``moving_time`` (seconds), ``type``
* commits: ``repo``, ``date``; pull requests: ``repo``, ``state``

Nothing here reads the clock; reference days are always passed in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from cadence.domains.productivity.domain_logic.metrics_models import DailyMetrics
from cadence.domains.productivity.domain_logic.metrics_parser import parse_calendar_date
from cadence.domains.productivity.domain_logic.score_calculator import round_half_away

logger = logging.getLogger(__name__)

DEEP_WORK_MINUTES = 120
WORKDAY_HOURS = 8
MINUTES_PER_COMMIT = 30

# Checked in this order; first match wins
EVENT_KEYWORDS = [
    ("focus", ("focus", "deep work", "study", "coding", "programming")),
    ("meeting", ("meeting", "call", "sync", "standup", "1:1", "1-on-1")),
    ("personal", ("lunch", "break", "personal", "appointment", "medical", "gym", "workout")),
    ("work", ("work", "project", "task", "deadline")),
]


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

@dataclass
class CalendarSummary:
    total_events: int = 0
    total_meeting_minutes: int = 0
    total_focus_minutes: int = 0
    events_by_type: dict[str, int] = field(default_factory=dict)
    busy_hours: float = 0.0
    free_hours: float = WORKDAY_HOURS


def classify_event(summary: str | None, description: str | None = None) -> str:
    """Classify a calendar event as focus, meeting, personal, work or other."""
    text = f"{summary or ''} {description or ''}".lower()
    for event_type, keywords in EVENT_KEYWORDS:
        if any(k in text for k in keywords):
            return event_type
    return "other"


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def event_duration_minutes(event: dict[str, Any]) -> int:
    """Explicit ``duration_minutes`` wins; otherwise derive it from start/end."""
    if event.get("duration_minutes") is not None:
        try:
            return max(0, round_half_away(float(event["duration_minutes"])))
        except (TypeError, ValueError, OverflowError):
            return 0

    start, end = event.get("start"), event.get("end")
    if not start or not end:
        return 0
    try:
        delta = _parse_timestamp(end) - _parse_timestamp(start)
    except (TypeError, ValueError):
        logger.debug("Unparseable event times: start=%r end=%r", start, end)
        return 0
    return max(0, round_half_away(delta.total_seconds() / 60))


def _active_events(events: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [e for e in events or [] if e.get("status") != "cancelled"]


def _event_type(event: dict[str, Any]) -> str:
    return event.get("event_type") or classify_event(event.get("summary"), event.get("description"))


def summarize_calendar_events(events: list[dict[str, Any]]) -> CalendarSummary:
    summary = CalendarSummary()
    for event in _active_events(events):
        event_type = _event_type(event)
        minutes = event_duration_minutes(event)

        summary.total_events += 1
        summary.events_by_type[event_type] = summary.events_by_type.get(event_type, 0) + 1
        if event_type == "meeting":
            summary.total_meeting_minutes += minutes
        elif event_type == "focus":
            summary.total_focus_minutes += minutes
        summary.busy_hours += minutes / 60

    summary.free_hours = max(0.0, WORKDAY_HOURS - summary.busy_hours)
    return summary


def had_deep_work_session(events: list[dict[str, Any]]) -> bool:
    """True when a single focus block lasted at least two hours."""
    return any(
        _event_type(e) == "focus" and event_duration_minutes(e) >= DEEP_WORK_MINUTES
        for e in _active_events(events)
    )


# ---------------------------------------------------------------------------
# Exercise
# ---------------------------------------------------------------------------

def _activity_day(activity: dict[str, Any]) -> str | None:
    start = activity.get("start_date")
    if not start:
        return None
    return str(start)[:10]


def exercise_minutes(activities: list[dict[str, Any]]) -> int:
    """Total moving time in whole minutes."""
    seconds = 0.0
    for a in activities or []:
        try:
            seconds += max(0.0, float(a.get("moving_time") or 0))
        except (TypeError, ValueError):
            continue
    return round_half_away(seconds / 60)


def exercised_on(activities: list[dict[str, Any]], day: str) -> bool:
    return any(_activity_day(a) == day for a in activities or [])


def workout_streak(activities: list[dict[str, Any]], as_of: str) -> int:
    """Consecutive calendar days ending at ``as_of`` with at least one activity."""
    active_days = {d for d in (_activity_day(a) for a in activities or []) if d}
    if not active_days:
        return 0

    current = date.fromisoformat(as_of)
    streak = 0
    while current.isoformat() in active_days:
        streak += 1
        current -= timedelta(days=1)
    return streak


# ---------------------------------------------------------------------------
# Coding
# ---------------------------------------------------------------------------

@dataclass
class CodingSummary:
    commits: int
    pull_requests: int
    coding_minutes: int
    prs_opened: int
    prs_merged: int
    repos_worked: int


def summarize_coding_activity(
    commits: list[dict[str, Any]], pull_requests: list[dict[str, Any]]
) -> CodingSummary:
    """Coding time is estimated at thirty minutes per commit."""
    commits = commits or []
    pull_requests = pull_requests or []
    repos = {c.get("repo") for c in commits} | {p.get("repo") for p in pull_requests}
    repos.discard(None)
    return CodingSummary(
        commits=len(commits),
        pull_requests=len(pull_requests),
        coding_minutes=len(commits) * MINUTES_PER_COMMIT,
        prs_opened=sum(1 for p in pull_requests if p.get("state") == "open"),
        prs_merged=sum(1 for p in pull_requests if p.get("state") == "merged"),
        repos_worked=len(repos),
    )


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def build_daily_metrics(
    day: str,
    *,
    commits: list[dict[str, Any]] | None = None,
    pull_requests: list[dict[str, Any]] | None = None,
    activities: list[dict[str, Any]] | None = None,
    calendar_events: list[dict[str, Any]] | None = None,
    screen_time_minutes: float | None = None,
    productive_app_minutes: float | None = None,
    sleep_hours: float | None = None,
    steps: int | None = None,
) -> DailyMetrics:
    """Assemble one day's record from whichever sources were available.

    ``activities`` may span earlier days; only activities on ``day`` count
    toward exercise minutes, while the streak looks back from ``day``.
    A source passed as ``None`` leaves its fields absent.
    """
    day = parse_calendar_date(day)
    metrics = DailyMetrics(
        date=day,
        screen_time_minutes=screen_time_minutes,
        productive_app_minutes=productive_app_minutes,
        sleep_hours=sleep_hours,
        steps=steps,
    )

    if commits is not None or pull_requests is not None:
        coding = summarize_coding_activity(commits or [], pull_requests or [])
        metrics.github_commits = coding.commits
        metrics.github_prs = coding.pull_requests
        metrics.github_coding_minutes = coding.coding_minutes

    if activities is not None:
        todays = [a for a in activities if _activity_day(a) == day]
        metrics.exercise_minutes = exercise_minutes(todays)
        metrics.workout_streak = workout_streak(activities, day)
        metrics.exercised_today = exercised_on(activities, day)

    if calendar_events is not None:
        calendar = summarize_calendar_events(calendar_events)
        metrics.meetings_minutes = calendar.total_meeting_minutes
        metrics.focus_time_minutes = calendar.total_focus_minutes
        metrics.deep_work_session = had_deep_work_session(calendar_events)

    return metrics
