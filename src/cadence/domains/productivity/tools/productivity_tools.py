"""MCP tools for daily productivity scoring and weekly pattern analysis.

The tools are thin wrappers: payloads are parsed into DailyMetrics, handed to
the deterministic scorer/analyzer, and the resulting records are returned as
JSON. No LLM is involved.
"""

from __future__ import annotations

import datetime
import json
import logging
import time
from typing import TYPE_CHECKING, Any, Callable

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from cadence.domains.productivity.connectors import MetricsProvider

from cadence.domains.productivity.connectors.source_summaries import build_daily_metrics
from cadence.domains.productivity.domain_logic.metrics_models import ScoringWeights
from cadence.domains.productivity.domain_logic.metrics_parser import (
    parse_calendar_date,
    parse_daily_metrics,
    parse_week,
)
from cadence.domains.productivity.domain_logic.pattern_analyzer import PatternAnalyzer
from cadence.domains.productivity.domain_logic.score_calculator import score_day
from cadence.domains.productivity.domain_logic.weekly_aggregator import (
    aggregate_weekly_metrics,
)

logger = logging.getLogger(__name__)


def register_productivity_tools(
    mcp: FastMCP,
    metrics_provider: MetricsProvider,
    weights: ScoringWeights,
    *,
    week_length: int = 7,
    today: Callable[[], str] | None = None,
) -> None:
    """Register productivity scoring tools on the MCP server.

    Args:
        today: Returns the default end date (YYYY-MM-DD) when a caller asks
            the provider for a week without naming one. Defaults to the local
            calendar date.
    """
    analyzer = PatternAnalyzer(weights)

    def _default_end_date() -> str:
        if today is not None:
            return parse_calendar_date(today())
        return datetime.date.today().isoformat()

    @mcp.tool
    def daily_productivity_score(metrics: dict[str, Any]) -> str:
        """Score one day's metrics (0-100) with grade, description and breakdown.

        Args:
            metrics: Daily record. ``date`` (YYYY-MM-DD) is required; every
                other field (github_commits, github_prs, github_coding_minutes,
                exercise_minutes, workout_streak, exercised_today,
                screen_time_minutes, productive_app_minutes, meetings_minutes,
                focus_time_minutes, deep_work_session, sleep_hours, steps)
                is optional.
        """
        day = parse_daily_metrics(metrics)
        result = score_day(day, weights)
        logger.debug("Scored %s: %d (%s)", result.date, result.score, result.grade)
        return json.dumps(result.as_dict(), indent=2)

    @mcp.tool
    async def weekly_pattern_analysis(
        ctx: Context,
        days: list[dict[str, Any]] | None = None,
        end_date: str | None = None,
    ) -> str:
        """Detect consistency, trend and exercise patterns across a week.

        Days are analyzed in the order given; the first day is treated as the
        most recent for recommendations and the half-split trend compares the
        first half of the list with the second. When ``days`` is omitted the
        configured data source supplies the week ending at ``end_date``.

        Args:
            days: Ordered daily records (same shape as daily_productivity_score).
            end_date: Last day of the window when reading from the data source.
        """
        start_time = time.monotonic()

        if days is None:
            window_end = parse_calendar_date(end_date) if end_date else _default_end_date()
            week = await metrics_provider.get_week(window_end, week_length)
            provenance = metrics_provider.get_provenance()
        else:
            week = parse_week(days)
            provenance = {"data_source": "caller"}

        analysis = analyzer.analyze(week)
        daily_scores = [
            {"date": d.date, "score": d.score, "exercised": d.exercised}
            for d in analyzer.score_days(week)
        ]

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.info(
            "Weekly analysis over %d day(s) from %s in %.1f ms",
            len(week),
            provenance["data_source"],
            elapsed_ms,
        )

        return json.dumps({
            **analysis.as_dict(),
            "days_analyzed": len(week),
            "daily_scores": daily_scores,
            **provenance,
        }, indent=2)

    @mcp.tool
    def weekly_metrics_summary(days: list[dict[str, Any]]) -> str:
        """Total coding, exercise and focus minutes and count active days.

        Args:
            days: Daily records for the reporting period.
        """
        week = parse_week(days)
        if not week:
            return json.dumps({
                "status": "no_data",
                "message": "At least one daily record is needed for a weekly summary.",
            })
        return json.dumps(aggregate_weekly_metrics(week, weights).as_dict(), indent=2)

    @mcp.tool
    def daily_metrics_from_sources(
        date: str,
        commits: list[dict[str, Any]] | None = None,
        pull_requests: list[dict[str, Any]] | None = None,
        activities: list[dict[str, Any]] | None = None,
        calendar_events: list[dict[str, Any]] | None = None,
        screen_time_minutes: float | None = None,
        productive_app_minutes: float | None = None,
        sleep_hours: float | None = None,
        steps: int | None = None,
    ) -> str:
        """Assemble a day's metrics from raw source records and score it.

        Args:
            date: Day to assemble (YYYY-MM-DD).
            commits: Commit records (``repo``, ``date``).
            pull_requests: Pull request records (``repo``, ``state``).
            activities: Exercise activities (``start_date``, ``moving_time`` seconds).
                Earlier days may be included to compute the workout streak.
            calendar_events: Events with ``summary`` and ``duration_minutes``
                or ``start``/``end``.
            screen_time_minutes: Total screen time for the day.
            productive_app_minutes: Time in productive apps.
            sleep_hours: Hours slept.
            steps: Step count.
        """
        metrics = build_daily_metrics(
            date,
            commits=commits,
            pull_requests=pull_requests,
            activities=activities,
            calendar_events=calendar_events,
            screen_time_minutes=screen_time_minutes,
            productive_app_minutes=productive_app_minutes,
            sleep_hours=sleep_hours,
            steps=steps,
        )
        result = score_day(metrics, weights)
        return json.dumps({
            "metrics": metrics.as_dict(),
            "score": result.score,
            "grade": result.grade,
            "description": result.description,
        }, indent=2)
