"""Parse collaborator payloads (plain dicts) into DailyMetrics records.

The date is the only required field. Numeric fields that are missing or
non-numeric become absent, negative numbers are clamped to zero, and unknown
keys are ignored.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Iterable

from cadence.domains.productivity.domain_logic.metrics_models import DailyMetrics

logger = logging.getLogger(__name__)

INT_FIELDS = {"github_commits", "github_prs", "workout_streak", "steps", "productivity_score"}
FLOAT_FIELDS = {
    "github_coding_minutes",
    "exercise_minutes",
    "screen_time_minutes",
    "productive_app_minutes",
    "meetings_minutes",
    "focus_time_minutes",
    "sleep_hours",
}
BOOL_FIELDS = {"exercised_today", "deep_work_session"}


class MetricsValidationError(ValueError):
    """Raised when a daily metrics payload is structurally invalid."""


def parse_calendar_date(value: Any) -> str:
    """Return the YYYY-MM-DD part of a date or timestamp string."""
    if isinstance(value, date):
        return value.isoformat()[:10]
    if not isinstance(value, str) or not value.strip():
        raise MetricsValidationError("date is required (YYYY-MM-DD)")
    text = value.strip()[:10]
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError as exc:
        raise MetricsValidationError(f"Invalid date {value!r}: expected YYYY-MM-DD") from exc


def _number(val: Any) -> float | None:
    if val is None or isinstance(val, bool):
        return None
    try:
        number = float(val)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return max(0.0, number)


def _flag(val: Any) -> bool | None:
    if val is None:
        return None
    if isinstance(val, str):
        lowered = val.strip().lower()
        if lowered in ("true", "yes", "1"):
            return True
        if lowered in ("false", "no", "0", ""):
            return False
        return None
    return bool(val)


def parse_daily_metrics(payload: dict[str, Any]) -> DailyMetrics:
    """Build a DailyMetrics record from a plain dict.

    Raises:
        MetricsValidationError: if the payload is not a dict or has no valid date.
    """
    if not isinstance(payload, dict):
        raise MetricsValidationError(
            f"Daily metrics must be an object, got {type(payload).__name__}"
        )

    values: dict[str, Any] = {"date": parse_calendar_date(payload.get("date"))}

    for key, raw in payload.items():
        if key == "date":
            continue
        if key in INT_FIELDS:
            number = _number(raw)
            values[key] = None if number is None else int(number)
        elif key in FLOAT_FIELDS:
            values[key] = _number(raw)
        elif key in BOOL_FIELDS:
            values[key] = _flag(raw)
        else:
            logger.debug("Ignoring unknown daily metrics field %r", key)

    return DailyMetrics(**values)


def parse_week(payloads: Iterable[dict[str, Any]]) -> list[DailyMetrics]:
    """Parse a sequence of payloads, preserving order."""
    week = []
    for index, payload in enumerate(payloads):
        try:
            week.append(parse_daily_metrics(payload))
        except MetricsValidationError as exc:
            raise MetricsValidationError(f"Day {index}: {exc}") from exc
    return week
